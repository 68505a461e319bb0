#!/usr/bin/env python

import logging

import numpy as np

from roadmaker.geometry.errors import DomainError, InvalidParameter
from roadmaker.geometry.numerics import colon_grid, curvature_of_graph, forward_difference
from roadmaker.geometry.road_geometry import DerivativeEstimates, Geometry

logger = logging.getLogger(__name__)



def evaluate_profile(symbolic_spec, x_vec, profile=None):
    """
    Evaluates y, dy/dx and d2y/dx2 of a symbolic road at each x sample.

    Parameters
    ----------
        symbolic_spec : SymbolicSpec
            The function describing the road.
        x_vec : numpy array
            The x samples (units: m).
        profile : casadi.Function [OPTIONAL]
            The compiled function, as returned by "symbolic_spec.compile()".

    Returns
    -------
        y, dy_dx, d2y_dx2 : numpy arrays
            Each with the same length as x_vec.
    """
    if (profile is None):
        profile = symbolic_spec.compile()
    x_vec = np.asarray(x_vec, dtype=np.float64).reshape(-1)
    if (x_vec.size == 0):
        return np.empty((0,)), np.empty((0,)), np.empty((0,))
    # Evaluate all samples in one call, one sample per column
    y, dy_dx, d2y_dx2 = profile.map(x_vec.size)(x_vec.reshape(1, -1))
    return y.full().reshape(-1), dy_dx.full().reshape(-1), d2y_dx2.full().reshape(-1)



def build_symbolic_geometry(symbolic_spec, dx, function_based_flag):
    """
    Samples a road described by y = f(x) over x = 0:dx:road_x_length, and
    computes its slope, curvature and arc length.

    Both the exact derivatives (from the function) and the finite-difference
    derivatives (from the samples of y) are computed, "function_based_flag"
    selects which pair is used for the "diff_vec" and "kappa_vec" of the
    geometry. The arc length is accumulated from the selected slope:
        s_i = s_(i-1) + dx * sqrt(1 + diff_i^2),  with s_0 = 0.

    Parameters
    ----------
        symbolic_spec : SymbolicSpec
        dx : float
            Step size for the x samples (units: m).
        function_based_flag : bool
            True to use exact derivatives, False for finite differences.

    Returns
    -------
        geometry : Geometry
    """
    x_vec = colon_grid(symbolic_spec.road_x_length, dx)
    if (x_vec.size < 2):
        raise InvalidParameter("The road x-length (" + str(symbolic_spec.road_x_length) + " m) must be at least one step dx (" + str(dx) + " m).")

    y_vec, diff_exact, hess_exact = evaluate_profile(symbolic_spec, x_vec)

    # The function must be defined (real and finite) across the whole domain
    for name, values in (("y", y_vec), ("first derivative", diff_exact), ("second derivative", hess_exact)):
        bad = ~np.isfinite(values)
        if np.any(bad):
            raise DomainError("Imaginary or undefined " + name + " detected at x = " + str(x_vec[np.argmax(bad)]) + ". Check x domain for the function " + str(symbolic_spec) + ".")

    kappa_exact = curvature_of_graph(diff_exact, hess_exact)

    diff_numeric = forward_difference(y_vec, dx)
    hess_numeric = forward_difference(diff_numeric, dx)
    kappa_numeric = curvature_of_graph(diff_numeric, hess_numeric)

    if (function_based_flag):
        kappa_vec = kappa_exact
        diff_vec  = diff_exact
    else:
        kappa_vec = kappa_numeric
        diff_vec  = diff_numeric

    s_vec = np.cumsum(dx * np.sqrt(1.0 + diff_vec**2))
    s_vec = s_vec - s_vec[0]

    estimates = DerivativeEstimates(
        diff_exact=diff_exact,
        kappa_exact=kappa_exact,
        diff_numeric=diff_numeric,
        kappa_numeric=kappa_numeric,
    )

    logger.info("Symbolic road %s sampled at %d points, total length %.3f m", symbolic_spec, x_vec.size, s_vec[-1])

    return Geometry(
        x_vec=x_vec,
        y_vec=y_vec,
        s_vec=s_vec,
        kappa_vec=kappa_vec,
        diff_vec=diff_vec,
        estimates=estimates,
    )

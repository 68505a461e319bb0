#!/usr/bin/env python

import logging

import numpy as np
from scipy.interpolate import CubicSpline

from roadmaker.geometry.errors import InsufficientData
from roadmaker.geometry.numerics import colon_grid, forward_difference
from roadmaker.geometry.projection import MercatorProjection
from roadmaker.geometry.road_geometry import GeographicTrack, Geometry

logger = logging.getLogger(__name__)

# Below this magnitude, dx/ds is treated as zero when computing the slope
SLOPE_EPSILON = 1e-12



def remove_duplicate_points(x_raw, y_raw):
    """
    Removes the points whose x-coordinate already appeared earlier in the
    sequence, keeping the first occurrence and the original order.

    Returns
    -------
        x_unique, y_unique : numpy arrays
        idx : numpy array
            The indices of the kept points in the raw arrays.
    """
    x_raw = np.asarray(x_raw, dtype=np.float64)
    y_raw = np.asarray(y_raw, dtype=np.float64)
    _, first_idx = np.unique(x_raw, return_index=True)
    idx = np.sort(first_idx)
    return x_raw[idx], y_raw[idx], idx



def chordal_arc_length(x, y):
    """Cumulative length of the polyline through (x,y), starting at 0."""
    return np.concatenate(([0.0], np.cumsum(np.hypot(np.diff(x), np.diff(y)))))



def parametric_slope(dx_ds, dy_ds):
    """
    Slope dy/dx of a curve parametrized by arc length.

    Where dx/ds vanishes the slope is +/- infinity (a vertical tangent),
    with the sign of dy/ds, or zero where both derivatives vanish (the
    zero-padded last sample).
    """
    vertical = np.abs(dx_ds) <= SLOPE_EPSILON
    slope = np.zeros_like(dx_ds)
    np.divide(dy_ds, dx_ds, out=slope, where=~vertical)
    slope[vertical] = np.copysign(np.inf, dy_ds[vertical])
    slope[vertical & (dy_ds == 0.0)] = 0.0
    return slope



def parametric_curvature(dx_ds, dy_ds, d2x_ds2, d2y_ds2):
    """
    Signed curvature (x'y'' - y'x'') / (x'^2 + y'^2)^(3/2), set to zero
    where the parametric speed vanishes.
    """
    numerator = dx_ds * d2y_ds2 - dy_ds * d2x_ds2
    denominator = (dx_ds**2 + dy_ds**2)**1.5
    kappa = np.zeros_like(numerator)
    np.divide(numerator, denominator, out=kappa, where=(denominator > 0.0))
    return kappa



def build_map_geometry(map_spec, dx, projection=None):
    """
    Builds the geometry of a road from a geographic route.

    The steps are:
    1) Project (lat,long) to planar (x,y) with the Mercator projection.
    2) Remove duplicate x-coordinates, keeping the first occurrence.
    3) Compute the chordal arc length of the de-duplicated polyline.
    4) Resample x(s) and y(s) with a cubic spline at s = 0:dx:max(s).
    5) Project the resampled points back to (lat,long).
    6) Shift (x,y) so that the road starts at (0,0).
    7) Compute the slope and the parametric curvature from forward
       differences along the arc length.

    Parameters
    ----------
        map_spec : MapSpec
        dx : float
            Arc length spacing of the resampled road (units: m).
        projection : MercatorProjection [OPTIONAL]

    Returns
    -------
        geometry : Geometry
    """
    if (projection is None):
        projection = MercatorProjection()

    # Convert lat/long to x/y
    x_raw, y_raw = projection.forward(map_spec.latitude, map_spec.longitude)
    x_unique, y_unique, idx = remove_duplicate_points(x_raw, y_raw)

    if (x_unique.size < 2):
        raise InsufficientData("At least two distinct route points are required, got " + str(x_unique.size) + " after removing duplicates.")
    if (idx.size < x_raw.size):
        logger.debug("Removed %d duplicate route points out of %d", x_raw.size - idx.size, x_raw.size)

    s_raw = chordal_arc_length(x_unique, y_unique)

    # Interpolate to a finer resolution
    ds = dx
    s_fine = colon_grid(s_raw[-1], ds)
    if (s_fine.size < 2):
        raise InsufficientData("The route length (" + str(s_raw[-1]) + " m) is shorter than one step dx (" + str(ds) + " m).")
    x_vec = CubicSpline(s_raw, x_unique)(s_fine)
    y_vec = CubicSpline(s_raw, y_unique)(s_fine)

    latitude_high_res, longitude_high_res = projection.inverse(x_vec, y_vec)

    # Normalize to start at the origin
    x_vec = x_vec - x_vec[0]
    y_vec = y_vec - y_vec[0]

    dx_ds = forward_difference(x_vec, ds)
    dy_ds = forward_difference(y_vec, ds)
    d2x_ds2 = forward_difference(dx_ds, ds)
    d2y_ds2 = forward_difference(dy_ds, ds)

    kappa_vec = parametric_curvature(dx_ds, dy_ds, d2x_ds2, d2y_ds2)
    diff_vec = parametric_slope(dx_ds, dy_ds)

    geographic = GeographicTrack(
        latitude_raw=map_spec.latitude,
        longitude_raw=map_spec.longitude,
        latitude_high_res=latitude_high_res,
        longitude_high_res=longitude_high_res,
    )

    logger.info("Map road resampled from %d route points to %d points, total length %.3f m", x_raw.size, s_fine.size, s_fine[-1])

    return Geometry(
        x_vec=x_vec,
        y_vec=y_vec,
        s_vec=s_fine,
        kappa_vec=kappa_vec,
        diff_vec=diff_vec,
        geographic=geographic,
    )

#!/usr/bin/env python

from dataclasses import dataclass
from typing import Callable, Optional

import numpy as np
from scipy.interpolate import CubicSpline, interp1d

from roadmaker.geometry.errors import InvalidParameter, MonotonicityError
from roadmaker.geometry.specs import RoadKind
from roadmaker.geometry.symbolic_road import evaluate_profile



@dataclass(frozen=True)
class InterpolantSet:
    """
    Continuous look-up functions over a road geometry. Each function accepts
    a float or an array of query values.

    - x_of_s   : x-coordinate from arc length (linear).
    - psi_of_s : heading angle from arc length (linear, units: radians).
    - y_of_x   : y-coordinate from x, symbolic roads only (the exact function).
    - s_of_x   : arc length from x, symbolic roads only (cubic spline).
    - y_of_s   : y-coordinate from arc length, map roads only (linear).
    """
    road_kind: RoadKind
    x_of_s: Callable
    psi_of_s: Callable
    y_of_x: Optional[Callable] = None
    s_of_x: Optional[Callable] = None
    y_of_s: Optional[Callable] = None

    def position_at(self, s):
        """
        The (x,y) coordinates at arc length(s) s, as an array with shape
        number of queries -by- 2.
        """
        s = np.atleast_1d(np.asarray(s, dtype=np.float64))
        x = self.x_of_s(s)
        if (self.road_kind == RoadKind.SYMBOLIC):
            y = self.y_of_x(x)
        else:
            y = self.y_of_s(s)
        return np.column_stack((x, y))



def _linear(grid, values):
    # Extrapolates linearly beyond the ends of the grid
    return interp1d(grid, values, kind="linear", fill_value="extrapolate", assume_sorted=True)



def check_strictly_increasing(s_vec):
    s_vec = np.asarray(s_vec)
    if (s_vec.size < 2):
        raise InvalidParameter("At least two samples are required to build interpolants, got " + str(s_vec.size) + ".")
    if not np.all(np.diff(s_vec) > 0.0):
        raise MonotonicityError("sVec must be strictly increasing and monotonic.")



def heading_from_gradient(x_vec, y_vec, ds):
    """
    Heading angle atan2(dy/ds, dx/ds) with central differences, unwrapped
    so that it is continuous along the road.
    """
    dx_ds = np.gradient(x_vec, ds)
    dy_ds = np.gradient(y_vec, ds)
    return np.unwrap(np.arctan2(dy_ds, dx_ds))



def build_interpolants(road_spec, geometry):
    """
    Builds the interpolant set for a road.

    For symbolic roads the heading is atan(diff_vec), since the slope is
    well defined everywhere. For map roads the heading is recomputed from
    the gradient of the resampled (x,y), since the map slope is singular
    wherever the road is vertical.

    Parameters
    ----------
        road_spec : RoadSpec
        geometry : Geometry

    Returns
    -------
        interpolants : InterpolantSet
    """
    check_strictly_increasing(geometry.s_vec)

    s_vec = geometry.s_vec
    x_of_s = _linear(s_vec, geometry.x_vec)

    if (road_spec.kind == RoadKind.SYMBOLIC):
        symbolic_spec = road_spec.symbolic
        profile = symbolic_spec.compile()

        def y_of_x(x):
            x = np.asarray(x, dtype=np.float64)
            y, _, _ = evaluate_profile(symbolic_spec, x, profile=profile)
            return y.reshape(x.shape)

        return InterpolantSet(
            road_kind=RoadKind.SYMBOLIC,
            x_of_s=x_of_s,
            psi_of_s=_linear(s_vec, np.arctan(geometry.diff_vec)),
            y_of_x=y_of_x,
            s_of_x=CubicSpline(geometry.x_vec, s_vec),
        )

    psi_vec = heading_from_gradient(geometry.x_vec, geometry.y_vec, road_spec.dx)
    return InterpolantSet(
        road_kind=RoadKind.MAP,
        x_of_s=x_of_s,
        psi_of_s=_linear(s_vec, psi_vec),
        y_of_s=_linear(s_vec, geometry.y_vec),
    )

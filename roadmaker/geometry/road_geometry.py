#!/usr/bin/env python

from dataclasses import dataclass
from typing import Optional

import numpy as np

from roadmaker.geometry.errors import InvalidParameter
from roadmaker.geometry.numerics import read_only



@dataclass(frozen=True)
class DerivativeEstimates:
    """
    Both estimates of the slope and curvature of a symbolic road, kept side
    by side so that they can be compared, whichever one is selected for the
    geometry.
    - diff_exact, kappa_exact     : from the exact derivatives of the function.
    - diff_numeric, kappa_numeric : from forward finite differences of y.
    """
    diff_exact: np.ndarray
    kappa_exact: np.ndarray
    diff_numeric: np.ndarray
    kappa_numeric: np.ndarray

    def __post_init__(self):
        for name in ("diff_exact", "kappa_exact", "diff_numeric", "kappa_numeric"):
            object.__setattr__(self, name, read_only(getattr(self, name)))



@dataclass(frozen=True)
class GeographicTrack:
    """
    Geographic coordinates of a map road (units: degrees).
    - latitude_raw, longitude_raw             : the route as given.
    - latitude_high_res, longitude_high_res   : the resampled road, one entry per geometry sample.
    """
    latitude_raw: np.ndarray
    longitude_raw: np.ndarray
    latitude_high_res: np.ndarray
    longitude_high_res: np.ndarray

    def __post_init__(self):
        for name in ("latitude_raw", "longitude_raw", "latitude_high_res", "longitude_high_res"):
            object.__setattr__(self, name, read_only(getattr(self, name)))



@dataclass(frozen=True)
class Geometry:
    """
    The sampled road, as parallel arrays indexed by the arc length.

    - x_vec, y_vec : planar coordinates, x_vec starts at 0, and map roads start at (0,0) (units: m).
    - s_vec        : cumulative arc length, s_vec[0] = 0 (units: m).
    - kappa_vec    : signed curvature (units: 1/m).
    - diff_vec     : slope dy/dx (units: -).
    - estimates    : both derivative estimates, symbolic roads only.
    - geographic   : raw and high resolution lat/long, map roads only.
    """
    x_vec: np.ndarray
    y_vec: np.ndarray
    s_vec: np.ndarray
    kappa_vec: np.ndarray
    diff_vec: np.ndarray
    estimates: Optional[DerivativeEstimates] = None
    geographic: Optional[GeographicTrack] = None

    def __post_init__(self):
        for name in ("x_vec", "y_vec", "s_vec", "kappa_vec", "diff_vec"):
            object.__setattr__(self, name, read_only(getattr(self, name)))
        lengths = {self.x_vec.size, self.y_vec.size, self.s_vec.size, self.kappa_vec.size, self.diff_vec.size}
        if (len(lengths) != 1):
            raise InvalidParameter("All geometry vectors must have the same length, got lengths " + str(sorted(lengths)))

    @property
    def num_samples(self):
        return self.s_vec.size

    @property
    def total_length(self):
        return float(self.s_vec[-1])

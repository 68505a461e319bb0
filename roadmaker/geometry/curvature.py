#!/usr/bin/env python

import numpy as np

from roadmaker.geometry.errors import CurvatureExceeded



def curvature_criticality(kappa_vec, lane_width, number_of_lanes):
    """
    The ratio between the widest lateral extent of the road from its
    centerline and the tightest turn radius:
        max|kappa| * lane_width * ceil(number_of_lanes/2)

    The first sample and the last two samples are excluded, as the finite
    differences are not reliable there. Returns 0 when no sample remains.
    """
    kappa_vec = np.asarray(kappa_vec, dtype=np.float64)
    interior = kappa_vec[1:-2]
    if (interior.size == 0):
        return 0.0
    return float(np.max(np.abs(interior)) * lane_width * np.ceil(number_of_lanes / 2.0))



def check_curvature(kappa_vec, lane_width, number_of_lanes):
    """
    Raises CurvatureExceeded when the curvature is too tight relative to
    the width of the road, i.e., when the criticality is >= 1. Otherwise
    returns the criticality.
    """
    criticality = curvature_criticality(kappa_vec, lane_width, number_of_lanes)
    if not (criticality < 1.0):
        raise CurvatureExceeded(criticality)
    return criticality

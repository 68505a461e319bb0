#!/usr/bin/env python

import logging
from dataclasses import dataclass

import numpy as np
from scipy.interpolate import PchipInterpolator

from roadmaker.geometry.errors import InvalidParameter
from roadmaker.geometry.numerics import read_only

logger = logging.getLogger(__name__)

# Below this peak magnitude the smoothed offsets are not rescaled
RESCALE_EPSILON = 1e-12



@dataclass(frozen=True)
class Waypoint:
    """
    A randomly wandering path along the road.

    - d           : lateral offset from the centerline, positive to the right (units: m).
    - x, y        : coordinates of each waypoint (units: m).
    - closest_idx : index of the geometry sample where the waypoints start.
    - waypoints   : the stacked [x; y], with shape 2 -by- number of waypoints.
    """
    d: np.ndarray
    x: np.ndarray
    y: np.ndarray
    closest_idx: int

    def __post_init__(self):
        for name in ("d", "x", "y"):
            object.__setattr__(self, name, read_only(getattr(self, name)))

    @property
    def waypoints(self):
        return read_only(np.vstack((self.x, self.y)))



def lateral_offset_limit(number_of_lanes, lane_width):
    """
    The largest lateral offset that keeps the centre of a vehicle inside the
    outermost lanes: half of the lane band, minus half a lane.
    """
    return number_of_lanes * lane_width / 2.0 - lane_width / 2.0



def closest_index(s_vec, starting_s):
    """Index of the sample of s_vec that is nearest to starting_s."""
    return int(np.argmin(np.abs(np.asarray(s_vec) - starting_s)))



def smooth_random_offsets(num_control_points, num_samples, lim, rng):
    """
    Draws "num_control_points" offsets uniformly in [-lim, lim], spreads
    them evenly over [0,1], interpolates them with a shape-preserving cubic
    onto "num_samples" evenly spaced points, and rescales the result so that
    its peak magnitude is exactly lim.
    """
    points = np.linspace(0.0, 1.0, num_control_points)
    d = 2.0 * lim * (rng.random(num_control_points) - 0.5)
    d_smooth = PchipInterpolator(points, d)(np.linspace(0.0, 1.0, num_samples))

    max_val = np.max(np.abs(d_smooth))
    if (max_val > RESCALE_EPSILON):
        logger.debug("Rescaling the smoothed offsets by %.4f", lim / max_val)
        d_smooth = d_smooth * (lim / max_val)
    elif (lim > 0.0):
        logger.warning("The smoothed offsets are all (close to) zero, skipping the rescale to the lateral limit %.3f m", lim)
    return d_smooth



def generate_waypoints(geometry, interpolants, number_of_lanes, lane_width, num_control_points, starting_s, rng=None):
    """
    Generates waypoints that wander smoothly and randomly across the lanes,
    from the sample closest to "starting_s" until the end of the road.

    Parameters
    ----------
        geometry : Geometry
        interpolants : InterpolantSet
            Provides the heading of the road, psi(s).
        number_of_lanes : int
        lane_width : float
            (units: m)
        num_control_points : int
            Number of random control offsets, at least 2. Fewer control
            points gives a smoother, lower-frequency wander.
        starting_s : float
            Arc length from where the waypoints start (units: m).
        rng : numpy.random.Generator, int or None
            Source of randomness, or a seed for one.

    Returns
    -------
        waypoint : Waypoint
            Every offset satisfies |d| <= lateral_offset_limit(number_of_lanes, lane_width).
    """
    if isinstance(num_control_points, bool) or not isinstance(num_control_points, (int, np.integer)) or (num_control_points < 2):
        raise InvalidParameter("The number of control points must be an integer of at least 2, got " + repr(num_control_points))
    if not np.isfinite(starting_s):
        raise InvalidParameter("The starting arc length must be finite, got " + repr(starting_s))

    rng = np.random.default_rng(rng)

    closest_idx = closest_index(geometry.s_vec, starting_s)
    num_samples = geometry.num_samples - closest_idx

    lim = lateral_offset_limit(number_of_lanes, lane_width)
    d = smooth_random_offsets(int(num_control_points), num_samples, lim, rng)

    # Offset each centerline point perpendicular to the road heading
    s = geometry.s_vec[closest_idx:]
    psi = interpolants.psi_of_s(s)
    x = geometry.x_vec[closest_idx:] + d * np.sin(psi)
    y = geometry.y_vec[closest_idx:] - d * np.cos(psi)

    return Waypoint(d=d, x=x, y=y, closest_idx=closest_idx)

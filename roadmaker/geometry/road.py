#!/usr/bin/env python

import logging

import numpy as np

from roadmaker.geometry.curvature import check_curvature
from roadmaker.geometry.errors import InvalidParameter, InvalidRoadKind
from roadmaker.geometry.interpolants import build_interpolants
from roadmaker.geometry.map_road import build_map_geometry
from roadmaker.geometry.specs import MapSpec, RoadKind, RoadSpec, SymbolicSpec
from roadmaker.geometry.symbolic_road import build_symbolic_geometry
from roadmaker.geometry.waypoints import generate_waypoints

logger = logging.getLogger(__name__)



def _is_real(value):
    return isinstance(value, (int, float, np.integer, np.floating)) and not isinstance(value, bool)



def build_geometry(road_spec):
    """Builds the geometry of a road, with the builder for its kind."""
    if (road_spec.kind == RoadKind.SYMBOLIC):
        return build_symbolic_geometry(road_spec.symbolic, road_spec.dx, road_spec.function_based_flag)
    elif (road_spec.kind == RoadKind.MAP):
        return build_map_geometry(road_spec.map, road_spec.dx)
    raise InvalidRoadKind("roadType must be 'symbolic' or 'map', got " + repr(road_spec.kind))



class RoadMaker:
    """
    A road described by a sequence of (x,y) points that are evenly spaced in
    arc length, together with the arc length, slope and curvature at each
    point. The road is built from either:
    - "symbolic" : a closed-form function y = f(x), given as a casadi expression.
    - "map"      : a geographic route, given as (longitude, latitude) pairs.

    The geometry is computed once, at construction, and never changes
    afterwards. The getters return copies.

    Additional quantities are computed on request:
    - interpolants : continuous look-ups over the geometry, see "precompute_interpolants".
    - waypoints    : a random wander across the lanes, see "waypoint_generator".
    """

    def __init__(self, road_type, number_of_lanes, lane_width, function_based_flag, dx, plot_flag=False, validate_curvature=True, road_x_length=None, x=None, y=None, route=None):
        """
        Initialization function for the "RoadMaker" class.

        Parameters
        ----------
            road_type : str or RoadKind
                "symbolic" or "map".
            number_of_lanes : int
                Number of lanes on the road.
            lane_width : float
                Width of each lane (units: m).
            function_based_flag : bool
                Use exact derivatives (symbolic roads only, forced to False for map roads).
            dx : float
                Step size of the samples (units: m).
            plot_flag : bool
                Plot the curvature and arc length after construction (symbolic roads only).
            validate_curvature : bool
                Check, after construction, that the curvature is not too tight for the lanes.
                With finite differences, the check only sees the turns that
                are resolved by the step size dx.
            road_x_length : float
                For symbolic roads, the length of the road in the x-direction (units: m).
            x : casadi.SX
                For symbolic roads, the symbol for the x-coordinate.
            y : casadi.SX
                For symbolic roads, the expression of the y-coordinate in terms of x.
            route : dict or object
                For map roads, a route exposing "geometry.coordinates".
        """
        kind = RoadKind.parse(road_type)
        if (kind == RoadKind.SYMBOLIC):
            if (road_x_length is None) or (x is None) or (y is None):
                raise InvalidParameter("A symbolic road requires the road_x_length, x and y arguments.")
            road_spec = RoadSpec(kind, number_of_lanes, lane_width, dx, function_based_flag, symbolic=SymbolicSpec(road_x_length, x, y))
        else:
            if (route is None):
                raise InvalidParameter("A map road requires the route argument.")
            road_spec = RoadSpec(kind, number_of_lanes, lane_width, dx, function_based_flag, map=MapSpec.from_route(route))
        self._setup(road_spec, plot_flag, validate_curvature)

    @classmethod
    def from_spec(cls, road_spec, plot_flag=False, validate_curvature=True):
        """Builds the road from an existing RoadSpec."""
        if not isinstance(road_spec, RoadSpec):
            raise InvalidParameter("Expected a RoadSpec, got " + type(road_spec).__name__)
        road = cls.__new__(cls)
        road._setup(road_spec, plot_flag, validate_curvature)
        return road

    def _setup(self, road_spec, plot_flag, validate_curvature):
        self.__spec = road_spec
        self.__geometry = build_geometry(road_spec)
        self.__interpolants = None
        self.__waypoint = None

        if (validate_curvature):
            self.check_curvature()

        if (plot_flag):
            self.plot_curvature()

    @property
    def spec(self): return self.__spec
    @property
    def road_type(self): return self.__spec.kind
    @property
    def number_of_lanes(self): return self.__spec.number_of_lanes
    @property
    def lane_width(self): return self.__spec.lane_width
    @property
    def dx(self): return self.__spec.dx
    @property
    def function_based_flag(self): return self.__spec.function_based_flag
    @property
    def geometry(self): return self.__geometry
    @property
    def interpolants(self): return self.__interpolants
    @property
    def waypoint(self): return self.__waypoint

    def get_x_vec(self): return np.copy(self.__geometry.x_vec)
    def get_y_vec(self): return np.copy(self.__geometry.y_vec)
    def get_s_vec(self): return np.copy(self.__geometry.s_vec)
    def get_kappa_vec(self): return np.copy(self.__geometry.kappa_vec)
    def get_diff_vec(self): return np.copy(self.__geometry.diff_vec)

    def get_total_length(self):
        return self.__geometry.total_length

    def get_high_res_coordinates(self):
        """
        Returns the (latitude, longitude) of each sample of a map road
        (units: degrees).
        """
        if (self.__geometry.geographic is None):
            raise InvalidRoadKind("High resolution coordinates are only available for 'map' road type.")
        geographic = self.__geometry.geographic
        return np.copy(geographic.latitude_high_res), np.copy(geographic.longitude_high_res)

    def precompute_interpolants(self):
        """
        Builds (once) and returns the interpolants over the road geometry.

        Returns
        -------
            interpolants : InterpolantSet
        """
        if (self.__interpolants is None):
            self.__interpolants = build_interpolants(self.__spec, self.__geometry)
        return self.__interpolants

    def waypoint_generator(self, num_control_points, starting_s, rng=None):
        """
        Generates waypoints that wander randomly, and smoothly, across the
        lanes from the arc length "starting_s" until the end of the road.
        Each call draws new random offsets.

        Parameters
        ----------
            num_control_points : int
                Number of random control points (lower = smoother).
            starting_s : float
                Arc length from where the waypoints start (units: m).
            rng : numpy.random.Generator, int or None
                Source of randomness, or a seed for one.

        Returns
        -------
            waypoint : Waypoint
        """
        interpolants = self.precompute_interpolants()
        self.__waypoint = generate_waypoints(
            self.__geometry,
            interpolants,
            self.__spec.number_of_lanes,
            self.__spec.lane_width,
            num_control_points,
            starting_s,
            rng=rng,
        )
        return self.__waypoint

    def check_curvature(self):
        """
        Raises CurvatureExceeded if the curvature is too tight relative to
        the road width, otherwise returns the criticality ratio.
        """
        return check_curvature(self.__geometry.kappa_vec, self.__spec.lane_width, self.__spec.number_of_lanes)

    def iter_route_positions(self, zoom_level, step_size=None, pause_time=0.1):
        """
        Iterates over the high resolution (latitude, longitude) of a map
        road, every "step_size" samples, as used to animate the route.

        Parameters
        ----------
            zoom_level : float
                Zoom of the map view, must be > 0.
            step_size : int [OPTIONAL]
                Number of samples per frame, defaults to round(1/dx).
            pause_time : float
                Delay between frames, must be >= 0 (units: s).

        Returns
        -------
            positions : iterator of (latitude, longitude) tuples
        """
        if (self.__spec.kind != RoadKind.MAP):
            raise InvalidRoadKind("animateRoute is only supported for 'map' road type.")
        step_size = self.validate_animation_parameters(zoom_level, step_size, pause_time)
        latitude, longitude = self.get_high_res_coordinates()
        return ((float(latitude[i]), float(longitude[i])) for i in range(0, latitude.size, step_size))

    def validate_animation_parameters(self, zoom_level, step_size=None, pause_time=0.1):
        """Checks the animation parameters and returns the step size to use."""
        if not (_is_real(zoom_level) and np.isfinite(zoom_level) and zoom_level > 0):
            raise InvalidParameter("zoomLevel must be a positive scalar, got " + repr(zoom_level))
        if (step_size is None):
            step_size = max(1, int(round(1.0 / self.__spec.dx)))
        if isinstance(step_size, bool) or not isinstance(step_size, (int, np.integer)) or (step_size < 1):
            raise InvalidParameter("stepSize must be an integer >= 1, got " + repr(step_size))
        if not (_is_real(pause_time) and np.isfinite(pause_time) and pause_time >= 0):
            raise InvalidParameter("pauseTime must be a non-negative scalar, got " + repr(pause_time))
        return int(step_size)

    def plot_curvature(self):
        """
        Plots the numerical and exact curvature, and the arc length, of a
        symbolic road. Returns the two figures, or None for a map road.
        """
        if (self.__spec.kind != RoadKind.SYMBOLIC):
            logger.warning("Plotting is implemented only for symbolic road type.")
            return None
        # Deferred so that matplotlib is only loaded when plotting
        from roadmaker.plotting import plot_arc_length, plot_curvature_comparison
        return plot_curvature_comparison(self), plot_arc_length(self)

    def render_road(self, axis_handle):
        """Plots the road with its lanes, see "roadmaker.plotting.render_road"."""
        from roadmaker.plotting import render_road
        return render_road(axis_handle, self)

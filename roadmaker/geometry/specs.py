#!/usr/bin/env python

import enum
import logging
import warnings
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Optional

import casadi as ca
import numpy as np

from roadmaker.geometry.errors import InvalidParameter, InvalidRoadKind, InvalidRouteStructure

logger = logging.getLogger(__name__)



class RoadKind(enum.Enum):
    SYMBOLIC = "symbolic"
    MAP = "map"

    @classmethod
    def parse(cls, kind):
        """Accepts a RoadKind or its (case-insensitive) string value."""
        if isinstance(kind, cls):
            return kind
        if isinstance(kind, str):
            try:
                return cls(kind.strip().lower())
            except ValueError:
                pass
        raise InvalidRoadKind("roadType must be 'symbolic' or 'map', got " + repr(kind))



def _require_positive_real(name, value):
    if isinstance(value, bool) or not isinstance(value, (int, float, np.integer, np.floating)):
        raise InvalidParameter(name + " must be a real number, got " + repr(value))
    if not (np.isfinite(value) and value > 0):
        raise InvalidParameter(name + " must be finite and greater than zero, got " + repr(value))
    return float(value)



@dataclass(frozen=True)
class SymbolicSpec:
    """
    The description of a road given as a closed-form function y = f(x).

    Parameters
    ----------
        road_x_length : float
            Length of the road in the x-direction (units: m).
        variable : casadi.SX or casadi.MX
            The scalar symbol for the x-coordinate.
        expression : casadi.SX or casadi.MX
            Scalar expression for the y-coordinate, in terms of "variable" only.
    """
    road_x_length: float
    variable: object
    expression: object

    def __post_init__(self):
        object.__setattr__(self, "road_x_length", _require_positive_real("road_x_length", self.road_x_length))

        variable = self.variable
        if not isinstance(variable, (ca.SX, ca.MX)):
            raise InvalidParameter("The road variable must be a casadi SX or MX symbol, got " + type(variable).__name__)
        if not (variable.is_scalar() and variable.is_symbolic()):
            raise InvalidParameter("The road variable must be a scalar symbolic primitive, got " + str(variable))

        expression = self.expression
        if isinstance(expression, (int, float, np.integer, np.floating)) and not isinstance(expression, bool):
            # Promote constants (e.g., a straight road y = 0) to the symbol's type
            expression = type(variable)(float(expression))
            object.__setattr__(self, "expression", expression)
        if not isinstance(expression, type(variable)):
            raise InvalidParameter("The road expression must be a casadi " + type(variable).__name__ + " expression, got " + type(expression).__name__)
        if not expression.is_scalar():
            raise InvalidParameter("The road expression must be scalar, got shape " + str(expression.shape))

        free_symbols = [str(s) for s in ca.symvar(expression) if not ca.is_equal(s, variable)]
        if (len(free_symbols) > 0):
            raise InvalidParameter("The road expression depends on symbols other than " + str(variable) + ": " + ", ".join(free_symbols))

    @classmethod
    def from_function(cls, fn, road_x_length, variable_name="x"):
        """
        Builds the spec from a python function of one casadi symbol, for
        example: SymbolicSpec.from_function(lambda x: 15*ca.sin(0.05*x), 200.0)
        """
        x = ca.SX.sym(variable_name)
        return cls(road_x_length=road_x_length, variable=x, expression=fn(x))

    def compile(self):
        """
        Returns a casadi Function mapping x to (y, dy/dx, d2y/dx2), where
        both derivatives are exact.
        """
        x = self.variable
        dy_dx = ca.jacobian(self.expression, x)
        d2y_dx2 = ca.jacobian(dy_dx, x)
        return ca.Function("road_profile", [x], [self.expression, dy_dx, d2y_dx2], ["x"], ["y", "dy_dx", "d2y_dx2"])

    def __str__(self):
        return "y = " + str(self.expression)



@dataclass(frozen=True)
class MapSpec:
    """
    The raw route of a map-based road.

    Parameters
    ----------
        latitude : numpy array
            Latitude of each route point, in route order (units: degrees).
        longitude : numpy array
            Longitude of each route point, in route order (units: degrees).
    """
    latitude: np.ndarray
    longitude: np.ndarray

    def __post_init__(self):
        latitude  = np.array(self.latitude,  dtype=np.float64).reshape(-1)
        longitude = np.array(self.longitude, dtype=np.float64).reshape(-1)
        if (latitude.shape != longitude.shape):
            raise InvalidRouteStructure("Latitude and longitude must have the same number of points, got " + str(latitude.size) + " and " + str(longitude.size))
        latitude.flags.writeable = False
        longitude.flags.writeable = False
        object.__setattr__(self, "latitude", latitude)
        object.__setattr__(self, "longitude", longitude)

    @classmethod
    def from_route(cls, route):
        """
        Extracts latitude and longitude from a route structure that exposes
        "geometry.coordinates", a sequence of (longitude, latitude) pairs, as
        found in GeoJSON features. Both mapping access (route["geometry"])
        and attribute access (route.geometry) are supported.
        """
        geometry = _get_field(route, "geometry", "geometry")
        coordinates = _get_field(geometry, "coordinates", "geometry.coordinates")

        try:
            coordinates = np.asarray(coordinates, dtype=np.float64)
        except (TypeError, ValueError) as err:
            raise InvalidRouteStructure("The field geometry.coordinates must be a sequence of (longitude, latitude) pairs.") from err
        if (coordinates.size == 0):
            # > An empty route is left to the builder, which reports it as insufficient data
            coordinates = coordinates.reshape(0, 2)
        if (coordinates.ndim != 2) or (coordinates.shape[1] < 2):
            raise InvalidRouteStructure("The field geometry.coordinates must be a sequence of (longitude, latitude) pairs, got array of shape " + str(coordinates.shape))

        return cls(latitude=coordinates[:,1], longitude=coordinates[:,0])



def _get_field(container, name, full_name):
    if isinstance(container, Mapping):
        if name in container:
            return container[name]
    elif hasattr(container, name):
        return getattr(container, name)
    raise InvalidRouteStructure("The route does not contain valid latitude and longitude fields: missing field \"" + full_name + "\".")



@dataclass(frozen=True)
class RoadSpec:
    """
    Immutable construction parameters of a road.

    Parameters
    ----------
        kind : RoadKind or str
            "symbolic" or "map".
        number_of_lanes : int
            Number of lanes on the road.
        lane_width : float
            Width of each lane (units: m).
        dx : float
            Sampling step, along x for symbolic roads and along the arc
            length for map roads (units: m).
        function_based_flag : bool
            Use the exact (function-based) derivatives instead of finite
            differences. Only meaningful for symbolic roads, forced to False
            (with a warning) for map roads.
        symbolic : SymbolicSpec
            Required for, and only for, symbolic roads.
        map : MapSpec
            Required for, and only for, map roads.
    """
    kind: RoadKind
    number_of_lanes: int
    lane_width: float
    dx: float
    function_based_flag: bool = False
    symbolic: Optional[SymbolicSpec] = field(default=None, repr=False)
    map: Optional[MapSpec] = field(default=None, repr=False)

    def __post_init__(self):
        kind = RoadKind.parse(self.kind)
        object.__setattr__(self, "kind", kind)

        if isinstance(self.number_of_lanes, bool) or not isinstance(self.number_of_lanes, (int, np.integer)):
            raise InvalidParameter("number_of_lanes must be an integer, got " + repr(self.number_of_lanes))
        if (self.number_of_lanes <= 0):
            raise InvalidParameter("number_of_lanes must be greater than zero, got " + str(self.number_of_lanes))
        object.__setattr__(self, "number_of_lanes", int(self.number_of_lanes))
        object.__setattr__(self, "lane_width", _require_positive_real("lane_width", self.lane_width))
        object.__setattr__(self, "dx", _require_positive_real("dx", self.dx))
        object.__setattr__(self, "function_based_flag", bool(self.function_based_flag))

        if (kind == RoadKind.SYMBOLIC):
            if not isinstance(self.symbolic, SymbolicSpec):
                raise InvalidParameter("A symbolic road requires a SymbolicSpec.")
            if (self.map is not None):
                raise InvalidParameter("A symbolic road must not carry a MapSpec.")
        else:
            if not isinstance(self.map, MapSpec):
                raise InvalidParameter("A map road requires a MapSpec.")
            if (self.symbolic is not None):
                raise InvalidParameter("A map road must not carry a SymbolicSpec.")
            if (self.function_based_flag):
                message = "For map road type, functionBasedFlag should be false. Setting to false."
                logger.warning(message)
                warnings.warn(message, UserWarning, stacklevel=3)
                object.__setattr__(self, "function_based_flag", False)

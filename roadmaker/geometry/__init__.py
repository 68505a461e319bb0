from roadmaker.geometry.errors import (
    CurvatureExceeded,
    DomainError,
    InsufficientData,
    InvalidParameter,
    InvalidRoadKind,
    InvalidRouteStructure,
    MonotonicityError,
    ProjectionDomainError,
    RoadMakerError,
)
from roadmaker.geometry.specs import MapSpec, RoadKind, RoadSpec, SymbolicSpec
from roadmaker.geometry.projection import MercatorProjection
from roadmaker.geometry.road_geometry import DerivativeEstimates, GeographicTrack, Geometry
from roadmaker.geometry.symbolic_road import build_symbolic_geometry
from roadmaker.geometry.map_road import build_map_geometry
from roadmaker.geometry.interpolants import InterpolantSet, build_interpolants
from roadmaker.geometry.waypoints import Waypoint, generate_waypoints, lateral_offset_limit
from roadmaker.geometry.curvature import check_curvature, curvature_criticality
from roadmaker.geometry.road import RoadMaker, build_geometry

from roadmaker.geometry import (
    CurvatureExceeded,
    DomainError,
    InsufficientData,
    InvalidParameter,
    InvalidRoadKind,
    InvalidRouteStructure,
    MonotonicityError,
    ProjectionDomainError,
    RoadMakerError,
    MapSpec,
    RoadKind,
    RoadSpec,
    SymbolicSpec,
    MercatorProjection,
    Geometry,
    InterpolantSet,
    Waypoint,
    RoadMaker,
)

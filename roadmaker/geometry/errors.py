#!/usr/bin/env python

class RoadMakerError(Exception):
    """Base class for every error raised while building or querying a road."""


class InvalidRoadKind(RoadMakerError, ValueError):
    """The road type is neither "symbolic" nor "map"."""


class InvalidRouteStructure(RoadMakerError, ValueError):
    """The route lacks the "geometry.coordinates" field, or it is malformed."""


class DomainError(RoadMakerError, ValueError):
    """The road function is not real-valued (or not finite) over the sampled x-domain."""


class MonotonicityError(RoadMakerError, ValueError):
    """The arc-length vector is not strictly increasing."""


class InsufficientData(RoadMakerError, ValueError):
    """Fewer than two distinct points are available to describe the road."""


class CurvatureExceeded(RoadMakerError, ValueError):
    """
    The tightest turn of the road is too tight for the lane geometry.

    The ratio that triggered the error is available as "criticality".
    """
    def __init__(self, criticality):
        self.criticality = float(criticality)
        super().__init__("Curvature too tight. Ratio: " + "{:.4g}".format(self.criticality))


class InvalidParameter(RoadMakerError, ValueError):
    """A construction or query parameter is outside its allowed range."""


class ProjectionDomainError(InvalidParameter):
    """Coordinates are outside the valid domain of the map projection."""

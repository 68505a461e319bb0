import matplotlib
matplotlib.use("Agg")

import casadi as ca
import numpy as np
import pytest
import matplotlib.pyplot as plt

from roadmaker.geometry.specs import MapSpec, RoadSpec, SymbolicSpec


# Reference point of the test routes (degrees)
LAT_0 = 55.9445
LON_0 = -3.1892



def route_from_coordinates(latitude, longitude):
    """A GeoJSON-like feature, with (longitude, latitude) pairs."""
    return {
        "type": "Feature",
        "properties": {},
        "geometry": {
            "type": "LineString",
            "coordinates": [[float(lon), float(lat)] for lat, lon in zip(latitude, longitude)],
        },
    }



@pytest.fixture
def curved_route():
    # A gentle bend, roughly 1.1 km north and 300 m east
    t = np.linspace(0.0, 1.0, 15)
    return route_from_coordinates(LAT_0 + 0.01*t, LON_0 + 0.005*t**2)


@pytest.fixture
def two_point_route():
    return route_from_coordinates([LAT_0, LAT_0 + 0.001], [LON_0, LON_0 + 0.001])


@pytest.fixture
def sine_symbolic_spec():
    return SymbolicSpec.from_function(lambda x: 15*ca.sin(0.05*x), 200.0)


@pytest.fixture
def sine_road_spec(sine_symbolic_spec):
    return RoadSpec("symbolic", 3, 3.5, 0.5, True, symbolic=sine_symbolic_spec)


@pytest.fixture
def map_road_spec(curved_route):
    return RoadSpec("map", 2, 3.5, 1.0, False, map=MapSpec.from_route(curved_route))


@pytest.fixture(autouse=True)
def close_figures():
    yield
    plt.close("all")


@pytest.fixture
def make_route():
    return route_from_coordinates

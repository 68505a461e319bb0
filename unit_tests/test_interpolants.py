import numpy as np
import pytest

from roadmaker.geometry.errors import InvalidParameter, MonotonicityError
from roadmaker.geometry.interpolants import build_interpolants, check_strictly_increasing, heading_from_gradient
from roadmaker.geometry.map_road import build_map_geometry
from roadmaker.geometry.road_geometry import Geometry
from roadmaker.geometry.specs import RoadKind, RoadSpec, SymbolicSpec
from roadmaker.geometry.symbolic_road import build_symbolic_geometry



@pytest.fixture
def line_road_spec():
    spec = SymbolicSpec.from_function(lambda x: 0.5*x, 20.0)
    return RoadSpec("symbolic", 2, 3.0, 0.1, True, symbolic=spec)


def test_symbolic_interpolants_on_a_straight_line(line_road_spec):
    geometry = build_symbolic_geometry(line_road_spec.symbolic, line_road_spec.dx, True)
    interpolants = build_interpolants(line_road_spec, geometry)

    assert interpolants.road_kind == RoadKind.SYMBOLIC
    assert interpolants.y_of_s is None
    s = np.array([0.0, 5.0, 11.0])
    assert np.allclose(interpolants.x_of_s(s), s / np.sqrt(1.25))
    assert np.allclose(interpolants.psi_of_s(s), np.arctan(0.5))
    assert np.allclose(interpolants.s_of_x(np.array([0.0, 4.0, 10.0])), np.array([0.0, 4.0, 10.0]) * np.sqrt(1.25))
    assert np.allclose(interpolants.y_of_x(np.array([0.0, 4.0, 10.0])), [0.0, 2.0, 5.0])


def test_symbolic_y_of_x_is_the_exact_function(sine_road_spec):
    geometry = build_symbolic_geometry(sine_road_spec.symbolic, sine_road_spec.dx, True)
    interpolants = build_interpolants(sine_road_spec, geometry)
    x = np.array([0.123, 17.3, 101.01])
    assert np.allclose(interpolants.y_of_x(x), 15*np.sin(0.05*x))
    assert float(interpolants.y_of_x(17.3)) == pytest.approx(15*np.sin(0.05*17.3))


def test_s_of_x_inverts_x_of_s(sine_road_spec):
    geometry = build_symbolic_geometry(sine_road_spec.symbolic, sine_road_spec.dx, True)
    interpolants = build_interpolants(sine_road_spec, geometry)
    s = np.linspace(1.0, geometry.total_length - 1.0, 25)
    assert np.allclose(interpolants.s_of_x(interpolants.x_of_s(s)), s, atol=1e-2)


def test_position_at_matches_samples(sine_road_spec, map_road_spec):
    for road_spec in (sine_road_spec, map_road_spec):
        if (road_spec.kind == RoadKind.SYMBOLIC):
            geometry = build_symbolic_geometry(road_spec.symbolic, road_spec.dx, True)
        else:
            geometry = build_map_geometry(road_spec.map, road_spec.dx)
        interpolants = build_interpolants(road_spec, geometry)
        idx = np.array([0, 10, geometry.num_samples - 1])
        positions = interpolants.position_at(geometry.s_vec[idx])
        assert positions.shape == (3, 2)
        assert np.allclose(positions[:,0], geometry.x_vec[idx])
        assert np.allclose(positions[:,1], geometry.y_vec[idx])


def test_map_interpolants(map_road_spec):
    geometry = build_map_geometry(map_road_spec.map, map_road_spec.dx)
    interpolants = build_interpolants(map_road_spec, geometry)

    assert interpolants.road_kind == RoadKind.MAP
    assert interpolants.s_of_x is None
    assert interpolants.y_of_x is None
    s = geometry.s_vec[::50]
    assert np.allclose(interpolants.y_of_s(s), geometry.y_vec[::50])
    # The bend heads north-east, starting nearly due north
    psi = interpolants.psi_of_s(s)
    assert np.all((psi > 0.0) & (psi <= 0.5*np.pi + 1e-3))
    assert psi[0] > psi[-1]
    assert np.all(np.diff(psi) < 1e-6)


def test_map_heading_is_continuous_across_west():
    # A half circle heading west through the +/- pi cut
    theta = np.linspace(0.5*np.pi, 1.5*np.pi, 400)
    x_vec, y_vec = 100.0*np.cos(theta), 100.0*np.sin(theta)
    ds = np.hypot(np.diff(x_vec), np.diff(y_vec))[0]
    psi = heading_from_gradient(x_vec, y_vec, ds)
    assert np.max(np.abs(np.diff(psi))) < 0.1
    assert psi[-1] - psi[0] == pytest.approx(np.pi, abs=1e-2)


def test_non_monotonic_arc_length_is_rejected(line_road_spec):
    geometry = Geometry(
        x_vec=np.array([0.0, 1.0, 2.0, 3.0]),
        y_vec=np.zeros(4),
        s_vec=np.array([0.0, 1.0, 1.0, 2.0]),
        kappa_vec=np.zeros(4),
        diff_vec=np.zeros(4),
    )
    with pytest.raises(MonotonicityError):
        build_interpolants(line_road_spec, geometry)


def test_check_strictly_increasing():
    check_strictly_increasing(np.array([0.0, 0.5, 2.0]))
    with pytest.raises(MonotonicityError):
        check_strictly_increasing(np.array([0.0, 2.0, 1.0]))
    with pytest.raises(InvalidParameter):
        check_strictly_increasing(np.array([0.0]))


def test_empty_queries_return_empty_arrays(sine_road_spec, map_road_spec):
    for road_spec in (sine_road_spec, map_road_spec):
        if (road_spec.kind == RoadKind.SYMBOLIC):
            geometry = build_symbolic_geometry(road_spec.symbolic, road_spec.dx, True)
        else:
            geometry = build_map_geometry(road_spec.map, road_spec.dx)
        interpolants = build_interpolants(road_spec, geometry)
        assert interpolants.position_at(np.array([])).shape == (0, 2)
        assert interpolants.psi_of_s(np.array([])).size == 0
        if (road_spec.kind == RoadKind.SYMBOLIC):
            assert interpolants.y_of_x(np.array([])).size == 0
            assert interpolants.s_of_x(np.array([])).size == 0

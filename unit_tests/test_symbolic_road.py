import casadi as ca
import numpy as np
import pytest

from roadmaker.geometry.errors import DomainError, InvalidParameter
from roadmaker.geometry.specs import SymbolicSpec
from roadmaker.geometry.symbolic_road import build_symbolic_geometry, evaluate_profile



def curvature_mismatch(dx):
    spec = SymbolicSpec.from_function(lambda x: 15*ca.sin(0.05*x), 200.0)
    estimates = build_symbolic_geometry(spec, dx, True).estimates
    interior = slice(1, -2)
    return np.max(np.abs(estimates.kappa_exact[interior] - estimates.kappa_numeric[interior]))


def test_x_samples_cover_the_road_length(sine_symbolic_spec):
    geometry = build_symbolic_geometry(sine_symbolic_spec, 0.5, True)
    assert geometry.x_vec[0] == 0.0
    assert geometry.x_vec[-1] == pytest.approx(200.0)
    assert geometry.num_samples == 401
    assert np.allclose(np.diff(geometry.x_vec), 0.5)


def test_x_samples_never_exceed_the_road_length():
    spec = SymbolicSpec.from_function(lambda x: 0.1*x, 10.25)
    geometry = build_symbolic_geometry(spec, 0.5, False)
    assert geometry.x_vec[-1] == pytest.approx(10.0)


@pytest.mark.parametrize("function_based_flag", [True, False])
def test_arc_length_starts_at_zero_and_increases(sine_symbolic_spec, function_based_flag):
    geometry = build_symbolic_geometry(sine_symbolic_spec, 0.5, function_based_flag)
    assert geometry.s_vec[0] == 0.0
    assert np.all(np.diff(geometry.s_vec) > 0.0)
    # The road is longer than its x-extent, but not by much for this gentle sine
    assert 200.0 < geometry.total_length < 1.2 * 200.0


def test_all_vectors_have_the_same_length(sine_symbolic_spec):
    geometry = build_symbolic_geometry(sine_symbolic_spec, 1.0, False)
    sizes = {geometry.x_vec.size, geometry.y_vec.size, geometry.s_vec.size, geometry.kappa_vec.size, geometry.diff_vec.size}
    assert sizes == {201}


def test_straight_line_with_exact_derivatives():
    spec = SymbolicSpec.from_function(lambda x: 0.5*x, 10.0)
    geometry = build_symbolic_geometry(spec, 0.1, True)
    assert np.allclose(geometry.diff_vec, 0.5)
    assert np.allclose(geometry.kappa_vec, 0.0)
    assert geometry.total_length == pytest.approx(10.0 * np.sqrt(1.25))


def test_numeric_estimates_are_padded_with_zero():
    spec = SymbolicSpec.from_function(lambda x: 0.5*x, 10.0)
    estimates = build_symbolic_geometry(spec, 0.1, False).estimates
    assert estimates.diff_numeric[-1] == 0.0
    assert np.allclose(estimates.diff_numeric[:-1], 0.5)


def test_flag_selects_the_estimate(sine_symbolic_spec):
    exact = build_symbolic_geometry(sine_symbolic_spec, 0.5, True)
    numeric = build_symbolic_geometry(sine_symbolic_spec, 0.5, False)
    assert np.array_equal(exact.kappa_vec, exact.estimates.kappa_exact)
    assert np.array_equal(exact.diff_vec, exact.estimates.diff_exact)
    assert np.array_equal(numeric.kappa_vec, numeric.estimates.kappa_numeric)
    assert np.array_equal(numeric.diff_vec, numeric.estimates.diff_numeric)
    # Both estimates are kept whichever one is selected
    assert np.array_equal(exact.estimates.kappa_numeric, numeric.estimates.kappa_numeric)


def test_exact_curvature_matches_closed_form(sine_symbolic_spec):
    geometry = build_symbolic_geometry(sine_symbolic_spec, 0.5, True)
    x = geometry.x_vec
    dy = 15*0.05*np.cos(0.05*x)
    d2y = -15*0.05**2*np.sin(0.05*x)
    assert np.allclose(geometry.y_vec, 15*np.sin(0.05*x))
    assert np.allclose(geometry.kappa_vec, d2y / (1 + dy**2)**1.5)


def test_numeric_curvature_converges_to_exact():
    coarse = curvature_mismatch(0.5)
    fine = curvature_mismatch(0.1)
    assert fine < coarse
    assert fine < 5e-4


def test_rebuilding_is_bit_reproducible(sine_symbolic_spec):
    first = build_symbolic_geometry(sine_symbolic_spec, 0.5, False)
    second = build_symbolic_geometry(sine_symbolic_spec, 0.5, False)
    for name in ("x_vec", "y_vec", "s_vec", "kappa_vec", "diff_vec"):
        assert np.array_equal(getattr(first, name), getattr(second, name))


@pytest.mark.parametrize("fn", [
    lambda x: ca.sqrt(x - 5.0),
    lambda x: ca.log(x),
    lambda x: ca.sqrt(x),
])
def test_undefined_function_raises_domain_error(fn):
    spec = SymbolicSpec.from_function(fn, 10.0)
    with pytest.raises(DomainError):
        build_symbolic_geometry(spec, 0.5, False)


def test_road_shorter_than_one_step():
    spec = SymbolicSpec.from_function(lambda x: x, 0.4)
    with pytest.raises(InvalidParameter):
        build_symbolic_geometry(spec, 0.5, False)


def test_evaluate_profile_returns_exact_derivatives():
    spec = SymbolicSpec.from_function(lambda x: x**3, 2.0)
    y, dy_dx, d2y_dx2 = evaluate_profile(spec, np.array([0.0, 1.0, 2.0]))
    assert np.allclose(y, [0.0, 1.0, 8.0])
    assert np.allclose(dy_dx, [0.0, 3.0, 12.0])
    assert np.allclose(d2y_dx2, [0.0, 6.0, 12.0])


def test_geometry_arrays_are_read_only(sine_symbolic_spec):
    geometry = build_symbolic_geometry(sine_symbolic_spec, 1.0, True)
    with pytest.raises(ValueError):
        geometry.kappa_vec[0] = 1.0
    with pytest.raises(ValueError):
        geometry.estimates.kappa_numeric[0] = 1.0

import pytest

from ballflight.fitting.solver import AngleSolver, solve_pitch_angles
from ballflight.physics.constants import DEFAULT_CONSTANTS
from ballflight.physics.models import PitchingParameters
from ballflight.physics.pitching import simulate_pitch

VACUUM = DEFAULT_CONSTANTS.model_copy(update={"gravity": 0.0, "air_density": 0.0})


def test_recovers_known_angles():
    params = PitchingParameters(h_angle=2.2, v_angle=-2.3)
    target = simulate_pitch(params).plate_crossing

    solution = solve_pitch_angles(params, target.x, target.y)
    assert solution.converged
    assert 1 <= solution.iterations <= AngleSolver.MAX_ITERATIONS
    assert solution.h_angle == pytest.approx(2.2, abs=0.01)
    assert solution.v_angle == pytest.approx(-2.3, abs=0.01)

    replay = simulate_pitch(params.model_copy(update={
        "h_angle": solution.h_angle, "v_angle": solution.v_angle,
    })).plate_crossing
    assert replay.x == pytest.approx(target.x, abs=0.0005)
    assert replay.y == pytest.approx(target.y, abs=0.0005)


def test_straight_line_guess_is_exact_in_vacuum():
    params = PitchingParameters(spin_rate=0)
    solver = AngleSolver(VACUUM)
    guess = solver.initial_guess(params, 0.1, 0.9)

    solution = solver.solve(params, 0.1, 0.9)
    assert solution.converged
    assert solution.iterations == 1
    assert (solution.h_angle, solution.v_angle) == pytest.approx(guess)


def test_initial_guess_for_target_straight_ahead():
    params = PitchingParameters(release_side=0, release_height=1.5)
    assert AngleSolver().initial_guess(params, 0.0, 1.5) == pytest.approx((0.0, 0.0))


def test_unreachable_target_is_reported():
    params = PitchingParameters()
    solution = solve_pitch_angles(params, 0.0, -1.0)
    assert not solution.converged
    assert solution.iterations == AngleSolver.MAX_ITERATIONS
    assert solution.error_y < -0.5


def test_zero_velocity_keeps_angles():
    params = PitchingParameters(velocity=0, h_angle=1.5, v_angle=-1.0)
    solution = solve_pitch_angles(params, 0.2, 0.8)
    assert (solution.h_angle, solution.v_angle) == (1.5, -1.0)
    assert not solution.converged
    assert solution.iterations == 0


def test_unconverged_residual_matches_returned_angles():
    params = PitchingParameters()
    solution = solve_pitch_angles(params, 0.0, -1.0)
    assert not solution.converged

    replay = simulate_pitch(params.model_copy(update={
        "h_angle": solution.h_angle, "v_angle": solution.v_angle,
    })).arrival
    assert solution.error_x == pytest.approx(0.0 - replay.x)
    assert solution.error_y == pytest.approx(-1.0 - replay.y)

import numpy as np
import pytest

from ballflight.physics.constants import DEFAULT_CONSTANTS
from ballflight.physics.models import PitchingParameters
from ballflight.physics.pitching import PitchEngine, simulate_pitch

VACUUM = DEFAULT_CONSTANTS.model_copy(update={"gravity": 0.0, "air_density": 0.0})


def straight_pitch(**overrides):
    values = dict(
        velocity=140, spin_rate=0, spin_direction=0, spin_efficiency=100,
        h_angle=0, v_angle=0, release_height=1.8, release_side=0, extension=0,
    )
    values.update(overrides)
    return PitchingParameters(**values)


def test_zero_velocity_returns_release_point():
    params = PitchingParameters(velocity=0)
    result = simulate_pitch(params)
    assert len(result.points) == 1
    point = result.points[0]
    assert point.t == 0.0
    assert point.x == pytest.approx(0.505)
    assert point.y == pytest.approx(1.8)
    assert point.z == pytest.approx(18.44 - 1.829)
    assert result.distance == 0.0
    assert result.hang_time == 0.0
    assert result.plate_crossing.x == pytest.approx(point.x)
    assert result.plate_crossing.y == pytest.approx(point.y)


def test_release_point_uses_extension_and_side():
    engine = PitchEngine()
    release = engine.release_point(PitchingParameters(release_side=-30, extension=150, release_height=1.7))
    assert release == pytest.approx(np.array([-0.3, 1.7, 16.94]))


def test_fixed_time_step():
    result = simulate_pitch(PitchingParameters())
    times = np.array([p.t for p in result.points])
    assert times[0] == 0.0
    steps = np.diff(times)
    assert np.all(steps > 0)
    assert steps == pytest.approx(np.full(len(steps), 0.002))
    assert result.dt == 0.002


def test_gravity_drops_a_level_pitch():
    result = simulate_pitch(straight_pitch())
    assert result.plate_crossing.y < 1.8
    assert result.plate_crossing.x == pytest.approx(0.0, abs=1e-9)


def test_plate_crossing_is_interpolated_between_samples():
    result = simulate_pitch(PitchingParameters())
    crossing = result.plate_crossing
    pairs = [(a, b) for a, b in zip(result.points, result.points[1:]) if a.z >= 0 > b.z]
    assert len(pairs) == 1
    before, after = pairs[0]
    assert min(before.y, after.y) <= crossing.y <= max(before.y, after.y)
    assert min(before.x, after.x) <= crossing.x <= max(before.x, after.x)
    assert all((p.x, p.y) != (crossing.x, crossing.y) for p in result.points)


def test_pitch_runs_past_the_catcher():
    result = simulate_pitch(PitchingParameters())
    last, before = result.points[-1], result.points[-2]
    assert last.z < -1.5 <= before.z
    assert result.distance == pytest.approx(18.44 - last.z)
    assert result.final_position.z == pytest.approx(last.z)
    assert result.max_height == pytest.approx(max(p.y for p in result.points))


def test_pitch_in_the_dirt_stops_and_falls_back_to_final_position():
    result = simulate_pitch(straight_pitch(v_angle=-15))
    last = result.points[-1]
    assert last.y <= 0.0
    assert last.z > 0.0
    assert result.distance < 18.44
    assert result.plate_crossing.x == pytest.approx(result.final_position.x)
    assert result.plate_crossing.y == pytest.approx(result.final_position.y)


def test_failsafe_ends_slow_pitch():
    result = simulate_pitch(straight_pitch(velocity=1), VACUUM)
    assert 5.0 < result.hang_time < 5.01
    assert result.points[-1].z > 0


@pytest.mark.parametrize(
    "tilt, x_sign, y_sign",
    [(0, 0, 1), (90, 1, 0), (180, 0, -1), (270, -1, 0)],
)
def test_break_follows_spin_axis(tilt, x_sign, y_sign):
    result = simulate_pitch(straight_pitch(spin_rate=2400, spin_direction=tilt))
    last = result.points[-1]
    for value, sign in ((last.break_x, x_sign), (last.break_y, y_sign)):
        if sign == 0:
            assert abs(value) < 1e-6
        else:
            assert np.sign(value) == sign
            assert abs(value) > 10  # cm


def test_backspin_holds_the_pitch_up():
    plain = simulate_pitch(straight_pitch())
    rising = simulate_pitch(straight_pitch(spin_rate=2400, spin_direction=0))
    assert rising.plate_crossing.y > plain.plate_crossing.y


def test_no_break_without_transverse_spin():
    gyro = simulate_pitch(straight_pitch(spin_rate=2400, spin_efficiency=0))
    plain = simulate_pitch(straight_pitch())
    assert all(p.break_x == 0.0 and p.break_y == 0.0 for p in gyro.points)
    assert gyro.plate_crossing.y == pytest.approx(plain.plate_crossing.y)


def test_magnus_direction_ignores_lateral_velocity():
    result = simulate_pitch(straight_pitch(spin_rate=2400, spin_direction=0, h_angle=3))
    assert all(p.break_x == 0.0 for p in result.points)
    assert result.plate_crossing.x > 0

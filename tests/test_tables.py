import pytest

from ballflight.analysis import generate_batting_table, generate_pitch_table, plate_break, trajectory_frame
from ballflight.physics.models import PitchingParameters, TrajectorySample
from ballflight.physics.pitching import simulate_pitch


def test_trajectory_frame_has_one_row_per_sample():
    result = simulate_pitch(PitchingParameters())
    frame = trajectory_frame(result)
    assert len(frame) == len(result.points)
    assert list(frame.columns) == ["t", "x", "y", "z", "vx", "vy", "vz", "break_x", "break_y"]
    assert frame["t"].is_monotonic_increasing


def test_batting_table_covers_grid():
    table = generate_batting_table([120, 160], [10, 30])
    assert len(table) == 4
    assert set(table.columns) >= {"exit_velocity", "launch_angle", "distance", "home_run"}

    row = table[(table.exit_velocity == 160) & (table.launch_angle == 30)].iloc[0]
    assert bool(row.home_run)
    assert row.distance > table[table.exit_velocity == 120].distance.max()


def test_pitch_table_break_follows_tilt():
    base = PitchingParameters(h_angle=0, v_angle=0, release_side=0)
    table = generate_pitch_table([0, 90, 270], base)
    assert list(table.spin_direction) == [0, 90, 270]

    by_tilt = table.set_index("spin_direction")
    assert by_tilt.loc[90, "break_x"] > 0
    assert by_tilt.loc[270, "break_x"] < 0
    assert by_tilt.loc[0, "break_y"] > 0
    assert by_tilt["strike"].dtype == bool


def sample(z, break_x, break_y):
    return TrajectorySample(t=0.0, x=0.0, y=1.0, z=z, vx=0.0, vy=0.0, vz=-40.0,
                            break_x=break_x, break_y=break_y)


def test_plate_break_is_interpolated_at_the_front_of_the_plate():
    points = [sample(0.3, 10.0, 20.0), sample(0.1, 12.0, 24.0), sample(-0.1, 14.0, 28.0)]
    assert plate_break(points) == pytest.approx((13.0, 26.0))


def test_plate_break_short_of_the_plate_uses_last_sample():
    points = [sample(5.0, 1.0, 2.0), sample(4.9, 1.5, 2.5)]
    assert plate_break(points) == (1.5, 2.5)


def test_pitch_table_break_matches_plate_crossing():
    table = generate_pitch_table([38])
    result = simulate_pitch(PitchingParameters(spin_direction=38))
    assert table.loc[0, "break_x"] == pytest.approx(plate_break(result.points)[0])

    before = [p for p in result.points if p.z >= 0][-1]
    after = next(p for p in result.points if p.z < 0)
    assert min(before.break_y, after.break_y) <= table.loc[0, "break_y"] <= max(before.break_y, after.break_y)

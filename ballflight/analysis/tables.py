import logging
from typing import Iterable, Optional, Sequence, Tuple

import pandas as pd

from ballflight.fitting.zone import DEFAULT_STRIKE_ZONE, StrikeZone
from ballflight.physics.batting import BattedBallEngine
from ballflight.physics.constants import DEFAULT_CONSTANTS, PhysicsConstants
from ballflight.physics.models import BattingParameters, PitchingParameters, TrajectoryResult, TrajectorySample
from ballflight.physics.pitching import PitchEngine

log = logging.getLogger(__name__)


def trajectory_frame(result: TrajectoryResult) -> pd.DataFrame:
    """One row per sample, columns t, x, y, z, vx, vy, vz, break_x, break_y."""
    return pd.DataFrame([point.model_dump() for point in result.points])


def plate_break(points: Sequence[TrajectorySample]) -> Tuple[float, float]:
    """Induced break (cm) at the front of the plate, interpolated between samples.

    Falls back to the last sample for a pitch that never reaches the plate.
    """
    for before, after in zip(points, points[1:]):
        if before.z >= 0.0 > after.z:
            fraction = before.z / (before.z - after.z)
            return (
                before.break_x + (after.break_x - before.break_x) * fraction,
                before.break_y + (after.break_y - before.break_y) * fraction,
            )
    last = points[-1]
    return last.break_x, last.break_y


class TrajectoryTableGenerator:
    """Runs the engines over parameter grids and tabulates the summaries."""

    def __init__(self, constants: PhysicsConstants = DEFAULT_CONSTANTS):
        self.batting = BattedBallEngine(constants)
        self.pitching = PitchEngine(constants)

    def batting_table(
        self,
        velocities: Iterable[float],
        launch_angles: Iterable[float],
        direction: float = 0.0,
        wind_speed: float = 0.0,
        wind_direction: float = 0.0,
    ) -> pd.DataFrame:
        launch_angles = list(launch_angles)
        rows = []
        for velocity in velocities:
            for angle in launch_angles:
                params = BattingParameters(
                    exit_velocity=velocity,
                    launch_angle=angle,
                    direction=direction,
                    wind_speed=wind_speed,
                    wind_direction=wind_direction,
                )
                result = self.batting.simulate(params)
                rows.append({
                    "exit_velocity": velocity,
                    "launch_angle": angle,
                    "distance": result.distance,
                    "max_height": result.max_height,
                    "hang_time": result.hang_time,
                    "wall_hits": result.wall_hits,
                    "home_run": result.home_run,
                })

        log.debug("Tabulated %d batted balls", len(rows))
        return pd.DataFrame(rows)

    def pitch_table(
        self,
        spin_directions: Iterable[float],
        base: Optional[PitchingParameters] = None,
        zone: StrikeZone = DEFAULT_STRIKE_ZONE,
    ) -> pd.DataFrame:
        """Movement of one pitch thrown with each spin axis tilt."""
        base = base or PitchingParameters()
        rows = []
        for spin_direction in spin_directions:
            result = self.pitching.simulate(base.model_copy(update={"spin_direction": spin_direction}))
            crossing = result.arrival
            break_x, break_y = plate_break(result.points)
            rows.append({
                "spin_direction": spin_direction,
                "plate_x": crossing.x,
                "plate_y": crossing.y,
                "break_x": break_x,
                "break_y": break_y,
                "flight_time": result.hang_time,
                "strike": zone.contains(crossing),
            })

        log.debug("Tabulated %d pitches", len(rows))
        return pd.DataFrame(rows)


def generate_batting_table(velocities, launch_angles, constants: PhysicsConstants = DEFAULT_CONSTANTS, **kwargs) -> pd.DataFrame:
    return TrajectoryTableGenerator(constants).batting_table(velocities, launch_angles, **kwargs)


def generate_pitch_table(spin_directions, base: Optional[PitchingParameters] = None,
                         constants: PhysicsConstants = DEFAULT_CONSTANTS) -> pd.DataFrame:
    return TrajectoryTableGenerator(constants).pitch_table(spin_directions, base)

import logging
from typing import List, Optional

import numpy as np

from .constants import DEFAULT_CONSTANTS, PhysicsConstants
from .conventions import (
    kmh_to_ms,
    release_direction,
    rpm_to_rad_s,
    spin_axis_direction,
    true_spin,
)
from .models import (
    BallState,
    PitchingParameters,
    PlatePoint,
    Position,
    TrajectoryResult,
    TrajectorySample,
)

log = logging.getLogger(__name__)


class PitchEngine:
    """
    Pitched ball flight from release to the catcher.

    Magnus force uses a linear lift model (Cl = S = r * omega / v) with its
    direction fixed by the spin axis tilt in the plate plane; it is not
    re-aimed as the velocity vector turns. The spin-only part of the motion
    is integrated separately so the break can be reported against a pitch
    thrown without spin.
    """

    MAX_TIME = 5.0          # s, failsafe
    MIN_VELOCITY = 0.1      # km/h, at or below this nothing is integrated

    def __init__(self, constants: PhysicsConstants = DEFAULT_CONSTANTS, dt: float = 0.002):
        self.constants = constants
        self.dt = dt

    def release_point(self, params: PitchingParameters) -> np.ndarray:
        return np.array([
            params.release_side / 100,
            params.release_height,
            self.constants.mound_distance - params.extension / 100,
        ])

    def magnus_acceleration(self, velocity: np.ndarray, omega: float, axis: np.ndarray) -> np.ndarray:
        c = self.constants
        speed = float(np.linalg.norm(velocity))
        if speed == 0.0:
            return np.zeros(3)
        spin_factor = c.ball_radius * omega / speed
        lift = 0.5 * c.air_density * speed ** 2 * c.ball_area * spin_factor
        return axis * (lift / c.ball_mass)

    def drag_acceleration(self, velocity: np.ndarray) -> np.ndarray:
        c = self.constants
        speed = float(np.linalg.norm(velocity))
        if speed == 0.0:
            return np.zeros(3)
        return -c.aero_factor(c.drag_coefficient) * speed ** 2 * (velocity / speed)

    def simulate(self, params: PitchingParameters) -> TrajectoryResult:
        release = self.release_point(params)

        if params.velocity <= self.MIN_VELOCITY:
            point = Position(x=release[0], y=release[1], z=release[2])
            return TrajectoryResult(
                points=[TrajectorySample(
                    t=0.0, x=point.x, y=point.y, z=point.z,
                    vx=0.0, vy=0.0, vz=0.0, break_x=0.0, break_y=0.0,
                )],
                dt=self.dt,
                distance=0.0,
                max_height=point.y,
                hang_time=0.0,
                final_position=point,
                plate_crossing=PlatePoint(x=point.x, y=point.y),
            )

        state = BallState(
            position=release,
            velocity=kmh_to_ms(params.velocity) * release_direction(params.h_angle, params.v_angle),
        )
        omega = rpm_to_rad_s(true_spin(params.spin_rate, params.spin_efficiency))
        axis = spin_axis_direction(params.spin_direction)
        gravity = np.array([0.0, -self.constants.gravity, 0.0])

        break_velocity = np.zeros(3)
        break_position = np.zeros(3)

        points: List[TrajectorySample] = [self._sample(state, break_position)]
        max_height = state.y
        plate_crossing: Optional[PlatePoint] = None

        while True:
            previous = state.position.copy()

            magnus = self.magnus_acceleration(state.velocity, omega, axis)
            acc = gravity + self.drag_acceleration(state.velocity) + magnus

            state.velocity = state.velocity + acc * self.dt
            state.position = state.position + state.velocity * self.dt
            state.t += self.dt

            break_velocity = break_velocity + magnus * self.dt
            break_position = break_position + break_velocity * self.dt

            max_height = max(max_height, state.y)
            points.append(self._sample(state, break_position))

            if plate_crossing is None and previous[2] >= 0.0 > state.z:
                fraction = (0.0 - previous[2]) / (state.z - previous[2])
                crossed = previous + (state.position - previous) * fraction
                plate_crossing = PlatePoint(x=crossed[0], y=crossed[1])

            if state.z < -self.constants.catcher_depth:
                break
            if state.y <= 0.0:
                log.debug("Pitch hit the ground at z=%.2fm", state.z)
                break
            if state.t > self.MAX_TIME:
                log.debug("Pitch failsafe after %.2fs", state.t)
                break

        final = Position(x=state.x, y=state.y, z=state.z)
        if plate_crossing is None:
            plate_crossing = PlatePoint(x=final.x, y=final.y)

        return TrajectoryResult(
            points=points,
            dt=self.dt,
            distance=self.constants.mound_distance - final.z,
            max_height=max_height,
            hang_time=state.t,
            final_position=final,
            plate_crossing=plate_crossing,
        )

    @staticmethod
    def _sample(state: BallState, break_position: np.ndarray) -> TrajectorySample:
        return TrajectorySample(
            t=state.t,
            x=state.x, y=state.y, z=state.z,
            vx=float(state.velocity[0]),
            vy=float(state.velocity[1]),
            vz=float(state.velocity[2]),
            break_x=float(break_position[0] * 100),
            break_y=float(break_position[1] * 100),
        )


def simulate_pitch(
    params: PitchingParameters,
    constants: PhysicsConstants = DEFAULT_CONSTANTS,
) -> TrajectoryResult:
    return PitchEngine(constants).simulate(params)

import logging
from typing import List, Optional

import numpy as np

from .constants import DEFAULT_CONSTANTS, PhysicsConstants
from .conventions import kmh_to_ms, launch_velocity, wind_vector
from .geometry import DEFAULT_FENCE, OutfieldFence, WallHit, reflect
from .models import BallState, BattingParameters, Position, TrajectoryResult, TrajectorySample

log = logging.getLogger(__name__)


class BattedBallEngine:
    """Batted ball flight with wind, outfield fence and ground collisions."""

    MAX_TIME = 20.0           # s of simulated time
    START_HEIGHT = 0.5        # m, contact point above home plate
    MIN_AIRSPEED = 0.1        # m/s, below this no aerodynamic force
    LIFT_MIN_HEIGHT = 0.05    # m

    # Fence
    WALL_CHECK_DEPTH = 60.0   # m, no fence test closer than this
    WALL_COR_HORIZONTAL = 0.7
    WALL_COR_VERTICAL = 0.8
    WALL_NUDGE = 0.2          # m

    # Ground
    ROLL_THRESHOLD = 1.0      # m/s vertical speed at contact below which the ball rolls
    ROLL_FRICTION = 0.25      # kinetic friction coefficient
    STOP_SPEED = 0.1          # m/s
    BOUNCE_COR = 0.45
    BOUNCE_FRICTION = 0.92

    def __init__(
        self,
        constants: PhysicsConstants = DEFAULT_CONSTANTS,
        fence: OutfieldFence = DEFAULT_FENCE,
        dt: float = 0.01,
    ):
        self.constants = constants
        self.fence = fence
        self.dt = dt

    def acceleration(self, state: BallState, wind: np.ndarray) -> np.ndarray:
        c = self.constants
        acc = np.array([0.0, -c.gravity, 0.0])

        # Airspeed, not ground speed, drives the aerodynamics
        v_rel = state.velocity - wind
        airspeed = float(np.linalg.norm(v_rel))
        if airspeed <= self.MIN_AIRSPEED:
            return acc

        acc -= c.aero_factor(c.drag_coefficient) * airspeed ** 2 * (v_rel / airspeed)

        if state.y > self.LIFT_MIN_HEIGHT:
            # Backspin lift, simplified to an upward push that fades as the
            # flight turns vertical
            lift = c.aero_factor(c.batting_lift_coefficient) * airspeed ** 2
            horizontal = float(np.hypot(v_rel[0], v_rel[2]))
            acc[1] += lift * (horizontal / airspeed)

        return acc

    def simulate(self, params: BattingParameters) -> TrajectoryResult:
        state = BallState(
            position=np.array([0.0, self.START_HEIGHT, 0.0]),
            velocity=launch_velocity(
                kmh_to_ms(params.exit_velocity), params.launch_angle, params.direction
            ),
        )
        wind = wind_vector(params.wind_speed, params.wind_direction)

        points: List[TrajectorySample] = [self._sample(state)]
        max_height = state.y
        landing: Optional[Position] = None
        distance: Optional[float] = None
        ground_contacts = 0
        wall_hits = 0
        home_run = False
        stopped = False

        while state.t < self.MAX_TIME:
            previous = state.position.copy()

            acc = self.acceleration(state, wind)
            state.velocity = state.velocity + acc * self.dt
            state.position = state.position + state.velocity * self.dt
            state.t += self.dt

            # A rolling or skipping ball dips just below ground each step; it
            # still meets the fence at ground level
            if state.z > self.WALL_CHECK_DEPTH and max(state.y, 0.0) <= self.fence.height:
                hit = self.fence.first_hit(previous[[0, 2]], state.position[[0, 2]])
                if hit is not None:
                    self._bounce_off_wall(state, hit)
                    wall_hits += 1
                    log.debug("Wall hit at (%.2f, %.2f), t=%.2fs", hit.point[0], hit.point[1], state.t)

            if state.y <= 0.0:
                state.position[1] = 0.0
                ground_contacts += 1

                if landing is None:
                    distance = state.horizontal_range()
                    landing = Position(x=state.x, y=0.0, z=state.z)
                    log.debug("First ground contact at %.2fm, t=%.2fs", distance, state.t)
                    if self.fence.is_beyond(state.position[[0, 2]]):
                        home_run = True
                        points.append(self._sample(state))
                        break

                if abs(state.velocity[1]) < self.ROLL_THRESHOLD:
                    stopped = self._roll(state)
                else:
                    self._bounce_off_ground(state)

            max_height = max(max_height, state.y)
            points.append(self._sample(state))
            if stopped:
                break

        if distance is None:
            distance = state.horizontal_range()

        if home_run:
            log.debug("Over the wall, carry %.2fm", distance)
        elif stopped:
            log.debug("Ball stopped after %.2fs", state.t)
        else:
            log.debug("Time cap reached with the ball still moving")

        return TrajectoryResult(
            points=points,
            dt=self.dt,
            distance=distance,
            max_height=max_height,
            hang_time=state.t,
            final_position=Position(x=state.x, y=state.y, z=state.z),
            landing_position=landing,
            ground_contacts=ground_contacts,
            wall_hits=wall_hits,
            home_run=home_run,
        )

    def _bounce_off_wall(self, state: BallState, hit: WallHit):
        horizontal = reflect(state.velocity[[0, 2]], hit.normal) * self.WALL_COR_HORIZONTAL
        state.velocity = np.array([
            horizontal[0],
            state.velocity[1] * self.WALL_COR_VERTICAL,
            horizontal[1],
        ])
        # Back on the field side of the fence so the next step starts clear of it
        nudged = hit.point + hit.normal * self.WALL_NUDGE
        state.position = np.array([nudged[0], state.position[1], nudged[1]])

    def _bounce_off_ground(self, state: BallState):
        state.velocity = np.array([
            state.velocity[0] * self.BOUNCE_FRICTION,
            -state.velocity[1] * self.BOUNCE_COR,
            state.velocity[2] * self.BOUNCE_FRICTION,
        ])

    def _roll(self, state: BallState) -> bool:
        """Apply one step of rolling friction; returns True once the ball stops."""
        state.velocity[1] = 0.0
        speed = state.horizontal_speed()
        new_speed = speed - self.ROLL_FRICTION * self.constants.gravity * self.dt
        if new_speed < self.STOP_SPEED:
            state.velocity = np.zeros(3)
            return True
        state.velocity[0] *= new_speed / speed
        state.velocity[2] *= new_speed / speed
        return False

    @staticmethod
    def _sample(state: BallState) -> TrajectorySample:
        return TrajectorySample(
            t=state.t,
            x=state.x, y=state.y, z=state.z,
            vx=float(state.velocity[0]),
            vy=float(state.velocity[1]),
            vz=float(state.velocity[2]),
        )


def simulate_batted_ball(
    params: BattingParameters,
    constants: PhysicsConstants = DEFAULT_CONSTANTS,
) -> TrajectoryResult:
    return BattedBallEngine(constants).simulate(params)

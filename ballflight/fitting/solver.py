import logging

import numpy as np
from pydantic import BaseModel

from ballflight.physics.constants import DEFAULT_CONSTANTS, PhysicsConstants
from ballflight.physics.models import PitchingParameters
from ballflight.physics.pitching import PitchEngine

log = logging.getLogger(__name__)


class AngleSolution(BaseModel):
    h_angle: float
    v_angle: float
    converged: bool
    iterations: int
    # Residual (target - actual) in m from the last simulated pass
    error_x: float = 0.0
    error_y: float = 0.0


class AngleSolver:
    """
    Finds the release angles that put a pitch on a target at the plate.

    Starts from the straight-line angles and applies a fixed-gain
    proportional correction (degrees per meter of miss) after each forward
    simulation. Small angle changes move the plate crossing almost linearly,
    so this settles in a handful of passes for ordinary pitches.
    """

    MAX_ITERATIONS = 10
    TOLERANCE = 0.0005   # m, per axis
    GAIN = 2.5           # deg per m

    def __init__(self, constants: PhysicsConstants = DEFAULT_CONSTANTS):
        self.constants = constants
        self.engine = PitchEngine(constants)

    def initial_guess(self, params: PitchingParameters, target_x: float, target_y: float):
        """Angles of the straight line from the release point to the target."""
        depth = self.constants.mound_distance - params.extension / 100
        h_angle = np.degrees(np.arctan2(target_x - params.release_side / 100, depth))
        v_angle = np.degrees(np.arctan2(target_y - params.release_height, depth))
        return float(h_angle), float(v_angle)

    def solve(self, params: PitchingParameters, target_x: float, target_y: float) -> AngleSolution:
        if params.velocity <= PitchEngine.MIN_VELOCITY:
            return AngleSolution(
                h_angle=params.h_angle, v_angle=params.v_angle,
                converged=False, iterations=0,
            )

        h_angle, v_angle = self.initial_guess(params, target_x, target_y)
        error_x = error_y = 0.0

        for iteration in range(1, self.MAX_ITERATIONS + 1):
            trial = params.model_copy(update={"h_angle": h_angle, "v_angle": v_angle})
            arrival = self.engine.simulate(trial).arrival

            error_x = target_x - arrival.x
            error_y = target_y - arrival.y
            log.debug(
                "Iteration %d: h=%.4f v=%.4f miss=(%.5f, %.5f)",
                iteration, h_angle, v_angle, error_x, error_y,
            )

            if abs(error_x) < self.TOLERANCE and abs(error_y) < self.TOLERANCE:
                return AngleSolution(
                    h_angle=h_angle, v_angle=v_angle,
                    converged=True, iterations=iteration,
                    error_x=error_x, error_y=error_y,
                )

            if iteration < self.MAX_ITERATIONS:
                h_angle += error_x * self.GAIN
                v_angle += error_y * self.GAIN

        log.info(
            "Angle solver stopped without converging for target (%.3f, %.3f)",
            target_x, target_y,
        )
        # Angles of the last simulated pass, so the residual describes them
        return AngleSolution(
            h_angle=h_angle, v_angle=v_angle,
            converged=False, iterations=self.MAX_ITERATIONS,
            error_x=error_x, error_y=error_y,
        )


def solve_pitch_angles(
    params: PitchingParameters,
    target_x: float,
    target_y: float,
    constants: PhysicsConstants = DEFAULT_CONSTANTS,
) -> AngleSolution:
    return AngleSolver(constants).solve(params, target_x, target_y)

"""
ballflight: baseball flight simulation

Modules:
    - physics: batted ball and pitch trajectory engines, fence geometry
    - fitting: release angle solver, pitching parameter edits, strike zone
    - analysis: pandas tables of trajectories and parameter sweeps
"""

__version__ = "1.0.0"

from ballflight.physics.batting import simulate_batted_ball
from ballflight.physics.constants import DEFAULT_CONSTANTS, PhysicsConstants
from ballflight.physics.models import BattingParameters, PitchingParameters, TrajectoryResult
from ballflight.physics.pitching import simulate_pitch
from ballflight.fitting.edits import apply_pitching_edit, edit_for_field
from ballflight.fitting.solver import AngleSolution, solve_pitch_angles

__all__ = [
    "AngleSolution",
    "BattingParameters",
    "DEFAULT_CONSTANTS",
    "PhysicsConstants",
    "PitchingParameters",
    "TrajectoryResult",
    "apply_pitching_edit",
    "edit_for_field",
    "simulate_batted_ball",
    "simulate_pitch",
    "solve_pitch_angles",
]

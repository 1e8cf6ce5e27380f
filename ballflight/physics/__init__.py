"""
Trajectory engines

Fixed-step Euler integration of a baseball under gravity, drag and lift.
Batted balls collide with the ground and the outfield fence; pitches run
from release until they pass the catcher.
"""

from .batting import BattedBallEngine, simulate_batted_ball
from .pitching import PitchEngine, simulate_pitch

__all__ = ["BattedBallEngine", "PitchEngine", "simulate_batted_ball", "simulate_pitch"]

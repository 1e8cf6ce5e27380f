"""
Fitting release angles to a target at the plate, and keeping the pitching
parameters consistent while they are edited.
"""

from .solver import AngleSolution, AngleSolver, solve_pitch_angles

__all__ = ["AngleSolution", "AngleSolver", "solve_pitch_angles"]

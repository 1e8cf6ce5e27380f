from .tables import generate_batting_table, generate_pitch_table, plate_break, trajectory_frame

__all__ = ["generate_batting_table", "generate_pitch_table", "plate_break", "trajectory_frame"]

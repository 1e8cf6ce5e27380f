import numpy as np
from pydantic import BaseModel, ConfigDict, Field


class PhysicsConstants(BaseModel):
    """Ball, air and field constants shared by every engine.

    Immutable; pass a modified copy (``DEFAULT_CONSTANTS.model_copy(update=...)``)
    to run an engine under different conditions, e.g. zero gravity.
    """

    model_config = ConfigDict(frozen=True)

    gravity: float = Field(9.81, description="Gravitational acceleration (m/s^2)")
    air_density: float = Field(1.225, description="Air density (kg/m^3)")
    ball_mass: float = Field(0.145, description="Ball mass (kg)")
    ball_radius: float = Field(0.037, description="Ball radius (m), ~74mm diameter")
    drag_coefficient: float = Field(0.30, description="Drag coefficient")
    batting_lift_coefficient: float = Field(0.15, description="Lift coefficient for batted balls")

    # Pitcher's plate to the front of home plate
    mound_distance: float = Field(18.44, description="Mound to plate distance (m)")
    catcher_depth: float = Field(1.5, description="Depth behind the plate where a pitch ends (m)")

    @property
    def ball_area(self) -> float:
        return float(np.pi * self.ball_radius ** 2)

    def aero_factor(self, coefficient: float) -> float:
        """0.5 * rho * C * A / m, so that acceleration = factor * |v|^2."""
        return 0.5 * self.air_density * coefficient * self.ball_area / self.ball_mass


DEFAULT_CONSTANTS = PhysicsConstants()

from typing import Tuple

from pydantic import BaseModel, ConfigDict, Field

from ballflight.physics.models import PlatePoint


class StrikeZone(BaseModel):
    model_config = ConfigDict(frozen=True)

    top: float = Field(1.05, description="Top of the zone in m")
    bottom: float = Field(0.40, description="Bottom of the zone in m")
    width: float = Field(0.432, description="Plate width in m (17 inches)")

    def contains(self, point: PlatePoint) -> bool:
        """Whether the ball's center crosses the plate inside the zone."""
        half = self.width / 2
        return -half <= point.x <= half and self.bottom <= point.y <= self.top


class TargetArea(BaseModel):
    """Region of the plate plane a target may be picked in."""

    model_config = ConfigDict(frozen=True)

    min_x: float = -0.5
    max_x: float = 0.5
    min_y: float = 0.0
    max_y: float = 1.6

    def clamp(self, x: float, y: float) -> Tuple[float, float]:
        return (
            min(max(x, self.min_x), self.max_x),
            min(max(y, self.min_y), self.max_y),
        )


DEFAULT_STRIKE_ZONE = StrikeZone()
DEFAULT_TARGET_AREA = TargetArea()

from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional
from dataclasses import dataclass
import numpy as np


@dataclass
class BallState:
    position: np.ndarray
    velocity: np.ndarray
    t: float = 0.0

    @property
    def x(self) -> float:
        return float(self.position[0])

    @property
    def y(self) -> float:
        return float(self.position[1])

    @property
    def z(self) -> float:
        return float(self.position[2])

    def speed(self) -> float:
        return float(np.linalg.norm(self.velocity))

    def horizontal_speed(self) -> float:
        return float(np.hypot(self.velocity[0], self.velocity[2]))

    def horizontal_range(self) -> float:
        return float(np.hypot(self.position[0], self.position[2]))


class BattingParameters(BaseModel):
    model_config = ConfigDict(frozen=True)

    exit_velocity: float = Field(160, description="Exit velocity in km/h")
    launch_angle: float = Field(30, description="Launch angle in degrees, nominally -45..80")
    direction: float = Field(0, description="Spray angle in degrees, positive toward right field")
    wind_speed: float = Field(0, description="Wind speed in m/s")
    wind_direction: float = Field(0, description="Wind direction in degrees, 0 = tailwind to center")


class PitchingParameters(BaseModel):
    model_config = ConfigDict(frozen=True)

    velocity: float = Field(145.1, description="Release velocity in km/h")
    spin_rate: float = Field(2175, description="Spin rate in rpm")
    spin_direction: float = Field(38, description="Spin axis tilt in degrees, 0 = 12 o'clock")
    spin_efficiency: float = Field(89.3, description="Transverse share of the spin in %")
    h_angle: float = Field(2.2, description="Horizontal release angle in degrees")
    v_angle: float = Field(-2.3, description="Vertical release angle in degrees")
    release_height: float = Field(1.8, description="Release height in m")
    release_side: float = Field(50.5, description="Lateral release offset in cm")
    extension: float = Field(182.9, description="Release point in front of the rubber in cm")
    target_x: float = Field(0.0, description="Target x at the plate in m")
    target_y: float = Field(0.76, description="Target height at the plate in m")
    gyro_degree: float = Field(26.7, description="Gyro angle in degrees, complement of efficiency")


class Position(BaseModel):
    x: float
    y: float
    z: float


class PlatePoint(BaseModel):
    """A point in the plane of the front of home plate (z = 0)."""
    x: float
    y: float


class TrajectorySample(BaseModel):
    t: float
    x: float
    y: float
    z: float
    vx: float
    vy: float
    vz: float
    # Spin-only deflection in cm; pitches only
    break_x: Optional[float] = None
    break_y: Optional[float] = None


class TrajectoryResult(BaseModel):
    points: List[TrajectorySample]
    dt: float
    distance: float
    max_height: float
    hang_time: float
    final_position: Optional[Position] = None
    plate_crossing: Optional[PlatePoint] = None
    landing_position: Optional[Position] = None
    ground_contacts: int = 0
    wall_hits: int = 0
    home_run: bool = False

    @property
    def arrival(self) -> Optional[PlatePoint]:
        """Plate crossing, or the final position when the ball never got there."""
        if self.plate_crossing is not None:
            return self.plate_crossing
        if self.final_position is not None:
            return PlatePoint(x=self.final_position.x, y=self.final_position.y)
        return None

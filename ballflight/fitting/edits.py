"""
Parameter edits for the pitching controls.

Some pitching fields depend on each other: spin efficiency and gyro degree
describe the same quantity, and the release angles and the target describe
the same pitch. An edit is classified into one intent and applied by a pure
function that returns a new, consistent parameter set:

- target edit:  solve the angles for the new target
- angle edit:   simulate forward and move the target to where the pitch lands
- spin edit:    sync efficiency/gyro, then re-solve the angles to keep the target
- other physics edits: re-solve the angles to keep the target
"""

from typing import Annotated, Literal, Optional, Union

import numpy as np
from pydantic import BaseModel, Field

from ballflight.physics.constants import DEFAULT_CONSTANTS, PhysicsConstants
from ballflight.physics.models import PitchingParameters
from ballflight.physics.pitching import PitchEngine
from .solver import AngleSolver
from .zone import DEFAULT_TARGET_AREA

# Fields handled by the "other physics" branch
PHYSICS_FIELDS = (
    "velocity", "spin_rate", "spin_direction",
    "release_height", "release_side", "extension",
)


class TargetEdit(BaseModel):
    kind: Literal["target"] = "target"
    target_x: Optional[float] = None
    target_y: Optional[float] = None


class AngleEdit(BaseModel):
    kind: Literal["angle"] = "angle"
    h_angle: Optional[float] = None
    v_angle: Optional[float] = None


class SpinEfficiencyEdit(BaseModel):
    kind: Literal["spin_efficiency"] = "spin_efficiency"
    value: float


class GyroDegreeEdit(BaseModel):
    kind: Literal["gyro_degree"] = "gyro_degree"
    value: float


class PhysicsEdit(BaseModel):
    kind: Literal["physics"] = "physics"
    field: str
    value: float


PitchingEdit = Annotated[
    Union[TargetEdit, AngleEdit, SpinEfficiencyEdit, GyroDegreeEdit, PhysicsEdit],
    Field(discriminator="kind"),
]


def gyro_from_efficiency(spin_efficiency: float) -> float:
    eff = min(max(spin_efficiency, 0.0), 100.0)
    return round(float(np.degrees(np.arccos(eff / 100))), 1)


def efficiency_from_gyro(gyro_degree: float) -> float:
    gyro = min(max(gyro_degree, 0.0), 90.0)
    return round(float(np.cos(np.radians(gyro)) * 100), 1)


def edit_for_field(field: str, value: float) -> PitchingEdit:
    """Classify a single-field change coming from an input control."""
    if field in ("target_x", "target_y"):
        return TargetEdit(**{field: value})
    if field in ("h_angle", "v_angle"):
        return AngleEdit(**{field: value})
    if field == "spin_efficiency":
        return SpinEfficiencyEdit(value=value)
    if field == "gyro_degree":
        return GyroDegreeEdit(value=value)
    if field in PHYSICS_FIELDS:
        return PhysicsEdit(field=field, value=value)
    raise ValueError(f"Unknown pitching parameter: {field!r}")


class PitchingEditor:
    """Applies edits while keeping angles, target and spin fields consistent."""

    # Stored angle precision (decimal places)
    ANGLE_DECIMALS = 2

    def __init__(self, constants: PhysicsConstants = DEFAULT_CONSTANTS, target_area=DEFAULT_TARGET_AREA):
        self.solver = AngleSolver(constants)
        self.engine = PitchEngine(constants)
        self.target_area = target_area

    def apply(self, params: PitchingParameters, edit: PitchingEdit) -> PitchingParameters:
        if isinstance(edit, TargetEdit):
            return self._retarget(params, edit)
        if isinstance(edit, AngleEdit):
            return self._reaim(params, edit)
        if isinstance(edit, SpinEfficiencyEdit):
            updated = params.model_copy(update={
                "spin_efficiency": edit.value,
                "gyro_degree": gyro_from_efficiency(edit.value),
            })
            return self._hold_target(updated)
        if isinstance(edit, GyroDegreeEdit):
            updated = params.model_copy(update={
                "gyro_degree": edit.value,
                "spin_efficiency": efficiency_from_gyro(edit.value),
            })
            return self._hold_target(updated)
        if isinstance(edit, PhysicsEdit):
            if edit.field not in PHYSICS_FIELDS:
                raise ValueError(f"Unknown pitching parameter: {edit.field!r}")
            return self._hold_target(params.model_copy(update={edit.field: edit.value}))
        raise TypeError(f"Unsupported edit: {type(edit).__name__}")

    def _retarget(self, params: PitchingParameters, edit: TargetEdit) -> PitchingParameters:
        x = params.target_x if edit.target_x is None else edit.target_x
        y = params.target_y if edit.target_y is None else edit.target_y
        x, y = self.target_area.clamp(x, y)
        return self._solve(params.model_copy(update={"target_x": x, "target_y": y}))

    def _reaim(self, params: PitchingParameters, edit: AngleEdit) -> PitchingParameters:
        update = {}
        if edit.h_angle is not None:
            update["h_angle"] = edit.h_angle
        if edit.v_angle is not None:
            update["v_angle"] = edit.v_angle
        updated = params.model_copy(update=update)

        arrival = self.engine.simulate(updated).arrival
        if arrival is None:
            return updated
        return updated.model_copy(update={"target_x": arrival.x, "target_y": arrival.y})

    def _hold_target(self, params: PitchingParameters) -> PitchingParameters:
        if params.velocity <= PitchEngine.MIN_VELOCITY:
            return params
        return self._solve(params)

    def _solve(self, params: PitchingParameters) -> PitchingParameters:
        solution = self.solver.solve(params, params.target_x, params.target_y)
        return params.model_copy(update={
            "h_angle": round(solution.h_angle, self.ANGLE_DECIMALS),
            "v_angle": round(solution.v_angle, self.ANGLE_DECIMALS),
        })


def apply_pitching_edit(
    params: PitchingParameters,
    edit: PitchingEdit,
    constants: PhysicsConstants = DEFAULT_CONSTANTS,
) -> PitchingParameters:
    return PitchingEditor(constants).apply(params, edit)

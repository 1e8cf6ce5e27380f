"""
Coordinate and unit conventions.

World frame: +Y is up, +Z points from home plate to center field, and the
camera looks down +Z from behind the plate, so +X is the left-field side and
-X the right-field side. Pitches travel from the mound (z = 18.44) toward
the plate (z = 0), i.e. toward -Z.
"""

import numpy as np

KMH_TO_MS = 1000.0 / 3600.0


def kmh_to_ms(speed_kmh: float) -> float:
    return speed_kmh * KMH_TO_MS


def rpm_to_rad_s(rpm: float) -> float:
    return rpm * 2 * np.pi / 60


def spray_angle_to_world(direction_deg: float) -> float:
    """Spray angle in world radians.

    A positive spray angle means "toward right field", which is -X, so the
    sign is flipped before the angle is used as a rotation about +Y.
    """
    return -np.radians(direction_deg)


def launch_velocity(speed_ms: float, launch_deg: float, direction_deg: float) -> np.ndarray:
    theta = np.radians(launch_deg)
    phi = spray_angle_to_world(direction_deg)
    return np.array([
        speed_ms * np.cos(theta) * np.sin(phi),
        speed_ms * np.sin(theta),
        speed_ms * np.cos(theta) * np.cos(phi),
    ])


def wind_vector(speed_ms: float, direction_deg: float) -> np.ndarray:
    """Horizontal wind velocity.

    0 deg is a tailwind toward center field (+Z), 90 deg blows toward right
    field (-X), 180 deg is a headwind.
    """
    rad = np.radians(direction_deg)
    return np.array([-speed_ms * np.sin(rad), 0.0, speed_ms * np.cos(rad)])


def release_direction(h_angle_deg: float, v_angle_deg: float) -> np.ndarray:
    """Unit vector of a pitch leaving the hand; principal component is -Z."""
    h = np.radians(h_angle_deg)
    v = np.radians(v_angle_deg)
    return np.array([
        np.sin(h) * np.cos(v),
        np.sin(v),
        -np.cos(h) * np.cos(v),
    ])


def spin_axis_direction(spin_direction_deg: float) -> np.ndarray:
    """Direction of the Magnus force in the plate plane.

    0 deg (12 o'clock) pushes straight up, 90 deg (3 o'clock) pushes toward +X.
    """
    rad = np.radians(spin_direction_deg)
    return np.array([np.sin(rad), np.cos(rad), 0.0])


def true_spin(spin_rate: float, spin_efficiency: float) -> float:
    """Transverse part of the spin (rpm) that actually produces movement."""
    return spin_rate * (spin_efficiency / 100)


def spin_axis_clock(spin_direction_deg: float) -> str:
    """Render a spin axis as a clock reading, e.g. 38 deg -> '1:16'."""
    hour = int(spin_direction_deg // 30)
    if hour == 0:
        hour = 12
    minute = int(round((spin_direction_deg % 30) * 2))
    return f"{hour}:{minute:02d}"

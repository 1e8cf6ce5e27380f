"""
Outfield fence geometry.

All geometry here lives in the ground plane: 2D points are (x, z) pairs in
world meters. The fence is four straight segments from one foul pole
through center field (apex at z = 122) to the other.
"""

from dataclasses import dataclass
from typing import Optional, Sequence, Tuple
import numpy as np

Point2D = Tuple[float, float]

# Below this |cross| two segments are treated as parallel
PARALLEL_EPS = 1e-12


def segment_intersection(
    p0: Sequence[float],
    p1: Sequence[float],
    q0: Sequence[float],
    q1: Sequence[float],
) -> Optional[Tuple[float, float]]:
    """Parametric intersection of segments p0->p1 and q0->q1.

    Returns ``(u, s)`` with the hit at ``p0 + u * (p1 - p0)`` and
    ``q0 + s * (q1 - q0)``, both in [0, 1], or None when the segments do not
    meet. Parallel and collinear segments never intersect.
    """
    r = np.subtract(p1, p0, dtype=float)
    d = np.subtract(q1, q0, dtype=float)
    denom = r[0] * d[1] - r[1] * d[0]
    if abs(denom) < PARALLEL_EPS:
        return None

    qp = np.subtract(q0, p0, dtype=float)
    u = (qp[0] * d[1] - qp[1] * d[0]) / denom
    s = (qp[0] * r[1] - qp[1] * r[0]) / denom
    if 0.0 <= u <= 1.0 and 0.0 <= s <= 1.0:
        return float(u), float(s)
    return None


def reflect(velocity: np.ndarray, normal: np.ndarray) -> np.ndarray:
    """Mirror a 2D velocity about a unit normal."""
    return velocity - 2.0 * np.dot(velocity, normal) * normal


@dataclass(frozen=True)
class WallSegment:
    start: Point2D
    end: Point2D

    @property
    def midpoint(self) -> np.ndarray:
        return (np.asarray(self.start, dtype=float) + np.asarray(self.end, dtype=float)) / 2

    def inward_normal(self) -> np.ndarray:
        """Unit normal pointing back toward home plate.

        Start from the left-hand perpendicular and flip it if it points the
        same way as the segment midpoint (i.e. away from the origin).
        """
        dx = self.end[0] - self.start[0]
        dz = self.end[1] - self.start[1]
        normal = np.array([-dz, dx], dtype=float)
        normal /= np.linalg.norm(normal)
        if np.dot(normal, self.midpoint) > 0:
            normal = -normal
        return normal

    def intersect(self, p0: Sequence[float], p1: Sequence[float]) -> Optional[np.ndarray]:
        """Point where the path p0->p1 crosses this segment, if it does."""
        hit = segment_intersection(p0, p1, self.start, self.end)
        if hit is None:
            return None
        u, _ = hit
        p0 = np.asarray(p0, dtype=float)
        return p0 + u * (np.asarray(p1, dtype=float) - p0)


@dataclass(frozen=True)
class WallHit:
    segment: WallSegment
    point: np.ndarray
    normal: np.ndarray


class OutfieldFence:
    """Piecewise-linear fence through a list of posts."""

    def __init__(self, posts: Sequence[Point2D], height: float = 4.0):
        if len(posts) < 2:
            raise ValueError("a fence needs at least two posts")
        self.posts = tuple((float(x), float(z)) for x, z in posts)
        self.height = height
        self.segments = tuple(
            WallSegment(a, b) for a, b in zip(self.posts[:-1], self.posts[1:])
        )

    def first_hit(self, p0: Sequence[float], p1: Sequence[float]) -> Optional[WallHit]:
        """First fence segment (pole to pole order) the path p0->p1 crosses."""
        for segment in self.segments:
            point = segment.intersect(p0, p1)
            if point is not None:
                return WallHit(segment=segment, point=point, normal=segment.inward_normal())
        return None

    def is_beyond(self, point: Sequence[float]) -> bool:
        """True when the line of sight from home plate to ``point`` crosses the fence."""
        return self.first_hit((0.0, 0.0), point) is not None


FENCE_POSTS = (
    (-70.71, 70.71),   # right-field pole (-X)
    (-42.1, 101.6),    # right-center
    (0.0, 122.0),      # center
    (42.1, 101.6),     # left-center
    (70.71, 70.71),    # left-field pole (+X)
)

DEFAULT_FENCE = OutfieldFence(FENCE_POSTS)

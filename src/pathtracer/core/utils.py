# core/utils.py
import math
from typing import Optional
from pathtracer.core.vector import Vector3

# Rejection sampling accepts with probability pi/6 (sphere) or pi/4 (disk);
# hitting this cap means the generator is broken.
MAX_REJECTION_ATTEMPTS = 1000


def random_in_unit_sphere(rng) -> Vector3:
    """
    Returns a random point inside a unit sphere.

    Points are drawn uniformly from the cube [-1, 1]^3 and rejected until one
    falls strictly inside the sphere.
    """
    for _ in range(MAX_REJECTION_ATTEMPTS):
        p = Vector3(rng.uniform(-1, 1),
                    rng.uniform(-1, 1),
                    rng.uniform(-1, 1))
        if p.dot(p) < 1.0:
            return p
    raise RuntimeError("random_in_unit_sphere: rejection sampling did not terminate")


def random_in_unit_disk(rng) -> Vector3:
    """Generate random point in unit disk (z = 0) for depth of field."""
    for _ in range(MAX_REJECTION_ATTEMPTS):
        p = Vector3(
            rng.uniform(-1, 1),
            rng.uniform(-1, 1),
            0
        )
        if p.dot(p) < 1:
            return p
    raise RuntimeError("random_in_unit_disk: rejection sampling did not terminate")


def reflect(v: Vector3, n: Vector3) -> Vector3:
    """
    Reflects vector v about the normal n.
    """
    return v - n * 2 * v.dot(n)


def refract(v: Vector3, n: Vector3, ni_over_nt: float) -> Optional[Vector3]:
    """
    Bends v through a surface with normal n by Snell's law.

    Returns None on total internal reflection.
    """
    uv = v.normalize()
    dt = uv.dot(n)
    discriminant = 1.0 - ni_over_nt * ni_over_nt * (1.0 - dt * dt)
    if discriminant < 0:
        return None
    return (uv - n * dt) * ni_over_nt - n * math.sqrt(discriminant)


def schlick(cosine: float, ref_idx: float) -> float:
    r0 = (1.0 - ref_idx) / (1.0 + ref_idx)
    r0 = r0 * r0
    return r0 + (1.0 - r0) * math.pow((1.0 - cosine), 5)

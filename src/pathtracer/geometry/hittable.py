# geometry/hittable.py
from typing import Optional
from pathtracer.core.interval import TimeInterval
from pathtracer.core.ray import Ray
from pathtracer.core.vector import Vector3


class HitRecord:
    """
    Records details of a ray-object intersection.
    """
    def __init__(self, t: float, p: Vector3, normal: Vector3, material):
        self.t = t                # Ray parameter at intersection
        self.p = p                # Intersection point
        self.normal = normal      # Outward unit normal
        self.material = material  # Material of the struck surface

    def __repr__(self) -> str:
        return f"HitRecord(t={self.t}, p={self.p!r}, normal={self.normal!r})"


class Hittable:
    """
    Abstract class for objects that can be hit by a ray.
    """
    def hit(self, ray: Ray, interval: TimeInterval) -> Optional[HitRecord]:
        raise NotImplementedError("hit() must be implemented by subclasses.")

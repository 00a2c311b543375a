# geometry/sphere.py
import math
from typing import Optional
from pathtracer.core.interval import TimeInterval
from pathtracer.core.vector import DegenerateVectorError, Vector3
from pathtracer.core.ray import Ray
from pathtracer.geometry.hittable import Hittable, HitRecord


def _hit_sphere(center: Vector3, radius: float, material, ray: Ray,
                interval: TimeInterval) -> Optional[HitRecord]:
    oc = ray.origin - center
    a = ray.direction.dot(ray.direction)
    if a == 0:
        raise DegenerateVectorError("ray direction has zero length")
    b = oc.dot(ray.direction)
    c = oc.dot(oc) - radius * radius
    discriminant = b * b - a * c

    if discriminant <= 0:
        return None

    sqrt_disc = math.sqrt(discriminant)
    # Nearest root first, then the far one.
    for root in ((-b - sqrt_disc) / a, (-b + sqrt_disc) / a):
        if interval.surrounds(root):
            p = ray.point_at(root)
            return HitRecord(root, p, (p - center) / radius, material)
    return None


class Sphere(Hittable):
    """
    Represents a sphere defined by its center, radius, and material.
    """
    def __init__(self, center: Vector3, radius: float, material):
        if not radius > 0:
            raise ValueError(f"Sphere radius must be positive, got {radius}")
        self.center = center
        self.radius = radius
        self.material = material

    def hit(self, ray: Ray, interval: TimeInterval) -> Optional[HitRecord]:
        return _hit_sphere(self.center, self.radius, self.material, ray, interval)


class MovingSphere(Hittable):
    """
    A sphere whose center moves linearly from center0 at time0 to center1 at
    time1. Radius and material come from the wrapped base sphere.
    """
    def __init__(self, center0: Vector3, center1: Vector3, time0: float, time1: float,
                 sphere: Sphere):
        if time0 > time1:
            raise ValueError(f"MovingSphere time range is reversed: {time0} > {time1}")
        self.center0 = center0
        self.center1 = center1
        self.time0 = time0
        self.time1 = time1
        self.sphere = sphere

    @classmethod
    def create(cls, center0: Vector3, center1: Vector3, time0: float, time1: float,
               radius: float, material) -> "MovingSphere":
        return cls(center0, center1, time0, time1, Sphere(center0, radius, material))

    @property
    def radius(self) -> float:
        return self.sphere.radius

    @property
    def material(self):
        return self.sphere.material

    def center(self, time: float) -> Vector3:
        if self.time1 == self.time0:
            return self.center0
        fraction = (time - self.time0) / (self.time1 - self.time0)
        return self.center0 + (self.center1 - self.center0) * fraction

    def hit(self, ray: Ray, interval: TimeInterval) -> Optional[HitRecord]:
        return _hit_sphere(self.center(ray.time), self.sphere.radius, self.sphere.material,
                           ray, interval)

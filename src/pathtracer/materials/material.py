# materials/material.py
from typing import Optional
from pathtracer.core.ray import Ray
from pathtracer.core.vector import Vector3
from pathtracer.geometry.hittable import HitRecord


class Scatter:
    """
    Outcome of a scatter event: the attenuation color and the outgoing ray,
    or no ray when the surface absorbed the incoming light.
    """
    def __init__(self, attenuation: Vector3, ray: Optional[Ray] = None):
        self.attenuation = attenuation
        self.ray = ray

    @property
    def absorbed(self) -> bool:
        return self.ray is None

    def __repr__(self) -> str:
        return f"Scatter(attenuation={self.attenuation!r}, ray={self.ray!r})"


class Material:
    """
    Abstract material class. Subclasses must implement scatter().
    """
    def scatter(self, ray_in: Ray, rec: HitRecord, rng) -> Scatter:
        """
        Computes the attenuation and the scattered ray (if any) for a ray
        striking the surface described by rec. rng is the caller's random
        generator; materials never share one between workers.
        """
        raise NotImplementedError("scatter() must be implemented by subclasses.")

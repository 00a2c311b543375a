# materials/metal.py
import math
from pathtracer.core.ray import Ray
from pathtracer.core.vector import Vector3
from pathtracer.core.utils import reflect, random_in_unit_sphere
from pathtracer.geometry.hittable import HitRecord
from pathtracer.materials.material import Material, Scatter

MAX_FUZZ = math.nextafter(1.0, 0.0)


class Metal(Material):
    """
    Metal material with specular reflection blurred by fuzz in [0, 1).
    """
    def __init__(self, albedo: Vector3, fuzz: float = 0.0):
        self.albedo = albedo
        self.fuzz = min(max(fuzz, 0.0), MAX_FUZZ)

    def scatter(self, ray_in: Ray, rec: HitRecord, rng) -> Scatter:
        reflected = reflect(ray_in.direction.normalize(), rec.normal)
        scattered = Ray(rec.p, reflected + random_in_unit_sphere(rng) * self.fuzz, ray_in.time)

        if scattered.direction.dot(rec.normal) > 0:
            return Scatter(self.albedo, scattered)

        return Scatter(self.albedo)  # Absorb the ray if it does not scatter forward

# materials/lambertian.py
from pathtracer.core.ray import Ray
from pathtracer.core.vector import Vector3
from pathtracer.core.utils import random_in_unit_sphere
from pathtracer.geometry.hittable import HitRecord
from pathtracer.materials.material import Material, Scatter


class Lambertian(Material):
    """
    Lambertian diffuse material. Always scatters.
    """

    def __init__(self, albedo: Vector3):
        self.albedo = albedo

    def scatter(self, ray_in: Ray, rec: HitRecord, rng) -> Scatter:
        # Pick a random scatter direction by adding a random point in the unit sphere to the normal.
        scatter_direction = rec.normal + random_in_unit_sphere(rng)

        # If scatter_direction is degenerate (very small), just use the normal.
        if scatter_direction.near_zero():
            scatter_direction = rec.normal

        return Scatter(self.albedo, Ray(rec.p, scatter_direction, ray_in.time))

# materials/dielectric.py
from pathtracer.core.ray import Ray
from pathtracer.core.vector import Vector3
from pathtracer.core.utils import reflect, refract, schlick
from pathtracer.geometry.hittable import HitRecord
from pathtracer.materials.material import Material, Scatter

WHITE = Vector3(1.0, 1.0, 1.0)


class Dielectric(Material):
    """
    Clear refractive material (glass, water...). Chooses between reflection
    and refraction with the Schlick approximation of the Fresnel factor.
    """
    def __init__(self, ref_idx: float):
        if not ref_idx > 0:
            raise ValueError(f"Refractive index must be positive, got {ref_idx}")
        self.ref_idx = ref_idx

    def scatter(self, ray_in: Ray, rec: HitRecord, rng) -> Scatter:
        attenuation = WHITE  # Glass doesn't absorb light
        direction = ray_in.direction
        unit_direction = direction.normalize()
        reflected = reflect(direction, rec.normal)

        # Determine if we're entering or exiting the material
        d_dot_n = unit_direction.dot(rec.normal)
        if d_dot_n > 0:
            outward_normal = -rec.normal
            ni_over_nt = self.ref_idx
            cosine = self.ref_idx * d_dot_n
        else:
            outward_normal = rec.normal
            ni_over_nt = 1.0 / self.ref_idx
            cosine = -d_dot_n

        refracted = refract(direction, outward_normal, ni_over_nt)
        if ni_over_nt == 1.0:
            # No index change, so no interface to reflect from
            return Scatter(attenuation, Ray(rec.p, refracted, ray_in.time))
        if refracted is None:
            # Total internal reflection
            reflect_prob = 1.0
        else:
            reflect_prob = schlick(cosine, self.ref_idx)

        if rng.random() < reflect_prob:
            return Scatter(attenuation, Ray(rec.p, reflected, ray_in.time))
        return Scatter(attenuation, Ray(rec.p, refracted, ray_in.time))

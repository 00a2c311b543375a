# renderer/shading.py
import math
from pathtracer.core.interval import TimeInterval
from pathtracer.core.ray import Ray
from pathtracer.core.vector import Vector3
from pathtracer.geometry.hittable import Hittable
from pathtracer.renderer.env_map_utils import sky_color

# Hard cap on path length; a path still bouncing at this depth contributes black.
MAX_DEPTH = 50

# Lower bound on hit distance, so a scattered ray does not re-hit its own origin.
T_MIN = 0.001

BLACK = Vector3(0.0, 0.0, 0.0)


def ray_color(ray: Ray, world: Hittable, depth: int, rng, max_depth: int = MAX_DEPTH) -> Vector3:
    """
    Estimates the radiance arriving along ray.

    Follows the ray into the world, asks the struck material to scatter it and
    recurses on the scattered ray, multiplying in each bounce's attenuation.
    Terminates on absorption (black), on escape (sky gradient) or when depth
    reaches max_depth (black).
    """
    rec = world.hit(ray, TimeInterval(T_MIN, math.inf))
    if rec is None:
        return sky_color(ray)

    scatter = rec.material.scatter(ray, rec, rng)
    if scatter.ray is not None and depth < max_depth:
        return scatter.attenuation * ray_color(scatter.ray, world, depth + 1, rng, max_depth)
    return BLACK

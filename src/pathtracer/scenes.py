# scenes.py
import random
from typing import Callable, Dict, Tuple
from pathtracer.core.vector import Vector3
from pathtracer.camera.camera import CameraConfiguration
from pathtracer.geometry.world import HittableList
from pathtracer.geometry.sphere import MovingSphere, Sphere
from pathtracer.materials.lambertian import Lambertian
from pathtracer.materials.metal import Metal
from pathtracer.materials.dielectric import Dielectric
from pathtracer.materials.presets import ColorPresets, DielectricPresets, MetalPresets

Scene = Tuple[HittableList, CameraConfiguration]


def two_sphere_scene(aspect: float, rng: random.Random = None) -> Scene:
    """A small sphere resting on a large ground sphere, seen head on."""
    world = HittableList([
        Sphere(Vector3(0, -100.5, -1), 100, ColorPresets.matte(ColorPresets.OLIVE)),
        Sphere(Vector3(0, 0, -1), 0.5, ColorPresets.matte(ColorPresets.NAVY)),
    ])
    camera = CameraConfiguration(
        look_from=Vector3(0, 0, 0),
        look_at=Vector3(0, 0, -1),
        vertical_fov=90.0,
        aspect=aspect,
    )
    return world, camera


def sphere_scene(aspect: float, rng: random.Random = None) -> Scene:
    """Diffuse, fuzzy gold and glass spheres side by side on a ground sphere."""
    world = HittableList([
        Sphere(Vector3(0, 0, -1), 0.5, ColorPresets.matte(ColorPresets.NAVY)),
        Sphere(Vector3(0, -100.5, -1), 100, ColorPresets.matte(ColorPresets.OLIVE)),
        Sphere(Vector3(1, 0, -1), 0.5, MetalPresets.gold()),
        Sphere(Vector3(-1, 0, -1), 0.5, DielectricPresets.glass()),
    ])
    look_from = Vector3(-2, 2, 1)
    look_at = Vector3(0, 0, -1)
    camera = CameraConfiguration(
        look_from=look_from,
        look_at=look_at,
        vertical_fov=40.0,
        aspect=aspect,
        focus_dist=(look_from - look_at).length(),
    )
    return world, camera


def _random_spheres(rng: random.Random, moving: bool) -> HittableList:
    world = HittableList()
    world.add(Sphere(Vector3(0, -1000, 0), 1000, ColorPresets.matte(ColorPresets.GRAY)))

    for a in range(-11, 11):
        for b in range(-11, 11):
            choose_mat = rng.random()
            center = Vector3(a + 0.9 * rng.random(), 0.2, b + 0.9 * rng.random())
            if (center - Vector3(4, 0.2, 0)).length() <= 0.9:
                continue
            if choose_mat < 0.8:
                # diffuse
                albedo = Vector3(rng.random() * rng.random(),
                                 rng.random() * rng.random(),
                                 rng.random() * rng.random())
                if moving:
                    center1 = center + Vector3(0, 0.5 * rng.random(), 0)
                    world.add(MovingSphere.create(center, center1, 0.0, 1.0, 0.2, Lambertian(albedo)))
                else:
                    world.add(Sphere(center, 0.2, Lambertian(albedo)))
            elif choose_mat < 0.95:
                # metal
                albedo = Vector3(1 + rng.random(), 1 + rng.random(), 1 + rng.random()) * 0.5
                world.add(Sphere(center, 0.2, Metal(albedo, 0.5 * rng.random())))
            else:
                # glass
                world.add(Sphere(center, 0.2, Dielectric(1.5)))

    world.add(Sphere(Vector3(0, 1, 0), 1.0, DielectricPresets.glass()))
    world.add(Sphere(Vector3(-4, 1, 0), 1.0, ColorPresets.matte(ColorPresets.BROWN)))
    world.add(Sphere(Vector3(4, 1, 0), 1.0, MetalPresets.polished_steel()))
    return world


def _cover_camera(aspect: float, shutter_closed_time: float = 0.0) -> CameraConfiguration:
    return CameraConfiguration(
        look_from=Vector3(13, 2, 3),
        look_at=Vector3(0, 0, 0),
        vertical_fov=20.0,
        aspect=aspect,
        aperture=0.1,
        focus_dist=10.0,
        shutter_opened_time=0.0,
        shutter_closed_time=shutter_closed_time,
    )


def random_scene(aspect: float, rng: random.Random = None) -> Scene:
    """Hundreds of small random spheres around three large ones."""
    rng = rng or random.Random()
    return _random_spheres(rng, moving=False), _cover_camera(aspect)


def moving_spheres_scene(aspect: float, rng: random.Random = None) -> Scene:
    """The random scene with diffuse spheres bouncing up while the shutter is open."""
    rng = rng or random.Random()
    return _random_spheres(rng, moving=True), _cover_camera(aspect, shutter_closed_time=1.0)


SCENES: Dict[str, Callable[..., Scene]] = {
    "two_spheres": two_sphere_scene,
    "spheres": sphere_scene,
    "random": random_scene,
    "moving": moving_spheres_scene,
}

# geometry/world.py
from typing import Iterable, List, Optional
from pathtracer.core.interval import TimeInterval
from pathtracer.core.ray import Ray
from pathtracer.geometry.hittable import Hittable, HitRecord


class HittableList(Hittable):
    """
    A list of Hittable objects answering hit queries with the closest hit
    among its children. Scanned linearly; read-only while rendering.
    """
    def __init__(self, objects: Optional[Iterable[Hittable]] = None):
        self.objects: List[Hittable] = list(objects) if objects is not None else []

    def add(self, obj: Hittable):
        self.objects.append(obj)

    def clear(self):
        self.objects.clear()

    def __len__(self) -> int:
        return len(self.objects)

    def hit(self, ray: Ray, interval: TimeInterval) -> Optional[HitRecord]:
        hit_record = None
        closest_so_far = interval
        for obj in self.objects:
            rec = obj.hit(ray, closest_so_far)
            if rec is not None:
                closest_so_far = interval.clamp_max(rec.t)
                hit_record = rec
        return hit_record

# renderer/raytracer.py
import os
import random
import time
from concurrent import futures
from typing import Iterable, List, Tuple
import numpy as np
from pathtracer.core.vector import DegenerateVectorError, Vector3
from pathtracer.renderer.shading import MAX_DEPTH, ray_color
from pathtracer.renderer.tone_mapping import gamma_correct

EXECUTORS = {
    "process": futures.ProcessPoolExecutor,
    "thread": futures.ThreadPoolExecutor,
}

# (row, [(x, (r, g, b)), ...], skipped samples) as reported by a row worker
RowResult = Tuple[int, List[Tuple[int, Tuple[float, float, float]]], int]

# Camera and world of the render a pool process is working on, set once per
# process by init_worker.
_worker_scene = {}


class RowJob:
    """
    Everything a worker needs to render one image row, apart from the
    shared camera and world.
    """
    def __init__(self, row: int, width: int, height: int, samples_per_pixel: int,
                 max_depth: int, seed: int, debug_mode: bool = False):
        self.row = row
        self.width = width
        self.height = height
        self.samples_per_pixel = samples_per_pixel
        self.max_depth = max_depth
        self.seed = seed
        self.debug_mode = debug_mode


def init_worker(camera, world):
    """Pool initializer: receive the scene once instead of once per row."""
    _worker_scene["camera"] = camera
    _worker_scene["world"] = world


def render_row(job: RowJob, camera=None, world=None) -> RowResult:
    """
    Render one row of linear (not yet gamma corrected) pixel colors.

    Without an explicit camera and world, the ones installed by init_worker
    are used.

    Row 0 is the top of the image, so it samples the top of the viewport.
    A sample that hits a zero-length vector is dropped and counted, unless
    job.debug_mode is set, in which case the error propagates.
    """
    if camera is None:
        camera = _worker_scene["camera"]
    if world is None:
        world = _worker_scene["world"]
    rng = random.Random(job.seed)
    v_index = job.height - 1 - job.row
    pixels = []
    skipped = 0
    for x in range(job.width):
        total = Vector3(0.0, 0.0, 0.0)
        taken = 0
        for _ in range(job.samples_per_pixel):
            u = (x + rng.random()) / job.width
            v = (v_index + rng.random()) / job.height
            try:
                ray = camera.get_ray(u, v, rng)
                total = total + ray_color(ray, world, 0, rng, job.max_depth)
            except DegenerateVectorError:
                if job.debug_mode:
                    raise
                skipped += 1
                continue
            taken += 1
        if taken:
            total = total / taken
        pixels.append((x, (total.x, total.y, total.z)))
    return job.row, pixels, skipped


def assemble_image(results: Iterable[RowResult], width: int, height: int) -> Tuple[np.ndarray, int]:
    """
    Collect row results, in whatever order they arrive, into a linear
    (height, width, 3) float buffer.

    Returns the buffer and the total number of skipped samples. Raises
    RuntimeError if a pixel is reported twice or the pixel count does not
    come out at exactly width * height.
    """
    linear = np.zeros((height, width, 3), dtype=np.float64)
    written = np.zeros((height, width), dtype=bool)
    received = 0
    skipped_total = 0
    for row, pixels, skipped in results:
        skipped_total += skipped
        for x, rgb in pixels:
            if written[row, x]:
                raise RuntimeError(f"pixel ({x}, {row}) was reported twice")
            linear[row, x] = rgb
            written[row, x] = True
            received += 1
    if received != width * height:
        raise RuntimeError(f"expected {width * height} pixels, received {received}")
    return linear, skipped_total


def row_seeds(seed, height: int) -> List[int]:
    """Independent per-row seeds derived from one master seed (None = OS entropy)."""
    children = np.random.SeedSequence(seed).spawn(height)
    return [int(child.generate_state(1, dtype=np.uint64)[0]) for child in children]


class Renderer:
    """
    Batch path-tracing render driver.

    Splits the image into rows, renders them on a fixed-size worker pool and
    reassembles the finished pixels into an 8-bit RGB buffer. The camera and
    world are only read during a render.
    """
    def __init__(self, width: int, height: int, samples_per_pixel: int = 100,
                 max_depth: int = MAX_DEPTH, workers: int = None, executor: str = "process",
                 seed: int = None, debug_mode: bool = False):
        if width <= 0 or height <= 0:
            raise ValueError(f"image dimensions must be positive, got {width}x{height}")
        if samples_per_pixel <= 0:
            raise ValueError(f"samples_per_pixel must be positive, got {samples_per_pixel}")
        if max_depth < 0:
            raise ValueError(f"max_depth must not be negative, got {max_depth}")
        if executor not in EXECUTORS:
            raise ValueError(f"unknown executor {executor!r}, expected one of {sorted(EXECUTORS)}")
        if workers is not None and workers <= 0:
            raise ValueError(f"workers must be positive, got {workers}")
        self.width = width
        self.height = height
        self.samples_per_pixel = samples_per_pixel
        self.max_depth = max_depth
        self.workers = workers or os.cpu_count() or 1
        self.executor = executor
        self.seed = seed
        self.debug_mode = debug_mode

        # Results of the last render
        self.linear_image = None
        self.skipped_samples = 0
        self.render_time = 0.0

    def jobs(self) -> List[RowJob]:
        seeds = row_seeds(self.seed, self.height)
        return [RowJob(row, self.width, self.height, self.samples_per_pixel,
                       self.max_depth, seeds[row], self.debug_mode)
                for row in range(self.height)]

    def render(self, camera, world, verbose: bool = True) -> np.ndarray:
        """
        Render world through camera.

        Returns a uint8 array of shape (height, width, 3), row 0 at the top.
        Any exception raised by a worker aborts the whole render.
        """
        if verbose:
            print("\n=== Rendering ===")
            print(f"Resolution: {self.width}x{self.height}")
            print(f"Samples per pixel: {self.samples_per_pixel}")
            print(f"Max depth: {self.max_depth}")
            print(f"Workers: {self.workers} ({self.executor})")

        start = time.perf_counter()
        if self.executor == "process":
            # Each process gets the scene once; rows only carry their RowJob.
            pool = futures.ProcessPoolExecutor(max_workers=self.workers, initializer=init_worker,
                                               initargs=(camera, world))
            submit_args = ()
        else:
            # Threads share the scene directly.
            pool = futures.ThreadPoolExecutor(max_workers=self.workers)
            submit_args = (camera, world)

        with pool as executor:
            pending = [executor.submit(render_row, job, *submit_args) for job in self.jobs()]
            try:
                linear, skipped = assemble_image(
                    (future.result() for future in futures.as_completed(pending)),
                    self.width, self.height)
            except BaseException:
                executor.shutdown(wait=True, cancel_futures=True)
                raise

        self.linear_image = linear
        self.skipped_samples = skipped
        self.render_time = time.perf_counter() - start
        image = gamma_correct(linear)

        if verbose:
            print(f"Render finished in {self.render_time:.2f}s")
            if skipped:
                print(f"Warning: skipped {skipped} degenerate samples")
        return image

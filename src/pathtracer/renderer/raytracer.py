# renderer/raytracer.py
import logging
import time
from concurrent.futures import Executor, ProcessPoolExecutor, ThreadPoolExecutor
from typing import Callable, Optional, Sequence
import numpy as np
from pathtracer.camera.camera import Camera
from pathtracer.config import RenderSettings
from pathtracer.core.vector import Vector3
from pathtracer.geometry.hittable import Hittable
from pathtracer.renderer.integrator import normal_color, ray_color

logger = logging.getLogger(__name__)

# Called with the number of rows finished each time a band completes.
ProgressCallback = Callable[[int], None]

class RenderJob:
    """
    Everything one unit of work needs: the read-only scene, the camera and
    the settings. Rows are the unit of work; each row draws from its own
    generator, built from the SeedSequence it is handed.
    """
    def __init__(self, camera: Camera, world: Hittable, settings: RenderSettings):
        self.camera = camera
        self.world = world
        self.settings = settings
        self.width = settings.width
        self.height = settings.height

    def image_coordinates(self, x: float, row: float):
        """
        Normalized (s, t) for a position in pixel units; row 0 is the top of
        the image while t grows upward.
        """
        s = x / max(self.width - 1, 1)
        t = (self.height - 1 - row) / max(self.height - 1, 1)
        return s, t

    def shade(self, s: float, t: float, rng) -> Vector3:
        ray = self.camera.get_ray(s, t, rng)
        if self.settings.shading == "normals":
            return normal_color(ray, self.world, self.settings.t_min)
        return ray_color(ray, self.world, rng, self.settings.max_depth, self.settings.t_min)

    def render_row(self, row: int, seed_sequence: np.random.SeedSequence) -> np.ndarray:
        settings = self.settings
        rng = settings.rng_factory(seed_sequence)
        pixels = np.zeros((self.width, 3), dtype=np.float64)
        for x in range(self.width):
            color = Vector3(0.0, 0.0, 0.0)
            for _ in range(settings.samples_per_pixel):
                if settings.jitter:
                    # Offsets move right and up: row indices grow downward while t grows upward.
                    s, t = self.image_coordinates(x + rng.random(), row - rng.random())
                else:
                    s, t = self.image_coordinates(x, row)
                color = color + self.shade(s, t, rng)
            pixels[x] = (color * settings.color_scale).to_tuple()
        return pixels

# Process workers receive the job once, through the pool initializer.
_worker_job: Optional[RenderJob] = None

def _init_worker(job: RenderJob):
    global _worker_job
    _worker_job = job

def _render_row_in_worker(row: int, seed_sequence: np.random.SeedSequence) -> np.ndarray:
    return _worker_job.render_row(row, seed_sequence)

class Renderer:
    """
    Renders a scene into a (height, width, 3) array of linear colors.

    The image is processed in bands of `batch_rows` rows. Within a band
    every row is an independent task on a fixed-size worker pool; results
    are collected in row order and only the calling thread writes the
    output buffer. The scene and camera must not change during a render.
    """
    def __init__(self, settings: Optional[RenderSettings] = None):
        self.settings = settings if settings is not None else RenderSettings()
        self.width = self.settings.width
        self.height = self.settings.height

    def _make_executor(self, job: RenderJob) -> Executor:
        workers = self.settings.worker_count
        if self.settings.executor == "process":
            return ProcessPoolExecutor(max_workers=workers, initializer=_init_worker,
                                       initargs=(job,))
        return ThreadPoolExecutor(max_workers=workers, thread_name_prefix="render")

    def bands(self) -> Sequence[range]:
        batch = self.settings.batch_rows
        return [range(start, min(start + batch, self.height))
                for start in range(0, self.height, batch)]

    def render(self, camera: Camera, world: Hittable,
               progress: Optional[ProgressCallback] = None) -> np.ndarray:
        settings = self.settings
        job = RenderJob(camera, world, settings)
        row_seeds = np.random.SeedSequence(settings.seed).spawn(self.height)
        image = np.zeros((self.height, self.width, 3), dtype=np.float64)

        logger.info("Rendering %dx%d, %d samples/pixel, max depth %s, %d %s workers",
                    self.width, self.height, settings.samples_per_pixel,
                    settings.max_depth, settings.worker_count, settings.executor)
        start_time = time.perf_counter()

        with self._make_executor(job) as executor:
            task = _render_row_in_worker if settings.executor == "process" else job.render_row
            for band in self.bands():
                results = executor.map(task, band, [row_seeds[row] for row in band])
                for row, pixels in zip(band, results):
                    image[row] = pixels
                logger.debug("Finished rows %d-%d", band.start, band.stop - 1)
                if progress is not None:
                    progress(len(band))

        logger.info("Render finished in %.2fs", time.perf_counter() - start_time)
        return image

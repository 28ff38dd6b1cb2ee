# config.py
import os
from dataclasses import dataclass, field, replace
from typing import Any, Callable, Dict, Optional
import numpy as np

EXECUTORS = ("thread", "process")
SHADINGS = ("path", "normals")

# Quality presets are partial overrides applied on top of the defaults, so a
# preset combines with explicit values from the command line.
QUALITY_PRESETS: Dict[str, Dict[str, Any]] = {
    "preview": {"width": 200, "samples_per_pixel": 4, "max_depth": 8},
    "balanced": {"width": 400, "samples_per_pixel": 32, "max_depth": 20},
    "final": {"width": 800, "samples_per_pixel": 128, "max_depth": 50},
}

def default_rng_factory(seed_sequence: np.random.SeedSequence) -> np.random.Generator:
    """Build an independent generator for one unit of render work."""
    return np.random.default_rng(seed_sequence)

@dataclass(frozen=True)
class RenderSettings:
    """
    Image size, sampling and scheduling parameters for one render.

    Rows are traced in pure Python, so the "thread" executor shares one
    interpreter lock: it keeps every worker in-process and cheap to start
    but renders at roughly single-core speed. "process" pickles the scene
    once per worker and scales with the core count.
    """
    width: int = 400
    aspect_ratio: float = 16.0 / 9.0  # Height is derived from it
    samples_per_pixel: int = 16
    max_depth: Optional[int] = 50  # Bounce cap per path; None disables it
    batch_rows: int = 10  # Rows per band; bands render one after another
    workers: Optional[int] = None  # Pool size; None uses the CPU count
    executor: str = "thread"
    seed: Optional[int] = None  # Root entropy for every row generator; None draws from the OS
    jitter: bool = True  # Randomize the sample position inside each pixel
    shading: str = "path"  # "normals" for debug shading
    t_min: float = 0.001
    # Builds a generator from a SeedSequence; must be picklable for "process".
    rng_factory: Callable[[np.random.SeedSequence], Any] = field(
        default=default_rng_factory, compare=False
    )

    def __post_init__(self) -> None:
        if self.width <= 0:
            raise ValueError(f"width must be positive, got {self.width}")
        if self.aspect_ratio <= 0:
            raise ValueError(f"aspect_ratio must be positive, got {self.aspect_ratio}")
        if self.samples_per_pixel <= 0:
            raise ValueError(
                f"samples_per_pixel must be positive, got {self.samples_per_pixel}"
            )
        if self.max_depth is not None and self.max_depth < 0:
            raise ValueError(f"max_depth must be non-negative, got {self.max_depth}")
        if self.batch_rows <= 0:
            raise ValueError(f"batch_rows must be positive, got {self.batch_rows}")
        if self.workers is not None and self.workers <= 0:
            raise ValueError(f"workers must be positive, got {self.workers}")
        if self.executor not in EXECUTORS:
            raise ValueError(f"executor must be one of {EXECUTORS}, got {self.executor!r}")
        if self.shading not in SHADINGS:
            raise ValueError(f"shading must be one of {SHADINGS}, got {self.shading!r}")
        if self.t_min < 0:
            raise ValueError(f"t_min must be non-negative, got {self.t_min}")

    @property
    def height(self) -> int:
        return max(1, int(self.width / self.aspect_ratio))

    @property
    def color_scale(self) -> float:
        return 1.0 / self.samples_per_pixel

    @property
    def worker_count(self) -> int:
        return self.workers if self.workers is not None else (os.cpu_count() or 1)

    @classmethod
    def from_quality(cls, name: str, **overrides: Any) -> "RenderSettings":
        """Settings for a named preset, with explicit overrides applied last."""
        if name not in QUALITY_PRESETS:
            raise ValueError(
                f"Unknown quality preset {name!r}; choose from {sorted(QUALITY_PRESETS)}"
            )
        values = dict(QUALITY_PRESETS[name])
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)

    def with_overrides(self, **overrides: Any) -> "RenderSettings":
        return replace(self, **overrides)

# renderer/image_output.py
import logging
from pathlib import Path
from typing import Union
import numpy as np
from PIL import Image
from pathtracer.renderer.tone_mapping import auto_exposure_tone_mapping, reinhard_tone_mapping, to_rgb8

logger = logging.getLogger(__name__)

TONE_MAPPERS = {
    "clamp": to_rgb8,
    "reinhard": reinhard_tone_mapping,
    "auto": auto_exposure_tone_mapping,
}

def encode_image(image: np.ndarray, tone_mapping: str = "clamp") -> Image.Image:
    """
    Turn a linear (height, width, 3) render into a PIL RGB image.
    """
    if tone_mapping not in TONE_MAPPERS:
        raise ValueError(f"Unknown tone mapping {tone_mapping!r}; choose from {sorted(TONE_MAPPERS)}")
    return Image.fromarray(TONE_MAPPERS[tone_mapping](image))

def save_image(image: np.ndarray, path: Union[str, Path], tone_mapping: str = "clamp") -> Path:
    """
    Encode a linear render and write it to `path`; the format follows the
    file extension (PNG for .png). Parent directories are created.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    encode_image(image, tone_mapping).save(path)
    logger.info("Wrote %dx%d image to %s", image.shape[1], image.shape[0], path)
    return path

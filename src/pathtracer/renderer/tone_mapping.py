# renderer/tone_mapping.py
import numpy as np

# Largest value that still quantizes below 256 after scaling.
CLAMP_MAX = 0.999

# Rec. 709 luminance weights.
LUMINANCE_WEIGHTS = np.array([0.2126, 0.7152, 0.0722])

def clamp_linear(image: np.ndarray) -> np.ndarray:
    """
    Clamp linear radiance to [0, 1) channel by channel; NaNs become 0.
    """
    return np.clip(np.nan_to_num(image, nan=0.0), 0.0, CLAMP_MAX)

def to_rgb8(image: np.ndarray, gamma: float = 2.0) -> np.ndarray:
    """
    Convert a linear (height, width, 3) image to 8-bit sRGB-ish values.

    Colors are clamped, gamma corrected (a square root for the default
    gamma of 2) and quantized with x256 truncation.
    """
    mapped = clamp_linear(image) ** (1.0 / gamma)
    return (mapped * 256).astype(np.uint8)

def luminance(image: np.ndarray) -> np.ndarray:
    return np.nan_to_num(image, nan=0.0) @ LUMINANCE_WEIGHTS

def reinhard_tone_mapping(image: np.ndarray, exposure: float = 1.0,
                          white_point: float = 1.0, gamma: float = 2.2) -> np.ndarray:
    """
    Compress unbounded radiance with the Reinhard curve x / (1 + x / white),
    then gamma correct and quantize like `to_rgb8`.
    """
    scaled = np.maximum(np.nan_to_num(image, nan=0.0), 0.0) * exposure
    return to_rgb8(scaled / (1.0 + scaled / white_point), gamma)

def auto_exposure_tone_mapping(image: np.ndarray, gamma: float = 2.2,
                               target_midgray: float = 0.18) -> np.ndarray:
    """
    Pick the exposure that maps the mean luminance to `target_midgray`,
    then apply Reinhard.
    """
    mean = float(luminance(image).mean()) + 1e-5
    return reinhard_tone_mapping(image, exposure=target_midgray / mean, gamma=gamma)

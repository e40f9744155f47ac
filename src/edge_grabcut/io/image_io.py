from __future__ import annotations

from pathlib import Path

import cv2
import numpy as np


class ImageLoadError(FileNotFoundError):
    """Image file is missing or could not be decoded."""


def read_bgr(path: str | Path) -> np.ndarray:
    """Read an image in BGR (OpenCV default). Raises if not found/unreadable."""
    path = Path(path)
    img = cv2.imread(str(path), cv2.IMREAD_COLOR)
    if img is None or img.size == 0:
        raise ImageLoadError(f"Could not open or find the image: {path}")
    return img


def ensure_min_size(image: np.ndarray, min_side: int = 100) -> tuple[np.ndarray, bool]:
    """Resize to exactly min_side x min_side when either side is too small.

    GrabCut needs a reasonably sized seed rectangle, so tiny inputs are
    stretched up front. Returns the image and whether it was resized.
    """
    if image.size == 0:
        raise ValueError("Cannot process an empty image.")
    h, w = image.shape[:2]
    if w >= min_side and h >= min_side:
        return image, False
    resized = cv2.resize(image, (min_side, min_side))
    return resized, True


def to_gray(image: np.ndarray) -> np.ndarray:
    """Convert a BGR (or BGRA) uint8 image to grayscale uint8.

    A 2-D input is assumed to be grayscale already and is returned as-is.
    """
    if image.ndim == 2:
        return image
    if image.ndim == 3 and image.shape[2] == 3:
        return cv2.cvtColor(image, cv2.COLOR_BGR2GRAY)
    if image.ndim == 3 and image.shape[2] == 4:
        return cv2.cvtColor(image, cv2.COLOR_BGRA2GRAY)
    raise ValueError("Expected image with shape (H, W), (H, W, 3) or (H, W, 4).")


def to_bgr(image: np.ndarray) -> np.ndarray:
    """Promote grayscale or BGRA input to 3-channel BGR for GrabCut."""
    if image.ndim == 2:
        return cv2.cvtColor(image, cv2.COLOR_GRAY2BGR)
    if image.ndim == 3 and image.shape[2] == 3:
        return image
    if image.ndim == 3 and image.shape[2] == 4:
        return cv2.cvtColor(image, cv2.COLOR_BGRA2BGR)
    raise ValueError("Expected image with shape (H, W), (H, W, 3) or (H, W, 4).")

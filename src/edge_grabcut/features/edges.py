from __future__ import annotations

from collections.abc import Sequence

import cv2
import numpy as np

DEFAULT_SIGMAS: tuple[float, ...] = (1.0, 2.0, 3.0)


def canny(gray: np.ndarray, low: int = 50, high: int = 150) -> np.ndarray:
    """Canny edge detector. Expects grayscale uint8."""
    if gray.ndim != 2:
        raise ValueError("Expected grayscale image with shape (H, W).")
    if gray.dtype != np.uint8:
        raise ValueError("Expected uint8 grayscale image.")
    return cv2.Canny(gray, threshold1=low, threshold2=high)


def gaussian_ksize(sigma: float) -> int:
    ksize = max(3, int(round(sigma * 2.0 + 1)))
    # GaussianBlur rejects even kernels.
    if ksize % 2 == 0:
        ksize += 1
    return ksize


def edge_maps_per_scale(
    gray: np.ndarray,
    sigmas: Sequence[float] = DEFAULT_SIGMAS,
    low: int = 50,
    high: int = 150,
) -> list[np.ndarray]:
    maps = []
    for sigma in sigmas:
        if sigma <= 0:
            raise ValueError(f"sigma must be positive, got {sigma}")
        k = gaussian_ksize(sigma)
        blurred = cv2.GaussianBlur(gray, (k, k), sigma)
        maps.append(canny(blurred, low=low, high=high))
    return maps


def union_edges(maps: Sequence[np.ndarray]) -> np.ndarray:
    """Pixel-wise max of the per-scale maps: an edge at any scale survives."""
    if not maps:
        raise ValueError("Need at least one edge map.")
    combined = np.zeros_like(maps[0], dtype=np.uint8)
    for edges in maps:
        if edges.shape != combined.shape:
            raise ValueError("All edge maps must share the same shape.")
        combined = np.maximum(combined, edges)
    return combined


def close_gaps(edges: np.ndarray, ksize: int = 3) -> np.ndarray:
    kernel = cv2.getStructuringElement(cv2.MORPH_RECT, (ksize, ksize))
    return cv2.morphologyEx(edges, cv2.MORPH_CLOSE, kernel)


def multi_scale_canny(
    gray: np.ndarray,
    sigmas: Sequence[float] = DEFAULT_SIGMAS,
    low: int = 50,
    high: int = 150,
    close_ksize: int = 3,
) -> np.ndarray:
    """Union of blurred Canny maps over several sigmas, then a closing pass."""
    if gray.size == 0:
        raise ValueError("Cannot extract edges from an empty image.")
    maps = edge_maps_per_scale(gray, sigmas, low=low, high=high)
    return close_gaps(union_edges(maps), ksize=close_ksize)

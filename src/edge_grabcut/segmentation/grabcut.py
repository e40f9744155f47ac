from __future__ import annotations

import logging

import cv2
import numpy as np

from edge_grabcut.types import ForegroundMask, PipelineIssue

logger = logging.getLogger(__name__)


def inset_rect(shape: tuple[int, ...], border_fraction: float = 0.1) -> tuple[int, int, int, int]:
    """Centered (x, y, w, h) rectangle inset by a fraction of the smaller side."""
    h, w = shape[:2]
    border = int(min(h, w) * border_fraction)
    return border, border, w - 2 * border, h - 2 * border


def foreground_from_labels(labels: np.ndarray) -> np.ndarray:
    """Collapse the four GrabCut labels to a 0/255 float64 foreground indicator."""
    fg = (labels == cv2.GC_FGD) | (labels == cv2.GC_PR_FGD)
    return np.where(fg, 255.0, 0.0).astype(np.float64)


def _background_only(shape: tuple[int, ...]) -> np.ndarray:
    return np.zeros(shape[:2], dtype=np.float64)


def grabcut_foreground(
    bgr: np.ndarray,
    iterations: int = 5,
    border_fraction: float = 0.1,
    rng_seed: int = 0,
) -> ForegroundMask:
    """Run rect-seeded GrabCut and return the binary foreground indicator.

    The mask is in the 0..255 range; normalising it is left to the caller.
    Engine failures and degenerate seed rectangles never raise: they yield
    an all-background mask together with the issue that caused it.
    """
    if bgr.ndim != 3 or bgr.shape[2] != 3:
        raise ValueError("GrabCut expects a BGR image with shape (H, W, 3).")

    x, y, w, h = inset_rect(bgr.shape, border_fraction)
    if w <= 1 or h <= 1:
        msg = f"Bounding box is too small: {w}x{h}"
        logger.error(msg)
        return ForegroundMask(
            mask=_background_only(bgr.shape),
            issue=PipelineIssue(kind="seed_too_small", message=msg),
        )

    labels = np.full(bgr.shape[:2], cv2.GC_BGD, dtype=np.uint8)
    bgd_model = np.zeros((1, 65), np.float64)
    fgd_model = np.zeros((1, 65), np.float64)

    # GMM initialisation draws from OpenCV's global RNG.
    cv2.setRNGSeed(rng_seed)
    try:
        cv2.grabCut(
            bgr, labels, (x, y, w, h), bgd_model, fgd_model, iterations, cv2.GC_INIT_WITH_RECT
        )
    except cv2.error as exc:
        msg = f"OpenCV exception in grabCut: {exc}"
        logger.error(msg)
        return ForegroundMask(
            mask=_background_only(bgr.shape),
            issue=PipelineIssue(kind="segmentation_failed", message=msg),
        )

    logger.debug("grabCut finished: rect=%s iterations=%d", (x, y, w, h), iterations)
    return ForegroundMask(mask=foreground_from_labels(labels))

from __future__ import annotations

from pathlib import Path

import cv2
import matplotlib.pyplot as plt
import numpy as np


def to_uint8(prob: np.ndarray) -> np.ndarray:
    """Scale a [0, 1] float grid to uint8 0..255."""
    return np.clip(np.rint(prob * 255.0), 0, 255).astype(np.uint8)


def show_results(edges: np.ndarray, fg_prob: np.ndarray, title: str = "image") -> None:
    fig, axes = plt.subplots(1, 2, figsize=(10, 5))
    fig.suptitle(title)
    axes[0].set_title("edges")
    axes[0].imshow(edges, cmap="gray")
    axes[1].set_title("foreground")
    axes[1].imshow(fg_prob, cmap="gray", vmin=0.0, vmax=1.0)
    for ax in axes:
        ax.axis("off")
    plt.show()


def save_gray(gray: np.ndarray, path: str | Path) -> None:
    """Save grayscale uint8 to disk."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    ok = cv2.imwrite(str(path), gray)
    if not ok:
        raise RuntimeError(f"Failed to write image to {path}")

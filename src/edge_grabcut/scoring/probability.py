from __future__ import annotations

import numpy as np

from edge_grabcut.types import ScoreTuple


def compute_scores(fg_mask: np.ndarray, edges: np.ndarray) -> ScoreTuple:
    """Foreground/background scores from a 0..255 mask and a 0..255 edge map."""
    if fg_mask.shape[:2] != edges.shape[:2]:
        raise ValueError(
            f"Mask and edge map shapes differ: {fg_mask.shape[:2]} vs {edges.shape[:2]}"
        )
    fg_prob = fg_mask.astype(np.float64) / 255.0
    edge_w = edges.astype(np.float64) / 255.0

    foreground_score = float(fg_prob.mean()) if fg_prob.size else 0.0
    background_score = 1.0 - foreground_score

    edge_weighted_fg = 0.0
    edge_mass = float(edge_w.sum())
    if edge_mass > 0:
        edge_weighted_fg = float((fg_prob * edge_w).sum()) / edge_mass

    return ScoreTuple(
        fg_prob=fg_prob,
        foreground_score=foreground_score,
        background_score=background_score,
        edge_weighted_fg=edge_weighted_fg,
    )

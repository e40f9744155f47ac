from __future__ import annotations

from pathlib import Path

import numpy as np

from edge_grabcut.config import PipelineConfig
from edge_grabcut.features.edges import multi_scale_canny
from edge_grabcut.io.image_io import ImageLoadError, ensure_min_size, read_bgr, to_bgr, to_gray
from edge_grabcut.report import ConsoleReporter
from edge_grabcut.scoring.probability import compute_scores
from edge_grabcut.segmentation.grabcut import grabcut_foreground
from edge_grabcut.types import PipelineIssue, PipelineResult


def run_pipeline(
    bgr: np.ndarray,
    cfg: PipelineConfig | None = None,
    reporter: ConsoleReporter | None = None,
    image_path: str | None = None,
) -> PipelineResult:
    if cfg is None:
        cfg = PipelineConfig()
    cfg.validate()
    if reporter is None:
        reporter = ConsoleReporter(quiet=True)

    image, resized = ensure_min_size(bgr, cfg.min_side)
    if resized:
        reporter.message("Resizing image to avoid failure with GrabCut...")
    h, w = image.shape[:2]
    reporter.message(f"Loaded image with size: {w} x {h}")

    gray = to_gray(image)
    image = to_bgr(image)

    reporter.message("Applying multi-scale Canny edge detection...")
    edges = multi_scale_canny(
        gray,
        sigmas=cfg.sigmas,
        low=cfg.canny_low,
        high=cfg.canny_high,
        close_ksize=cfg.close_ksize,
    )

    result = PipelineResult(image_path=image_path, image_size=(w, h), resized=resized, edges=edges)

    with reporter.step("Computing foreground and background probabilities"):
        fg = grabcut_foreground(
            image,
            iterations=cfg.grabcut_iterations,
            border_fraction=cfg.border_fraction,
            rng_seed=cfg.rng_seed,
        )
    if fg.issue is not None:
        result.issues.append(fg.issue)

    with reporter.step("Calculating foreground and edge-weighted scores"):
        result.scores = compute_scores(fg.mask, edges)
    return result


def run_on_path(
    path: str | Path,
    cfg: PipelineConfig | None = None,
    reporter: ConsoleReporter | None = None,
) -> PipelineResult:
    """Load an image and run the pipeline. Load failures are returned, not raised."""
    try:
        bgr = read_bgr(path)
    except ImageLoadError as exc:
        return PipelineResult(
            image_path=str(path),
            issues=[PipelineIssue(kind="load", message=str(exc), fatal=True)],
        )
    return run_pipeline(bgr, cfg, reporter=reporter, image_path=str(path))

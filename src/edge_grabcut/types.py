from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

import numpy as np

IssueKind = Literal[
    "load",
    "seed_too_small",
    "segmentation_failed",
]


@dataclass(slots=True)
class PipelineIssue:
    kind: IssueKind
    message: str
    fatal: bool = False


@dataclass(slots=True)
class ForegroundMask:
    mask: np.ndarray
    issue: PipelineIssue | None = None


@dataclass(slots=True)
class ScoreTuple:
    fg_prob: np.ndarray
    foreground_score: float
    background_score: float
    edge_weighted_fg: float


@dataclass(slots=True)
class PipelineResult:
    image_path: str | None = None
    image_size: tuple[int, int] = (0, 0)
    resized: bool = False
    scores: ScoreTuple | None = None
    edges: np.ndarray | None = None
    issues: list[PipelineIssue] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not any(issue.fatal for issue in self.issues)

    @property
    def degraded(self) -> bool:
        return any(not issue.fatal for issue in self.issues)

from __future__ import annotations

import json
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import asdict
from pathlib import Path
from typing import TextIO

from edge_grabcut.types import PipelineResult


class ConsoleReporter:
    """Human-readable progress and result lines on stdout."""

    def __init__(self, stream: TextIO | None = None, quiet: bool = False) -> None:
        self.stream = stream if stream is not None else sys.stdout
        self.quiet = quiet

    def message(self, text: str) -> None:
        if not self.quiet:
            print(text, file=self.stream)

    @contextmanager
    def step(self, text: str) -> Iterator[None]:
        if not self.quiet:
            print(f"{text}... ", end="", file=self.stream, flush=True)
        try:
            yield
        except BaseException:
            if not self.quiet:
                print("failed!", file=self.stream)
            raise
        if not self.quiet:
            print("done!", file=self.stream)

    def scores(self, result: PipelineResult) -> None:
        # Scores are the program's output and are printed even when quiet.
        if result.scores is None:
            return
        s = result.scores
        print(f"Foreground Probability Score: {s.foreground_score}", file=self.stream)
        print(f"Background Probability Score: {s.background_score}", file=self.stream)
        print(f"Edge-Weighted Foreground Score: {s.edge_weighted_fg}", file=self.stream)


def summary_dict(result: PipelineResult) -> dict:
    scores = None
    if result.scores is not None:
        scores = {
            "foreground": result.scores.foreground_score,
            "background": result.scores.background_score,
            "edge_weighted_foreground": result.scores.edge_weighted_fg,
        }
    return {
        "image_path": result.image_path,
        "image_size": list(result.image_size),
        "resized": result.resized,
        "ok": result.ok,
        "degraded": result.degraded,
        "scores": scores,
        "issues": [asdict(issue) for issue in result.issues],
    }


def write_summary(result: PipelineResult, path: str | Path) -> Path:
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    with p.open("w", encoding="utf-8") as f:
        json.dump(summary_dict(result), f, indent=2)
    return p

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from edge_grabcut.config import load_pipeline_config
from edge_grabcut.pipelines.grabcut_edges import run_on_path
from edge_grabcut.report import ConsoleReporter, write_summary
from edge_grabcut.viz.plot import save_gray, show_results, to_uint8


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="edge-grabcut",
        description="Multi-scale Canny edges plus GrabCut foreground/background scores.",
    )
    parser.add_argument("image_path", help="Path to the input image.")
    parser.add_argument("--config", default=None, help="Path to yaml config file.")
    parser.add_argument("--out-dir", default=None, help="Write edges.png and foreground.png here.")
    parser.add_argument("--summary-json", default=None, help="Write a JSON summary to this path.")
    parser.add_argument("--show", action="store_true", help="Display edge map and mask.")
    parser.add_argument("--quiet", action="store_true", help="Only print the final scores.")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging.")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    try:
        cfg = load_pipeline_config(args.config)
    except (FileNotFoundError, ValueError) as exc:
        print(f"Invalid config: {exc}", file=sys.stderr)
        return 1

    reporter = ConsoleReporter(quiet=args.quiet)
    result = run_on_path(args.image_path, cfg, reporter=reporter)

    if not result.ok:
        for issue in result.issues:
            print(issue.message, file=sys.stderr)
        return 1
    # Recoverable issues were already logged by the segmenter.

    reporter.scores(result)

    if args.out_dir is not None and result.scores is not None:
        out_dir = Path(args.out_dir)
        save_gray(result.edges, out_dir / "edges.png")
        save_gray(to_uint8(result.scores.fg_prob), out_dir / "foreground.png")
        reporter.message(f"Saved: {out_dir}")
    if args.summary_json is not None:
        path = write_summary(result, args.summary_json)
        reporter.message(f"Saved: {path}")
    if args.show and result.scores is not None:
        show_results(result.edges, result.scores.fg_prob, title=Path(args.image_path).name)
    return 0


def cli() -> None:
    sys.exit(main())


if __name__ == "__main__":
    cli()

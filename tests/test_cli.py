from __future__ import annotations

import json
from pathlib import Path

import cv2
import numpy as np
import pytest

from edge_grabcut.main import main


def _write_scene(path: Path) -> Path:
    rng = np.random.default_rng(5)
    img = rng.integers(0, 50, size=(120, 120, 3), dtype=np.uint8)
    img[30:90, 30:90] = (40, 160, 230)
    assert cv2.imwrite(str(path), img)
    return path


def test_usage_error_without_arguments():
    with pytest.raises(SystemExit) as excinfo:
        main([])
    assert excinfo.value.code != 0


def test_usage_error_with_extra_argument(tmp_path: Path):
    with pytest.raises(SystemExit) as excinfo:
        main([str(tmp_path / "a.png"), str(tmp_path / "b.png")])
    assert excinfo.value.code != 0


def test_missing_file_exits_nonzero_without_scores(tmp_path: Path, capsys):
    code = main([str(tmp_path / "missing.png")])
    captured = capsys.readouterr()
    assert code != 0
    assert "Score" not in captured.out
    assert "Could not open or find the image" in captured.err


def test_successful_run_prints_scores(tmp_path: Path, capsys):
    image = _write_scene(tmp_path / "scene.png")
    code = main([str(image)])
    out = capsys.readouterr().out
    assert code == 0
    assert "Loaded image with size: 120 x 120" in out
    assert "Foreground Probability Score:" in out
    assert "Background Probability Score:" in out
    assert "Edge-Weighted Foreground Score:" in out


def test_small_image_reports_resize(tmp_path: Path, capsys):
    path = tmp_path / "small.png"
    assert cv2.imwrite(str(path), np.full((20, 30, 3), 128, dtype=np.uint8))
    assert main([str(path)]) == 0
    out = capsys.readouterr().out
    assert "Resizing image" in out
    assert "Loaded image with size: 100 x 100" in out


def test_outputs_are_written(tmp_path: Path):
    image = _write_scene(tmp_path / "scene.png")
    out_dir = tmp_path / "out"
    summary = tmp_path / "summary.json"
    code = main([str(image), "--quiet", "--out-dir", str(out_dir), "--summary-json", str(summary)])
    assert code == 0
    assert (out_dir / "edges.png").exists()
    assert (out_dir / "foreground.png").exists()
    payload = json.loads(summary.read_text(encoding="utf-8"))
    assert payload["image_size"] == [120, 120]
    total = payload["scores"]["foreground"] + payload["scores"]["background"]
    assert total == pytest.approx(1.0)


def test_bad_config_exits_nonzero(tmp_path: Path, capsys):
    image = _write_scene(tmp_path / "scene.png")
    cfg = tmp_path / "cfg.yaml"
    cfg.write_text("grabcut_iterations: 0\n", encoding="utf-8")
    assert main([str(image), "--config", str(cfg)]) == 1
    assert "Invalid config" in capsys.readouterr().err


@pytest.mark.parametrize("payload", ["sigmas: 2.0\n", "canny_low: abc\n"])
def test_malformed_config_value_exits_nonzero(tmp_path: Path, capsys, payload):
    image = _write_scene(tmp_path / "scene.png")
    cfg = tmp_path / "cfg.yaml"
    cfg.write_text(payload, encoding="utf-8")
    assert main([str(image), "--config", str(cfg)]) == 1
    captured = capsys.readouterr()
    assert "Invalid config" in captured.err
    assert "Score" not in captured.out


def test_segmentation_failure_is_logged_once(tmp_path: Path, capsys, caplog, monkeypatch):
    def boom(*args, **kwargs):
        raise cv2.error("no model")

    monkeypatch.setattr(cv2, "grabCut", boom)
    image = _write_scene(tmp_path / "scene.png")
    assert main([str(image)]) == 0
    assert "Foreground Probability Score: 0.0" in capsys.readouterr().out
    related = [r for r in caplog.records if "no model" in r.getMessage()]
    assert len(related) == 1

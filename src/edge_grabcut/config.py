from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from pathlib import Path

import yaml


@dataclass(frozen=True)
class PipelineConfig:
    sigmas: tuple[float, ...] = (1.0, 2.0, 3.0)
    canny_low: int = 50
    canny_high: int = 150
    close_ksize: int = 3
    grabcut_iterations: int = 5
    border_fraction: float = 0.1
    min_side: int = 100
    rng_seed: int = 0

    def validate(self) -> PipelineConfig:
        if not self.sigmas:
            raise ValueError("sigmas must contain at least one value.")
        if any(s <= 0 for s in self.sigmas):
            raise ValueError(f"sigmas must be positive, got {self.sigmas}.")
        if self.canny_low > self.canny_high:
            raise ValueError("canny_low must not exceed canny_high.")
        if self.close_ksize <= 0 or self.close_ksize % 2 == 0:
            raise ValueError("close_ksize must be a positive odd number.")
        if self.grabcut_iterations < 1:
            raise ValueError("grabcut_iterations must be >= 1.")
        if not 0.0 <= self.border_fraction < 0.5:
            raise ValueError("border_fraction must be in [0, 0.5).")
        if self.min_side < 1:
            raise ValueError("min_side must be >= 1.")
        return self


def _default_config_path() -> Path:
    root = Path(__file__).resolve().parents[2]
    return root / "configs" / "pipeline.default.yaml"


_INT_FIELDS = ("canny_low", "canny_high", "close_ksize", "grabcut_iterations", "min_side", "rng_seed")
_FLOAT_FIELDS = ("border_fraction",)


def _coerce(key: str, value):
    try:
        if key == "sigmas":
            if not isinstance(value, (list, tuple)):
                raise TypeError(f"expected a list, got {type(value).__name__}")
            return tuple(float(s) for s in value)
        if key in _INT_FIELDS:
            return int(value)
        if key in _FLOAT_FIELDS:
            return float(value)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"Invalid value for {key}: {value!r} ({exc})") from exc
    return value


def load_pipeline_config(path: str | Path | None = None) -> PipelineConfig:
    config = PipelineConfig()
    if path is None:
        p = _default_config_path()
        if not p.exists():
            return config
    else:
        p = Path(path)
        if not p.exists():
            raise FileNotFoundError(f"Config file not found: {p}")

    with p.open("r", encoding="utf-8") as f:
        payload = yaml.safe_load(f) or {}
    if not isinstance(payload, dict):
        raise ValueError(f"Expected a mapping in {p}, got {type(payload).__name__}.")

    fields = {f.name for f in dataclasses.fields(PipelineConfig)}
    known = {k: _coerce(k, v) for k, v in payload.items() if k in fields}
    return dataclasses.replace(config, **known).validate()

# python/wisp_icons/config.py
# Crystal synthesis parameters and their parsing from mappings, JSON files and overrides
# Exists so the CLI, icon writer and tests share one validated parameter set
# RELEVANT FILES: python/wisp_icons/synth.py, python/wisp_icons/cli.py, tests/test_config.py
from __future__ import annotations

import copy
import json
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Tuple, Union

ConfigSource = Union["CrystalConfig", Mapping[str, Any], str, Path, None]


def _to_int(value: Any, label: str) -> int:
    if isinstance(value, bool):
        raise ValueError(f"{label} must be an integer")
    try:
        out = int(value)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"{label} must be an integer, got {value!r}") from exc
    if isinstance(value, float) and not value.is_integer():
        raise ValueError(f"{label} must be an integer, got {value!r}")
    return out


def _to_float(value: Any, label: str) -> float:
    if isinstance(value, bool):
        raise ValueError(f"{label} must be numeric")
    try:
        return float(value)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"{label} must be numeric, got {value!r}") from exc


def _to_int2(value: Any, label: str) -> Tuple[int, int]:
    if isinstance(value, (list, tuple)) and len(value) == 2:
        return (_to_int(value[0], label), _to_int(value[1], label))
    raise ValueError(f"{label} must be a sequence of two integers")


@dataclass
class CrystalConfig:
    layers: int = 10
    points_per_layer: int = 10
    margin: int = 50
    base_lightness: float = 30.0
    saturation_range: Tuple[int, int] = (50, 80)
    lightness_step: float = 5.0
    lightness_variation: float = 20.0

    def to_dict(self) -> dict:
        return {
            "layers": self.layers,
            "points_per_layer": self.points_per_layer,
            "margin": self.margin,
            "base_lightness": self.base_lightness,
            "saturation_range": list(self.saturation_range),
            "lightness_step": self.lightness_step,
            "lightness_variation": self.lightness_variation,
        }

    def copy(self) -> "CrystalConfig":
        return copy.deepcopy(self)

    def validate(self) -> None:
        if self.layers < 0:
            raise ValueError("layers must be non-negative")
        if self.points_per_layer < 3:
            raise ValueError("points_per_layer must be >= 3")
        if self.margin < 0:
            raise ValueError("margin must be non-negative")
        if not (0.0 <= self.base_lightness <= 100.0):
            raise ValueError("base_lightness must be within [0, 100]")
        lo, hi = self.saturation_range
        if not (0 <= lo < hi <= 101):
            raise ValueError("saturation_range must satisfy 0 <= low < high <= 101")
        if self.lightness_variation < 0.0:
            raise ValueError("lightness_variation must be non-negative")

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any], default: Optional["CrystalConfig"] = None) -> "CrystalConfig":
        base = copy.deepcopy(default) if default is not None else cls()
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ValueError(f"Unknown crystal config keys: {', '.join(unknown)}")
        if "layers" in data:
            base.layers = _to_int(data["layers"], "layers")
        if "points_per_layer" in data:
            base.points_per_layer = _to_int(data["points_per_layer"], "points_per_layer")
        if "margin" in data:
            base.margin = _to_int(data["margin"], "margin")
        if "base_lightness" in data:
            base.base_lightness = _to_float(data["base_lightness"], "base_lightness")
        if "saturation_range" in data:
            base.saturation_range = _to_int2(data["saturation_range"], "saturation_range")
        if "lightness_step" in data:
            base.lightness_step = _to_float(data["lightness_step"], "lightness_step")
        if "lightness_variation" in data:
            base.lightness_variation = _to_float(data["lightness_variation"], "lightness_variation")
        return base


def _load_from_path(path: Path) -> Mapping[str, Any]:
    suffix = path.suffix.lower()
    if suffix not in {".json", ""}:
        raise ValueError(f"Unsupported crystal config file format: {path}")
    data = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(data, Mapping):
        raise TypeError("crystal config file must contain a JSON object")
    return data


def load_crystal_config(config: ConfigSource = None, overrides: Optional[Mapping[str, Any]] = None) -> CrystalConfig:
    if isinstance(config, CrystalConfig):
        cfg = config.copy()
    elif isinstance(config, Mapping):
        cfg = CrystalConfig.from_mapping(config)
    elif isinstance(config, (str, Path)):
        cfg = CrystalConfig.from_mapping(_load_from_path(Path(config)))
    elif config is None:
        cfg = CrystalConfig()
    else:
        raise TypeError("config must be CrystalConfig, mapping, path, or None")

    if overrides:
        # CLI flags arrive as None when not given
        merged: Dict[str, Any] = {k: v for k, v in overrides.items() if v is not None}
        if merged:
            cfg = CrystalConfig.from_mapping(merged, cfg)
    cfg.validate()
    return cfg

"""Configuration dataclasses and YAML loader for the cooperative snake driver."""

from dataclasses import dataclass, field
from typing import Optional
from pathlib import Path
import yaml

from .model.grid import BOARD_SIZE

# Tick interval of the interactive board, in milliseconds.
TICK_SPEED_MS = 180


@dataclass
class SimulationConfig:
    """
    Driver settings. Board size and agent count are fixed by the model and
    deliberately not configurable here.
    """
    max_steps: int = 1000
    tick_ms: int = 0  # 0 = run headless as fast as possible
    progress_every: int = 100

    # Export flags (can be overridden by CLI)
    csv_enabled: bool = True
    report_enabled: bool = True
    quiet: bool = False
    seed: Optional[int] = None
    out_dir: Path = field(default_factory=lambda: Path("./output"))

    @property
    def board_size(self) -> int:
        return BOARD_SIZE


def _non_negative(raw: dict, key: str, default: int) -> int:
    value = raw.get(key, default)
    if not isinstance(value, int) or isinstance(value, bool) or value < 0:
        raise ValueError(f"'{key}' must be a non-negative integer, got {value!r}")
    return value


def load_config(config_path: Path) -> SimulationConfig:
    """Load and validate YAML configuration file."""
    with open(config_path) as f:
        raw = yaml.safe_load(f) or {}

    if not isinstance(raw, dict):
        raise ValueError("Configuration root must be a mapping")

    # Parse simulation config
    sim_raw = raw.get('simulation') or {}
    seed = sim_raw.get('seed')
    if seed is not None and not isinstance(seed, int):
        raise ValueError(f"'seed' must be an integer, got {seed!r}")

    # Parse export config (optional)
    export_raw = raw.get('export') or {}

    config = SimulationConfig(
        max_steps=_non_negative(sim_raw, 'max_steps', 1000),
        tick_ms=_non_negative(sim_raw, 'tick_ms', 0),
        progress_every=_non_negative(sim_raw, 'progress_every', 100),
        csv_enabled=export_raw.get('csv', True),
        report_enabled=export_raw.get('report', True),
        seed=seed,
    )
    if 'out_dir' in export_raw:
        config.out_dir = Path(export_raw['out_dir'])
    return config

"""Game configuration and env-file loading."""

from __future__ import annotations

import logging
import os
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

DEFAULT_OPPONENT_DELAY_SECONDS = 0.65
DEFAULT_PLACEMENT_MAX_ATTEMPTS = 10_000

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class GameConfig:
    """Immutable game tuning."""

    opponent_delay_seconds: float = DEFAULT_OPPONENT_DELAY_SECONDS
    placement_max_attempts: int = DEFAULT_PLACEMENT_MAX_ATTEMPTS
    seed: int | None = None


def load_game_config() -> GameConfig:
    """Load game configuration from env vars, falling back to defaults."""
    delay = max(0.0, _float("BROADSIDE_OPPONENT_DELAY", DEFAULT_OPPONENT_DELAY_SECONDS))
    attempts = _int("BROADSIDE_PLACEMENT_MAX_ATTEMPTS", DEFAULT_PLACEMENT_MAX_ATTEMPTS)
    if attempts <= 0:
        attempts = DEFAULT_PLACEMENT_MAX_ATTEMPTS
    seed_raw = os.getenv("BROADSIDE_SEED", "").strip()
    seed: int | None = None
    if seed_raw:
        try:
            seed = int(seed_raw)
        except ValueError:
            logger.warning("invalid BROADSIDE_SEED=%r ignored", seed_raw)
    return GameConfig(opponent_delay_seconds=delay, placement_max_attempts=attempts, seed=seed)


def load_env_file(path: str = ".env", *, override_existing: bool = True) -> None:
    """Load KEY=VALUE pairs from an env file into process environment.

    By default, values from the env file overwrite existing environment variables.
    """
    env_path = Path(path)
    if not env_path.exists():
        return

    for raw_line in env_path.read_text(encoding="utf-8").splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if "=" not in line:
            continue

        key, value = line.split("=", 1)
        key = key.strip()
        value = value.strip()
        if not key:
            continue

        if len(value) >= 2 and value[0] == value[-1] and value[0] in {"'", '"'}:
            value = value[1:-1]

        if override_existing or key not in os.environ:
            os.environ[key] = value


def load_default_env_files(
    *, override_existing: bool = True, paths: Sequence[str] | None = None
) -> None:
    """Load env files left to right; later files win.

    Default order:
    1) appdata/config/.env.broadside
    2) appdata/config/.env.broadside.local
    3) .env.broadside
    4) .env.broadside.local
    """
    to_load = (
        tuple(paths)
        if paths is not None
        else (
            "appdata/config/.env.broadside",
            "appdata/config/.env.broadside.local",
            ".env.broadside",
            ".env.broadside.local",
        )
    )
    for path in to_load:
        load_env_file(path, override_existing=override_existing)


def _float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return float(raw)
    except ValueError:
        logger.warning("invalid %s=%r, using %s", name, raw, default)
        return default


def _int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning("invalid %s=%r, using %s", name, raw, default)
        return default

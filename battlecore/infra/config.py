"""Configuration and env loading."""

from __future__ import annotations

import os
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path

from battlecore.core.models import DEFAULT_COLS, DEFAULT_ROWS
from battlecore.infra.app_data import resolve_project_root


def load_env_file(path: str = ".env", *, override_existing: bool = True) -> None:
    """Load KEY=VALUE pairs from an env file into process environment.

    By default, values from the env file overwrite existing environment variables.
    """
    env_path = _resolve_env_path(path)
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
    """Load env files with optional local overrides.

    Later files win. Default order:
    1) appdata/config/.env.app
    2) appdata/config/.env.app.local
    3) .env
    4) .env.local
    """
    to_load = (
        tuple(paths)
        if paths is not None
        else (
            "appdata/config/.env.app",
            "appdata/config/.env.app.local",
            ".env",
            ".env.local",
        )
    )
    for path in to_load:
        load_env_file(path, override_existing=override_existing)


@dataclass(frozen=True, slots=True)
class BattleSettings:
    """Board size and randomness settings."""

    rows: int = DEFAULT_ROWS
    cols: int = DEFAULT_COLS
    seed: int | None = None

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> BattleSettings:
        """Read ``BATTLE_ROWS``, ``BATTLE_COLS`` and ``BATTLE_SEED``."""
        env = os.environ if environ is None else environ
        rows = _positive_int(env, "BATTLE_ROWS", DEFAULT_ROWS)
        cols = _positive_int(env, "BATTLE_COLS", DEFAULT_COLS)
        raw_seed = env.get("BATTLE_SEED", "").strip()
        seed = _parse_int("BATTLE_SEED", raw_seed) if raw_seed else None
        return cls(rows=rows, cols=cols, seed=seed)


def _positive_int(env: Mapping[str, str], name: str, default: int) -> int:
    raw = env.get(name, "").strip()
    if not raw:
        return default
    value = _parse_int(name, raw)
    if value <= 0:
        raise ValueError(f"{name} must be positive, got {value}.")
    return value


def _parse_int(name: str, raw: str) -> int:
    try:
        return int(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {raw!r}.") from exc


def _resolve_env_path(path: str) -> Path:
    """Resolve env path from cwd, then project root."""
    candidate = Path(path)
    if candidate.exists() or candidate.is_absolute():
        return candidate
    return resolve_project_root() / path

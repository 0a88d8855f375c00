"""Harness defaults from `.env.defaults` with an optional `.env` overlay.

Looked up in BLOG_HARNESS_ENV_DIR when set, otherwise in the repository
root and then the working directory. Environment variables always win;
these values only fill the gaps.
"""
from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import Dict, List

DEFAULTS_FILE = ".env.defaults"
OVERRIDES_FILE = ".env"


def _search_dirs() -> List[Path]:
    env_dir = os.environ.get("BLOG_HARNESS_ENV_DIR")
    if env_dir:
        return [Path(env_dir)]

    repo_root = Path(__file__).resolve().parents[2]
    dirs = [repo_root]
    # cwd may have been deleted under us
    try:
        cwd = Path.cwd().resolve()
    except OSError:
        return dirs
    if cwd != repo_root:
        dirs.append(cwd)
    return dirs


@lru_cache(maxsize=1)
def load_defaults() -> Dict[str, str]:
    """Merged key/value defaults: every `.env.defaults` first, then every `.env`."""
    dirs = _search_dirs()
    merged: Dict[str, str] = {}
    for filename in (DEFAULTS_FILE, OVERRIDES_FILE):
        for directory in dirs:
            path = directory / filename
            if path.is_file():
                merged.update(_parse_env_file(path))
    return merged


def reload_defaults() -> None:
    """Forget the cached files (tests point BLOG_HARNESS_ENV_DIR elsewhere)."""
    load_defaults.cache_clear()


def get_default(key: str, fallback: str | None = None) -> str | None:
    return load_defaults().get(key, fallback)


def _parse_env_file(env_path: Path) -> Dict[str, str]:
    """KEY=VALUE lines; `#` comments, blank lines and an `export ` prefix are allowed."""
    values: Dict[str, str] = {}
    for raw in env_path.read_text(encoding="utf-8").splitlines():
        line = raw.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        if line.startswith("export "):
            line = line[len("export "):]
        key, value = (part.strip() for part in line.split("=", 1))
        if len(value) >= 2 and value[0] in ('"', "'") and value[-1] == value[0]:
            value = value[1:-1]
        values[key] = value
    return values

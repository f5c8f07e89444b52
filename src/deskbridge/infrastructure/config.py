"""Configuration constants and .env parsing."""

from __future__ import annotations

import os
from pathlib import Path


def read_env_file(keys: list[str]) -> dict[str, str]:
    """Parse .env file and return values for requested keys.

    Does NOT load into os.environ — callers decide what to do with values.
    """
    env_file = Path.cwd() / ".env"
    try:
        content = env_file.read_text()
    except OSError:
        return {}

    result: dict[str, str] = {}
    wanted = set(keys)

    for line in content.splitlines():
        trimmed = line.strip()
        if not trimmed or trimmed.startswith("#"):
            continue
        eq_idx = trimmed.find("=")
        if eq_idx == -1:
            continue
        key = trimmed[:eq_idx].strip()
        if key not in wanted:
            continue
        value = trimmed[eq_idx + 1 :].strip()
        if (value.startswith('"') and value.endswith('"')) or (value.startswith("'") and value.endswith("'")):
            value = value[1:-1]
        if value:
            result[key] = value

    return result


def expand_home(p: str) -> str:
    """Expand a leading ~ to the home directory."""
    if p == "~":
        return str(Path.home())
    if p.startswith("~/"):
        return str(Path.home() / p[2:])
    return p


def parse_max_workers(raw: str | None, default: int = 4) -> int:
    """Parse a worker count, falling back to default on junk and clamping to >= 1."""
    if not raw:
        return default
    try:
        return max(1, int(raw))
    except ValueError:
        return default


# Environment wins over .env, .env wins over defaults.
_env_config = read_env_file(["DESKBRIDGE_MAX_WORKERS", "DESKBRIDGE_FS_SCOPE"])

HOME_DIR: Path = Path.home()

MAX_WORKERS: int = parse_max_workers(
    os.environ.get("DESKBRIDGE_MAX_WORKERS") or _env_config.get("DESKBRIDGE_MAX_WORKERS")
)

FS_SCOPE_PATH: Path = Path(
    expand_home(
        os.environ.get("DESKBRIDGE_FS_SCOPE")
        or _env_config.get("DESKBRIDGE_FS_SCOPE", str(HOME_DIR / ".config" / "deskbridge" / "fs-scope.json"))
    )
)

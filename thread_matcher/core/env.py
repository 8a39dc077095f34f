"""Environment and .env configuration for thread-match.

Load order (first wins):
  1. Existing OS environment variables — never overwrite.
  2. .env file at --env-file path (if explicitly provided).
  3. .env file walking up from cwd, stopping at .git (file or dir).

Recognised variables:
  THREAD_MATCH_PALETTE  Path to a palette JSON file (default: builtin set)
  THREAD_MATCH_METHOD   cielab | cie94 | rgb (default: cielab)
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from thread_matcher.core.types import DistanceMethod

logger = logging.getLogger(__name__)

PALETTE_VAR = 'THREAD_MATCH_PALETTE'
METHOD_VAR = 'THREAD_MATCH_METHOD'


@dataclass
class Settings:
    palette_path: str | None = None
    method: DistanceMethod = DistanceMethod.CIE76


def _find_dotenv(start: Path) -> Path | None:
    """Walk up from start, return first .env found, stop at .git boundary."""
    current = start.resolve()
    while True:
        candidate = current / '.env'
        if candidate.is_file():
            return candidate
        # .git can be a dir (normal clone) or file (worktree)
        if (current / '.git').exists():
            return None
        parent = current.parent
        if parent == current:
            return None
        current = parent


def _parse_dotenv(path: Path) -> dict[str, str]:
    """Parse a .env file into a dict. Handles KEY=value and KEY="value"."""
    result: dict[str, str] = {}
    for line in path.read_text(encoding='utf-8').splitlines():
        line = line.strip()
        if not line or line.startswith('#'):
            continue
        if '=' not in line:
            continue
        key, _, raw_value = line.partition('=')
        key = key.strip()
        value = raw_value.strip().strip('"').strip("'")
        if key:
            result[key] = value
    return result


def load_env(env_file: str | None = None) -> Path | None:
    """Load .env into os.environ for keys not already set.

    Returns the path that was loaded, or None if no .env was found/used.
    """
    if env_file:
        path = Path(env_file)
        if not path.is_file():
            return None
    else:
        path = _find_dotenv(Path.cwd())
        if path is None:
            return None

    for key, value in _parse_dotenv(path).items():
        if key not in os.environ:
            os.environ[key] = value

    return path


def load_settings() -> Settings:
    """Resolve Settings from os.environ (call load_env first to include .env)."""
    settings = Settings()
    palette = os.environ.get(PALETTE_VAR, '').strip()
    if palette:
        settings.palette_path = palette

    method = os.environ.get(METHOD_VAR, '').strip().lower()
    if method:
        try:
            settings.method = DistanceMethod(method)
        except ValueError:
            logger.warning('Unknown %s=%r, using %s', METHOD_VAR, method, settings.method.value)
    return settings

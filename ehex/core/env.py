"""Environment configuration for ehex-tool.

Load order (first wins):
  1. Existing OS environment variables — never overwritten.
  2. .env file at --env-file path (if explicitly provided).
  3. .env file walking up from cwd, stopping at .git (file or dir).

Recognised variables:
  EHEX_FORMAT        v2 (default) or v1 — format used by `new`
  EHEX_WIDTH         default canvas width for `new` (20)
  EHEX_HEIGHT        default canvas height for `new` (10)
  EHEX_BRUSH         default brush size for `paint` (1, max 3)
  EHEX_ALLOW_LEGACY  1/true/yes — read v1 files where a v2 file is expected
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from ehex.core.image import BRUSH_SIZES, DEFAULT_HEIGHT, DEFAULT_WIDTH

_TRUE = {'1', 'true', 'yes', 'on'}
_FALSE = {'0', 'false', 'no', 'off', ''}


def _find_dotenv(start: Path) -> Path | None:
    """Walk up from start, return the first .env found; give up at a .git boundary."""
    current = start.resolve()
    while True:
        candidate = current / '.env'
        if candidate.is_file():
            return candidate
        # .git is a dir in a normal clone and a file in a worktree
        if (current / '.git').exists():
            return None
        if current.parent == current:
            return None
        current = current.parent


def _parse_dotenv(path: Path) -> dict[str, str]:
    """Read KEY=value lines. Quotes around the value are dropped, # lines skipped."""
    result: dict[str, str] = {}
    for raw in path.read_text(encoding='utf-8').splitlines():
        line = raw.strip()
        if not line or line.startswith('#') or '=' not in line:
            continue
        key, _, value = line.partition('=')
        key = key.strip()
        if key:
            result[key] = value.strip().strip('"').strip("'")
    return result


def load_env(env_file: str | None = None) -> Path | None:
    """Copy .env entries into os.environ for keys not already set.

    Returns the file that was loaded, or None.
    """
    if env_file:
        path: Path | None = Path(env_file)
        if not path.is_file():
            return None
    else:
        path = _find_dotenv(Path.cwd())
        if path is None:
            return None

    for key, value in _parse_dotenv(path).items():
        os.environ.setdefault(key, value)
    return path


def _int_var(name: str, default: int) -> int:
    raw = os.environ.get(name, '').strip()
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ValueError(f'{name} must be an integer, got {raw!r}') from None
    if value < 1:
        raise ValueError(f'{name} must be at least 1, got {value}')
    return value


def _bool_var(name: str) -> bool:
    raw = os.environ.get(name, '').strip().lower()
    if raw in _TRUE:
        return True
    if raw in _FALSE:
        return False
    raise ValueError(f'{name} must be a boolean (1/0, true/false, yes/no), got {raw!r}')


@dataclass
class EditorConfig:
    """Defaults for new images and painting, taken from the environment."""

    format: str = 'v2'
    width: int = DEFAULT_WIDTH
    height: int = DEFAULT_HEIGHT
    brush: int = 1
    allow_legacy: bool = False

    @classmethod
    def from_env(cls) -> EditorConfig:
        fmt = os.environ.get('EHEX_FORMAT', 'v2').strip().lower() or 'v2'
        if fmt not in ('v1', 'v2'):
            raise ValueError(f'EHEX_FORMAT must be v1 or v2, got {fmt!r}')
        brush = _int_var('EHEX_BRUSH', 1)
        if brush not in BRUSH_SIZES:
            raise ValueError(f'EHEX_BRUSH must be one of {BRUSH_SIZES}, got {brush}')
        return cls(
            format=fmt,
            width=_int_var('EHEX_WIDTH', DEFAULT_WIDTH),
            height=_int_var('EHEX_HEIGHT', DEFAULT_HEIGHT),
            brush=brush,
            allow_legacy=_bool_var('EHEX_ALLOW_LEGACY'),
        )

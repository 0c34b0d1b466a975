"""Environment and settings for palette-lut.

Load order (first wins):
  1. Existing OS environment variables, never overwritten.
  2. .env file at --env-file path (if explicitly provided).
  3. .env file walking up from cwd, stopping at .git (file or dir).

Settings read from the environment:
  PALETTE_LUT_COLORMAP  default colormap name for `colormap` (GRAY)
  PALETTE_LUT_BINS      default number of colormap bins (256)
  PALETTE_LUT_FORMAT    default output format, text or json (text)
"""

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from palette_lut.core.colormap import ColorMaps, resolve_color_map

ENV_PREFIX = 'PALETTE_LUT_'
OUTPUT_FORMATS = ('text', 'json')


@dataclass(frozen=True)
class Settings:
    """Defaults for the command-line interface."""

    colormap: ColorMaps = ColorMaps.GRAY
    bins: int = 256
    output_format: str = 'text'


def _find_dotenv(start: Path) -> Path | None:
    """Walk up from start, return first .env found, stop at .git boundary."""
    current = start.resolve()
    while True:
        candidate = current / '.env'
        if candidate.is_file():
            return candidate
        # .git is a dir in a normal clone, a file in a worktree
        if (current / '.git').exists():
            return None
        parent = current.parent
        if parent == current:
            return None
        current = parent


def _parse_dotenv(path: Path) -> dict[str, str]:
    """Parse a .env file into a dict. Handles KEY=value, KEY="value" and `export KEY=value`."""
    result: dict[str, str] = {}
    for line in path.read_text(encoding='utf-8').splitlines():
        line = line.strip()
        if not line or line.startswith('#') or '=' not in line:
            continue
        key, _, raw_value = line.partition('=')
        key = key.strip()
        if key.startswith('export '):
            key = key[len('export ') :].strip()
        if key:
            result[key] = raw_value.strip().strip('"').strip("'")
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
        os.environ.setdefault(key, value)
    return path


def load_settings(environ: Mapping[str, str] | None = None) -> Settings:
    """Build Settings from PALETTE_LUT_* variables. Invalid values raise ValueError."""
    env = os.environ if environ is None else environ
    defaults = Settings()

    colormap = defaults.colormap
    if env.get(f'{ENV_PREFIX}COLORMAP'):
        colormap = resolve_color_map(env[f'{ENV_PREFIX}COLORMAP'])

    bins = defaults.bins
    if env.get(f'{ENV_PREFIX}BINS'):
        raw = env[f'{ENV_PREFIX}BINS']
        try:
            bins = int(raw)
        except ValueError:
            raise ValueError(f'{ENV_PREFIX}BINS must be an integer, got {raw!r}') from None
        if bins < 1:
            raise ValueError(f'{ENV_PREFIX}BINS must be positive, got {bins}')

    output_format = env.get(f'{ENV_PREFIX}FORMAT', defaults.output_format).lower() or defaults.output_format
    if output_format not in OUTPUT_FORMATS:
        raise ValueError(f'{ENV_PREFIX}FORMAT must be one of {", ".join(OUTPUT_FORMATS)}, got {output_format!r}')

    return Settings(colormap=colormap, bins=bins, output_format=output_format)

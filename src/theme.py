"""Color & style helpers.

Decisions:
- Truecolor preferred; falls back to 256-color cube if unsupported.
- Disables automatically when not a TTY unless FORCE_COLOR=1.
- Honors NO_COLOR for complete disable.
- Accent / edit colors can be overridden via environment or project .env file.
- Row icons get a per-item tint drawn from the 24-step grey ramp.
"""
from __future__ import annotations
import logging
import os, sys
from pathlib import Path

logger = logging.getLogger(__name__)

_FORCE = os.environ.get("FORCE_COLOR", "").lower() in {"1", "true", "yes", "on"}
_NO_COLOR = os.environ.get("NO_COLOR") is not None
_ENABLE = (_FORCE or sys.stdout.isatty()) and not _NO_COLOR
_COLORTERM = os.environ.get("COLORTERM", "").lower()
_USE_TRUECOLOR = _ENABLE and any(tok in _COLORTERM for tok in ("truecolor", "24bit"))

OVERRIDE_KEYS = ('TODO_ACCENT', 'TODO_EDIT')


def _code(part: str) -> str:
    return f"\033[{part}m" if _ENABLE else ''


def _hex_to_rgb(hex_code: str) -> tuple[int, int, int]:
    h = hex_code.lstrip('#')
    return int(h[0:2], 16), int(h[2:4], 16), int(h[4:6], 16)


def _fg_256(r: int, g: int, b: int) -> str:
    """Approximate RGB to xterm 256-color cube."""
    def to_6(x: int) -> int:
        return int(round(x / 255 * 5))
    idx = 16 + 36 * to_6(r) + 6 * to_6(g) + to_6(b)
    return f"\033[38;5;{idx}m"


def _from_hex(hex_code: str) -> str:
    if not _ENABLE:
        return ''
    r, g, b = _hex_to_rgb(hex_code)
    if _USE_TRUECOLOR:
        return f"\033[38;2;{r};{g};{b}m"
    return _fg_256(r, g, b)


def is_hex_color(value: str) -> bool:
    h = value.strip().lstrip('#')
    return len(h) == 6 and all(c in '0123456789abcdefABCDEF' for c in h)


def read_env_file(path: Path) -> dict[str, str]:
    """Collect valid color overrides from a KEY=VALUE file."""
    overrides: dict[str, str] = {}
    if not path.exists():
        return overrides
    try:
        text = path.read_text()
    except OSError as exc:
        logger.warning("could not read %s: %s", path, exc)
        return overrides
    for line in text.splitlines():
        line = line.strip()
        if not line or line.startswith('#') or '=' not in line:
            continue
        k, v = line.split('=', 1)
        k, v = k.strip(), v.strip()
        if k in OVERRIDE_KEYS and is_hex_color(v):
            overrides[k] = '#' + v.lstrip('#')
    return overrides


RESET = _code('0')
BOLD = _code('1')
DIM = _code('2')
REVERSE = _code('7')

HEX_ACCENT_DEFAULT = '#476EAE'
HEX_EDIT_DEFAULT = '#F6FF99'

_ENV_OVERRIDES = read_env_file(Path(__file__).resolve().parent.parent / '.env')

# priority: real env var > .env override > default
HEX_ACCENT = str(os.environ.get('TODO_ACCENT') or _ENV_OVERRIDES.get('TODO_ACCENT', HEX_ACCENT_DEFAULT))
HEX_EDIT = str(os.environ.get('TODO_EDIT') or _ENV_OVERRIDES.get('TODO_EDIT', HEX_EDIT_DEFAULT))

ACCENT = _from_hex(HEX_ACCENT)
HEADER_COLOR = ACCENT + BOLD
ROW_NUMBER_COLOR = ACCENT
EDIT_COLOR = _from_hex(HEX_EDIT)
DISABLED_COLOR = DIM
EMPTY_COLOR = DIM + ACCENT


def tint(alpha: float) -> str:
    """Grey-ramp foreground for an icon alpha in [0, 1] (brighter = more opaque)."""
    if not _ENABLE:
        return ''
    alpha = min(1.0, max(0.0, alpha))
    return f"\033[38;5;{232 + int(round(alpha * 23))}m"


def color(text: str, *styles: str) -> str:
    """Apply ANSI styles to a given text."""
    if not _ENABLE or not any(styles):
        return text
    return ''.join(styles) + text + RESET


__all__ = [
    'color', 'tint', 'RESET', 'BOLD', 'DIM', 'REVERSE', 'HEADER_COLOR', 'ROW_NUMBER_COLOR',
    'EDIT_COLOR', 'DISABLED_COLOR', 'EMPTY_COLOR', 'HEX_ACCENT', 'HEX_EDIT',
    'read_env_file', 'is_hex_color',
]

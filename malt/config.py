from __future__ import annotations
import os
from pathlib import Path
from typing import Iterable, List


def _sep() -> str:
    return ';' if os.name == 'nt' else ':'


# Resolve installation dir (malt package directory)
_MALT_DIR = Path(__file__).resolve().parent

# Defaults
_DEFAULT_PRELUDE_DIR = _MALT_DIR / 'prelude'
_DEFAULT_LOG_LEVEL = 'WARNING'
_DEFAULT_MAX_ERROR_CONTEXT = 8
_DEFAULT_PROMPT = 'user> '


def paths_from_env(var: str, defaults: Iterable[Path]) -> List[Path]:
    raw = os.environ.get(var)
    if not raw:
        return [Path(p) for p in defaults]
    sep = _sep()
    return [Path(p.strip()) for p in raw.split(sep) if p.strip()]


def get_prelude_root() -> Path:
    roots = paths_from_env('MALT_PRELUDE_PATH', [_DEFAULT_PRELUDE_DIR])
    # treat as single directory; if a file path is set, return its parent
    p = roots[0]
    return p if p.is_dir() else p.parent


def get_log_level() -> str:
    return os.environ.get('MALT_LOG_LEVEL', _DEFAULT_LOG_LEVEL).upper()


def get_max_error_context() -> int:
    raw = os.environ.get('MALT_MAX_ERROR_CONTEXT')
    if not raw:
        return _DEFAULT_MAX_ERROR_CONTEXT
    try:
        return max(0, int(raw))
    except ValueError:
        return _DEFAULT_MAX_ERROR_CONTEXT


def get_prompt() -> str:
    return os.environ.get('MALT_PROMPT', _DEFAULT_PROMPT)

"""Optional ``.env`` loading for ``LOG_*`` configuration.

Purpose
-------
Let operators keep pipeline settings in a ``.env`` file next to the project
instead of exporting them in every shell.

Contents
--------
* :data:`DOTENV_ENV_VAR` - toggle consulted when no CLI flag is given.
* :func:`should_use_dotenv` - resolve CLI flag versus environment toggle.
* :func:`enable_dotenv` - locate and load the nearest ``.env`` once.

System Role
-----------
Runs before :meth:`lib_log_async.runtime.LoggingConfig.from_env` reads the
environment. Existing variables always win over ``.env`` entries.
"""

from __future__ import annotations

import threading
from pathlib import Path

from dotenv import find_dotenv, load_dotenv

DOTENV_ENV_VAR = "LIB_LOG_ASYNC_USE_DOTENV"

_TRUTHY = {"1", "true", "yes", "on"}
_LOCK = threading.Lock()
_LOADED: Path | None = None


def should_use_dotenv(*, explicit: bool | None = None, env_value: str | None = None) -> bool:
    """Return whether ``.env`` loading is requested.

    Examples
    --------
    >>> should_use_dotenv(explicit=False, env_value="1")
    False
    >>> should_use_dotenv(explicit=None, env_value="yes")
    True
    """

    if explicit is not None:
        return explicit
    if env_value is None:
        return False
    return env_value.strip().lower() in _TRUTHY


def enable_dotenv(search_from: Path | None = None) -> Path | None:
    """Load the nearest ``.env`` without overriding existing variables.

    Parameters
    ----------
    search_from:
        Directory to start the upward search from; defaults to the current
        working directory.

    Returns
    -------
    Path | None
        Resolved path of the loaded file, or ``None`` when none was found.
    """

    global _LOADED
    with _LOCK:
        if search_from is None:
            found = find_dotenv(usecwd=True)
        else:
            found = _search_upwards(Path(search_from))
        if not found:
            return None
        path = Path(found).resolve()
        if _LOADED != path:
            load_dotenv(path, override=False)
            _LOADED = path
        return path


def _search_upwards(start: Path) -> str:
    for directory in (start, *start.parents):
        candidate = directory / ".env"
        if candidate.is_file():
            return str(candidate)
    return ""


def _reset_dotenv_state_for_testing() -> None:
    """Forget which file was loaded so tests can load again."""

    global _LOADED
    with _LOCK:
        _LOADED = None


__all__ = ["DOTENV_ENV_VAR", "enable_dotenv", "should_use_dotenv"]

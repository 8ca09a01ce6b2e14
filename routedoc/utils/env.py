"""Load deployment defaults from a ``.env`` file before configuration is read."""
from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

from dotenv import find_dotenv, load_dotenv

__all__ = ["ENV_FILE_VAR", "load_env"]

ENV_FILE_VAR = "ROUTEDOC_ENV_FILE"

_loaded_from: Optional[Path] = None
_env_loaded = False


def _resolve(dotenv_path: Optional[str | Path]) -> Optional[Path]:
    if dotenv_path:
        return Path(dotenv_path)
    explicit = os.getenv(ENV_FILE_VAR)
    if explicit:
        return Path(explicit)
    found = find_dotenv(usecwd=True)
    return Path(found) if found else None


def load_env(*, dotenv_path: Optional[str | Path] = None) -> Optional[Path]:
    """Load the first matching ``.env`` once and return its path.

    Lookup: ``dotenv_path``, then ``$ROUTEDOC_ENV_FILE``, then the nearest
    ``.env`` above the working directory. Variables already set in the
    process environment win.
    """

    global _env_loaded, _loaded_from
    if _env_loaded:
        return _loaded_from

    path = _resolve(dotenv_path)
    if path is not None and path.is_file():
        load_dotenv(dotenv_path=path, override=False)
        _loaded_from = path
    _env_loaded = True
    return _loaded_from

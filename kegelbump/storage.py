"""Session configuration persistence.

The user's routine is stored at:
    ~/Library/Application Support/KegelBump/SessionConfiguration.json

Load order: that file, then the bundled default in
``kegelbump/resources``, then ``FALLBACK_CONFIGURATION``.

Usage::

    config = load_configuration()
    save_configuration(config)
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path

from .session.configuration import (
    Configuration,
    FALLBACK_CONFIGURATION,
)

logger = logging.getLogger(__name__)


APP_SUPPORT_DIR = Path.home() / "Library" / "Application Support" / "KegelBump"
CONFIG_PATH = APP_SUPPORT_DIR / "SessionConfiguration.json"
BUNDLED_CONFIG_PATH = Path(__file__).parent / "resources" / "SessionConfiguration.json"


def _read(path: Path) -> Configuration | None:
    if not path.exists():
        return None
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
        return Configuration.from_dict(data)
    except (OSError, ValueError, RecursionError) as exc:
        logger.warning("Ignoring unreadable session configuration %s: %s", path, exc)
        return None


def load_configuration() -> Configuration:
    """Load the routine, falling back to the bundled and built-in defaults."""
    for path in (CONFIG_PATH, BUNDLED_CONFIG_PATH):
        configuration = _read(path)
        if configuration is not None:
            logger.debug("Loaded session configuration from %s", path)
            return configuration
    return FALLBACK_CONFIGURATION


def save_configuration(configuration: Configuration) -> bool:
    """Write the routine as JSON.  Returns False (and logs) on failure."""
    tmp_path = CONFIG_PATH.with_suffix(".json.tmp")
    try:
        APP_SUPPORT_DIR.mkdir(parents=True, exist_ok=True)
        tmp_path.write_text(
            json.dumps(configuration.to_dict(), indent=2) + "\n",
            encoding="utf-8",
        )
        os.replace(tmp_path, CONFIG_PATH)
    except OSError:
        logger.exception("Failed to save session configuration to %s", CONFIG_PATH)
        return False
    return True

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict

from ..errors import ConfigReadError
from ..workspace import Workspace
from .defaults import CONFIG_DIR, CONFIG_FILENAME, DEFAULT_WRITTEN_CONFIG
from .types import Config
from .validate import parse

logger = logging.getLogger(__name__)


def config_path(cwd: Path | str) -> Path:
    """Path to the config document (<cwd>/.changeset/config.json)."""
    return Path(cwd) / CONFIG_DIR / CONFIG_FILENAME


def load_document(path: Path | str) -> Dict[str, Any]:
    """Read and decode the JSON document at ``path``. Shape is checked by ``parse``."""
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError as e:
        raise ConfigReadError(f"config file not found: {path}") from e
    except OSError as e:
        raise ConfigReadError(f"cannot read {path}: {e}") from e
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise ConfigReadError(f"{path} is not valid JSON: {e}") from e


def read(cwd: Path | str, workspace: Workspace, **kwargs: Any) -> Config:
    """Load <cwd>/.changeset/config.json and validate it against ``workspace``."""
    path = config_path(cwd)
    logger.debug("reading config from %s", path)
    return parse(load_document(path), workspace, **kwargs)


def write_default_config(cwd: Path | str) -> Path:
    """Write the default document; refuses to overwrite an existing one."""
    path = config_path(cwd)
    if path.exists():
        raise ConfigReadError(f"config file already exists: {path}")
    path.parent.mkdir(parents=True, exist_ok=True)
    doc = {k: list(v) if isinstance(v, tuple) else v for k, v in DEFAULT_WRITTEN_CONFIG.items()}
    path.write_text(json.dumps(doc, indent=2) + "\n", encoding="utf-8")
    logger.info("wrote default config to %s", path)
    return path

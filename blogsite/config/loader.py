"""Site declaration loader - reads site_config.py / JSON / YAML into a SiteConfig."""

import importlib.util
import json
import logging
from pathlib import Path
from typing import Any, Dict, Union

import yaml
from pydantic import ValidationError

from blogsite.errors import SiteConfigError
from blogsite.models.site import SiteConfig

logger = logging.getLogger(__name__)

PYTHON_SUFFIXES = (".py",)
JSON_SUFFIXES = (".json",)
YAML_SUFFIXES = (".yaml", ".yml")


def load_site_config(path: Union[str, Path]) -> SiteConfig:
    """Load and validate a site declaration.

    Python modules must define ``SITE_METADATA`` and ``PLUGINS``; JSON and YAML
    files use the ``siteMetadata`` and ``plugins`` keys.

    Args:
        path: Path to the declaration file

    Returns:
        Validated, read-only SiteConfig

    Raises:
        SiteConfigError: if the file is missing, unreadable or invalid
    """
    path = Path(path)
    if not path.exists():
        raise SiteConfigError(f"Site config not found: {path}")

    suffix = path.suffix.lower()
    if suffix in PYTHON_SUFFIXES:
        data = _read_python(path)
    elif suffix in JSON_SUFFIXES:
        data = _read_json(path)
    elif suffix in YAML_SUFFIXES:
        data = _read_yaml(path)
    else:
        raise SiteConfigError(f"Unsupported site config format: {path.suffix or path.name}")

    try:
        config = SiteConfig.from_dict(data)
    except ValidationError as e:
        logger.error(f"Invalid site config in {path}: {e}")
        raise SiteConfigError(f"Invalid site config in {path}:\n{e}") from e

    logger.info(
        f"Loaded site config '{config.site_metadata.title}' from {path} "
        f"({len(config.plugins)} plugin(s))"
    )
    return config


def dump_site_config(config: SiteConfig, path: Union[str, Path]) -> Path:
    """Write a SiteConfig as JSON or YAML, chosen by the file suffix."""
    path = Path(path)
    suffix = path.suffix.lower()
    if suffix not in JSON_SUFFIXES + YAML_SUFFIXES:
        raise SiteConfigError(f"Cannot export site config as {path.suffix or path.name}")

    data = config.to_dict()
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        if suffix in JSON_SUFFIXES:
            json.dump(data, f, indent=2, ensure_ascii=False)
            f.write("\n")
        else:
            yaml.safe_dump(data, f, sort_keys=False, allow_unicode=True)

    logger.debug(f"Wrote site config to {path}")
    return path


def _read_python(path: Path) -> Dict[str, Any]:
    spec = importlib.util.spec_from_file_location(f"site_config_{path.stem}", str(path.resolve()))
    if spec is None or spec.loader is None:
        raise SiteConfigError(f"Cannot import site config module: {path}")

    module = importlib.util.module_from_spec(spec)
    try:
        spec.loader.exec_module(module)
    except Exception as e:
        logger.error(f"Error executing {path}: {e}")
        raise SiteConfigError(f"Error executing {path}: {e}") from e

    missing = [name for name in ("SITE_METADATA", "PLUGINS") if not hasattr(module, name)]
    if missing:
        raise SiteConfigError(f"{path} does not define {', '.join(missing)}")

    return {"siteMetadata": module.SITE_METADATA, "plugins": module.PLUGINS}


def _read_json(path: Path) -> Dict[str, Any]:
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (json.JSONDecodeError, UnicodeDecodeError, IOError) as e:
        logger.error(f"Error loading site config {path}: {e}")
        raise SiteConfigError(f"Invalid JSON in {path}: {e}") from e
    return _require_mapping(data, path)


def _read_yaml(path: Path) -> Dict[str, Any]:
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except (yaml.YAMLError, UnicodeDecodeError, IOError) as e:
        logger.error(f"Error loading site config {path}: {e}")
        raise SiteConfigError(f"Invalid YAML in {path}: {e}") from e
    return _require_mapping(data, path)


def _require_mapping(data: Any, path: Path) -> Dict[str, Any]:
    if not isinstance(data, dict):
        raise SiteConfigError(f"{path} must contain a mapping at the top level")
    return data

"""
Patches `package.json` and the first `manifest.json` of a new project.
"""
import json
import os
import re
from pathlib import Path
from typing import Callable, Optional

from .config import logger
from .exit_codes import MaterializationError, TemplateStructureError

PACKAGE_MANIFEST = "package.json"
APP_MANIFEST = "manifest.json"

# Browsers truncate longer short names in launchers.
SHORT_NAME_LIMIT = 12


def normalize_package_name(name):
    """Lower-case ``name`` and collapse whitespace runs to underscores."""
    return re.sub(r"\s+", "_", name.lower())


def read_manifest(path):
    """
    Parse a JSON manifest.

    Raises:
        TemplateStructureError: if the file is not a JSON object.
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (ValueError, OSError) as e:
        raise TemplateStructureError(f"Could not parse {path}: {e}") from e
    if not isinstance(data, dict):
        raise TemplateStructureError(f"Could not parse {path}: expected a JSON object")
    return data


def write_manifest(path, data):
    """Serialize ``data`` with 2-space indentation."""
    try:
        with open(path, "w", encoding="utf-8") as f:
            f.write(json.dumps(data, indent=2, ensure_ascii=False))
            f.write("\n")
    except OSError as e:
        raise MaterializationError(f"Could not write {path}: {e}") from e


def load_package_manifest(target):
    """
    Load ``<target>/package.json``.

    Returns:
        tuple: (path, data); data is None when the file does not exist.
    """
    path = Path(target) / PACKAGE_MANIFEST
    if not path.is_file():
        logger.warning("Could not locate `package.json` file!")
        return path, None
    return path, read_manifest(path)


def patch_package_manifest(target, name, use_yarn, scripts_provider: Callable):
    """
    Fill in default scripts and set the normalized package name.

    The document is returned unsaved so it can be written once every other
    manifest change has been made.

    Returns:
        tuple: (path, data) with data None when there is no package manifest.
    """
    path, data = load_package_manifest(target)
    if data is None:
        return path, None

    if data.get("scripts") is None:
        data["scripts"] = scripts_provider(data, target, use_yarn)

    data["name"] = normalize_package_name(name)
    return path, data


def find_app_manifest(target) -> Optional[Path]:
    """First `manifest.json` below ``target``, or None. Hidden directories are skipped."""
    for root, dirs, files in os.walk(target):
        dirs[:] = sorted(d for d in dirs if not d.startswith("."))
        if APP_MANIFEST in files:
            return Path(root) / APP_MANIFEST
    return None


def patch_app_manifest(target, name) -> Optional[Path]:
    """
    Set `name` and `short_name` of the first app manifest and save it.

    Returns:
        Path: the rewritten manifest, or None if the project has none.
    """
    path = find_app_manifest(target)
    if path is None:
        return None

    data = read_manifest(path)
    data["name"] = data["short_name"] = name
    write_manifest(path, data)

    if len(name) > SHORT_NAME_LIMIT:
        logger.warning(f"Your `short_name` should be fewer than {SHORT_NAME_LIMIT} characters.")
    return path

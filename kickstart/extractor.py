"""
Extracts the `template/` directory of a repository tarball.

Repository tarballs wrap everything in a single top-level folder
(``<repo>-<ref>/``), so stripping two segments from
``<repo>-<ref>/template/src/index.js`` yields ``src/index.js``.
"""
import re
import shutil
import tarfile
from pathlib import Path
from typing import List

from .config import logger
from .exit_codes import MaterializationError, TemplateStructureError

TEMPLATE_MARKER = "/template/"
STRIP_SEGMENTS = 2

MEDIA_RGX = re.compile(r"\.(woff2?|ttf|eot|jpe?g|ico|png|gif|mp4|mov|ogg|webm)(\?.*)?$", re.IGNORECASE)


def is_media(path):
    """True for fonts, images and video, which are never substituted."""
    return bool(MEDIA_RGX.search(str(path)))


def strip_path(member_name, strip=STRIP_SEGMENTS):
    """Drop the first ``strip`` segments; returns a list of remaining parts."""
    parts = [part for part in member_name.split("/") if part and part != "."]
    return parts[strip:]


def _destination(target, parts):
    destination = target.joinpath(*parts).resolve()
    if destination != target and target not in destination.parents:
        raise TemplateStructureError(f"Refusing to extract outside of {target}: {'/'.join(parts)}")
    return destination


def _write_dir(destination):
    try:
        destination.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise MaterializationError(f"Could not create {destination}: {e}") from e


def _write_file(tar, member, destination):
    try:
        destination.parent.mkdir(parents=True, exist_ok=True)
        source = tar.extractfile(member)
        with source, open(destination, "wb") as out:
            shutil.copyfileobj(source, out)
        if member.mode:
            destination.chmod(member.mode & 0o777)
    except OSError as e:
        raise MaterializationError(f"Could not write {destination}: {e}") from e


def extract_template(archive_path, target, strip=STRIP_SEGMENTS) -> List[Path]:
    """
    Extract entries under ``template/`` from ``archive_path`` into ``target``.

    Args:
        archive_path (str or Path): A gzipped tarball.
        target (str or Path): Destination directory; created if missing.
        strip (int): Leading path segments to drop from every entry.

    Returns:
        list: Absolute paths of extracted files eligible for substitution,
        in archive order. Media files and directories are written but not
        returned.
    """
    target = Path(target).resolve()
    target.mkdir(parents=True, exist_ok=True)
    keeps = []

    try:
        tar = tarfile.open(archive_path, "r:*")
    except (tarfile.TarError, OSError) as e:
        raise TemplateStructureError(f"Could not read template archive: {e}") from e

    with tar:
        for member in tar:
            if TEMPLATE_MARKER not in member.name:
                continue

            parts = strip_path(member.name, strip)
            if not parts:
                continue
            destination = _destination(target, parts)

            if member.isdir():
                _write_dir(destination)
            elif member.isfile():
                _write_file(tar, member, destination)
                if not is_media(member.name):
                    keeps.append(destination)
            else:
                logger.debug(f"Skipping non-regular archive entry: {member.name}")

    logger.debug(f"Extracted {len(keeps)} substitutable file(s) into {target}")
    return keeps

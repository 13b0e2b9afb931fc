"""
Rewrites ``{{ key }}`` placeholders in extracted template files.
"""
import os
import re
import tempfile
from pathlib import Path
from typing import Iterable, Mapping, Pattern, Tuple

from .config import logger
from .exit_codes import MaterializationError

# Keys read from the invocation; only defined values produce substitutions.
SUBSTITUTION_KEYS = ("name",)

Substitutions = Tuple[Tuple[Pattern, str], ...]


def token_pattern(key):
    """Compile the matcher for ``{{key}}`` with at most one space inside each brace."""
    return re.compile(r"\{\{\s?" + re.escape(key) + r"\s?\}\}")


def build_substitutions(values: Mapping, keys=SUBSTITUTION_KEYS) -> Substitutions:
    """
    Build the ordered, immutable list of (pattern, replacement) pairs.

    Args:
        values: Mapping holding the invocation fields.
        keys: Field names that may be substituted.
    """
    return tuple(
        (token_pattern(key), str(values[key]))
        for key in keys
        if values.get(key) is not None
    )


def substitute_text(text, substitutions: Substitutions):
    for pattern, replacement in substitutions:
        text = pattern.sub(lambda _match, value=replacement: value, text)
    return text


def _atomic_write(path, text):
    """Replace ``path`` with ``text`` via a sibling temp file and rename."""
    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="") as f:
            f.write(text)
        os.chmod(tmp_name, path.stat().st_mode & 0o777)
        os.replace(tmp_name, path)
    except BaseException:
        if os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise


def substitute_files(paths: Iterable, substitutions: Substitutions):
    """
    Apply ``substitutions`` to every file in ``paths``, one file at a time.

    Files are rewritten only when their content changes. Files that are not
    UTF-8 text are left as they are.

    Raises:
        MaterializationError: if a file cannot be read or replaced.

    Returns:
        int: Number of files rewritten.
    """
    changed = 0
    if not substitutions:
        return changed

    for entry in paths:
        path = Path(entry)
        try:
            with open(path, "r", encoding="utf-8", newline="") as f:
                original = f.read()
        except UnicodeDecodeError:
            logger.debug(f"Skipping non-text file: {path}")
            continue
        except OSError as e:
            raise MaterializationError(f"Could not read {path}: {e}") from e

        updated = substitute_text(original, substitutions)
        if updated != original:
            try:
                _atomic_write(path, updated)
            except OSError as e:
                raise MaterializationError(f"Could not update {path}: {e}") from e
            changed += 1

    return changed

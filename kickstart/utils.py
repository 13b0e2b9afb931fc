"""
Shared utility functions for kickstart.
"""
import os
import shutil
import subprocess
import textwrap
from pathlib import Path

from .config import logger


def run_command(command, cwd=".", capture_output=False, check=True, log_stderr=True, env=None):
    """
    Runs a shell command and logs the output.

    Args:
        command (str): The command to run.
        cwd (str): The working directory.
        capture_output (bool): If True, return stdout.
        check (bool): If True, raise CalledProcessError on non-zero exit codes.
        log_stderr (bool): If False, do not log stderr as an error.
        env (dict, optional): Extra environment variables for the command.

    Returns:
        str: The command's stdout if capture_output is True, otherwise None.
    """
    full_env = None
    if env:
        full_env = os.environ.copy()
        full_env.update(env)

    logger.debug(f"Running command in '{cwd}': {command}")
    result = subprocess.run(
        command,
        shell=True,
        capture_output=True,
        text=True,
        cwd=str(cwd),
        check=False,  # Disable check here to handle output manually
        encoding='utf-8',
        env=full_env
    )

    if result.stdout and result.stdout.strip():
        logger.debug(result.stdout.strip())

    # Log stderr only if the command failed
    if result.returncode != 0:
        if log_stderr and result.stderr and result.stderr.strip():
            logger.error(result.stderr.strip())
        if check:
            raise subprocess.CalledProcessError(
                result.returncode, command, output=result.stdout, stderr=result.stderr
            )

    return result.stdout.strip() if capture_output else None


def has_command(name):
    """Return True if ``name`` is an executable on PATH."""
    return shutil.which(name) is not None


def is_dir(path):
    """Return True if ``path`` exists and is a directory."""
    return Path(path).is_dir()


def trim(text):
    """Dedent a triple-quoted message and strip surrounding blank lines."""
    return textwrap.dedent(text).strip("\n")


def capitalize(text):
    """Upper-case the first character only."""
    return text[:1].upper() + text[1:]

"""
Collaborators invoked around template materialization: interactive prompts,
default npm scripts, dependency installation and git initialization.
"""
import dataclasses
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import click

from .config import logger
from .exit_codes import InstallError, VersionControlError
from .utils import run_command, has_command

DEFAULT_TEMPLATE = "default"
DEFAULT_DEST = "my-project"

DEFAULT_GIT_USER = "kickstart"
DEFAULT_GIT_EMAIL = "kickstart@users.noreply.github.com"


@dataclass
class CreateOptions:
    template: Optional[str] = None
    dest: Optional[str] = None
    cwd: str = "."
    name: Optional[str] = None
    force: bool = False
    yarn: bool = False
    git: bool = False
    install: bool = True
    offline: bool = False

    def is_missing(self):
        return not self.template or not self.dest


def prompt_missing(options: CreateOptions) -> CreateOptions:
    """Ask for the template and destination if either was not given."""
    template = options.template or click.prompt(
        "Template (official name or owner/repo)", default=DEFAULT_TEMPLATE
    )
    dest = options.dest or click.prompt(
        "Directory to create the app in", default=DEFAULT_DEST
    )
    return dataclasses.replace(options, template=template, dest=dest)


def confirm_force(target):
    """Ask before initializing into an existing directory."""
    return click.confirm(
        f"You are using '--force' on {target}. Do you wish to continue?",
        default=False,
    )


def package_runner(use_yarn):
    """Command prefix for running package scripts."""
    return "yarn" if use_yarn else "npm run"


def default_scripts(pkg, target, use_yarn):
    """
    Scripts for a package manifest that defines none.

    Projects laid out with a ``src/`` directory get it passed explicitly to
    the build and watch commands.
    """
    runner = package_runner(use_yarn)
    src = " --src src" if (Path(target) / "src").is_dir() else ""
    return {
        "start": f"if-env NODE_ENV=production && {runner} -s serve || {runner} -s dev",
        "build": f"preact build{src}",
        "serve": f"preact build{src} && preact serve",
        "dev": f"preact watch{src}",
    }


def install_dependencies(target, use_yarn):
    """
    Install the project's dependencies with yarn or npm.

    Raises:
        InstallError: if the package manager exits with an error.
    """
    command = "yarn install" if use_yarn else "npm install"
    try:
        run_command(command, cwd=target)
    except (subprocess.CalledProcessError, OSError) as e:
        raise InstallError(f"Failed to install dependencies with `{command}`: {e}") from e


def _git_config(key, default):
    try:
        value = run_command(f"git config {key}", capture_output=True, log_stderr=False)
    except subprocess.CalledProcessError:
        return default
    return value or default


def init_git(target):
    """
    Create a git repository in ``target`` with an initial commit.

    Returns:
        bool: False when git is not installed.

    Raises:
        VersionControlError: if a git command fails.
    """
    if not has_command("git"):
        logger.warning("Could not locate `git` binary in `$PATH`. Skipping!")
        return False

    logger.info("Initializing git repository")
    try:
        run_command("git init", cwd=target)
        run_command("git add -A", cwd=target)

        user = _git_config("user.name", DEFAULT_GIT_USER)
        email = _git_config("user.email", DEFAULT_GIT_EMAIL)
        run_command(
            'git commit -m "initial commit"',
            cwd=target,
            env={
                "GIT_COMMITTER_NAME": user,
                "GIT_COMMITTER_EMAIL": email,
                "GIT_AUTHOR_NAME": user,
                "GIT_AUTHOR_EMAIL": email,
            },
        )
    except (subprocess.CalledProcessError, OSError) as e:
        raise VersionControlError(f"Failed to initialize git repository: {e}") from e
    return True

"""
Handles the 'create' command: scaffolds a new project from a template
repository.

The pipeline runs strictly in order: validate the name, fetch the archive,
extract `template/`, substitute placeholders, patch the manifests, then
optionally install dependencies and initialize git. Any failure stops the run;
files already written stay on disk.
"""
import sys
from pathlib import Path

import click

from ..config import console, load_config, logger
from ..exit_codes import (
    INTERRUPTED, CommandError, DestinationExistsError, MaterializationError, TemplateStructureError,
    ValidationError
)
from ..extractor import extract_template
from ..fetcher import fetch_archive, parse_template_reference
from ..manifests import patch_app_manifest, patch_package_manifest, write_manifest
from ..naming import validate_package_name
from ..setup_steps import (
    CreateOptions, confirm_force, default_scripts, init_git, install_dependencies,
    package_runner, prompt_missing
)
from ..substitution import build_substitutions, substitute_files
from ..utils import capitalize, has_command, is_dir, trim


def resolve_target(options: CreateOptions):
    cwd = Path(options.cwd).expanduser().resolve()
    return (cwd / options.dest).resolve()


def check_destination(target, force, confirm=confirm_force):
    """
    Refuse an existing destination unless forced and confirmed.

    Raises:
        DestinationExistsError: if the directory may not be used.
    """
    if not is_dir(target):
        return
    if not force:
        raise DestinationExistsError(
            "Refusing to overwrite current directory! "
            "Please specify a different destination or use the `--force` flag"
        )
    if not confirm(target):
        raise DestinationExistsError("Refusing to overwrite current directory!")
    logger.info("Initializing project in the current directory!")


def check_name(name):
    """
    Validate the application name; advisories are logged.

    Raises:
        ValidationError: listing every violated naming rule.
    """
    validation = validate_package_name(name)
    for warning in validation.warnings:
        logger.warning(capitalize(warning))
    if validation.errors:
        lines = [f"Invalid package name: {name}"] + validation.errors
        raise ValidationError("\n  ~ ".join(capitalize(line) for line in lines))


def next_steps(dest, use_yarn):
    """Message printed once the project is ready."""
    pfx = package_runner(use_yarn)
    return trim(f"""
        To get started, cd into the new directory:
          {click.style('cd ' + str(dest), fg='green')}

        To start a development live-reload server:
          {click.style(pfx + ' start', fg='green')}

        To create a production build (in ./build):
          {click.style(pfx + ' build', fg='green')}
    """) + "\n"


def create_project(options: CreateOptions, config, confirm=confirm_force):
    """
    Materialize a template into a new project directory.

    Args:
        options (CreateOptions): Filled-in invocation options.
        config (dict): Effective configuration from ``load_config``.
        confirm (callable): Asks whether an existing directory may be used.

    Returns:
        str: The next-steps message.

    Raises:
        CommandError: on any fatal condition.
    """
    templates_cfg = config["templates"]
    fetch_cfg = config["fetch"]

    target = resolve_target(options)
    use_yarn = options.yarn and has_command("yarn")
    if options.yarn and not use_yarn:
        logger.warning("Could not locate `yarn` binary in `$PATH`. Using npm instead.")

    check_destination(target, options.force, confirm)

    try:
        reference = parse_template_reference(
            options.template,
            default_org=templates_cfg["default_org"],
            default_site=templates_cfg["default_site"],
            default_ref=templates_cfg["default_ref"],
        )
    except ValueError as e:
        raise ValidationError(str(e)) from e

    # Use `--name` value or the destination directory's name
    name = options.name or target.name
    check_name(name)

    archive = fetch_archive(
        reference,
        fetch_cfg["cache_dir"],
        timeout=fetch_cfg["timeout_seconds"],
        offline=options.offline,
    )

    with console.status("Creating project", spinner="dots") as status:
        try:
            target.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise MaterializationError(f"Could not create {target}: {e}") from e
        keeps = extract_template(archive.path, target)
        if not keeps:
            raise TemplateStructureError(f"No `template` directory found within {reference.repo}!")

        substitute_files(keeps, build_substitutions({"name": name}))

        status.update("Parsing `package.json` file")
        pkg_path, pkg_data = patch_package_manifest(target, name, use_yarn, default_scripts)

        status.update("Updating `name` within `manifest.json` file")
        patch_app_manifest(target, name)

        if pkg_data is not None:
            write_manifest(pkg_path, pkg_data)

        if options.install:
            status.update("Installing dependencies")
            install_dependencies(target, use_yarn)

    logger.info("Done!")

    if options.git:
        init_git(target)

    return next_steps(options.dest, use_yarn)


@click.command("create")
@click.argument("template", required=False)
@click.argument("dest", required=False)
@click.option("--cwd", default=".", help="A directory to use instead of $PWD.")
@click.option("--name", help="The application's name.")
@click.option("--force", is_flag=True, default=False,
              help="Force option to create the directory for the new app.")
@click.option("--yarn/--no-yarn", default=None, help="Use 'yarn' instead of 'npm'.")
@click.option("--git/--no-git", default=None, help="Initialize version control using git.")
@click.option("--install/--no-install", default=None, help="Install dependencies.")
@click.option("--offline", is_flag=True, help="Use a cached template archive only.")
def create_handler(template, dest, cwd, name, force, yarn, git, install, offline):
    """Create a new application from TEMPLATE in DEST."""
    config = load_config()
    defaults = config["create"]

    options = CreateOptions(
        template=template,
        dest=dest,
        cwd=cwd,
        name=name,
        force=force,
        yarn=defaults["use_yarn"] if yarn is None else yarn,
        git=defaults["init_git"] if git is None else git,
        install=defaults["install"] if install is None else install,
        offline=offline,
    )

    if options.is_missing():
        logger.warning("Insufficient command arguments! Prompting...")
        logger.info("Alternatively, run `kickstart create --help` for usage info.")
        options = prompt_missing(options)

    try:
        message = create_project(options, config)
    except CommandError as e:
        logger.error(str(e))
        sys.exit(e.exit_code)
    except KeyboardInterrupt:
        logger.error("Interrupted by user")
        sys.exit(INTERRUPTED)

    click.echo(message)

"""
Handles the 'list' command: shows the official templates.
"""
import json
import sys

import click
import requests
from rich.table import Table

from ..config import console, load_config, logger

GITHUB_API = "https://api.github.com"


def fetch_templates(org, timeout=30):
    """
    Return ``[{"name", "description"}]`` for the public repos of ``org``.

    Returns None when the GitHub API cannot be reached.
    """
    url = f"{GITHUB_API}/users/{org}/repos"
    try:
        response = requests.get(url, params={"per_page": 100}, timeout=timeout)
        response.raise_for_status()
        repos = response.json()
    except (requests.RequestException, ValueError) as e:
        logger.debug(f"Error listing templates of {org}: {e}")
        return None

    return [
        {"name": repo["name"], "description": repo.get("description") or ""}
        for repo in repos
        if not repo.get("archived")
    ]


@click.command("list")
@click.option("--json", "as_json", is_flag=True, help="Output in JSON format.")
def list_handler(as_json):
    """List the official templates."""
    config = load_config()
    org = config["templates"]["default_org"]
    templates = fetch_templates(org, timeout=config["fetch"]["timeout_seconds"])

    if templates is None:
        logger.error(f"Could not fetch the templates of {org}.")
        sys.exit(1)

    if as_json:
        click.echo(json.dumps(templates, indent=2, ensure_ascii=False))
        return

    table = Table(title=f"Available templates ({org})")
    table.add_column("Name", style="cyan")
    table.add_column("Description", style="magenta")
    for template in templates:
        table.add_row(template["name"], template["description"])
    console.print(table)

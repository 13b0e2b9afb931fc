"""
Resolves template shorthands and downloads repository tarballs.

Archives are cached under the configured cache directory so a later run can
fall back to them when the network is unavailable.
"""
import os
import re
import tempfile
from dataclasses import dataclass
from pathlib import Path

import requests

from .config import logger
from .exit_codes import FetchError, RepositoryNotFoundError

SITES = ("github", "gitlab", "bitbucket")
CHUNK_SIZE = 8192

SHORTHAND_RGX = re.compile(r"^(?:(" + "|".join(SITES) + r"):)?([^#]+?)(?:#(.+))?$")
URL_RGX = re.compile(
    r"^(?:https?://|git@)(?:www\.)?(" + "|".join(SITES) + r")\.(?:com|org)[:/]"
    r"([^/]+/[^/#]+?)(?:\.git)?/?(?:#(.+))?$"
)


@dataclass(frozen=True)
class TemplateReference:
    site: str
    owner: str
    name: str
    ref: str

    @property
    def repo(self):
        return f"{self.owner}/{self.name}"

    @property
    def archive_url(self):
        if self.site == "gitlab":
            return f"https://gitlab.com/{self.repo}/repository/archive.tar.gz?ref={self.ref}"
        if self.site == "bitbucket":
            return f"https://bitbucket.org/{self.repo}/get/{self.ref}.tar.gz"
        return f"https://codeload.github.com/{self.repo}/tar.gz/{self.ref}"

    def cache_path(self, cache_dir):
        return Path(os.path.expanduser(str(cache_dir))) / self.site / self.owner / self.name / f"{self.ref}.tar.gz"

    def __str__(self):
        return self.repo


@dataclass(frozen=True)
class ArchiveHandle:
    path: Path
    reference: TemplateReference
    from_cache: bool = False


def parse_template_reference(shorthand, default_org, default_site="github", default_ref="master"):
    """
    Parse ``[site:]owner/name[#ref]`` (or a repository URL).

    A shorthand without an owner is assumed to live in ``default_org``.

    Raises:
        ValueError: if the shorthand is empty or malformed.
    """
    shorthand = (shorthand or "").strip()
    if not shorthand:
        raise ValueError("Template reference cannot be empty")

    match = URL_RGX.match(shorthand) or SHORTHAND_RGX.match(shorthand)
    if not match:
        raise ValueError(f"Malformed template reference: {shorthand}")

    site, repo, ref = match.groups()
    if "/" not in repo:
        repo = f"{default_org}/{repo}"
        logger.info(f"Assuming you meant {repo}...")

    owner, _, name = repo.partition("/")
    if not owner or not name or "/" in name:
        raise ValueError(f"Malformed template reference: {shorthand}")

    return TemplateReference(
        site=site or default_site,
        owner=owner,
        name=name,
        ref=ref or default_ref,
    )


def _download(url, destination, timeout):
    """Stream ``url`` into ``destination``; returns the HTTP status code."""
    destination.parent.mkdir(parents=True, exist_ok=True)
    with requests.get(url, stream=True, timeout=timeout, allow_redirects=True) as response:
        if response.status_code == 404:
            return 404
        response.raise_for_status()
        fd, tmp_name = tempfile.mkstemp(dir=destination.parent, suffix=".part")
        try:
            with os.fdopen(fd, "wb") as f:
                for chunk in response.iter_content(chunk_size=CHUNK_SIZE):
                    if chunk:
                        f.write(chunk)
            os.replace(tmp_name, destination)
        except BaseException:
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise
        return response.status_code


def fetch_archive(reference: TemplateReference, cache_dir, timeout=30, offline=False) -> ArchiveHandle:
    """
    Download the tarball for ``reference`` into the cache.

    Args:
        reference (TemplateReference): The resolved template.
        cache_dir (str): Root of the archive cache.
        timeout (int): Network timeout in seconds.
        offline (bool): Only use a previously cached archive.

    Returns:
        ArchiveHandle: Local archive ready for extraction.

    Raises:
        RepositoryNotFoundError: The site answered 404.
        FetchError: Any other failure with no cached archive to fall back to.
    """
    cached = reference.cache_path(cache_dir)

    if offline:
        if cached.is_file():
            logger.debug(f"Using cached archive {cached}")
            return ArchiveHandle(cached, reference, from_cache=True)
        raise FetchError(f"No cached archive for {reference.repo}#{reference.ref}")

    logger.debug(f"Downloading {reference.archive_url}")
    try:
        status = _download(reference.archive_url, cached, timeout)
    except (requests.RequestException, OSError) as e:
        if cached.is_file():
            logger.warning(f"Could not download {reference.repo} ({e}); using cached copy.")
            return ArchiveHandle(cached, reference, from_cache=True)
        raise FetchError(str(e) or "An error occurred while fetching template.") from e

    if status == 404:
        raise RepositoryNotFoundError(f"Could not find repository: {reference.repo}")

    return ArchiveHandle(cached, reference)

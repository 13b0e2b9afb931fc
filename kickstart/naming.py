"""
Package name validation following the npm registry naming rules.

Errors make a name unusable; warnings only affect names of new packages
and are reported as advisories.
"""
import re
from dataclasses import dataclass, field
from typing import List
from urllib.parse import quote

MAX_LENGTH = 214
BLACKLIST = ("node_modules", "favicon.ico")
SCOPED_RGX = re.compile(r"^(?:@([^/]+?)[/])?([^/]+?)$")
SPECIAL_CHARS_RGX = re.compile(r"[~'!()*]")

# Node.js core modules; a package may not shadow one of these.
BUILTIN_MODULES = frozenset([
    "assert", "async_hooks", "buffer", "child_process", "cluster", "console",
    "constants", "crypto", "dgram", "dns", "domain", "events", "fs", "http",
    "http2", "https", "inspector", "module", "net", "os", "path", "perf_hooks",
    "process", "punycode", "querystring", "readline", "repl", "stream",
    "string_decoder", "sys", "timers", "tls", "trace_events", "tty", "url",
    "util", "v8", "vm", "wasi", "worker_threads", "zlib",
])


@dataclass
class NameValidation:
    name: str
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    @property
    def valid_for_old_packages(self):
        return not self.errors

    @property
    def valid_for_new_packages(self):
        return not self.errors and not self.warnings


def _url_safe(text):
    # Same set that encodeURIComponent leaves untouched.
    return quote(text, safe="!~*'()") == text


def validate_package_name(name) -> NameValidation:
    """
    Check ``name`` against the npm package naming rules.

    Returns:
        NameValidation: collected errors and warnings, both possibly empty.
    """
    if name is None:
        return NameValidation(name, errors=["name cannot be null"])
    if not isinstance(name, str):
        return NameValidation(str(name), errors=["name must be a string"])

    result = NameValidation(name)
    errors, warnings = result.errors, result.warnings

    if not name:
        errors.append("name length must be greater than zero")
    if name.startswith("."):
        errors.append("name cannot start with a period")
    if name.startswith("_"):
        errors.append("name cannot start with an underscore")
    if name.strip() != name:
        errors.append("name cannot contain leading or trailing spaces")

    for blacklisted in BLACKLIST:
        if name.lower() == blacklisted:
            errors.append(f"{blacklisted} is a blacklisted name")

    if name.lower() in BUILTIN_MODULES:
        warnings.append(f"{name} is a core module name")
    if len(name) > MAX_LENGTH:
        warnings.append(f"name can no longer contain more than {MAX_LENGTH} characters")
    if name.lower() != name:
        warnings.append("name can no longer contain capital letters")
    if SPECIAL_CHARS_RGX.search(name.split("/")[-1]):
        warnings.append('name can no longer contain special characters ("~\'!()*")')

    if not _url_safe(name):
        match = SCOPED_RGX.match(name)
        if match:
            scope, package = match.groups()
            if _url_safe(package) and (scope is None or _url_safe(scope)):
                return result
        errors.append("name can only contain URL-friendly characters")

    return result

import re
from dataclasses import dataclass
from typing import Any, Dict, Optional

from .config import DEFAULT_RECURSE, DEFAULT_REDIRECT, DEFAULT_VCS, Config, Entry
from .errors import ConfigError

PLACEHOLDER_PATTERN = re.compile(r"[*$]")


@dataclass(frozen=True)
class ResolvedEntry:
    """An import with all defaults applied and all placeholders substituted."""

    key: str
    import_path: str
    repo: str
    vcs: str
    redirect: str
    recurse: bool


def import_path_for(root: Optional[str], key: str) -> str:
    if root:
        return root.rstrip("/") + "/" + key
    return key


def last_segment(key: str) -> str:
    """Return the part of key after its final '/', or the whole key."""
    trimmed = key.rstrip("/")
    if not trimmed:
        return key
    return trimmed.rsplit("/", 1)[-1]


def substitute(template: str, import_path: str, segment: str) -> str:
    """
    Replace '*' with the full import path and '$' with the last path segment.

    Substitution is a single left-to-right pass: text inserted for one
    placeholder is never scanned for further placeholders.
    """
    values = {"*": import_path, "$": segment}
    return PLACEHOLDER_PATTERN.sub(lambda m: values[m.group(0)], template)


def _pick(value: Any, inherited: Any, builtin: Any) -> Any:
    if value is not None:
        return value
    if inherited is not None:
        return inherited
    return builtin


def resolve_entry(key: str, entry: Entry, default: Entry) -> ResolvedEntry:
    """
    Merge entry with default field by field and substitute placeholders.

    Raises ConfigError naming the key if no non-empty repo is available.
    """
    root = _pick(entry.root, default.root, None)
    repo = _pick(entry.repo, default.repo, None)
    vcs = _pick(entry.vcs, default.vcs, DEFAULT_VCS)
    redirect = _pick(entry.redirect, default.redirect, DEFAULT_REDIRECT)
    recurse = _pick(entry.recurse, default.recurse, DEFAULT_RECURSE)

    if not repo:
        raise ConfigError(f"{key!r}: repo is not set")

    import_path = import_path_for(root, key)
    segment = last_segment(key)

    return ResolvedEntry(
        key=key,
        import_path=import_path,
        repo=substitute(repo, import_path, segment),
        vcs=vcs,
        redirect=substitute(redirect, import_path, segment),
        recurse=recurse,
    )


def resolve_entries(config: Config) -> Dict[str, ResolvedEntry]:
    """Resolve every import of config into a new mapping, ordered by import key."""
    return {key: resolve_entry(key, config.imports[key], config.default) for key in sorted(config.imports)}

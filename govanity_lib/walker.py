import dataclasses
import os
import re
import sys
from typing import Iterator, List, Optional, Sequence

from .errors import FilesystemError
from .resolver import ResolvedEntry

SKIP_DIR_NAME = "vendor"

# The import comment must sit on the same line as the package clause:
#   package foo // import "example.com/foo"
#   package foo /* import "example.com/foo" */
PACKAGE_CLAUSE_PATTERN = re.compile(r"package[ \t]+[A-Za-z_]\w*[ \t]*([^\n]*)")
IMPORT_COMMENT_PATTERN = re.compile(
    r'^(?://[ \t]*import[ \t]+(?P<line>"[^"]*"|`[^`]*`)[ \t]*$'
    r'|/\*[ \t]*import[ \t]+(?P<block>"[^"]*"|`[^`]*`)[ \t]*\*/)'
)


def source_roots(gopath: Optional[str] = None) -> List[str]:
    """Return the source roots listed in GOPATH, or ~/go when it is unset."""
    if gopath is None:
        gopath = os.environ.get("GOPATH", "")
    roots = [p for p in gopath.split(os.pathsep) if p]
    if not roots:
        roots = [os.path.join(os.path.expanduser("~"), "go")]
    return roots


def locate_source_dir(import_path: str, roots: Sequence[str]) -> str:
    """Return <root>/src/<import_path> for the first root holding it, else for the first root."""
    candidates = [os.path.join(root, "src", *import_path.split("/")) for root in roots]
    for candidate in candidates:
        if os.path.isdir(candidate):
            return candidate
    return candidates[0]


def _skip_leading_comments(source: str) -> str:
    """Drop whitespace and comments that precede the package clause."""
    rest = source
    while True:
        rest = rest.lstrip()
        if rest.startswith("//"):
            end = rest.find("\n")
            rest = "" if end < 0 else rest[end + 1 :]
        elif rest.startswith("/*"):
            end = rest.find("*/", 2)
            if end < 0:
                return ""
            rest = rest[end + 2 :]
        else:
            return rest


def _find_import_comment(source: str) -> Optional[str]:
    clause = PACKAGE_CLAUSE_PATTERN.match(_skip_leading_comments(source))
    if not clause:
        return None
    m = IMPORT_COMMENT_PATTERN.match(clause.group(1).rstrip())
    if not m:
        return None
    quoted = m.group("line") or m.group("block")
    return quoted[1:-1]


def read_import_comment(directory: str, filenames: Optional[Sequence[str]] = None) -> Optional[str]:
    """
    Return the canonical import path declared by the Go sources in directory.

    Go files are read in lexical order, skipping names that start with '_' or '.';
    the first file carrying an import comment wins. Returns None when no file
    declares one.
    """
    if filenames is None:
        try:
            filenames = os.listdir(directory)
        except OSError as e:
            raise FilesystemError(f"cannot list {directory}: {e.strerror or e}") from e
    for name in sorted(filenames):
        if not name.endswith(".go") or name.startswith(("_", ".")):
            continue
        path = os.path.join(directory, name)
        try:
            with open(path, "r", encoding="utf-8", errors="replace") as f:
                source = f.read()
        except OSError as e:
            raise FilesystemError(f"cannot read {path}: {e.strerror or e}") from e
        declared = _find_import_comment(source)
        if declared:
            return declared
    return None


def derive_entry(parent: ResolvedEntry, import_path: str) -> ResolvedEntry:
    """Copy parent for a nested package, extending a non-empty redirect by the sub-path."""
    redirect = parent.redirect
    if redirect:
        if import_path.startswith(parent.import_path):
            redirect += import_path[len(parent.import_path):]
        else:
            print(
                f"govanity: warning: {import_path} is not below {parent.import_path}; "
                f"keeping redirect {redirect}",
                file=sys.stderr,
            )
    return dataclasses.replace(parent, import_path=import_path, redirect=redirect, recurse=False)


def discover_entries(parent: ResolvedEntry, gopath: Optional[str] = None) -> Iterator[ResolvedEntry]:
    """
    Walk the source tree of parent's import path and yield one derived entry per
    nested package that declares its own import comment.

    The tree root itself is not inspected and directories named 'vendor' are not
    descended into. Any error while walking raises FilesystemError.
    """
    base = locate_source_dir(parent.import_path, source_roots(gopath))

    def _fail(err: OSError) -> None:
        raise FilesystemError(f"walking {err.filename or base}: {err.strerror or err}") from err

    for dirpath, dirnames, filenames in os.walk(base, onerror=_fail):
        dirnames[:] = sorted(d for d in dirnames if d != SKIP_DIR_NAME)
        if dirpath == base:
            continue
        declared = read_import_comment(dirpath, filenames)
        if declared and declared != parent.import_path:
            yield derive_entry(parent, declared)

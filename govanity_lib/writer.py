import os
from typing import Optional

from .errors import FilesystemError
from .render import render_page
from .resolver import ResolvedEntry

INDEX_NAME = "index.html"

CREATED = "created"
UPDATED = "updated"
UNCHANGED = "unchanged"


def output_path(import_path: str, outdir: str = ".") -> str:
    """Return <outdir>/<import path without its domain segment>/index.html."""
    rest = import_path.split("/", 1)[-1]
    directory = os.path.normpath(os.path.join(outdir, *rest.split("/")))
    return os.path.join(directory, INDEX_NAME)


def _read_existing(path: str) -> Optional[bytes]:
    try:
        with open(path, "rb") as f:
            return f.read()
    except FileNotFoundError:
        return None
    except OSError as e:
        raise FilesystemError(f"cannot read {path}: {e.strerror or e}") from e


def write_page(entry: ResolvedEntry, outdir: str = ".", verbose: bool = False) -> str:
    """
    Render entry and write it below outdir, leaving identical files untouched.

    Returns one of CREATED, UPDATED or UNCHANGED. With verbose set, a
    "creating <file>" or "updating <file>" line is printed before writing.
    """
    data = render_page(entry.import_path, entry.repo, entry.vcs, entry.redirect).encode("utf-8")
    path = output_path(entry.import_path, outdir)
    try:
        os.makedirs(os.path.dirname(path), exist_ok=True)
    except OSError as e:
        raise FilesystemError(f"cannot create {os.path.dirname(path)}: {e.strerror or e}") from e

    old = _read_existing(path)
    if old == data:
        return UNCHANGED
    action = CREATED if old is None else UPDATED

    if verbose:
        print(f"{'creating' if action == CREATED else 'updating'} {path}")
    try:
        with open(path, "wb") as f:
            f.write(data)
    except OSError as e:
        raise FilesystemError(f"cannot write {path}: {e.strerror or e}") from e
    return action

from typing import List, Optional, Tuple

from .config import Config, load_config
from .resolver import ResolvedEntry, resolve_entries
from .walker import discover_entries
from .writer import output_path, write_page


def _write(entry: ResolvedEntry, outdir: str, verbose: bool) -> Tuple[str, str]:
    return output_path(entry.import_path, outdir), write_page(entry, outdir, verbose)


def generate(
    config: Config,
    output_dir: str = ".",
    verbose: bool = False,
    gopath: Optional[str] = None,
) -> List[Tuple[str, str]]:
    """
    Write the page for every import of config, plus one page for every nested
    package found under imports that have recursion enabled.

    All imports are resolved before anything is written, so a configuration
    error leaves output_dir untouched. Returns (file path, action) pairs in
    the order they were processed.
    """
    resolved = resolve_entries(config)

    results: List[Tuple[str, str]] = []
    for entry in resolved.values():
        results.append(_write(entry, output_dir, verbose))
        if not entry.recurse:
            continue
        for derived in discover_entries(entry, gopath):
            results.append(_write(derived, output_dir, verbose))
    return results


def generate_from_config(
    config_path: str,
    output_dir: str = ".",
    verbose: bool = False,
    gopath: Optional[str] = None,
) -> List[Tuple[str, str]]:
    """Load the configuration at config_path and generate its pages under output_dir."""
    return generate(load_config(config_path), output_dir, verbose, gopath)

"""
govanity_lib: generate static HTML pages that serve vanity import paths for Go packages.

Each page carries a go-import meta tag mapping an import path on a custom domain to
a VCS repository, plus an optional refresh tag redirecting browsers to documentation.

Configuration layout (git-config style, or the same keys in YAML):

    [default]
        root = <root domain>
        repo = <url to repository>
        vcs = <vcs>                     # default: git
        redirect = <url redirection>    # default: https://godoc.org/*
        dirs = true | false             # default: true

    [import "path"]
        root = ...
        repo = ...

Unset import fields are taken from the default section. In repo and redirect,
'*' is replaced by the full import path and '$' by its last element. An empty
redirect disables the refresh tag. With dirs enabled, the import's directory
under GOPATH is walked and every nested package carrying an import comment gets
a page of its own.

Public API:
- load_config(path: str) -> Config
- resolve_entries(config: Config) -> dict[str, ResolvedEntry]
- generate(config: Config, output_dir: str = ".", verbose: bool = False) -> list[tuple[str, str]]
- generate_from_config(config_path: str, output_dir: str = ".", verbose: bool = False) -> list[tuple[str, str]]
"""
from .config import Config, Entry, load_config
from .errors import ConfigError, FilesystemError, GovanityError
from .generator import generate, generate_from_config
from .resolver import ResolvedEntry, resolve_entries

__all__ = [
    "Config",
    "ConfigError",
    "Entry",
    "FilesystemError",
    "GovanityError",
    "ResolvedEntry",
    "generate",
    "generate_from_config",
    "load_config",
    "resolve_entries",
]

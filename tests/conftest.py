"""Pytest configuration and fixtures."""

from pathlib import Path
from typing import Callable

import pytest

RTRN_CFG = """\
[default]
\troot = rtrn.io
\trepo = https://github.com/rtrn/$

[import "cmd/govanity"]
[import "cmd/uuenc"]
"""


@pytest.fixture
def write_config(tmp_path: Path) -> Callable[..., str]:
    """Write a configuration file into tmp_path and return its path."""

    def _write(text: str, name: str = "govanity.cfg") -> str:
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return str(path)

    return _write


@pytest.fixture
def rtrn_config(write_config: Callable[..., str], tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> str:
    """The rtrn.io example config, with GOPATH pointing at an empty tree that holds both imports."""
    gopath = tmp_path / "gopath"
    for key in ("cmd/govanity", "cmd/uuenc"):
        (gopath / "src" / "rtrn.io" / key).mkdir(parents=True)
    monkeypatch.setenv("GOPATH", str(gopath))
    return write_config(RTRN_CFG)


@pytest.fixture
def gopath(tmp_path: Path) -> Path:
    """A GOPATH with example.com/lib holding nested packages, a vendor tree and a plain directory."""
    root = tmp_path / "gopath"
    lib = root / "src" / "example.com" / "lib"

    files = {
        "lib.go": 'package lib // import "example.com/lib"\n',
        "sub/sub.go": 'package sub // import "example.com/lib/sub"\n',
        "sub/deep/deep.go": '// Package deep.\npackage deep /* import "example.com/lib/sub/deep" */\n',
        "plain/plain.go": "package plain\n",
        "vendor/other/other.go": 'package other // import "other.org/other"\n',
        "sub/vendor/x/x.go": 'package x // import "x.org/x"\n',
        "docs/README.md": "nothing here\n",
    }
    for rel, text in files.items():
        path = lib / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
    return root


@pytest.fixture
def rtrn_cfg_text() -> str:
    return RTRN_CFG

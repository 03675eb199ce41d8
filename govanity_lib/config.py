import dataclasses
import os
import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Tuple

import yaml

from .errors import ConfigError

DEFAULT_VCS = "git"
DEFAULT_REDIRECT = "https://godoc.org/*"
DEFAULT_RECURSE = True

# `[import "cmd/govanity"]` -> ("import", "cmd/govanity")
SECTION_PATTERN = re.compile(r'^\s*([A-Za-z][A-Za-z0-9_\-]*)\s*(?:"((?:[^"\\]|\\.)*)")?\s*$')
ESCAPE_PATTERN = re.compile(r"\\(.)")
SECTION_LINE_PATTERN = re.compile(r"^\[(?P<header>[^\]]*)\]\s*(?:[#;].*)?$")
VARIABLE_PATTERN = re.compile(r"^(?P<name>[A-Za-z][A-Za-z0-9\-]*)\s*(?:=(?P<value>.*))?$")

_ESCAPES = {"n": "\n", "t": "\t", "b": "\b", '"': '"', "\\": "\\"}
_TRUE_VALUES = ("true", "yes", "on", "1")
_FALSE_VALUES = ("false", "no", "off", "0")
_STRING_FIELDS = ("root", "repo", "vcs", "redirect")
_BOOL_FIELDS = ("dirs", "recurse")


@dataclass(frozen=True)
class Entry:
    """One import section. A field left as None is inherited from the default section.

    None and "" are different: an unset redirect falls back to the default,
    an empty redirect disables the refresh tag.
    """

    root: Optional[str] = None
    repo: Optional[str] = None
    vcs: Optional[str] = None
    redirect: Optional[str] = None
    recurse: Optional[bool] = None


@dataclass(frozen=True)
class Config:
    default: Entry = field(default_factory=Entry)
    imports: Mapping[str, Entry] = field(default_factory=dict)


def _with_builtin_defaults(entry: Entry) -> Entry:
    return dataclasses.replace(
        entry,
        vcs=DEFAULT_VCS if entry.vcs is None else entry.vcs,
        redirect=DEFAULT_REDIRECT if entry.redirect is None else entry.redirect,
        recurse=DEFAULT_RECURSE if entry.recurse is None else entry.recurse,
    )


def _parse_bool(value: Any, where: str) -> bool:
    if isinstance(value, bool):
        return value
    s = str(value).strip().lower()
    if s in _TRUE_VALUES:
        return True
    if s in _FALSE_VALUES:
        return False
    raise ConfigError(f"{where}: invalid boolean value {value!r}")


def _entry_from_mapping(values: Mapping[str, Any], where: str) -> Entry:
    """Build an Entry from raw name -> value pairs, validating the names."""
    fields: Dict[str, Any] = {}
    for raw_name, raw_value in values.items():
        name = str(raw_name).strip().lower()
        if name in _BOOL_FIELDS:
            # A bare boolean variable (no value) means true.
            fields["recurse"] = True if raw_value is None else _parse_bool(raw_value, f"{where}.{name}")
        elif name in _STRING_FIELDS:
            if raw_value is None:
                continue
            fields[name] = str(raw_value)
        else:
            raise ConfigError(f"{where}: unknown variable {raw_name!r}")
    return Entry(**fields)


def _merge(base: Entry, override: Entry) -> Entry:
    changes = {
        f.name: getattr(override, f.name)
        for f in dataclasses.fields(Entry)
        if getattr(override, f.name) is not None
    }
    return dataclasses.replace(base, **changes)


def _parse_section_name(header: str) -> Tuple[str, Optional[str]]:
    m = SECTION_PATTERN.match(header)
    if not m:
        raise ConfigError(f"invalid section header [{header}]")
    name, sub = m.group(1).lower(), m.group(2)
    if sub is not None:
        sub = ESCAPE_PATTERN.sub(lambda e: e.group(1), sub)
    return name, sub


def _parse_value(raw: str, where: str) -> str:
    """
    Decode a git-config style value: double quotes group text, backslash escapes
    are expanded, and an unquoted '#' or ';' starts a comment. Unquoted
    whitespace at either end is dropped.
    """
    chars: List[str] = []
    protected = 0
    quoted = False
    text = raw.lstrip()
    i = 0
    while i < len(text):
        ch = text[i]
        if ch == "\\":
            if i + 1 >= len(text) or text[i + 1] not in _ESCAPES:
                raise ConfigError(f"{where}: invalid escape in value {raw.strip()!r}")
            chars.append(_ESCAPES[text[i + 1]])
            protected = len(chars)
            i += 2
            continue
        if ch == '"':
            quoted = not quoted
            protected = len(chars)
        elif not quoted and ch in "#;":
            break
        else:
            chars.append(ch)
            if quoted:
                protected = len(chars)
        i += 1
    if quoted:
        raise ConfigError(f"{where}: unterminated quote in value {raw.strip()!r}")
    return "".join(chars[:protected]) + "".join(chars[protected:]).rstrip()


def _read_cfg_sections(text: str, path: str) -> List[Tuple[str, Dict[str, Optional[str]]]]:
    """Split git-config text into (section header, variables) pairs, one line per variable."""
    sections: List[Tuple[str, Dict[str, Optional[str]]]] = []
    for lineno, line in enumerate(text.splitlines(), 1):
        where = f"{path}:{lineno}"
        s = line.strip()
        if not s or s.startswith(("#", ";")):
            continue
        m = SECTION_LINE_PATTERN.match(s)
        if m:
            sections.append((m.group("header"), {}))
            continue
        m = VARIABLE_PATTERN.match(s)
        if not m:
            raise ConfigError(f"{where}: cannot parse line {s!r}")
        if not sections:
            raise ConfigError(f"{where}: variable {m.group('name')!r} outside of a section")
        value = m.group("value")
        sections[-1][1][m.group("name").lower()] = None if value is None else _parse_value(value, where)
    return sections


def _load_cfg(path: str) -> Tuple[Entry, Dict[str, Entry]]:
    try:
        with open(path, "r", encoding="utf-8") as f:
            text = f.read()
    except OSError as e:
        raise ConfigError(f"cannot read {path}: {e.strerror or e}") from e
    except UnicodeDecodeError as e:
        raise ConfigError(f"{path}: {e}") from e

    default = Entry()
    imports: Dict[str, Entry] = {}
    for header, raw in _read_cfg_sections(text, path):
        name, sub = _parse_section_name(header)
        if name == "default" and sub is None:
            default = _merge(default, _entry_from_mapping(raw, "default"))
        elif name == "import" and sub is not None:
            imports[sub] = _merge(imports.get(sub, Entry()), _entry_from_mapping(raw, f"import {sub!r}"))
        else:
            raise ConfigError(f"{path}: unexpected section [{header}]")
    return default, imports


def _load_yaml(path: str) -> Tuple[Entry, Dict[str, Entry]]:
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise ConfigError(f"cannot read {path}: {e.strerror or e}") from e
    except UnicodeDecodeError as e:
        raise ConfigError(f"{path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"{path}: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"{path}: top level must be a mapping")
    for section in data:
        if section not in ("default", "import"):
            raise ConfigError(f"{path}: unexpected section {section!r}")

    raw_default = data.get("default") or {}
    if not isinstance(raw_default, dict):
        raise ConfigError(f"{path}: 'default' must be a mapping")
    default = _entry_from_mapping(raw_default, "default")

    raw_imports = data.get("import") or {}
    if not isinstance(raw_imports, dict):
        raise ConfigError(f"{path}: 'import' must be a mapping of import paths")
    imports: Dict[str, Entry] = {}
    for key, values in raw_imports.items():
        if values is None:
            values = {}
        if not isinstance(values, dict):
            raise ConfigError(f"{path}: import {key!r} must be a mapping")
        imports[str(key)] = _entry_from_mapping(values, f"import {key!r}")
    return default, imports


def load_config(path: str) -> Config:
    """
    Load a configuration file into a Config.

    Files ending in .yaml/.yml are read with PyYAML; anything else is treated as
    a git-config style file with a [default] section and [import "path"] sections.
    The built-in defaults (vcs=git, redirect=https://godoc.org/*, dirs=true) are
    filled into the default entry wherever the file leaves them unset.
    """
    ext = os.path.splitext(path)[1].lower()
    if ext in (".yaml", ".yml"):
        default, imports = _load_yaml(path)
    else:
        default, imports = _load_cfg(path)
    return Config(default=_with_builtin_defaults(default), imports=imports)

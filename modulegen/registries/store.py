"""Registry persistence.

``DocumentStore`` is the only component that reads or writes registry
files.  Update logic works on plain values and never sees a path, so tests
can hand it documents built in memory.

YAML documents go through PyYAML's safe loader and dumper.  Application
tags the safe loader does not know (``!!python/name:...`` in ``mkdocs.yml``
is the usual one) are kept as ``TaggedValue`` objects and written back with
the same tag.
"""

from __future__ import annotations

import os
import shutil
import tempfile
from pathlib import Path
from typing import Any

import yaml

from modulegen.errors import MalformedRegistryError


class TaggedValue:
    """A YAML node carrying a tag the safe loader cannot construct."""

    def __init__(self, tag: str, value: Any) -> None:
        self.tag = tag
        self.value = value

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TaggedValue):
            return NotImplemented
        return self.tag == other.tag and self.value == other.value

    def __repr__(self) -> str:
        return f"TaggedValue({self.tag!r}, {self.value!r})"


class RegistryLoader(yaml.SafeLoader):
    """Safe loader that preserves unknown tags instead of failing."""


class RegistryDumper(yaml.SafeDumper):
    """Safe dumper that writes ``TaggedValue`` back and never emits aliases."""

    def ignore_aliases(self, data: Any) -> bool:
        return True


def _construct_tagged(loader: yaml.SafeLoader, tag_suffix: str, node: yaml.Node) -> TaggedValue:
    if isinstance(node, yaml.ScalarNode):
        value: Any = loader.construct_scalar(node)
    elif isinstance(node, yaml.SequenceNode):
        value = loader.construct_sequence(node, deep=True)
    else:
        value = loader.construct_mapping(node, deep=True)
    return TaggedValue(node.tag, value)


def _represent_tagged(dumper: yaml.SafeDumper, data: TaggedValue) -> yaml.Node:
    if isinstance(data.value, list):
        return dumper.represent_sequence(data.tag, data.value)
    if isinstance(data.value, dict):
        return dumper.represent_mapping(data.tag, data.value)
    return dumper.represent_scalar(data.tag, str(data.value))


def _represent_str(dumper: yaml.SafeDumper, data: str) -> yaml.Node:
    # Multi-line strings (shell steps, descriptions) stay readable as blocks.
    style = "|" if "\n" in data else None
    return dumper.represent_scalar("tag:yaml.org,2002:str", data, style=style)


RegistryLoader.add_multi_constructor("!", _construct_tagged)
RegistryLoader.add_multi_constructor("tag:yaml.org,2002:python/", _construct_tagged)
RegistryDumper.add_representer(TaggedValue, _represent_tagged)
RegistryDumper.add_representer(str, _represent_str)


def load_yaml(text: str, source: str = "<string>") -> Any:
    """Parse YAML *text*; parse errors become ``MalformedRegistryError``."""
    try:
        return yaml.load(text, Loader=RegistryLoader)
    except yaml.YAMLError as exc:
        raise MalformedRegistryError(source, f"invalid YAML: {exc}") from exc


def dump_yaml(data: Any) -> str:
    return yaml.dump(
        data,
        Dumper=RegistryDumper,
        sort_keys=False,
        default_flow_style=False,
        allow_unicode=True,
        width=4096,
    )


class DocumentStore:
    """Reads registry documents from disk and writes them back atomically.

    Writes go to a temporary file next to the target and are moved into
    place with ``os.replace``, so a registry is either fully old or fully
    new.  The replaced file keeps its permission bits.
    """

    def read_text(self, path: Path) -> str:
        # newline="" keeps CRLF files byte-for-byte through a read/write cycle
        with open(path, encoding="utf-8", newline="") as fh:
            return fh.read()

    def write_text(self, path: Path, content: str) -> None:
        target = Path(path)
        fd, tmp_name = tempfile.mkstemp(dir=target.parent, prefix=f".{target.name}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8", newline="\n") as fh:
                fh.write(content)
            if target.exists():
                shutil.copymode(target, tmp_name)
            os.replace(tmp_name, target)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    def read_yaml(self, path: Path) -> Any:
        """Read and parse a YAML registry.

        Raises:
            FileNotFoundError: If the registry file does not exist.
            MalformedRegistryError: If the file is not valid YAML.
        """
        return load_yaml(self.read_text(path), source=Path(path).name)

    def write_yaml(self, path: Path, data: Any) -> None:
        self.write_text(path, dump_yaml(data))

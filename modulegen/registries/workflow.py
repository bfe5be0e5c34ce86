"""CI matrix registry (``.github/workflows/ci.yml``).

The workflow is edited as text so that comments, quoting and layout of
everything except the touched matrix line survive unchanged.  A matrix is
a flow sequence on a single line under ``strategy.matrix.module`` of a
job::

    jobs:
      test-examples:
        strategy:
          matrix:
            module: [cockroachdb, consul, nginx]

The line is located by following that key path by indentation; text
inside block scalars (``run: |`` steps and the like) is never considered.
"""

from __future__ import annotations

import re
from typing import Any

from modulegen.errors import MalformedRegistryError
from modulegen.identity import Identity

from .store import load_yaml

REGISTRY = "ci.yml"

MATRIX_PATH = ("strategy", "matrix", "module")

_JOBS_RE = re.compile(r"^jobs:\s*(#.*)?$")
_KEY_RE = re.compile(r"^(?P<indent> +)(?P<name>[\"']?[A-Za-z0-9_.-]+[\"']?):\s*(#.*)?$")
_ENTRY_RE = re.compile(r"^(?P<indent> *)(?P<dash>-(?: +|$))?(?P<rest>.*)$")
_PAIR_RE = re.compile(r"^(?P<key>[\"']?[A-Za-z0-9_.-]+[\"']?):(?:\s+(?P<value>.*))?$")
_BLOCK_SCALAR_RE = re.compile(r"^[|>][-+0-9]*\s*(#.*)?$")
_MATRIX_RE = re.compile(
    r"^(?P<prefix>\s+module:\s*)\[(?P<items>[^\]]*)\](?P<suffix>\s*(#.*)?)$"
)


def _indent_of(line: str) -> int:
    return len(line) - len(line.lstrip(" "))


def _is_blank_or_comment(line: str) -> bool:
    stripped = line.strip()
    return not stripped or stripped.startswith("#")


def _split_items(raw: str) -> list[str]:
    return [item.strip() for item in raw.split(",") if item.strip()]


def _unquote(item: str) -> str:
    if len(item) >= 2 and item[0] == item[-1] and item[0] in ("'", '"'):
        return item[1:-1]
    return item


def _find_matrix_line(lines: list[str], job_name: str) -> tuple[int, re.Match[str]]:
    """Locate the ``strategy.matrix.module`` flow sequence of *job_name*.

    Returns the line index and the match of that line.
    """
    jobs_at = next((i for i, line in enumerate(lines) if _JOBS_RE.match(line.rstrip("\r\n"))), None)
    if jobs_at is None:
        raise MalformedRegistryError(REGISTRY, "missing top-level 'jobs' mapping")

    job_indent: int | None = None
    in_job = False
    # (column, key) of the mapping keys open above the current line, job excluded
    path: list[tuple[int, str]] = []
    block_owner: int | None = None

    for i in range(jobs_at + 1, len(lines)):
        line = lines[i].rstrip("\r\n")
        if block_owner is not None:
            if not line.strip() or _indent_of(line) > block_owner:
                continue
            block_owner = None
        if _is_blank_or_comment(line):
            continue
        indent = _indent_of(line)
        if indent == 0:
            break
        if job_indent is None:
            job_indent = indent
        if indent <= job_indent:
            match = _KEY_RE.match(line)
            in_job = match is not None and _unquote(match.group("name")) == job_name
            path = []
            continue

        entry = _ENTRY_RE.match(line)
        if entry is None:
            continue
        column = indent
        while path and path[-1][0] >= column:
            path.pop()
        if entry.group("dash"):
            path.append((column, "-"))
            column += len(entry.group("dash"))
        pair = _PAIR_RE.match(entry.group("rest"))
        if pair is None:
            continue
        path.append((column, _unquote(pair.group("key"))))

        value = (pair.group("value") or "").strip()
        if _BLOCK_SCALAR_RE.match(value):
            block_owner = column
            continue

        if in_job and tuple(key for _, key in path) == MATRIX_PATH:
            matrix = _MATRIX_RE.match(line)
            if matrix is not None:
                return i, matrix

    raise MalformedRegistryError(
        REGISTRY, f"no 'strategy.matrix.module: [...]' line found in job '{job_name}'"
    )


def _parsed_matrix(document: Any, job_name: str) -> Any:
    node = document
    for key in ("jobs", job_name, *MATRIX_PATH):
        if not isinstance(node, dict) or key not in node:
            return None
        node = node[key]
    return node


def get_matrix(text: str, job_name: str) -> list[str]:
    """Return the unit identifiers listed in the matrix of *job_name*."""
    _, match = _find_matrix_line(text.splitlines(keepends=True), job_name)
    return [_unquote(item) for item in _split_items(match.group("items"))]


def update_ci_matrix(text: str, identity: Identity, job_name: str) -> str:
    """Return *text* with the unit appended to the matrix of *job_name*.

    Only the matrix line changes.  A unit that is already listed leaves the
    text untouched.

    Raises:
        MalformedRegistryError: If the text is not YAML, the job or its
            matrix line cannot be found, or the line found disagrees with
            the parsed document.
    """
    document = load_yaml(text, source=REGISTRY)

    lines = text.splitlines(keepends=True)
    at, match = _find_matrix_line(lines, job_name)
    line = lines[at]
    ending = line[len(line.rstrip("\r\n")):]

    items = _split_items(match.group("items"))
    listed = [_unquote(item) for item in items]
    parsed = _parsed_matrix(document, job_name)
    if not isinstance(parsed, list) or [str(item) for item in parsed] != listed:
        raise MalformedRegistryError(
            REGISTRY, f"matrix line {at + 1} does not hold jobs.{job_name}.strategy.matrix.module"
        )
    if identity.lower in listed:
        return text

    items.append(identity.lower)
    lines[at] = f"{match.group('prefix')}[{', '.join(items)}]{match.group('suffix')}{ending}"
    return "".join(lines)

"""Dependency-update policy registry (``.github/dependabot.yml``).

Each generated unit ships its own ``go.mod``, so it gets its own ``gomod``
update entry keyed by the unit directory.  Entries for the repository root
come first and are never reordered.
"""

from __future__ import annotations

import copy
from typing import Any

from modulegen.errors import MalformedRegistryError
from modulegen.identity import Identity

REGISTRY = "dependabot.yml"

UNIT_ECOSYSTEM = "gomod"


def unit_directory(identity: Identity) -> str:
    return f"/{identity.parent_dir}/{identity.lower}"


def build_update_entry(identity: Identity) -> dict[str, Any]:
    """The update entry declared for a newly generated unit."""
    return {
        "package-ecosystem": UNIT_ECOSYSTEM,
        "directory": unit_directory(identity),
        "schedule": {"interval": "monthly"},
        "open-pull-requests-limit": 3,
        "rebase-strategy": "disabled",
    }


def get_updates(document: Any) -> list[dict[str, Any]]:
    """Return the ``updates`` list of a dependabot document.

    Raises:
        MalformedRegistryError: If ``updates`` is missing, not a list, or
            holds an entry without ``directory`` / ``package-ecosystem``.
    """
    if not isinstance(document, dict):
        raise MalformedRegistryError(REGISTRY, "document root must be a mapping")
    updates = document.get("updates")
    if not isinstance(updates, list):
        raise MalformedRegistryError(REGISTRY, "missing 'updates' list")
    for entry in updates:
        if not isinstance(entry, dict) or "directory" not in entry or "package-ecosystem" not in entry:
            raise MalformedRegistryError(
                REGISTRY, f"update entry must have 'directory' and 'package-ecosystem': {entry!r}"
            )
    return updates


def update_dependabot(document: Any, identity: Identity) -> dict[str, Any]:
    """Return a copy of *document* with an update entry for the unit.

    Nothing is appended when an entry with the same directory and ecosystem
    already exists.
    """
    get_updates(document)

    updated = copy.deepcopy(document)
    updates = get_updates(updated)

    directory = unit_directory(identity)
    for entry in updates:
        if entry["directory"] == directory and entry["package-ecosystem"] == UNIT_ECOSYSTEM:
            return updated

    updates.append(build_update_entry(identity))
    return updated

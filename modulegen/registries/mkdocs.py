"""Docs navigation registry (``mkdocs.yml``).

The navigation tree is a list of single-key mappings.  Units live in the
``Modules`` and ``Examples`` sections, each a list of page paths whose
first entry is the section's ``index.md``.
"""

from __future__ import annotations

import copy
from typing import Any

from modulegen.errors import MalformedRegistryError
from modulegen.identity import Identity, UnitKind

REGISTRY = "mkdocs.yml"


def unit_page(identity: Identity) -> str:
    """Navigation path of the unit's docs page."""
    return f"{identity.parent_dir}/{identity.lower}.md"


def index_page(kind: UnitKind) -> str:
    return f"{kind.parent_dir}/index.md"


def get_nav_section(document: Any, section: str) -> list[Any]:
    """Return the page list of the nav section named *section*.

    The section is located by key, wherever it sits in the nav.

    Raises:
        MalformedRegistryError: If the document has no ``nav`` list, no such
            section, or the section is not a list.
    """
    if not isinstance(document, dict):
        raise MalformedRegistryError(REGISTRY, "document root must be a mapping")
    nav = document.get("nav")
    if not isinstance(nav, list):
        raise MalformedRegistryError(REGISTRY, "missing 'nav' list")

    for item in nav:
        if isinstance(item, dict) and section in item:
            pages = item[section]
            if not isinstance(pages, list):
                raise MalformedRegistryError(REGISTRY, f"nav section '{section}' must be a list")
            return pages
    raise MalformedRegistryError(REGISTRY, f"nav section '{section}' not found")


def update_nav(document: Any, identity: Identity) -> dict[str, Any]:
    """Return a copy of *document* with the unit's page in its nav section.

    The section's ``index.md`` stays first; the unit page is appended
    unless it is already listed.
    """
    get_nav_section(document, identity.kind.nav_section)

    updated = copy.deepcopy(document)
    pages = get_nav_section(updated, identity.kind.nav_section)

    page = unit_page(identity)
    if page in pages:
        return updated

    index = index_page(identity.kind)
    rest = [p for p in pages if p != index]
    rest.append(page)
    pages[:] = ([index] if index in pages else []) + rest
    return updated

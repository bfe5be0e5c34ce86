"""Registry documents that must list every generated unit.

Each registry has a pure ``update_*`` function taking the current document
and an ``Identity`` and returning the updated document.  Reading and writing
the files is left to ``DocumentStore``.
"""

from modulegen.registries.dependabot import update_dependabot
from modulegen.registries.mkdocs import update_nav
from modulegen.registries.store import DocumentStore, TaggedValue
from modulegen.registries.workflow import update_ci_matrix

__all__ = [
    "DocumentStore",
    "TaggedValue",
    "update_ci_matrix",
    "update_dependabot",
    "update_nav",
]

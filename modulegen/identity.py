"""Unit identity: the name-deriving description of a module or example.

An ``Identity`` is built fresh for every generation request.  All the
names used by the templates and the registries are projections of it:

* ``lower``          -- package/directory name and the registry key
* ``title``          -- display title
* ``container_name`` -- exported container type of the generated source
* ``entrypoint``     -- constructor function of the generated source
* ``parent_dir``     -- ``modules`` or ``examples``

The only piece of real business logic here is the casing convention of
exported Go symbols, which depends on whether the unit is a module
(exported, upper-case) or an example (package-private, lower-case).  It is
kept in the ``UnitKind`` table below.
"""

from __future__ import annotations

import re
from enum import Enum
from typing import Callable

from pydantic import BaseModel, ConfigDict, Field

from modulegen.errors import IdentityValidationError

NAME_PATTERN = re.compile(r"[A-Za-z][A-Za-z0-9]*")

CONTAINER_SUFFIX = "Container"
ENTRYPOINT_VERB = "RunContainer"


def _upper_first(value: str) -> str:
    return value[:1].upper() + value[1:]


def _lower_first(value: str) -> str:
    return value[:1].lower() + value[1:]


class UnitKind(str, Enum):
    """The two kinds of generated unit."""

    MODULE = "module"
    EXAMPLE = "example"

    @property
    def parent_dir(self) -> str:
        return _PARENT_DIRS[self]

    @property
    def nav_section(self) -> str:
        """Name of the docs navigation section listing units of this kind."""
        return _NAV_SECTIONS[self]

    def apply_case(self, symbol: str) -> str:
        """Case the leading character of *symbol* for this kind's visibility."""
        return _CASING[self](symbol)


_CASING: dict[UnitKind, Callable[[str], str]] = {
    UnitKind.MODULE: _upper_first,
    UnitKind.EXAMPLE: _lower_first,
}

_PARENT_DIRS: dict[UnitKind, str] = {
    UnitKind.MODULE: "modules",
    UnitKind.EXAMPLE: "examples",
}

_NAV_SECTIONS: dict[UnitKind, str] = {
    UnitKind.MODULE: "Modules",
    UnitKind.EXAMPLE: "Examples",
}


class Identity(BaseModel):
    """Description of the unit to generate."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Raw unit name, e.g. 'mongodb'")
    title_name: str = Field(default="", description="Optional display title, e.g. 'MongoDB'")
    image: str = Field(default="", description="Container image reference, stored verbatim")
    is_module: bool = Field(default=False, description="Module (True) or example (False)")

    # ------------------------------------------------------------------
    # Derived names
    # ------------------------------------------------------------------

    @property
    def kind(self) -> UnitKind:
        return UnitKind.MODULE if self.is_module else UnitKind.EXAMPLE

    @property
    def lower(self) -> str:
        """Lowercase identifier; the unit's key in every registry."""
        return self.name.lower()

    @property
    def title(self) -> str:
        """Display title.

        Falls back to the raw name with only its first letter upper-cased,
        so ``'mongoDB'`` becomes ``'Mongodb'`` and ``'foodb4tw'`` becomes
        ``'Foodb4tw'``.
        """
        if self.title_name:
            return self.title_name
        return self.name.capitalize()

    @property
    def container_name(self) -> str:
        return self.kind.apply_case(self.title) + CONTAINER_SUFFIX

    @property
    def entrypoint(self) -> str:
        return self.kind.apply_case(ENTRYPOINT_VERB)

    @property
    def parent_dir(self) -> str:
        return self.kind.parent_dir


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------


def is_valid_name(value: str) -> bool:
    """Return ``True`` if *value* is a letter-led alphanumeric word."""
    return NAME_PATTERN.fullmatch(value) is not None


def validate_identity(identity: Identity) -> None:
    """Check the raw name and title of *identity*.

    Raises:
        IdentityValidationError: naming the first offending field (``name``
            is checked before ``title``) and echoing its value verbatim.
    """
    if not is_valid_name(identity.name):
        raise IdentityValidationError("name", identity.name)
    if identity.title_name and not is_valid_name(identity.title_name):
        raise IdentityValidationError("title", identity.title_name)

"""Exception hierarchy for modulegen.

Every failure the generator can report is a ``ModulegenError`` subclass,
except plain I/O failures which surface as the built-in ``OSError`` family.
"""

from __future__ import annotations

from pathlib import Path


class ModulegenError(Exception):
    """Base class for all generator failures."""


class IdentityValidationError(ModulegenError):
    """Raised when a unit name or title is not a letter-led alphanumeric word."""

    def __init__(self, field: str, value: str) -> None:
        self.field = field
        self.value = value
        super().__init__(
            f"invalid {field}: {value}. Only alphanumerical characters are allowed "
            "(leading character must be a letter)"
        )


class DuplicateUnitError(ModulegenError):
    """Raised when the target unit directory already exists."""

    def __init__(self, path: Path) -> None:
        self.path = Path(path)
        super().__init__(f"unit directory already exists: {self.path}")


class MalformedRegistryError(ModulegenError):
    """Raised when a registry document does not have the expected structure."""

    def __init__(self, registry: str, reason: str) -> None:
        self.registry = registry
        self.reason = reason
        super().__init__(f"{registry}: {reason}")


class MissingTemplateError(ModulegenError):
    """Raised when templates of the unit template set are not installed."""

    def __init__(self, template_dir: Path, missing: list[str]) -> None:
        self.template_dir = Path(template_dir)
        self.missing = missing
        super().__init__(f"templates missing from {self.template_dir}: {', '.join(missing)}")

"""Workspace layout: where a unit's files live inside the host repository."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel

from modulegen.config import GeneratorConfig
from modulegen.errors import DuplicateUnitError
from modulegen.identity import Identity


class Layout(BaseModel):
    """Resolved physical paths for one unit."""

    unit_dir: Path
    doc_file: Path
    workflow_file: Path

    def unit_file(self, filename: str) -> Path:
        return self.unit_dir / filename


def resolve_layout(identity: Identity, config: GeneratorConfig) -> Layout:
    """Resolve the paths for *identity* below ``config.root_dir``.

    The unit directory is ``<root>/<parent_dir>/<lower>`` and its docs page
    is ``<root>/docs/<parent_dir>/<lower>.md``.  The CI workflow is shared by
    every unit and is rewritten, never created.

    Raises:
        DuplicateUnitError: If the unit directory already exists.  This is
            the only duplicate check performed before anything is written.
    """
    unit_dir = config.root_dir / identity.parent_dir / identity.lower
    if unit_dir.exists():
        raise DuplicateUnitError(unit_dir)

    return Layout(
        unit_dir=unit_dir,
        doc_file=config.docs_dir / identity.parent_dir / f"{identity.lower}.md",
        workflow_file=config.ci_workflow_file,
    )

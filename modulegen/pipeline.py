"""modulegen generation pipeline.

Implements the linear, single-pass generation of one unit:

VALIDATE   -- check the unit's name and title.
LAYOUT     -- resolve the unit's paths; refuse an existing unit directory.
FILES      -- render the template set into the new unit directory.
REGISTRIES -- add the unit to the docs nav, the CI matrix and the
              dependency-update policy, in that order.

The first failure stops the run and propagates unchanged.  Nothing that was
already written is rolled back; the operator removes partial output before
re-running.

Usage::

    python -m modulegen.pipeline --name mongodb --title MongoDB \\
        --image mongo:6 --as-module
"""

from __future__ import annotations

import sys
from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field

from modulegen.config import GeneratorConfig, ProjectMetadata
from modulegen.errors import ModulegenError
from modulegen.identity import Identity, validate_identity
from modulegen.layout import Layout, resolve_layout
from modulegen.registries import DocumentStore, update_ci_matrix, update_dependabot, update_nav
from modulegen.scaffolder import TemplateName, UnitScaffolder
from modulegen.utils import print_error, print_step, print_success, print_summary_table, print_warning


class GenerationStage(str, Enum):
    """Stages of a generation run, in execution order."""

    START = "start"
    VALIDATE = "validate"
    LAYOUT = "layout"
    FILES = "files"
    REGISTRIES = "registries"
    DONE = "done"


class GenerationResult(BaseModel):
    """What a successful run produced."""

    identity: Identity
    layout: Layout
    metadata: ProjectMetadata
    files: dict[TemplateName, Path] = Field(default_factory=dict)
    registries: list[Path] = Field(default_factory=list)


class GenerationPipeline:
    """Generates one unit and registers it everywhere it must be declared.

    After a failed :meth:`generate`, ``stage`` names the stage that failed.
    """

    def __init__(
        self,
        config: GeneratorConfig,
        store: DocumentStore | None = None,
        scaffolder: UnitScaffolder | None = None,
    ) -> None:
        self.config = config
        self.store = store or DocumentStore()
        self.scaffolder = scaffolder or UnitScaffolder(config)
        self.stage = GenerationStage.START

    def generate(self, identity: Identity) -> GenerationResult:
        """Run every stage for *identity*.

        Raises:
            IdentityValidationError: The name or title is malformed.
            DuplicateUnitError: The unit directory already exists.
            MalformedRegistryError: A registry does not have the expected shape.
            OSError: Reading or writing a file failed.
        """
        self.stage = GenerationStage.VALIDATE
        validate_identity(identity)

        self.stage = GenerationStage.LAYOUT
        layout = resolve_layout(identity, self.config)
        mkdocs_document = self.store.read_yaml(self.config.mkdocs_config_file)
        metadata = ProjectMetadata.from_mkdocs(mkdocs_document)
        print_step(f"Generating {identity.kind.value} '{identity.lower}' in {layout.unit_dir}")

        self.stage = GenerationStage.FILES
        files = self.scaffolder.write(identity, metadata, layout)
        print_step(f"Wrote {len(files)} files")

        self.stage = GenerationStage.REGISTRIES
        registries = self._update_registries(identity, mkdocs_document)

        self.stage = GenerationStage.DONE
        return GenerationResult(
            identity=identity,
            layout=layout,
            metadata=metadata,
            files=files,
            registries=registries,
        )

    # -- Registries ---------------------------------------------------------

    def _update_registries(self, identity: Identity, mkdocs_document: Any) -> list[Path]:
        mkdocs_file = self.config.mkdocs_config_file
        self.store.write_yaml(mkdocs_file, update_nav(mkdocs_document, identity))
        print_step(f"Updated {mkdocs_file.name} navigation")

        workflow_file = self.config.ci_workflow_file
        workflow = self.store.read_text(workflow_file)
        job_name = self.config.ci_job_for(identity.is_module)
        self.store.write_text(workflow_file, update_ci_matrix(workflow, identity, job_name))
        print_step(f"Updated {workflow_file.name} matrix of job '{job_name}'")

        dependabot_file = self.config.dependabot_config_file
        dependabot = self.store.read_yaml(dependabot_file)
        self.store.write_yaml(dependabot_file, update_dependabot(dependabot, identity))
        print_step(f"Updated {dependabot_file.name} updates")

        return [mkdocs_file, workflow_file, dependabot_file]


# ---------------------------------------------------------------------------
# CLI entry point
# ---------------------------------------------------------------------------


def main(argv: list[str] | None = None) -> int:
    """CLI entry point for ``python -m modulegen.pipeline``."""
    import argparse

    parser = argparse.ArgumentParser(
        description="Generate a new module or example and register it in the repository",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  modulegen --name mongodb --title MongoDB --image mongo:6 --as-module\n"
            "  modulegen --name nginx --image nginx:alpine --root ../testcontainers-go\n"
        ),
    )
    parser.add_argument("--name", required=True, help="Name of the unit (letters and digits, letter first)")
    parser.add_argument("--image", required=True, help="Container image used by the unit")
    parser.add_argument("--title", default="", help="Display title (defaults to the capitalised name)")
    parser.add_argument(
        "--as-module",
        action="store_true",
        help="Generate a module under modules/ instead of an example under examples/",
    )
    parser.add_argument(
        "--root",
        default=None,
        help="Repository root (default: $MODULEGEN_ROOT_DIR or the current directory)",
    )

    args = parser.parse_args(argv)

    config = GeneratorConfig.from_env(Path(args.root) if args.root else None)
    identity = Identity(
        name=args.name,
        title_name=args.title,
        image=args.image,
        is_module=args.as_module,
    )

    pipeline = GenerationPipeline(config)
    try:
        result = pipeline.generate(identity)
    except (ModulegenError, OSError) as exc:
        print_error(f"Generation failed at stage '{pipeline.stage.value}': {exc}")
        if pipeline.stage in (GenerationStage.FILES, GenerationStage.REGISTRIES):
            print_warning(
                f"Output written before the failure was kept; remove {identity.parent_dir}/{identity.lower} "
                "and revert the registries before re-running"
            )
        return 1

    print_summary_table(
        {
            "Kind": identity.kind.value,
            "Directory": str(result.layout.unit_dir),
            "Docs": str(result.layout.doc_file),
            "Container type": identity.container_name,
            "Entrypoint": identity.entrypoint,
            "Latest version": result.metadata.latest_version,
        },
        title=identity.title,
    )
    print_success(f"{identity.title} {identity.kind.value} generated")
    return 0


if __name__ == "__main__":
    sys.exit(main())

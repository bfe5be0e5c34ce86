"""Unit scaffolding: renders the fixed template set for one unit.

The template set is closed: a Go source file, its test, a Makefile, a
``go.mod`` manifest and a documentation page.  Each template declares the
context keys it consumes, and rendering hands it exactly those keys.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Callable

from modulegen.config import GeneratorConfig, ProjectMetadata
from modulegen.errors import MissingTemplateError
from modulegen.identity import Identity
from modulegen.layout import Layout

from .templates import TemplateRenderer


class TemplateName(str, Enum):
    """The five templates rendered for every unit."""

    SOURCE = "source"
    TEST = "test"
    BUILD_FILE = "build_file"
    DEPENDENCY_MANIFEST = "dependency_manifest"
    DOCS = "docs"


@dataclass(frozen=True)
class TemplateSpec:
    """Where a template lives, what it needs, and where its output goes."""

    template_path: str
    context_keys: tuple[str, ...]
    output_path: Callable[[Identity, Layout], Path]


TEMPLATE_SPECS: dict[TemplateName, TemplateSpec] = {
    TemplateName.SOURCE: TemplateSpec(
        template_path="unit.go.j2",
        context_keys=("lower", "title", "container_name", "entrypoint", "image"),
        output_path=lambda identity, layout: layout.unit_file(f"{identity.lower}.go"),
    ),
    TemplateName.TEST: TemplateSpec(
        template_path="unit_test.go.j2",
        context_keys=("lower", "title", "entrypoint"),
        output_path=lambda identity, layout: layout.unit_file(f"{identity.lower}_test.go"),
    ),
    TemplateName.BUILD_FILE: TemplateSpec(
        template_path="Makefile.j2",
        context_keys=("lower",),
        output_path=lambda identity, layout: layout.unit_file("Makefile"),
    ),
    TemplateName.DEPENDENCY_MANIFEST: TemplateSpec(
        template_path="go.mod.j2",
        context_keys=("lower", "parent_dir", "module_path", "go_version", "latest_version"),
        output_path=lambda identity, layout: layout.unit_file("go.mod"),
    ),
    TemplateName.DOCS: TemplateSpec(
        template_path="docs.md.j2",
        context_keys=(
            "lower",
            "title",
            "entrypoint",
            "image",
            "parent_dir",
            "module_path",
            "repository_url",
        ),
        output_path=lambda identity, layout: layout.doc_file,
    ),
}


class UnitScaffolder:
    """Renders and writes the template set of a unit.

    Rendering is pure; only :meth:`write` touches the filesystem.
    """

    def __init__(
        self,
        config: GeneratorConfig,
        renderer: TemplateRenderer | None = None,
    ) -> None:
        self.config = config
        self.renderer = renderer or TemplateRenderer()

    # -- Rendering ----------------------------------------------------------

    def build_context(self, identity: Identity, metadata: ProjectMetadata) -> dict[str, Any]:
        """Every name a template may ask for."""
        return {
            "lower": identity.lower,
            "title": identity.title,
            "container_name": identity.container_name,
            "entrypoint": identity.entrypoint,
            "image": identity.image,
            "parent_dir": identity.parent_dir,
            "module_path": self.config.go_module_path,
            "go_version": self.config.go_version,
            "repository_url": self.config.repository_url,
            "latest_version": metadata.latest_version,
        }

    def render(
        self,
        template_name: TemplateName,
        identity: Identity,
        metadata: ProjectMetadata,
    ) -> str:
        """Render one template of the set for *identity*."""
        spec = TEMPLATE_SPECS[TemplateName(template_name)]
        context = self._context_for(spec, identity, metadata)
        return self.renderer.render(spec.template_path, context)

    def _context_for(
        self,
        spec: TemplateSpec,
        identity: Identity,
        metadata: ProjectMetadata,
    ) -> dict[str, Any]:
        full = self.build_context(identity, metadata)
        return {key: full[key] for key in spec.context_keys}

    def missing_templates(self) -> list[str]:
        """Template paths of the set that the renderer cannot find."""
        available = set(self.renderer.list_templates())
        return [spec.template_path for spec in TEMPLATE_SPECS.values() if spec.template_path not in available]

    # -- Writing ------------------------------------------------------------

    def write(
        self,
        identity: Identity,
        metadata: ProjectMetadata,
        layout: Layout,
    ) -> dict[TemplateName, Path]:
        """Create the unit directory and write every rendered template.

        The unit directory is created exclusively, so a directory that
        appeared after layout resolution still fails with
        ``FileExistsError``.

        Returns:
            Mapping of template name to written file path.

        Raises:
            MissingTemplateError: If a template of the set is not installed.
                Nothing is written in that case.
        """
        missing = self.missing_templates()
        if missing:
            raise MissingTemplateError(self.renderer.template_dir, missing)

        layout.unit_dir.mkdir(parents=True)

        written: dict[TemplateName, Path] = {}
        for template_name, spec in TEMPLATE_SPECS.items():
            written[template_name] = self.renderer.render_to_file(
                spec.template_path,
                spec.output_path(identity, layout),
                self._context_for(spec, identity, metadata),
            )
        return written

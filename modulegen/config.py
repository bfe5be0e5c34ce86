"""modulegen configuration.

Typed configuration for a generation run.  ``GeneratorConfig`` knows where
the host repository lives and derives every path the generator reads or
writes from that root.  ``ProjectMetadata`` carries the values that come
from the host repository itself rather than from the operator.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field

from modulegen.errors import MalformedRegistryError


class GeneratorConfig(BaseModel):
    """Global generator configuration.

    Instances are typically created once by the CLI entry point and then
    passed to ``GenerationPipeline``.
    """

    root_dir: Path = Field(default=Path("."), description="Root of the host repository")
    go_module_path: str = Field(
        default="github.com/testcontainers/testcontainers-go",
        description="Import path of the host Go module",
    )
    go_version: str = Field(default="1.20", description="Go version written to generated go.mod files")
    repository_url: str = Field(default="https://github.com/testcontainers/testcontainers-go")

    # Jobs in the CI workflow holding the unit matrices.
    modules_ci_job: str = Field(default="test-module-go")
    examples_ci_job: str = Field(default="test-examples")

    # ------------------------------------------------------------------
    # Derived paths (read-only properties)
    # ------------------------------------------------------------------

    @property
    def docs_dir(self) -> Path:
        return self.root_dir / "docs"

    @property
    def mkdocs_config_file(self) -> Path:
        """Path to the docs navigation document (``mkdocs.yml``)."""
        return self.root_dir / "mkdocs.yml"

    @property
    def github_dir(self) -> Path:
        return self.root_dir / ".github"

    @property
    def github_workflows_dir(self) -> Path:
        return self.github_dir / "workflows"

    @property
    def ci_workflow_file(self) -> Path:
        """The shared CI workflow holding the module and example matrices."""
        return self.github_workflows_dir / "ci.yml"

    @property
    def dependabot_config_file(self) -> Path:
        return self.github_dir / "dependabot.yml"

    def ci_job_for(self, is_module: bool) -> str:
        """Return the CI job name whose matrix lists units of the given kind."""
        return self.modules_ci_job if is_module else self.examples_ci_job

    @classmethod
    def from_env(cls, root_dir: Path | None = None) -> "GeneratorConfig":
        """Build a ``GeneratorConfig`` from environment variables.

        Recognised variables (all optional):
            MODULEGEN_ROOT_DIR, MODULEGEN_GO_MODULE_PATH, MODULEGEN_GO_VERSION.

        An explicit *root_dir* wins over ``MODULEGEN_ROOT_DIR``.
        """
        kwargs: dict[str, Any] = {}
        if root_dir is not None:
            kwargs["root_dir"] = Path(root_dir)
        elif os.environ.get("MODULEGEN_ROOT_DIR"):
            kwargs["root_dir"] = Path(os.environ["MODULEGEN_ROOT_DIR"])
        if os.environ.get("MODULEGEN_GO_MODULE_PATH"):
            kwargs["go_module_path"] = os.environ["MODULEGEN_GO_MODULE_PATH"]
        if os.environ.get("MODULEGEN_GO_VERSION"):
            kwargs["go_version"] = os.environ["MODULEGEN_GO_VERSION"]
        return cls(**kwargs)


class ProjectMetadata(BaseModel):
    """Values read from the host repository and consumed by the templates."""

    latest_version: str = Field(..., description="Latest published version of the host module")

    @classmethod
    def from_mkdocs(cls, document: Any) -> "ProjectMetadata":
        """Extract metadata from a parsed ``mkdocs.yml`` document.

        The latest published version lives under ``extra.latest_version``.

        Raises:
            MalformedRegistryError: If the key is missing or not a string.
        """
        extra = document.get("extra") if isinstance(document, dict) else None
        if not isinstance(extra, dict):
            raise MalformedRegistryError("mkdocs.yml", "missing 'extra' mapping")
        version = extra.get("latest_version")
        if not isinstance(version, str) or not version:
            raise MalformedRegistryError("mkdocs.yml", "missing 'extra.latest_version'")
        return cls(latest_version=version)

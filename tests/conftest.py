"""Shared pytest fixtures for the modulegen test suite.

Provides reusable fixtures for:
- Registry documents as found in a host repository (mkdocs, CI, dependabot)
- A temporary host repository root holding those registries
- A GeneratorConfig pointing at that root
- Sample identities for modules and examples
- An in-memory DocumentStore
"""

from __future__ import annotations

import textwrap
from pathlib import Path
from typing import Any

import pytest

from modulegen.config import GeneratorConfig, ProjectMetadata
from modulegen.identity import Identity
from modulegen.registries.store import DocumentStore, load_yaml


# ---------------------------------------------------------------------------
# Registry documents
# ---------------------------------------------------------------------------

MKDOCS_YML = textwrap.dedent(
    """\
    site_name: Testcontainers for Go
    site_url: https://golang.testcontainers.org
    plugins:
      - search
      - codeinclude
      - include-markdown
    markdown_extensions:
      - admonition
      - pymdownx.emoji:
          emoji_index: !!python/name:material.extensions.emoji.twemoji
          emoji_generator: !!python/name:material.extensions.emoji.to_svg
    nav:
      - Home: index.md
      - Quickstart: quickstart.md
      - Features:
          - features/creating_container.md
          - features/common_functional_options.md
      - Modules:
          - modules/index.md
          - modules/compose.md
          - modules/postgres.md
      - Examples:
          - examples/index.md
          - examples/cockroachdb.md
          - examples/nginx.md
      - System Requirements: system_requirements/index.md
    extra:
      latest_version: v0.20.1
    """
)

CI_YML = textwrap.dedent(
    """\
    name: Main pipeline

    on:
      push:
        paths-ignore:
          - 'mkdocs.yml'
      pull_request:

    concurrency:
      group: ${{ github.workflow }}-${{ github.head_ref || github.sha }}
      cancel-in-progress: true

    jobs:
      test-module-go:
        # module matrix, kept in sync by modulegen
        strategy:
          matrix:
            go-version: [1.20.x, 1.x]
            module: [compose, postgres]
        uses: ./.github/workflows/ci-test-go.yml
        with:
          go-version: ${{ matrix.go-version }}
          project-directory: modules/${{ matrix.module }}

      test-examples:
        strategy:
          matrix:
            go-version: [1.20.x, 1.x]
            module: [cockroachdb, nginx]
        uses: ./.github/workflows/ci-test-go.yml
        with:
          go-version: ${{ matrix.go-version }}
          project-directory: examples/${{ matrix.module }}
    """
)

DEPENDABOT_YML = textwrap.dedent(
    """\
    version: 2
    updates:
      - package-ecosystem: github-actions
        directory: /
        schedule:
          interval: monthly
        open-pull-requests-limit: 3
        rebase-strategy: disabled
      - package-ecosystem: gomod
        directory: /
        schedule:
          interval: monthly
        open-pull-requests-limit: 3
        rebase-strategy: disabled
      - package-ecosystem: pip
        directory: /
        schedule:
          interval: monthly
        open-pull-requests-limit: 3
        rebase-strategy: disabled
      - package-ecosystem: gomod
        directory: /modules/compose
        schedule:
          interval: monthly
        open-pull-requests-limit: 3
        rebase-strategy: disabled
      - package-ecosystem: gomod
        directory: /examples/nginx
        schedule:
          interval: monthly
        open-pull-requests-limit: 3
        rebase-strategy: disabled
    """
)


@pytest.fixture
def mkdocs_text() -> str:
    return MKDOCS_YML


@pytest.fixture
def mkdocs_document() -> dict[str, Any]:
    """Parsed ``mkdocs.yml``."""
    return load_yaml(MKDOCS_YML)


@pytest.fixture
def ci_workflow_text() -> str:
    return CI_YML


@pytest.fixture
def dependabot_document() -> dict[str, Any]:
    """Parsed ``dependabot.yml``."""
    return load_yaml(DEPENDABOT_YML)


# ---------------------------------------------------------------------------
# Host repository
# ---------------------------------------------------------------------------

@pytest.fixture
def repo_root(tmp_path: Path) -> Path:
    """Temporary host repository with the three registries in place.

    Creates ``modules/``, ``examples/``, ``docs/modules``, ``docs/examples``,
    ``mkdocs.yml``, ``.github/workflows/ci.yml`` and
    ``.github/dependabot.yml``.
    """
    root = tmp_path / "testcontainers-go"
    for directory in (
        "modules",
        "examples",
        "docs/modules",
        "docs/examples",
        ".github/workflows",
    ):
        (root / directory).mkdir(parents=True)

    (root / "mkdocs.yml").write_text(MKDOCS_YML, encoding="utf-8")
    (root / ".github" / "workflows" / "ci.yml").write_text(CI_YML, encoding="utf-8")
    (root / ".github" / "dependabot.yml").write_text(DEPENDABOT_YML, encoding="utf-8")
    yield root


@pytest.fixture
def generator_config(repo_root: Path) -> GeneratorConfig:
    """A GeneratorConfig rooted at the temporary host repository."""
    return GeneratorConfig(root_dir=repo_root)


@pytest.fixture
def metadata() -> ProjectMetadata:
    return ProjectMetadata(latest_version="v0.20.1")


# ---------------------------------------------------------------------------
# Identities
# ---------------------------------------------------------------------------

@pytest.fixture
def example_identity() -> Identity:
    """The titled example used throughout the end-to-end tests."""
    return Identity(
        name="foodb4tw",
        title_name="FooDB4TheWin",
        image="docker.io/example/foodb:latest",
        is_module=False,
    )


@pytest.fixture
def module_identity() -> Identity:
    """The same unit generated as a module."""
    return Identity(
        name="foodb4tw",
        title_name="FooDB4TheWin",
        image="docker.io/example/foodb:latest",
        is_module=True,
    )


# ---------------------------------------------------------------------------
# In-memory store
# ---------------------------------------------------------------------------

class MemoryDocumentStore(DocumentStore):
    """DocumentStore keeping file contents in a dict keyed by path."""

    def __init__(self, files: dict[Path, str] | None = None) -> None:
        self.files: dict[Path, str] = dict(files or {})
        self.writes: list[Path] = []

    def read_text(self, path: Path) -> str:
        try:
            return self.files[Path(path)]
        except KeyError:
            raise FileNotFoundError(str(path)) from None

    def write_text(self, path: Path, content: str) -> None:
        self.files[Path(path)] = content
        self.writes.append(Path(path))


@pytest.fixture
def memory_store(generator_config: GeneratorConfig) -> MemoryDocumentStore:
    """An in-memory store pre-loaded with the three registries."""
    return MemoryDocumentStore(
        {
            generator_config.mkdocs_config_file: MKDOCS_YML,
            generator_config.ci_workflow_file: CI_YML,
            generator_config.dependabot_config_file: DEPENDABOT_YML,
        }
    )

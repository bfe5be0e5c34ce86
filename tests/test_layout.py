"""Tests for workspace layout resolution (modulegen.layout)."""

from __future__ import annotations

import pytest

from modulegen.errors import DuplicateUnitError
from modulegen.identity import Identity
from modulegen.layout import resolve_layout


pytestmark = pytest.mark.unit


class TestResolveLayout:
    def test_example_paths(self, generator_config, example_identity, repo_root):
        layout = resolve_layout(example_identity, generator_config)
        assert layout.unit_dir == repo_root / "examples" / "foodb4tw"
        assert layout.doc_file == repo_root / "docs" / "examples" / "foodb4tw.md"
        assert layout.workflow_file == repo_root / ".github" / "workflows" / "ci.yml"

    def test_module_paths(self, generator_config, module_identity, repo_root):
        layout = resolve_layout(module_identity, generator_config)
        assert layout.unit_dir == repo_root / "modules" / "foodb4tw"
        assert layout.doc_file == repo_root / "docs" / "modules" / "foodb4tw.md"

    def test_uses_lowercase_identifier(self, generator_config, repo_root):
        layout = resolve_layout(Identity(name="MongoDB", is_module=True), generator_config)
        assert layout.unit_dir.name == "mongodb"
        assert layout.doc_file.name == "mongodb.md"

    def test_workflow_file_is_shared(self, generator_config, example_identity, module_identity):
        assert (
            resolve_layout(example_identity, generator_config).workflow_file
            == resolve_layout(module_identity, generator_config).workflow_file
        )

    def test_unit_file(self, generator_config, example_identity):
        layout = resolve_layout(example_identity, generator_config)
        assert layout.unit_file("go.mod") == layout.unit_dir / "go.mod"

    def test_existing_unit_dir_is_duplicate(self, generator_config, example_identity, repo_root):
        existing = repo_root / "examples" / "foodb4tw"
        existing.mkdir()
        with pytest.raises(DuplicateUnitError) as exc_info:
            resolve_layout(example_identity, generator_config)
        assert exc_info.value.path == existing

    def test_same_name_other_kind_is_not_duplicate(self, generator_config, module_identity, repo_root):
        (repo_root / "examples" / "foodb4tw").mkdir()
        layout = resolve_layout(module_identity, generator_config)
        assert layout.unit_dir == repo_root / "modules" / "foodb4tw"

    def test_does_not_create_anything(self, generator_config, example_identity):
        layout = resolve_layout(example_identity, generator_config)
        assert not layout.unit_dir.exists()
        assert not layout.doc_file.exists()

"""modulegen -- scaffolds new modules and examples in a multi-module Go repository.

A generation run validates the unit's identity, renders its source, test,
Makefile, ``go.mod`` and docs page, and adds it to the docs navigation, the
CI matrix and the dependency-update policy.

Quick usage::

    from modulegen import GeneratorConfig, GenerationPipeline, Identity

    pipeline = GenerationPipeline(GeneratorConfig(root_dir=Path("testcontainers-go")))
    pipeline.generate(Identity(name="mongodb", title_name="MongoDB", image="mongo:6", is_module=True))
"""

from modulegen.config import GeneratorConfig, ProjectMetadata
from modulegen.errors import (
    DuplicateUnitError,
    IdentityValidationError,
    MalformedRegistryError,
    MissingTemplateError,
    ModulegenError,
)
from modulegen.identity import Identity, UnitKind, validate_identity
from modulegen.layout import Layout, resolve_layout
from modulegen.pipeline import GenerationPipeline, GenerationResult, GenerationStage

__all__ = [
    "DuplicateUnitError",
    "GenerationPipeline",
    "GenerationResult",
    "GenerationStage",
    "GeneratorConfig",
    "Identity",
    "IdentityValidationError",
    "Layout",
    "MalformedRegistryError",
    "MissingTemplateError",
    "ModulegenError",
    "ProjectMetadata",
    "UnitKind",
    "resolve_layout",
    "validate_identity",
]

"""modulegen scaffolder -- renders the template set of a unit.

Quick usage::

    from modulegen.scaffolder import TemplateName, UnitScaffolder

    scaffolder = UnitScaffolder(config)
    source = scaffolder.render(TemplateName.SOURCE, identity, metadata)
"""

from modulegen.scaffolder.generator import TEMPLATE_SPECS, TemplateName, UnitScaffolder
from modulegen.scaffolder.templates import TemplateRenderer

__all__ = [
    "TEMPLATE_SPECS",
    "TemplateName",
    "TemplateRenderer",
    "UnitScaffolder",
]

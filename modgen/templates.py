"""Jinja2 rendering for config-file fragments and anchors.

Provides the ``FragmentRenderer`` class, which renders the inline templates
declared in ``modgen.patches`` with the module's and the template module's
name forms.  Fragments are small, so they live as strings rather than files.
"""

from __future__ import annotations

from typing import Any

from jinja2 import Environment, StrictUndefined, select_autoescape

from .naming import ModuleNameSet, display_name


class FragmentRenderer:
    """Renders inline Jinja2 templates for module wiring.

    Templates see ``module`` and ``template`` (both ``ModuleNameSet``) plus
    ``module_display``; undefined variables are an error.
    """

    def __init__(self) -> None:
        self.env = Environment(
            autoescape=select_autoescape([]),
            keep_trailing_newline=True,
            trim_blocks=True,
            lstrip_blocks=True,
            undefined=StrictUndefined,
        )

    def build_context(self, names: ModuleNameSet, template: ModuleNameSet) -> dict[str, Any]:
        """Return the variables available to every fragment."""
        return {
            "module": names,
            "template": template,
            "module_display": display_name(names),
        }

    def render_string(self, template_string: str, context: dict[str, Any]) -> str:
        """Render an inline template string with the provided context."""
        template = self.env.from_string(template_string)
        return template.render(**context)

"""
Prompt templates with {variable} placeholders.

Placeholders are plain identifiers; "{{" and "}}" produce literal braces.
Format specs ("{price:.2f}") are allowed. Extra variables are ignored.
"""

from string import Formatter
from typing import Any, List, Mapping

from metis_mcp_core.errors import InvalidArgumentError


class PromptTemplate:
    """
    A prompt with named placeholders.

    Example:
        >>> template = PromptTemplate("Summarize {topic} in {words} words")
        >>> template.input_variables
        ['topic', 'words']
        >>> template.format({"topic": "vector search", "words": 20})
        'Summarize vector search in 20 words'
    """

    def __init__(self, template: str):
        if template is None:
            raise InvalidArgumentError("template is required")
        self.template = template
        self.input_variables = self._parse_variables(template)

    @staticmethod
    def _parse_variables(template: str) -> List[str]:
        try:
            fields = [field_name for _, field_name, _, _ in Formatter().parse(template)]
        except ValueError as e:
            # Unbalanced braces
            raise InvalidArgumentError(f"Invalid prompt template: {e}") from e

        names: List[str] = []
        for field_name in fields:
            if field_name is None:
                continue
            if not field_name.isidentifier():
                raise InvalidArgumentError(f"Invalid template variable: {{{field_name}}}")
            if field_name not in names:
                names.append(field_name)
        return names

    def format(self, variables: Mapping[str, Any]) -> str:
        """Fill in the placeholders; every input variable must be supplied."""
        variables = variables or {}
        missing = [name for name in self.input_variables if name not in variables]
        if missing:
            raise InvalidArgumentError(f"Missing value for input variable(s): {', '.join(missing)}")

        return self.template.format(**{name: variables[name] for name in self.input_variables})


def render_template(template: str, variables: Mapping[str, Any]) -> str:
    """Shortcut for PromptTemplate(template).format(variables)."""
    return PromptTemplate(template).format(variables)


__all__ = ["PromptTemplate", "render_template"]

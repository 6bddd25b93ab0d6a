"""Placeholder substitution for email templates.

Templates use ``{{name}}`` placeholders. Each template string is compiled once
into a sequence of literal and placeholder segments; rendering walks the
segments and never re-scans substituted values, so administrator-controlled
content cannot expand recursively.
"""

import re
from dataclasses import dataclass
from functools import lru_cache
from typing import Any, Mapping

from attendance_mailer.core.logging import get_logger
from attendance_mailer.domain.entities.email_template import RenderedEmail, ResolvedTemplate
from attendance_mailer.domain.entities.organization_identity import OrganizationIdentity

PLACEHOLDER_PATTERN = re.compile(r"\{\{\s*([A-Za-z_][A-Za-z0-9_]*)\s*\}\}")


@dataclass(frozen=True)
class Literal:
    text: str


@dataclass(frozen=True)
class Placeholder:
    name: str


Segment = Literal | Placeholder


@lru_cache(maxsize=256)
def compile_template(template: str) -> tuple[Segment, ...]:
    """Split a template string into literal and placeholder segments.

    Brace sequences that do not form a valid placeholder stay literal.

    Args:
        template: Template string with ``{{name}}`` placeholders.

    Returns:
        Tuple of segments in source order.
    """
    segments: list[Segment] = []
    position = 0
    for match in PLACEHOLDER_PATTERN.finditer(template):
        if match.start() > position:
            segments.append(Literal(template[position : match.start()]))
        segments.append(Placeholder(match.group(1)))
        position = match.end()
    if position < len(template):
        segments.append(Literal(template[position:]))
    return tuple(segments)


def to_display_string(value: Any) -> str:
    """Coerce a variable value to the string substituted into a template."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


class TemplateRenderer:
    """Renders resolved templates with caller and organization variables."""

    def __init__(self, logger: Any | None = None) -> None:
        """Initialize the renderer.

        Args:
            logger: Optional structured logger. Defaults to the module logger.
        """
        self.logger = logger or get_logger(__name__)

    @staticmethod
    def merge_variables(
        variables: Mapping[str, Any] | None,
        identity: OrganizationIdentity | None = None,
    ) -> dict[str, str]:
        """Overlay caller variables on the implicit organization defaults.

        A caller value of None counts as not supplied.
        """
        merged = (identity or OrganizationIdentity()).as_variables()
        for name, value in (variables or {}).items():
            if value is None and name in merged:
                continue
            merged[name] = to_display_string(value)
        return merged

    def render_string(self, template: str, variables: Mapping[str, str]) -> str:
        """Substitute placeholders in one template string.

        Placeholders with no matching variable render as the empty string.
        """
        parts: list[str] = []
        for segment in compile_template(template):
            if isinstance(segment, Literal):
                parts.append(segment.text)
            else:
                parts.append(variables.get(segment.name, ""))
        return "".join(parts)

    def render(
        self,
        template: ResolvedTemplate,
        variables: Mapping[str, Any] | None = None,
        identity: OrganizationIdentity | None = None,
    ) -> RenderedEmail:
        """Render subject, body and optional text body independently.

        Args:
            template: Resolved template to render.
            variables: Caller-supplied variables.
            identity: Organization identity supplying implicit defaults.

        Returns:
            RenderedEmail with every placeholder substituted.
        """
        merged = self.merge_variables(variables, identity)
        rendered = RenderedEmail(
            subject=self.render_string(template.subject, merged),
            body=self.render_string(template.body, merged),
            text=self.render_string(template.text, merged) if template.text else None,
        )
        self.logger.debug(
            "Template rendered",
            source=template.source,
            variable_count=len(merged),
        )
        return rendered


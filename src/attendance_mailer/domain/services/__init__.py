"""Pure domain services: rendering and failure classification."""

from attendance_mailer.domain.services.failure_classifier import classify
from attendance_mailer.domain.services.template_renderer import (
    TemplateRenderer,
    compile_template,
)

__all__ = ["TemplateRenderer", "classify", "compile_template"]

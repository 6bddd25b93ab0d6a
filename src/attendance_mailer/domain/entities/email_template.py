"""Email template entities.

Templates are plain subject/body pairs using ``{{name}}`` placeholders. A
template either comes from an administrator override stored in the settings
store or from the built-in default set.
"""

from dataclasses import dataclass
from typing import Literal

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

TemplateSource = Literal["override", "default"]


class TemplateOverride(BaseModel):
    """Administrator-supplied template stored under a notification type's key.

    The admin settings screen stores the body as ``html``; older rows use
    ``body``. Both are accepted.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    subject: str = Field(min_length=1)
    body: str = Field(min_length=1, validation_alias=AliasChoices("body", "html"))
    text: str | None = None


@dataclass(frozen=True)
class ResolvedTemplate:
    """Template actually used for one dispatch.

    Attributes:
        subject: Subject line with placeholders.
        body: HTML body with placeholders.
        text: Optional plain-text body with placeholders.
        source: Whether the template came from an override or the default set.
    """

    subject: str
    body: str
    text: str | None = None
    source: TemplateSource = "default"


@dataclass(frozen=True)
class RenderedEmail:
    """Subject and bodies after variable substitution."""

    subject: str
    body: str
    text: str | None = None


@dataclass(frozen=True)
class OutboundEmail:
    """A fully addressed message handed to a mail transport."""

    to: str
    from_address: str
    subject: str
    html: str
    text: str | None = None

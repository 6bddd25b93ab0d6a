"""Translate low-level mail transport errors into user-facing messages.

The mapping is best effort: errors that match no rule keep their original
text so nothing is hidden from the caller.
"""

import asyncio
import re
from dataclasses import dataclass

import aiosmtplib

DAILY_LIMIT_MESSAGE = (
    "Daily sending limit exceeded. Please try again tomorrow or upgrade your mail account."
)
AUTHENTICATION_MESSAGE = "SMTP authentication failed. Please check your email credentials."
INVALID_LOGIN_MESSAGE = "Invalid SMTP username or password."
TIMEOUT_MESSAGE = "SMTP connection timeout. Please check your server settings."
CONNECTION_REFUSED_MESSAGE = "Unable to connect to SMTP server. Please verify host and port."
RECIPIENT_REJECTED_MESSAGE = "Invalid recipient email address."


@dataclass(frozen=True)
class ClassificationRule:
    """One entry of the ordered classification table.

    Attributes:
        category: Short machine-readable category name.
        message: User-facing explanation returned on match.
        substrings: Case-insensitive fragments searched in the error text.
        error_types: Exception classes that match regardless of their text.
        patterns: Regular expressions searched in the error text, for
            fragments such as reply codes that need word boundaries.
    """

    category: str
    message: str
    substrings: tuple[str, ...]
    error_types: tuple[type[BaseException], ...] = ()
    patterns: tuple[str, ...] = ()

    def matches(self, error: BaseException, text: str) -> bool:
        if self.error_types and isinstance(error, self.error_types):
            return True
        lowered = text.lower()
        if any(fragment.lower() in lowered for fragment in self.substrings):
            return True
        return any(re.search(pattern, text) for pattern in self.patterns)


CLASSIFICATION_RULES: tuple[ClassificationRule, ...] = (
    ClassificationRule(
        "daily_limit",
        DAILY_LIMIT_MESSAGE,
        ("Daily user sending limit exceeded",),
    ),
    ClassificationRule(
        "authentication",
        AUTHENTICATION_MESSAGE,
        ("authentication failed",),
        (aiosmtplib.SMTPAuthenticationError,),
        (r"\b535\b",),
    ),
    ClassificationRule(
        "invalid_login",
        INVALID_LOGIN_MESSAGE,
        ("Invalid login", "Username and Password not accepted"),
    ),
    ClassificationRule(
        "timeout",
        TIMEOUT_MESSAGE,
        ("Connection timeout", "timed out"),
        (aiosmtplib.SMTPTimeoutError, asyncio.TimeoutError, TimeoutError),
    ),
    ClassificationRule(
        "connection_refused",
        CONNECTION_REFUSED_MESSAGE,
        ("ECONNREFUSED", "Connection refused", "Connect call failed"),
        (ConnectionRefusedError,),
    ),
    ClassificationRule(
        "recipient_rejected",
        RECIPIENT_REJECTED_MESSAGE,
        ("Recipient address rejected",),
        (aiosmtplib.SMTPRecipientsRefused, aiosmtplib.SMTPRecipientRefused),
    ),
)


def error_text(error: BaseException) -> str:
    """Return the message of an error, or its class name when empty."""
    return str(error) or type(error).__name__


def find_rule(error: BaseException) -> ClassificationRule | None:
    """Return the first rule matching the error, if any."""
    text = error_text(error)
    for rule in CLASSIFICATION_RULES:
        if rule.matches(error, text):
            return rule
    return None


def classify(error: BaseException) -> str:
    """Map a transport error to a user-facing message.

    Args:
        error: Error raised by the transport.

    Returns:
        The explanation of the first matching rule, or the raw error message.
    """
    rule = find_rule(error)
    return rule.message if rule else error_text(error)

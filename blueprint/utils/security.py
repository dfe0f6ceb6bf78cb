"""Security utilities for safe logging of user identifiers.

Emails and usernames double as rate-limit identifiers, so they show up in log
events. These helpers mask them the same way everywhere so raw identifiers
never reach the log pipeline.
"""

from typing import Any


def mask_email(email: Any) -> str:
    """Returns a masked version of an email address for safe logging.

    Example: 'user@example.com' -> 'us**@e*********m'

    Args:
        email: The email to mask. Non-strings and malformed values are masked
            as opaque identifiers.

    Returns:
        str: Masked email
    """
    if not isinstance(email, str) or email.count("@") != 1:
        return mask_identifier(email)

    local, domain_part = email.split("@")
    masked_local = f"{local[:2]}{'*' * max(0, len(local) - 2)}"
    if len(domain_part) <= 2:
        masked_domain = "*" * len(domain_part)
    else:
        masked_domain = f"{domain_part[:1]}{'*' * (len(domain_part) - 2)}{domain_part[-1:]}"
    return f"{masked_local}@{masked_domain}"


def mask_identifier(value: Any) -> str:
    """Return masked identifier for safe logging.

    Returns:
        str: First 2 chars followed by asterisks, or '<invalid>' for non-strings
    """
    if not isinstance(value, str):
        return "<invalid>"
    if "@" in value and value.count("@") == 1:
        return mask_email(value)
    if len(value) <= 2:
        return "*" * len(value)
    return value[:2] + "*" * (len(value) - 2)

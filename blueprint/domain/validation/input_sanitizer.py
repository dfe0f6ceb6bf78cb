"""Markup sanitization for free-text user input.

Profile fields are stored and later rendered by other clients, so any markup
a user typed is removed before the record is written. Script blocks are
removed together with their content; every other tag is removed but its
inner text is kept.
"""

import re
from typing import Any

import structlog

logger = structlog.get_logger(__name__)


class InputSanitizer:
    """Strips script blocks and HTML tags from text.

    The result is trimmed and applying the sanitizer twice yields the same
    value as applying it once.
    """

    # Compiled once; shared by every call.
    SCRIPT_BLOCK_PATTERN = re.compile(
        r"<script\b[^<]*(?:(?!</script>)<[^<]*)*</script>", re.IGNORECASE
    )
    TAG_PATTERN = re.compile(r"<[^>]+>")

    def sanitize(self, text: Any) -> str:
        """Return the text with scripts and tags removed, or '' for non-strings."""
        if not isinstance(text, str):
            return ""

        without_scripts = self.SCRIPT_BLOCK_PATTERN.sub("", text)
        sanitized = self.TAG_PATTERN.sub("", without_scripts).strip()

        if sanitized != text.strip():
            logger.debug(
                "Markup removed from input",
                original_length=len(text),
                sanitized_length=len(sanitized),
            )
        return sanitized


input_sanitizer = InputSanitizer()


def sanitize_input(text: Any) -> str:
    """Sanitize free text with the shared `InputSanitizer`."""
    return input_sanitizer.sanitize(text)

"""Input checks for the feedback form fields.

The predicates here are pure; the controller decides how to surface the
returned ``FormError`` on the matching field.
"""

import re

from feedback_form.models.feedback import FormError

EMAIL_ADDRESS_PATTERN = re.compile(
    r"[a-zA-Z0-9+._%\-]{1,256}"
    r"@"
    r"[a-zA-Z0-9][a-zA-Z0-9\-]{0,64}"
    r"(\.[a-zA-Z0-9][a-zA-Z0-9\-]{0,25})+"
)


def is_null_or_blank(text: str | None) -> bool:
    """Return True for None, the empty string, or whitespace only."""
    return text is None or not text.strip()


def is_valid_email_address(text: str | None) -> bool:
    if text is None:
        return False
    return EMAIL_ADDRESS_PATTERN.fullmatch(text) is not None


def check_message(text: str | None) -> FormError | None:
    """Return the error to show on the message field, or None if valid."""
    if is_null_or_blank(text):
        return FormError.INVALID_MESSAGE
    return None


def check_email(text: str | None) -> FormError | None:
    """Return the error to show on the email field, or None if valid.

    A blank address and a malformed one get different errors so the user
    knows whether to fill the field in or fix what they typed.
    """
    if is_null_or_blank(text):
        return FormError.EMPTY_EMAIL
    if not is_valid_email_address(text):
        return FormError.INVALID_EMAIL
    return None

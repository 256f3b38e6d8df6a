"""Feedback form models."""

from enum import Enum

from pydantic import BaseModel, Field


class FeedbackResult(str, Enum):
    """How the user finished the feedback form."""

    SUBMITTED = "submitted"
    CANCELLED = "cancelled"


class FormError(str, Enum):
    """Inline field errors, keyed into Settings.error_messages."""

    INVALID_MESSAGE = "invalid_message"
    EMPTY_EMAIL = "empty_email"
    INVALID_EMAIL = "invalid_email"


class SoftInputMode(str, Enum):
    """How the window reacts when the on-screen keyboard opens."""

    UNSPECIFIED = "unspecified"
    ADJUST_PAN = "adjust_pan"
    ADJUST_RESIZE = "adjust_resize"
    ADJUST_NOTHING = "adjust_nothing"


class FormField(str, Enum):
    MESSAGE = "message"
    EMAIL = "email"


class FeedbackSubmission(BaseModel):
    """Validated payload handed to the Appboy client on send."""

    email: str
    message: str
    is_bug: bool = False


class FormState(BaseModel):
    """Mutable controller state, reset on cancel and submit."""

    error_message_shown: bool = False
    original_input_mode: SoftInputMode = SoftInputMode.UNSPECIFIED


# --- HTTP schemas ---


class OpenFormRequest(BaseModel):
    """Open a form on a host whose window is in *soft_input_mode*."""

    soft_input_mode: SoftInputMode = SoftInputMode.UNSPECIFIED


class FieldUpdate(BaseModel):
    """Text-change event. Omitted fields are left as they are."""

    message: str | None = Field(None, max_length=5000)
    email: str | None = Field(None, max_length=200)
    is_bug: bool | None = None
    focus: FormField | None = None


class FormView(BaseModel):
    """Snapshot of an open form as the user sees it."""

    form_id: str
    message: str
    email: str
    is_bug: bool
    message_error: str | None = None
    email_error: str | None = None
    error_message_shown: bool
    soft_input_mode: SoftInputMode
    keyboard_visible: bool


class FormActionResponse(BaseModel):
    """Response after the user clicks send or cancel."""

    finished: bool
    result: FeedbackResult | None = None
    form: FormView

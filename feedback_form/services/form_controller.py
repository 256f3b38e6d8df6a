"""Feedback form controller — validation, send/cancel flow, keyboard handling.

Usage:
    controller = FeedbackFormController(get_appboy_client(), on_finished=print)
    controller.attach(FormHost(window, settings.error_messages))
    controller.resume()
    ...
    controller.on_send()
"""

import logging
from collections.abc import Callable
from typing import Protocol

from feedback_form.models.feedback import (
    FeedbackResult,
    FeedbackSubmission,
    FormError,
    FormState,
    SoftInputMode,
)
from feedback_form.services.validation import check_email, check_message
from feedback_form.services.widgets import CheckBox, FormHost, TextField

logger = logging.getLogger(__name__)

BeforeSubmit = Callable[[str], str]
OnFinished = Callable[[FeedbackResult], None]


class FeedbackClient(Protocol):
    """Outbound sink for submitted feedback."""

    def submit_feedback(self, email: str, message: str, is_bug: bool) -> bool: ...

    def log_feedback_displayed(self) -> bool: ...


class FeedbackFinishedListener(Protocol):
    def on_feedback_finished(self, result: FeedbackResult) -> None: ...

    def before_feedback_submitted(self, message: str) -> str: ...


class FormNotAttachedError(RuntimeError):
    """Raised when a click arrives for a form that has no host."""


class FeedbackFormController:
    """Binds the message/email/is-bug controls to validation and the client.

    The controller is either Idle (collecting input) or, for the duration of
    a send, Finished; a successful send or a cancel clears the form and it is
    Idle again. ``SUBMITTED`` is reported as soon as the payload is handed
    to the client, whatever happens to the request afterwards.
    """

    def __init__(
        self,
        client: FeedbackClient,
        before_submit: BeforeSubmit | None = None,
        on_finished: OnFinished | None = None,
    ) -> None:
        self._client = client
        self.before_submit = before_submit
        self.on_finished = on_finished

        self.message_field = TextField("message")
        self.email_field = TextField("email")
        self.is_bug_checkbox = CheckBox()
        self.state = FormState()
        self.host: FormHost | None = None

    # --- lifecycle ---

    def attach(self, host: FormHost) -> None:
        self.host = host
        self.message_field.add_text_changed_listener(self._on_text_changed)
        self.email_field.add_text_changed_listener(self._on_text_changed)

    def resume(self) -> None:
        """Form is on screen: record the view and make room for the keyboard.

        The window's current soft input mode is cached so it can be put
        back when the keyboard is dismissed or the form is paused.
        """
        host = self._require_host()
        self._client.log_feedback_displayed()

        window = host.window
        self.state.original_input_mode = window.soft_input_mode
        window.set_soft_input_mode(SoftInputMode.ADJUST_RESIZE)

    def pause(self) -> None:
        if self.host is not None:
            self.host.window.set_soft_input_mode(self.state.original_input_mode)

    def detach(self) -> None:
        self.message_field.remove_text_changed_listener(self._on_text_changed)
        self.email_field.remove_text_changed_listener(self._on_text_changed)
        self.host = None

    def set_feedback_finished_listener(
        self, listener: FeedbackFinishedListener | None
    ) -> None:
        """Install both callbacks from one listener object (or clear them)."""
        if listener is None:
            self.before_submit = None
            self.on_finished = None
            return
        self.before_submit = listener.before_feedback_submitted
        self.on_finished = listener.on_feedback_finished

    # --- validation ---

    def validate_message(self) -> bool:
        error = check_message(self.message_field.text)
        if error is None:
            self.message_field.set_error(None)
            return True
        self._display_error(self.message_field, error)
        return False

    def validate_email(self) -> bool:
        error = check_email(self.email_field.text)
        if error is None:
            self.email_field.set_error(None)
            return True
        self._display_error(self.email_field, error)
        return False

    def ensure_valid(self) -> bool:
        # Both validators must run so both fields' errors are refreshed.
        message_ok = self.validate_message()
        email_ok = self.validate_email()
        return message_ok and email_ok

    # --- clicks ---

    def on_send(self) -> bool:
        """Handle the send button. Returns True if feedback was submitted."""
        self._require_host()
        if not self.ensure_valid():
            self.state.error_message_shown = True
            return False

        self.hide_soft_keyboard()
        submission = FeedbackSubmission(
            email=self.email_field.text,
            message=self.message_field.text,
            is_bug=self.is_bug_checkbox.checked,
        )
        if self.before_submit is not None:
            submission.message = self.before_submit(submission.message)

        self._client.submit_feedback(
            submission.email, submission.message, submission.is_bug
        )
        logger.info("Feedback submitted (is_bug=%s)", submission.is_bug)
        self._finish(FeedbackResult.SUBMITTED)
        return True

    def on_cancel(self) -> None:
        self._require_host()
        self.hide_soft_keyboard()
        self._finish(FeedbackResult.CANCELLED)

    def clear(self) -> None:
        self.state.error_message_shown = False
        self.email_field.set_text("")
        self.message_field.set_text("")
        self.is_bug_checkbox.set_checked(False)
        self.email_field.set_error(None)
        self.message_field.set_error(None)

    def hide_soft_keyboard(self) -> None:
        window = self._require_host().window
        window.set_soft_input_mode(self.state.original_input_mode)
        if window.current_focus is not None:
            window.hide_keyboard()

    # --- internals ---

    def _finish(self, result: FeedbackResult) -> None:
        if self.on_finished is not None:
            self.on_finished(result)
        self.clear()

    def _on_text_changed(self, _field: TextField) -> None:
        # Errors only appear live after the first failed send.
        if self.state.error_message_shown:
            self.ensure_valid()

    def _display_error(self, field: TextField, error: FormError) -> None:
        if self.host is None:
            logger.warning(
                "Host is detached. Cannot set feedback form %s error", field.name
            )
            return
        field.set_error(self.host.get_string(error))

    def _require_host(self) -> FormHost:
        if self.host is None:
            raise FormNotAttachedError("Feedback form is not attached to a host")
        return self.host

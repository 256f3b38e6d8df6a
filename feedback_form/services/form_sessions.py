"""Server-side feedback form sessions.

Each open form owns one ``FeedbackFormController`` attached to a headless
host. The HTTP layer feeds it text-change and click events.
"""

import logging
import uuid
from dataclasses import dataclass, field

from feedback_form.config import get_settings
from feedback_form.models.feedback import (
    FeedbackResult,
    FieldUpdate,
    FormField,
    FormView,
    SoftInputMode,
)
from feedback_form.services.appboy_client import get_appboy_client
from feedback_form.services.cache import TTLCache
from feedback_form.services.form_controller import FeedbackFormController
from feedback_form.services.widgets import FormHost, Window

logger = logging.getLogger(__name__)

_sessions: TTLCache | None = None


@dataclass
class FormSession:
    form_id: str
    controller: FeedbackFormController
    host: FormHost
    results: list[FeedbackResult] = field(default_factory=list)

    @property
    def last_result(self) -> FeedbackResult | None:
        return self.results[-1] if self.results else None


def _get_sessions() -> TTLCache:
    global _sessions
    if _sessions is None:
        settings = get_settings()
        _sessions = TTLCache(
            ttl=settings.form_session_ttl, max_size=settings.max_open_forms
        )
    return _sessions


def open_form(
    soft_input_mode: SoftInputMode = SoftInputMode.UNSPECIFIED,
) -> FormSession:
    """Create a form, attach it to a fresh host window and put it on screen."""
    settings = get_settings()
    host = FormHost(Window(soft_input_mode), settings.error_messages)
    controller = FeedbackFormController(get_appboy_client())
    session = FormSession(form_id=uuid.uuid4().hex, controller=controller, host=host)
    controller.on_finished = session.results.append

    controller.attach(host)
    controller.resume()
    _get_sessions().set(session.form_id, session)
    logger.info("Opened feedback form %s", session.form_id)
    return session


def get_form(form_id: str) -> FormSession | None:
    return _get_sessions().get(form_id)


def close_form(form_id: str) -> bool:
    """Take the form off screen and forget it. Returns False if unknown."""
    session = _get_sessions().pop(form_id)
    if session is None:
        return False
    session.controller.pause()
    session.controller.detach()
    logger.info("Closed feedback form %s", form_id)
    return True


def apply_update(session: FormSession, update: FieldUpdate) -> None:
    """Replay a text-change event onto the form's controls."""
    controller = session.controller
    if update.focus is not None:
        target = (
            controller.message_field
            if update.focus == FormField.MESSAGE
            else controller.email_field
        )
        session.host.window.focus(target)
    if update.message is not None:
        controller.message_field.set_text(update.message)
    if update.email is not None:
        controller.email_field.set_text(update.email)
    if update.is_bug is not None:
        controller.is_bug_checkbox.set_checked(update.is_bug)


def form_view(session: FormSession) -> FormView:
    controller = session.controller
    window = session.host.window
    return FormView(
        form_id=session.form_id,
        message=controller.message_field.text,
        email=controller.email_field.text,
        is_bug=controller.is_bug_checkbox.checked,
        message_error=controller.message_field.error,
        email_error=controller.email_field.error,
        error_message_shown=controller.state.error_message_shown,
        soft_input_mode=window.soft_input_mode,
        keyboard_visible=window.keyboard_visible,
    )

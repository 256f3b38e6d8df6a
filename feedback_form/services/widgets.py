"""Headless stand-ins for the widgets a feedback form is drawn with.

``TextField`` is an editable text box with an inline error, ``Window`` owns
the soft keyboard, and ``FormHost`` is what a form is attached to.
"""

import logging
from collections.abc import Callable, Mapping

from feedback_form.models.feedback import FormError, SoftInputMode

logger = logging.getLogger(__name__)

TextChangedListener = Callable[["TextField"], None]


class TextField:
    """Single editable text box.

    Listeners run after every text change, including programmatic ones
    made through ``set_text``.
    """

    def __init__(self, name: str, text: str = "") -> None:
        self.name = name
        self._text = text
        self.error: str | None = None
        self._listeners: list[TextChangedListener] = []

    @property
    def text(self) -> str:
        return self._text

    def set_text(self, text: str) -> None:
        self._text = text
        for listener in list(self._listeners):
            listener(self)

    def set_error(self, error: str | None) -> None:
        self.error = error

    def add_text_changed_listener(self, listener: TextChangedListener) -> None:
        if listener not in self._listeners:
            self._listeners.append(listener)

    def remove_text_changed_listener(self, listener: TextChangedListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    @property
    def listener_count(self) -> int:
        return len(self._listeners)


class CheckBox:
    def __init__(self, checked: bool = False) -> None:
        self.checked = checked

    def set_checked(self, checked: bool) -> None:
        self.checked = checked


class Window:
    """Window the form is drawn in, tracking focus and the soft keyboard."""

    def __init__(
        self, soft_input_mode: SoftInputMode = SoftInputMode.UNSPECIFIED
    ) -> None:
        self.soft_input_mode = soft_input_mode
        self.current_focus: TextField | None = None
        self.keyboard_visible = False

    def set_soft_input_mode(self, mode: SoftInputMode) -> None:
        if mode != self.soft_input_mode:
            logger.debug("Soft input mode %s -> %s", self.soft_input_mode, mode)
        self.soft_input_mode = mode

    def focus(self, field: TextField | None) -> None:
        """Move focus to *field*; focusing a text field opens the keyboard."""
        self.current_focus = field
        if field is not None:
            self.keyboard_visible = True

    def hide_keyboard(self) -> None:
        self.keyboard_visible = False


class FormHost:
    """What a feedback form is attached to: a window plus string resources."""

    def __init__(
        self,
        window: Window | None = None,
        error_messages: Mapping[str, str] | None = None,
    ) -> None:
        self.window = window or Window()
        self._error_messages = dict(error_messages or {})

    def get_string(self, error: FormError) -> str:
        return self._error_messages.get(error.value, error.value)

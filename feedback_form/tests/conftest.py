"""Shared fixtures for feedback form tests."""

import pytest

from feedback_form.models.feedback import FeedbackResult, SoftInputMode
from feedback_form.services.form_controller import FeedbackFormController
from feedback_form.services.widgets import FormHost, Window

ERROR_MESSAGES = {
    "invalid_message": "Message required",
    "empty_email": "Email required",
    "invalid_email": "Email invalid",
}


@pytest.fixture(autouse=True)
def _reset_global_state():
    """Reset all module-level singletons and caches between tests."""
    yield

    # 1. Settings LRU cache
    from feedback_form.config import get_settings

    get_settings.cache_clear()

    # 2. HTTP client singleton
    import feedback_form.services.http_client as http_mod

    http_mod._client = None

    # 3. Appboy client singleton
    import feedback_form.services.appboy_client as appboy_mod

    appboy_mod._appboy_client = None

    # 4. Open form sessions
    import feedback_form.services.form_sessions as sessions_mod

    sessions_mod._sessions = None


@pytest.fixture
def mock_settings(monkeypatch):
    """Provide a Settings object with safe test defaults."""
    from feedback_form.config import Settings, get_settings

    test_settings = Settings(
        appboy_endpoint="https://appboy.test/api/v3",
        appboy_api_key="test-api-key",
        device_id="test-device",
        error_messages=ERROR_MESSAGES,
    )

    get_settings.cache_clear()
    monkeypatch.setattr("feedback_form.config.get_settings", lambda: test_settings)

    # Patch get_settings in all modules that import it directly
    # (from feedback_form.config import get_settings creates a local binding
    # that the feedback_form.config monkeypatch above does not affect)
    for mod_path in [
        "feedback_form.services.http_client",
        "feedback_form.services.appboy_client",
        "feedback_form.services.form_sessions",
        "feedback_form.main",
        "scripts.submit_feedback",
    ]:
        monkeypatch.setattr(f"{mod_path}.get_settings", lambda: test_settings)

    return test_settings


class RecordingClient:
    """In-memory stand-in for the Appboy client."""

    def __init__(self) -> None:
        self.submissions: list[tuple[str, str, bool]] = []
        self.displayed = 0

    def submit_feedback(self, email: str, message: str, is_bug: bool) -> bool:
        self.submissions.append((email, message, is_bug))
        return True

    def log_feedback_displayed(self) -> bool:
        self.displayed += 1
        return True


@pytest.fixture
def client():
    return RecordingClient()


@pytest.fixture
def results() -> list[FeedbackResult]:
    return []


@pytest.fixture
def host():
    return FormHost(Window(SoftInputMode.ADJUST_PAN), ERROR_MESSAGES)


@pytest.fixture
def controller(client, results, host):
    """A controller attached to *host* and on screen."""
    ctrl = FeedbackFormController(client, on_finished=results.append)
    ctrl.attach(host)
    ctrl.resume()
    return ctrl

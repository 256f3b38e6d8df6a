"""Submit feedback from the command line through a headless feedback form.

Usage:
    python -m scripts.submit_feedback --email me@example.com --message "Crash on launch" --bug
"""

import argparse
import asyncio
import logging
import sys

from feedback_form.config import get_settings
from feedback_form.models.feedback import FeedbackResult
from feedback_form.services.appboy_client import get_appboy_client
from feedback_form.services.form_controller import FeedbackFormController
from feedback_form.services.http_client import close_shared_client
from feedback_form.services.widgets import FormHost

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)


def _parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--email", default="")
    parser.add_argument("--message", default="")
    parser.add_argument("--bug", action="store_true", help="Report as a bug")
    return parser.parse_args(argv)


async def main(argv: list[str] | None = None) -> int:
    args = _parse_args(sys.argv[1:] if argv is None else argv)
    settings = get_settings()
    client = get_appboy_client()
    results: list[FeedbackResult] = []

    controller = FeedbackFormController(client, on_finished=results.append)
    controller.attach(FormHost(error_messages=settings.error_messages))
    controller.resume()

    controller.message_field.set_text(args.message)
    controller.email_field.set_text(args.email)
    controller.is_bug_checkbox.set_checked(args.bug)

    sent = controller.on_send()
    if not sent:
        print("Feedback not sent:")
        for field in (controller.message_field, controller.email_field):
            if field.error:
                print(f"  {field.name}: {field.error}")
    controller.pause()
    controller.detach()

    await client.close()
    await close_shared_client()

    if not sent:
        return 1
    print(f"Feedback {results[-1].value}.")
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))

from __future__ import annotations

import argparse
import getpass
import json
import logging
import sys
from typing import Callable, Optional, Sequence

from .agent.agent_loop import AuthTaskRequest
from .agent.auth import Credentials
from .agent.orchestrator import run_auth_task_blocking
from .config import Settings, get_settings
from .errors import AuthRunError

PROMPTS = (
    ("email", "Email", False),
    ("password", "Password", True),
    ("confirm", "Confirm password", True),
    ("first", "First name", False),
    ("last", "Last name", False),
)


def build_parser(settings: Settings) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="auth-autofill",
        description="Detect and fill the signup/login form on a page, optionally submit and verify.",
    )
    parser.add_argument("-u", "--url", default=settings.default_url, help="URL to open")
    parser.add_argument("--email", help="email")
    parser.add_argument("--password", help="password")
    parser.add_argument("--confirm", help="confirm password")
    parser.add_argument("--first", help="first name")
    parser.add_argument("--last", help="last name")
    parser.add_argument("--submit", action="store_true", help="click the submit button after filling")
    parser.add_argument("--assert-text", help="assert visible text after submit")
    parser.add_argument("--assert-selector", help="assert selector visible after submit")
    parser.add_argument("--retries", type=int, default=settings.retries, help="retry count for fragile steps")
    parser.add_argument("--headless", action="store_true", default=settings.headless, help="run browser headless")
    parser.add_argument("--no-video", dest="video", action="store_false", default=settings.record_video)
    parser.add_argument("--no-prompt", dest="prompt", action="store_false", help="never prompt for missing values")
    parser.add_argument("--log-level", default="INFO")
    return parser


def collect_credentials(
    args: argparse.Namespace,
    ask: Callable[[str], str] = input,
    ask_secret: Callable[[str], str] = getpass.getpass,
) -> Credentials:
    """Use command-line values, prompting for the missing ones; blank answers stay unset."""
    values: dict[str, Optional[str]] = {}
    for attr, label, secret in PROMPTS:
        value = getattr(args, attr)
        if value is None and args.prompt:
            value = (ask_secret if secret else ask)(f"{label}: ")
        values[attr] = value or None
    return Credentials(
        email=values["email"],
        password=values["password"],
        confirm_password=values["confirm"],
        first_name=values["first"],
        last_name=values["last"],
    )


def main(argv: Optional[Sequence[str]] = None) -> int:
    base = get_settings()
    args = build_parser(base).parse_args(argv)
    logging.basicConfig(level=args.log_level.upper(), format="%(asctime)s %(levelname)s %(message)s")

    settings = base.with_overrides(retries=args.retries, headless=args.headless, record_video=args.video)
    request = AuthTaskRequest(
        url=args.url,
        credentials=collect_credentials(args),
        submit=args.submit,
        assert_text=args.assert_text,
        assert_selector=args.assert_selector,
    )

    print(f"[cli] Opening {request.url} ...")
    try:
        report = run_auth_task_blocking(request, settings)
    except AuthRunError as exc:
        print(f"[cli] Run failed: {exc}", file=sys.stderr)
        if exc.video_path:
            print(f"[cli] Partial video saved at: {exc.video_path}")
        return 1

    print("[cli] Run complete.")
    print("Screenshots:")
    for path in report.screenshots:
        print(f"   {path}")
    print(f"Video: {report.video_path or '(video off)'}")
    print("Detection result:", json.dumps(report.fill.to_dict(), indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())

"""gistwatch entry point.

Usage: gistwatch USERNAME RECIPIENT SENDER [SMTP_SERVER] [WATERMARK_PATH]

Run once per schedule (e.g. from cron): emails the comments left on the
user's gists since the previous successful run.
"""

import argparse
import logging
import sys
from pathlib import Path

from gistwatch.adapters.github import GitHubAdapter
from gistwatch.config import AppConfig, load_config
from gistwatch.logging import setup_logging
from gistwatch.models import NotificationRequest
from gistwatch.services.gist_source import RemoteGistSource
from gistwatch.services.notifier import NotificationDispatcher
from gistwatch.services.run import RunCoordinator
from gistwatch.services.watermark import WatermarkStore

LOG = logging.getLogger("gistwatch.main")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse CLI arguments; positionals override config file and env."""
    parser = argparse.ArgumentParser(
        prog="gistwatch",
        description="Email a digest of new comments on a user's gists",
    )
    parser.add_argument("username", nargs="?", help="GitHub user whose gists are polled")
    parser.add_argument("recipient", nargs="?", help="Digest recipient address")
    parser.add_argument("sender", nargs="?", help="Sender address (also the SMTP login)")
    parser.add_argument("smtp_server", nargs="?", help="Mail relay host (default smtp.gmail.com)")
    parser.add_argument("watermark_path", nargs="?", type=Path, help="Last run time file")
    parser.add_argument("--password", help="Sender password (prefer SMTP_PASSWORD or SMTP_PASSWORD_FILE)")
    parser.add_argument(
        "--config",
        "-c",
        type=Path,
        default=Path("config.yaml"),
        help="Path to YAML config file",
    )
    parser.add_argument("--delay", type=float, help="Seconds to wait before each comments request")
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Print the digest without sending it or advancing the watermark",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Log at DEBUG level")
    parser.add_argument(
        "--check",
        action="store_true",
        help="Only load and validate config, then exit",
    )
    return parser.parse_args(argv)


def apply_args(config: AppConfig, args: argparse.Namespace) -> AppConfig:
    """Return config with CLI values layered over file and env values."""
    watch = config.watch.model_copy(
        update={
            k: v
            for k, v in {"username": args.username, "watermark_path": args.watermark_path}.items()
            if v is not None
        }
    )
    mail = config.mail.model_copy(
        update={
            k: v
            for k, v in {
                "recipient": args.recipient,
                "sender": args.sender,
                "server": args.smtp_server,
                "password": args.password,
            }.items()
            if v is not None
        }
    )
    github = config.github
    if args.delay is not None:
        github = github.model_copy(update={"comment_fetch_delay": args.delay})
    return config.model_copy(update={"watch": watch, "mail": mail, "github": github})


def _missing(config: AppConfig, dry_run: bool) -> list[str]:
    missing = []
    if not config.watch.username:
        missing.append("username")
    if not dry_run:
        if not config.mail.recipient:
            missing.append("recipient")
        if not config.mail.sender:
            missing.append("sender")
        if not config.smtp_password_resolved:
            missing.append("password")
    return missing


def build_coordinator(config: AppConfig, dry_run: bool = False) -> RunCoordinator:
    """Wire the pipeline from config."""
    adapter = GitHubAdapter(
        token=config.github_token_resolved,
        api_url=config.github.api_url,
        timeout=config.github.timeout,
    )
    request = NotificationRequest(
        recipient=config.mail.recipient or "",
        sender=config.mail.sender or "",
        password=config.smtp_password_resolved or "",
        smtp_server=config.mail.server,
        smtp_port=config.mail.port,
    )
    return RunCoordinator(
        store=WatermarkStore(config.watch.watermark_path),
        source=RemoteGistSource(adapter, delay=config.github.comment_fetch_delay),
        dispatcher=NotificationDispatcher(),
        request=request,
        username=config.watch.username or "",
        dry_run=dry_run,
    )


def main(argv: list[str] | None = None) -> int:
    """Entry point: one run, exit 0 on success and 1 on any fatal error."""
    args = parse_args(argv)
    config = apply_args(load_config(args.config), args)
    setup_logging(config.logging, verbose=args.verbose)

    missing = _missing(config, args.dry_run)
    if missing:
        LOG.error("Missing required settings: %s", ", ".join(missing))
        return 2

    if args.check:
        print("Config OK:", config.watch.username, config.mail.server, config.watch.watermark_path)
        return 0

    try:
        build_coordinator(config, dry_run=args.dry_run).run()
    except KeyboardInterrupt:
        return 1
    except Exception as e:
        LOG.exception("Fatal error: %s", e)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())

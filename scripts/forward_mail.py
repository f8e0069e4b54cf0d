"""Forward unread tracker and relay mail to the followers' distribution list."""
from __future__ import annotations

import argparse
from pathlib import Path

from voyage_tracker.core.config import DEFAULT_CONFIG_FILE, load_config
from voyage_tracker.core.logging_config import configure_logging
from voyage_tracker.ingest.forward import collect_forwards, send_forwards
from voyage_tracker.ingest.mail import MailInbox


def main() -> None:
    parser = argparse.ArgumentParser()
    parser.add_argument("--config", type=Path, default=DEFAULT_CONFIG_FILE)
    parser.add_argument("--dry-run", action="store_true", help="Print the messages instead of sending them")
    args = parser.parse_args()

    config = load_config(args.config)
    configure_logging(config.logging.level)

    with MailInbox(config.mail) as inbox:
        messages = collect_forwards(inbox, config.mail, config.forward)

    if args.dry_run:
        for message in messages:
            print(message.as_string())
            print("-" * 60)
        return

    sent = send_forwards(messages, config.mail, config.forward)
    print(f"Forwarded {sent} messages to {config.forward.to_address}")


if __name__ == "__main__":
    main()

"""IMAP inbox access and merging of mailed waypoints into a voyage."""
from __future__ import annotations

import email
import imaplib
import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from email.header import decode_header, make_header
from email.message import Message
from email.utils import parsedate_to_datetime
from typing import Callable, List, Optional

from voyage_tracker.core.config import MailConfig
from voyage_tracker.core.errors import InvalidInputError, VoyageError
from voyage_tracker.core.logging_config import timed
from voyage_tracker.core.voyage import Voyage
from voyage_tracker.core.waypoint import Waypoint, WaypointSource
from voyage_tracker.ingest.parsers import parse_relay_mail, parse_tracker_fix


logger = logging.getLogger(__name__)

# searching from the day after the epoch avoids servers that reject 1-Jan-1970
FULL_HISTORY_SINCE = datetime(1970, 1, 2, tzinfo=timezone.utc)

_MONTHS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")


class MailError(VoyageError):
    """Raised when the mail server refuses a request."""


@dataclass
class FetchedMail:
    """The parts of a message the parsers need."""
    subject: Optional[str]
    date: Optional[datetime]
    body: str


@dataclass
class MergeReport:
    """Outcome of merging a batch of mailed waypoints."""
    added: List[Waypoint] = field(default_factory=list)
    deduplicated: List[Waypoint] = field(default_factory=list)


def imap_date(value: datetime) -> str:
    """Format a date for an IMAP ``SINCE`` criterion, independent of locale."""
    return f"{value.day}-{_MONTHS[value.month - 1]}-{value.year}"


def _text_body(message: Message) -> str:
    if message.is_multipart():
        for part in message.walk():
            if part.get_content_type() == "text/plain" and not part.get_filename():
                return _decode_part(part)
        return ""
    return _decode_part(message)


def _decode_part(part: Message) -> str:
    payload = part.get_payload(decode=True)
    if payload is None:
        return ""
    charset = part.get_content_charset() or "utf-8"
    return payload.decode(charset, errors="replace")


def parse_message(raw: bytes) -> FetchedMail:
    """Parse an RFC 822 message into subject, date and plain-text body."""
    message = email.message_from_bytes(raw)
    subject = message.get("Subject")
    if subject is not None:
        subject = str(make_header(decode_header(subject)))
    date = message.get("Date")
    parsed_date = None
    if date:
        try:
            parsed_date = parsedate_to_datetime(date)
        except (TypeError, ValueError):
            logger.warning("[MAIL] Unreadable date header %r", date)
    return FetchedMail(subject=subject, date=parsed_date, body=_text_body(message))


class MailInbox:
    """A logged-in IMAP mailbox, usable as a context manager."""

    def __init__(self, config: MailConfig) -> None:
        for name in ("server", "account", "password"):
            if not getattr(config, name):
                raise InvalidInputError(f"mail.{name} must be set")
        self.config = config
        self._imap: Optional[imaplib.IMAP4] = None

    def open(self) -> "MailInbox":
        if self._imap is not None:
            raise MailError("IMAP connection is already open")
        cfg = self.config
        with timed(f"Signing in to mail account {cfg.account}"):
            if cfg.use_ssl:
                imap = imaplib.IMAP4_SSL(cfg.server, cfg.port or imaplib.IMAP4_SSL_PORT)
            else:
                imap = imaplib.IMAP4(cfg.server, cfg.port or imaplib.IMAP4_PORT)
            try:
                imap.login(cfg.account, cfg.password)
                status, _ = imap.select(cfg.mailbox)
            except imaplib.IMAP4.error as exc:
                imap.logout()
                raise MailError(f"Could not open {cfg.mailbox} for {cfg.account}: {exc}") from exc
            if status != "OK":
                imap.logout()
                raise MailError(f"Could not select mailbox {cfg.mailbox}")
        self._imap = imap
        return self

    def close(self) -> None:
        if self._imap is None:
            raise MailError("IMAP connection is already closed")
        try:
            self._imap.close()
        finally:
            self._imap.logout()
            self._imap = None

    def __enter__(self) -> "MailInbox":
        return self.open()

    def __exit__(self, *exc_info) -> None:
        self.close()

    def _connection(self) -> imaplib.IMAP4:
        if self._imap is None:
            raise MailError("IMAP connection must be open")
        return self._imap

    def search(self, sender: str, since: Optional[datetime] = None, unseen: bool = False) -> List[bytes]:
        criteria = ["FROM", f'"{sender}"']
        if since is not None:
            criteria += ["SINCE", imap_date(since)]
        if unseen:
            criteria.insert(0, "UNSEEN")
        status, data = self._connection().search(None, *criteria)
        if status != "OK":
            raise MailError(f"Search for mail from {sender} failed")
        return data[0].split() if data and data[0] else []

    def fetch(self, message_id: bytes) -> FetchedMail:
        status, data = self._connection().fetch(message_id, "(RFC822)")
        if status != "OK" or not data or not isinstance(data[0], tuple):
            raise MailError(f"Fetching message {message_id!r} failed")
        return parse_message(data[0][1])


def _merge(
    voyage: Voyage,
    inbox: MailInbox,
    source: WaypointSource,
    sender: str,
    merge_all: bool,
    to_waypoint: Callable[[FetchedMail], Waypoint],
    label: str,
) -> MergeReport:
    last = voyage.last_waypoint(source)
    since = FULL_HISTORY_SINCE if last is None or merge_all else last.time

    with timed(f"Checking for new {label} messages since {imap_date(since)}"):
        ids = inbox.search(sender, since)

    report = MergeReport()
    if not ids:
        logger.info("[MAIL] No new %s messages found", label)
        return report

    with timed(f"Processing {len(ids)} {label} messages"):
        for message_id in ids:
            point = to_waypoint(inbox.fetch(message_id))
            if voyage.add_waypoint(point):
                report.added.append(point)
            else:
                report.deduplicated.append(point)

    logger.info("[MAIL] Added %d %s messages, skipped %d duplicates",
                len(report.added), label, len(report.deduplicated))
    return report


def merge_tracker_fixes(voyage: Voyage, inbox: MailInbox, config: MailConfig, merge_all: bool = False) -> MergeReport:
    """Add tracker check-ins from the inbox to ``voyage`` without recomputing it."""
    if not config.tracker_address:
        raise InvalidInputError("mail.tracker_address must be set")
    return _merge(
        voyage, inbox, WaypointSource.TRACKER_FIX, config.tracker_address, merge_all,
        lambda mail: parse_tracker_fix(mail.body), "tracker",
    )


def merge_relay_mail(voyage: Voyage, inbox: MailInbox, config: MailConfig, merge_all: bool = False) -> MergeReport:
    """Add relayed mail from the inbox to ``voyage`` without recomputing it."""
    if not config.relay_address:
        raise InvalidInputError("mail.relay_address must be set")
    return _merge(
        voyage, inbox, WaypointSource.RELAY_MAIL, config.relay_address, merge_all,
        lambda mail: parse_relay_mail(mail.subject, mail.date, mail.body, config.relay_address), "relay",
    )

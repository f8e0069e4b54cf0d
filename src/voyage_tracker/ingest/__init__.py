"""Mail ingestion of tracker fixes and relayed messages."""

from voyage_tracker.ingest.mail import (
    FetchedMail,
    MailInbox,
    MergeReport,
    merge_relay_mail,
    merge_tracker_fixes,
)
from voyage_tracker.ingest.parsers import MailParseError, parse_relay_mail, parse_tracker_fix

__all__ = [
    "FetchedMail",
    "MailInbox",
    "MailParseError",
    "MergeReport",
    "merge_relay_mail",
    "merge_tracker_fixes",
    "parse_relay_mail",
    "parse_tracker_fix",
]

"""Forward unread tracker and relay mail to a distribution address."""
from __future__ import annotations

import logging
import smtplib
from email.message import EmailMessage
from typing import List

from voyage_tracker.core.config import ForwardConfig, MailConfig
from voyage_tracker.core.errors import InvalidInputError
from voyage_tracker.ingest.mail import FetchedMail, MailInbox
from voyage_tracker.ingest.parsers import clean_relay_body


logger = logging.getLogger(__name__)

TRACKER_SUBJECT = "Tracker Update"
# tracker mails repeat boilerplate after this blank-line block
_TRACKER_FOOTER = "\r\n\r\n \r\n\r\n"


def _message(forward: ForwardConfig, subject: str, body: str) -> EmailMessage:
    message = EmailMessage()
    message["From"] = forward.from_address
    message["To"] = forward.to_address
    message["Subject"] = subject
    message.set_content(body)
    return message


def tracker_forward(mail: FetchedMail, forward: ForwardConfig) -> EmailMessage:
    body = mail.body.split(_TRACKER_FOOTER)[0].lstrip()
    return _message(forward, TRACKER_SUBJECT, body)


def relay_forward(mail: FetchedMail, forward: ForwardConfig, relay_address: str) -> EmailMessage:
    body = clean_relay_body(mail.body, relay_address)
    return _message(forward, mail.subject or "", body)


def collect_forwards(inbox: MailInbox, mail: MailConfig, forward: ForwardConfig) -> List[EmailMessage]:
    """Build forward messages for every unread tracker and relay mail."""
    if not forward.from_address or not forward.to_address:
        raise InvalidInputError("forward.from_address and forward.to_address must be set")

    messages: List[EmailMessage] = []
    if mail.tracker_address:
        for message_id in inbox.search(mail.tracker_address, unseen=True):
            messages.append(tracker_forward(inbox.fetch(message_id), forward))
    if mail.relay_address:
        for message_id in inbox.search(mail.relay_address, unseen=True):
            messages.append(relay_forward(inbox.fetch(message_id), forward, mail.relay_address))
    return messages


def send_forwards(messages: List[EmailMessage], mail: MailConfig, forward: ForwardConfig) -> int:
    """Send ``messages`` over SMTP with the mail account's credentials."""
    if not messages:
        return 0
    server = forward.smtp_server or mail.server
    with smtplib.SMTP(server, forward.smtp_port) as smtp:
        if mail.account and mail.password:
            smtp.login(mail.account, mail.password)
        for message in messages:
            smtp.send_message(message)
    logger.info("[FORWARD] Sent %d messages to %s", len(messages), forward.to_address)
    return len(messages)

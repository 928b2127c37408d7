"""
Extraction of displayable text from recording bodies, and truncation
policies applied to it before posting.
"""

import email
import re
from email import policy
from email.errors import MessageError
from typing import Callable, Dict, Optional

from src.crm.errors import ParseError
from src.crm.models import Recording, RecordingType
from src.util.logging import get_logger

logger = get_logger(__name__)

PLAIN_TEXT_HEADER = "Content-Type: text/plain; charset=UTF-8\n\n"

_HEADER_LINE = re.compile(r"^([A-Za-z0-9!#$%&'*+.^_`|~-]+):(.*)$")

_TOKEN = r"[A-Za-z0-9!#$%&'*+.^_`|~-]+"
_CONTENT_TYPE = re.compile(rf"^{_TOKEN}/{_TOKEN}\s*(;.*)?$", re.DOTALL)

_MESSAGE_ERRORS = (MessageError, LookupError, UnicodeError, ValueError)

TruncatePolicy = Callable[[str], str]


def _leading_headers(body: str) -> Optional[Dict[str, str]]:
    """Header fields of a leading `Name: value` block ended by a blank line."""
    head, sep, _ = body.replace("\r\n", "\n").partition("\n\n")
    if not sep or not head:
        return None

    headers: Dict[str, str] = {}
    name = None
    for line in head.split("\n"):
        if line[:1] in (" ", "\t") and name:
            # folded header continuation
            headers[name] += " " + line.strip()
            continue
        match = _HEADER_LINE.match(line)
        if not match:
            return None
        name = match.group(1).lower()
        headers[name] = match.group(2).strip()
    return headers


def has_mime_headers(body: str) -> bool:
    """
    Whether the body is a complete MIME message: it opens with a header
    block carrying MIME-Version and a `maintype/subtype` Content-Type.
    """
    headers = _leading_headers(body)
    if not headers or "mime-version" not in headers:
        return False
    return bool(_CONTENT_TYPE.match(headers.get("content-type", "")))


def extract_text(raw: str) -> str:
    """Decode the preferred text/plain part of a MIME message."""
    message = email.message_from_bytes(raw.encode("utf-8"), policy=policy.default)
    part = message.get_body(preferencelist=("plain",))
    if part is None:
        return ""
    return part.get_content()


async def parse_body(recording: Recording) -> str:
    """
    Return the plain text of a recording's body.

    Notes are returned verbatim. Other bodies are wrapped in a text/plain
    header and parsed as MIME. A body that is itself a complete MIME
    message is decoded as one first, falling back to the wrapped form when
    that fails. When nothing is extracted the raw body is used.

    Raises:
        ParseError: If the body cannot be parsed
    """
    if recording.type == RecordingType.NOTE.value:
        return recording.body

    body = recording.body or ""

    if has_mime_headers(body):
        try:
            return extract_text(body) or body
        except _MESSAGE_ERRORS as e:
            logger.debug(
                f"Recording {recording.id} is not a readable MIME message ({e}), "
                "parsing it as plain text"
            )

    try:
        text = extract_text(PLAIN_TEXT_HEADER + body)
    except _MESSAGE_ERRORS as e:
        raise ParseError(f"Could not parse body of recording {recording.id}: {e}") from e

    return text or body


def no_truncation(text: str) -> str:
    return text


def truncate_lines(max_chars: int = 700, max_lines: int = 5) -> TruncatePolicy:
    """
    Policy keeping at most `max_lines` lines and `max_chars` characters.
    Text under both limits is returned unchanged.
    """

    def truncate(text: str) -> str:
        lines = text.split("\n")
        if len(text) < max_chars and len(lines) < max_lines:
            return text
        return "\n".join(lines[:max_lines])[:max_chars]

    return truncate


def truncation_from_settings(slack_settings) -> TruncatePolicy:
    if not slack_settings.truncate:
        return no_truncation
    return truncate_lines(
        max_chars=slack_settings.truncate_max_chars,
        max_lines=slack_settings.truncate_max_lines,
    )

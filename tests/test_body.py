"""Tests for body parsing and truncation policies."""

import pytest

from src.crm.body import (
    has_mime_headers,
    no_truncation,
    parse_body,
    truncate_lines,
    truncation_from_settings,
)
from src.crm.errors import ParseError

QUOTED_PRINTABLE_EMAIL = (
    "MIME-Version: 1.0\n"
    "Content-Type: text/plain; charset=utf-8\n"
    "Content-Transfer-Encoding: quoted-printable\n"
    "\n"
    "Caf=C3=A9 meeting moved to Friday.=\n"
    " See you there.\n"
)

MULTIPART_EMAIL = (
    "MIME-Version: 1.0\n"
    'Content-Type: multipart/alternative; boundary="XYZ"\n'
    "\n"
    "--XYZ\n"
    "Content-Type: text/plain; charset=utf-8\n"
    "\n"
    "Plain version\n"
    "--XYZ\n"
    "Content-Type: text/html; charset=utf-8\n"
    "\n"
    "<p>HTML version</p>\n"
    "--XYZ--\n"
)


class TestParseBody:
    @pytest.mark.asyncio
    async def test_note_body_is_returned_verbatim(self, make_recording):
        body = "Line one\r\n  *bold*  \n\nContent-Type: not a header =C3=A9"
        record = make_recording(type="note", body=body)

        assert await parse_body(record) == body

    @pytest.mark.asyncio
    async def test_plain_email_body(self, make_recording):
        record = make_recording(type="email", body="Thanks for the call.\nTalk soon.")

        assert await parse_body(record) == "Thanks for the call.\nTalk soon."

    @pytest.mark.asyncio
    async def test_non_ascii_email_body(self, make_recording):
        record = make_recording(type="email", body="Grüße aus Köln ✓")

        assert await parse_body(record) == "Grüße aus Köln ✓"

    @pytest.mark.asyncio
    async def test_quoted_printable_email_is_decoded(self, make_recording):
        record = make_recording(type="email", body=QUOTED_PRINTABLE_EMAIL)

        text = await parse_body(record)

        assert text.strip() == "Café meeting moved to Friday. See you there."

    @pytest.mark.asyncio
    async def test_multipart_email_uses_plain_part(self, make_recording):
        record = make_recording(type="email", body=MULTIPART_EMAIL)

        text = await parse_body(record)

        assert text.strip() == "Plain version"

    @pytest.mark.asyncio
    async def test_html_only_message_falls_back_to_raw_body(self, make_recording):
        body = "MIME-Version: 1.0\nContent-Type: text/html\n\n<p>Hi</p>"
        record = make_recording(type="email", body=body)

        assert await parse_body(record) == body

    @pytest.mark.asyncio
    async def test_comment_is_parsed_like_an_email(self, make_recording):
        record = make_recording(type="comment", body="Looks good to me")

        assert await parse_body(record) == "Looks good to me"

    @pytest.mark.asyncio
    async def test_empty_body_yields_empty_text(self, make_recording):
        record = make_recording(type="email", body="")

        assert await parse_body(record) == ""

    @pytest.mark.asyncio
    async def test_missing_body_yields_empty_text(self, make_recording):
        record = make_recording(type="email", body=None)

        assert await parse_body(record) == ""

    @pytest.mark.asyncio
    async def test_header_like_first_paragraph_is_kept(self, make_recording):
        body = "Content-Type: notes from call\nFrom: Bob\n\nHello Bob"
        record = make_recording(type="email", body=body)

        assert await parse_body(record) == body

    @pytest.mark.asyncio
    async def test_unknown_charset_without_mime_version_is_plain_text(
        self, make_recording
    ):
        body = "Content-Type: text/plain; charset=x-unknown\n\nHello Bob"
        record = make_recording(type="email", body=body)

        assert await parse_body(record) == body

    @pytest.mark.asyncio
    async def test_unreadable_mime_message_falls_back_to_plain_text(
        self, make_recording
    ):
        body = (
            "MIME-Version: 1.0\n"
            "Content-Type: text/plain; charset=x-unknown\n"
            "\n"
            "Hello Bob"
        )
        record = make_recording(type="comment", body=body)

        text = await parse_body(record)

        assert "charset=x-unknown" in text
        assert text.endswith("Hello Bob")

    @pytest.mark.asyncio
    async def test_parser_failure_raises_parse_error(self, make_recording, monkeypatch):
        def broken(raw):
            raise ValueError("bad message")

        monkeypatch.setattr("src.crm.body.extract_text", broken)
        record = make_recording(type="email", body="Hi")

        with pytest.raises(ParseError):
            await parse_body(record)


class TestHasMimeHeaders:
    def test_detects_header_block(self):
        assert has_mime_headers(QUOTED_PRINTABLE_EMAIL) is True

    def test_folded_headers(self):
        body = 'MIME-Version: 1.0\nContent-Type: multipart/alternative;\n boundary="a"\n\n--a--\n'
        assert has_mime_headers(body) is True

    def test_plain_text_with_colon(self):
        assert has_mime_headers("Agenda: pricing\n\nThen lunch") is False

    def test_requires_mime_version(self):
        assert has_mime_headers("Content-Type: text/plain\n\nHi") is False

    def test_requires_a_media_type(self):
        body = "MIME-Version: 1.0\nContent-Type: notes from call\n\nHi"
        assert has_mime_headers(body) is False

    def test_text_without_blank_line(self):
        assert has_mime_headers("Content-Type: text/plain") is False

    def test_plain_sentences(self):
        assert has_mime_headers("Hello there\n\nBye") is False


class TestTruncation:
    def test_no_truncation_is_identity(self):
        text = "x" * 5000
        assert no_truncation(text) is text

    def test_short_text_is_unchanged(self):
        truncate = truncate_lines(max_chars=700, max_lines=5)
        assert truncate("one\ntwo") == "one\ntwo"

    def test_keeps_first_lines(self):
        truncate = truncate_lines(max_chars=700, max_lines=5)
        text = "\n".join(str(i) for i in range(10))
        assert truncate(text) == "0\n1\n2\n3\n4"

    def test_cuts_long_text(self):
        truncate = truncate_lines(max_chars=10, max_lines=5)
        assert truncate("a" * 50) == "a" * 10

    def test_from_settings(self):
        class Settings:
            truncate = True
            truncate_max_chars = 3
            truncate_max_lines = 5

        assert truncation_from_settings(Settings())("abcdef") == "abc"

        Settings.truncate = False
        assert truncation_from_settings(Settings()) is no_truncation

"""Shared fixtures: in-memory Highrise client, Slack webhook and factories."""

from datetime import datetime, timezone

import pytest
from loguru import logger

from src.crm.config import SyncConfig
from src.crm.errors import DeliveryError, FetchError
from src.crm.models import Recording

BASE_URL = "https://example.highrisehq.com/"
WEBHOOK_URL = "https://hooks.slack.com/services/T000/B000/XXXX"


def at(seconds: int) -> datetime:
    return datetime.fromtimestamp(seconds, tz=timezone.utc)


class FakeHighriseClient:
    """Serves entities by path and records every request."""

    def __init__(self, recordings=None, entities=None, failing=(), list_error=None):
        self.recordings = list(recordings or [])
        self.entities = dict(entities or {})
        self.failing = set(failing)
        self.list_error = list_error
        self.calls = []
        self.list_params = []

    async def get(self, path, params=None):
        self.calls.append(path)
        if path in self.failing or path not in self.entities:
            raise FetchError(
                f"GET {path} returned an error", status=404, body="<error>Not Found</error>"
            )
        return self.entities[path]

    async def get_all(self, path, params=None):
        self.calls.append(path)
        self.list_params.append(params)
        if self.list_error is not None:
            raise self.list_error
        return [dict(r) for r in self.recordings]


class FakeWebhook:
    """Collects posted payloads; fails for recordings listed in `failing_ids`."""

    def __init__(self, failing_ids=()):
        self.failing_ids = set(failing_ids)
        self.posts = []

    async def post(self, url, payload):
        link = payload["text"].split("<", 1)[1].split("|", 1)[0]
        recording_id = int(link.rsplit("/", 1)[1])
        if recording_id in self.failing_ids:
            raise DeliveryError("Webhook rejected the message", status=500, body="oops")
        self.posts.append((url, payload))


@pytest.fixture
def config():
    return SyncConfig(
        crm_base_url=BASE_URL,
        webhook_url=WEBHOOK_URL,
        groups=frozenset({7}),
        show_everyone=True,
    )


@pytest.fixture
def recording_data():
    """Factory for recordings as decoded from recordings.xml."""

    def make(**overrides):
        data = {
            "id": 1,
            "type": "email",
            "body": "Hello from Highrise",
            "title": None,
            "authorId": 10,
            "subjectId": 20,
            "subjectType": "Party",
            "subjectName": "Acme Corp",
            "visibleTo": "Everyone",
            "groupId": None,
            "createdAt": at(100),
            "updatedAt": at(150),
        }
        data.update(overrides)
        return data

    return make


@pytest.fixture
def make_recording(recording_data):
    def make(**overrides):
        return Recording.model_validate(recording_data(**overrides))

    return make


@pytest.fixture
def entities():
    return {
        "users/10.xml": {"id": 10, "name": "Jane Q Doe"},
        "users/11.xml": {"id": 11, "name": "John Smith"},
        "people/20.xml": {"id": 20, "firstName": "Acme", "lastName": "Corp"},
        "companies/21.xml": {"id": 21, "name": "Globex"},
        "deals/30.xml": {"id": 30, "name": "Big deal"},
        "kases/40.xml": {"id": 40, "name": "Support case"},
    }


@pytest.fixture
def warnings():
    """Messages logged at WARNING or above while the test runs."""
    messages = []
    handler_id = logger.add(
        lambda message: messages.append(message.record["message"]), level="WARNING"
    )
    yield messages
    logger.remove(handler_id)

"""Tests for one scheduled cycle: load, sync and persist the checkpoint."""

import pytest

from conftest import FakeHighriseClient, FakeWebhook, at
from src.crm.checkpoint import CheckpointStore
from src.crm.errors import FetchError
from src.crm.flow import HighriseSync
from src.crm.runner import run_sync_cycle


class TestRunSyncCycle:
    def test_saves_advanced_checkpoint(self, tmp_path, recording_data, entities, config):
        store = CheckpointStore(tmp_path / "checkpoint.json")
        store.save(at(50))
        webhook = FakeWebhook()
        client = FakeHighriseClient(
            recordings=[recording_data(updatedAt=at(150))], entities=entities
        )

        result = run_sync_cycle(
            store=store, highrise_sync=HighriseSync(config, client, webhook)
        )

        assert result == {
            "status": "success",
            "previous_checkpoint": at(50).isoformat(),
            "checkpoint": at(150).isoformat(),
        }
        assert store.load() == at(150)
        assert len(webhook.posts) == 1

    def test_since_overrides_stored_checkpoint(self, tmp_path, entities, config):
        store = CheckpointStore(tmp_path / "checkpoint.json")
        store.save(at(50))
        client = FakeHighriseClient(entities=entities)

        result = run_sync_cycle(
            store=store,
            since=at(900),
            highrise_sync=HighriseSync(config, client, FakeWebhook()),
        )

        assert result["checkpoint"] == at(900).isoformat()
        assert store.load() == at(900)

    def test_failed_cycle_keeps_stored_checkpoint(self, tmp_path, entities, config):
        store = CheckpointStore(tmp_path / "checkpoint.json")
        store.save(at(50))
        client = FakeHighriseClient(entities=entities, list_error=FetchError("down"))

        with pytest.raises(FetchError):
            run_sync_cycle(
                store=store, highrise_sync=HighriseSync(config, client, FakeWebhook())
            )

        assert store.load() == at(50)

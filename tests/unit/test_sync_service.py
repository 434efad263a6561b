from unittest.mock import MagicMock

import pytest

from ankisync.sync.exceptions import SyncResponseError
from ankisync.sync.memory_client import InMemoryAnkiClient
from ankisync.sync.models import ExistingNote, SyncSummary
from ankisync.sync.service import SyncService

RECORDS = [
    {"Front": "Hello", "Back": "Xin chào"},
    {"Front": "Thanks", "Back": "Cảm ơn"},
]


def _make_service() -> tuple[SyncService, InMemoryAnkiClient]:
    client = InMemoryAnkiClient()
    return SyncService(client), client


class TestCatalog:
    def test_ping_returns_version(self) -> None:
        service, _client = _make_service()
        assert service.ping() == 6

    def test_list_categories(self) -> None:
        service, _client = _make_service()
        assert "Basic" in service.list_categories()

    def test_category_fields(self) -> None:
        service, _client = _make_service()
        assert service.category_fields("Basic") == ["Front", "Back"]

    def test_ensure_collection_creates_once(self) -> None:
        service, client = _make_service()
        assert service.ensure_collection("VN") is True
        assert service.ensure_collection("VN") is False
        assert client.decks.count("VN") == 1


class TestListExisting:
    def test_empty_collection(self) -> None:
        service, _client = _make_service()
        assert service.list_existing("Default") == []

    def test_returns_primary_values(self) -> None:
        service, _client = _make_service()
        service.sync(RECORDS[:1], "Default", "Basic")
        assert service.list_existing("Default") == [ExistingNote(primary_value="Hello", note_id=1)]


class TestSync:
    def test_adds_new_records(self) -> None:
        service, client = _make_service()

        summary = service.sync(RECORDS, "VN", "Basic")

        assert summary == SyncSummary(added=2, updated=0)
        assert "VN" in client.decks
        assert [note.fields for note in client.notes.values()] == RECORDS

    def test_resync_updates_existing(self) -> None:
        service, client = _make_service()
        service.sync(RECORDS, "VN", "Basic")

        changed = [{"Front": "Hello", "Back": "Chào bạn"}, RECORDS[1]]
        summary = service.sync(changed, "VN", "Basic")

        assert summary == SyncSummary(added=0, updated=2)
        assert len(client.notes) == 2
        assert client.notes[1].fields["Back"] == "Chào bạn"

    def test_mixed_add_and_update(self) -> None:
        service, _client = _make_service()
        service.sync(RECORDS[:1], "VN", "Basic")

        summary = service.sync(RECORDS, "VN", "Basic")

        assert summary.added == 1
        assert summary.updated == 1
        assert summary.total == 2

    def test_same_front_in_other_deck_is_added(self) -> None:
        service, client = _make_service()
        service.sync(RECORDS[:1], "A", "Basic")
        summary = service.sync(RECORDS[:1], "B", "Basic")
        assert summary == SyncSummary(added=1, updated=0)
        assert len(client.notes) == 2

    def test_duplicate_fronts_in_batch_keep_last(self) -> None:
        service, client = _make_service()
        records = [{"Front": "Hello", "Back": "one"}, {"Front": "Hello", "Back": "two"}]

        summary = service.sync(records, "VN", "Basic")

        assert summary == SyncSummary(added=1, updated=0)
        assert [note.fields["Back"] for note in client.notes.values()] == ["two"]

    def test_store_rejection_raises(self) -> None:
        service, _client = _make_service()
        with pytest.raises(SyncResponseError, match="Failed to sync cards"):
            service.sync([{"Front": "x", "Extra": "y"}], "VN", "Basic")


class TestPayloadShape:
    def test_add_note_options(self) -> None:
        client = MagicMock()
        client.invoke.side_effect = [
            ["Default"],  # deckNames
            [],  # findNotes
            [{"result": 99, "error": None}],  # multi
        ]
        service = SyncService(client, primary_field="Front", duplicate_scope="deck")

        service.sync(RECORDS[:1], "Default", "Basic")

        action, params = client.invoke.call_args.args
        assert action == "multi"
        assert params["actions"] == [
            {
                "action": "addNote",
                "version": 6,
                "params": {
                    "note": {
                        "deckName": "Default",
                        "modelName": "Basic",
                        "fields": {"Front": "Hello", "Back": "Xin chào"},
                        "options": {"allowDuplicate": False, "duplicateScope": "deck"},
                    }
                },
            }
        ]

    def test_update_uses_existing_note_id(self) -> None:
        client = MagicMock()
        client.invoke.side_effect = [
            ["Default"],
            [42],
            [{"noteId": 42, "fields": {"Front": {"value": "Hello", "order": 0}}}],
            [{"result": None, "error": None}],
        ]
        service = SyncService(client, primary_field="Front")

        summary = service.sync(RECORDS[:1], "Default", "Basic")

        assert summary == SyncSummary(added=0, updated=1)
        _action, params = client.invoke.call_args.args
        assert params["actions"][0]["action"] == "updateNoteFields"
        assert params["actions"][0]["params"]["note"]["id"] == 42

    def test_find_notes_query_quotes_deck(self) -> None:
        client = MagicMock()
        client.invoke.return_value = []
        SyncService(client).list_existing("VN Study List 1")
        client.invoke.assert_called_once_with("findNotes", {"query": '"deck:VN Study List 1"'})


class TestNoteTypeWithoutFront:
    RECORDS = [
        {"Word": "trân trọng", "Meaning": "respectfully"},
        {"Word": "mà", "Meaning": "but, and"},
        {"Word": "vô duyên", "Meaning": "tactless"},
    ]

    def _make_service(self) -> tuple[SyncService, InMemoryAnkiClient]:
        client = InMemoryAnkiClient(models={"Vocab": ["Word", "Meaning"]})
        return SyncService(client), client

    def test_primary_field_is_first_field_of_note_type(self) -> None:
        service, _client = self._make_service()
        assert service.primary_field_for("Vocab") == "Word"

    def test_override_wins(self) -> None:
        client = InMemoryAnkiClient(models={"Vocab": ["Word", "Meaning"]})
        assert SyncService(client, primary_field="Meaning").primary_field_for("Vocab") == "Meaning"

    def test_first_sync_adds_every_card(self) -> None:
        service, client = self._make_service()

        summary = service.sync(self.RECORDS, "VN", "Vocab")

        assert summary == SyncSummary(added=3, updated=0)
        assert len(client.notes) == 3

    def test_resync_updates_every_card(self) -> None:
        service, client = self._make_service()
        service.sync(self.RECORDS, "VN", "Vocab")

        summary = service.sync(self.RECORDS, "VN", "Vocab")

        assert summary == SyncSummary(added=0, updated=3)
        assert len(client.notes) == 3

    def test_list_existing_keys_on_first_field(self) -> None:
        service, _client = self._make_service()
        service.sync(self.RECORDS[:1], "VN", "Vocab")

        assert service.list_existing("VN") == [ExistingNote(primary_value="trân trọng", note_id=1)]


class TestMissingPrimaryValue:
    def test_records_without_primary_value_are_not_merged(self) -> None:
        client = MagicMock()
        client.invoke.side_effect = [
            ["Default"],
            [],
            [{"result": 1, "error": None}, {"result": 2, "error": None}],
        ]
        service = SyncService(client, primary_field="Front")
        records = [{"Back": "one"}, {"Back": "two"}]

        summary = service.sync(records, "Default", "Basic")

        assert summary == SyncSummary(added=2, updated=0)
        _action, params = client.invoke.call_args.args
        assert [a["params"]["note"]["fields"] for a in params["actions"]] == records

"""Upsert of extracted records into an Anki collection."""

from collections.abc import Sequence
from typing import Any

from ankisync.logging.logger import Log
from ankisync.parsing.models import Record
from ankisync.sync.client_base import BaseAnkiClient
from ankisync.sync.exceptions import SyncResponseError
from ankisync.sync.models import ExistingNote, SyncSummary


class SyncService:
    """Pushes records to a collection, updating notes that already exist.

    Existing notes are matched on the primary field, so re-running a sync
    over the same note is idempotent. The primary field is the first field
    of the note type unless *primary_field* overrides it.
    """

    def __init__(
        self,
        client: BaseAnkiClient,
        *,
        primary_field: str | None = None,
        duplicate_scope: str = "deck",
        version: int = 6,
    ) -> None:
        self._client = client
        self._primary_field = primary_field
        self._duplicate_scope = duplicate_scope
        self._version = version

    @property
    def client(self) -> BaseAnkiClient:
        return self._client

    def ping(self) -> int:
        return self._client.invoke("version")

    def list_categories(self) -> list[str]:
        return list(self._client.invoke("modelNames"))

    def category_fields(self, category: str) -> list[str]:
        """Field names of note type *category*, in declaration order."""
        return list(self._client.invoke("modelFieldNames", {"modelName": category}))

    def primary_field_for(self, category: str) -> str:
        """Field that identifies a note of type *category*."""
        if self._primary_field:
            return self._primary_field
        fields = self.category_fields(category)
        if not fields:
            raise SyncResponseError(f"No fields found for note type: {category}")
        return fields[0]

    def ensure_collection(self, collection: str) -> bool:
        """Create deck *collection* when missing. Returns True if created."""
        decks = self._client.invoke("deckNames")
        if collection in decks:
            return False
        self._client.invoke("createDeck", {"deck": collection})
        Log.info(f"Created new deck: {collection}")
        return True

    def list_existing(
        self,
        collection: str,
        primary_field: str | None = None,
    ) -> list[ExistingNote]:
        """Notes in *collection* that carry a non-empty primary field value.

        Without *primary_field* each note is keyed on its own first field.
        """
        note_ids = self._client.invoke("findNotes", {"query": f'"deck:{collection}"'})
        if not note_ids:
            return []
        existing: list[ExistingNote] = []
        for info in self._client.invoke("notesInfo", {"notes": note_ids}):
            primary = self._primary_value(info, primary_field)
            if not primary:
                continue
            existing.append(ExistingNote(primary_value=primary, note_id=info["noteId"]))
        return existing

    def sync(
        self,
        records: Sequence[Record],
        collection: str,
        category: str,
    ) -> SyncSummary:
        """Upsert *records* into *collection* using note type *category*."""
        self.ensure_collection(collection)
        primary_field = self.primary_field_for(category)
        Log.info(f"Sending {len(records)} cards to Anki, matching on {primary_field!r}...")

        existing = {
            note.primary_value: note.note_id
            for note in self.list_existing(collection, primary_field)
        }
        Log.info(f"Found {len(existing)} existing notes in deck")

        updates: list[tuple[int, Record]] = []
        additions: list[Record] = []
        for record in self._dedupe(records, primary_field):
            key = record.get(primary_field, "")
            note_id = existing.get(key) if key else None
            if note_id is not None:
                updates.append((note_id, record))
            else:
                additions.append(record)
        Log.info(f"Found {len(updates)} cards to update and {len(additions)} new cards")

        if updates:
            self._run_batch([self._update_action(note_id, fields) for note_id, fields in updates])
        if additions:
            self._run_batch([self._add_action(fields, collection, category) for fields in additions])

        Log.info("Successfully synced all cards")
        return SyncSummary(added=len(additions), updated=len(updates))

    @staticmethod
    def _primary_value(info: dict[str, Any], primary_field: str | None) -> str:
        fields = info.get("fields", {})
        if primary_field is not None:
            entry = fields.get(primary_field)
        else:
            entry = next((f for f in fields.values() if f.get("order") == 0), None)
        return "" if entry is None else entry.get("value", "")

    @staticmethod
    def _dedupe(records: Sequence[Record], primary_field: str) -> list[Record]:
        # One note per primary value; a later card in the same note wins.
        # Records without a primary value are never merged.
        last_index: dict[str, int] = {}
        for index, record in enumerate(records):
            key = record.get(primary_field, "")
            if not key:
                continue
            if key in last_index:
                Log.warning(f"Duplicate {primary_field} {key!r} in note, keeping the last one")
            last_index[key] = index
        return [
            record
            for index, record in enumerate(records)
            if not record.get(primary_field, "") or last_index[record[primary_field]] == index
        ]

    def _update_action(self, note_id: int, fields: Record) -> dict[str, Any]:
        return {
            "action": "updateNoteFields",
            "version": self._version,
            "params": {"note": {"id": note_id, "fields": fields}},
        }

    def _add_action(self, fields: Record, collection: str, category: str) -> dict[str, Any]:
        return {
            "action": "addNote",
            "version": self._version,
            "params": {
                "note": {
                    "deckName": collection,
                    "modelName": category,
                    "fields": fields,
                    "options": {
                        "allowDuplicate": False,
                        "duplicateScope": self._duplicate_scope,
                    },
                }
            },
        }

    def _run_batch(self, actions: list[dict[str, Any]]) -> list[Any]:
        results = self._client.invoke("multi", {"actions": actions})
        errors = [
            f"{action['action']}: {result['error']}"
            for action, result in zip(actions, results)
            if isinstance(result, dict) and result.get("error")
        ]
        if errors:
            raise SyncResponseError(f"Failed to sync cards: {'; '.join(errors)}")
        return [result.get("result") if isinstance(result, dict) else result for result in results]

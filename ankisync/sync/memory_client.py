"""In-memory AnkiConnect stand-in.

Implements the subset of AnkiConnect actions the sync service uses, against
plain dictionaries. No network calls. Useful for dry runs, local
development, and tests.
"""

from dataclasses import dataclass, field
from typing import Any, ClassVar

from ankisync.sync.client_base import BaseAnkiClient
from ankisync.sync.exceptions import SyncResponseError


@dataclass
class _StoredNote:
    note_id: int
    deck: str
    model: str
    fields: dict[str, str] = field(default_factory=dict)


class InMemoryAnkiClient(BaseAnkiClient):
    """AnkiConnect-compatible client backed by in-process state."""

    DEFAULT_MODELS: ClassVar[dict[str, list[str]]] = {
        "Basic": ["Front", "Back"],
        "Basic (and reversed card)": ["Front", "Back"],
    }
    VERSION: ClassVar[int] = 6

    ACTIONS: ClassVar[dict[str, str]] = {
        "version": "_version",
        "modelNames": "_model_names",
        "modelFieldNames": "_model_field_names",
        "deckNames": "_deck_names",
        "createDeck": "_create_deck",
        "findNotes": "_find_notes",
        "notesInfo": "_notes_info",
        "addNote": "_add_note",
        "updateNoteFields": "_update_note_fields",
        "multi": "_multi",
    }

    def __init__(
        self,
        models: dict[str, list[str]] | None = None,
        decks: list[str] | None = None,
    ) -> None:
        self.models: dict[str, list[str]] = dict(models or self.DEFAULT_MODELS)
        self.decks: list[str] = list(decks or ["Default"])
        self.notes: dict[int, _StoredNote] = {}
        self._next_id = 1

    def invoke(self, action: str, params: dict[str, Any] | None = None) -> Any:
        handler_name = self.ACTIONS.get(action)
        if handler_name is None:
            raise SyncResponseError(f"AnkiConnect {action} failed: unsupported action")
        return getattr(self, handler_name)(params or {})

    # ------------------------------------------------------------------
    # Actions
    # ------------------------------------------------------------------

    def _version(self, params: dict[str, Any]) -> int:
        _ = params
        return self.VERSION

    def _model_names(self, params: dict[str, Any]) -> list[str]:
        _ = params
        return list(self.models)

    def _model_field_names(self, params: dict[str, Any]) -> list[str]:
        model = params["modelName"]
        if model not in self.models:
            raise SyncResponseError(f"model was not found: {model}")
        return list(self.models[model])

    def _deck_names(self, params: dict[str, Any]) -> list[str]:
        _ = params
        return list(self.decks)

    def _create_deck(self, params: dict[str, Any]) -> int:
        deck = params["deck"]
        if deck not in self.decks:
            self.decks.append(deck)
        return self.decks.index(deck) + 1

    def _find_notes(self, params: dict[str, Any]) -> list[int]:
        deck = self._deck_from_query(params["query"])
        return [note.note_id for note in self.notes.values() if note.deck == deck]

    def _notes_info(self, params: dict[str, Any]) -> list[dict[str, Any]]:
        info: list[dict[str, Any]] = []
        for note_id in params["notes"]:
            note = self.notes.get(note_id)
            if note is None:
                info.append({})
                continue
            info.append(
                {
                    "noteId": note.note_id,
                    "modelName": note.model,
                    "fields": {
                        name: {"value": note.fields.get(name, ""), "order": order}
                        for order, name in enumerate(self.models[note.model])
                    },
                }
            )
        return info

    def _add_note(self, params: dict[str, Any]) -> int:
        note = params["note"]
        deck = note["deckName"]
        model = note["modelName"]
        fields: dict[str, str] = note["fields"]
        if deck not in self.decks:
            raise SyncResponseError(f"deck was not found: {deck}")
        if model not in self.models:
            raise SyncResponseError(f"model was not found: {model}")
        unknown = [name for name in fields if name not in self.models[model]]
        if unknown:
            raise SyncResponseError(f"field(s) not found in model: {', '.join(unknown)}")
        options = note.get("options", {})
        if not options.get("allowDuplicate", False) and self._is_duplicate(deck, model, fields):
            raise SyncResponseError("cannot create note because it is a duplicate")

        note_id = self._next_id
        self._next_id += 1
        self.notes[note_id] = _StoredNote(note_id=note_id, deck=deck, model=model, fields=dict(fields))
        return note_id

    def _update_note_fields(self, params: dict[str, Any]) -> None:
        note = params["note"]
        stored = self.notes.get(note["id"])
        if stored is None:
            raise SyncResponseError(f"note was not found: {note['id']}")
        stored.fields.update(note["fields"])

    def _multi(self, params: dict[str, Any]) -> list[dict[str, Any]]:
        results: list[dict[str, Any]] = []
        for item in params["actions"]:
            try:
                result = self.invoke(item["action"], item.get("params"))
            except SyncResponseError as exc:
                results.append({"result": None, "error": str(exc)})
            else:
                results.append({"result": result, "error": None})
        return results

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _deck_from_query(query: str) -> str:
        stripped = query.strip().strip('"')
        if not stripped.startswith("deck:"):
            raise SyncResponseError(f"unsupported query: {query}")
        return stripped[len("deck:"):]

    def _is_duplicate(self, deck: str, model: str, fields: dict[str, str]) -> bool:
        first_field = self.models[model][0]
        value = fields.get(first_field)
        return any(
            note.deck == deck and note.model == model and note.fields.get(first_field) == value
            for note in self.notes.values()
        )

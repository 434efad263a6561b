from dataclasses import dataclass


@dataclass(frozen=True)
class ExistingNote:
    """A note already present in a collection, keyed by its primary field."""

    primary_value: str
    note_id: int


@dataclass(frozen=True)
class SyncSummary:
    """Outcome of one upsert batch."""

    added: int = 0
    updated: int = 0

    @property
    def total(self) -> int:
        return self.added + self.updated

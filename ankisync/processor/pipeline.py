from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path

from ankisync.highlight.locator import FieldHighlight
from ankisync.parsing.models import DecodedHeader, Record
from ankisync.processor.models import NoteDocument
from ankisync.sync.models import SyncSummary


@dataclass(slots=True)
class PipelineContext:
    document_path: Path
    document: NoteDocument | None = None
    header: DecodedHeader | None = None
    collection: str = ""
    category: str = ""
    field_mapping: dict[str, str] = field(default_factory=dict)
    permissible_fields: list[str] = field(default_factory=list)
    highlights: list[FieldHighlight] = field(default_factory=list)
    records: list[Record] = field(default_factory=list)
    summary: SyncSummary | None = None


class PipelineStep(ABC):
    @abstractmethod
    def run(self, context: PipelineContext) -> PipelineContext:
        raise NotImplementedError

from collections.abc import Sequence
from pathlib import Path

from ankisync.config.settings import Settings
from ankisync.highlight.colors import FieldColorRegistry
from ankisync.logging.logger import Log
from ankisync.processor.file_loader import FileLoader
from ankisync.processor.pipeline import PipelineContext, PipelineStep
from ankisync.processor.steps import (
    ExtractRecordsStep,
    LoadDocumentStep,
    LocateLabelsStep,
    ParseHeaderStep,
    ResolveFieldsStep,
    SyncRecordsStep,
)
from ankisync.sync.factory import SyncServiceFactory
from ankisync.sync.service import SyncService


class Processor:
    """Runs the per-note pipeline.

    Pipeline: load -> parse header -> resolve fields -> locate labels ->
    extract -> sync.
    """

    def __init__(self, steps: Sequence[PipelineStep]) -> None:
        self._steps = list(steps)

    @property
    def steps(self) -> list[PipelineStep]:
        return list(self._steps)

    def process(self, document_path: Path | str) -> PipelineContext:
        """Run every step for one note and return the final context."""
        Log.info(f"Processing note {document_path}")
        context = PipelineContext(document_path=Path(document_path))
        for step in self._steps:
            context = step.run(context)
        return context


def build_processor(
    settings: Settings,
    *,
    sync_service: SyncService | None = None,
    notes_root: Path | None = None,
    color_registry: FieldColorRegistry | None = None,
    dry_run: bool = False,
) -> Processor:
    """Build a Processor with all required collaborators.

    With *dry_run* the records are extracted but never sent to the store.
    """
    service = sync_service if sync_service is not None else SyncServiceFactory.create(settings)
    steps: list[PipelineStep] = [
        LoadDocumentStep(FileLoader(notes_root=notes_root)),
        ParseHeaderStep(settings),
        ResolveFieldsStep(service),
        LocateLabelsStep(color_registry or FieldColorRegistry()),
        ExtractRecordsStep(),
    ]
    if not dry_run:
        steps.append(SyncRecordsStep(service))
    return Processor(steps)

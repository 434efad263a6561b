from ankisync.config.settings import Settings
from ankisync.highlight.colors import FieldColorRegistry
from ankisync.highlight.locator import locate_field_labels
from ankisync.logging.logger import Log
from ankisync.parsing.extractor import extract_records
from ankisync.parsing.header import parse_header
from ankisync.processor.exceptions import UnknownCategoryError
from ankisync.processor.file_loader import FileLoader
from ankisync.processor.pipeline import PipelineContext, PipelineStep
from ankisync.sync.service import SyncService


def _require_document(context: PipelineContext, step: str) -> str:
    if context.document is None:
        raise ValueError(f"PipelineContext.document must be set before {step}")
    return context.document.text


class LoadDocumentStep(PipelineStep):
    def __init__(self, file_loader: FileLoader) -> None:
        self._file_loader = file_loader

    def run(self, context: PipelineContext) -> PipelineContext:
        context.document = self._file_loader.load(context.document_path)
        Log.info(f"Read {context.document.path}, length: {len(context.document.text)}")
        return context


class ParseHeaderStep(PipelineStep):
    """Resolve collection, category and field mapping for the note.

    Notes without a usable header fall back to the configured defaults.
    """

    def __init__(self, settings: Settings) -> None:
        self._settings = settings

    def run(self, context: PipelineContext) -> PipelineContext:
        text = _require_document(context, "header parsing")
        header = parse_header(text)
        context.header = header
        if header is None:
            Log.info(f"No Anki configuration in {context.document_path}, using defaults")
            context.collection = self._settings.default_collection
            context.category = self._settings.default_category
            context.field_mapping = dict(self._settings.default_field_mapping)
        else:
            context.collection = header.collection_name
            context.category = header.category_name
            context.field_mapping = dict(header.field_mapping)
        Log.info(f"Using note type {context.category!r} and deck {context.collection!r}")
        Log.debug(f"Field mappings: {context.field_mapping}")
        return context


class ResolveFieldsStep(PipelineStep):
    def __init__(self, sync_service: SyncService) -> None:
        self._sync_service = sync_service

    def run(self, context: PipelineContext) -> PipelineContext:
        fields = self._sync_service.category_fields(context.category)
        if not fields:
            raise UnknownCategoryError(f"No fields found for note type: {context.category}")
        context.permissible_fields = fields
        Log.debug(f"Available fields for note type: {fields}")
        return context


class LocateLabelsStep(PipelineStep):
    def __init__(self, color_registry: FieldColorRegistry) -> None:
        self._color_registry = color_registry

    def run(self, context: PipelineContext) -> PipelineContext:
        text = _require_document(context, "label location")
        context.highlights = locate_field_labels(
            text, context.field_mapping, self._color_registry
        )
        return context


class ExtractRecordsStep(PipelineStep):
    def run(self, context: PipelineContext) -> PipelineContext:
        text = _require_document(context, "extraction")
        context.records = extract_records(
            text, context.field_mapping, context.permissible_fields
        )
        Log.info(f"Parsed {len(context.records)} flashcards from {context.document_path}")
        return context


class SyncRecordsStep(PipelineStep):
    def __init__(self, sync_service: SyncService) -> None:
        self._sync_service = sync_service

    def run(self, context: PipelineContext) -> PipelineContext:
        if not context.records:
            Log.warning(f"No valid flashcards found in {context.document_path}")
            return context
        context.summary = self._sync_service.sync(
            context.records, context.collection, context.category
        )
        Log.info(f"Successfully synced {context.summary.total} cards to Anki")
        return context

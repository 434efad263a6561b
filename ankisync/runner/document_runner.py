from pathlib import Path

from ankisync.logging.logger import Log
from ankisync.parsing.exceptions import ParsingError
from ankisync.processor.exceptions import ProcessorError
from ankisync.processor.pipeline import PipelineContext
from ankisync.processor.processor import Processor
from ankisync.sync.exceptions import SyncError


class DocumentRunner:
    """Run one note through the processor and report the outcome.

    Failures abort that note only; nothing is retried.
    """

    def __init__(self, processor: Processor) -> None:
        self._processor = processor
        self.last_context: PipelineContext | None = None

    def run(self, document_path: Path | str) -> bool:
        """Process a single note. Returns True on success."""
        self.last_context = None
        try:
            self.last_context = self._processor.process(document_path)
        except (ParsingError, ProcessorError, SyncError) as exc:
            Log.error(f"Error syncing {document_path} to Anki: {exc}")
            return False
        except Exception:
            Log.exception(f"Unexpected error while syncing {document_path}")
            return False
        Log.info(f"Note {document_path} completed successfully")
        return True

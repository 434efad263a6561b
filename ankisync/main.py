import argparse
import json
import sys
from collections.abc import Sequence
from dataclasses import asdict

from pydantic import ValidationError
from pydantic_settings import SettingsError

from ankisync.config.settings import Settings
from ankisync.logging.logger import Log
from ankisync.processor.pipeline import PipelineContext
from ankisync.processor.processor import build_processor
from ankisync.runner.document_runner import DocumentRunner
from ankisync.sync.factory import SyncServiceFactory


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ankisync",
        description="Sync flashcards written in markdown notes to Anki.",
    )
    parser.add_argument("paths", nargs="+", help="Markdown notes to sync")
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Extract cards without sending them to Anki",
    )
    parser.add_argument(
        "--preview",
        action="store_true",
        help="Print the extracted cards and field labels as JSON (implies --dry-run)",
    )
    parser.add_argument("--log-level", help="Override LOG_LEVEL")
    return parser


def preview_payload(context: PipelineContext) -> dict[str, object]:
    """JSON-ready view of what a note would sync."""
    return {
        "document": str(context.document_path),
        "collection": context.collection,
        "category": context.category,
        "records": context.records,
        "labels": [asdict(h) for h in context.highlights],
    }


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point: settings -> logging -> processor -> run each note."""
    args = build_parser().parse_args(argv)
    try:
        settings = Settings()
    except (ValidationError, SettingsError) as exc:
        Log.configure(args.log_level or "INFO")
        Log.error(f"Invalid configuration: {exc}")
        return 1
    Log.configure(args.log_level or settings.log_level, enabled=settings.log_enabled)

    try:
        sync_service = SyncServiceFactory.create(settings)
    except ValueError as exc:
        Log.error(f"Invalid configuration: {exc}")
        return 1
    failures = 0
    try:
        processor = build_processor(
            settings,
            sync_service=sync_service,
            dry_run=args.dry_run or args.preview,
        )
        runner = DocumentRunner(processor)
        for path in args.paths:
            if not runner.run(path):
                failures += 1
                continue
            if args.preview and runner.last_context is not None:
                print(json.dumps(preview_payload(runner.last_context), ensure_ascii=False, indent=2))
    finally:
        sync_service.client.close()

    return 1 if failures else 0


if __name__ == "__main__":
    sys.exit(main())

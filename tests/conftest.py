from collections.abc import Generator
from pathlib import Path

import pytest

from ankisync.logging.logger import Log
from ankisync.sync.memory_client import InMemoryAnkiClient

FIXTURES_DIR = Path(__file__).parent / "fixtures"

VIETNAMESE_FIELDS = ["Front", "Back", "Usage", "Example", "Context"]


@pytest.fixture(autouse=True)
def reset_logger() -> Generator[None, None, None]:
    """Detach handlers bound to captured streams between tests."""
    yield
    logger = Log._logger
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.disabled = False


@pytest.fixture()
def vietnamese_note() -> str:
    return (FIXTURES_DIR / "vietnamese_note.md").read_text(encoding="utf-8")


@pytest.fixture()
def vietnamese_note_path() -> Path:
    return FIXTURES_DIR / "vietnamese_note.md"


@pytest.fixture()
def expected_vietnamese_records() -> list[dict[str, str]]:
    return [
        {
            "Front": "Trân trọng",
            "Back": "Respectfully, with great respect",
            "Usage": "Often used in formal contexts.",
            "Example": "Tôi trân trọng cảm ơn bạn. <i>(I sincerely thank you.)</i>",
        },
        {
            "Front": "Mà",
            "Back": "A versatile connector word with various meanings depending on context",
            "Context": (
                "<ol>\n"
                "  <li><b>But/and:</b> <i>Anh ấy thông minh mà khiêm tốn.</i> "
                "<i>(He is smart and humble.)</i></li>\n"
                "  <li><b>Emphasis:</b> <i>Tôi đã nói rồi mà.</i> "
                "<i>(I already told you, you know.)</i></li>\n"
                "</ol>"
            ),
        },
        {
            "Front": "Vô duyên",
            "Back": "Tactless, ungracious",
            "Usage": (
                "Used to describe someone whose behavior is awkward,\n"
                "inappropriate, or lacking in social tact."
            ),
            "Example": (
                "<ol>\n"
                '  <li>"Anh ấy nói chuyện vô duyên." <i>He speaks tactlessly.</i></li>\n'
                '  <li>"Cô ấy rất vô duyên khi không hiểu ý của người khác." '
                "<i>She doesn't understand others' intentions.</i></li>\n"
                "</ol>"
            ),
        },
    ]


@pytest.fixture()
def memory_client() -> InMemoryAnkiClient:
    return InMemoryAnkiClient(
        models={
            "Basic": ["Front", "Back"],
            "Vietnamese": list(VIETNAMESE_FIELDS),
        },
    )

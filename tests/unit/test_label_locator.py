from ankisync.highlight.colors import FieldColorRegistry
from ankisync.highlight.locator import FieldHighlight, locate_field_labels

MAPPING = {"Front": "Front", "Back": "Back"}


class TestLocateFieldLabels:
    def test_finds_labels_in_document_order(self) -> None:
        document = "Front: a\nBack: b\nFront: c"
        highlights = locate_field_labels(document, MAPPING, FieldColorRegistry())
        assert [(h.start, h.label) for h in highlights] == [
            (0, "Front"),
            (9, "Back"),
            (17, "Front"),
        ]

    def test_span_covers_label_and_colon(self) -> None:
        document = "**Back:** meaning"
        (highlight,) = locate_field_labels(document, MAPPING, FieldColorRegistry())
        assert document[highlight.start:highlight.end] == "Back:"

    def test_skips_header_block(self) -> None:
        document = "---\ncollection: D\ncategory: Basic\nfieldMapping:\n  Front: Front\n---\nFront: a"
        highlights = locate_field_labels(document, MAPPING, FieldColorRegistry())
        assert len(highlights) == 1
        assert document[highlights[0].start:] == "Front: a"

    def test_colors_keyed_by_target_field(self) -> None:
        registry = FieldColorRegistry()
        document = "Q: one\nA: two"
        highlights = locate_field_labels(document, {"Q": "Front", "A": "Back"}, registry)
        assert highlights[0] == FieldHighlight(
            start=0,
            end=2,
            label="Q",
            field="Front",
            color="hsla(0, 70%, 80%, 0.3)",
        )
        assert registry.snapshot() == {
            "Front": "hsla(0, 70%, 80%, 0.3)",
            "Back": "hsla(60, 70%, 80%, 0.3)",
        }

    def test_no_labels(self) -> None:
        assert locate_field_labels("prose only", MAPPING, FieldColorRegistry()) == []

from ankisync.markup.blocks import ListBlock, ListKind, TextLine, classify_lines
from ankisync.markup.inline import apply_inline
from ankisync.markup.normalizer import normalize_markup

__all__ = [
    "ListBlock",
    "ListKind",
    "TextLine",
    "apply_inline",
    "classify_lines",
    "normalize_markup",
]

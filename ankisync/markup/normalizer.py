"""Markdown subset to HTML conversion for flashcard field values."""

from ankisync.markup.blocks import Block, ListBlock, TextLine, classify_lines
from ankisync.markup.inline import apply_inline


def normalize_markup(raw: str) -> str:
    """Convert a field value's markdown into the HTML subset Anki renders.

    Handles ordered/unordered lists, ``**bold**``, ``*italic*`` and
    ``_italic_``. Plain lines are kept verbatim; the result is trimmed.
    Running it on its own output returns that output unchanged.
    """
    rendered = "".join(_render(block) for block in classify_lines(raw))
    return rendered.strip()


def _render(block: Block) -> str:
    if isinstance(block, TextLine):
        return apply_inline(block.text) + "\n"
    return _render_list(block)


def _render_list(block: ListBlock) -> str:
    tag = block.kind.value
    items = "".join(f"  <li>{apply_inline(item)}</li>\n" for item in block.items)
    return f"<{tag}>\n{items}</{tag}>\n"

import re

_BOLD_RE = re.compile(r"\*\*(.*?)\*\*")
_ITALIC_RE = re.compile(r"\*(.*?)\*")
_UNDERSCORE_ITALIC_RE = re.compile(r"_(.*?)_")

# Bold runs first so "**x**" is never split by the single-asterisk rule.
_SUBSTITUTIONS: list[tuple[re.Pattern[str], str]] = [
    (_BOLD_RE, r"<b>\1</b>"),
    (_ITALIC_RE, r"<i>\1</i>"),
    (_UNDERSCORE_ITALIC_RE, r"<i>\1</i>"),
]

# Anki field search and sorting compare plain apostrophes.
_CHARACTER_REPLACEMENTS = {"’": "'"}


def apply_inline(text: str) -> str:
    """Convert bold/italic markers in a single text run into HTML tags."""
    for pattern, replacement in _SUBSTITUTIONS:
        text = pattern.sub(replacement, text)
    for char, replacement in _CHARACTER_REPLACEMENTS.items():
        text = text.replace(char, replacement)
    return text

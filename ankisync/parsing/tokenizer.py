"""Label-boundary scanning.

Finds every ``Label:`` occurrence in a note body and slices the body into a
flat token stream. A token's value is everything between its colon and the
start of the next label occurrence, so values may span several lines.
"""

import re
from collections.abc import Sequence

from ankisync.parsing.models import FieldToken

# A label may be wrapped in up to two emphasis markers on either side,
# e.g. "Front:", "**Back**:" or "**Back:**".
_EMPHASIS = r"\*{0,2}"


def build_label_pattern(labels: Sequence[str]) -> re.Pattern[str]:
    """Compile one alternation matching any of *labels* followed by a colon.

    Alternatives keep declaration order, so at a given position the first
    declared label that matches wins.
    """
    alternatives = "|".join(f"{_EMPHASIS}{re.escape(label)}{_EMPHASIS}" for label in labels)
    return re.compile(f"(?P<label>{alternatives}):")


def strip_emphasis(text: str) -> str:
    """Remove leading and trailing ``*`` markers."""
    return text.strip("*")


def tokenize(body: str, labels: Sequence[str]) -> list[FieldToken]:
    """Split *body* into label/value tokens in document order."""
    if not labels:
        return []

    matches = list(build_label_pattern(labels).finditer(body))
    tokens: list[FieldToken] = []
    for index, match in enumerate(matches):
        value_end = matches[index + 1].start() if index + 1 < len(matches) else len(body)
        tokens.append(
            FieldToken(
                label=strip_emphasis(match.group("label")),
                value=body[match.end():value_end],
                start=match.start(),
                end=value_end,
            )
        )
    return tokens

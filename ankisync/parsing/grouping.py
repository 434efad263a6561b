from collections.abc import Sequence

from ankisync.parsing.models import FieldToken


def group_tokens(
    tokens: Sequence[FieldToken],
    boundary_label: str,
) -> list[list[FieldToken]]:
    """Split a token stream into per-record groups.

    A new group starts at every *boundary_label* token. Tokens that precede
    the first boundary are kept together as a leading group; the caller
    decides whether such a group forms a usable record.
    """
    groups: list[list[FieldToken]] = []
    current: list[FieldToken] = []
    for token in tokens:
        if token.label == boundary_label and current:
            groups.append(current)
            current = []
        current.append(token)
    if current:
        groups.append(current)
    return groups

"""Split a chat line into command tokens.

Words are separated by single spaces. A word starting with a double quote
opens a quoted run that ends at the first word ending with one; the run is
rejoined with single spaces and the quotes dropped::

    >>> tokenize('create #dnd "The Lost Mine" now')
    ['create', '#dnd', 'The Lost Mine', 'now']
"""

from __future__ import annotations

from enum import Enum, auto

from dnd_bot.core.exceptions import TokenizeError


QUOTE = '"'


class _State(Enum):
    OUTSIDE = auto()
    QUOTED = auto()


def tokenize(line: str) -> list[str]:
    """Tokenize one line.

    Args:
        line: Raw message text.

    Returns:
        Tokens in order. Empty words outside quotes are dropped.

    Raises:
        TokenizeError: If a quoted run is never closed.
    """
    tokens: list[str] = []
    run: list[str] = []
    state = _State.OUTSIDE

    for word in line.rstrip("\r\n").split(" "):
        if state is _State.OUTSIDE:
            if word.startswith(QUOTE):
                if len(word) > 1 and word.endswith(QUOTE):
                    tokens.append(word[1:-1])
                else:
                    run = [word[1:]]
                    state = _State.QUOTED
            elif word:
                tokens.append(word)
        elif word.endswith(QUOTE):
            run.append(word[:-1])
            tokens.append(" ".join(run))
            run = []
            state = _State.OUTSIDE
        else:
            run.append(word)

    if state is _State.QUOTED:
        raise TokenizeError(
            "Unterminated quote.",
            field_name="line",
            invalid_value=line,
        )
    return tokens


__all__ = ["tokenize", "QUOTE"]

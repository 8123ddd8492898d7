from __future__ import annotations

from collections.abc import Iterable, Iterator
from enum import Enum
from typing import IO, Any, NamedTuple

import ijson


class TokenKind(str, Enum):
    START_OBJECT = "start_map"
    END_OBJECT = "end_map"
    START_ARRAY = "start_array"
    END_ARRAY = "end_array"
    FIELD_NAME = "map_key"
    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    NULL = "null"


class Token(NamedTuple):
    kind: TokenKind
    value: Any = None


_EVENT_KINDS: dict[str, TokenKind] = {kind.value: kind for kind in TokenKind}


def iter_json_tokens(stream: IO[bytes]) -> Iterator[Token]:
    """Yield primitive JSON tokens from a binary stream without buffering the document.

    Syntax errors surface as ``ijson.JSONError`` from the underlying parser.
    """
    yield from tokens_from_events(ijson.basic_parse(stream, use_float=True))


def tokens_from_events(events: Iterable[tuple[str, Any]]) -> Iterator[Token]:
    for event, value in events:
        kind = _EVENT_KINDS.get(event)
        if kind is None:
            raise ValueError(f"unknown token event '{event}'")
        yield Token(kind, value)

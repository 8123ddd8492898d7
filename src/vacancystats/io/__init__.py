from __future__ import annotations

from vacancystats.io.shards import (
    DEFAULT_SHARD_PATTERN,
    BytesShardSource,
    FileShardSource,
    ShardLike,
    ShardSource,
    as_shard_source,
    as_shard_sources,
    discover_shards,
)
from vacancystats.io.tokens import Token, TokenKind, iter_json_tokens, tokens_from_events
from vacancystats.io.writers import (
    OUTPUT_FORMATS,
    default_output_name,
    render_json,
    render_xml,
    resolve_output_format,
    write_parquet,
    write_result,
)

__all__ = [
    "DEFAULT_SHARD_PATTERN",
    "OUTPUT_FORMATS",
    "BytesShardSource",
    "FileShardSource",
    "ShardLike",
    "ShardSource",
    "Token",
    "TokenKind",
    "as_shard_source",
    "as_shard_sources",
    "default_output_name",
    "discover_shards",
    "iter_json_tokens",
    "render_json",
    "render_xml",
    "resolve_output_format",
    "tokens_from_events",
    "write_parquet",
    "write_result",
]

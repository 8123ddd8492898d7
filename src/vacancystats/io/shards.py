from __future__ import annotations

import io
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path
from typing import IO, Protocol, Union, runtime_checkable

from vacancystats.errors import ConfigValidationError

DEFAULT_SHARD_PATTERN = "*.json"


@runtime_checkable
class ShardSource(Protocol):
    @property
    def name(self) -> str: ...

    def open(self) -> IO[bytes]: ...


@dataclass(frozen=True, slots=True)
class FileShardSource:
    path: Path

    @property
    def name(self) -> str:
        return str(self.path)

    def open(self) -> IO[bytes]:
        return self.path.open("rb")


@dataclass(frozen=True, slots=True)
class BytesShardSource:
    """In-memory shard, mostly useful for tests and piped input."""

    label: str
    payload: bytes

    @property
    def name(self) -> str:
        return self.label

    def open(self) -> IO[bytes]:
        return io.BytesIO(self.payload)


ShardLike = Union[ShardSource, str, Path]


def as_shard_source(source: ShardLike) -> ShardSource:
    if isinstance(source, (str, Path)):
        return FileShardSource(Path(source).expanduser())
    if isinstance(source, ShardSource):
        return source
    raise TypeError(
        f"shard source must be a path or ShardSource, got '{type(source).__name__}'"
    )


def as_shard_sources(sources: Iterable[ShardLike]) -> tuple[ShardSource, ...]:
    if isinstance(sources, (str, Path)):
        raise TypeError("shard sources must be an iterable of sources, not a single path")
    return tuple(as_shard_source(source) for source in sources)


def discover_shards(
    directory: str | Path,
    pattern: str = DEFAULT_SHARD_PATTERN,
) -> tuple[FileShardSource, ...]:
    root = Path(directory).expanduser().resolve()
    if not root.is_dir():
        raise ConfigValidationError(f"input directory does not exist: '{root}'")
    return tuple(
        FileShardSource(path)
        for path in sorted(root.glob(pattern))
        if path.is_file()
    )

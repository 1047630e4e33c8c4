"""Typed error values.

Operations in this package return these values instead of raising them, so a
caller can tell "offline, no data" apart from "server error" with a plain
isinstance check or by comparing ``code``.

Caller-visible failures:
    - InvalidArgument: bad identifier, no I/O attempted
    - RemoteUnavailable: connected, but the remote call failed
    - CacheMiss: offline and no usable cached record

Recovered locally:
    - CacheWriteFailed: logged as a warning, never fails a read
"""

from dataclasses import dataclass
from enum import Enum
from typing import ClassVar


class RemoteErrorKind(str, Enum):
    """Classification of a failed remote fetch."""

    NOT_FOUND = "not_found"
    SERVER_ERROR = "server_error"
    TIMEOUT = "timeout"


@dataclass(frozen=True)
class RemoteError:
    """Failure value returned by a RemoteSource."""

    kind: RemoteErrorKind
    message: str = ""


@dataclass(frozen=True)
class InvalidArgument:
    """The identifier is not a valid entity key."""

    code: ClassVar[str] = "invalid_argument"

    message: str


@dataclass(frozen=True)
class RemoteUnavailable:
    """Connectivity was available but the remote source failed.

    Attributes:
        kind: The remote failure classification
        message: Human-readable detail from the remote source
    """

    code: ClassVar[str] = "remote_unavailable"

    kind: RemoteErrorKind
    message: str = ""

    @classmethod
    def from_remote_error(cls, error: RemoteError) -> "RemoteUnavailable":
        return cls(kind=error.kind, message=error.message)


@dataclass(frozen=True)
class CacheMiss:
    """Offline and the cache holds no usable record.

    Attributes:
        key: The cache key that was read
        reason: One of "not_found", "corrupt_record", "id_mismatch"
    """

    code: ClassVar[str] = "cache_miss"

    key: str
    reason: str = "not_found"

    @property
    def message(self) -> str:
        return f"No usable cached record under {self.key!r} ({self.reason})"


@dataclass(frozen=True)
class CacheWriteFailed:
    """A cache write did not succeed."""

    code: ClassVar[str] = "cache_write_failed"

    key: str
    message: str = ""


EntityError = InvalidArgument | RemoteUnavailable | CacheMiss


class EntityLookupError(Exception):
    """Exception wrapper for callers that prefer raising over returned errors."""

    def __init__(self, error: EntityError) -> None:
        super().__init__(f"{error.code}: {error.message}")
        self.error = error

    @property
    def code(self) -> str:
        return self.error.code

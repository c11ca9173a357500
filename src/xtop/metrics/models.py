from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Mapping


class ErrorType(str, Enum):
    TIMEOUT = "timeout"
    CONNECT = "connect"
    READ = "read"
    OTHER = "other"


@dataclass(frozen=True, slots=True)
class Result:
    """Outcome of one request attempt.

    A success carries ``status`` and ``header_value``; a failure carries
    ``error``. Use :meth:`ok` and :meth:`failed` to build them.
    """

    status: str | None = None
    header_value: str | None = None
    error: ErrorType | None = None

    def __post_init__(self) -> None:
        if (self.error is None) == (self.status is None):
            msg = "Result must carry either a status or an error"
            raise ValueError(msg)

    @classmethod
    def ok(cls, status: str, header_value: str = "") -> Result:
        return cls(status=status, header_value=header_value)

    @classmethod
    def failed(cls, error: ErrorType = ErrorType.OTHER) -> Result:
        return cls(error=error)

    @property
    def is_success(self) -> bool:
        return self.error is None


@dataclass(slots=True)
class Metrics:
    total: int = 0
    statuses: dict[str, int] = field(default_factory=dict)
    header_values: dict[str, int] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class Snapshot:
    total: int
    statuses: Mapping[str, int]
    header_values: Mapping[str, int]

    @property
    def failures(self) -> int:
        return self.total - sum(self.statuses.values())

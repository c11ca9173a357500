from __future__ import annotations

from dataclasses import dataclass

from xtop.errors import ConfigError

DEFAULT_CONCURRENCY = 10
DEFAULT_HEADER = "X-Server"
DEFAULT_INTERVAL_SEC = 1.0


def normalize_url(url: str) -> str:
    url = url.strip().lower()
    if not url:
        msg = "Target URL must not be empty"
        raise ConfigError(msg)
    if not url.startswith(("http://", "https://")):
        url = "http://" + url
    return url


@dataclass(frozen=True, slots=True)
class TargetConfig:
    url: str
    concurrency: int = DEFAULT_CONCURRENCY
    header: str = DEFAULT_HEADER

    def __post_init__(self) -> None:
        if not self.url:
            msg = "Target URL must not be empty"
            raise ConfigError(msg)
        if self.concurrency < 1:
            msg = f"Concurrency must be a positive integer, got {self.concurrency}"
            raise ConfigError(msg)

    @classmethod
    def from_raw(cls, url: str, concurrency: int = DEFAULT_CONCURRENCY, header: str = DEFAULT_HEADER) -> TargetConfig:
        return cls(url=normalize_url(url), concurrency=concurrency, header=header)


@dataclass(frozen=True, slots=True)
class RenderConfig:
    interval_sec: float = DEFAULT_INTERVAL_SEC

    def __post_init__(self) -> None:
        if self.interval_sec <= 0:
            msg = f"Refresh interval must be positive, got {self.interval_sec}"
            raise ConfigError(msg)

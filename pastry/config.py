"""Runtime settings for the pastry server."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger("pastry")

DEFAULT_BUFFER_SIZE = 1024 * 1024


def default_cache_file() -> Path:
    cache_home = os.getenv("XDG_CACHE_HOME")
    base = Path(cache_home) if cache_home else Path.home() / ".cache"
    return base / "pastry" / "pastes.json"


@dataclass(slots=True)
class PastrySettings:
    """Ports, cache location and I/O limits."""

    host: str = "0.0.0.0"
    http_port: int = 9180
    write_port: int = 9181
    read_port: int = 9182
    cache_file: Path | None = None
    buffer_size: int = DEFAULT_BUFFER_SIZE
    read_timeout: float = 0.1
    log_level: str = "INFO"

    def __post_init__(self) -> None:
        if self.cache_file is None:
            self.cache_file = default_cache_file()
        else:
            self.cache_file = Path(self.cache_file)

    @classmethod
    def from_env(cls) -> "PastrySettings":
        def _int_env(name: str, default: int) -> int:
            raw = os.getenv(name)
            if not raw:
                return default
            try:
                return int(raw)
            except ValueError:
                logger.warning("Invalid integer for %s: %s", name, raw)
                return default

        def _float_env(name: str, default: float) -> float:
            raw = os.getenv(name)
            if not raw:
                return default
            try:
                return float(raw)
            except ValueError:
                logger.warning("Invalid number for %s: %s", name, raw)
                return default

        cache_file = os.getenv("PASTRY_CACHE_FILE")
        return cls(
            host=os.getenv("PASTRY_HOST", "0.0.0.0"),
            http_port=_int_env("PASTRY_HTTP_PORT", 9180),
            write_port=_int_env("PASTRY_WRITE_PORT", 9181),
            read_port=_int_env("PASTRY_READ_PORT", 9182),
            cache_file=Path(cache_file) if cache_file else None,
            buffer_size=_int_env("PASTRY_BUFFER_SIZE", DEFAULT_BUFFER_SIZE),
            read_timeout=_float_env("PASTRY_READ_TIMEOUT", 0.1),
            log_level=os.getenv("PASTRY_LOG_LEVEL", "INFO"),
        )


__all__ = ["DEFAULT_BUFFER_SIZE", "PastrySettings", "default_cache_file"]

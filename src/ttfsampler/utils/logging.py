"""Logging utilities for ttfsampler."""

import logging
from dataclasses import dataclass, field
from pathlib import Path

import structlog

_installed_handlers: list[logging.Handler] = []


@dataclass
class DecodeStats:
    """Statistics from glyph cache activity."""

    decoded_count: int = 0
    cache_hits: int = 0
    missing_count: int = 0
    failed_count: int = 0
    failures: list[tuple[int, str]] = field(default_factory=list)
    decode_time_ms: float = 0.0

    @property
    def avg_decode_ms(self) -> float | None:
        """Average decode time per successfully decoded glyph."""
        if self.decoded_count == 0:
            return None
        return self.decode_time_ms / self.decoded_count


def configure_logging(
    log_file: Path | None = None,
    console_level: str = "WARNING",
    file_level: str = "DEBUG",
    quiet: bool = False,
) -> structlog.stdlib.BoundLogger:
    """Configure dual-output structured logging.

    Args:
        log_file: Path to log file (no file output if None)
        console_level: Logging level for console output
        file_level: Logging level for file output
        quiet: If True, suppress console output except errors

    Returns:
        Configured structlog logger
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)

    # Reconfiguring replaces the handlers of the previous call
    while _installed_handlers:
        handler = _installed_handlers.pop()
        root_logger.removeHandler(handler)
        handler.close()

    if log_file is not None:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(getattr(logging, file_level.upper()))
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s | %(levelname)-8s | %(name)s | %(message)s")
        )
        root_logger.addHandler(file_handler)
        _installed_handlers.append(file_handler)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.ERROR if quiet else getattr(logging, console_level.upper()))
    console_handler.setFormatter(logging.Formatter("%(message)s"))
    root_logger.addHandler(console_handler)
    _installed_handlers.append(console_handler)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logger = structlog.get_logger("ttfsampler")
    logger.debug("Logging initialized", log_file=str(log_file) if log_file else None)

    return logger


class DecodeLogger:
    """Logger for tracking glyph decode events and statistics."""

    def __init__(self, logger: structlog.stdlib.BoundLogger | None = None) -> None:
        if logger is None:
            # Route through stdlib so unconfigured library use stays silent
            logger = structlog.wrap_logger(
                logging.getLogger("ttfsampler.cache"),
                wrapper_class=structlog.stdlib.BoundLogger,
            )
        self._logger = logger
        self._stats = DecodeStats()

    def log_cache_hit(self, codepoint: int) -> None:
        """Record a lookup served from the cache."""
        self._stats.cache_hits += 1

    def log_glyph_decoded(
        self, codepoint: int, glyph_index: int, paths: int, duration_ms: float
    ) -> None:
        """Log successful glyph decoding."""
        self._logger.debug(
            "Glyph decoded",
            codepoint=codepoint,
            glyph_index=glyph_index,
            paths=paths,
            duration_ms=round(duration_ms, 3),
        )
        self._stats.decoded_count += 1
        self._stats.decode_time_ms += duration_ms

    def log_glyph_missing(self, codepoint: int, reason: str) -> None:
        """Log a codepoint with no drawable glyph."""
        self._logger.debug("Glyph missing", codepoint=codepoint, reason=reason)
        self._stats.missing_count += 1

    def log_glyph_error(self, codepoint: int, error: Exception) -> None:
        """Log a glyph that failed to decode."""
        self._logger.warning(
            "Glyph decode failed",
            codepoint=codepoint,
            error=str(error),
            error_type=type(error).__name__,
        )
        self._stats.failed_count += 1
        self._stats.failures.append((codepoint, str(error)))

    def log_recreate_rejected(self, codepoint: int) -> None:
        """Log a refused attempt to rebuild an existing cache entry."""
        self._logger.warning("Glyph already exists, not recreated", codepoint=codepoint)

    @property
    def stats(self) -> DecodeStats:
        """Get current decode statistics."""
        return self._stats

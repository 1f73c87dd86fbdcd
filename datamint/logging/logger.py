import logging
import sys


class _ContextFormatter(logging.Formatter):
    """Appends keyword context passed to Log.* as ``key=value`` pairs."""

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        context = getattr(record, "context", None)
        if not context:
            return line
        pairs = " ".join(f"{key}={value}" for key, value in context.items())
        return f"{line} | {pairs}"


class Log:
    """Process-wide logger for the ingestion, profiling and minting stages."""

    _logger: logging.Logger = logging.getLogger("datamint")

    @classmethod
    def configure(cls, log_level: str) -> None:
        """Set the level and attach a single stdout handler."""
        cls._logger.setLevel(log_level.upper())
        if not cls._logger.handlers:
            handler = logging.StreamHandler(sys.stdout)
            handler.setFormatter(
                _ContextFormatter("%(asctime)s [%(levelname)s] %(message)s")
            )
            cls._logger.addHandler(handler)

    @classmethod
    def info(cls, message: str, **context: object) -> None:
        cls._logger.info(message, extra={"context": context})

    @classmethod
    def error(cls, message: str, **context: object) -> None:
        cls._logger.error(message, extra={"context": context})

    @classmethod
    def warning(cls, message: str, **context: object) -> None:
        cls._logger.warning(message, extra={"context": context})

    @classmethod
    def debug(cls, message: str, **context: object) -> None:
        cls._logger.debug(message, extra={"context": context})

import logging
import sys


class Log:
    """Package-wide logger writing to stdout."""

    _logger: logging.Logger = logging.getLogger("saft_checker")

    @classmethod
    def configure(cls, log_level: str) -> None:
        """Set the level and (re)attach a single stdout handler."""
        cls._logger.setLevel(log_level.upper())
        for existing in list(cls._logger.handlers):
            cls._logger.removeHandler(existing)
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(
            logging.Formatter("%(asctime)s [%(levelname)s] %(message)s")
        )
        cls._logger.addHandler(handler)

    @classmethod
    def info(cls, message: str, **kwargs: object) -> None:
        """Log an info message."""
        cls._logger.info(message, extra=kwargs)

    @classmethod
    def error(cls, message: str, **kwargs: object) -> None:
        """Log an error message."""
        cls._logger.error(message, extra=kwargs)

    @classmethod
    def warning(cls, message: str, **kwargs: object) -> None:
        """Log a warning message."""
        cls._logger.warning(message, extra=kwargs)

    @classmethod
    def debug(cls, message: str, **kwargs: object) -> None:
        """Log a debug message."""
        cls._logger.debug(message, extra=kwargs)

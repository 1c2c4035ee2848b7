import logging
from typing import Union


# --- Custom Logging Filter ---
# Backends tag their records with `extra={"backend": ...}`; records from
# anywhere else get a placeholder so the shared format string never fails.
class VfsLogFilter(logging.Filter):
    """Ensures a 'backend' attribute is present on every log record."""

    def filter(self, record: logging.LogRecord) -> bool:
        current_backend = getattr(record, "backend", None)
        record.backend = "-" if current_backend is None else str(current_backend)
        return True


def _resolve_level(level: Union[int, str]) -> int:
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.upper())
    return resolved if isinstance(resolved, int) else logging.INFO


# --- Logging Setup Utility ---
def init_vfs_logging(
    level: Union[int, str] = logging.INFO, clear_existing_handlers: bool = True
) -> logging.Logger:
    """
    Sets up console logging for the ``logix_vfs`` logger hierarchy.

    Args:
        level: Logging level, numeric or by name (e.g. "DEBUG")
        clear_existing_handlers: If True, removes handlers already attached to
                                 the package logger so repeated setup does not
                                 duplicate output.

    Returns:
        The configured package logger
    """
    package_logger = logging.getLogger("logix_vfs")

    if clear_existing_handlers:
        for handler in package_logger.handlers[:]:
            package_logger.removeHandler(handler)
            handler.close()

    stream_handler = logging.StreamHandler()
    formatter = logging.Formatter(
        "%(asctime)s - %(levelname)s - [%(name)s] [%(backend)s] %(message)s"
    )
    stream_handler.setFormatter(formatter)
    stream_handler.addFilter(VfsLogFilter())

    package_logger.addHandler(stream_handler)
    package_logger.setLevel(_resolve_level(level))

    package_logger.debug(
        f"VFS logging setup complete. Level set to {logging.getLevelName(package_logger.level)}."
    )
    return package_logger

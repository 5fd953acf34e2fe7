import logging

from callspy.settings import config


class SpyFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        skipped = getattr(record, "skipped", 0)
        skip_str = f" [{skipped} skipped]" if skipped else ""
        return f"{record.levelname} [{record.name}] {super().format(record)}{skip_str}"


def configure_callspy_logger():
    # type: () -> None
    """Configures the callspy logger.

    Customization is possible with the environment variables:
        ``CALLSPY_DEBUG`` and ``CALLSPY_LOG_STREAM_HANDLER``

    By default records go to a stream handler attached to the ``callspy`` logger and
    also propagate to the root logger. When ``CALLSPY_DEBUG`` is enabled the logger
    level is set to DEBUG, which also lifts the rate limit on repeated records.
    """
    callspy_logger = logging.getLogger("callspy")
    if config.log_stream_handler and not any(
        isinstance(h.formatter, SpyFormatter) for h in callspy_logger.handlers
    ):
        handler = logging.StreamHandler()
        handler.setFormatter(SpyFormatter())
        callspy_logger.addHandler(handler)

    if config.debug:
        callspy_logger.setLevel(logging.DEBUG)

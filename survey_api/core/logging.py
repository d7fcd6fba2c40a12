import logging


class SurveyContentFilter(logging.Filter):
    """Keep participant answers out of structured logs."""

    BLOCKED_KEYS = {"answers", "roles", "photoMap", "payload"}

    def filter(self, record: logging.LogRecord) -> bool:
        for key in self.BLOCKED_KEYS:
            if hasattr(record, key):
                setattr(record, key, "[REDACTED]")
        return True


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )
    # Handler-level so records propagated from module loggers are filtered too.
    for handler in logging.getLogger().handlers:
        if not any(isinstance(f, SurveyContentFilter) for f in handler.filters):
            handler.addFilter(SurveyContentFilter())

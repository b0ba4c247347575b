"""Structured logging helpers shared by every CareerNavigate module."""

import logging
from typing import Optional, Union


class ComponentLoggerAdapter(logging.LoggerAdapter):
    """LoggerAdapter that adds a fixed ``component`` field to every record.

    Unlike the stock LoggerAdapter, ``extra`` passed at the call site is merged
    with the adapter's fields instead of replacing them.
    """

    def process(self, msg, kwargs):
        kwargs["extra"] = {**self.extra, **kwargs.get("extra", {})}
        return msg, kwargs


def get_logger(
    name: str, component: Optional[str] = None
) -> Union[logging.Logger, ComponentLoggerAdapter]:
    """Return the module logger, wrapped to carry ``component`` when given.

    Example:
        >>> logger = get_logger(__name__, component="extraction")
        >>> logger.warning("No payload found", extra={"event": "extraction.payload.missing"})
    """
    logger = logging.getLogger(name)
    if component:
        return ComponentLoggerAdapter(logger, {"component": component})
    return logger

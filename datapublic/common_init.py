import logging
from typing import Optional

import structlog


def configure_logging(command: Optional[str] = None, level: int = logging.INFO):
    """Configure stdlib logging and structlog.

    Parameters:
        command: a command name bound to every structlog event.
        level: level set on the root logger.
    """

    # Based on https://www.structlog.org/en/stable/standard-library.html#rendering-using-structlog-based-formatters-within-logging
    structlog.configure(
        context_class=dict,
        wrapper_class=structlog.stdlib.BoundLogger,
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            # It is important that wrap_for_formatter is the last processor. It converts the processed
            # event dict to something that the ProcessorFormatter (the logging.Formatter passed to
            # setFormatter) understands.
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    # Second, configure stdlib logging to format structlog events and any other parameters we want to set.
    formatter = structlog.stdlib.ProcessorFormatter(
        processor=structlog.dev.ConsoleRenderer(),
        foreign_pre_chain=[
            structlog.stdlib.add_logger_name,
            structlog.processors.TimeStamper(fmt="iso"),
        ],
    )

    handler = logging.StreamHandler()
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.addHandler(handler)
    root_logger.setLevel(level)

    if command:
        structlog.contextvars.bind_contextvars(command=command)

"""
Structured logging for the kmeans-topics command line.

The clustering and vector modules log through stdlib loggers
(`logging.getLogger(__name__)`); the CLI logs through structlog. Both
are rendered by one structlog ProcessorFormatter on stderr, so stdout
carries only the topic report and the run summary.

Context bound for a run (model_prefix, init_method) is attached to
every record, including those from library modules, until cleared.
"""

import logging
import sys

import structlog
from structlog.types import Processor

from kmeans_topics.config.settings import get_settings


def _renderer(production: bool) -> Processor:
    if production:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())


def setup_logging(level: str | None = None) -> None:
    """
    Configure structlog and route stdlib records through it.

    Args:
        level: Log level name. Defaults to DEBUG when `settings.debug`
            is set, otherwise `settings.log_level`.

    Usage:
        setup_logging()
        logger = get_logger(__name__)
        logger.info("Clustering finished", iterations=12, inertia=3.52)
    """
    settings = get_settings()
    if level is None:
        level = "DEBUG" if settings.debug else settings.log_level

    pre_chain: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
    ]
    if settings.is_production:
        pre_chain.append(structlog.processors.format_exc_info)

    structlog.configure(
        processors=pre_chain + [
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.StackInfoRenderer(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=pre_chain,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                _renderer(settings.is_production),
            ],
        )
    )

    # Replace handlers left by an earlier invocation in the same process
    logging.basicConfig(handlers=[handler], level=getattr(logging, level), force=True)


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a structured logger."""
    return structlog.get_logger(name)


def bind_context(**kwargs) -> None:
    """
    Bind key-value pairs to every log record until `clear_context()`.

    Args:
        **kwargs: Key-value pairs to bind
    """
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_context() -> None:
    """Drop everything bound with `bind_context()`."""
    structlog.contextvars.clear_contextvars()

"""Diagnostic logging for setup-mac using stdlib logging with rich.

Human-facing progress lines go through ``setupmac.core.report``; this module
configures the diagnostic channel (debug output, command tracing, tracebacks).
"""

import logging
from collections.abc import MutableMapping
from typing import Any

from rich.console import Console
from rich.logging import RichHandler

# Standard library logging kwargs that should not be treated as context
_STDLIB_KWARGS = {"exc_info", "stack_info", "stacklevel", "extra"}


class StructuredLoggerAdapter(logging.LoggerAdapter):
    """Logger adapter that formats kwargs as structured context data.

    Example:
        logger = get_logger(__name__)
        logger.debug("Finished command", command="brew install gh")
        # Output: Finished command [command=brew install gh]
    """

    def process(
        self, msg: Any, kwargs: MutableMapping[str, Any]
    ) -> tuple[Any, MutableMapping[str, Any]]:
        """Move keyword context into the message.

        Args:
            msg: Log message
            kwargs: Keyword arguments including context data

        Returns:
            Tuple of (formatted_message, cleaned_kwargs)
        """
        context = {k: v for k, v in kwargs.items() if k not in _STDLIB_KWARGS}
        clean_kwargs = {k: v for k, v in kwargs.items() if k in _STDLIB_KWARGS}

        if context:
            context_str = " ".join(f"{k}={v}" for k, v in sorted(context.items()))
            msg = f"{msg} [dim][[/dim]{context_str}[dim]][/dim]"

        return msg, clean_kwargs


def setup_logging(verbose: bool = False, trace: bool = False) -> None:
    """Configure diagnostic logging with rich integration.

    Args:
        verbose: Enable debug logging
        trace: Enable debug logging with source locations
    """
    log_level = logging.DEBUG if verbose or trace else logging.WARNING

    console = Console(stderr=True)

    handler = RichHandler(
        console=console,
        show_time=True,
        show_path=trace,
        markup=True,
        rich_tracebacks=True,
        tracebacks_show_locals=verbose or trace,
        log_time_format="[%Y-%m-%d %H:%M:%S]",
    )

    logging.basicConfig(
        level=log_level,
        format="%(message)s",
        handlers=[handler],
        force=True,
    )


def get_logger(name: str = "") -> StructuredLoggerAdapter:
    """Get a structured logger instance.

    Args:
        name: Logger name (typically __name__ of the module)

    Returns:
        Logger adapter accepting context data as keyword arguments
    """
    logger = logging.getLogger(name) if name else logging.getLogger(__name__)

    return StructuredLoggerAdapter(logger, {})

"""
Main — entry point for the ``attune`` command.

Configures logging once, then hands over to the Click command group. Library
users never go through here; importing ``attune`` leaves logging alone.
"""

from __future__ import annotations

import logging

import structlog

_logging_configured = False


def _drop_message_text(logger: object, method_name: str, event_dict: dict) -> dict:
    """structlog processor: never write raw message text to the log."""
    for key in ("text", "content"):
        if isinstance(event_dict.get(key), str):
            event_dict[key] = f"<{len(event_dict[key])} chars>"
    return event_dict


def configure_logging(verbose: bool = False) -> None:
    """Configure structlog and standard-library logging for CLI runs.

    Safe to call more than once. structlog is set up on the first call; every
    call applies the log level for ``verbose``.
    """
    global _logging_configured  # noqa: PLW0603
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(format="%(message)s", level=level)
    logging.getLogger().setLevel(level)
    if _logging_configured:
        return
    _logging_configured = True

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_log_level,
            _drop_message_text,
            structlog.dev.ConsoleRenderer(colors=True),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
    )


def main() -> None:
    """Entry point for the attune command."""
    from attune.cli.app import cli

    cli()


if __name__ == "__main__":
    main()

"""Output strategies for rendered details."""

from __future__ import annotations

import logging
import sys
from typing import Protocol

import pyperclip

from fileinfo.errors import ClipboardUnavailableError
from fileinfo.logging_utils import StructuredLogEvent, get_logger, log_event

logger = get_logger(__name__)

MAX_CLIPBOARD_RETRIES = 2


class OutputStrategy(Protocol):
    """Write-only sink for rendered text."""

    def write(self, content: str) -> None: ...


class StdoutOutput:
    """Output strategy that writes to standard output."""

    @staticmethod
    def write(content: str) -> None:
        sys.stdout.write(content if content.endswith("\n") else f"{content}\n")
        sys.stdout.flush()


class ClipboardOutput:
    """Output strategy that writes to the system clipboard."""

    @staticmethod
    def write(content: str) -> None:
        last_error: Exception | None = None
        for attempt in range(1, MAX_CLIPBOARD_RETRIES + 1):
            try:
                pyperclip.copy(content)
            except pyperclip.PyperclipException as err:
                last_error = err
                if attempt < MAX_CLIPBOARD_RETRIES:
                    log_event(
                        logger,
                        StructuredLogEvent(
                            name="clipboard.retry",
                            message="clipboard copy failed; retrying",
                            level=logging.WARNING,
                            context={"attempt": attempt, "max_attempts": MAX_CLIPBOARD_RETRIES},
                        ),
                    )
            else:
                return
        log_event(
            logger,
            StructuredLogEvent(
                name="clipboard.failed",
                message="clipboard copy failed",
                level=logging.ERROR,
                context={"attempts": MAX_CLIPBOARD_RETRIES, "error": last_error},
            ),
        )
        msg = f"Clipboard unavailable: {last_error}"
        raise ClipboardUnavailableError(msg) from last_error


def copy_to_clipboard(content: str) -> None:
    ClipboardOutput.write(content)

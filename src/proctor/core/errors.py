#!/usr/bin/env python3
"""
Unified error handling for proctor.

Every workflow failure is raised as a ProctorError subclass carrying a
category, optional context and suggestions. The CLI installs an ErrorHandler
that renders these as Rich panels; library code only raises.

Copyright (c) Advanced Micro Devices, Inc. All rights reserved.
"""

import logging
import sys
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional

from rich.console import Console
from rich.panel import Panel
from rich.text import Text


class ErrorCategory(Enum):
    """Error category enumeration."""

    VALIDATION = "validation"
    CONFIGURATION = "configuration"
    PROVIDER = "provider"
    PROVIDER_CONTRACT = "provider_contract"
    MALFORMED_STACK = "malformed_stack"
    RUNTIME = "runtime"


@dataclass
class ErrorContext:
    """Where an error happened."""

    operation: str
    phase: Optional[str] = None
    component: Optional[str] = None
    classroom: Optional[str] = None
    resource: Optional[str] = None
    additional_info: Optional[Dict[str, Any]] = None


def create_error_context(operation: str, **kwargs) -> ErrorContext:
    """Convenience constructor for ErrorContext."""
    return ErrorContext(operation=operation, **kwargs)


class ProctorError(Exception):
    """Base class for all proctor errors."""

    def __init__(
        self,
        message: str,
        category: ErrorCategory,
        context: Optional[ErrorContext] = None,
        recoverable: bool = False,
        suggestions: Optional[List[str]] = None,
        cause: Optional[BaseException] = None,
    ):
        super().__init__(message)
        self.message = message
        self.category = category
        self.context = context
        self.recoverable = recoverable
        self.suggestions = suggestions or []
        self.cause = cause


class ValidationError(ProctorError):
    """Invalid user input: classroom name, instance count or output format."""

    def __init__(self, message: str, **kwargs):
        super().__init__(message, ErrorCategory.VALIDATION, recoverable=True, **kwargs)


class ConfigurationError(ProctorError):
    """Missing or malformed configuration."""

    def __init__(self, message: str, **kwargs):
        super().__init__(
            message, ErrorCategory.CONFIGURATION, recoverable=True, **kwargs
        )


class ProviderError(ProctorError):
    """A provider call (AWS, box catalog) failed."""

    def __init__(self, message: str, **kwargs):
        super().__init__(message, ErrorCategory.PROVIDER, **kwargs)


class ProviderContractError(ProctorError):
    """The provider answered, but with inconsistent or empty data."""

    def __init__(self, message: str, **kwargs):
        super().__init__(message, ErrorCategory.PROVIDER_CONTRACT, **kwargs)


class MalformedStackError(ProctorError):
    """A stack exists but its parameters cannot be interpreted."""

    def __init__(self, message: str, **kwargs):
        super().__init__(message, ErrorCategory.MALFORMED_STACK, **kwargs)


_CATEGORY_STYLES = {
    ErrorCategory.VALIDATION: ("⚠️", "Validation Error", "yellow"),
    ErrorCategory.CONFIGURATION: ("⚙️", "Configuration Error", "yellow"),
    ErrorCategory.PROVIDER: ("☁️", "Provider Error", "red"),
    ErrorCategory.PROVIDER_CONTRACT: ("🧩", "Provider Contract Violation", "red"),
    ErrorCategory.MALFORMED_STACK: ("🧱", "Malformed Stack", "red"),
    ErrorCategory.RUNTIME: ("💥", "Runtime Error", "red"),
}


class ErrorHandler:
    """Renders errors on a Rich console."""

    def __init__(self, console: Optional[Console] = None, verbose: bool = False):
        self.console = console or Console(stderr=True)
        self.verbose = verbose
        self.logger = logging.getLogger(__name__)

    def handle_error(
        self,
        error: BaseException,
        context: Optional[ErrorContext] = None,
        show_traceback: Optional[bool] = None,
    ) -> None:
        """Print an error panel and log the failure."""
        if show_traceback is None:
            show_traceback = self.verbose

        if isinstance(error, ProctorError):
            emoji, title, style = _CATEGORY_STYLES[error.category]
            context = context or error.context
            suggestions = error.suggestions
        else:
            emoji, title, style = "💥", type(error).__name__, "red"
            suggestions = []

        body = Text(str(error), style=f"bold {style}")
        if context is not None:
            details = [
                f"{label}: {value}"
                for label, value in (
                    ("operation", context.operation),
                    ("phase", context.phase),
                    ("component", context.component),
                    ("classroom", context.classroom),
                    ("resource", context.resource),
                )
                if value
            ]
            if details:
                body.append("\n\n" + "\n".join(details), style="dim")
        if suggestions:
            body.append("\n\n💡 Suggestions:\n", style="bold cyan")
            body.append("\n".join(f"  • {s}" for s in suggestions), style="cyan")

        self.console.print(
            Panel(body, title=f"{emoji} {title}", border_style=style, expand=False)
        )
        self.logger.debug("Handled %s: %s", type(error).__name__, error)

        if show_traceback:
            cause = getattr(error, "cause", None)
            if cause is not None:
                self.console.print(
                    Text(f"Caused by: {type(cause).__name__}: {cause}", style="dim")
                )
            if sys.exc_info()[0] is not None:
                self.console.print_exception()


_error_handler: Optional[ErrorHandler] = None


def set_error_handler(handler: Optional[ErrorHandler]) -> None:
    """Install the process-wide error handler."""
    global _error_handler
    _error_handler = handler


def get_error_handler() -> Optional[ErrorHandler]:
    return _error_handler


def handle_error(
    error: BaseException,
    context: Optional[ErrorContext] = None,
    show_traceback: Optional[bool] = None,
) -> None:
    """Route an error to the installed handler, or to logging if none is set."""
    if _error_handler is None:
        logging.error("%s: %s", type(error).__name__, error)
        return
    _error_handler.handle_error(error, context=context, show_traceback=show_traceback)

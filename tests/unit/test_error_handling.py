#!/usr/bin/env python3
"""
Unit tests for proctor unified error handling system.

Copyright (c) Advanced Micro Devices, Inc. All rights reserved.
"""

import json
from unittest.mock import Mock, patch

import pytest
from rich.console import Console

from proctor.core.errors import (
    ConfigurationError,
    ErrorCategory,
    ErrorContext,
    ErrorHandler,
    MalformedStackError,
    ProctorError,
    ProviderContractError,
    ProviderError,
    ValidationError,
    create_error_context,
    get_error_handler,
    handle_error,
    set_error_handler,
)


@pytest.fixture(autouse=True)
def reset_global_handler():
    yield
    set_error_handler(None)


class TestErrorContext:
    def test_defaults(self):
        context = create_error_context(operation="describe_classroom")

        assert isinstance(context, ErrorContext)
        assert context.operation == "describe_classroom"
        assert context.classroom is None
        assert context.additional_info is None

    def test_serializable(self):
        context = create_error_context(
            "create_classroom", phase="image_lookup", classroom="workshop",
            additional_info={"region": "us-east-1"},
        )

        dumped = json.dumps(context.__dict__, default=str)

        assert "image_lookup" in dumped
        assert "workshop" in dumped


class TestErrorHierarchy:
    @pytest.mark.parametrize("error_class,category,recoverable", [
        (ValidationError, ErrorCategory.VALIDATION, True),
        (ConfigurationError, ErrorCategory.CONFIGURATION, True),
        (ProviderError, ErrorCategory.PROVIDER, False),
        (ProviderContractError, ErrorCategory.PROVIDER_CONTRACT, False),
        (MalformedStackError, ErrorCategory.MALFORMED_STACK, False),
    ])
    def test_error_types(self, error_class, category, recoverable):
        error = error_class("something went wrong")

        assert isinstance(error, ProctorError)
        assert error.category == category
        assert error.recoverable is recoverable
        assert str(error) == "something went wrong"
        assert error.suggestions == []

    def test_cause_and_suggestions(self):
        cause = ValueError("invalid literal for int()")
        error = MalformedStackError("bad stack", cause=cause, suggestions=["Recreate it"])

        assert error.cause is cause
        assert error.suggestions == ["Recreate it"]


class TestErrorHandler:
    def setup_method(self):
        self.mock_console = Mock(spec=Console)
        self.handler = ErrorHandler(console=self.mock_console, verbose=False)

    @pytest.mark.parametrize("error,title", [
        (ValidationError("bad name"), "Validation Error"),
        (ConfigurationError("no bucket"), "Configuration Error"),
        (ProviderError("AccessDenied"), "Provider Error"),
        (ProviderContractError("empty key"), "Provider Contract Violation"),
        (MalformedStackError("bad count"), "Malformed Stack"),
    ])
    def test_panel_title_per_category(self, error, title):
        self.handler.handle_error(error)

        panel = self.mock_console.print.call_args[0][0]
        assert title in panel.title

    def test_generic_exception_uses_type_name(self):
        self.handler.handle_error(KeyError("x"))

        panel = self.mock_console.print.call_args[0][0]
        assert "KeyError" in panel.title

    def test_context_and_suggestions_rendered(self):
        error = ValidationError(
            "invalid name",
            context=create_error_context("validate_name", classroom="1bad"),
            suggestions=["Start with a letter"],
        )

        self.handler.handle_error(error)

        body = self.mock_console.print.call_args[0][0].renderable
        assert "classroom: 1bad" in body.plain
        assert "Start with a letter" in body.plain

    def test_traceback_only_inside_exception_handling(self):
        verbose = ErrorHandler(console=self.mock_console, verbose=True)
        error = ProviderError("throttled", cause=RuntimeError("429"))

        verbose.handle_error(error)
        self.mock_console.print_exception.assert_not_called()

        try:
            raise error
        except ProviderError as e:
            verbose.handle_error(e)
        self.mock_console.print_exception.assert_called_once()


class TestGlobalErrorHandler:
    def test_set_and_get(self):
        handler = ErrorHandler(console=Mock(spec=Console))
        set_error_handler(handler)

        assert get_error_handler() is handler

    def test_routes_to_installed_handler(self):
        mock_console = Mock(spec=Console)
        set_error_handler(ErrorHandler(console=mock_console))

        handle_error(ValidationError("bad"))

        mock_console.print.assert_called()

    def test_falls_back_to_logging(self):
        set_error_handler(None)

        with patch("proctor.core.errors.logging") as mock_logging:
            handle_error(ValueError("boom"))

        mock_logging.error.assert_called_once()

"""Shared pytest fixtures and configuration for the cmdproc test suite.

Guidelines
----------
* Collaborators are mocked at the protocol boundary with MagicMock.
* Output is captured with BufferedOutput, never the real console.
* Tests must not depend on OS state.
"""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from cmdproc.core.models import Accepted
from cmdproc.infra.output import BufferedOutput


def passthrough_hook_manager() -> MagicMock:
    """A hook manager that accepts arguments and leaves results alone."""
    hooks = MagicMock()
    hooks.validate_arguments.return_value = Accepted()
    hooks.alter_result.side_effect = lambda names, result, args: result
    hooks.determine_status_code.return_value = None
    hooks.extract_output.side_effect = lambda names, result: result
    return hooks


@pytest.fixture
def hooks() -> MagicMock:
    return passthrough_hook_manager()


@pytest.fixture
def output() -> BufferedOutput:
    return BufferedOutput()


@pytest.fixture
def formatter() -> MagicMock:
    return MagicMock()


@pytest.fixture
def formatter_manager(formatter: MagicMock) -> MagicMock:
    manager = MagicMock()
    manager.get_formatter.return_value = formatter
    return manager


"""
Unit Test Fixtures.

Fixtures for unit tests. The backend is always the in-memory fake from the
root conftest; feedback is recorded instead of shown.
"""

from unittest.mock import MagicMock

import pytest

from notekeeper.feedback.signals import FeedbackChannel, HapticType


class RecordingFeedback(FeedbackChannel):
    """Feedback channel that keeps every alert and haptic in order."""

    def __init__(self) -> None:
        self.alerts: list[tuple[str, str]] = []
        self.haptics: list[HapticType] = []

    def alert(self, title: str, message: str) -> None:
        self.alerts.append((title, message))

    async def haptic(self, kind: HapticType) -> None:
        self.haptics.append(kind)

    @property
    def messages(self) -> list[str]:
        return [message for _, message in self.alerts]


@pytest.fixture
def feedback() -> RecordingFeedback:
    """Recording feedback channel."""
    return RecordingFeedback()


@pytest.fixture
def mock_logger() -> MagicMock:
    """
    Mock logger for testing logging calls.

    Usage:
        def test_logging(mock_logger):
            with patch("module.logger", mock_logger):
                # Test code that logs
                mock_logger.warning.assert_called_once()
    """
    logger = MagicMock()
    logger.debug = MagicMock()
    logger.info = MagicMock()
    logger.warning = MagicMock()
    logger.error = MagicMock()
    logger.exception = MagicMock()
    return logger

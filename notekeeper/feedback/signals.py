"""
Feedback Signals.

User-facing feedback channels: a blocking alert (title + message) and a
fire-and-forget haptic pulse. Device haptics are outside this package; the
console channel renders alerts with Rich and shows haptics as a glyph.

Usage:
    feedback = get_feedback()
    feedback.alert("Error", "Failed to load notes")
    await feedback.haptic(HapticType.ERROR)
"""

from abc import ABC, abstractmethod
from enum import Enum

from rich.console import Console
from rich.panel import Panel

from notekeeper.core.config import get_app_config
from notekeeper.core.logging import get_logger, log_with_source

logger = get_logger(__name__)


class HapticType(str, Enum):
    """Notification haptics emitted after an operation."""

    SUCCESS = "success"
    ERROR = "error"


HAPTIC_GLYPH = {
    HapticType.SUCCESS: "[green]✓[/green]",
    HapticType.ERROR: "[red]✗[/red]",
}


class FeedbackChannel(ABC):
    """Base class for feedback sinks used by the presenter."""

    @abstractmethod
    def alert(self, title: str, message: str) -> None:
        """Show an alert to the user."""
        ...

    @abstractmethod
    async def haptic(self, kind: HapticType) -> None:
        """Emit a notification haptic."""
        ...


class ConsoleFeedback(FeedbackChannel):
    """Renders alerts as Rich panels on a terminal."""

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console(stderr=True)

    def alert(self, title: str, message: str) -> None:
        self.console.print(Panel(message, title=title, border_style="red"))

    async def haptic(self, kind: HapticType) -> None:
        self.console.print(HAPTIC_GLYPH[kind])


class LogFeedback(FeedbackChannel):
    """Records feedback as structured log events only."""

    def alert(self, title: str, message: str) -> None:
        log_with_source(logger, "presenter", "warning", "Alert", title=title, alert=message)

    async def haptic(self, kind: HapticType) -> None:
        log_with_source(logger, "presenter", "debug", "Haptic", haptic=kind.value)


def get_feedback() -> FeedbackChannel:
    """Build the feedback channel selected in feedback.yaml."""
    presenter = get_app_config().feedback.presenter
    if presenter == "log":
        return LogFeedback()
    return ConsoleFeedback()

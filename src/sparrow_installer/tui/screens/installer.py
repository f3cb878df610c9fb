"""The single installer screen: title, content and description panels."""

from __future__ import annotations

from collections.abc import Callable

from textual import events
from textual.app import ComposeResult
from textual.screen import Screen

from sparrow_installer.config.theme import AppConfig
from sparrow_installer.models.events import KeyEvent
from sparrow_installer.models.session import Session
from sparrow_installer.tui.utils import to_key_event
from sparrow_installer.tui.widgets.panels import (
    ContentPanel,
    DescriptionPanel,
    SessionPanel,
    TitlePanel,
)


class InstallerScreen(Screen[None]):
    """Three stacked panels redrawn from the session.

    Every key press is translated and handed to ``key_handler``; nothing
    on this screen reacts to keys directly.
    """

    DEFAULT_CSS = """
    InstallerScreen {
        layout: vertical;
        overflow: hidden;
    }
    """

    def __init__(
        self,
        config: AppConfig,
        key_handler: Callable[[KeyEvent], None],
        **kwargs: object,
    ) -> None:
        super().__init__(**kwargs)
        self.config = config
        self.key_handler = key_handler

    def compose(self) -> ComposeResult:
        yield TitlePanel(self.config, id="title")
        yield ContentPanel(self.config, id="content")
        yield DescriptionPanel(self.config, id="description")

    def on_key(self, event: events.Key) -> None:
        event.prevent_default()
        event.stop()
        key_event = to_key_event(event.key, event.character, event.is_printable)
        if key_event is not None:
            self.key_handler(key_event)

    def redraw(self, session: Session) -> None:
        """Redraw every panel from the current session."""
        for panel in self.query(SessionPanel):
            panel.redraw(session)

"""The three stacked panels of the installer screen."""

from __future__ import annotations

from textual.widgets import Static

from sparrow_installer.config.theme import AppConfig
from sparrow_installer.models.session import Session
from sparrow_installer.tui.render import (
    render_content,
    render_description,
    render_title,
)


class SessionPanel(Static):
    """Base class for panels that redraw from the session.

    Subclasses override redraw().
    """

    def __init__(self, config: AppConfig, **kwargs: object) -> None:
        super().__init__("", **kwargs)
        self.config = config

    def redraw(self, session: Session) -> None:
        """Redraw from the current session."""
        raise NotImplementedError


class TitlePanel(SessionPanel):
    """App title, separator and the prompt for the current state."""

    DEFAULT_CSS = """
    TitlePanel {
        width: 100%;
    }
    """

    def on_mount(self) -> None:
        self.styles.height = self.config.theme.ui.title_height

    def redraw(self, session: Session) -> None:
        self.update(render_title(session, self.config, self.size.width))


class ContentPanel(SessionPanel):
    """Menu, confirmation, password field or processing output."""

    DEFAULT_CSS = """
    ContentPanel {
        width: 100%;
        height: 1fr;
    }
    """

    def redraw(self, session: Session) -> None:
        self.update(render_content(session, self.config))


class DescriptionPanel(SessionPanel):
    """Progress, status message or contextual help."""

    DEFAULT_CSS = """
    DescriptionPanel {
        width: 100%;
    }
    """

    def on_mount(self) -> None:
        self.styles.height = self.config.theme.ui.description_height

    def redraw(self, session: Session) -> None:
        self.update(render_description(session, self.config, self.size.width))

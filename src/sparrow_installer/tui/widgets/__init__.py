"""Installer widgets."""

from sparrow_installer.tui.widgets.panels import (
    ContentPanel,
    DescriptionPanel,
    SessionPanel,
    TitlePanel,
)

__all__ = ["ContentPanel", "DescriptionPanel", "SessionPanel", "TitlePanel"]

"""Installer screens."""

from sparrow_installer.tui.screens.installer import InstallerScreen

__all__ = ["InstallerScreen"]

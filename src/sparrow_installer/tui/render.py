"""Pure render functions: session + config in, Rich renderables out.

Nothing here mutates the session. Widths are in terminal cells and are
passed in by the panels, which know their current size.
"""

from __future__ import annotations

from rich.console import Group, RenderableType
from rich.panel import Panel
from rich.style import Style
from rich.text import Text

from sparrow_installer.config.theme import AppConfig, parse_alignment, parse_color
from sparrow_installer.models.session import (
    MENU_OPTIONS,
    Operation,
    ProgressKind,
    Session,
    StateKind,
    StatusSeverity,
)

# Cells lit by the indeterminate bar, and the padding at the end of each sweep.
BAR_WINDOW = 4
BAR_CYCLE_PADDING = 6
BAR_MARGIN = 4


def _style(fg: str, bg: str | None = None, *, bold: bool = False) -> Style:
    return Style(
        color=parse_color(fg),
        bgcolor=parse_color(bg) if bg is not None else None,
        bold=bold,
    )


def option_title(operation: Operation, config: AppConfig) -> str:
    ui_text = config.text.ui_text
    return {
        Operation.DEFAULT: ui_text.default_title,
        Operation.CUSTOM: ui_text.custom_title,
        Operation.UPDATE_SYSTEM: ui_text.update_title,
        Operation.EXIT: ui_text.exit_title,
    }[operation]


def option_description(operation: Operation, config: AppConfig) -> str:
    ui_text = config.text.ui_text
    return {
        Operation.DEFAULT: ui_text.default_description,
        Operation.CUSTOM: ui_text.custom_description,
        Operation.UPDATE_SYSTEM: ui_text.update_description,
        Operation.EXIT: ui_text.exit_description,
    }[operation]


# --- Title ---


def title_text(session: Session, config: AppConfig) -> str:
    """Prompt line under the app title for the current state."""
    messages = config.text.messages
    if session.progress is not None and session.dry_run:
        return messages.dry_run_testing
    kind = session.kind
    if kind is StateKind.CONFIRMATION:
        return messages.confirmation_prompt
    if kind is StateKind.PASSWORD_INPUT:
        return messages.password_prompt
    if kind is StateKind.PROCESSING:
        return session.state.label
    return messages.welcome


def render_title(session: Session, config: AppConfig, width: int) -> Text:
    theme = config.theme
    base = _style(theme.colors.title_fg, theme.colors.title_bg, bold=True)

    text = Text(config.text.ui_text.app_title, style=base)
    if session.dry_run:
        text.append(
            f"  {theme.ui.dry_run_icon} {config.text.ui_text.dry_run_indicator}",
            style=_style(theme.colors.dry_run_fg, theme.colors.title_bg, bold=True),
        )
    if theme.ui.show_separator:
        text.append("\n" + theme.ui.separator_char * max(width, 0))
    text.append("\n" + title_text(session, config))
    text.justify = parse_alignment(theme.layout.title_alignment)
    return text


# --- Content ---


def render_content(session: Session, config: AppConfig) -> RenderableType:
    kind = session.kind
    if kind is StateKind.PASSWORD_INPUT:
        return _password_content(session, config)
    if kind is StateKind.CONFIRMATION:
        return _confirmation_content(session, config)
    if session.progress is not None or kind is StateKind.PROCESSING:
        return _processing_content(session, config)
    return _menu_content(session, config)


def masked_secret(session: Session) -> str:
    """The password field contents: stars unless visibility is toggled on."""
    if session.show_secret:
        return session.secret_buffer
    return "*" * len(session.secret_buffer)


def _password_content(session: Session, config: AppConfig) -> RenderableType:
    theme = config.theme
    prompt_style = _style(theme.colors.confirmation_fg, theme.colors.confirmation_bg)
    justify = parse_alignment(theme.layout.confirmation_alignment)

    field = Panel(
        Text(masked_secret(session) + "█", style=_style(theme.colors.content_fg)),
        border_style=_style(theme.colors.primary),
        style=Style(bgcolor=parse_color(theme.colors.content_bg)),
    )
    return Group(
        Text(config.text.messages.password_label, style=prompt_style, justify=justify),
        field,
        Text(
            config.text.messages.password_instructions,
            style=prompt_style,
            justify="center",
        ),
    )


def _confirmation_content(session: Session, config: AppConfig) -> Text:
    theme = config.theme
    return Text(
        f"{session.confirmation_text}\n\n{config.text.messages.confirmation_help}",
        style=_style(theme.colors.confirmation_fg, theme.colors.confirmation_bg),
        justify=parse_alignment(theme.layout.confirmation_alignment),
    )


def processing_lines(session: Session, config: AppConfig) -> list[str]:
    label = session.state.label or config.text.messages.processing
    lines = [label, ""]
    lines.extend(session.action_output)
    if session.dry_run:
        lines.append("")
        lines.extend(config.text.messages.dry_run_misc_text.split("\n"))
    return lines


def _processing_content(session: Session, config: AppConfig) -> Panel:
    theme = config.theme
    body = Text(
        "\n".join(processing_lines(session, config)),
        style=_style(theme.colors.content_fg),
    )
    return Panel(
        body,
        border_style=_style(theme.progress.border_active_color),
        style=Style(bgcolor=parse_color(theme.colors.content_bg)),
    )


def _menu_content(session: Session, config: AppConfig) -> Text:
    theme = config.theme
    padding = " " * theme.layout.content_padding
    text = Text(style=Style(bgcolor=parse_color(theme.colors.main_bg)))

    for index, option in enumerate(MENU_OPTIONS):
        selected = index == session.selected_index
        if selected:
            style = _style(theme.colors.selected_fg, theme.colors.selected_bg, bold=True)
            prefix = theme.ui.selection_prefix
        elif not option.is_enabled:
            style = _style(theme.colors.disabled_fg, theme.colors.disabled_bg)
            prefix = ""
        else:
            style = _style(theme.colors.content_fg, theme.colors.content_bg)
            prefix = ""

        title = option_title(option, config)
        if not option.is_enabled:
            title += theme.ui.disabled_suffix
        if index:
            text.append("\n")
        text.append(f"{padding}{prefix}{title}", style=style)
    return text


# --- Description ---


def spinner_char(session: Session, config: AppConfig) -> str:
    progress = session.progress
    if progress is None or progress.kind is not ProgressKind.INDETERMINATE:
        return ""
    frames = config.text.messages.spinner_chars
    return frames[progress.step % len(frames)]


def progress_bar(session: Session, config: AppConfig, width: int) -> str:
    """Bar line for the description area, ``width`` being the panel width."""
    progress = session.progress
    if progress is None:
        return ""

    chars = config.text.progress
    bar_width = max(width - BAR_MARGIN, 0)
    cells = [chars.bar_empty_char] * bar_width

    if progress.kind is ProgressKind.INDETERMINATE:
        position = progress.bar_position % (bar_width + BAR_CYCLE_PADDING)
        for offset in range(BAR_WINDOW):
            cell = position - offset
            if 0 <= cell < bar_width:
                cells[cell] = chars.bar_fill_char
    else:
        total = chars.countdown_seconds or 1
        filled = int(progress.countdown_remaining / total * bar_width)
        for cell in range(min(filled, bar_width)):
            cells[cell] = chars.bar_fill_char
    return "".join(cells)


def render_description(session: Session, config: AppConfig, width: int) -> Text:
    theme = config.theme
    messages = config.text.messages
    justify = parse_alignment(theme.layout.description_alignment)
    help_style = _style(theme.colors.description_fg, theme.colors.description_bg)

    progress = session.progress
    if progress is not None:
        label = session.state.label or messages.processing
        if progress.kind is ProgressKind.DETERMINANT:
            headline = f"{progress.countdown_remaining} {label}"
        else:
            headline = f"{spinner_char(session, config)} {label}"
        return Text(
            f"{headline}\n{progress_bar(session, config, width)}",
            style=_style(theme.progress.bar_color, theme.colors.description_bg),
            justify="center",
        )

    status = session.status_message
    if status is not None:
        ui_text = config.text.ui_text
        fg, bg, prefix = {
            StatusSeverity.SUCCESS: (
                theme.colors.success_fg,
                theme.colors.success_bg,
                ui_text.success_prefix,
            ),
            StatusSeverity.ERROR: (
                theme.colors.error_fg,
                theme.colors.error_bg,
                ui_text.error_prefix,
            ),
            StatusSeverity.FAIL: (
                theme.colors.fail_fg,
                theme.colors.fail_bg,
                ui_text.fail_prefix,
            ),
        }[status.severity]
        text = Text(justify=justify)
        text.append(prefix, style=_style(fg, bg, bold=True))
        text.append(f": {status.text}", style=_style("White", theme.colors.description_bg))
        text.append(f"\n\n{messages.navigation_help}", style=help_style)
        return text

    return Text(description_help(session, config), style=help_style, justify=justify)


def description_help(session: Session, config: AppConfig) -> str:
    """Help text for the description area when nothing else is shown."""
    messages = config.text.messages
    kind = session.kind
    if kind is StateKind.CONFIRMATION:
        return messages.review_help
    if kind is StateKind.PASSWORD_INPUT:
        return messages.password_help
    if kind is StateKind.PROCESSING:
        return messages.processing_help

    option = session.selected_option
    if option.is_enabled:
        return f"{option_description(option, config)}\n\n{messages.navigation_help}"
    return f"{messages.disabled_help}\n\n{messages.navigation_help}"

"""
Console messages for the Kanban simulator CLI

Rich-formatted status lines and the presenter that prints session
notifications as they are published.
"""

from __future__ import annotations

from typing import Optional

from rich.console import Console
from rich.markup import escape

from kanban_engine.notifications import Notification, NotificationLevel

console = Console()

_NOTIFICATION_STYLES = {
    NotificationLevel.INFO: ("ℹ️ ", "blue"),
    NotificationLevel.SUCCESS: ("✅", "green"),
    NotificationLevel.WARNING: ("⚠️ ", "yellow"),
    NotificationLevel.ERROR: ("❌", "red"),
}


def show_success_message(message: str, details: Optional[str] = None):
    """Show a formatted success message."""
    console.print(f"✅ [bold green]{escape(message)}[/bold green]")
    if details:
        console.print(f"   [dim]{escape(details)}[/dim]")


def show_warning_message(message: str, details: Optional[str] = None):
    """Show a formatted warning message."""
    console.print(f"⚠️ [bold yellow]{escape(message)}[/bold yellow]")
    if details:
        console.print(f"   [dim]{escape(details)}[/dim]")


def show_error_message(message: str, details: Optional[str] = None):
    """Show a formatted error message."""
    console.print(f"❌ [bold red]{escape(message)}[/bold red]")
    if details:
        console.print(f"   [dim]{escape(details)}[/dim]")


def show_notification(notification: Notification) -> None:
    icon, style = _NOTIFICATION_STYLES[notification.level]
    console.print(f"{icon} [{style}]{escape(notification.message)}[/{style}]")

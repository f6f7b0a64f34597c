"""
Settings view for locating the Poppler utilities.
"""
from __future__ import annotations

from pathlib import Path
from typing import Callable, Optional

import flet as ft

from config.settings_manager import SettingsManager


def create_settings_view(
    page: ft.Page,
    settings_manager: SettingsManager,
    on_settings_changed: Optional[Callable[[], None]] = None
) -> ft.Container:
    """
    Create the settings view container.

    Args:
        page: Flet page instance.
        settings_manager: Settings manager for reading/writing settings.
        on_settings_changed: Optional callback when settings change.

    Returns:
        Container with settings UI.
    """
    poppler_field = ft.TextField(
        label="Poppler bin Path",
        value=settings_manager.settings.poppler_path,
        hint_text=r"C:\Program Files\poppler-xx.xx.x\Library\bin",
        expand=True,
        read_only=True,
        border_color=ft.Colors.BLUE_200,
    )

    status_icon = ft.Icon(ft.Icons.ERROR, color=ft.Colors.RED)
    status_text = ft.Text("", color=ft.Colors.RED)

    def update_status() -> None:
        """Refresh the status row from the current settings."""
        s = settings_manager.settings
        if s.is_valid():
            status_icon.icon = ft.Icons.CHECK_CIRCLE
            status_icon.color = ft.Colors.GREEN
            status_text.value = "Poppler found"
            status_text.color = ft.Colors.GREEN
        else:
            status_icon.icon = ft.Icons.ERROR
            status_icon.color = ft.Colors.RED
            if not s.poppler_path:
                status_text.value = "Poppler path not set"
            elif not Path(s.poppler_path).exists():
                status_text.value = "Poppler directory not found"
            else:
                status_text.value = "Poppler path is not a directory"
            status_text.color = ft.Colors.RED
        page.update()

    async def browse_poppler(e: ft.ControlEvent) -> None:
        """Open directory picker for Poppler."""
        dir_path = await ft.FilePicker().get_directory_path(
            dialog_title="Select Poppler bin directory"
        )
        if dir_path:
            poppler_field.value = dir_path
            settings_manager.update(poppler_path=dir_path)
            update_status()
            if on_settings_changed:
                on_settings_changed()

    update_status()

    return ft.Container(
        content=ft.Column(
            controls=[
                ft.Text("Settings", size=24, weight=ft.FontWeight.BOLD),
                ft.Divider(),
                ft.Text("Rendering Engine", size=16, weight=ft.FontWeight.W_500),
                ft.Text(
                    "Pages are rendered with Poppler (pdftoppm). "
                    "Select its bin directory if it is not on your PATH.",
                    color=ft.Colors.GREY_600,
                ),
                ft.Container(height=20),
                ft.Row(
                    controls=[
                        poppler_field,
                        ft.ElevatedButton(
                            "Browse",
                            icon=ft.Icons.FOLDER_OPEN,
                            on_click=browse_poppler,
                        ),
                    ],
                    alignment=ft.MainAxisAlignment.START,
                ),
                ft.Container(height=20),
                ft.Row(controls=[status_icon, status_text], spacing=10),
                ft.Container(height=30),
                ft.TextButton(
                    "Download Poppler for Windows",
                    icon=ft.Icons.DOWNLOAD,
                    url="https://github.com/oschwartz10612/poppler-windows/releases",
                ),
            ],
            spacing=5,
            scroll=ft.ScrollMode.AUTO,
        ),
        padding=30,
        expand=True,
    )

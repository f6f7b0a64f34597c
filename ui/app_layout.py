"""
Main application layout: navigation rail plus the active view.
"""
from __future__ import annotations

import flet as ft

from config.defaults import THEME_PRIMARY
from config.settings_manager import SettingsManager
from ui.views.home_view import create_home_view
from ui.views.settings_view import create_settings_view


def create_app_layout(
    page: ft.Page,
    settings_manager: SettingsManager,
) -> ft.Row:
    """
    Create the main application layout.

    Args:
        page: Flet page instance.
        settings_manager: Settings manager instance.

    Returns:
        Row containing sidebar and content area.
    """
    content_area = ft.Container(expand=True)

    home_view = create_home_view(page, settings_manager)
    settings_view = create_settings_view(page, settings_manager, page.update)
    views = [home_view, settings_view]

    content_area.content = home_view

    def on_nav_change(e: ft.ControlEvent) -> None:
        content_area.content = views[e.control.selected_index]
        page.update()

    sidebar = ft.NavigationRail(
        selected_index=0,
        label_type=ft.NavigationRailLabelType.ALL,
        min_width=100,
        min_extended_width=200,
        bgcolor=ft.Colors.SURFACE,
        leading=ft.Container(
            content=ft.Column(
                controls=[
                    ft.Icon(ft.Icons.SLIDESHOW, size=32, color=THEME_PRIMARY),
                    ft.Text(
                        "PDF\nto PPTX",
                        size=12,
                        text_align=ft.TextAlign.CENTER,
                        weight=ft.FontWeight.BOLD,
                    ),
                ],
                horizontal_alignment=ft.CrossAxisAlignment.CENTER,
                spacing=5,
            ),
            padding=ft.Padding(top=20, bottom=20, left=0, right=0),
        ),
        destinations=[
            ft.NavigationRailDestination(
                icon=ft.Icons.HOME_OUTLINED,
                selected_icon=ft.Icons.HOME,
                label="Convert",
            ),
            ft.NavigationRailDestination(
                icon=ft.Icons.SETTINGS_OUTLINED,
                selected_icon=ft.Icons.SETTINGS,
                label="Settings",
            ),
        ],
        on_change=on_nav_change,
    )

    return ft.Row(
        controls=[sidebar, ft.VerticalDivider(width=1), content_area],
        expand=True,
    )

"""
Home view for PDF to PPTX conversion.

Provides the main conversion interface including:
- PDF file selection
- Progress display
- Log viewer
- Convert / cancel controls
"""
from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional

import flet as ft

from config.defaults import DECK_EXTENSION, SOURCE_EXTENSION
from config.settings_manager import SettingsManager
from core.pipeline import ConversionPipeline, deck_filename
from core.rasterizer import PdfRasterizer
from ui.log_handler import setup_logger

logger = logging.getLogger(__name__)

PipelineFactory = Callable[[], ConversionPipeline]


@dataclass
class HomeViewState:
    """Mutable state for the home view."""
    selected_file: Optional[Path] = None
    is_converting: bool = False
    worker: Optional["ConversionWorker"] = None


class ConversionWorker:
    """
    Runs a conversion pipeline in a background thread.

    Communicates progress and status through Flet's PubSub topics:
    ``status`` (busy/done/error/cancelled), ``progress`` (0-100),
    ``log`` and ``error_message``.
    """

    def __init__(
        self,
        page: ft.Page,
        settings_manager: SettingsManager,
        pipeline_factory: Optional[PipelineFactory] = None,
    ):
        """
        Initialize the conversion worker.

        Args:
            page: Flet page for PubSub communication.
            settings_manager: Settings manager instance.
            pipeline_factory: Builds a fresh pipeline per conversion.
                Defaults to a Poppler-backed pipeline.
        """
        self.page = page
        self.settings_manager = settings_manager
        self.pipeline: Optional[ConversionPipeline] = None
        self.thread: Optional[threading.Thread] = None
        self._pipeline_factory = pipeline_factory or self._create_pipeline

        # Forward core log records to the UI log view
        self.logger = setup_logger(
            "core",
            lambda msg: self.page.pubsub.send_all_on_topic("log", msg)
        )

    def _create_pipeline(self) -> ConversionPipeline:
        poppler_path = self.settings_manager.settings.poppler_path or None
        return ConversionPipeline(PdfRasterizer(poppler_path=poppler_path))

    def start(self, input_path: Path, output_path: Path) -> None:
        """
        Start a conversion.

        Args:
            input_path: Path to input PDF file.
            output_path: Path to output PPTX file.
        """
        self.pipeline = self._pipeline_factory()
        self.thread = threading.Thread(
            target=self._process,
            args=(self.pipeline, input_path, output_path),
            daemon=True
        )
        self.thread.start()

    def stop(self) -> None:
        """Request cancellation of the running conversion."""
        if self.pipeline is not None:
            self.pipeline.cancel()

    def _publish(self, topic: str, message) -> None:
        self.page.pubsub.send_all_on_topic(topic, message)

    def _fail(self, message: str) -> None:
        self._publish("status", "error")
        self._publish("error_message", message)

    def _process(
        self,
        pipeline: ConversionPipeline,
        input_path: Path,
        output_path: Path,
    ) -> None:
        """
        Main conversion process (runs in background thread).

        Args:
            pipeline: Fresh pipeline for this conversion.
            input_path: Path to input PDF.
            output_path: Path to output PPTX.
        """
        try:
            self._publish("status", "busy")
            self.logger.info(f"Starting conversion: {input_path.name}")

            try:
                data = input_path.read_bytes()
            except OSError as e:
                self.logger.error(f"Cannot read input file: {e}")
                self._fail(f"Cannot read {input_path.name}")
                return

            result = pipeline.run(
                data,
                on_progress=lambda percentage: self._publish("progress", percentage),
            )

            if result.kind == "Cancelled":
                self._publish("status", "cancelled")
                return

            if not result.succeeded:
                self._fail(result.error.message)
                return

            self.logger.info(f"Saving to: {output_path}")
            try:
                output_path.write_bytes(result.blob)
            except OSError as e:
                self.logger.error(f"Failed to save presentation: {e}")
                self._fail(f"Failed to save {output_path.name}")
                return

            # Update last output directory
            self.settings_manager.update(last_output_dir=str(output_path.parent))

            self.logger.info("Conversion completed successfully!")
            self._publish("status", "done")

        except Exception as e:
            logger.exception("Unexpected conversion error")
            self.logger.error(f"Unexpected error: {str(e)}")
            self._fail(str(e))


def create_home_view(
    page: ft.Page,
    settings_manager: SettingsManager,
) -> ft.Container:
    """
    Create the home view container.

    Args:
        page: Flet page instance.
        settings_manager: Settings manager instance.

    Returns:
        Container with home view UI.
    """
    state = HomeViewState()
    state.worker = ConversionWorker(page, settings_manager)

    file_label = ft.Text(
        "Click to select PDF file",
        size=16,
        text_align=ft.TextAlign.CENTER,
    )

    drop_icon = ft.Icon(
        ft.Icons.UPLOAD_FILE,
        size=64,
        color=ft.Colors.BLUE_400,
    )

    progress_bar = ft.ProgressBar(value=0, visible=False, width=400)
    progress_text = ft.Text("", visible=False)

    log_view = ft.ListView(expand=True, spacing=2, auto_scroll=True)

    convert_button = ft.ElevatedButton(
        "Convert to PPTX",
        icon=ft.Icons.PLAY_ARROW,
        disabled=True,
        width=200,
    )

    cancel_button = ft.ElevatedButton(
        "Cancel",
        icon=ft.Icons.STOP,
        visible=False,
        width=200,
        bgcolor=ft.Colors.RED_400,
        color=ft.Colors.WHITE,
    )

    drop_container = ft.Container(
        content=ft.Column(
            controls=[drop_icon, file_label],
            horizontal_alignment=ft.CrossAxisAlignment.CENTER,
            alignment=ft.MainAxisAlignment.CENTER,
        ),
        width=500,
        height=200,
        border=ft.Border.all(2, ft.Colors.BLUE_200),
        border_radius=10,
        bgcolor=ft.Colors.BLUE_50,
        alignment=ft.Alignment(0, 0),
        ink=True,
    )

    def show_snack(message: str, color: str, duration: int = 3000) -> None:
        page.snack_bar = ft.SnackBar(
            content=ft.Text(message),
            bgcolor=color,
            duration=duration,
        )
        page.snack_bar.open = True

    async def on_drop_click(e: ft.ControlEvent) -> None:
        """Open the file picker; only PDF files are accepted."""
        files = await ft.FilePicker().pick_files(
            dialog_title="Select PDF file",
            allowed_extensions=[SOURCE_EXTENSION.lstrip(".")],
            allow_multiple=False,
        )
        if not files:
            return

        selected = Path(files[0].path)
        if selected.suffix.lower() != SOURCE_EXTENSION:
            show_snack("Only PDF files can be converted", ft.Colors.RED)
            page.update()
            return

        state.selected_file = selected
        file_label.value = f"Selected: {selected.name}"
        convert_button.disabled = not settings_manager.settings.is_valid()
        page.update()

    drop_container.on_click = on_drop_click

    async def on_convert_click(e: ft.ControlEvent) -> None:
        """Ask where to save the deck, then start the conversion."""
        if state.selected_file is None or state.is_converting:
            return

        last_dir = settings_manager.settings.last_output_dir
        initial_dir = last_dir if last_dir and Path(last_dir).exists() else None

        result = await ft.FilePicker().save_file(
            dialog_title="Save PPTX file",
            file_name=deck_filename(state.selected_file.name),
            allowed_extensions=[DECK_EXTENSION.lstrip(".")],
            initial_directory=initial_dir,
        )

        if result and state.selected_file:
            output_path = Path(result)
            if not output_path.suffix:
                output_path = output_path.with_suffix(DECK_EXTENSION)
            state.worker.start(state.selected_file, output_path)

    convert_button.on_click = on_convert_click

    def on_cancel_click(e: ft.ControlEvent) -> None:
        if state.worker:
            state.worker.stop()

    cancel_button.on_click = on_cancel_click

    def on_progress(topic: str, value: int) -> None:
        progress_bar.value = value / 100
        progress_text.value = f"{value}%"
        page.update()

    def on_log(topic: str, message: str) -> None:
        log_view.controls.append(
            ft.Text(message, size=12, font_family="monospace", selectable=True)
        )
        # Limit log entries
        if len(log_view.controls) > 100:
            log_view.controls.pop(0)
        page.update()

    def on_status(topic: str, status: str) -> None:
        state.is_converting = status == "busy"

        if status == "busy":
            convert_button.visible = False
            cancel_button.visible = True
            progress_bar.visible = True
            progress_text.visible = True
            progress_bar.value = 0
            progress_text.value = "0%"
        elif status in ("done", "error", "cancelled"):
            convert_button.visible = True
            cancel_button.visible = False
            progress_bar.visible = False
            progress_text.visible = False

            if status == "done":
                show_snack("Conversion completed successfully!", ft.Colors.GREEN)
            elif status == "cancelled":
                show_snack("Conversion cancelled", ft.Colors.ORANGE)

        page.update()

    def on_error_message(topic: str, message: str) -> None:
        show_snack(f"Error: {message}", ft.Colors.RED, duration=5000)
        page.update()

    page.pubsub.subscribe_topic("progress", on_progress)
    page.pubsub.subscribe_topic("log", on_log)
    page.pubsub.subscribe_topic("status", on_status)
    page.pubsub.subscribe_topic("error_message", on_error_message)

    return ft.Container(
        content=ft.Column(
            controls=[
                ft.Text("PDF to PPTX Converter", size=24, weight=ft.FontWeight.BOLD),
                ft.Divider(),
                ft.Container(height=20),
                ft.Row(
                    controls=[drop_container],
                    alignment=ft.MainAxisAlignment.CENTER,
                ),
                ft.Container(height=20),
                ft.Row(
                    controls=[progress_bar, progress_text],
                    alignment=ft.MainAxisAlignment.CENTER,
                    spacing=10,
                ),
                ft.Row(
                    controls=[convert_button, cancel_button],
                    alignment=ft.MainAxisAlignment.CENTER,
                    spacing=10,
                ),
                ft.Container(height=20),
                ft.Text("Log", size=14, weight=ft.FontWeight.W_500),
                ft.Container(
                    content=log_view,
                    border=ft.Border.all(1, ft.Colors.GREY_300),
                    border_radius=5,
                    padding=10,
                    height=200,
                    expand=True,
                ),
            ],
            spacing=10,
            expand=True,
        ),
        padding=30,
        expand=True,
    )

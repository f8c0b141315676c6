"""Live Scan CLI - identify colours from values, photos and video feeds."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from chromaworks.libs.color.naming import describe
from chromaworks.libs.color.reference import (
    STANDARD_SECTIONS,
    closest_reference,
    find_section,
)
from chromaworks.libs.color.sample import ColorSample
from chromaworks.libs.color.sampler import OutOfBoundsError
from chromaworks.logging_utils import configure_logging

from ..core.capture import FrameSourceError, VideoFrameSource
from ..core.config import ScanConfig, load_config, load_settings
from ..core.image_analysis import analyze_image
from ..core.session import ScanResult, ScanSession
from ..core.worker import ScanWorker

logger = logging.getLogger(__name__)
console = Console()

app = typer.Typer(help="Live Scan - colour sampling and naming for colourblind users")


@app.callback()
def main(
    debug: bool = typer.Option(
        False, "--debug", help="Verbose logging, mirrored to the console."
    ),
) -> None:
    """Configure logging before any command runs."""

    settings = load_settings()
    log_path = configure_logging(
        settings.default_log_name,
        level=logging.DEBUG if debug else logging.INFO,
        include_console=debug,
    )
    logger.debug("Logging to %s", log_path)


def parse_color_value(value: str) -> ColorSample:
    """Accept ``#RRGGBB``/``RRGGBB`` or ``r,g,b`` with 0-255 channels."""

    text = value.strip()
    if "," in text:
        parts = [part.strip() for part in text.split(",")]
        if len(parts) != 3:
            raise ValueError(f"Expected three comma-separated channels, got {value!r}")
        channels = [int(part) for part in parts]
        if any(not 0 <= channel <= 255 for channel in channels):
            raise ValueError(f"Channels must be within 0-255: {value!r}")
        return ColorSample.from_bytes(*channels)
    return ColorSample.from_hex(text)


def _fail(message: str) -> None:
    console.print(f"[red]{escape(message)}[/red]")
    raise typer.Exit(code=1)


def _emit(payload: Dict[str, Any], as_json: bool, line: str) -> None:
    if as_json:
        typer.echo(json.dumps(payload))
    else:
        console.print(line)


@app.command("name")
def name_command(
    value: str = typer.Argument(..., help="Colour as #RRGGBB or r,g,b (0-255)."),
    json_output: bool = typer.Option(False, "--json", help="Emit JSON."),
) -> None:
    """Name a colour given as a hex code or RGB triple."""

    try:
        color = parse_color_value(value)
    except ValueError as exc:
        _fail(str(exc))
        return

    named = describe(color)
    nearest = closest_reference(color)
    payload = {
        "color_name": named.name,
        "hex_code": named.hex_code,
        "closest_reference": nearest.name,
        "closest_reference_hex": nearest.hex_code,
    }
    _emit(
        payload,
        json_output,
        f"[bold]{named.name}[/bold] {named.hex_code} "
        f"(closest reference: {nearest.name} {nearest.hex_code})",
    )


@app.command("image")
def image_command(
    path: Path = typer.Argument(..., help="Photo to analyse."),
    x: Optional[float] = typer.Option(None, help="Sample point x (pixels)."),
    y: Optional[float] = typer.Option(None, help="Sample point y (pixels)."),
    saliency_map: Optional[Path] = typer.Option(
        None,
        "--saliency-map",
        help="Grayscale saliency image; its brightest point is sampled.",
    ),
    window: Optional[int] = typer.Option(
        None, "--window", help="Sampling window side in pixels."
    ),
    json_output: bool = typer.Option(False, "--json", help="Emit JSON."),
) -> None:
    """Name the colour of a still photo at a point, its salient spot or its centre."""

    if (x is None) != (y is None):
        _fail("Provide both --x and --y, or neither.")
        return

    try:
        config = load_config(image_window_size=window)
        result = analyze_image(
            path,
            point=(x, y) if x is not None and y is not None else None,
            saliency_map=saliency_map,
            window_size=config.image_window_size,
        )
    except (FileNotFoundError, OutOfBoundsError, ValueError) as exc:
        _fail(str(exc))
        return

    px, py = result.point
    _emit(
        result.to_dict(),
        json_output,
        f"[bold]{result.color_name}[/bold] {result.hex_code} "
        f"at ({px:.0f}, {py:.0f}) via {result.point_source}",
    )


def open_frame_source(config: ScanConfig) -> VideoFrameSource:
    """Create the frame source for ``scan``; tests substitute synthetic frames."""

    return VideoFrameSource(config.capture_source, pixel_format=config.pixel_format)


def _print_scan_result(result: ScanResult, json_output: bool) -> None:
    _emit(
        result.to_dict(),
        json_output,
        f"[bold]{result.color_name}[/bold] {result.hex_code}",
    )


@app.command("scan")
def scan_command(
    source: Optional[str] = typer.Option(
        None, "--source", help="Camera index, video file or stream URL."
    ),
    max_frames: Optional[int] = typer.Option(
        None, "--max-frames", help="Stop after N frames (0 = until the feed ends)."
    ),
    window: Optional[int] = typer.Option(
        None, "--window", help="Sampling window side in pixels."
    ),
    history: Optional[int] = typer.Option(
        None, "--history", help="Frames averaged by the smoother."
    ),
    interval: Optional[float] = typer.Option(
        None, "--interval", help="Minimum seconds between updates."
    ),
    pixel_format: Optional[str] = typer.Option(
        None, "--pixel-format", help="Channel order of incoming frames."
    ),
    json_output: bool = typer.Option(False, "--json", help="Emit JSON lines."),
) -> None:
    """Continuously name the colour under the centre of a video feed."""

    try:
        config = load_config(
            source=source,
            max_frames=max_frames,
            window_size=window,
            history_length=history,
            update_interval=interval,
            pixel_format=pixel_format,
        )
    except ValueError as exc:
        _fail(str(exc))
        return

    session = ScanSession(
        window_size=config.window_size,
        history_length=config.history_length,
        update_interval=config.update_interval,
    )

    try:
        frame_source = open_frame_source(config).open()
    except FrameSourceError as exc:
        _fail(str(exc))
        return

    worker = ScanWorker(session, frame_source, max_frames=config.max_frames)
    seen_version = session.sink.version
    try:
        worker.start()
        while True:
            version, result = session.sink.wait_for_update(seen_version, timeout=0.2)
            if result is not None:
                seen_version = version
                _print_scan_result(result, json_output)
                continue
            if not worker.is_alive():
                version, result = session.sink.snapshot()
                if version > seen_version and result is not None:
                    _print_scan_result(result, json_output)
                break
    except KeyboardInterrupt:
        worker.stop()
    finally:
        worker.join()
        frame_source.close()

    if worker.error is not None:
        _fail(f"Scan stopped: {worker.error}")


@app.command("reference")
def reference_command(
    section: Optional[str] = typer.Option(
        None, "--section", help="Only show one palette section."
    ),
) -> None:
    """List the reference palette alongside the name the scanner would give."""

    sections = STANDARD_SECTIONS
    if section:
        match = find_section(section)
        if match is None:
            names = ", ".join(s.name for s in STANDARD_SECTIONS)
            _fail(f"Unknown section '{section}'. Available: {names}")
            return
        sections = (match,)

    table = Table(title="Reference Colours", show_header=True, header_style="bold")
    table.add_column("Section", style="cyan")
    table.add_column("Name")
    table.add_column("Hex", style="magenta")
    table.add_column("Scanner Name", style="green")
    for current in sections:
        for color in current.colors:
            table.add_row(
                current.name,
                color.name,
                color.hex_code,
                describe(color.sample).name,
            )
    console.print(table)


if __name__ == "__main__":
    app()

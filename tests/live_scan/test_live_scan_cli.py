import json
from pathlib import Path

import numpy as np
import pytest

typer_testing = pytest.importorskip("typer.testing")
from PIL import Image

from chromaworks.apps.live_scan.cli import main as cli_main
from chromaworks.apps.live_scan.cli.main import app, parse_color_value
from chromaworks.apps.live_scan.core.capture import FrameSourceError

CliRunner = typer_testing.CliRunner

runner = CliRunner()


class FakeFrameSource:
    def __init__(self, frames):
        self.frames = frames
        self.opened = False
        self.closed = False

    def open(self):
        self.opened = True
        return self

    def close(self):
        self.closed = True

    def __iter__(self):
        return iter(self.frames)


def _json_lines(output: str):
    return [json.loads(line) for line in output.splitlines() if line.startswith("{")]


def test_parse_color_value_accepts_hex_and_triples():
    assert parse_color_value("#ff0000").hex_code == "#FF0000"
    assert parse_color_value("0, 128, 255").hex_code == "#0080FF"
    with pytest.raises(ValueError):
        parse_color_value("1,2")
    with pytest.raises(ValueError):
        parse_color_value("0,0,300")


def test_name_command_json(log_dir: Path):
    result = runner.invoke(app, ["name", "#FF0000", "--json"])

    assert result.exit_code == 0, result.output
    payload = json.loads(result.output)
    assert payload == {
        "color_name": "Very Light Vivid Red",
        "hex_code": "#FF0000",
        "closest_reference": "Scarlet",
        "closest_reference_hex": "#FF2400",
    }


def test_name_command_plain_text(log_dir: Path):
    result = runner.invoke(app, ["name", "51,38,26"])
    assert result.exit_code == 0, result.output
    assert "Dark Brown" in result.output


def test_name_command_rejects_garbage(log_dir: Path):
    result = runner.invoke(app, ["name", "not-a-colour"])
    assert result.exit_code == 1
    assert "Invalid hex colour" in result.output


def test_image_command(log_dir: Path, tmp_path: Path):
    pixels = np.zeros((48, 64, 3), dtype=np.uint8)
    pixels[:, :32] = (255, 0, 0)
    pixels[:, 32:] = (0, 0, 255)
    path = tmp_path / "photo.png"
    Image.fromarray(pixels).save(path)

    result = runner.invoke(
        app, ["image", str(path), "--x", "50", "--y", "20", "--json"]
    )

    assert result.exit_code == 0, result.output
    payload = json.loads(result.output)
    assert payload["hex_code"] == "#0000FF"
    assert payload["point_source"] == "explicit"


def test_image_command_needs_both_coordinates(log_dir: Path, tmp_path: Path):
    result = runner.invoke(app, ["image", str(tmp_path / "x.png"), "--x", "5"])
    assert result.exit_code == 1


def test_image_command_missing_file(log_dir: Path, tmp_path: Path):
    result = runner.invoke(app, ["image", str(tmp_path / "missing.png")])
    assert result.exit_code == 1


def test_scan_command_reports_smoothed_colour(log_dir: Path, monkeypatch, solid_view):
    frames = [solid_view((40, level, 40)) for level in (235, 235, 180, 180, 195)]
    source = FakeFrameSource(frames)
    monkeypatch.setattr(cli_main, "open_frame_source", lambda config: source)

    result = runner.invoke(app, ["scan", "--interval", "0", "--json"])

    assert result.exit_code == 0, result.output
    lines = _json_lines(result.output)
    assert lines, result.output
    assert lines[-1]["color_name"] == "Light Vivid Green"
    assert lines[-1]["hex_code"] == "#28CD28"
    assert source.opened and source.closed


def test_scan_command_source_error(log_dir: Path, monkeypatch):
    class Broken:
        def open(self):
            raise FrameSourceError("Unable to open video source: 9")

    monkeypatch.setattr(cli_main, "open_frame_source", lambda config: Broken())

    result = runner.invoke(app, ["scan"])
    assert result.exit_code == 1
    assert "Unable to open video source" in result.output


def test_scan_command_rejects_bad_pixel_format(log_dir: Path):
    result = runner.invoke(app, ["scan", "--pixel-format", "YUV"])
    assert result.exit_code == 1
    assert "Unknown pixel format" in result.output


def test_scan_command_reports_worker_failure(log_dir: Path, monkeypatch, solid_view):
    view = solid_view((0, 0, 0))

    def failing():
        yield view
        raise RuntimeError("camera unplugged")

    class Flaky(FakeFrameSource):
        def __iter__(self):
            return failing()

    monkeypatch.setattr(cli_main, "open_frame_source", lambda config: Flaky([]))

    result = runner.invoke(app, ["scan", "--interval", "0", "--json"])
    assert result.exit_code == 1
    assert "camera unplugged" in result.output


def test_reference_command_lists_palette(log_dir: Path):
    result = runner.invoke(app, ["reference", "--section", "Browns & Grays"])
    assert result.exit_code == 0, result.output
    assert "Coffee" in result.output
    assert "#996633" in result.output


def test_reference_command_unknown_section(log_dir: Path):
    result = runner.invoke(app, ["reference", "--section", "Neons"])
    assert result.exit_code == 1
    assert "Unknown section" in result.output


def test_logging_goes_to_configured_directory(log_dir: Path):
    result = runner.invoke(app, ["--debug", "name", "#000000", "--json"])
    assert result.exit_code == 0, result.output
    assert (log_dir / "live_scan.log").exists()


def test_image_command_non_finite_point(log_dir: Path, tmp_path: Path):
    path = tmp_path / "photo.png"
    Image.fromarray(np.zeros((8, 8, 3), dtype=np.uint8)).save(path)

    result = runner.invoke(app, ["image", str(path), "--x", "inf", "--y", "0"])
    assert result.exit_code == 1
    assert result.exception is None or isinstance(result.exception, SystemExit)
    assert "not a finite position" in result.output

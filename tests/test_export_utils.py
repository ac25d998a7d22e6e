"""
Tests for export filename generation and file console utilities.
"""

from datetime import datetime
from pathlib import Path

from aurora_decision.cli.utils.export import create_file_console, export_to_text, generate_export_filename


def test_generate_export_filename_decide() -> None:
    """Test generating export filename for the decide command."""
    filename = generate_export_filename("decide", "Tromsø", datetime(2026, 1, 10, 21, 0))

    assert isinstance(filename, Path)
    assert filename.suffix == ".txt"
    assert filename.stem.startswith("aurora_")
    assert filename.stem.endswith("_decide")
    assert "2026-01-10" in filename.stem


def test_generate_export_filename_sanitizes_city() -> None:
    """Test spaces and punctuation are removed from the city."""
    filename = generate_export_filename("decide", "Alta, Finnmark", datetime(2026, 2, 1))

    assert filename.name == "aurora_alta_finnmark_2026-02-01_decide.txt"


def test_generate_export_filename_unknown_city() -> None:
    """Test a city with no usable characters falls back to 'unknown'."""
    filename = generate_export_filename("decide", "øøø", datetime(2026, 2, 1))

    assert filename.name == "aurora_unknown_2026-02-01_decide.txt"


def test_generate_export_filename_long_city() -> None:
    """Test long city names are truncated."""
    filename = generate_export_filename("decide", "a" * 50, datetime(2026, 2, 1))

    assert filename.name == f"aurora_{'a' * 20}_2026-02-01_decide.txt"


def test_file_console_captures_plain_text() -> None:
    """Test the file console writes markup-free text."""
    file_console = create_file_console()
    file_console.print("[bold red]Strong aurora[/bold red]")

    content = file_console.file.getvalue()
    assert content == "Strong aurora\n"
    assert "\x1b[" not in content


def test_export_to_text(tmp_path: Path) -> None:
    """Test exporting content writes UTF-8 text."""
    target = tmp_path / "export.txt"
    export_to_text("Aurora Decision for Tromsø\n", target)

    assert target.read_text(encoding="utf-8") == "Aurora Decision for Tromsø\n"

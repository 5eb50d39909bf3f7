"""Tests for settings loading."""

from pathlib import Path

import pytest

from draw_it_mcp.config import Settings


def test_defaults(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.chdir(tmp_path)
    s = Settings()
    assert s.store_url == "http://localhost:3001"
    assert s.drawings_dir is None
    assert s.current_filename == "current-active.png"
    assert s.transfer_filename == "last_mcp_transfer.png"
    assert (s.png_max_size, s.base64_max_size) == (640, 128)
    assert s.trim_threshold == 10.0


def test_environment_overrides(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("DRAW_IT_PNG_MAX_SIZE", "320")
    monkeypatch.setenv("DRAW_IT_STORE_URL", "http://127.0.0.1:9000")
    monkeypatch.setenv("DRAW_IT_DRAWINGS_DIR", str(tmp_path))

    s = Settings()

    assert s.png_max_size == 320
    assert s.store_url == "http://127.0.0.1:9000"
    assert s.drawings_dir == tmp_path


def test_dotenv_file(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.chdir(tmp_path)
    (tmp_path / ".env").write_text("DRAW_IT_TRIM_THRESHOLD=25\n")

    assert Settings().trim_threshold == 25.0

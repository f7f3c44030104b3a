"""
Tests for the command-line entry points.
"""

import json
from unittest.mock import patch

from page_healthcheck.health.config import DEFAULT_URL, TARGET_URL_ENV
from page_healthcheck.interface import validate_local, watch

PAGE = """
<html><body>
<a class=getStarted_Sjon href=/docs/intro>Get started</a>
<a class="navbar__item navbar__link" href="/docs/intro">Docs</a>
<h2>Chosen by companies and open source projects</h2>
</body></html>
"""


class TestWatchCli:
    """Tests for the live check CLI."""

    @patch("page_healthcheck.interface.watch.run_health_check")
    def test_main_default_url(self, mock_run, monkeypatch):
        """Test no arguments checks the default target."""
        monkeypatch.delenv(TARGET_URL_ENV, raising=False)
        mock_run.return_value = 0

        assert watch.main([]) == 0

        config = mock_run.call_args[0][0]
        assert config.url == DEFAULT_URL

    @patch("page_healthcheck.interface.watch.run_health_check")
    def test_main_target_url_env(self, mock_run, monkeypatch):
        """Test environment variable overrides the target URL."""
        monkeypatch.setenv(TARGET_URL_ENV, "https://staging.example.com/")
        mock_run.return_value = 1

        assert watch.main([]) == 1

        config = mock_run.call_args[0][0]
        assert config.url == "https://staging.example.com/"

    @patch("page_healthcheck.interface.watch.run_health_check")
    def test_main_config_file(self, mock_run, monkeypatch, tmp_path):
        """Test --config loads expectations from file."""
        monkeypatch.delenv(TARGET_URL_ENV, raising=False)
        path = tmp_path / "healthcheck.json"
        path.write_text(
            json.dumps({"url": "https://example.com/", "required_headings": ["Example Domain"]}),
            encoding="utf-8",
        )
        mock_run.return_value = 0

        assert watch.main(["--config", str(path)]) == 0

        config = mock_run.call_args[0][0]
        assert config.url == "https://example.com/"
        assert config.required_headings == ("Example Domain",)

    def test_main_missing_config_file(self, tmp_path, capsys):
        """Test unreadable config exits 1 with an error line."""
        assert watch.main(["--config", str(tmp_path / "missing.json")]) == 1

        assert "✗ ERROR: Config file not found" in capsys.readouterr().err

    def test_main_invalid_config_file(self, tmp_path, capsys):
        """Test invalid config exits 1 with an error line."""
        path = tmp_path / "healthcheck.json"
        path.write_text(json.dumps({"timeout_ms": 5000}), encoding="utf-8")

        assert watch.main(["--config", str(path)]) == 1

        assert "✗ ERROR: Missing required field 'url'" in capsys.readouterr().err

    @patch("page_healthcheck.interface.watch.run_health_check")
    def test_main_unexpected_error(self, mock_run):
        """Test unexpected errors exit 1."""
        mock_run.side_effect = RuntimeError("boom")
        assert watch.main([]) == 1

    @patch("page_healthcheck.interface.watch.run_health_check")
    def test_main_keyboard_interrupt(self, mock_run):
        """Test interruption exits 130."""
        mock_run.side_effect = KeyboardInterrupt()
        assert watch.main([]) == 130


class TestValidateLocalCli:
    """Tests for the offline check CLI."""

    def test_main_bundled_fixture(self, capsys):
        """Test bundled snapshot fails on the missing Get started marker."""
        assert validate_local.main([]) == 1

        out = capsys.readouterr().out
        assert "Missing required element: class=getStarted_Sjon" in out

    def test_main_custom_fixture(self, tmp_path, capsys):
        """Test matching snapshot passes."""
        fixture = tmp_path / "page.html"
        fixture.write_text(PAGE, encoding="utf-8")

        assert validate_local.main(["--fixture", str(fixture)]) == 0

        assert "PASSED" in capsys.readouterr().out

    def test_main_missing_fixture(self, tmp_path):
        """Test missing fixture exits 1."""
        assert validate_local.main(["--fixture", str(tmp_path / "missing.html")]) == 1

    def test_main_missing_config_file(self, tmp_path, capsys):
        """Test unreadable config exits 1 with an error line."""
        assert validate_local.main(["--config", str(tmp_path / "missing.json")]) == 1

        assert "✗ ERROR: Config file not found" in capsys.readouterr().err

# File: tests/test_cli.py
"""Tests for the CLI using click.testing.CliRunner.
The crawl itself is replaced by a fake; options, config merging and error
handling are checked.
"""
import pytest
import importlib
cli_module = importlib.import_module("site_warmer.cli")
from click.testing import CliRunner
from site_warmer.cli import cli
from site_warmer.errors import SitemapError


@pytest.fixture()
def captured(monkeypatch):
    """Patch start_crawl to record the config instead of crawling."""
    configs = []

    async def fake_crawl(cfg):
        configs.append(cfg)
        return []

    monkeypatch.setattr(cli_module, "start_crawl", fake_crawl)
    return configs


def test_version_option():
    runner = CliRunner()
    result = runner.invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert "SiteWarmer" in result.output


def test_defaults(captured):
    result = CliRunner().invoke(cli, ["--site", "https://example.com"])
    assert result.exit_code == 0, result.output
    cfg = captured[0]
    assert cfg.mode == "sitemap"
    assert cfg.sites == ["https://example.com"]
    assert cfg.css3selector == "a"
    assert cfg.concurrency == 10
    assert cfg.http.timeout == 10.0


def test_short_options_and_repeated_sites(captured):
    result = CliRunner().invoke(
        cli,
        ["-m", "links", "-s", "https://a.example", "-s", "https://b.example/",
         "-c", "nav a", "-n", "3", "-t", "4.5"],
    )
    assert result.exit_code == 0, result.output
    cfg = captured[0]
    assert cfg.mode == "links"
    assert cfg.sites == ["https://a.example", "https://b.example"]
    assert cfg.css3selector == "nav a"
    assert cfg.concurrency == 3
    assert cfg.http.timeout == 4.5


def test_config_file_with_overrides(tmp_path, captured):
    cfg_file = tmp_path / "warm.yaml"
    cfg_file.write_text(
        "mode: links\nsites: [https://a.example]\nconcurrency: 2\nhttp: {timeout: 7}\n",
        encoding="utf-8",
    )
    result = CliRunner().invoke(cli, ["--config", str(cfg_file), "-n", "5"])
    assert result.exit_code == 0, result.output
    cfg = captured[0]
    assert cfg.mode == "links"
    assert cfg.sites == ["https://a.example"]
    assert cfg.concurrency == 5
    assert cfg.http.timeout == 7.0


def test_missing_site_is_a_config_error(captured):
    result = CliRunner().invoke(cli, [])
    assert result.exit_code == 1
    assert "Invalid configuration" in result.output
    assert captured == []


def test_unknown_mode_is_rejected(captured):
    result = CliRunner().invoke(cli, ["-m", "crawl", "-s", "https://example.com"])
    assert result.exit_code == 2
    assert captured == []


def test_invalid_selector_aborts_before_any_request(unused_tcp_port):
    # nothing listens on the port; a request would surface as a different error
    result = CliRunner().invoke(
        cli, ["-m", "links", "-s", f"http://localhost:{unused_tcp_port}", "-c", "a["]
    )
    assert result.exit_code == 1
    assert "invalid CSS selector" in result.output
    assert "seed page" not in result.output


def test_fatal_crawl_error_exits_non_zero(monkeypatch):
    async def failing_crawl(cfg):
        raise SitemapError("sitemap 'https://example.com/sitemap.xml' returned HTTP 404")

    monkeypatch.setattr(cli_module, "start_crawl", failing_crawl)
    result = CliRunner().invoke(cli, ["-s", "https://example.com"])
    assert result.exit_code == 1
    assert "Crawl aborted" in result.output
    assert "HTTP 404" in result.output


def test_log_file_is_written(tmp_path, captured):
    log_file = tmp_path / "warm.log"
    result = CliRunner().invoke(
        cli, ["-s", "https://example.com", "--log-file", str(log_file), "--log-level", "DEBUG"]
    )
    assert result.exit_code == 0, result.output
    assert log_file.exists()

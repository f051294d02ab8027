"""Тесты для CLI с использованием click.testing.CliRunner.
Проверяют команды `crawl`, `config`, `--version`, а также обработку ошибок.
"""
import asyncio
import importlib
import json

import pytest
from click.testing import CliRunner
from site_crawler.aggregator import aggregate_results
from site_crawler.cli import cli
from site_crawler.crawler.models import PageResult

# site_crawler/__init__.py re-exports the `cli` group, shadowing the submodule attribute.
cli_module = importlib.import_module("site_crawler.cli")


@pytest.fixture(autouse=True)
def patch_start_crawl(monkeypatch):
    """Патчим start_crawl: возвращает фиктивный отчёт без сетевых запросов."""
    calls = []

    async def fake_crawl(cfg):
        calls.append(cfg)
        results = [
            PageResult("https://example.com", ok=True, status=200, attempts=1,
                       links=("https://example.com/about",)),
            PageResult("https://example.com/about", ok=False, status=500, attempts=4,
                       error="HTTP 500"),
        ]
        return aggregate_results(["https://example.com"], results)

    monkeypatch.setattr(cli_module, "start_crawl", fake_crawl)
    return calls


@pytest.fixture()
def cfg_file(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text(
        json.dumps({"seeds": "example.com", "max_attempts": 2, "timeout": 1.0}),
        encoding="utf-8",
    )
    return path


def test_version_option():
    result = CliRunner().invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert "SiteCrawler" in result.output


def test_show_config(cfg_file):
    result = CliRunner().invoke(cli, ["--config", str(cfg_file), "config"])
    assert result.exit_code == 0
    data = json.loads(result.stdout)
    assert data["seeds"] == "example.com"
    assert data["max_attempts"] == 2


def test_crawl_prints_report(cfg_file, patch_start_crawl):
    result = CliRunner().invoke(cli, ["--config", str(cfg_file), "crawl", "--pretty"])
    assert result.exit_code == 0
    report = json.loads(result.stdout)
    assert report["roots"] == ["https://example.com"]
    assert report["discovered"] == ["https://example.com/about"]
    assert report["failures"] == ["https://example.com/about"]
    assert report["pages"][0]["links"] == ["https://example.com/about"]
    assert patch_start_crawl[0].seeds == "example.com"


def test_crawl_overrides(tmp_path, monkeypatch, patch_start_crawl):
    monkeypatch.chdir(tmp_path)
    result = CliRunner().invoke(
        cli, ["crawl", "--seeds", "a.com,b.com", "-l", "3", "-n", "2", "--no-follow"]
    )
    assert result.exit_code == 0
    cfg = patch_start_crawl[0]
    assert cfg.seeds == "a.com,b.com"
    assert cfg.max_pages == 3
    assert cfg.concurrency == 2
    assert cfg.follow_links is False


def test_crawl_without_seeds(tmp_path, monkeypatch, patch_start_crawl):
    monkeypatch.chdir(tmp_path)
    result = CliRunner().invoke(cli, ["crawl"])
    assert result.exit_code == 1
    assert patch_start_crawl == []


def test_bad_config(tmp_path):
    bad = tmp_path / "bad.yaml"
    bad.write_text("concurrency: 0", encoding="utf-8")
    result = CliRunner().invoke(cli, ["--config", str(bad), "config"])
    assert result.exit_code == 1


def test_crawl_timeout(monkeypatch, cfg_file):
    async def slow(cfg):
        await asyncio.sleep(2)

    monkeypatch.setattr(cli_module, "start_crawl", slow)

    result = CliRunner().invoke(cli, ["--config", str(cfg_file), "crawl", "--crawl-timeout", "0.1"])
    assert result.exit_code == 1
    assert "не завершён" in result.output

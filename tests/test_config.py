# File: tests/test_config.py
import json
from pathlib import Path

import pytest
from pydantic import ValidationError
from site_crawler.config import CrawlerConfig, load_config


def write_file(tmp_path: Path, content: str, suffix: str) -> Path:
    path = tmp_path / f"config{suffix}"
    path.write_text(content, encoding="utf-8")
    return path


@pytest.mark.parametrize(
    "content,suffix,expect_exc",
    [
        ("seeds: example.com\nproxy_url: null", ".yaml", None),
        ("seeds: [example.com, example.org]", ".yml", None),
        (json.dumps({"seeds": "example.com", "concurrency": 2}), ".json", None),
        ("{}", ".yaml", None),
        ("concurrency: 0", ".yaml", ValidationError),
        ("unknown_field: 1", ".yaml", ValidationError),
        ("not: a: mapping", ".yaml", ValueError),
        ("- just\n- a list", ".yaml", TypeError),
        ("{broken json", ".json", ValueError),
        ("seeds = 'x'", ".toml", ValueError),
    ],
)
def test_load_config_variants(tmp_path, content, suffix, expect_exc):
    cfg_path = write_file(tmp_path, content, suffix)
    if expect_exc:
        with pytest.raises(expect_exc):
            load_config(cfg_path)
    else:
        assert isinstance(load_config(cfg_path), CrawlerConfig)


def test_seed_list_is_joined(tmp_path):
    cfg = load_config(write_file(tmp_path, "seeds: [example.com, example.org]", ".yaml"))
    assert cfg.seeds == "example.com,example.org"


def test_defaults():
    cfg = CrawlerConfig()
    assert cfg.max_attempts == 4
    assert cfg.timeout == 10.0
    assert cfg.concurrency == 1
    assert cfg.follow_links and cfg.dedupe
    assert str(cfg.proxy_url).rstrip("/") == "http://127.0.0.1:5000"


def test_config_is_frozen():
    with pytest.raises(ValidationError):
        CrawlerConfig().max_pages = 5


def test_load_config_default_missing(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    assert load_config(None) == CrawlerConfig()


def test_load_config_default_file(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "configs").mkdir()
    (tmp_path / "configs" / "default.yaml").write_text("seeds: example.com\nmax_pages: 7", encoding="utf-8")
    cfg = load_config(None)
    assert cfg.seeds == "example.com"
    assert cfg.max_pages == 7


def test_missing_config_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "nope.yaml")

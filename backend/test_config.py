"""Tests for env-driven settings and Store.from_settings."""

import json
import logging

import pytest

from config import Settings, configure_logging, get_settings
from store import Store

ENV_VARS = ("TODOS_STORAGE", "TODOS_DATA_DIR", "TODOS_COLLECTION", "TODOS_LOG_LEVEL")


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def test_defaults():
    s = get_settings()
    assert s.TODOS_STORAGE == "memory"
    assert str(s.TODOS_DATA_DIR) == "data"
    assert s.TODOS_COLLECTION == "todos"
    assert s.log_level == logging.INFO


def test_unknown_storage_falls_back_to_memory(monkeypatch):
    monkeypatch.setenv("TODOS_STORAGE", "postgres")
    assert Settings().TODOS_STORAGE == "memory"


def test_storage_name_is_normalized(monkeypatch):
    monkeypatch.setenv("TODOS_STORAGE", " FILE ")
    assert Settings().TODOS_STORAGE == "file"


def test_log_level(monkeypatch):
    monkeypatch.setenv("TODOS_LOG_LEVEL", "debug")
    assert Settings().log_level == logging.DEBUG
    monkeypatch.setenv("TODOS_LOG_LEVEL", "chatty")
    assert Settings().log_level == logging.INFO


def test_configure_logging(monkeypatch):
    calls = []
    monkeypatch.setattr(logging, "basicConfig", lambda **kw: calls.append(kw))
    monkeypatch.setenv("TODOS_LOG_LEVEL", "WARNING")
    configure_logging()
    assert calls == [{"level": logging.WARNING}]


def test_store_from_settings(monkeypatch, tmp_path):
    monkeypatch.setenv("TODOS_STORAGE", "file")
    monkeypatch.setenv("TODOS_DATA_DIR", str(tmp_path))
    monkeypatch.setenv("TODOS_COLLECTION", "work")
    ready = []
    store = Store.from_settings(callback=ready.append)
    assert store.name == "work"
    assert ready == [{"todos": []}]
    item = store.save({"title": "ship it"})[0]
    on_disk = json.loads((tmp_path / "work.json").read_text(encoding="utf-8"))
    assert on_disk == {"todos": [{"title": "ship it", "id": item["id"]}]}

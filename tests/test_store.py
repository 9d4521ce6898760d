"""Tests for the JSON document store."""

import json
import os
import re

import pytest

from core.exceptions import PersistenceError
from db.store import JsonStore, utc_timestamp

ISO_MS = re.compile(r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}\.\d{3}Z$")


def _read(path):
    with open(path, encoding="utf-8") as f:
        return json.load(f)


class TestInit:
    def test_creates_directories_and_empty_documents(self, settings):
        JsonStore(settings).init()

        assert os.path.isdir(settings.upload_dir)
        for section in settings.sections:
            assert _read(settings.stock_path(section)) == []
        assert _read(settings.log_path) == []

    def test_keeps_existing_documents(self, settings, store):
        store.save("A", [{"size": 10, "quantity": 5}])

        JsonStore(settings).init()

        assert _read(settings.stock_path("A")) == [{"size": 10, "quantity": 5}]


class TestStockDocuments:
    def test_save_overwrites_whole_document(self, store):
        store.save("A", [{"size": 10, "quantity": 5}, {"size": 11, "quantity": 1}])
        result = store.save("A", [{"size": 12, "quantity": 2}])

        assert result.ok
        assert store.load("A") == [{"size": 12, "quantity": 2}]

    def test_load_missing_document_is_empty(self, store, settings):
        os.remove(settings.stock_path("B"))
        assert store.load("B") == []

    def test_load_corrupt_document_is_empty(self, store, settings):
        with open(settings.stock_path("C"), "w", encoding="utf-8") as f:
            f.write("{not json")
        assert store.load("C") == []

    def test_load_document_with_non_item_entries_is_empty(self, store, settings):
        with open(settings.stock_path("A"), "w", encoding="utf-8") as f:
            json.dump([1, "x", {"size": 10, "quantity": 5}], f)
        assert store.load("A") == []

    def test_save_failure_is_reported_not_raised(self, store, settings):
        # A directory where the document should be makes the write fail
        os.makedirs(settings.stock_path("Z"))

        result = store.save("Z", [{"size": 1, "quantity": 1}])

        assert result.ok is False
        assert result.error


class TestTransactionLog:
    def test_append_adds_timestamp_and_keeps_prior_entries(self, store):
        store.append_log({"section": "A", "size": 10, "quantity": 5, "type": "IN"})
        store.append_log({"section": "A", "size": 10, "quantity": 2, "type": "OUT"})

        log = store.load_log()
        assert [e["type"] for e in log] == ["IN", "OUT"]
        assert log[0] == {
            "section": "A",
            "size": 10,
            "quantity": 5,
            "type": "IN",
            "timestamp": log[0]["timestamp"],
        }
        assert all(ISO_MS.match(e["timestamp"]) for e in log)

    def test_append_to_unreadable_log_fails_softly(self, store, settings):
        with open(settings.log_path, "w", encoding="utf-8") as f:
            f.write("oops")

        result = store.append_log({"section": "A", "size": 1, "quantity": 1, "type": "IN"})

        assert result.ok is False

    def test_load_log_degrades_to_empty(self, store, settings):
        os.remove(settings.log_path)
        assert store.load_log() == []

    def test_strict_load_log_raises(self, store, settings):
        os.remove(settings.log_path)
        with pytest.raises(PersistenceError):
            store.load_log(strict=True)


def test_utc_timestamp_format():
    assert ISO_MS.match(utc_timestamp())

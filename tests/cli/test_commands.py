# SPDX-License-Identifier: MIT
"""
Tests for the command line interface.
"""
import json
from unittest.mock import patch

from slc import __version__
from slc.cli import main
from slc.core.models import UserRecord
from slc.store.base import MemoryStore


class ClosableStore(MemoryStore):
    closed = False

    def close(self):
        self.closed = True

    def ensure_schema(self):
        self.schema_ready = True


def test_version(capsys):
    assert main(["version"]) == 0
    assert capsys.readouterr().out.strip() == __version__


def test_no_command_prints_help(capsys):
    assert main([]) == 0
    assert "usage: slc" in capsys.readouterr().out


def test_state_needs_postgres(tmp_path, capsys, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("DATABASE_URL", raising=False)
    assert main(["state", "u1"]) == 1
    assert "store.backend" in capsys.readouterr().err


def test_missing_config_file(tmp_path, capsys):
    assert main(["serve", "--config", str(tmp_path / "nope.yml")]) == 1
    assert "not found" in capsys.readouterr().err


class TestStoreCommands:
    """Commands that talk to the configured store."""

    def _run(self, argv, store, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("DATABASE_URL", "postgresql://localhost/slc")
        with patch("slc.store.postgres.PostgresStore.from_dsn", return_value=store):
            return main(argv)

    def test_state(self, tmp_path, monkeypatch, capsys):
        store = ClosableStore()
        store.save("u1", UserRecord("u1", "Cat", "Dog", ["purr"], ["bark"], ["b", "a"], []))
        assert self._run(["state", "u1"], store, tmp_path, monkeypatch) == 0
        out = json.loads(capsys.readouterr().out)
        assert out["class1"] == {"name": "Cat", "properties": ["purr"]}
        assert out["generalClass"] == ["a", "b"]
        assert store.closed

    def test_reset(self, tmp_path, monkeypatch):
        store = ClosableStore()
        store.save("u1", UserRecord("u1", "Cat", "Dog"))
        assert self._run(["reset", "u1"], store, tmp_path, monkeypatch) == 0
        assert store.load("u1") is None

    def test_init_db(self, tmp_path, monkeypatch):
        store = ClosableStore()
        assert self._run(["init-db"], store, tmp_path, monkeypatch) == 0
        assert store.schema_ready
        assert store.closed

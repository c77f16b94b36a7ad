"""Tests for environment-driven settings."""

import settings


class TestPositiveInt:
    def test_unset_uses_default(self, monkeypatch):
        monkeypatch.delenv("RPC_TIMEOUT", raising=False)
        assert settings._positive_int("RPC_TIMEOUT", 30) == 30

    def test_valid_value(self, monkeypatch):
        monkeypatch.setenv("RPC_TIMEOUT", " 45 ")
        assert settings._positive_int("RPC_TIMEOUT", 30) == 45

    def test_non_numeric_falls_back(self, monkeypatch):
        monkeypatch.setenv("RPC_TIMEOUT", "thirty")
        assert settings._positive_int("RPC_TIMEOUT", 30) == 30

    def test_non_positive_falls_back(self, monkeypatch):
        monkeypatch.setenv("RPC_TIMEOUT", "0")
        assert settings._positive_int("RPC_TIMEOUT", 30) == 30
        monkeypatch.setenv("RPC_TIMEOUT", "-5")
        assert settings._positive_int("RPC_TIMEOUT", 30) == 30


class TestSplit:
    def test_keeps_blank_positions(self):
        assert settings._split("a, ,c") == ["a", "", "c"]

    def test_empty(self):
        assert settings._split(None) == []
        assert settings._split("") == []

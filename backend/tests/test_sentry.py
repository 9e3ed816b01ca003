import logging

import pytest

from app.utils import sentry

RATE_VAR = "SENTRY_TRACES_SAMPLE_RATE"


@pytest.mark.parametrize(
    "raw, expected",
    [(None, 0.25), ("", 0.25), ("0.5", 0.5), ("lots", 0.25), ("-1", 0.25), ("3", 1.0)],
)
def test_parse_sample_rate(monkeypatch, raw, expected):
    if raw is None:
        monkeypatch.delenv(RATE_VAR, raising=False)
    else:
        monkeypatch.setenv(RATE_VAR, raw)
    assert sentry.parse_sample_rate(RATE_VAR, default=0.25) == expected


def test_parse_sample_rate_warns_on_garbage(monkeypatch, caplog):
    monkeypatch.setenv(RATE_VAR, "lots")
    with caplog.at_level(logging.WARNING):
        sentry.parse_sample_rate(RATE_VAR)
    assert "not a valid float" in caplog.text


def test_init_sentry_skipped_without_dsn(monkeypatch):
    monkeypatch.delenv("SENTRY_DSN", raising=False)
    assert sentry.init_sentry() is False


def test_init_sentry_passes_options(monkeypatch):
    captured = {}
    monkeypatch.setattr(sentry.sentry_sdk, "init", lambda **kw: captured.update(kw))
    monkeypatch.setenv("SENTRY_DSN", "https://key@example.invalid/1")
    monkeypatch.setenv("SENTRY_ENVIRONMENT", "staging")
    monkeypatch.delenv("SENTRY_RELEASE", raising=False)
    monkeypatch.setenv(RATE_VAR, "0.1")

    assert sentry.init_sentry() is True
    assert captured["environment"] == "staging"
    assert "release" not in captured
    assert captured["traces_sample_rate"] == 0.1

"""Configuration loading and structured logging tests."""

from pathlib import Path
import io
import json
import logging
import sys

import pytest

sys.path.append(str(Path(__file__).resolve().parents[1]))

from decor_app.config import EngineConfig
from decor_app.logging_config import (
    JsonFormatter,
    configure_logging,
    correlation_context,
    ensure_correlation_id,
    log_event,
    redact_for_log,
)
from tools.observability import instrument_operation

_CONFIG_KEYS = (
    "APP_ENV",
    "APP_CONFIG_PATH",
    "ENGINE_CONFIG_DIR",
    "LOG_LEVEL",
    "DEFAULT_ROOM_TYPE",
    "MAX_CANDIDATES",
    "MAX_COLORS_PER_ITEM",
    "MAX_WORKERS",
)


@pytest.fixture()
def clean_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    for key in _CONFIG_KEYS:
        monkeypatch.delenv(key, raising=False)
    return monkeypatch


def test_defaults_without_environment(clean_env: pytest.MonkeyPatch) -> None:
    config = EngineConfig.from_env()
    assert config.environment is None
    assert config.log_level == "INFO"
    assert config.default_room_type == "living"
    assert config.max_candidates == 200
    assert config.max_colors_per_item == 16
    assert config.max_workers == 1


def test_yaml_file_with_env_override(clean_env: pytest.MonkeyPatch, tmp_path: Path) -> None:
    config_dir = tmp_path / "environments"
    config_dir.mkdir()
    (config_dir / "staging.yaml").write_text(
        "# staging engine settings\n"
        "log_level: debug\n"
        "default_room_type: 'bedroom'\n"
        "max_candidates: 50\n"
        "max_workers: 4\n"
    )
    clean_env.setenv("APP_ENV", "staging")
    clean_env.setenv("ENGINE_CONFIG_DIR", str(config_dir))
    clean_env.setenv("MAX_CANDIDATES", "25")

    config = EngineConfig.from_env()

    assert config.environment == "staging"
    assert config.log_level == "DEBUG"
    assert config.default_room_type == "bedroom"
    assert config.max_candidates == 25
    assert config.max_workers == 4


def test_invalid_limits_are_rejected(clean_env: pytest.MonkeyPatch) -> None:
    clean_env.setenv("MAX_CANDIDATES", "0")
    with pytest.raises(ValueError):
        EngineConfig.from_env()
    clean_env.setenv("MAX_CANDIDATES", "lots")
    with pytest.raises(ValueError):
        EngineConfig.from_env()


def test_redaction_scrubs_listing_text() -> None:
    payload = {
        "url": "https://shop.example.com/sofa",
        "note": "see https://shop.example.com/rug for sizes",
        "link": "https://shop.example.com/lamp",
        "nested": [{"title": "Velvet Sofa", "price": 899}],
    }
    scrubbed = redact_for_log(payload)
    assert scrubbed["url"] == "[redacted]"
    assert scrubbed["note"] == "see [redacted-url] for sizes"
    assert scrubbed["link"] == "[redacted-url]"
    assert scrubbed["nested"] == [{"title": "[redacted]", "price": 899}]


def test_correlation_context_restores_previous_id() -> None:
    outer = ensure_correlation_id("outer-id")
    with correlation_context("inner-id") as inner:
        assert inner == "inner-id"
    assert ensure_correlation_id() == outer


def test_json_formatter_emits_event_fields() -> None:
    record = logging.LogRecord("decor", logging.INFO, __file__, 1, "ranked", None, None)
    record.event = "ranked"
    record.correlation_id = "abc123"
    record.count = 3
    payload = json.loads(JsonFormatter().format(record))
    assert payload["event"] == "ranked"
    assert payload["correlation_id"] == "abc123"
    assert payload["count"] == 3
    assert payload["level"] == "INFO"


def test_instrument_operation_logs_completion_and_failure(caplog: pytest.LogCaptureFixture) -> None:
    @instrument_operation("demo_ok")
    def succeed() -> list:
        return [1, 2, 3]

    @instrument_operation("demo_fail")
    def fail() -> None:
        raise ValueError("boom")

    caplog.set_level(logging.INFO)
    assert succeed() == [1, 2, 3]
    with pytest.raises(ValueError):
        fail()

    completed = [record for record in caplog.records if getattr(record, "event", None) == "operation_completed"]
    failed = [record for record in caplog.records if getattr(record, "event", None) == "operation_failed"]
    assert completed and completed[0].operation == "demo_ok"
    assert completed[0].result_size == 3
    assert failed and failed[0].operation == "demo_fail"


def test_json_formatter_includes_exception_text() -> None:
    try:
        raise ValueError("bad palette")
    except ValueError:
        record = logging.LogRecord("decor", logging.ERROR, __file__, 1, "failed", None, sys.exc_info())
    payload = json.loads(JsonFormatter().format(record))
    assert payload["service"] == "decor-style-engine"
    assert "bad palette" in payload["exception"]


def test_configure_logging_writes_json_lines(clean_env: pytest.MonkeyPatch) -> None:
    stream = io.StringIO()
    configure_logging("INFO", stream=stream)
    try:
        log_event(logging.getLogger("decor.test"), logging.INFO, "palette_built", room_type="bedroom")
    finally:
        configure_logging()
    line = json.loads(stream.getvalue().strip().splitlines()[-1])
    assert line["event"] == "palette_built"
    assert line["room_type"] == "bedroom"
    assert line["correlation_id"]

"""Тесты конфигурации и логирования."""

import json
import logging

import pytest

from gosset.statistical_analysis import kendall_tau
from gosset.utils import (
    DEFAULT_CONFIG,
    GossetLogger,
    MetricsFilter,
    deep_update,
    get_logger,
    load_config,
    log_metric,
    setup_logging,
)


class TestConfig:

    def test_defaults(self):
        config = load_config()
        assert config["kendall"]["null_rm"] is True
        assert config["logging"]["log_dir"] is None

    def test_defaults_not_mutated(self, write_config):
        load_config(write_config("kendall:\n  null_rm: false\n"))
        assert DEFAULT_CONFIG["kendall"]["null_rm"] is True

    def test_partial_override(self, write_config):
        path = write_config("logging:\n  console_level: DEBUG\n  rotation:\n    backup_count: 2\n")
        config = load_config(path)

        assert config["logging"]["console_level"] == "DEBUG"
        assert config["logging"]["rotation"]["backup_count"] == 2
        assert config["logging"]["rotation"]["when"] == "D"
        assert config["kendall"]["null_rm"] is True

    def test_empty_file(self, write_config):
        assert load_config(write_config("")) == DEFAULT_CONFIG

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "missing.yaml")

    def test_not_a_mapping(self, write_config):
        with pytest.raises(ValueError):
            load_config(write_config("- a\n- b\n"))

    def test_deep_update(self):
        original = {"a": {"b": 1, "c": 2}, "d": 3}
        assert deep_update(original, {"a": {"b": 10}, "e": 4}) == {
            "a": {"b": 10, "c": 2}, "d": 3, "e": 4
        }


class TestLogger:

    def test_get_logger_namespacing(self):
        assert get_logger("kendall").name == "gosset.kendall"
        assert get_logger("gosset.rankings").name == "gosset.rankings"
        assert get_logger("gosset").name == "gosset"

    def test_metrics_filter(self):
        metric = logging.LogRecord("gosset", logging.INFO, "", 0, "METRIC {}", None, None)
        other = logging.LogRecord("gosset", logging.INFO, "", 0, "обычное сообщение", None, None)

        assert MetricsFilter().filter(metric)
        assert not MetricsFilter().filter(other)

    def test_console_only_by_default(self, reset_gosset_logging):
        GossetLogger()
        handlers = logging.getLogger("gosset").handlers
        assert len(handlers) == 1
        assert isinstance(handlers[0], logging.StreamHandler)

    def test_file_handlers(self, tmp_path, write_config, reset_gosset_logging):
        log_dir = tmp_path / "logs"
        path = write_config(f"logging:\n  log_dir: {log_dir.as_posix()}\n")
        GossetLogger(config_path=str(path))

        kendall_tau([1, 2, 3], [1, 3, 2])
        for handler in logging.getLogger("gosset").handlers:
            handler.flush()

        assert (log_dir / "gosset.log").exists()
        assert (log_dir / "errors.log").exists()

        lines = (log_dir / "metrics.log").read_text(encoding="utf-8").splitlines()
        assert lines
        assert all(line.startswith("METRIC ") for line in lines)

        metrics = [json.loads(line[len("METRIC "):]) for line in lines]
        assert {m["metric"] for m in metrics} == {"kendall_tau", "N_effective"}

    def test_debug_reaches_main_file(self, tmp_path, write_config, reset_gosset_logging):
        log_dir = tmp_path / "logs"
        path = write_config(f"logging:\n  log_dir: {log_dir.as_posix()}\n")
        GossetLogger(config_path=str(path))

        assert logging.getLogger("gosset").level == logging.DEBUG
        get_logger("test").debug("отладочная запись")
        for handler in logging.getLogger("gosset").handlers:
            handler.flush()

        text = (log_dir / "gosset.log").read_text(encoding="utf-8")
        assert "отладочная запись" in text

    def test_reconfigure_closes_file_handlers(self, tmp_path, write_config,
                                              reset_gosset_logging):
        log_dir = tmp_path / "logs"
        path = write_config(f"logging:\n  log_dir: {log_dir.as_posix()}\n")
        GossetLogger(config_path=str(path))
        old_handlers = [
            h for h in logging.getLogger("gosset").handlers
            if isinstance(h, logging.FileHandler)
        ]
        assert len(old_handlers) == 3

        GossetLogger(config_path=str(path))

        current = logging.getLogger("gosset").handlers
        for handler in old_handlers:
            assert handler not in current
            assert handler.stream is None
        assert len(current) == 4

    def test_log_metric_format(self, caplog):
        logger = get_logger("test")
        with caplog.at_level(logging.INFO, logger="gosset"):
            log_metric(logger, "kendall_tau", 0.5, {"n_rows": 3})

        message = caplog.records[-1].getMessage()
        assert message.startswith("METRIC ")
        data = json.loads(message[len("METRIC "):])
        assert data["value"] == 0.5
        assert data["context"] == {"n_rows": 3}

    def test_setup_logging_is_singleton(self, reset_gosset_logging):
        first = setup_logging()
        assert setup_logging() is first
        assert setup_logging(force=True) is not first

"""Environment driven configuration."""

from intcode.config import IntcodeConfig, get_config, reset_config


def test_defaults():
    config = IntcodeConfig.from_env({})
    assert config.max_steps is None
    assert config.trace is False
    assert config.log_level == "WARNING"


def test_reads_environment():
    config = IntcodeConfig.from_env({
        "INTCODE_MAX_STEPS": "5000",
        "INTCODE_TRACE": "yes",
        "INTCODE_LOG_LEVEL": "debug",
    })
    assert config.max_steps == 5000
    assert config.trace is True
    assert config.log_level == "DEBUG"


def test_numeric_trace_flag():
    assert IntcodeConfig.from_env({"INTCODE_TRACE": "1"}).trace is True
    assert IntcodeConfig.from_env({"INTCODE_TRACE": "off"}).trace is False


def test_invalid_step_budget_ignored():
    assert IntcodeConfig.from_env({"INTCODE_MAX_STEPS": "lots"}).max_steps is None
    assert IntcodeConfig.from_env({"INTCODE_MAX_STEPS": "0"}).max_steps is None


def test_reset_config_reads_process_environment(monkeypatch):
    monkeypatch.setenv("INTCODE_MAX_STEPS", "12")
    assert reset_config().max_steps == 12
    assert get_config().max_steps == 12

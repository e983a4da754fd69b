import logging

from gdpglobe.config import BOUNDARIES_TIMEOUT_S, BOUNDARIES_URL, GEMINI_MODEL, Settings, load_settings, parse_timeout
from gdpglobe.logging_config import parse_level, setup_logging


def test_defaults():
    assert load_settings({}) == Settings()
    settings = load_settings({})
    assert settings.api_key is None
    assert settings.model == GEMINI_MODEL
    assert settings.boundaries_source == BOUNDARIES_URL
    assert settings.boundaries_timeout == BOUNDARIES_TIMEOUT_S


def test_values_from_environment(tmp_path):
    settings = load_settings({
        "GEMINI_API_KEY": "abc",
        "GDPGLOBE_MODEL": "gemini-test",
        "GDPGLOBE_BOUNDARIES": str(tmp_path / "world.geojson"),
        "GDPGLOBE_BOUNDARIES_TIMEOUT": "2.5",
        "GDPGLOBE_LOG_LEVEL": "debug",
        "GDPGLOBE_LOG_FILE": str(tmp_path / "app.log"),
    })
    assert settings.api_key == "abc"
    assert settings.model == "gemini-test"
    assert settings.boundaries_source.endswith("world.geojson")
    assert settings.boundaries_timeout == 2.5
    assert settings.log_level == logging.DEBUG
    assert settings.log_file.endswith("app.log")


def test_api_key_alias():
    assert load_settings({"API_KEY": "xyz"}).api_key == "xyz"
    assert load_settings({"GEMINI_API_KEY": "", "API_KEY": "xyz"}).api_key == "xyz"


def test_parse_level():
    assert parse_level("WARNING") == logging.WARNING
    assert parse_level(" info ") == logging.INFO
    assert parse_level("loud") == logging.INFO
    assert parse_level(None, default=logging.ERROR) == logging.ERROR


def test_setup_logging_replaces_handlers(tmp_path):
    log_file = tmp_path / "app.log"
    setup_logging(level=logging.DEBUG, log_file=str(log_file))
    setup_logging(level=logging.DEBUG, log_file=str(log_file))

    logger = logging.getLogger("gdpglobe")
    assert logger.level == logging.DEBUG
    assert len(logger.handlers) == 2
    for handler in logger.handlers:
        handler.close()
    logger.handlers.clear()
    assert "Logging initialized." in log_file.read_text(encoding="utf-8")


def test_setup_logging_quiets_http_clients():
    setup_logging(level=logging.INFO, quiet=("gdpglobe_test_client",))
    logger = logging.getLogger("gdpglobe")
    try:
        assert logging.getLogger("gdpglobe_test_client").level == logging.WARNING
        assert len(logger.handlers) == 1
    finally:
        for handler in logger.handlers:
            handler.close()
        logger.handlers.clear()


def test_malformed_timeout_falls_back_to_default():
    assert load_settings({"GDPGLOBE_BOUNDARIES_TIMEOUT": "soon"}).boundaries_timeout == BOUNDARIES_TIMEOUT_S
    assert parse_timeout("-3") == BOUNDARIES_TIMEOUT_S
    assert parse_timeout("nan") == BOUNDARIES_TIMEOUT_S
    assert parse_timeout("12") == 12.0

import logging

import pytest

import hep.config


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch):
    """Keep HEP_* variables and .env files on this machine out of tests."""
    for name in (
        "HEP_VERBOSE",
        "HEP_LOG_FILE",
        "HEP_TIMEOUT",
        "HEP_VERIFY_SSL",
        "HEP_FOLLOW_REDIRECTS",
        "HEP_USER_AGENT",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr(hep.config, "ENV_LOCATIONS", [])


@pytest.fixture(autouse=True)
def reset_hep_logger():
    """Drop handlers the CLI attaches so they don't outlive the test's streams."""
    yield
    logger = logging.getLogger("hep")
    for handler in list(logger.handlers):
        handler.close()
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True

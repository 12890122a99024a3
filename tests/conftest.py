# ABOUTME: Shared pytest fixtures for the picture_harvest test suite
# ABOUTME: Isolates the cached configuration singleton and logging mode between tests

import pytest

import picture_harvest.config
import picture_harvest.utils.logging.config


@pytest.fixture(autouse=True)
def fresh_config(monkeypatch):
    """Drop any cached Config so each test reads its own environment."""
    monkeypatch.setattr(picture_harvest.config, "_config_instance", None)
    monkeypatch.setattr(picture_harvest.utils.logging.config, "_active_mode", None)
    for name in (
        "PICTURE_HARVEST_TABLE_NAME",
        "PICTURE_HARVEST_OUTPUT_PATH",
        "PICTURE_HARVEST_MAX_WORKERS",
        "PICTURE_HARVEST_LOG_MODE",
    ):
        monkeypatch.delenv(name, raising=False)

"""Shared fixtures for the passkey crawler tests."""

import pytest
from passkey_crawler.config.defaults import load_config


@pytest.fixture
def fast_config():
    """Config with every wait set to zero so tests never sleep."""
    return load_config(overrides={
        "browser_config": {
            "timeout_networkidle": 0,
            "sleep_after_navigation": 0
        },
        "detection_config": {
            "sleep_before_collect": 0,
            "sleep_after_fill": 0
        }
    })

import json
import logging
from copy import deepcopy
from typing import Optional


logger = logging.getLogger(__name__)


# all durations are in seconds
DEFAULT_CONFIG = {
    "browser_config": {
        "name": "CHROMIUM",
        "headless": True,
        "width": 1920,
        "height": 1080,
        "locale": "en-US",
        "user_agent": "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/124.0.0.0 Safari/537.36",
        "timeout_default": 10,
        "timeout_navigation": 30,
        "wait_for_networkidle": True,
        "timeout_networkidle": 8,
        "sleep_after_navigation": 5
    },
    "detection_config": {
        "sleep_before_collect": 2,
        "sleep_after_fill": 1,
        "test_email": "test@example.com"
    },
    "resolver_config": {
        "multiple_variants": False,
        "max_url_variants": 2
    }
}


def merge_config(base: dict, overrides: dict) -> dict:
    """ Returns a copy of base with overrides merged in recursively """
    merged = deepcopy(base)
    for k, v in overrides.items():
        if isinstance(v, dict) and isinstance(merged.get(k), dict):
            merged[k] = merge_config(merged[k], v)
        else:
            merged[k] = deepcopy(v)
    return merged


def load_config(path: Optional[str] = None, overrides: Optional[dict] = None) -> dict:
    config = deepcopy(DEFAULT_CONFIG)
    if path:
        logger.info(f"Loading config: {path}")
        with open(path, "r") as f:
            config = merge_config(config, json.load(f))
    if overrides:
        config = merge_config(config, overrides)
    return config

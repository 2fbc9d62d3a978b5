#!/usr/bin/env python3
"""
Configuration access for the match engine web application.

The web app shares config.yaml and its env overrides with the job runner;
WEB_HOST and WEB_PORT additionally override the listen address.
"""

import os
from pathlib import Path
from functools import lru_cache

from core.config_loader import AppConfig, load_config


@lru_cache()
def get_config() -> AppConfig:
    """
    Get application configuration with caching.

    Returns:
        AppConfig: The application configuration.
    """
    config = load_config(str(get_project_root() / 'config.yaml'))

    if 'WEB_HOST' in os.environ:
        config.web.host = os.environ['WEB_HOST']
    if 'WEB_PORT' in os.environ:
        config.web.port = int(os.environ['WEB_PORT'])

    return config


def get_project_root() -> Path:
    """Get the project root directory."""
    return Path(__file__).parent.parent.parent

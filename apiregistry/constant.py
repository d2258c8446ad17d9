# -*- coding: utf-8 -*-
import os
from pathlib import Path

WORKING_DIR = (
    Path(os.environ.get("APIREG_WORKING_DIR", "~/.apiregistry"))
    .expanduser()
    .resolve()
)

STORE_FILE = os.environ.get("APIREG_STORE_FILE", "apis.json")

CONFIG_FILE = os.environ.get("APIREG_CONFIG_FILE", "config.json")

# Env key for app log level (used by CLI and app factory).
LOG_LEVEL_ENV = "APIREG_LOG_LEVEL"

# Every API entry is stored under this key prefix.
API_KEY_PREFIX = "api_integration:"

DEFAULT_DESCRIPTION = "Custom API integration"

UNKNOWN_ERROR_MESSAGE = "Unknown error occurred"
CANCELLED_TEST_MESSAGE = "Test cancelled"

DEFAULT_REQUEST_TIMEOUT = float(
    os.environ.get("APIREG_REQUEST_TIMEOUT", "30"),
)

# -*- coding: utf-8 -*-
from .config import Config, ProviderEndpointConfig
from .utils import get_config_path, load_config, save_config

__all__ = [
    "Config",
    "ProviderEndpointConfig",
    "get_config_path",
    "load_config",
    "save_config",
]

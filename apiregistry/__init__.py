# -*- coding: utf-8 -*-
"""API integration registry with change notification and model testing."""

__version__ = "0.1.0"

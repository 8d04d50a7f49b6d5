#!/usr/bin/env python3
"""
common
======

Submodule implementing logging, error handling and source stream handling.
"""

from __future__ import annotations

__author__ = "jslorrma"
__maintainer__ = "jslorrma"
__email__ = "jslorrma@gmail.com"

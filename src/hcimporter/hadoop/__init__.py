#!/usr/bin/env python3
"""
hadoop
======

Submodule implementing Hadoop `*-site.xml` parsing and client configuration
archive scanning.
"""

from __future__ import annotations

__author__ = "jslorrma"
__maintainer__ = "jslorrma"
__email__ = "jslorrma@gmail.com"

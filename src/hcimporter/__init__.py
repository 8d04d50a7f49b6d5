#!/usr/bin/env python3
"""
hcimporter
==========

`hcimporter` is an application and library that snapshots the client
configuration of an Apache Hadoop cluster into a portable JSON document.

It reads a client configuration archive (the ZIP bundle a cluster manager
hands out to clients, containing `core-site.xml`, `hdfs-site.xml`, ...) from
standard input or from a URL, collects the properties of every `*-site.xml`
file and prints them as:

```json
{"HADOOP_CONFIG_KEY": {"fs.defaultFS": "hdfs://nameservice1", "...": "..."}}
```

Features:
---------
- **Pipe or URL**: The archive is read from `stdin` or fetched from a
  `http(s)://` or `file://` URL.
- **Flat merge**: Properties of all `*-site.xml` entries are merged into one
  mapping, later entries overriding earlier ones.
- **Library use**: The pipeline is available as
  `hcimporter.import_client_params`.
"""

from __future__ import annotations

__author__ = "jslorrma"
__maintainer__ = "jslorrma"
__email__ = "jslorrma@gmail.com"


# version
try:
    from ._version import __version__, __version_tuple__, version
except ImportError:
    __version__ = version = "0.0.0"
    __version_tuple__ = (0, 0, 0)

LIBRARY_NAME = __name__

# set up logging
from .common.logging import get_logger

logger = get_logger(__name__)

# public api
from .importer import import_client_params, return_json  # noqa: E402

__all__ = ["get_logger", "import_client_params", "logger", "return_json"]

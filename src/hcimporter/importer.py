#!/usr/bin/env python3
"""
importer.py
===========

The import pipeline: resolve the source stream, scan the client configuration
archive and render the merged properties as JSON.

Example
-------

```python
from hcimporter import import_client_params

# read the archive from a local file
document = import_client_params("file:///tmp/hdfs-clientconfig.zip")

# or from a cluster manager
document = import_client_params(
    "https://cm.example.com:7183/api/v19/clusters/c1/services/hdfs/clientConfig",
    auth=("admin", "admin"),
)
```
"""

from __future__ import annotations

__author__ = "jslorrma"
__maintainer__ = "jslorrma"
__email__ = "jslorrma@gmail.com"

# imports
from typing import TYPE_CHECKING, Any

import msgspec

# module imports
from .common.request import open_source
from .hadoop.archive import scan_config_zip_archive
from .hadoop.config import HADOOP_CONFIG_KEY

if TYPE_CHECKING:
    from collections.abc import Mapping


def return_json(props: Mapping[str, str]) -> str:
    """
    Render the property mapping as a JSON document.

    Parameters
    ----------
    props : Mapping[str, str]
        The property mapping.

    Returns
    -------
    str
        A compact JSON object with the single field `HADOOP_CONFIG_KEY`,
        holding the properties as a JSON object of strings.

    Example
    -------
    ```pycon
    >>> return_json({"prop1": "val1"})
    '{"HADOOP_CONFIG_KEY":{"prop1":"val1"}}'
    ```
    """
    document = {HADOOP_CONFIG_KEY: {str(k): str(v) for k, v in props.items()}}
    return msgspec.json.encode(document).decode("utf-8")


def import_client_params(config_url: str | None = None, **kwargs: Any) -> str:
    """
    Import the Hadoop client configuration properties as JSON document.

    Parameters
    ----------
    config_url : str, optional
        URL of the client configuration archive. If not given, the archive is
        read from `stdin`.
    **kwargs
        Additional keyword arguments for the HTTP request (`auth`, `verify`,
        `proxies`, `timeout`).

    Returns
    -------
    str
        The JSON document.

    Raises
    ------
    ImporterError
        If the source can't be read, the archive is corrupt or a `*-site.xml`
        file is malformed.
    """
    with open_source(config_url, **kwargs) as stream:
        props = scan_config_zip_archive(stream)

    return return_json(props)

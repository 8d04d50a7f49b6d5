#!/usr/bin/env python3
"""
hadoop/config.py
================

This module implements the parsing of Hadoop `*-site.xml` configuration files.

A Hadoop configuration file looks like:

```xml
<configuration>
  <property>
    <name>fs.defaultFS</name>
    <value>hdfs://nameservice1</value>
  </property>
</configuration>
```

Example
-------

```python
from hcimporter.hadoop.config import parse_site_xml

with open("/etc/hadoop/conf/core-site.xml", "rb") as fil:
    props = parse_site_xml(fil.read(), source="core-site.xml")

props["fs.defaultFS"]
```
"""

from __future__ import annotations

__author__ = "jslorrma"
__maintainer__ = "jslorrma"
__email__ = "jslorrma@gmail.com"

# imports
import xml.etree.ElementTree as ET

# module imports
from ..common.exceptions import ConfigParseError

# key the property mapping is nested under in the JSON document
HADOOP_CONFIG_KEY = "HADOOP_CONFIG_KEY"

# suffix of Hadoop configuration files
SITE_XML_SUFFIX = "-site.xml"

# root element of Hadoop configuration files
CONF_ROOT_TAG = "configuration"


def parse_site_xml(content: bytes | str, source: str | None = None) -> dict[str, str]:
    """
    Parse a Hadoop configuration file and return a dictionary of configuration
    properties.

    The properties are the `property` children of the `configuration` root
    element. A missing or empty `name` or `value` child yields an empty
    string, so one malformed property doesn't abort the whole file.

    Parameters
    ----------
    content : bytes | str
        The content of the configuration file.
    source : str, optional
        Name of the configuration file, used in error messages.

    Returns
    -------
    dict[str, str]
        A dictionary where the keys are the names of the properties and the
        values are the corresponding property values.

    Raises
    ------
    ConfigParseError
        If `content` is not well-formed XML.
    """
    try:
        root = ET.fromstring(content)
    except ET.ParseError as exc:
        raise ConfigParseError(f"Cannot parse '{source or '<unknown>'}': {exc}") from exc

    if root.tag != CONF_ROOT_TAG:
        return {}

    return {
        (prop.findtext("name") or ""): (prop.findtext("value") or "")
        for prop in root.findall("./property")
    }

#!/usr/bin/env python3
"""
hadoop/archive.py
=================

This module scans a Hadoop client configuration archive, the ZIP bundle a
cluster manager hands out to clients. The properties of all `*-site.xml`
entries are merged into one flat mapping. Entries are processed in archive
order and the last entry defining a property wins.

Example
-------

```python
from hcimporter.hadoop.archive import scan_config_zip_archive

with open("hdfs-clientconfig.zip", "rb") as fil:
    props = scan_config_zip_archive(fil)
```
"""

from __future__ import annotations

__author__ = "jslorrma"
__maintainer__ = "jslorrma"
__email__ = "jslorrma@gmail.com"

# imports
import io
import zipfile
import zlib
from typing import TYPE_CHECKING

# module imports
from .. import logger
from ..common.exceptions import ArchiveFormatError, SourceReadError
from .config import SITE_XML_SUFFIX, parse_site_xml

if TYPE_CHECKING:
    from typing import BinaryIO


def is_site_xml(name: str) -> bool:
    """Check if an archive entry is a Hadoop `*-site.xml` configuration file."""
    return name.endswith(SITE_XML_SUFFIX)


def _seekable(source: BinaryIO) -> BinaryIO:
    # the ZIP central directory is at the end of the archive, so pipes and
    # other non-seekable streams are buffered into memory first
    try:
        if source.seekable():
            return source
    except (AttributeError, ValueError):
        pass

    try:
        return io.BytesIO(source.read())
    except OSError as exc:
        raise SourceReadError(f"Reading the configuration archive failed: {exc}") from exc


def scan_config_zip_archive(source: BinaryIO) -> dict[str, str]:
    """
    Scan a client configuration archive and merge the properties of all
    `*-site.xml` entries.

    Parameters
    ----------
    source : BinaryIO
        A readable binary stream framed as a ZIP archive. The stream doesn't
        need to be seekable.

    Returns
    -------
    dict[str, str]
        The merged property mapping, empty if the archive contains no
        `*-site.xml` entries.

    Raises
    ------
    ArchiveFormatError
        If the stream is not a valid ZIP archive.
    SourceReadError
        If reading the stream fails.
    ConfigParseError
        If a `*-site.xml` entry is not well-formed XML.
    """
    props: dict[str, str] = {}
    stream = _seekable(source)

    try:
        with zipfile.ZipFile(stream) as archive:
            for entry in archive.infolist():
                if entry.is_dir() or not is_site_xml(entry.filename):
                    logger.debug(f"Skipping archive entry '{entry.filename}'")
                    continue

                logger.debug(f"Reading properties from archive entry '{entry.filename}'")
                _props = parse_site_xml(archive.read(entry), source=entry.filename)
                logger.debug(f"Got {len(_props)} properties from '{entry.filename}'")
                props.update(_props)
    except zipfile.BadZipFile as exc:
        raise ArchiveFormatError(f"Invalid configuration archive: {exc}") from exc
    except (zlib.error, EOFError) as exc:
        raise ArchiveFormatError(f"Corrupt entry in configuration archive: {exc}") from exc
    # encrypted entries raise RuntimeError, unknown compression methods NotImplementedError
    except (zipfile.LargeZipFile, RuntimeError, NotImplementedError) as exc:
        raise ArchiveFormatError(f"Unsupported configuration archive: {exc}") from exc
    except OSError as exc:
        raise SourceReadError(f"Reading the configuration archive failed: {exc}") from exc

    logger.info(f"Imported {len(props)} properties from the configuration archive")
    return props

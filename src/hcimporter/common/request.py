#!/usr/bin/env python3
"""
common/request.py
=================

This module resolves the source of the client configuration archive. The
archive is either piped into the process via `stdin` or fetched from a URL.

Supported URL schemes are `http`, `https` and `file`. HTTP downloads are done
with a single blocking `GET` request, without retries.

To deactivate insecure request warnings (e.g. when using `verify=False`), set
the environment variable `IGNORE_INSECURE_REQUEST_WARNINGS` to 'True'.

Example
-------

```python
from hcimporter.common.request import open_source

with open_source("https://cm.example.com:7183/api/v19/clusters/c1/services/hdfs/clientConfig",
                 auth=("admin", "admin")) as stream:
    head = stream.read(4)
```
"""

from __future__ import annotations

__author__ = "jslorrma"
__maintainer__ = "jslorrma"
__email__ = "jslorrma@gmail.com"


# imports
import io
import os
import sys
import warnings
from contextlib import contextmanager
from typing import TYPE_CHECKING, Any
from urllib.parse import unquote, urlparse
from urllib.request import url2pathname

from requests import Response, Session, exceptions
from urllib3 import disable_warnings
from urllib3.exceptions import InsecureRequestWarning

from .. import logger
from .exceptions import InvalidUrlError, SourceReadError, handle_request_exception

if TYPE_CHECKING:
    from collections.abc import Iterator
    from typing import BinaryIO

SUPPORTED_SCHEMES = ("http", "https", "file")

# show the insecure request warning only once
warnings.filterwarnings("once", category=InsecureRequestWarning)


def validate_url(url: str) -> str:
    """
    Validate a configuration URL.

    A URL is valid if it uses one of the supported schemes and has a network
    location (`http`, `https`) or a path (`file`).

    Parameters
    ----------
    url : str
        The URL to validate.

    Returns
    -------
    str
        The validated URL.

    Raises
    ------
    InvalidUrlError
        If the URL is not valid.
    """
    parsed = urlparse(url)
    if parsed.scheme not in SUPPORTED_SCHEMES:
        raise InvalidUrlError(
            f"Invalid url '{url}': scheme must be one of {', '.join(SUPPORTED_SCHEMES)}"
        )
    if parsed.scheme == "file" and not parsed.path:
        raise InvalidUrlError(f"Invalid url '{url}': missing file path")
    if parsed.scheme != "file" and not parsed.netloc:
        raise InvalidUrlError(f"Invalid url '{url}': missing host")
    return url


def fetch(session: Session, url: str, **kwargs) -> Response:
    """
    Download the resource behind `url` with a single `GET` request.

    Parameters
    ----------
    session : requests.Session
        The requests session to use for the request.
    url : str
        The URL of the resource.
    **kwargs
        Additional keyword arguments (`auth`, `verify`, `proxies`, `timeout`,
        ...) to pass to the `Session.get` method.

    Returns
    -------
    requests.Response
        The response with its body already read.

    Raises
    ------
    SourceHTTPError
        If the request returns an HTTP error status code.
    SourceProxyError
        If there is an issue with the specified proxies.
    SourceSSLError
        If there is an issue with the SSL certificates used for the request.
    SourceConnectionError
        If there is an issue establishing a connection for the request.
    """
    if os.getenv("IGNORE_INSECURE_REQUEST_WARNINGS", "False").lower() == "true":
        disable_warnings(InsecureRequestWarning)

    response = None
    try:
        logger.debug(f"Sending request to '{url}'")
        response = session.get(url, **kwargs)
        logger.debug(f"Got response: {response.status_code=}, {response.reason=}")
        response.raise_for_status()
        # read the body inside the try block, so broken transfers are handled too
        _ = response.content
        return response
    except exceptions.RequestException as exc:
        handle_request_exception(exc, response, kwargs.get("proxies"))


def _open_file_url(url: str) -> BinaryIO:
    path = url2pathname(unquote(urlparse(url).path))
    try:
        return open(path, "rb")  # noqa: SIM115
    except OSError as exc:
        raise SourceReadError(f"Cannot open '{path}': {exc.strerror or exc}") from exc


@contextmanager
def open_source(config_url: str | None = None, **kwargs: Any) -> Iterator[BinaryIO]:
    """
    Open the byte stream of the client configuration archive.

    Without `config_url` the process's binary standard input is used. It is
    not closed when the context exits. Any stream opened for a URL is closed
    on every exit path.

    Parameters
    ----------
    config_url : str, optional
        URL of the client configuration archive, by default `None`.
    **kwargs
        Additional keyword arguments passed to the HTTP request, see `fetch`.

    Yields
    ------
    BinaryIO
        A readable binary stream.

    Raises
    ------
    InvalidUrlError
        If `config_url` is not a valid URL.
    SourceError
        If the source cannot be opened.
    """
    if config_url is None:
        logger.debug("Reading client configuration archive from stdin")
        yield sys.stdin.buffer
        return

    validate_url(config_url)
    logger.info(f"Reading client configuration archive from '{config_url}'")

    if urlparse(config_url).scheme == "file":
        with _open_file_url(config_url) as stream:
            yield stream
        return

    with Session() as session, fetch(session, config_url, **kwargs) as response:
        with io.BytesIO(response.content) as stream:
            yield stream

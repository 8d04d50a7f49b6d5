#!/usr/bin/env python3
"""
common/exceptions.py
====================

This module implements the importer exceptions and request error handling.
"""

from __future__ import annotations

__author__ = "jslorrma"
__maintainer__ = "jslorrma"
__email__ = "jslorrma@gmail.com"


# imports
import os
import sys

from requests import Response
from requests import exceptions as request_exceptions


class ImporterError(Exception):
    """Basic hcimporter exception"""


class InvalidUrlError(ImporterError, ValueError):
    """The given configuration URL is not a valid URL"""


class SourceError(ImporterError, OSError):
    """The configuration archive source could not be opened or read"""


class SourceReadError(SourceError):
    """Reading the configuration archive source failed"""


class SourceHTTPError(SourceError):
    """HTTP exceptions from fetching the configuration archive"""


class SourceSSLError(SourceError):
    """SSL exceptions from fetching the configuration archive"""


class SourceProxyError(SourceError):
    """Proxy exceptions from fetching the configuration archive"""


class SourceConnectionError(SourceError):
    """Connection exceptions from fetching the configuration archive"""


class ArchiveFormatError(ImporterError):
    """The configuration archive is not a valid ZIP archive"""


class ConfigParseError(ImporterError):
    """A `*-site.xml` file of the configuration archive is not well-formed XML"""


_401_ERROR_HINT = (
    "{exception_msg}\n\n"
    "401 Unauthorized: The request lacks valid authentication. "
    "Cluster managers usually require credentials to download the client "
    "configuration, pass them with `--user` and `--password`."
)

_403_ERROR_HINT = (
    "{exception_msg}\n\n"
    "403 Forbidden: The server understands the request but won't authorize it. "
    "Check that the user is allowed to download the client configuration."
)

_404_ERROR_HINT = (
    "{exception_msg}\n\n"
    "404 Not Found: The server can't find the requested resource. "
    "Check the host, port and path of the configuration URL."
)

_HTTP_ERROR_HINT = (
    "{exception_msg}\n\n"
    "HTTP Error: The server did not return the client configuration archive."
)

_CONNECTION_ERROR_HINT = (
    "{exception_msg}\n\n"
    "Connection Error: There's a problem connecting to the server. "
    "Check the host and port of the configuration URL and the network connection."
)

_PROXY_ERROR_HINT = (
    "{exception_msg}\n\n"
    "Proxy Error: There's an issue with the proxy server. Possible causes of "
    "this error include incorrect proxy settings, an invalid or expired proxy "
    "authentication credential, or a problem with the proxy server itself. "
    "Check your proxy settings. Proxies used: {proxies}"
)

_SSL_ERROR_HINT = (
    "{exception_msg}\n\n"
    "SSL Error: There's an issue with the SSL/TLS certificate of the server. "
    "Consider providing a certificate bundle file via `REQUESTS_CA_BUNDLE` or "
    "disabling SSL verification with `--verify false` (not recommended)."
)


def handle_request_exception(
    exception: Exception,
    failed_response: Response | None = None,
    proxies: dict[str, str] | None = None,
):
    """Handle request exceptions for a failed configuration archive download.

    Parameters
    ----------
    exception : request_exceptions.RequestException
        Exception object for failed request.
    failed_response : Response, optional
        The response of the failed request to handle
    proxies : dict[str, str], optional
        Proxies used for the request. Default is None.

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
    exception_msg = str(exception)
    status_code = failed_response.status_code if failed_response is not None else None

    if isinstance(exception, request_exceptions.HTTPError):
        _error = SourceHTTPError
        _hint = {401: _401_ERROR_HINT, 403: _403_ERROR_HINT, 404: _404_ERROR_HINT}.get(
            status_code, _HTTP_ERROR_HINT
        )
        _message = _hint.format(exception_msg=exception_msg)
    elif isinstance(exception, request_exceptions.ProxyError):
        _proxies = proxies or {"http": os.getenv("HTTP_PROXY"), "https": os.getenv("HTTPS_PROXY")}
        _error = SourceProxyError
        _message = _PROXY_ERROR_HINT.format(exception_msg=exception_msg, proxies=_proxies)
    elif isinstance(exception, request_exceptions.SSLError):
        _error = SourceSSLError
        _message = _SSL_ERROR_HINT.format(exception_msg=exception_msg)
    elif isinstance(exception, request_exceptions.ConnectionError):
        _error = SourceConnectionError
        _message = _CONNECTION_ERROR_HINT.format(exception_msg=exception_msg)
    elif isinstance(exception, request_exceptions.RequestException):
        _error = SourceReadError
        _message = exception_msg
    else:
        raise exception

    raise _error(_message).with_traceback(sys.exc_info()[2]) from exception

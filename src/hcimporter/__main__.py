#!/usr/bin/env python3
"""
hcimport
========

Command line interface of `hcimporter`. It imports the properties of a Hadoop
client configuration archive and prints them as one JSON document to `stdout`.

```console
$ curl -s -u admin:admin "$CM/api/v19/clusters/c1/services/hdfs/clientConfig" | hcimport
{"HADOOP_CONFIG_KEY":{"fs.defaultFS":"hdfs://nameservice1", ...}}

$ hcimport -cu file:///tmp/hdfs-clientconfig.zip
{"HADOOP_CONFIG_KEY":{"fs.defaultFS":"hdfs://nameservice1", ...}}
```
"""

from __future__ import annotations

__author__ = "jslorrma"
__maintainer__ = "jslorrma"
__email__ = "jslorrma@gmail.com"

import pathlib
import sys

import rich_click as click
from requests.auth import HTTPBasicAuth
from rich.markup import escape
from rich.traceback import install

from . import LIBRARY_NAME, __version__, get_logger
from .common.exceptions import ImporterError, InvalidUrlError
from .common.request import validate_url
from .importer import import_client_params

# install rich traceback
install(max_frames=5)

# click rich configuration
click.rich_click.USE_RICH_MARKUP = True

logger = get_logger(LIBRARY_NAME)


#
# validation functions
#
def _validate_url(ctx, param, value):
    if value is None:
        return value
    try:
        return validate_url(value)
    except InvalidUrlError as exc:
        raise click.BadParameter(str(exc)) from exc


def _validate_log(ctx, param, value):
    if isinstance(value, str):
        if value.lower() in ("true", "1", "on"):
            return True
        elif value.lower() in ("false", "0", "off"):
            return False
        else:
            path = pathlib.Path(value).resolve().absolute()
            if not path.parent.is_dir():
                raise click.BadParameter(f"Log directory '{path.parent}' does not exist")
            if path.is_dir():
                raise click.BadParameter(f"Log file '{path}' is a directory")
            return path
    return value


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.option(
    "-v",
    "--verbose",
    count=True,
    help=(
        "Increase verbosity (can be passed multiple times). With `-v` failures "
        "are reported with the full traceback."
    ),
)
@click.option(
    "-cu",
    "--config-url",
    metavar="URL",
    envvar="HADOOP_CLIENT_CONFIG_URL",
    show_envvar=True,
    callback=_validate_url,
    default=None,
    help=(
        "URL (`http`, `https` or `file`) of the client configuration archive. "
        "If not provided, the archive is read from `stdin`."
    ),
)
@click.option(
    "--user",
    envvar="HADOOP_CLIENT_CONFIG_USER",
    show_envvar=True,
    default=None,
    help="The username for HTTP basic authentication when fetching the archive.",
)
@click.option(
    "--password",
    envvar="HADOOP_CLIENT_CONFIG_PASSWORD",
    show_envvar=True,
    default=None,
    help="The password for HTTP basic authentication when fetching the archive.",
)
@click.option(
    "--verify",
    type=click.BOOL,
    default=None,
    help="Controls whether we verify the server's TLS certificate, by default `True`.",
)
@click.option(
    "--proxy",
    metavar="URL",
    default=None,
    help="The URL of the proxy to use.",
)
@click.option(
    "--log",
    metavar="{PATH, True}",
    callback=_validate_log,
    default=None,
    help=(
        "Whether to log to the console or a file. Option takes a path to a "
        "file or True to log to the console."
    ),
)
@click.version_option(version=__version__, prog_name="hcimport")
@click.pass_context
def cli(  # noqa: PLR0913
    ctx: click.Context,
    verbose: int,
    config_url: str | None,
    user: str | None,
    password: str | None,
    verify: bool | None,
    proxy: str | None,
    log: pathlib.Path | bool | None,
):
    """
    Import the properties of a Hadoop client configuration archive.

    The archive (a ZIP file of `*-site.xml` files) is read from `stdin` or
    fetched from `--config-url`. The properties of all `*-site.xml` files are
    printed as one JSON document.
    """
    log_level = ("INFO" if verbose == 1 else "DEBUG") if verbose > 0 else None
    get_logger(LIBRARY_NAME, log_level=log_level, log=log)

    kwargs = {}
    if user is not None:
        kwargs["auth"] = HTTPBasicAuth(user, password or "")
    if verify is not None:
        kwargs["verify"] = verify
    if proxy is not None:
        kwargs["proxies"] = {"http": proxy, "https": proxy}

    try:
        document = import_client_params(config_url, **kwargs)
    except (ImporterError, OSError) as exc:
        if verbose > 0:
            logger.exception("Ops! Importing the client configuration failed")
        else:
            logger.error(escape(f"{type(exc).__name__}: {exc}"))
        ctx.exit(1)

    click.echo(document)


def main(args: list[str] | None = None):
    """
    Run the `hcimport` command.

    Invalid arguments show the usage and skip the import, but are not
    reported as failure.
    """
    try:
        rv = cli.main(args=args, prog_name="hcimport", standalone_mode=False)
    except click.UsageError as exc:
        exc.show()
        rv = 0
    sys.exit(rv if isinstance(rv, int) else 0)


if __name__ == "__main__":
    main()

"""CLI for unattended DC/OS login."""

import os
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.markup import escape

from . import __version__
from .config import LoginConfig
from .exceptions import DCOSLoginError
from .flow import login as run_login

app = typer.Typer(
    name="dcos-login",
    help="Log in to a Community Edition DC/OS cluster using GitHub credentials.",
    add_completion=False,
    context_settings={"help_option_names": ["-h", "--help"]},
)
# Trace lines and response dumps are kept unwrapped
err_console = Console(stderr=True, soft_wrap=True)


def load_env():
    """Load environment from local.env if present."""
    for parent in [Path.cwd()] + list(Path.cwd().parents)[:3]:
        env_file = parent / "local.env"
        if env_file.exists():
            with open(env_file) as f:
                for line in f:
                    line = line.strip()
                    if line and not line.startswith("#") and "=" in line:
                        key, _, value = line.partition("=")
                        value = value.strip().strip('"').strip("'")
                        os.environ.setdefault(key.strip(), value)
            break


def trace_line(message: str) -> None:
    err_console.print(message, markup=False, highlight=False)


def _version_callback(value: bool) -> None:
    if value:
        print(__version__)
        raise typer.Exit()


@app.command()
def main_command(
    cluster_url: Annotated[
        str,
        typer.Option("--cluster-url", envvar="CLUSTER_URL", help="URL of the DC/OS master(s) (e.g https://example.com)"),
    ],
    username: Annotated[
        str,
        typer.Option("--username", "-u", envvar="GH_USERNAME", help="Github username used for logging in"),
    ],
    password: Annotated[
        str,
        typer.Option("--password", "-p", envvar="GH_PASSWORD", help="Github password used for logging in"),
    ],
    insecure: Annotated[
        bool,
        typer.Option(
            "--insecure",
            "-k",
            envvar="DCOS_INSECURE",
            help="Set this when targeting a cluster with a self-signed certificate",
        ),
    ] = False,
    debug: Annotated[
        bool,
        typer.Option("--debug", envvar="DCOS_DEBUG", help="Enable debugging mode. This *WILL* print credentials."),
    ] = False,
    timeout: Annotated[
        float,
        typer.Option("--timeout", "-t", envvar="DCOS_TIMEOUT", help="Give up after this many seconds"),
    ] = 60.0,
    request_timeout: Annotated[
        float,
        typer.Option(
            "--request-timeout", envvar="DCOS_REQUEST_TIMEOUT", help="Timeout for each HTTP request, in seconds"
        ),
    ] = 30.0,
    version: Annotated[
        Optional[bool],
        typer.Option("--version", callback=_version_callback, is_eager=True, help="Show version and exit"),
    ] = None,
) -> None:
    """Print the cluster's ACS token on success."""
    config = LoginConfig(
        cluster_url=cluster_url,
        username=username,
        password=password,
        allow_insecure_tls=insecure,
        trace=debug,
        timeout=timeout,
        request_timeout=request_timeout,
    )
    try:
        token = run_login(config, trace=trace_line)
    except DCOSLoginError as e:
        err_console.print(f"[red]Unexpected error:[/red]\n {escape(str(e))}")
        raise typer.Exit(1) from e

    print(token)


def main() -> None:
    """Console script entry point."""
    load_env()
    app()


if __name__ == "__main__":
    main()

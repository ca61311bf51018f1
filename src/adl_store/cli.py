from __future__ import annotations
import logging
import sys

import typer
from rich.console import Console

from .config import StoreOptions
from .errors import StoreError
from .http_client import StoreClient
from .reporter import Reporter

app = typer.Typer(add_completion=False, no_args_is_help=True)


def _options(
    user_agent_suffix: str | None,
    insecure: bool,
    remote_exceptions: bool,
    path_prefix: str | None,
    read_ahead: int | None,
    timeout_ms: int | None,
    ssl_channel_mode: str | None,
    max_retries: int | None,
) -> StoreOptions:
    opts = StoreOptions.from_env()
    if user_agent_suffix is not None:
        opts.set_user_agent_suffix(user_agent_suffix)
    if insecure:
        opts.set_insecure_transport()
    if remote_exceptions:
        opts.enable_throwing_remote_exceptions()
    if path_prefix is not None:
        opts.set_file_path_prefix(path_prefix)
    if read_ahead is not None:
        opts.set_read_ahead_queue_depth(read_ahead)
    if timeout_ms is not None:
        opts.set_default_timeout(timeout_ms)
    if ssl_channel_mode is not None:
        opts.set_ssl_channel_mode(ssl_channel_mode)
    if max_retries is not None:
        opts.set_max_retries(max_retries)
    return opts


@app.callback()
def main(verbose: bool = typer.Option(False, "--verbose", "-v", help="Log every request at DEBUG level.")) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )


UA_OPT = typer.Option(None, "--user-agent-suffix")
INSECURE_OPT = typer.Option(False, "--insecure", help="Use http. Only for mock servers.")
REMOTE_OPT = typer.Option(False, "--remote-exceptions")
PREFIX_OPT = typer.Option(None, "--path-prefix")
READ_AHEAD_OPT = typer.Option(None, "--read-ahead", help="Read-ahead queue depth, 0 disables.")
TIMEOUT_OPT = typer.Option(None, "--timeout-ms")
SSL_OPT = typer.Option(None, "--ssl-channel-mode", help="OpenSSL, Default or Default_JSSE.")
RETRIES_OPT = typer.Option(None, "--max-retries")
TOKEN_OPT = typer.Option(None, "--token", envvar="ADL_TOKEN")


@app.command("options")
def show_options(
    user_agent_suffix: str | None = UA_OPT,
    insecure: bool = INSECURE_OPT,
    remote_exceptions: bool = REMOTE_OPT,
    path_prefix: str | None = PREFIX_OPT,
    read_ahead: int | None = READ_AHEAD_OPT,
    timeout_ms: int | None = TIMEOUT_OPT,
    ssl_channel_mode: str | None = SSL_OPT,
    max_retries: int | None = RETRIES_OPT,
):
    """Print the options a client would be built with."""
    console = Console()
    reporter = Reporter(console)
    try:
        opts = _options(user_agent_suffix, insecure, remote_exceptions, path_prefix,
                        read_ahead, timeout_ms, ssl_channel_mode, max_retries)
    except ValueError as e:
        reporter.error(e)
        raise typer.Exit(code=2)
    reporter.options(opts)


@app.command("stat")
def stat(
    account: str = typer.Argument(..., help="Account FQDN, e.g. myacct.azuredatalakestore.net"),
    path: str = typer.Argument("/"),
    token: str | None = TOKEN_OPT,
    user_agent_suffix: str | None = UA_OPT,
    insecure: bool = INSECURE_OPT,
    remote_exceptions: bool = REMOTE_OPT,
    path_prefix: str | None = PREFIX_OPT,
    timeout_ms: int | None = TIMEOUT_OPT,
    ssl_channel_mode: str | None = SSL_OPT,
    max_retries: int | None = RETRIES_OPT,
):
    """Show the status of a single path."""
    console = Console()
    reporter = Reporter(console)
    try:
        opts = _options(user_agent_suffix, insecure, remote_exceptions, path_prefix,
                        None, timeout_ms, ssl_channel_mode, max_retries)
    except ValueError as e:
        reporter.error(e)
        raise typer.Exit(code=2)
    with StoreClient(account, opts, token=token) as client:
        try:
            status = client.get_file_status(path)
        except (StoreError, OSError) as e:
            reporter.error(e)
            raise typer.Exit(code=1)
        reporter.statuses(path, [status])


@app.command("ls")
def ls(
    account: str = typer.Argument(..., help="Account FQDN"),
    path: str = typer.Argument("/"),
    token: str | None = TOKEN_OPT,
    user_agent_suffix: str | None = UA_OPT,
    insecure: bool = INSECURE_OPT,
    remote_exceptions: bool = REMOTE_OPT,
    path_prefix: str | None = PREFIX_OPT,
    timeout_ms: int | None = TIMEOUT_OPT,
    ssl_channel_mode: str | None = SSL_OPT,
    max_retries: int | None = RETRIES_OPT,
):
    """List a directory."""
    console = Console()
    reporter = Reporter(console)
    try:
        opts = _options(user_agent_suffix, insecure, remote_exceptions, path_prefix,
                        None, timeout_ms, ssl_channel_mode, max_retries)
    except ValueError as e:
        reporter.error(e)
        raise typer.Exit(code=2)
    with StoreClient(account, opts, token=token) as client:
        try:
            entries = client.list_status(path)
        except (StoreError, OSError) as e:
            reporter.error(e)
            raise typer.Exit(code=1)
        reporter.statuses(path, entries)


@app.command("cat")
def cat(
    account: str = typer.Argument(..., help="Account FQDN"),
    path: str = typer.Argument(...),
    token: str | None = TOKEN_OPT,
    user_agent_suffix: str | None = UA_OPT,
    insecure: bool = INSECURE_OPT,
    remote_exceptions: bool = REMOTE_OPT,
    path_prefix: str | None = PREFIX_OPT,
    read_ahead: int | None = READ_AHEAD_OPT,
    timeout_ms: int | None = TIMEOUT_OPT,
    ssl_channel_mode: str | None = SSL_OPT,
    max_retries: int | None = RETRIES_OPT,
):
    """Stream a file to stdout."""
    reporter = Reporter(Console(stderr=True))
    try:
        opts = _options(user_agent_suffix, insecure, remote_exceptions, path_prefix,
                        read_ahead, timeout_ms, ssl_channel_mode, max_retries)
    except ValueError as e:
        reporter.error(e)
        raise typer.Exit(code=2)
    with StoreClient(account, opts, token=token) as client:
        try:
            with client.open(path) as stream:
                while True:
                    chunk = stream.read(64 * 1024)
                    if not chunk:
                        break
                    sys.stdout.buffer.write(chunk)
        except (StoreError, OSError) as e:
            reporter.error(e)
            raise typer.Exit(code=1)
        sys.stdout.buffer.flush()


if __name__ == "__main__":
    app()

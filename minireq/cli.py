from __future__ import annotations

import json
import sys

import click

from . import _api
from ._engine import Engine
from ._exceptions import RequestsError
from ._models import RequestContext

# ---------------------------------------------------------------------------
# Rich output helpers (graceful fallback when rich is not installed)
# ---------------------------------------------------------------------------

try:
    from rich.console import Console
    from rich.syntax import Syntax
    from rich.text import Text

    HAS_RICH = True
except ImportError:  # pragma: no cover
    HAS_RICH = False


def _status_color(status_code: int) -> str:
    """Return a rich color name based on HTTP status category."""
    if status_code < 200:
        return "cyan"
    elif status_code < 300:
        return "green"
    elif status_code < 400:
        return "yellow"
    elif status_code < 500:
        return "red"
    else:
        return "bold red"


def is_binary_content(content: bytes) -> bool:
    return b"\0" in content


def _looks_like_json(text: str) -> bool:
    return text.lstrip().startswith(("{", "["))


# ---------------------------------------------------------------------------
# Formatters
# ---------------------------------------------------------------------------


def format_context_plain(context: RequestContext, method: str) -> str:
    lines = [f"{method} {context.url} -> {context.status_code}", ""]

    content = context.content
    if content:
        if is_binary_content(content):
            lines.append(f"<{len(content)} bytes of binary data>")
        else:
            text = context.text
            if _looks_like_json(text):
                try:
                    text = json.dumps(json.loads(text), indent=4, ensure_ascii=False)
                except json.JSONDecodeError:
                    pass
            lines.append(text)

    return "\n".join(lines)


def print_context_rich(console: Console, context: RequestContext, method: str) -> None:
    color = _status_color(context.status_code)

    status_line = Text()
    status_line.append(f"{method} ", style="bold dim")
    status_line.append(f"{context.url} ", style="dim cyan")
    status_line.append(f"{context.status_code}", style=f"bold {color}")
    console.print(status_line)
    console.print()

    content = context.content
    if not content:
        return
    if is_binary_content(content):
        console.print(f"[dim]<{len(content)} bytes of binary data>[/dim]")
        return

    text = context.text
    if _looks_like_json(text):
        try:
            formatted = json.dumps(json.loads(text), indent=4, ensure_ascii=False)
        except json.JSONDecodeError:
            console.print(text)
        else:
            console.print(Syntax(formatted, "json", theme="monokai"))
    else:
        console.print(text)


# ---------------------------------------------------------------------------
# CLI command
# ---------------------------------------------------------------------------


@click.command(help="Send a GET, POST or PUT request and print the response.")
@click.argument("url")
@click.option(
    "-X",
    "--method",
    default="GET",
    type=click.Choice(["GET", "POST", "PUT"], case_sensitive=False),
    help="HTTP method.",
)
@click.option(
    "-d",
    "--data",
    "pairs",
    nargs=2,
    multiple=True,
    help="Form field as KEY VALUE, repeatable.",
)
@click.option(
    "-H",
    "--header",
    "headers",
    multiple=True,
    help='Add a header, e.g. -H "Authorization: Bearer token".',
)
@click.option("--timeout", default=5.0, show_default=True, help="Timeout in seconds.")
@click.option("-v", "--verbose", is_flag=True, default=False, help="Verbose output.")
@click.option(
    "--no-color", is_flag=True, default=False, help="Disable colored output."
)
def main(
    url: str,
    method: str,
    pairs: tuple[tuple[str, str], ...],
    headers: tuple[str, ...],
    timeout: float,
    verbose: bool,
    no_color: bool,
) -> None:
    method = method.upper()
    use_rich = HAS_RICH and not no_color and sys.stdout.isatty()

    if (pairs or headers) and method == "GET":
        raise click.UsageError("--data and --header require -X POST or -X PUT.")

    data = [item for pair in pairs for item in pair] if pairs else None

    try:
        with Engine(timeout=timeout) as engine:
            session, context = _api.init(url, engine=engine)
            try:
                if method == "GET":
                    _api.get(session, context)
                else:
                    _api.submit(
                        session,
                        context,
                        method,
                        data,
                        list(headers) if headers else None,
                    )

                if verbose:
                    click.echo(
                        f"* {context.body_length} bytes received", err=True
                    )

                if use_rich:
                    print_context_rich(Console(), context, method)
                else:
                    click.echo(format_context_plain(context, method))

                if not context.ok or context.status_code >= 300:
                    sys.exit(1)
            finally:
                _api.close(session, context)

    except RequestsError as exc:
        if use_rich:
            console = Console(stderr=True)
            console.print(f"[bold red]{type(exc).__name__}[/bold red]: {exc}")
        else:
            click.echo(f"{type(exc).__name__}: {exc}", err=True)
        sys.exit(1)

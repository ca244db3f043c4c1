"""
httpbanner CLI - Command Line Interface

Render start-up and request banners from the terminal and run the demo server.
"""

import typer
from typing import Optional
from rich.console import Console
from importlib import metadata as importlib_metadata

from httpbanner.banner import Banner
from httpbanner.core.config import BORDER_GLYPH, SERVER_HOST, SERVER_PORT
from httpbanner.core.errors import BannerError
from httpbanner.core.schemas import GeoLocation
from httpbanner.request_banner import RequestBanner, RequestContext

console = Console()

app = typer.Typer(
    name="httpbanner",
    help="[bold cyan]httpbanner[/] - start-up and request banners for web apps",
    add_completion=False,
    rich_markup_mode="rich",
)


def get_version() -> str:
    """Get the package version from metadata."""
    try:
        return importlib_metadata.version("httpbanner")
    except importlib_metadata.PackageNotFoundError:
        return "dev"


def success_message(message: str):
    """Display a success message with icon."""
    console.print(f"[bold green]✓[/] {message}")


def error_message(message: str):
    """Display an error message with icon."""
    console.print(f"[bold red]✗[/] {message}")


def print_banner(text: str):
    console.print(text, markup=False, emoji=False, highlight=False, soft_wrap=True)


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    version_flag: bool = typer.Option(
        False,
        "--version",
        "-v",
        help="Show version and exit",
    ),
):
    """httpbanner CLI - start-up and request banners."""
    if version_flag:
        console.print(f"[bold cyan]httpbanner[/] version [bold green]{get_version()}[/]")
        raise typer.Exit()

    if ctx.invoked_subcommand is None:
        console.print(ctx.get_help())


@app.command()
def startup(
    name: Optional[str] = typer.Option(None, "--name", "-n", help="App name"),
    local: Optional[str] = typer.Option(
        None, "--local", "-l", help="Local address (host or URL)"
    ),
    local_port: Optional[int] = typer.Option(
        None, "--local-port", "-p", help="Local port"
    ),
    public: Optional[str] = typer.Option(
        None, "--public", "-P", help="Public address (host or URL)"
    ),
    glyph: str = typer.Option(BORDER_GLYPH, "--glyph", "-g", help="Border glyph"),
):
    """
    Print the start-up banner.

    name, local and public are required.
    """
    try:
        banner = Banner(
            {
                "name": name,
                "local": local,
                "local_port": local_port,
                "public": public,
                "border_glyph": glyph,
            }
        )
        print_banner(banner.compose())
    except (BannerError, ValueError) as e:
        error_message(f"Cannot compose start-up banner: {e}")
        raise typer.Exit(1)


@app.command()
def request(
    method: str = typer.Option("GET", "--method", "-m", help="HTTP method"),
    host: Optional[str] = typer.Option(None, "--host", "-H", help="Host header"),
    url: Optional[str] = typer.Option(
        None, "--url", "-u", help="Request path, optionally with query string"
    ),
    protocol: str = typer.Option("http", "--protocol", help="Request scheme"),
    referer: Optional[str] = typer.Option(None, "--referer", "-r", help="Referer header"),
    ip: Optional[str] = typer.Option(None, "--ip", help="Client IP address"),
    country: Optional[str] = typer.Option(None, "--country", help="Client country"),
    subdivision: Optional[str] = typer.Option(
        None, "--subdivision", help="Client state or subdivision"
    ),
    city: Optional[str] = typer.Option(None, "--city", help="Client city"),
):
    """Print the banner a request with these fields would log."""
    headers = {}
    if host:
        headers["host"] = host
    if referer:
        headers["referer"] = referer

    state = None
    if country or subdivision or city:
        geo = GeoLocation(country=country, subdivision=subdivision, city=city)
        state = {"geo": {"geos": [geo]}}

    context = RequestContext(
        method=method,
        url=url,
        protocol=protocol,
        headers=headers,
        ip=ip,
        state=state,
    )
    try:
        print_banner(RequestBanner().render(context))
    except BannerError as e:
        error_message(str(e))
        raise typer.Exit(1)


@app.command()
def serve(
    host: str = typer.Option(SERVER_HOST, "--host", help="Bind address"),
    port: int = typer.Option(SERVER_PORT, "--port", help="Bind port"),
):
    """Run the demo server with uvicorn."""
    import uvicorn

    success_message(f"Starting demo server on {host}:{port}")
    uvicorn.run("httpbanner.api.server:app", host=host, port=port, log_level="info")


if __name__ == "__main__":
    app()

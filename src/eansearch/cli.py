"""Command-line interface for eansearch.

Built with Typer for commands and Rich for output.
"""

import logging
from dataclasses import replace
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from .checksum import is_valid_ean
from .client import EANSearchClient, decode_barcode_image
from .config import get_config
from .schemas import Language, Product

app = typer.Typer(
    name="eansearch",
    help="Look up barcodes and search products on ean-search.org.",
    no_args_is_help=True,
)

# Rich console for pretty output
console = Console()

LANGUAGE_HELP = "Language code (1=English, 3=German, 99=any)"


# ============================================================================
# Helper Functions
# ============================================================================


def print_error(message: str) -> None:
    """Print an error message."""
    console.print(f"[bold red]Error:[/bold red] {message}")


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[bold green]Success:[/bold green] {message}")


def setup_logging(level: str) -> None:
    """Route library logging through Rich."""
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )


def format_product_table(products: list[Product], title: str = "Products") -> Table:
    """Create a rich table for displaying products."""
    table = Table(title=title, show_header=True, header_style="bold magenta")
    table.add_column("EAN", style="cyan", no_wrap=True)
    table.add_column("Name", style="green", max_width=40)
    table.add_column("Category")
    table.add_column("Country", justify="center")

    for product in products:
        table.add_row(
            product.ean,
            product.name,
            f"{product.category_name} ({product.category_id})",
            product.issuing_country,
        )

    return table


def get_client(ctx: typer.Context) -> EANSearchClient:
    """Build a client from the global options and configuration."""
    config = get_config()
    token = (ctx.obj or {}).get("token") or config.token
    if not token:
        print_error("No API token. Set EAN_SEARCH_API_TOKEN or pass --token.")
        raise typer.Exit(1)

    errors = replace(config, token=token).validate()
    if errors:
        for error in errors:
            print_error(error)
        raise typer.Exit(1)
    return EANSearchClient(token, timeout=config.timeout, base_url=config.base_url)


def show_product_list(products: Optional[list[Product]], title: str) -> None:
    if products is None:
        print_error("Search failed")
        raise typer.Exit(1)
    if not products:
        console.print("[dim]No products found[/dim]")
        return
    console.print(format_product_table(products, title=title))


@app.callback()
def main_callback(
    ctx: typer.Context,
    token: Optional[str] = typer.Option(None, "--token", "-t", help="API token (overrides EAN_SEARCH_API_TOKEN)"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
) -> None:
    """Look up barcodes and search products on ean-search.org."""
    ctx.obj = {"token": token}
    setup_logging("DEBUG" if verbose else get_config().log_level)


# ============================================================================
# Lookup Commands
# ============================================================================


@app.command()
def lookup(
    ctx: typer.Context,
    ean: str = typer.Argument(..., help="EAN/UPC barcode"),
    language: int = typer.Option(Language.ENGLISH.value, "--language", "-l", help=LANGUAGE_HELP),
) -> None:
    """Look up a product by barcode."""
    product = get_client(ctx).barcode_lookup(ean, language=language)
    if product is None:
        print_error(f"{ean} not found")
        raise typer.Exit(1)

    console.print(f"[bold cyan]{product.ean}[/bold cyan] is [green]{product.name}[/green]")
    console.print(f"  Category: {product.category_name} ({product.category_id})")
    if product.has_google_category:
        console.print(f"  Google category: {product.google_category_id}")
    console.print(f"  Issued in: {product.issuing_country}")


@app.command()
def isbn(
    ctx: typer.Context,
    isbn: str = typer.Argument(..., help="10-digit ISBN"),
) -> None:
    """Look up a book by ISBN-10."""
    product = get_client(ctx).isbn_lookup(isbn)
    if product is None:
        print_error(f"{isbn} not found")
        raise typer.Exit(1)

    console.print(f"[bold cyan]{isbn}[/bold cyan] is book title [green]{product.name}[/green]")


@app.command()
def verify(
    ctx: typer.Context,
    ean: str = typer.Argument(..., help="EAN/UPC barcode"),
    offline: bool = typer.Option(False, "--offline", help="Compute the check digit locally"),
) -> None:
    """Verify a barcode's check digit."""
    if offline:
        valid = is_valid_ean(ean)
    else:
        valid = get_client(ctx).verify_checksum(ean)

    if valid:
        console.print(f"{ean} is [green]valid[/green]")
    else:
        console.print(f"{ean} is [red]not valid[/red]")
        raise typer.Exit(1)


@app.command()
def country(
    ctx: typer.Context,
    ean: str = typer.Argument(..., help="EAN/UPC barcode"),
) -> None:
    """Show the country that issued a barcode."""
    issued = get_client(ctx).issuing_country_lookup(ean)
    if not issued:
        print_error(f"Could not determine issuing country of {ean}")
        raise typer.Exit(1)

    console.print(f"{ean} was issued in [bold]{issued}[/bold]")


@app.command()
def image(
    ctx: typer.Context,
    ean: str = typer.Argument(..., help="EAN/UPC barcode"),
    width: int = typer.Option(102, "--width", help="Image width in pixels"),
    height: int = typer.Option(50, "--height", help="Image height in pixels"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write PNG to this file"),
) -> None:
    """Fetch a barcode image (base64 PNG, or a file with --output)."""
    payload = get_client(ctx).barcode_image(ean, width=width, height=height)
    if not payload:
        print_error(f"No barcode image for {ean}")
        raise typer.Exit(1)

    if output is None:
        console.print(payload, soft_wrap=True)
        return

    data = decode_barcode_image(payload)
    if not data:
        print_error("Service returned an invalid image")
        raise typer.Exit(1)
    output.write_bytes(data)
    print_success(f"Wrote {len(data)} bytes to {output}")


# ============================================================================
# Search Commands
# ============================================================================


@app.command()
def search(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Product name"),
    language: int = typer.Option(Language.ANY.value, "--language", "-l", help=LANGUAGE_HELP),
    page: int = typer.Option(0, "--page", "-p", help="Result page (0-based)"),
) -> None:
    """Search products by name."""
    products = get_client(ctx).product_search(name, language=language, page=page)
    show_product_list(products, title=f"Search: {name}")


@app.command()
def similar(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Product name"),
    language: int = typer.Option(Language.ANY.value, "--language", "-l", help=LANGUAGE_HELP),
    page: int = typer.Option(1, "--page", "-p", help="Result page (1-based)"),
) -> None:
    """Search products with similar names."""
    products = get_client(ctx).similar_product_search(name, language=language, page=page)
    show_product_list(products, title=f"Similar: {name}")


@app.command()
def category(
    ctx: typer.Context,
    category_id: int = typer.Argument(..., help="Category id"),
    name: str = typer.Argument(..., help="Product name"),
    language: int = typer.Option(Language.ANY.value, "--language", "-l", help=LANGUAGE_HELP),
    page: int = typer.Option(0, "--page", "-p", help="Result page (0-based)"),
) -> None:
    """Search products by name within a category."""
    products = get_client(ctx).category_search(category_id, name, language=language, page=page)
    show_product_list(products, title=f"Category {category_id}: {name}")


@app.command()
def prefix(
    ctx: typer.Context,
    prefix: str = typer.Argument(..., help="Barcode prefix"),
    language: int = typer.Option(Language.ENGLISH.value, "--language", "-l", help=LANGUAGE_HELP),
    page: int = typer.Option(0, "--page", "-p", help="Result page (0-based)"),
) -> None:
    """List products whose barcode starts with a prefix."""
    products = get_client(ctx).barcode_prefix_search(prefix, language=language, page=page)
    show_product_list(products, title=f"Prefix: {prefix}")


@app.command()
def version() -> None:
    """Show version information."""
    from . import __version__

    console.print(f"eansearch version {__version__}")


# ============================================================================
# Main Entry Point
# ============================================================================


def main() -> None:
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()

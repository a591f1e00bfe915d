"""
Command-line interface for pdf2word.
"""

import sys

import click
from rich.console import Console
from rich.table import Table

from pdf2word import __version__
from pdf2word.config import ConversionOptions
from pdf2word.converter import convert_file
from pdf2word.exceptions import ConversionError
from pdf2word.types import ProgressUpdate
from pdf2word.utils import format_file_size

console = Console()


@click.group()
@click.version_option(version=__version__)
def cli():
    """
    pdf2word - Convert PDF files into editable Word documents.
    """
    pass


@cli.command(name="convert")
@click.argument("input_pdf", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--output-dir", "-o",
    default=None,
    help="Directory for the .docx file (defaults to the input's directory)",
    type=click.Path(file_okay=False),
)
@click.option(
    "--endpoint",
    default=None,
    help="Delegate the conversion to a remote service at this URL",
    type=str,
)
@click.option(
    "--scale",
    default=None,
    help="Upscale factor for the page images",
    type=float,
)
@click.option(
    "--tolerance",
    default=None,
    help="Vertical distance under which text fragments share a line",
    type=float,
)
@click.option(
    "--image-width",
    default=None,
    help="Display width of the page images",
    type=int,
)
@click.option(
    "--no-metadata",
    is_flag=True,
    default=False,
    help="Do not copy the PDF title/author into the document",
)
def convert(input_pdf, output_dir, endpoint, scale, tolerance, image_width, no_metadata):
    """
    Convert a PDF into an editable .docx file.

    Examples:

        pdf2word convert report.pdf

        pdf2word convert report.pdf -o converted/ --scale 3
    """
    try:
        options = ConversionOptions.from_env().with_updates(
            remote_endpoint=endpoint,
            render_scale=scale,
            line_tolerance=tolerance,
            image_display_width=image_width,
            include_metadata=False if no_metadata else None,
        )
    except ValueError as e:
        console.print(f"[bold red]✗ Invalid option:[/bold red] {e}")
        sys.exit(2)

    def report(update: ProgressUpdate):
        console.print(f"[dim]{update.percent:3d}%[/dim] {update.status_message}")

    console.print(f"\n[bold cyan]Converting {click.format_filename(input_pdf)}...[/bold cyan]")
    try:
        destination = convert_file(input_pdf, output_dir, options=options, observer=report)
    except ConversionError as e:
        if e.total_pages:
            console.print(
                f"[bold red]✗ Failed after page {e.last_page} of {e.total_pages}:[/bold red] {e}"
            )
        else:
            console.print(f"[bold red]✗ Conversion failed:[/bold red] {e}")
        sys.exit(1)

    if destination is None:
        console.print("[yellow]The document has no pages; nothing was written.[/yellow]")
        return

    table = Table(title="Conversion Result", show_header=False)
    table.add_column("Property", style="cyan")
    table.add_column("Value", style="green")
    table.add_row("Output", str(destination))
    table.add_row("Size", format_file_size(destination.stat().st_size))
    table.add_row("Mode", "remote" if options.is_remote else "local")
    console.print(table)
    console.print("[bold green]✓ Conversion complete[/bold green]\n")


def main():
    cli()


if __name__ == "__main__":
    main()

"""CLI entry point.

Usage:
    python -m hours_invoice \
        --file "export.csv" \
        --pay-rate 50 \
        --gst 0.05 \
        --xlsx-out "Invoice.xlsx" \
        --audit-out "Audit.json"
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import typer

from hours_invoice.config import ParserConfig, load_parser_config
from hours_invoice.models import InvoiceError, RowErrors

app = typer.Typer(add_completion=False)

# Shell-friendly spellings for delimiters that are awkward to type.
DELIMITER_ALIASES = {"\\t": "\t", "tab": "\t"}


@app.command()
def generate(
    file: Path = typer.Option(..., "--file", "-f", help="CSV time-tracking export to read from"),
    pay_rate: float = typer.Option(..., "--pay-rate", "-p", help="Pay rate per hour"),
    gst: float = typer.Option(0.0, "--gst", "--tax-rate", "-g", help="Tax rate as a fraction, e.g. 0.05 for 5%"),
    delimiter: Optional[str] = typer.Option(None, "--delimiter", "-d", help="Field delimiter (default: ','); use '\\t' or 'tab' for tab-separated exports"),
    config_file: Optional[Path] = typer.Option(None, "--config", help="JSON file overriding delimiter and accepted header names"),
    collect_errors: bool = typer.Option(False, "--collect-errors/--fail-fast", help="Report every bad row instead of stopping at the first"),
    audit_out: Optional[Path] = typer.Option(None, "--audit-out", help="Write an audit JSON file"),
    xlsx_out: Optional[Path] = typer.Option(None, "--xlsx-out", help="Write an Excel invoice"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """Generate an invoice from a time-tracking CSV export."""
    from hours_invoice.parsers import parse_records_file
    from hours_invoice.engine import build_invoice
    from hours_invoice.report import render_invoice

    if delimiter is not None:
        delimiter = DELIMITER_ALIASES.get(delimiter.lower(), delimiter)

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        if config_file is not None:
            config = load_parser_config(config_file, delimiter=delimiter)
        elif delimiter is not None:
            config = ParserConfig(delimiter=delimiter)
        else:
            config = ParserConfig()
    except (OSError, TypeError, ValueError) as e:
        typer.echo(f"ERROR: Invalid parser config: {e}", err=True)
        raise typer.Exit(1)

    try:
        records = parse_records_file(file, config, collect_errors=collect_errors)
        summary = build_invoice(records, pay_rate, gst)

    except RowErrors as e:
        typer.echo(f"Unable to parse {file}: {len(e.errors)} bad row(s)", err=True)
        for error in e.errors:
            typer.echo(f"  ERROR: {error}", err=True)
        raise typer.Exit(1)

    except InvoiceError as e:
        typer.echo(f"ERROR: {e}", err=True)
        raise typer.Exit(1)

    except (OSError, UnicodeDecodeError) as e:
        typer.echo(f"ERROR: Unable to read from given file \"{file}\": {e}", err=True)
        raise typer.Exit(1)

    typer.echo(render_invoice(summary))

    if xlsx_out is not None:
        from hours_invoice.excel import generate_excel_report
        generate_excel_report(summary, xlsx_out)
        typer.echo(f"Excel invoice saved to: {xlsx_out}")

    if audit_out is not None:
        from hours_invoice.audit import generate_audit
        generate_audit(summary, audit_out)
        typer.echo(f"Audit file saved to: {audit_out}")


def main() -> None:
    app()


if __name__ == "__main__":
    main()

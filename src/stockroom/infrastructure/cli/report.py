"""Shared formatting for import reports."""

from __future__ import annotations

import click

from stockroom.application.dto import ImportReport


def echo_import_report(report: ImportReport, noun: str) -> None:
    click.echo(f"Imported {report.imported_count} {noun}.")
    if report.imported_count == 0:
        click.echo("Nothing was replaced.")
    if report.skipped:
        click.echo(f"Skipped {report.skipped_count} rows:")
        for row in report.skipped:
            click.echo(f"  row {row.row_number}: {row.reason}")

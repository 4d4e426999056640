"""Shared CLI state: settings plus lazily-built stores."""

from __future__ import annotations

import click

from stockroom.domain.exceptions import DomainException
from stockroom.infrastructure.bootstrap import Stockroom, build
from stockroom.infrastructure.config import Settings


class AppContext:

    def __init__(self, settings: Settings) -> None:
        self.settings = settings
        self._stockroom: Stockroom | None = None

    @property
    def stockroom(self) -> Stockroom:
        if self._stockroom is None:
            try:
                self._stockroom = build(self.settings)
            except DomainException as exc:
                raise click.ClickException(str(exc))
        return self._stockroom


pass_app = click.make_pass_decorator(AppContext)


def echo_warnings(warnings) -> None:
    for warning in warnings:
        click.echo(f"Warning: {warning}", err=True)

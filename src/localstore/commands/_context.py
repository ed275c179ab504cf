"""AppContext — shared Click context for all commands.

Created once by the root CLI group and handed to subcommands through
``@click.pass_obj``.  The store, cart ledger and catalog repository are
built lazily, at most once per process, so ``--help`` never opens the
database.
"""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING

import click

from localstore.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from localstore.config.settings import LocalStoreSettings
    from localstore.infrastructure.store import Store
    from localstore.services.cart import CartLedger
    from localstore.services.catalog import CatalogRepository
    from localstore.services.result import ServiceResult


class AppContext:
    """Process-wide state for one CLI invocation."""

    def __init__(self, settings: LocalStoreSettings) -> None:
        self.settings = settings
        self._store: Store | None = None
        self._ledger: CartLedger | None = None
        self._catalog: CatalogRepository | None = None

        from localstore.config.logging import configure_logging

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

        if settings.verbose:
            from localstore.services.telemetry import enable_telemetry

            enable_telemetry()

    @property
    def store(self) -> Store:
        """The store (opened lazily on first access)."""
        if self._store is None:
            from localstore.infrastructure.store import Store

            self._store = Store(self.settings)
        return self._store

    @property
    def ledger(self) -> CartLedger:
        if self._ledger is None:
            from localstore.services.cart import CartLedger

            self._ledger = CartLedger(self.store)
        return self._ledger

    @property
    def catalog(self) -> CatalogRepository:
        if self._catalog is None:
            from localstore.services.catalog import CatalogRepository

            self._catalog = CatalogRepository(self.store)
        return self._catalog

    @property
    def interactive(self) -> bool:
        """True when prompts may fire: no ``--no-interact``, no ``--json``, stdin is a TTY."""
        return (
            not self.settings.no_interact
            and not self.settings.json_output
            and sys.stdin.isatty()
        )

    def confirm(self, message: str, *, yes: bool = False) -> bool:
        """Ask before a destructive step unless ``--yes``, ``--no-interact`` or ``--json``."""
        if yes or self.settings.no_interact or self.settings.json_output:
            return True
        return click.confirm(message)

    def close(self) -> None:
        if self._store is not None:
            self._store.close()
            self._store = None

    def render(self, result: ServiceResult) -> None:
        """Print a result without touching the exit code."""
        settings = OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )
        output = format_result(result, settings=settings)
        click.echo(output, err=not result.ok)
        if result.ok and not settings.json_output:
            for warning in result.warnings:
                click.echo(f"WARNING: {warning}", err=True)

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success (``result.ok``): writes to stdout, returns normally.
          Warnings go to stderr so they don't pollute piped output.
        * Failure: writes to stderr, exits with code 1.
        """
        self.render(result)
        if not result.ok:
            raise SystemExit(1)

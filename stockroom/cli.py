import sys

import click

from stockroom.errors import DeviceAccessError, StockroomError
from stockroom.scanning.keyboard import KeyboardWedgeScanner
from stockroom.scanning.session import ScanMode, ScanSession
from stockroom.seed import seed_demo_data
from stockroom.services.stock_mutation import verify_ledger_consistency


def _echo_message(session: ScanSession) -> None:
    if session.message is None:
        return
    color = "green" if session.message.kind == "success" else "red"
    click.secho(session.message.text, fg=color)
    session.message = None


def register_cli(app):
    @app.cli.command("seed-demo")
    def seed_demo() -> None:
        """Load the demo locations, items and transactions."""
        if seed_demo_data():
            click.echo("Demo inventory loaded.")
        else:
            click.echo("Inventory already has data; nothing loaded.")

    @app.cli.command("verify-ledger")
    def verify_ledger() -> None:
        """Check every item quantity against its opening quantity plus ledger."""
        mismatches = verify_ledger_consistency()
        if not mismatches:
            click.echo("Ledger OK: every item quantity matches its transactions.")
            return
        for mismatch in mismatches:
            click.echo(
                f"{mismatch.sku} (item {mismatch.item_id}): quantity {mismatch.quantity}, "
                f"ledger expects {mismatch.expected}"
            )
        raise SystemExit(1)

    @app.cli.command("scan")
    @click.option(
        "--mode",
        type=click.Choice(ScanMode.ALL_MODES, case_sensitive=False),
        default=ScanMode.LOOKUP,
        show_default=True,
    )
    @click.option("--seed/--no-seed", default=False, help="Load demo data first.")
    def scan(mode: str, seed: bool) -> None:
        """Read codes from a keyboard-wedge scanner on stdin."""
        if seed:
            seed_demo_data()

        mode = next(choice for choice in ScanMode.ALL_MODES if choice.lower() == mode.lower())
        session = ScanSession(KeyboardWedgeScanner(sys.stdin), mode=mode)
        try:
            session.open()
        except DeviceAccessError as exc:
            raise click.ClickException(exc.message)

        click.echo(f"Scanning in {mode} mode. Send EOF to stop.")
        scanner = session.scanner
        try:
            while scanner.read_next():
                if session.pending_sku is not None:
                    click.echo(f"Scanned SKU: {session.pending_sku}")
                    quantity = click.prompt("Quantity (0 to scan again)", type=int, default=1)
                    if quantity <= 0:
                        session.scan_again()
                        continue
                    try:
                        session.confirm(quantity)
                    except StockroomError as exc:
                        click.secho(exc.message, fg="red")
                        session.scan_again()
                elif session.looked_up_item is not None:
                    item = session.looked_up_item
                    click.echo(
                        f"{item.sku}: {item.name} | quantity {item.quantity} | "
                        f"min {item.min_stock}{' | LOW STOCK' if item.is_low_stock else ''}"
                    )
                    session.looked_up_item = None
                _echo_message(session)
        finally:
            session.close()

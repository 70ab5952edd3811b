"""Comparison CLI commands."""

from typing import Any

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from horizon.cli.error_handler import handle_cli_error
from horizon.cli.formatting import (
    NOT_AVAILABLE,
    format_date_es,
    format_money,
    format_number,
    format_pct,
)
from horizon.cli.utils import async_command
from horizon.domain.models.comparison import ComparisonResult
from horizon.domain.models.feed_results import MarketSnapshot
from horizon.domain.models.settings import ComparisonSettings
from horizon.domain.services.comparison import compare
from horizon.domain.services.lecaps import available_tickers, search_tickers
from horizon.domain.services.numbers import parse_signed_number, parse_whole_number
from horizon.exceptions import HorizonError
from horizon.infrastructure.containers import get_container
from horizon.infrastructure.snapshot import fetch_market_snapshot

console = Console()


def _number(raw: str | None, option: str) -> float | None:
    if raw is None:
        return None
    value = parse_signed_number(raw)
    if value is None:
        raise typer.BadParameter(f"not a number: {raw!r}", param_hint=option)
    return value


def _whole(raw: str | None, option: str) -> int | None:
    if raw is None:
        return None
    value = parse_whole_number(raw)
    if value is None:
        raise typer.BadParameter(f"not a number: {raw!r}", param_hint=option)
    return value


async def load_snapshot(
    *, offers: bool = True, exchange_rate: bool = True, bonds: bool = True
) -> MarketSnapshot:
    """Fetch the requested feeds through the container's providers."""
    container = get_container()
    caucion_provider = container.caucion_provider() if offers else None
    exchange_rate_provider = container.exchange_rate_provider() if exchange_rate else None
    bond_provider = container.bond_provider() if bonds else None
    try:
        with console.status("[bold green]Fetching market data..."):
            return await fetch_market_snapshot(
                caucion_provider, exchange_rate_provider, bond_provider
            )
    finally:
        for provider in (caucion_provider, exchange_rate_provider, bond_provider):
            if provider is not None:
                await provider.close()


def build_settings(overrides: dict[str, Any], favorites: list[str] | None) -> ComparisonSettings:
    """Environment defaults with the command-line overrides applied."""
    base = get_container().settings().default_comparison()
    update = {key: value for key, value in overrides.items() if value is not None}

    fee_update = {
        name: update.pop(key)
        for key, name in (
            ("broker_pct", "broker_commission_pct"),
            ("iva_pct", "iva_pct"),
            ("other_costs_pct", "other_costs_pct"),
        )
        if key in update
    }
    lecap_broker_pct = update.pop("lecap_broker_pct", None)

    data = base.model_dump()
    data.update(update)
    data["caucion_fees"] = {**data["caucion_fees"], **fee_update}
    if lecap_broker_pct is not None:
        data["lecap_fees"] = {"broker_pct": lecap_broker_pct}
    if favorites:
        data["favorites"] = favorites
    return ComparisonSettings.model_validate(data)


def render_feed_errors(snapshot: MarketSnapshot) -> None:
    for source, error in sorted(snapshot.errors.items()):
        console.print(f"[yellow]⚠ {source}: {error}[/yellow]")


def render_offer_table(result: ComparisonResult) -> None:
    if not result.offer_table:
        console.print("[dim]No caución offers available.[/dim]")
        return
    usd = result.usd_quote
    table = Table(title="Best caución offer per day")
    table.add_column("Days", justify="right", style="cyan")
    table.add_column("Maturity")
    table.add_column("TNA", justify="right")
    table.add_column("Net caución", justify="right")
    table.add_column("Extra vs MM", justify="right")
    for row in result.offer_table:
        extra = format_money(row.extra_vs_money_market, usd)
        if row.is_hot:
            extra = f"[bold green]🔥 {extra}[/bold green]"
        table.add_row(
            str(row.days),
            format_date_es(row.maturity_date),
            format_pct(row.rate),
            format_money(row.caucion_net, usd),
            extra,
        )
    console.print(table)


def render_summary(settings: ComparisonSettings, result: ComparisonResult) -> None:
    usd = result.usd_quote
    worth = "[bold green]yes[/bold green]" if result.caucion_worth_it else "[red]no[/red]"
    lines = [
        f"Capital: {format_money(settings.capital, usd)}  Horizon: {settings.days} days",
        f"Caución TNA {format_pct(settings.caucion_rate_pct)}: "
        f"gross {format_money(result.caucion.gross, usd)}, "
        f"cost {format_money(result.caucion.cost, usd)}, "
        f"net {format_money(result.caucion.net, usd)}",
        f"Money market TNA {format_pct(settings.mm_rate_pct)}: "
        f"gain {format_money(result.money_market.gain, usd)}",
        f"Difference: {format_money(result.caucion_vs_money_market, usd)} "
        f"(minimum extra {format_money(result.extra_min_profit, usd)}), worth it: {worth}",
        f"Breakeven caución TNA: {format_pct(result.breakeven_rate_pct)}",
    ]
    if result.usd_rate:
        lines.append(f"Official USD sell rate: {format_number(result.usd_rate, 2)}")
    console.print(Panel("\n".join(lines), title="Caución vs money market", border_style="blue"))


def render_bonds(result: ComparisonResult) -> None:
    if not result.bonds:
        console.print("[dim]No LECAP data for the selected favorites.[/dim]")
        return
    usd = result.usd_quote
    best_ticker = result.best_bond.ticker if result.best_bond else None
    table = Table(title="Favorite LECAPs")
    table.add_column("Ticker", style="cyan")
    table.add_column("Maturity")
    table.add_column("Days", justify="right")
    table.add_column("Price", justify="right")
    table.add_column("Change", justify="right")
    table.add_column("Price + fee", justify="right")
    table.add_column("TNA", justify="right")
    table.add_column("TEM", justify="right")
    table.add_column("Units", justify="right")
    table.add_column("Gain", justify="right")
    table.add_column("Horizon gain", justify="right")
    for bond in result.bonds:
        ticker = f"⭐ {bond.ticker}" if bond.ticker == best_ticker else bond.ticker
        table.add_row(
            ticker,
            bond.maturity_label or NOT_AVAILABLE,
            NOT_AVAILABLE if bond.maturity_days is None else f"{bond.maturity_days:g}",
            format_number(bond.price),
            format_pct(bond.price_change_pct),
            format_number(bond.price_with_fee),
            format_pct(bond.annualized_rate_pct),
            format_pct(bond.periodic_rate_pct),
            str(bond.units_bought),
            format_money(bond.gain_amount, usd),
            (
                format_money(bond.horizon_adjusted_gain, usd)
                if bond.horizon_eligible
                else NOT_AVAILABLE
            ),
        )
    console.print(table)


def render_recommendation(result: ComparisonResult) -> None:
    rec = result.recommendation
    usd = result.usd_quote
    lines = [f"[bold]{rec.label}[/bold]"]
    if rec.detail:
        lines.append(rec.detail)
    lines.append(f"Caución extra over money market: {format_money(rec.caucion_extra, usd)}")
    if rec.lecap_extra is not None:
        lines.append(f"Best LECAP extra over money market: {format_money(rec.lecap_extra, usd)}")
    console.print(Panel("\n".join(lines), title="Recommendation", border_style="green"))


def register(app: typer.Typer) -> None:
    """Attach the comparison commands to ``app``."""

    @app.command("compare")
    @async_command
    async def compare_command(
        capital: str | None = typer.Option(None, "--capital", "-c", help="Capital in ARS"),
        days: str | None = typer.Option(None, "--days", "-d", help="Horizon in days"),
        mm_rate: str | None = typer.Option(None, "--mm-rate", help="Money market TNA (%)"),
        caucion_rate: str | None = typer.Option(None, "--caucion-rate", help="Caución TNA (%)"),
        min_profit: str | None = typer.Option(
            None, "--min-profit", help="Minimum extra profit in ARS (default: automatic)"
        ),
        broker_pct: str | None = typer.Option(None, "--broker-pct", help="Caución commission (%)"),
        iva_pct: str | None = typer.Option(None, "--iva-pct", help="VAT on the commission (%)"),
        other_costs_pct: str | None = typer.Option(
            None, "--other-costs-pct", help="Other costs (%)"
        ),
        lecap_broker_pct: str | None = typer.Option(
            None, "--lecap-broker-pct", help="LECAP purchase commission (%)"
        ),
        favorite: list[str] | None = typer.Option(
            None, "--favorite", "-f", help="Favorite LECAP ticker (repeatable)"
        ),
        usd: bool = typer.Option(False, "--usd", help="Show amounts in USD at the official rate"),
        base_days: int | None = typer.Option(None, "--base-days", help="Year length: 360 or 365"),
        use_offer: int | None = typer.Option(
            None, "--use-offer", help="Adopt the best market offer for this many days"
        ),
        offline: bool = typer.Option(False, "--offline", help="Skip the market feeds"),
    ) -> None:
        """Compare caución, money market and favorite LECAPs."""
        try:
            overrides = {
                "capital": _whole(capital, "--capital"),
                "days": _whole(days, "--days"),
                "mm_rate_pct": _number(mm_rate, "--mm-rate"),
                "caucion_rate_pct": _number(caucion_rate, "--caucion-rate"),
                "extra_min_profit": _whole(min_profit, "--min-profit"),
                "broker_pct": _number(broker_pct, "--broker-pct"),
                "iva_pct": _number(iva_pct, "--iva-pct"),
                "other_costs_pct": _number(other_costs_pct, "--other-costs-pct"),
                "lecap_broker_pct": _number(lecap_broker_pct, "--lecap-broker-pct"),
                "base_days": base_days,
                "show_usd": usd or None,
            }
            settings = build_settings(overrides, favorite)
            snapshot = MarketSnapshot() if offline else await load_snapshot()

            if use_offer is not None:
                result = compare(settings, snapshot)
                offer = result.best_offers.get(use_offer)
                if offer is None or offer.settlement_rate is None:
                    raise HorizonError(f"No market offer quoted for {use_offer} days")
                settings = settings.with_market_pick(use_offer, offer.settlement_rate)

            result = compare(settings, snapshot)
            render_feed_errors(snapshot)
            render_summary(settings, result)
            render_offer_table(result)
            render_bonds(result)
            render_recommendation(result)
        except typer.BadParameter:
            raise
        except Exception as e:
            handle_cli_error(e, {"command": "compare"})

    @app.command("offers")
    @async_command
    async def offers_command(
        currency: str = typer.Option("ARS", "--currency", help="Caución denomination"),
    ) -> None:
        """Show the best caución offer per day for the next 30 days."""
        try:
            settings = get_container().settings().default_comparison()
            snapshot = await load_snapshot(exchange_rate=False, bonds=False)
            render_feed_errors(snapshot)
            render_offer_table(compare(settings, snapshot, currency=currency.upper()))
        except Exception as e:
            handle_cli_error(e, {"command": "offers"})

    @app.command("tickers")
    @async_command
    async def tickers_command(
        query: str = typer.Argument("", help="Case-insensitive filter"),
    ) -> None:
        """List LECAP tickers currently quoted."""
        try:
            snapshot = await load_snapshot(offers=False, exchange_rate=False)
            render_feed_errors(snapshot)
            tickers = search_tickers(available_tickers(snapshot.bond_rows), query)
            if not tickers:
                console.print("[dim]No tickers found.[/dim]")
                return
            for ticker in tickers:
                console.print(ticker)
        except Exception as e:
            handle_cli_error(e, {"command": "tickers"})

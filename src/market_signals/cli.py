"""Command-line interface for Market Signals."""

import json
import logging
from pathlib import Path

import click
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .analysis.prediction import build_prediction_request
from .analysis.stock_scoring import SORT_FIELDS, filter_stocks, rank_stocks, score_stock
from .analyzer import analyze_series
from .config import get_config
from .data.provider import RandomWalkProvider, load_csv, save_csv
from .models import (
    AnalysisReport,
    Instrument,
    InvestmentCategory,
    PriceSeries,
    RiskLevel,
    ScoredStock,
    Signal,
    StockFilter,
    StockQuote,
    Timeframe,
    ValuationLabel,
    WeightConfig,
)

console = Console()


def setup_logging(verbose: bool):
    """Configure logging based on verbosity."""
    config = get_config()
    logging.basicConfig(level=config.log_level.upper(), format=config.log_format)
    level = logging.DEBUG if verbose else getattr(logging, config.log_level.upper(), logging.WARNING)
    logging.getLogger("market_signals").setLevel(level)


def format_signal(signal: Signal) -> Text:
    """Format signal with color coding."""
    colors = {
        Signal.STRONG_BUY: "bold green",
        Signal.BUY: "green",
        Signal.NEUTRAL: "yellow",
        Signal.SELL: "red",
        Signal.STRONG_SELL: "bold red",
    }
    return Text(signal.value, style=colors.get(signal, "white"))


def format_score(score: int) -> Text:
    """Format 0-100 score with color coding."""
    if score >= 70:
        color = "green"
    elif score >= 55:
        color = "yellow"
    elif score >= 45:
        color = "white"
    else:
        color = "red"
    return Text(str(score), style=f"bold {color}")


def format_risk(level: RiskLevel) -> Text:
    colors = {RiskLevel.LOW: "green", RiskLevel.MEDIUM: "yellow", RiskLevel.HIGH: "red"}
    return Text(level.value, style=colors[level])


def load_series(
    instrument: str,
    csv_path: str | None,
    seed: int | None,
    days: int | None,
) -> PriceSeries:
    """Load bars from CSV or generate them with the random-walk provider."""
    if csv_path:
        return load_csv(csv_path, instrument)

    config = get_config()
    provider = RandomWalkProvider(
        seed=seed if seed is not None else config.random_seed,
        days=days if days is not None else config.history_days,
    )
    return provider.get_series(instrument)


def display_report(report: AnalysisReport, reason_count: int = 4):
    """Display an analysis report in rich format."""
    quote = report.quote
    change_color = "green" if quote.change >= 0 else "red"

    header = Text()
    header.append(report.instrument, style="bold white")
    header.append(f"  {quote.price:,.2f} ", style="bold")
    header.append(f"({quote.change:+,.2f} / {quote.change_percent:+.2f}%)", style=change_color)
    if report.rescaled:
        header.append("  live", style="cyan")

    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column("Label", style="dim")
    table.add_column("Value")

    ind = report.indicators
    rsi_color = "red" if ind.rsi > 70 else "green" if ind.rsi < 30 else "white"
    table.add_row("Signal", format_signal(report.signal.signal))
    table.add_row("Score", format_score(report.signal.score))
    table.add_row("RSI (14)", Text(f"{ind.rsi:.1f}", style=rsi_color))
    table.add_row(
        "MACD",
        f"{ind.macd.macd_line:.2f} / {ind.macd.signal_line:.2f} (hist {ind.macd.histogram:+.2f})",
    )
    table.add_row("SMA 20/50/200", f"{ind.sma20:,.2f} / {ind.sma50:,.2f} / {ind.sma200:,.2f}")
    table.add_row("EMA 12/26", f"{ind.ema12:,.2f} / {ind.ema26:,.2f}")
    table.add_row(
        "Bollinger",
        f"{ind.bollinger.lower:,.2f} / {ind.bollinger.middle:,.2f} / {ind.bollinger.upper:,.2f}",
    )
    table.add_row("ATR (14)", f"{ind.atr:,.2f}")
    table.add_row("ADX (14)", f"{ind.adx:.1f}")
    table.add_row("Support", ", ".join(f"{s:,.2f}" for s in report.key_levels.support))
    table.add_row("Resistance", ", ".join(f"{r:,.2f}" for r in report.key_levels.resistance))

    console.print(Panel(table, title=header, border_style="blue"))

    reasons = report.signal.top_reasons(reason_count)
    if reasons:
        console.print("[bold]Reasons:[/bold]")
        for reason in reasons:
            console.print(f"  - {reason}")


def display_stocks(stocks: list[ScoredStock]):
    """Display scored stocks in a table."""
    table = Table(title="Stock Scores")
    table.add_column("Ticker", style="bold")
    table.add_column("Sector")
    table.add_column("Price", justify="right")
    table.add_column("Change %", justify="right")
    table.add_column("Fund.", justify="right")
    table.add_column("Tech.", justify="right")
    table.add_column("Overall", justify="right")
    table.add_column("Valuation")
    table.add_column("Category")
    table.add_column("Risk")

    for s in stocks:
        change_style = "green" if s.change_percent >= 0 else "red"
        table.add_row(
            s.ticker,
            s.sector,
            f"{s.price:,.2f}",
            Text(f"{s.change_percent:+.2f}%", style=change_style),
            str(s.fundamental_score),
            str(s.technical_score),
            format_score(s.overall_score),
            s.valuation_label.value,
            s.investment_category.value,
            format_risk(s.risk_level),
        )

    console.print(table)


def parse_weights(raw: str | None) -> WeightConfig | None:
    """Parse 'safety,growth,value,momentum' into a WeightConfig."""
    if raw is None:
        return None
    parts = [p.strip() for p in raw.split(",")]
    if len(parts) != 4:
        raise click.BadParameter("expected four comma-separated numbers", param_hint="--weights")
    try:
        safety, growth, value, momentum = (float(p) for p in parts)
        return WeightConfig(safety=safety, growth=growth, value=value, momentum=momentum)
    except ValueError as e:
        raise click.BadParameter(f"weights must be numbers from 0 to 100 ({e})", param_hint="--weights") from e


def load_stock_quotes(path: str) -> list[StockQuote]:
    """Load a JSON array (or {"stocks": [...]}) of stock quotes."""
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)

    if isinstance(data, dict):
        data = data.get("stocks", [])

    if not isinstance(data, list):
        raise ValueError("JSON must contain an array of stock objects")

    return [StockQuote.model_validate(item) for item in data]


instrument_option = click.option(
    "--instrument",
    "-i",
    default=None,
    help="Instrument name (XAU/USD, GOLD_FUTURES, ANTAM or any CSV label)",
)
csv_option = click.option(
    "--csv", "csv_path", type=click.Path(exists=True, dir_okay=False), help="Load bars from CSV"
)
seed_option = click.option("--seed", type=int, default=None, help="Random-walk seed")
days_option = click.option("--days", type=int, default=None, help="Random-walk history length")


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Enable verbose logging")
@click.pass_context
def main(ctx, verbose):
    """Market Signals - technical analysis for gold and equities."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    setup_logging(verbose)


@main.command()
@instrument_option
@csv_option
@seed_option
@days_option
@click.option("--live-price", type=float, default=None, help="Rescale history to this live quote")
@click.option("--reasons", "reason_count", default=4, show_default=True, help="Reasons to show")
@click.option("--json", "json_output", is_flag=True, help="Output as JSON")
@click.option("--export-csv", type=click.Path(dir_okay=False), help="Also write the loaded bars to CSV")
@click.pass_context
def analyze(
    ctx,
    instrument: str | None,
    csv_path: str | None,
    seed: int | None,
    days: int | None,
    live_price: float | None,
    reason_count: int,
    json_output: bool,
    export_csv: str | None,
):
    """Compute indicators, signal and key levels for an instrument."""
    name = instrument or get_config().default_instrument
    try:
        series = load_series(name, csv_path, seed, days)
        report = analyze_series(series, live_price=live_price)
    except (ValueError, KeyError, FileNotFoundError) as e:
        console.print(f"[red]Error:[/red] {e}")
        ctx.exit(1)

    if export_csv:
        save_csv(series, export_csv)
        if not json_output:
            console.print(f"[green]Bars saved to:[/green] {export_csv}")

    if json_output:
        console.print_json(report.model_dump_json(by_alias=True, indent=2))
    else:
        display_report(report, reason_count)


@main.command("predict-payload")
@instrument_option
@csv_option
@seed_option
@days_option
@click.option(
    "--timeframe",
    type=click.Choice([t.value for t in Timeframe]),
    default=Timeframe.ONE_WEEK.value,
    show_default=True,
)
@click.option("--output", "-o", type=click.Path(), help="Write payload to file")
@click.pass_context
def predict_payload(
    ctx,
    instrument: str | None,
    csv_path: str | None,
    seed: int | None,
    days: int | None,
    timeframe: str,
    output: str | None,
):
    """Print the prediction service request for an instrument."""
    name = instrument or get_config().default_instrument
    try:
        series = load_series(name, csv_path, seed, days)
        request = build_prediction_request(name, series, timeframe)
    except (ValueError, KeyError, FileNotFoundError) as e:
        console.print(f"[red]Error:[/red] {e}")
        ctx.exit(1)

    payload = request.model_dump_json(by_alias=True, indent=2)
    if output:
        Path(output).write_text(payload)
        console.print(f"[green]Payload saved to:[/green] {output}")
    else:
        console.print_json(payload)


@main.command()
@click.argument("path", type=click.Path(exists=True, dir_okay=False))
@click.option("--sector", default=None, help="Only this sector")
@click.option("--risk", type=click.Choice([r.value for r in RiskLevel]), default=None)
@click.option("--valuation", type=click.Choice([v.value for v in ValuationLabel]), default=None)
@click.option("--category", type=click.Choice([c.value for c in InvestmentCategory]), default=None)
@click.option("--min-score", type=click.IntRange(0, 100), default=0, show_default=True)
@click.option("--weights", default=None, help="safety,growth,value,momentum (0-100 each)")
@click.option(
    "--sort",
    "sort_by",
    type=click.Choice(SORT_FIELDS),
    default="overall_score",
    show_default=True,
    help="Column to rank by",
)
@click.option("--asc", "ascending", is_flag=True, help="Sort ascending (default descending)")
@click.option("--json", "json_output", is_flag=True, help="Output as JSON")
@click.pass_context
def stocks(
    ctx,
    path: str,
    sector: str | None,
    risk: str | None,
    valuation: str | None,
    category: str | None,
    min_score: int,
    weights: str | None,
    sort_by: str,
    ascending: bool,
    json_output: bool,
):
    """Score, filter and rank stocks from a JSON file."""
    weight_config = parse_weights(weights)
    try:
        quotes = load_stock_quotes(path)
    except ValueError as e:
        console.print(f"[red]Error:[/red] {e}")
        ctx.exit(1)

    scored = [score_stock(q, weight_config) for q in quotes]
    criteria = StockFilter(
        sector=sector,
        valuation_label=ValuationLabel(valuation) if valuation else None,
        investment_category=InvestmentCategory(category) if category else None,
        risk_level=RiskLevel(risk) if risk else None,
        min_score=min_score,
    )
    ranked = rank_stocks(filter_stocks(scored, criteria), sort_by, descending=not ascending)

    if json_output:
        console.print_json(json.dumps([s.model_dump(mode="json", by_alias=True) for s in ranked]))
    else:
        display_stocks(ranked)


@main.command()
def instruments():
    """List built-in instruments."""
    for instrument in Instrument:
        console.print(instrument.value)


if __name__ == "__main__":
    main()

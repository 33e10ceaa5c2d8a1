"""Console output for realtime events.

Uses rich library for one colored line per event.
"""

from typing import Any

from rich.console import Console
from rich.text import Text

from bitmex_realtime import Event, EventKind

console = Console()

_SIDE_STYLES = {"Buy": "green", "Sell": "red"}


def _fmt(value: Any) -> str:
    if value is None:
        return "-"
    if isinstance(value, float):
        return f"{value:g}"
    return str(value)


def _summarize_row(kind: EventKind, row: Any) -> Text:
    """Short description of one row, by table kind."""
    if kind in (EventKind.TRADE, EventKind.LIQUIDATION):
        size = row.size if kind is EventKind.TRADE else row.leaves_qty
        return Text(
            f"{row.side or '?'} {_fmt(size)} @ {_fmt(row.price)}",
            style=_SIDE_STYLES.get(row.side, ""),
        )
    if kind is EventKind.QUOTE:
        return Text(
            f"{_fmt(row.bid_size)} {_fmt(row.bid_price)} / {_fmt(row.ask_price)} {_fmt(row.ask_size)}"
        )
    if kind is EventKind.ORDERBOOK:
        best_bid = row.bids[0].price if row.bids else None
        best_ask = row.asks[0].price if row.asks else None
        return Text(f"bid {_fmt(best_bid)} / ask {_fmt(best_ask)} ({len(row.bids)}x{len(row.asks)})")
    if kind is EventKind.ORDERBOOK_L2:
        return Text(f"{row.side} {_fmt(row.size)} @ {_fmt(row.price)}", style=_SIDE_STYLES.get(row.side, ""))
    if kind is EventKind.ORDER:
        return Text(f"{row.order_id} {row.ord_status or ''}".rstrip())
    if kind is EventKind.EXECUTION:
        return Text(f"{row.exec_id} {row.exec_type or ''}".rstrip())
    return Text(type(row).__name__, style="dim")


def render_event(event: Event) -> Text:
    """Render an event as one line of rich text."""
    line = Text()
    line.append(f"{event.kind.value:<20}", style="bold cyan")
    line.append(f" {event.symbol:<10}")
    line.append(f" {event.action or '-':<8}", style="magenta")

    if not event.kind.is_data:
        line.append(f" {event.error}", style="yellow")
        return line

    if not event.data:
        line.append(" (no rows)", style="dim")
        return line

    line.append(" ")
    line.append_text(_summarize_row(event.kind, event.data[0]))
    if len(event.data) > 1:
        line.append(f" (+{len(event.data) - 1} rows)", style="dim")
    return line


def print_event(event: Event) -> None:
    console.print(render_event(event))

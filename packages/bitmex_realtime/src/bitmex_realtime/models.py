"""Payload shapes for the realtime tables.

Each table row decodes into one of these pydantic models. Python attribute
names are snake_case; the wire names stay BitMEX camelCase (with the ID
suffixes spelled the way the API spells them). Unknown fields are kept as
extras so new API columns never break decoding.

Update and delete actions only carry the table keys plus changed columns,
so everything except the keys is optional.

Reference: https://www.bitmex.com/api/explorer/
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class Payload(BaseModel):
    """Base for all table rows."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="allow",
        frozen=True,
    )


# ---------------------------------------------------------------------------
# Public tables
# ---------------------------------------------------------------------------


class Announcement(Payload):
    id: int
    link: Optional[str] = None
    title: Optional[str] = None
    content: Optional[str] = None
    date: Optional[datetime] = None


class Chat(Payload):
    id: Optional[int] = None
    date: Optional[datetime] = None
    user: Optional[str] = None
    message: Optional[str] = None
    html: Optional[str] = None
    from_bot: Optional[bool] = None
    channel_id: Optional[int] = Field(default=None, alias="channelID")


class ConnectedUsers(Payload):
    users: Optional[int] = None
    bots: Optional[int] = None


class Funding(Payload):
    timestamp: Optional[datetime] = None
    symbol: str
    funding_interval: Optional[datetime] = None
    funding_rate: Optional[float] = None
    funding_rate_daily: Optional[float] = None


class Instrument(Payload):
    symbol: str
    root_symbol: Optional[str] = None
    state: Optional[str] = None
    typ: Optional[str] = None
    listing: Optional[datetime] = None
    expiry: Optional[datetime] = None
    underlying: Optional[str] = None
    quote_currency: Optional[str] = None
    tick_size: Optional[float] = None
    lot_size: Optional[float] = None
    multiplier: Optional[float] = None
    maker_fee: Optional[float] = None
    taker_fee: Optional[float] = None
    funding_rate: Optional[float] = None
    indicative_funding_rate: Optional[float] = None
    funding_timestamp: Optional[datetime] = None
    last_price: Optional[float] = None
    bid_price: Optional[float] = None
    ask_price: Optional[float] = None
    mid_price: Optional[float] = None
    mark_price: Optional[float] = None
    fair_price: Optional[float] = None
    index_price: Optional[float] = None
    open_interest: Optional[float] = None
    open_value: Optional[float] = None
    volume: Optional[float] = None
    volume24h: Optional[float] = None
    turnover24h: Optional[float] = None
    timestamp: Optional[datetime] = None


class Insurance(Payload):
    currency: str
    timestamp: Optional[datetime] = None
    wallet_balance: Optional[float] = None


class Liquidation(Payload):
    order_id: str = Field(alias="orderID")
    symbol: Optional[str] = None
    side: Optional[str] = None
    price: Optional[float] = None
    leaves_qty: Optional[float] = None


class Settlement(Payload):
    timestamp: Optional[datetime] = None
    symbol: str
    settlement_type: Optional[str] = None
    settled_price: Optional[float] = None
    option_strike_price: Optional[float] = None
    option_underlying_price: Optional[float] = None
    bankrupt: Optional[float] = None
    tax_base: Optional[float] = None
    tax_rate: Optional[float] = None


class Notification(Payload):
    id: Optional[int] = None
    date: Optional[datetime] = None
    title: Optional[str] = None
    body: Optional[str] = None
    ttl: Optional[int] = None
    type: Optional[str] = None
    close_button: Optional[bool] = None
    persist: Optional[bool] = None
    wait_for_visibility: Optional[bool] = None
    sound: Optional[str] = None


class OrderBookL2(Payload):
    """One price level of the incremental level-2 book, keyed by (symbol, id, side)."""

    symbol: str
    id: int
    side: str
    size: Optional[float] = None
    price: Optional[float] = None
    timestamp: Optional[datetime] = None


class Quote(Payload):
    timestamp: Optional[datetime] = None
    symbol: str
    bid_size: Optional[float] = None
    bid_price: Optional[float] = None
    ask_price: Optional[float] = None
    ask_size: Optional[float] = None


class Trade(Payload):
    timestamp: Optional[datetime] = None
    symbol: str
    side: Optional[str] = None
    size: Optional[float] = None
    price: Optional[float] = None
    tick_direction: Optional[str] = None
    trd_match_id: Optional[str] = Field(default=None, alias="trdMatchID")
    gross_value: Optional[float] = None
    home_notional: Optional[float] = None
    foreign_notional: Optional[float] = None


class TradeBin(Payload):
    timestamp: Optional[datetime] = None
    symbol: str
    open: Optional[float] = None
    high: Optional[float] = None
    low: Optional[float] = None
    close: Optional[float] = None
    trades: Optional[int] = None
    volume: Optional[float] = None
    vwap: Optional[float] = None
    last_size: Optional[float] = None
    turnover: Optional[float] = None
    home_notional: Optional[float] = None
    foreign_notional: Optional[float] = None


# ---------------------------------------------------------------------------
# Private tables (require authentication)
# ---------------------------------------------------------------------------


class Affiliate(Payload):
    account: int
    currency: str
    prev_payout: Optional[float] = None
    prev_turnover: Optional[float] = None
    prev_comm: Optional[float] = None
    prev_timestamp: Optional[datetime] = None
    exec_turnover: Optional[float] = None
    exec_comm: Optional[float] = None
    total_referrals: Optional[int] = None
    total_turnover: Optional[float] = None
    total_comm: Optional[float] = None
    payout_pcnt: Optional[float] = None
    pending_payout: Optional[float] = None
    timestamp: Optional[datetime] = None
    referrer_account: Optional[float] = None


class Execution(Payload):
    exec_id: str = Field(alias="execID")
    order_id: Optional[str] = Field(default=None, alias="orderID")
    cl_ord_id: Optional[str] = Field(default=None, alias="clOrdID")
    account: Optional[int] = None
    symbol: Optional[str] = None
    side: Optional[str] = None
    last_qty: Optional[float] = None
    last_px: Optional[float] = None
    order_qty: Optional[float] = None
    price: Optional[float] = None
    exec_type: Optional[str] = None
    ord_type: Optional[str] = None
    ord_status: Optional[str] = None
    leaves_qty: Optional[float] = None
    cum_qty: Optional[float] = None
    avg_px: Optional[float] = None
    commission: Optional[float] = None
    exec_comm: Optional[float] = None
    text: Optional[str] = None
    transact_time: Optional[datetime] = None
    timestamp: Optional[datetime] = None


class Order(Payload):
    order_id: str = Field(alias="orderID")
    cl_ord_id: Optional[str] = Field(default=None, alias="clOrdID")
    account: Optional[int] = None
    symbol: Optional[str] = None
    side: Optional[str] = None
    order_qty: Optional[float] = None
    price: Optional[float] = None
    stop_px: Optional[float] = None
    ord_type: Optional[str] = None
    time_in_force: Optional[str] = None
    exec_inst: Optional[str] = None
    ord_status: Optional[str] = None
    working_indicator: Optional[bool] = None
    leaves_qty: Optional[float] = None
    cum_qty: Optional[float] = None
    avg_px: Optional[float] = None
    text: Optional[str] = None
    transact_time: Optional[datetime] = None
    timestamp: Optional[datetime] = None


class Margin(Payload):
    account: int
    currency: str
    amount: Optional[float] = None
    wallet_balance: Optional[float] = None
    margin_balance: Optional[float] = None
    available_margin: Optional[float] = None
    withdrawable_margin: Optional[float] = None
    unrealised_pnl: Optional[float] = None
    realised_pnl: Optional[float] = None
    margin_leverage: Optional[float] = None
    timestamp: Optional[datetime] = None


class Position(Payload):
    account: int
    symbol: str
    currency: Optional[str] = None
    leverage: Optional[float] = None
    cross_margin: Optional[bool] = None
    current_qty: Optional[float] = None
    avg_entry_price: Optional[float] = None
    mark_price: Optional[float] = None
    liquidation_price: Optional[float] = None
    bankrupt_price: Optional[float] = None
    unrealised_pnl: Optional[float] = None
    realised_pnl: Optional[float] = None
    maint_margin: Optional[float] = None
    is_open: Optional[bool] = None
    timestamp: Optional[datetime] = None


class Transaction(Payload):
    transact_id: str = Field(alias="transactID")
    account: Optional[int] = None
    currency: Optional[str] = None
    transact_type: Optional[str] = None
    amount: Optional[float] = None
    fee: Optional[float] = None
    transact_status: Optional[str] = None
    address: Optional[str] = None
    tx: Optional[str] = None
    text: Optional[str] = None
    transact_time: Optional[datetime] = None
    timestamp: Optional[datetime] = None


class Wallet(Payload):
    account: int
    currency: str
    amount: Optional[float] = None
    deposited: Optional[float] = None
    withdrawn: Optional[float] = None
    transfer_in: Optional[float] = None
    transfer_out: Optional[float] = None
    pending_credit: Optional[float] = None
    pending_debit: Optional[float] = None
    addr: Optional[str] = None
    timestamp: Optional[datetime] = None

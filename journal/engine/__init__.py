"""Trade metrics engine: pure functions over trade records."""

from journal.engine.analytics import TradeAnalytics, aggregate, profit_factor
from journal.engine.equity import EquityPoint, equity_curve
from journal.engine.export import export_filename, trades_to_csv
from journal.engine.metrics import (
    DerivedFields,
    compute_pip_distance,
    compute_risk_reward,
    derive_fields,
    pip_unit,
    signed_pips,
)

__all__ = [
    "DerivedFields",
    "EquityPoint",
    "TradeAnalytics",
    "aggregate",
    "compute_pip_distance",
    "compute_risk_reward",
    "derive_fields",
    "equity_curve",
    "export_filename",
    "pip_unit",
    "profit_factor",
    "signed_pips",
    "trades_to_csv",
]

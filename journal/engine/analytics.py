"""Summary statistics over a collection of trades."""

from dataclasses import asdict, dataclass
from typing import Iterable

from journal.models.trade import Outcome, Side
from journal.utils.constants import PROFIT_FACTOR_NO_LOSSES


@dataclass(frozen=True)
class TradeAnalytics:
    total_trades: int = 0
    winning_trades: int = 0
    losing_trades: int = 0
    buy_trades: int = 0
    sell_trades: int = 0
    win_rate: float = 0.0
    avg_risk_reward: float = 0.0
    profit_factor: float = 0.0
    total_pips: float = 0.0

    def rounded(self) -> "TradeAnalytics":
        """Copy with ratios rounded for display."""
        return TradeAnalytics(
            total_trades=self.total_trades,
            winning_trades=self.winning_trades,
            losing_trades=self.losing_trades,
            buy_trades=self.buy_trades,
            sell_trades=self.sell_trades,
            win_rate=round(self.win_rate, 1),
            avg_risk_reward=round(self.avg_risk_reward, 2),
            profit_factor=round(self.profit_factor, 2),
            total_pips=round(self.total_pips, 1),
        )

    def to_dict(self) -> dict:
        return asdict(self)


def profit_factor(win_pips: float, loss_pips: float) -> float:
    """Gross winning pips over gross losing pips.

    With no losing pips the ratio is undefined; it is reported as 999 when
    there were winning pips and 0 otherwise.
    """
    if loss_pips > 0:
        return win_pips / loss_pips
    if win_pips > 0:
        return PROFIT_FACTOR_NO_LOSSES
    return 0.0


def aggregate(trades: Iterable) -> TradeAnalytics:
    """Reduce trades to summary statistics. Input order does not matter.

    Trades are any objects exposing ``side``, ``outcome``, ``pips`` and
    ``risk_reward``; a missing ``pips`` counts as zero.
    """
    trades = list(trades)
    total = len(trades)

    winning = [t for t in trades if t.outcome == Outcome.WIN]
    losing = [t for t in trades if t.outcome == Outcome.LOSS]
    buy_count = sum(1 for t in trades if t.side == Side.BUY)
    sell_count = sum(1 for t in trades if t.side == Side.SELL)

    win_rate = len(winning) / total * 100 if total > 0 else 0.0
    avg_rr = sum(t.risk_reward for t in trades) / total if total > 0 else 0.0

    win_pips = sum((t.pips or 0 for t in winning), 0.0)
    loss_pips = abs(sum((t.pips or 0 for t in losing), 0.0))

    return TradeAnalytics(
        total_trades=total,
        winning_trades=len(winning),
        losing_trades=len(losing),
        buy_trades=buy_count,
        sell_trades=sell_count,
        win_rate=win_rate,
        avg_risk_reward=avg_rr,
        profit_factor=profit_factor(win_pips, loss_pips),
        total_pips=sum((t.pips or 0 for t in trades), 0.0),
    )

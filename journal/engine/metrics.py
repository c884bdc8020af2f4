"""Per-trade derived fields: risk:reward ratio and pip distance.

All functions are total over finite floats and never raise. Degenerate stop
placement (zero or negative risk) yields a ratio of 0.
"""

from dataclasses import dataclass

from journal.models.trade import Outcome, Side
from journal.utils.constants import JPY_MARKER, JPY_PIP_UNIT, PIP_UNIT


@dataclass(frozen=True)
class DerivedFields:
    risk_reward: float
    pips: float


def compute_risk_reward(entry: float, stop_loss: float, take_profit: float, side: Side | str) -> float:
    """Reward-to-risk ratio at entry; 0 when the stop is not on the losing side."""
    if side == Side.BUY:
        risk = entry - stop_loss
        reward = take_profit - entry
    else:
        risk = stop_loss - entry
        reward = entry - take_profit
    return reward / risk if risk > 0 else 0.0


def pip_unit(pair: str) -> float:
    # Case-sensitive: callers normalise pair symbols to upper case
    return JPY_PIP_UNIT if JPY_MARKER in pair else PIP_UNIT


def compute_pip_distance(entry: float, exit: float, pair: str) -> float:
    """Unsigned distance between two prices, in pips of ``pair``."""
    return abs(exit - entry) / pip_unit(pair)


def signed_pips(
    entry: float,
    stop_loss: float,
    take_profit: float,
    outcome: Outcome | str,
    pair: str,
) -> float:
    """Pips realised by a trade: distance to target on a win, minus distance to stop on a loss."""
    if outcome == Outcome.WIN:
        return compute_pip_distance(entry, take_profit, pair)
    return -compute_pip_distance(entry, stop_loss, pair)


def derive_fields(
    entry: float,
    stop_loss: float,
    take_profit: float,
    side: Side | str,
    outcome: Outcome | str,
    pair: str,
) -> DerivedFields:
    """Compute every stored derived field for a trade. Run on each write."""
    return DerivedFields(
        risk_reward=compute_risk_reward(entry, stop_loss, take_profit, side),
        pips=signed_pips(entry, stop_loss, take_profit, outcome, pair),
    )

"""Scheduled drawdown from investment into cash."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from .months import month_index
from .schema import AssetCategory, WithdrawalPolicy


@dataclass(slots=True)
class WithdrawalEvent:
    month: date
    amount: float
    requested: float


def withdrawal_due(policy: WithdrawalPolicy | None, current: date) -> bool:
    if policy is None or not policy.enabled:
        return False
    return month_index(current) >= month_index(policy.start_date)


def withdrawal_transfer(
    *,
    balances: dict[AssetCategory, float],
    policy: WithdrawalPolicy | None,
    current: date,
) -> tuple[dict[AssetCategory, float], WithdrawalEvent | None]:
    """Move the policy's monthly amount from investment to cash.

    The transfer is capped at the available (non-negative) investment balance,
    so drawdown alone never pushes investment below zero. Returns new balances
    and the transfer event, or the unchanged balances and None when no
    withdrawal applies this month.
    """
    if not withdrawal_due(policy, current):
        return balances, None

    requested = max(0.0, policy.monthly_amount)
    amount = min(requested, max(0.0, balances["investment"]))
    updated = dict(balances)
    updated["investment"] -= amount
    updated["cash"] += amount
    return updated, WithdrawalEvent(month=current, amount=amount, requested=requested)

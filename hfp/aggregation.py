"""Reduce raw household records into the projection's starting inputs."""

from __future__ import annotations

import logging
from typing import Iterable

from .schema import ASSET_CATEGORIES, Asset, AssetCategory, AssetHistoryRecord, Transaction

logger = logging.getLogger(__name__)


def empty_balances() -> dict[AssetCategory, float]:
    return {category: 0.0 for category in ASSET_CATEGORIES}


def _latest_value(asset: Asset, history: list[AssetHistoryRecord]) -> float:
    dated: list[AssetHistoryRecord] = []
    for record in history:
        if record.date is None:
            logger.debug("skipping undated history record for asset %s", asset.id)
            continue
        dated.append(record)
    if not dated:
        return 0.0
    # Stable sort keeps the first listed record on equal dates.
    dated.sort(key=lambda record: record.date, reverse=True)
    return dated[0].value


def current_asset_values(
    assets: Iterable[Asset],
    asset_history: Iterable[AssetHistoryRecord],
) -> dict[AssetCategory, float]:
    """Sum each asset's current value by category.

    An asset's value is its latest dated history record. Insurance assets with a
    coverage amount use that amount instead, since their value is not tracked
    through history.
    """
    history_by_asset: dict[str, list[AssetHistoryRecord]] = {}
    for record in asset_history:
        history_by_asset.setdefault(record.asset_id, []).append(record)

    values = empty_balances()
    for asset in assets:
        if asset.category == "insurance" and asset.coverage_amount is not None:
            value = asset.coverage_amount
        else:
            value = _latest_value(asset, history_by_asset.get(asset.id, []))
        values[asset.category] += value
    return values


def average_amount(transactions: Iterable[Transaction]) -> float:
    """Mean amount per transaction; 0.0 when there are none."""
    amounts = [item.amount for item in transactions]
    if not amounts:
        return 0.0
    return sum(amounts) / len(amounts)

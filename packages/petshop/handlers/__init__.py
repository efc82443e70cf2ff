"""
Phase handlers.

Currently only the shop phase; battles are resolved by ``combat_engine``.
"""

from .shop_handler import (
    ShopAction,
    ShopState,
    ShopOutcome,
    enumerate_shop_outcomes,
    run_random_turn,
)

__all__ = [
    "ShopAction",
    "ShopState",
    "ShopOutcome",
    "enumerate_shop_outcomes",
    "run_random_turn",
]

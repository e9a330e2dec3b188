"""Services wiring the swap engine to its ledgers."""

from tokenswap.services.deployment import deploy_swap, register_pair

__all__ = [
    "deploy_swap",
    "register_pair",
]

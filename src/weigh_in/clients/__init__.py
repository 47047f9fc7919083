"""API clients for weigh-in."""

from .gateway import GatewayError, InvalidIdentifierError, WeighInClient

__all__ = [
    "GatewayError",
    "InvalidIdentifierError",
    "WeighInClient",
]

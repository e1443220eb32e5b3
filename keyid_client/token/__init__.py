"""Security token exchange."""

from .types import SecurityToken, TokenGrant, TokenScope

__all__ = ["SecurityToken", "TokenGrant", "TokenScope", "TokenBroker"]


def __getattr__(name: str):
    if name == "TokenBroker":
        from .broker import TokenBroker

        return TokenBroker
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")

from .types import Bar, Position, TradeType
from .series import PriceSeries

__all__ = ["Bar", "Position", "TradeType", "PriceSeries"]

"""Domain models for Horizon."""

from horizon.domain.models.base import ValueObject
from horizon.domain.models.comparison import (
    CaucionProfit,
    ComparisonResult,
    CompoundProfit,
    DerivedBondMetrics,
    InstrumentKind,
    OfferBucketView,
    Recommendation,
)
from horizon.domain.models.feed_results import (
    BondFeed,
    ExchangeRateFeed,
    FeedResult,
    MarketSnapshot,
    OfferFeed,
)
from horizon.domain.models.fees import FeeConfig, LecapFeeConfig, Position
from horizon.domain.models.market import (
    TICKER_KEY,
    BondRow,
    ExchangeRateQuote,
    MarketOffer,
    PriceQuote,
    clean_ticker,
)
from horizon.domain.models.settings import (
    DEFAULT_FAVORITES,
    SETTINGS_SCHEMA_VERSION,
    ComparisonSettings,
    FavoriteSet,
)

__all__ = [
    "ValueObject",
    # Inputs
    "FeeConfig",
    "LecapFeeConfig",
    "Position",
    "ComparisonSettings",
    "FavoriteSet",
    "DEFAULT_FAVORITES",
    "SETTINGS_SCHEMA_VERSION",
    # Market data
    "MarketOffer",
    "ExchangeRateQuote",
    "PriceQuote",
    "BondRow",
    "TICKER_KEY",
    "clean_ticker",
    "FeedResult",
    "OfferFeed",
    "ExchangeRateFeed",
    "BondFeed",
    "MarketSnapshot",
    # Results
    "CaucionProfit",
    "CompoundProfit",
    "OfferBucketView",
    "DerivedBondMetrics",
    "InstrumentKind",
    "Recommendation",
    "ComparisonResult",
]

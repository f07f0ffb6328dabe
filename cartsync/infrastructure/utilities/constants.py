"""
Application constants for the cart engine

Centralizes magic numbers and hard-coded values. Runtime-tunable values live
in the Settings model; these are the defaults it falls back to.
"""

from decimal import Decimal
from typing import Final


class RemoteSettings:
    """Remote cart service endpoints and limits"""

    DEFAULT_BASE_URL: Final[str] = "https://dummyjson.com"
    DEFAULT_TIMEOUT_SECONDS: Final[float] = 10.0
    # limit=0 asks the service for every cart in one page
    LIST_ALL_LIMIT: Final[int] = 0
    UNSUPPORTED_STATUS_CODES: Final[frozenset] = frozenset({403, 405, 501})


class OwnerSettings:
    """Owner key mapping"""

    # The remote demo service only has users 1..30
    DEFAULT_OWNER_KEY_BOUND: Final[int] = 30


class PricingSettings:
    """Fallback quote used when no catalog price is available"""

    FALLBACK_UNIT_PRICE: Final[Decimal] = Decimal("10.00")
    FALLBACK_TITLE_TEMPLATE: Final[str] = "Product {product_id}"
    FALLBACK_THUMBNAIL: Final[str] = "/placeholder.svg"
    DEFAULT_CURRENCY: Final[str] = "USD"


class CacheSettings:
    """Cache TTL settings"""

    PRODUCT_QUOTE_TTL_SECONDS: Final[int] = 300  # 5 minutes


class CartSettings:
    """Cart id allocation"""

    LOCAL_CART_ID_FLOOR: Final[int] = 1_000_000


class LoggingSettings:
    """Logging file sizes and rotation settings"""

    MAX_LOG_FILE_SIZE: Final[int] = 10 * 1024 * 1024  # 10MB
    LOG_BACKUP_COUNT: Final[int] = 5

"""Domain-specific exceptions for butcher-core.

This module defines custom exceptions that are part of the public API.
All exceptions inherit from ButcherAPIError for easy catching.
"""


class ButcherAPIError(Exception):
    """Base exception for all butcher-core errors.

    Users can catch this exception to handle any error raised by the
    reconciliation and analytics layers.
    """

    pass


class ConfigError(ButcherAPIError):
    """Raised when there is a configuration error.

    This exception is raised when:
    - The butcher registry file cannot be loaded or parsed
    - A configured commission or markup rate is outside [0, 1]
    - A butcher entry is missing required fields
    """

    pass


class DataQualityError(ButcherAPIError):
    """Raised when an order record cannot be turned into an Order.

    This exception is raised when:
    - A record has no order id
    - A record has no parsable order time
    - An orders file does not contain a JSON array
    """

    pass


class PriceLookupError(ButcherAPIError):
    """Raised by purchase-price lookups when the price service fails.

    The allocation loop catches it per item and treats the price as 0.
    """

    pass

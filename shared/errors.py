"""
Pricing Errors

Exception taxonomy shared by the aggregator, the rate engine and the
DataFrame pipeline. All errors derive from ValueError so callers that
already catch ValueError around the calculators keep working.
"""


class PricingError(ValueError):
    """Base class for all pricing errors."""


class ValidationError(PricingError):
    """A numeric input is out of range (negative, non-finite, stops > packages)."""


class ConfigurationError(PricingError):
    """A level or vehicle is outside its closed set, or a rate table is invalid."""


class EmptyInputError(PricingError):
    """The aggregator received no points for a route, driver or operation."""


__all__ = [
    "PricingError",
    "ValidationError",
    "ConfigurationError",
    "EmptyInputError",
]

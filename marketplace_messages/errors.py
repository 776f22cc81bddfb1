"""
Errors
======

Genuine error conditions raised by the message core.

What is NOT an exception here:
- An unrecognized message type (generate() returns None)
- A failed value evaluation (returned as an EvaluationResult)
"""


class MarketplaceMessagesError(Exception):
    """Base class for all errors raised by this package."""


class CatalogError(MarketplaceMessagesError):
    """Something is wrong with a catalog lookup."""


class CatalogNotFound(CatalogError, KeyError):
    """The catalog identifier (IRDI) is not in the catalog."""

    def __init__(self, irdi: str):
        super().__init__(irdi)
        self.irdi = irdi

    def __str__(self) -> str:
        return f"Unknown catalog identifier: {self.irdi}"


class PriceElementMissing(CatalogError):
    """A price override was requested for a schema without a price element."""

    def __init__(self, irdi: str):
        super().__init__(f"No price element in schema {irdi}")
        self.irdi = irdi


class TemplateError(MarketplaceMessagesError):
    """A message template is missing or malformed."""


class InvalidMessage(MarketplaceMessagesError, ValueError):
    """A message dict does not have the envelope structure we need."""

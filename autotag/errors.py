"""
Exceptions raised by the auto-tagging service.

Only the rule store, the shop lookup and the Shopify client raise these; the
rule applier catches them and turns them into an outcome instead.
"""


class AutoTagError(Exception):
    """Base exception for all auto-tagging errors."""

    def __init__(self, message: str, details: dict = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict:
        """Convert exception to dictionary for JSON responses."""
        return {
            "error": self.__class__.__name__,
            "message": self.message,
            "details": self.details,
        }


class RuleStoreError(AutoTagError):
    """The rule store could not be reached or failed mid-operation."""
    pass


class InvalidRuleError(AutoTagError):
    """A rule definition was rejected at creation time."""
    pass


class ShopNotFoundError(AutoTagError):
    """No installed shop matches the given domain."""
    pass


class ShopifyApiError(AutoTagError):
    """The Shopify Admin API call failed at the transport, HTTP or GraphQL level."""
    pass

"""Point-of-sale order fulfillment backend."""

__version__ = "0.1.0"

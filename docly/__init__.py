"""Static API documentation for Express-style JavaScript and TypeScript services."""

__version__ = "0.1.0"

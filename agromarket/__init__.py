"""AgroMarket: catalog manager for a direct-sales agricultural platform."""

__version__ = "1.0.0"

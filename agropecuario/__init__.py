"""Agropecuario REST API - agricultural products and their harvests."""

__version__ = "2.0.0"

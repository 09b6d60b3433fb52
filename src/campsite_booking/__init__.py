"""Campsite booking engine: availability, pricing and cancellation refunds."""

__version__ = "0.1.0"

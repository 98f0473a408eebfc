"""Workroom — order fulfillment tracking for made-to-order window blinds."""

"""
Load board data module.

Immutable models for loads, bids and the persisted application state,
parsing of stored documents, input validation and seed data.
"""

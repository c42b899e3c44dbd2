"""
Load Board - Freight Load Listing and Bidding Core

Keeps the load board's in-memory state (posted loads, carrier bids and
notification subscribers) synchronized with a durable store, and estimates
route distances for multi-stop loads.
"""

__version__ = "0.1.0"
__author__ = "Load Board Team"

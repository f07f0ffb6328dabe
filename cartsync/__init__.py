"""
cartsync - shopping cart reconciliation engine

Keeps a session's current cart consistent across a durable local store and a
remote DummyJSON-compatible cart service.
"""

__version__ = "1.0.0"

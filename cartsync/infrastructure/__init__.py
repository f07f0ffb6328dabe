"""
Infrastructure Layer

Contains adapters for the durable store, the remote cart service,
configuration, logging and dependency wiring.
"""

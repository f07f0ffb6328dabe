"""
Shared utilities: exceptions and constants.
"""

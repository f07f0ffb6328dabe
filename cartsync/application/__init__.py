"""
Application Layer

Contains the cart use cases, the per-session state they operate on, and the
command surface a user interface calls.
"""

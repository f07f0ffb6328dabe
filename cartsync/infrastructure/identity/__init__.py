"""
Identity Infrastructure
"""

from .session_identity_provider import SessionIdentityProvider

__all__ = ["SessionIdentityProvider"]

"""
Owner key value object
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class OwnerKey:
    """
    Bounded cart owner identifier.

    Only ever built from a raw identity through IdentityMapper; the engine
    accepts OwnerKey instances so an already-mapped key cannot be mapped again.
    """

    value: int

    def __post_init__(self):
        """Validate owner key"""
        if isinstance(self.value, bool) or not isinstance(self.value, int) or self.value <= 0:
            raise ValueError("Owner key must be a positive integer")

    def __str__(self) -> str:
        return str(self.value)

    def __int__(self) -> int:
        return self.value

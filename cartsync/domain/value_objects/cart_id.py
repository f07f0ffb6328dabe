"""Cart ID value object"""

from dataclasses import dataclass


@dataclass(frozen=True)
class CartId:
    """Cart identifier, either assigned by the remote service or allocated locally"""

    value: int

    def __post_init__(self):
        if isinstance(self.value, bool) or not isinstance(self.value, int) or self.value <= 0:
            raise ValueError("Cart ID must be a positive integer")

    def __str__(self) -> str:
        return str(self.value)

    def __int__(self) -> int:
        return self.value

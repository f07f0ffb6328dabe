"""
Identity mapper

Maps an external user identity into the owner key range accepted by the
remote cart service. The remote demo backend only knows owners 1..N, so the
mapping is a boundary adaptation and carries no business meaning.
"""

from cartsync.domain.value_objects.owner_key import OwnerKey

DEFAULT_OWNER_KEY_BOUND = 30


def owner_key_of(identity: int, bound: int = DEFAULT_OWNER_KEY_BOUND) -> int:
    """Return ``(identity mod bound) or bound``, always within [1, bound]"""
    if isinstance(identity, bool) or not isinstance(identity, int):
        raise TypeError(f"Identity must be an integer, got {type(identity).__name__}")
    if bound < 1:
        raise ValueError("Owner key bound must be at least 1")
    # Python's modulo is non-negative for a positive bound, so negative
    # identities land in range as well.
    return (identity % bound) or bound


class IdentityMapper:
    """Derives bounded owner keys from raw identities"""

    def __init__(self, bound: int = DEFAULT_OWNER_KEY_BOUND):
        if bound < 1:
            raise ValueError("Owner key bound must be at least 1")
        self._bound = bound

    @property
    def bound(self) -> int:
        return self._bound

    def owner_key_of(self, identity: int) -> OwnerKey:
        """Map a raw identity; pass the identity, never an existing OwnerKey"""
        if isinstance(identity, OwnerKey):
            raise TypeError("Identity is already an owner key")
        return OwnerKey(owner_key_of(identity, self._bound))

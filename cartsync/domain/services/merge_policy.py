"""
Merge policies for carts known to both the durable store and the remote service
"""

from enum import Enum

from cartsync.domain.entities.cart_entity import Cart


class MergePolicy(Enum):
    """Which version wins when the same cart id exists locally and remotely"""

    LOCAL_WINS = "local_wins"
    REMOTE_WINS = "remote_wins"
    MOST_RECENT = "most_recent"

    def choose(self, local: Cart, remote: Cart) -> Cart:
        """Pick the version of a colliding cart to report"""
        if self is MergePolicy.REMOTE_WINS:
            return remote
        if self is MergePolicy.MOST_RECENT:
            # Missing timestamps and ties keep the local copy
            if local.updated_at is None or remote.updated_at is None:
                return local if remote.updated_at is None else remote
            return remote if remote.updated_at > local.updated_at else local
        return local

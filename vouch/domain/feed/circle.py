"""Circle resolution.

A viewer's circle is the viewer plus everyone they share an accepted
friendship with. Pending friendships never contribute.
"""

from typing import Iterable

from vouch.domain.model.friendship import Friendship
from vouch.domain.value import Identity


def resolve_circle(
    self_identity: Identity, friendships: Iterable[Friendship]
) -> frozenset[Identity]:
    """Compute the in-circle set for an identity.

    Friendships not involving ``self_identity`` are ignored, so callers may
    pass a broader set than strictly needed.
    """
    members = {self_identity}
    for friendship in friendships:
        if friendship.is_accepted and friendship.involves(self_identity):
            members.add(friendship.other(self_identity))
    return frozenset(members)


def cap_circle(
    circle: frozenset[Identity], self_identity: Identity, limit: int | None
) -> frozenset[Identity]:
    """Truncate a circle to at most ``limit`` members.

    The viewer is always kept; the remaining slots go to friends in
    identity order so the result is deterministic.
    """
    if limit is None or len(circle) <= limit:
        return circle
    friends = sorted(member for member in circle if member != self_identity)
    return frozenset([self_identity, *friends[: max(limit - 1, 0)]])

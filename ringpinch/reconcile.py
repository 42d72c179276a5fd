"""Cross-ring reconciliation.

After every outer ring has been pinched on its own, simplified rings may
overlap. Rings enclosed by another ring are dropped and crossing rings are
merged into their union until no pair needs attention.
"""

from typing import Callable

from .core.ring import Mpoly, Ring
from .core.types import RingRelation
from .relation import ring_relation, ring_union

RelationFunc = Callable[[Ring, Ring], RingRelation]
UnionFunc = Callable[[Ring, Ring], Ring]


def _reconcile_pass(
    mpoly: Mpoly,
    relation: RelationFunc,
    union: UnionFunc,
    verbose: bool
) -> bool:
    """Run one scan over all ring pairs. Returns True if any ring changed."""
    changed = False
    r1 = 0
    while r1 < len(mpoly.rings):
        restart = False
        r2 = r1 + 1
        while r2 < len(mpoly.rings):
            rel = relation(mpoly.rings[r1], mpoly.rings[r2])

            if rel is RingRelation.CONTAINS:
                if verbose:
                    print(f"Ring {r1} contains ring {r2}: deleting {r2}")
                mpoly.delete_ring(r2)
                changed = True
                continue

            if rel is RingRelation.CONTAINED_BY:
                if verbose:
                    print(f"Ring {r1} is contained by ring {r2}: deleting {r1}")
                mpoly.delete_ring(r1)
                changed = restart = True
                break

            if rel is RingRelation.CROSSES:
                if verbose:
                    print(f"Rings {r1} and {r2} cross: merging")
                merged = union(mpoly.rings[r1], mpoly.rings[r2])
                merged.is_hole = False
                merged.parent_id = None
                mpoly.delete_ring(r2)
                mpoly.rings[r1] = merged
                changed = restart = True
                break

            r2 += 1

        if not restart:
            r1 += 1

    return changed


def reconcile_rings(
    mpoly: Mpoly,
    relation: RelationFunc = ring_relation,
    union: UnionFunc = ring_union,
    verbose: bool = False
) -> Mpoly:
    """Delete enclosed rings and merge crossing rings, in place.

    Pairs are classified with ``relation``: for CONTAINS the second ring is
    deleted, for CONTAINED_BY the first, and for CROSSES the first ring is
    replaced by ``union`` of both and the second is deleted. Scanning resumes
    from the affected ring after every change and whole passes repeat until
    one pass changes nothing.

    Args:
        mpoly: Multi-polygon of outer rings; modified in place
        relation: Ring relation classifier
        union: Union of two crossing rings
        verbose: Print each action taken (default: False)

    Returns:
        The same ``mpoly`` instance

    Raises:
        UnionError: If ``union`` cannot merge a crossing pair

    Examples:
        >>> mp = Mpoly([big_square, small_square_inside])
        >>> reconcile_rings(mp)
        >>> len(mp)
        1
    """
    passes = 0
    while _reconcile_pass(mpoly, relation, union, verbose):
        passes += 1
    if verbose:
        print(f"Reconciliation finished after {passes + 1} pass(es), {len(mpoly)} ring(s) left")
    return mpoly


__all__ = [
    'reconcile_rings',
]

"""
Palette Selection Module

Chooses an ordered palette from a color histogram, either the N most frequent
colors or a greedy frequency-ordered selection that keeps every pair of
selected colors at least a minimum Euclidean distance apart.
"""

from enum import Enum
from typing import List, Tuple, Union

from loguru import logger

from .conversions import NormalizedColor, packed_distance
from .errors import InvalidInput
from .histogram import Histogram

Palette = List[NormalizedColor]


class SelectionPolicy(str, Enum):
    DOMINANT = "dominant"
    DISTINCT = "distinct"


def resolve_policy(policy: Union[str, SelectionPolicy]) -> SelectionPolicy:
    """
    Resolve a selection policy given as text, ignoring case and whitespace.

    Raises:
        InvalidInput: If the policy is not "dominant" or "distinct"
    """
    if isinstance(policy, SelectionPolicy):
        return policy
    if not isinstance(policy, str):
        raise InvalidInput(f"Unknown selection policy: {policy!r}")
    try:
        return SelectionPolicy(policy.strip().lower())
    except ValueError:
        raise InvalidInput(f"Unknown selection policy: {policy!r}")


def rank_colors(histogram: Histogram) -> List[Tuple[int, int]]:
    """
    Order histogram entries by count descending.

    Ties are broken by packed color ascending so the order is deterministic.

    Returns:
        List of (packed_color, count) pairs
    """
    return sorted(histogram.items(), key=lambda entry: (-entry[1], entry[0]))


def select_dominant(histogram: Histogram, count: int) -> Palette:
    """
    Take the `count` most frequent colors, ignoring similarity.

    Returns fewer colors when the histogram has fewer distinct entries, and an
    empty palette when count <= 0.
    """
    if count <= 0:
        return []

    ranked = rank_colors(histogram)[:count]
    palette = [NormalizedColor.from_packed(packed) for packed, _ in ranked]

    logger.debug(f"Dominant selection: {len(palette)}/{count} colors "
                 f"from {len(histogram)} candidates")
    return palette


def is_too_similar(candidate: int, selected: List[int], min_distance: float) -> bool:
    """True if candidate lies strictly closer than min_distance to any selected color."""
    for packed in selected:
        if packed_distance(candidate, packed) < min_distance:
            return True
    return False


def select_distinct(histogram: Histogram, count: int, min_distance: float) -> Palette:
    """
    Greedy frequency-ordered selection with a minimum pairwise distance.

    Candidates are visited in rank_colors order; a candidate is rejected when
    it is closer than min_distance (0-255 RGB cube) to any color already
    selected. Selection stops at `count` colors or when candidates run out,
    so fewer colors may be returned. min_distance is never relaxed.

    Cost is O(D * S) for D distinct colors and S <= count selected colors,
    which grows large for photos with hundreds of thousands of distinct
    colors when few candidates are accepted.
    """
    if count <= 0:
        return []

    selected: List[int] = []
    rejected = 0
    for packed, _ in rank_colors(histogram):
        if is_too_similar(packed, selected, min_distance):
            rejected += 1
            continue
        selected.append(packed)
        if len(selected) >= count:
            break

    logger.debug(f"Distinct selection: {len(selected)}/{count} colors, "
                 f"min_distance={min_distance}, rejected={rejected}")

    return [NormalizedColor.from_packed(packed) for packed in selected]


def select_palette(histogram: Histogram, count: int, min_distance: float,
                   policy: SelectionPolicy = SelectionPolicy.DISTINCT) -> Palette:
    """Dispatch to the selection function for the given policy."""
    if policy == SelectionPolicy.DOMINANT:
        return select_dominant(histogram, count)
    return select_distinct(histogram, count, min_distance)

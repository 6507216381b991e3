"""
Proximity scaling for the dock items.

Items grow and lift as the pointer nears them. The hovered item reaches the
peak value and its neighbours fall back toward the base value with an
exponential decay of their distance (in item slots) to the hovered item.

Nothing in here knows about Qt; the dock window asks for values and animates
its buttons toward them.
"""

import math
from typing import NamedTuple

# Blend between the regular drop gap and the edge margin for the last slot.
EDGE_BLEND_FACTOR = 0.2


class ItemTransform(NamedTuple):
    """Visual transform of one dock item for the current hover position."""
    size: float
    lift: float
    icon_scale: float


def lerp(start, end, t):
    return start + (end - start) * t


def compute_value(hovered_index, item_index, base_value, peak_value):
    """Interpolate between base_value and peak_value by distance to the hover.

    Returns base_value when nothing is hovered. At distance 0 the factor is
    exp(0) = 1 so the hovered item gets exactly peak_value.
    """
    if hovered_index is None:
        return base_value

    distance = abs(hovered_index - item_index)
    factor = math.exp(-distance)
    return lerp(base_value, peak_value, factor)


def compute_edge_margin(item_index, item_count, margin, edge_margin):
    """Leading gap shown in front of the drop target while dragging.

    The last slot gets a slightly smaller gap, blended toward edge_margin.
    """
    if item_index != item_count - 1:
        return margin
    return lerp(margin, edge_margin, EDGE_BLEND_FACTOR)


def compute_transform(hovered_index, item_index, base_size, peak_size, peak_lift, scale_divider):
    """Evaluate size and lift for one item, plus the icon scale derived from the size."""
    size = compute_value(hovered_index, item_index, base_size, peak_size)
    lift = compute_value(hovered_index, item_index, 0.0, peak_lift)
    icon_scale = size / scale_divider if scale_divider else 1.0
    return ItemTransform(size=size, lift=lift, icon_scale=icon_scale)

"""
Section ordering helpers.

Sections display ascending by `order`; ties keep their original list
position. After any insert, removal or move the owning page is compacted
back to consecutive integers 1..N so fractional or colliding orders never
persist.
"""

from __future__ import annotations

from builder.kernel.types import Section


def _order_key(indexed: tuple[int, Section]) -> tuple[float, int]:
    position, section = indexed
    order = section.order
    if isinstance(order, bool) or not isinstance(order, (int, float)):
        # Unordered sections sink to the end, in list position
        return (float("inf"), position)
    return (float(order), position)


def sort_sections(sections: list[Section]) -> list[Section]:
    """Return sections in display order. Stable and deterministic."""
    return [s for _, s in sorted(enumerate(sections), key=_order_key)]


def next_order(sections: list[Section]) -> int:
    """max(existing order) + 1, or 1 for an empty page."""
    orders = [s.order for s in sections if isinstance(s.order, (int, float)) and not isinstance(s.order, bool)]
    if not orders:
        return 1
    return int(max(orders)) + 1


def compact_order(sections: list[Section]) -> list[Section]:
    """
    Re-assign sequential order values (1..N) in display order.
    Mutates the sections in place and returns them sorted.
    """
    ordered = sort_sections(sections)
    for index, section in enumerate(ordered, start=1):
        section.order = index
    return ordered


def has_order(sections: list[Section], order: int | float) -> bool:
    return any(s.order == order for s in sections)

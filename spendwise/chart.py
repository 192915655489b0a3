"""Ring (donut) chart geometry, independent of any drawing library.

Angles are radians measured clockwise from 12 o'clock. Points are in
screen coordinates centred on the ring with y growing downwards, so the
angle ``a`` at radius ``r`` lands on ``(r * sin(a), -r * cos(a))``.

Each breakdown entry owns a slot of ``2π * amount / total``. The pad angle
is taken out of the slot and split evenly on both sides, which keeps
neighbouring segments apart at any segment count. A slot narrower than the
pad collapses to a zero-width segment at the slot midpoint.

Every shape carries two paths: ``path`` uses SVG arc commands, ``outline``
is the same shape sampled into straight segments for plotly, whose shape
paths have no arc command.

The builder is pure: the same breakdown always yields the same floats.
"""

import math
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from spendwise.domain import Category, CategoryBreakdown, Currency, format_money, round_half_up

TAU = 2 * math.pi
DEFAULT_PAD_ANGLE = 0.02
DEFAULT_LABEL_THRESHOLD = 8.0
OUTLINE_STEP = 0.02     # radians between sampled points on a polygon outline
NEUTRAL_COLOR = "#f3f4f6"


@dataclass(frozen=True)
class RingSegment:
    category: Category
    start_angle: float
    end_angle: float
    color: str
    label_angle: float
    label_position: Tuple[float, float]
    percentage: float
    label: Optional[str]
    path: str
    outline: str

    @property
    def sweep(self) -> float:
        return self.end_angle - self.start_angle


@dataclass(frozen=True)
class EmptyRing:
    outer_radius: float
    inner_radius: float
    color: str
    path: str
    outline: str


@dataclass(frozen=True)
class CenterLabels:
    title: str
    value: str
    caption: str


@dataclass(frozen=True)
class RingChart:
    segments: Tuple[RingSegment, ...]
    center: CenterLabels
    outer_radius: float
    inner_radius: float
    pad_angle: float
    empty: Optional[EmptyRing] = None

    @property
    def is_empty(self) -> bool:
        return self.empty is not None

    @property
    def labels(self) -> Tuple[str, ...]:
        return tuple(s.label for s in self.segments if s.label is not None)


def polar(radius: float, angle: float) -> Tuple[float, float]:
    return radius * math.sin(angle), -radius * math.cos(angle)


def _fmt(point: Tuple[float, float]) -> str:
    return f"{point[0]:.4f},{point[1]:.4f}"


def arc_path(start: float, end: float, outer: float, inner: float) -> str:
    """SVG path for the annular sector between two angles."""
    large = 1 if end - start > math.pi else 0
    parts = [
        f"M {_fmt(polar(outer, start))}",
        f"A {outer:.4f},{outer:.4f} 0 {large} 1 {_fmt(polar(outer, end))}",
    ]
    if inner > 0:
        parts.append(f"L {_fmt(polar(inner, end))}")
        parts.append(f"A {inner:.4f},{inner:.4f} 0 {large} 0 {_fmt(polar(inner, start))}")
    else:
        parts.append("L 0.0000,0.0000")
    parts.append("Z")
    return " ".join(parts)


def ring_path(outer: float, inner: float) -> str:
    # a single SVG arc cannot close on itself, so the full ring is two halves
    half = math.pi
    parts = [
        f"M {_fmt(polar(outer, 0.0))}",
        f"A {outer:.4f},{outer:.4f} 0 1 1 {_fmt(polar(outer, half))}",
        f"A {outer:.4f},{outer:.4f} 0 1 1 {_fmt(polar(outer, 0.0))}",
    ]
    if inner > 0:
        parts.append(f"M {_fmt(polar(inner, 0.0))}")
        parts.append(f"A {inner:.4f},{inner:.4f} 0 1 0 {_fmt(polar(inner, half))}")
        parts.append(f"A {inner:.4f},{inner:.4f} 0 1 0 {_fmt(polar(inner, 0.0))}")
    parts.append("Z")
    return " ".join(parts)


def _arc_points(radius: float, start: float, end: float, step: float) -> List[Tuple[float, float]]:
    n = max(1, math.ceil((end - start) / step))
    return [polar(radius, start + (end - start) * i / n) for i in range(n + 1)]


def polygon_path(start: float, end: float, outer: float, inner: float, step: float = OUTLINE_STEP) -> str:
    """Annular sector as a closed polyline, for renderers without arc commands.

    The outer edge runs clockwise from ``start`` to ``end`` and the inner edge
    comes back, so only M, L and Z appear in the result.
    """
    points = _arc_points(outer, start, end, step)
    if inner > 0:
        points += _arc_points(inner, start, end, step)[::-1]
    else:
        points.append((0.0, 0.0))
    head, *rest = points
    return " ".join([f"M {_fmt(head)}"] + [f"L {_fmt(p)}" for p in rest] + ["Z"])


def ring_polygon(outer: float, inner: float, step: float = OUTLINE_STEP) -> str:
    # the inner loop runs the other way round, so nonzero filling leaves the hole empty
    outer_pts = _arc_points(outer, 0.0, TAU, step)
    parts = [f"M {_fmt(outer_pts[0])}"] + [f"L {_fmt(p)}" for p in outer_pts[1:]] + ["Z"]
    if inner > 0:
        inner_pts = _arc_points(inner, 0.0, TAU, step)[::-1]
        parts += [f"M {_fmt(inner_pts[0])}"] + [f"L {_fmt(p)}" for p in inner_pts[1:]] + ["Z"]
    return " ".join(parts)


def center_labels(total: float, active: int, currency: Currency = Currency.USD) -> CenterLabels:
    if active == 0:
        return CenterLabels(title="", value="No activity yet", caption="")
    return CenterLabels(
        title="Total Spent",
        value=format_money(total, currency),
        caption=f"{active} categories active",
    )


def build_ring(
    data: Sequence[CategoryBreakdown],
    outer_radius: float,
    inner_radius: float,
    pad_angle: float = DEFAULT_PAD_ANGLE,
    label_threshold: float = DEFAULT_LABEL_THRESHOLD,
    currency: Currency = Currency.USD,
    total: Optional[float] = None,
) -> RingChart:
    if not outer_radius > inner_radius >= 0:
        raise ValueError(f"need outer_radius > inner_radius >= 0, got {outer_radius} and {inner_radius}")
    if pad_angle < 0:
        raise ValueError(f"pad_angle must be non-negative, got {pad_angle}")

    if total is None:
        total = math.fsum(d.amount for d in data)

    if not data or total <= 0:
        return RingChart(
            segments=(),
            center=center_labels(0.0, 0, currency),
            outer_radius=outer_radius,
            inner_radius=inner_radius,
            pad_angle=pad_angle,
            empty=EmptyRing(
                outer_radius,
                inner_radius,
                NEUTRAL_COLOR,
                ring_path(outer_radius, inner_radius),
                ring_polygon(outer_radius, inner_radius),
            ),
        )

    mid_radius = (outer_radius + inner_radius) / 2
    segments = []
    running = 0.0
    for entry in data:
        slot_start = TAU * running / total
        running += entry.amount
        slot_end = TAU * running / total
        label_angle = (slot_start + slot_end) / 2

        if slot_end - slot_start > pad_angle:
            start = slot_start + pad_angle / 2
            end = slot_end - pad_angle / 2
        else:
            start = end = label_angle

        segments.append(RingSegment(
            category=entry.category,
            start_angle=start,
            end_angle=end,
            color=entry.color,
            label_angle=label_angle,
            label_position=polar(mid_radius, label_angle),
            percentage=entry.percentage,
            label=f"{round_half_up(entry.percentage)}%" if entry.percentage > label_threshold else None,
            path=arc_path(start, end, outer_radius, inner_radius),
            outline=polygon_path(start, end, outer_radius, inner_radius),
        ))

    return RingChart(
        segments=tuple(segments),
        center=center_labels(total, len(segments), currency),
        outer_radius=outer_radius,
        inner_radius=inner_radius,
        pad_angle=pad_angle,
    )

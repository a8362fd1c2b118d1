"""Bar / doughnut rendering of ranked entries, for display and PNG export."""

from __future__ import annotations

import io
from typing import Sequence

from matplotlib.figure import Figure

from voucher_analyzer.config import (
    BAR_COLOR,
    CHART_BAR,
    CHART_DOUGHNUT,
    CHART_TYPES,
    DOUGHNUT_COLORS,
    EMPTY_CHART_MESSAGE,
)
from voucher_analyzer.export import ExportError
from voucher_analyzer.models import AggregateEntry


def _shorten_label(value: str, max_len: int = 24) -> str:
    text = str(value)
    return text if len(text) <= max_len else text[: max_len - 1] + "…"


def _draw_bar(ax, entries: Sequence[AggregateEntry], label_column: str, measure_name: str) -> None:
    positions = range(len(entries))
    ax.bar(positions, [entry.value for entry in entries], color=BAR_COLOR, label=measure_name)
    ax.set_xticks(list(positions))
    ax.set_xticklabels([_shorten_label(entry.name) for entry in entries], rotation=45, ha="right", fontsize=8)
    ax.set_xlabel(label_column)
    ax.set_ylabel(measure_name)
    ax.yaxis.set_major_formatter(lambda value, _pos: f"{value:,.0f}")
    ax.grid(axis="y", linestyle="--", alpha=0.3)
    ax.set_axisbelow(True)
    ax.legend(loc="upper right", frameon=False)


def _draw_doughnut(ax, entries: Sequence[AggregateEntry]) -> None:
    colors = [DOUGHNUT_COLORS[i % len(DOUGHNUT_COLORS)] for i in range(len(entries))]
    wedges, _ = ax.pie(
        [entry.value for entry in entries],
        startangle=90,
        colors=colors,
        wedgeprops={"width": 0.42, "edgecolor": "white"},
    )
    ax.legend(
        wedges,
        [_shorten_label(entry.name) for entry in entries],
        loc="center left",
        bbox_to_anchor=(1.0, 0.5),
        fontsize=8,
        frameon=False,
    )
    ax.set_aspect("equal")


def build_chart_figure(
    entries: Sequence[AggregateEntry],
    chart_type: str = CHART_BAR,
    label_column: str | None = None,
    measure_name: str | None = None,
    title: str | None = None,
) -> Figure:
    if chart_type not in CHART_TYPES:
        raise ValueError(f"Unknown chart type {chart_type!r}; expected one of {CHART_TYPES}")

    fig = Figure(figsize=(11, 6), dpi=110)
    fig.patch.set_facecolor("white")
    ax = fig.add_subplot(1, 1, 1)

    if not entries:
        ax.text(0.5, 0.5, EMPTY_CHART_MESSAGE, ha="center", va="center", color="#6b7280")
        ax.set_axis_off()
        return fig

    if chart_type == CHART_DOUGHNUT:
        _draw_doughnut(ax, entries)
    else:
        _draw_bar(ax, entries, label_column or "", measure_name or "Value")
    if title:
        ax.set_title(title, fontweight="bold")
    fig.tight_layout()
    return fig


def render_chart_png(
    entries: Sequence[AggregateEntry],
    chart_type: str = CHART_BAR,
    label_column: str | None = None,
    measure_name: str | None = None,
    title: str | None = None,
) -> bytes:
    fig = build_chart_figure(entries, chart_type, label_column, measure_name, title)
    buffer = io.BytesIO()
    try:
        fig.savefig(buffer, format="png", bbox_inches="tight", facecolor="white")
    except (ValueError, RuntimeError, OSError) as exc:
        raise ExportError(f"Could not render chart: {exc}") from exc
    return buffer.getvalue()

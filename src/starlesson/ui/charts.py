"""
Charts

A bar chart model rendered through MonsterUI's ApexChart component.
`histogram()` bins raw numbers into a BarChart.
"""

import math
from typing import Any, Dict, List, Optional, Sequence

from monsterui.all import ApexChart
from pydantic import BaseModel, Field, model_validator

HEIGHT = 320


class BarChart(BaseModel):
    """Labelled bars, one value per label."""
    labels: List[str]
    values: List[float]
    title: str = ""
    x_label: str = ""
    y_label: str = ""
    color: str = "#2563eb"
    edges: Optional[List[float]] = Field(default=None, description="Bin edges when built by histogram()")

    @model_validator(mode="after")
    def _same_length(self):
        if len(self.labels) != len(self.values):
            raise ValueError(f"{len(self.labels)} labels for {len(self.values)} values")
        return self

    @property
    def max_value(self) -> float:
        return max(self.values, default=0)

    def apex_options(self, height: int = HEIGHT) -> Dict[str, Any]:
        """ApexCharts options for this chart."""
        return {
            "chart": {"type": "bar", "height": height, "toolbar": {"show": False}, "animations": {"enabled": False}},
            "series": [{"name": self.y_label or "value", "data": self.values}],
            "xaxis": {"categories": self.labels, "title": {"text": self.x_label}},
            "yaxis": {"title": {"text": self.y_label}},
            "title": {"text": self.title, "align": "center"},
            "colors": [self.color],
            "plotOptions": {"bar": {"columnWidth": "90%"}},
            "dataLabels": {"enabled": False},
        }


def histogram(values: Sequence[float], bins: int = 10, *, title: str = "", color: str = "#2563eb") -> BarChart:
    """Count `values` into `bins` equal-width bins spanning their range."""
    if bins < 1:
        raise ValueError("bins must be at least 1")
    data = [float(v) for v in values if v is not None and not math.isnan(float(v))]
    if not data:
        return BarChart(labels=[], values=[], title=title, color=color, edges=[])

    lo, hi = min(data), max(data)
    if lo == hi:
        lo, hi = lo - 0.5, hi + 0.5
    width = (hi - lo) / bins
    edges = [lo + i * width for i in range(bins + 1)]
    counts = [0] * bins
    for v in data:
        # The top edge belongs to the last bin
        idx = min(int((v - lo) / width), bins - 1)
        counts[idx] += 1

    labels = [f"{edges[i]:.3g}" for i in range(bins)]
    return BarChart(labels=labels, values=counts, title=title, x_label="value", y_label="count",
                    color=color, edges=edges)


def bar_chart(chart: BarChart, *, height: int = HEIGHT):
    """Render `chart` as a `uk-chart` component."""
    return ApexChart(opts=chart.apex_options(height), cls="starlesson-chart w-full")

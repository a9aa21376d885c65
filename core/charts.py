from __future__ import annotations

from typing import Any, Dict

import altair as alt

from core.aggregations import CategorySeries

alt.data_transformers.disable_max_rows()


def to_vega_spec(chart: alt.Chart) -> Dict[str, Any]:
    """Convert an Altair chart into a Vega-Lite spec dict (JSON-serializable)."""
    return chart.to_dict()


def bar_chart(series: CategorySeries, *, label_title: str, value_title: str, horizontal: bool = False) -> alt.Chart:
    df = series.to_frame()
    if horizontal:
        x = alt.X("value:Q", title=value_title, scale=alt.Scale(zero=True))
        y = alt.Y("label:N", title=label_title, sort=None)
    else:
        x = alt.X("label:N", title=label_title, sort=None)
        y = alt.Y("value:Q", title=value_title, scale=alt.Scale(zero=True))
    hover = alt.selection_point(fields=["label"], on="mouseover", empty="all")
    return (
        alt.Chart(df)
        .mark_bar()
        .encode(
            x=x,
            y=y,
            opacity=alt.condition(hover, alt.value(1), alt.value(0.5)),
            tooltip=[alt.Tooltip("label:N", title=label_title), alt.Tooltip("value:Q", title=value_title, format=",.1f")],
        )
        .add_params(hover)
        .properties(height=300)
    )


def pie_chart(series: CategorySeries, *, label_title: str) -> alt.Chart:
    df = series.to_frame()
    return (
        alt.Chart(df)
        .mark_arc()
        .encode(
            theta=alt.Theta("value:Q", title="Records"),
            color=alt.Color("label:N", title=label_title, sort=None),
            tooltip=[alt.Tooltip("label:N", title=label_title), alt.Tooltip("value:Q", title="Records", format=",")],
        )
        .properties(height=300, width=300)
    )

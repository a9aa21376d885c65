from __future__ import annotations

from dataclasses import asdict
from typing import Any, Dict, Sequence

from core.aggregations import count_by_category, sum_by_category, summarize
from core.charts import bar_chart, pie_chart, to_vega_spec
from core.filters import RecordFilters


def compute_dashboard(filters: RecordFilters, records: Sequence[Dict[str, Any]]) -> Dict[str, Any]:
    intensity_by_topic = sum_by_category(records, "intensity", "topics")
    likelihood_by_country = sum_by_category(records, "likelihood", "country")
    count_by_region = count_by_category(records, "region")

    charts: Dict[str, Any] = {}
    if records:
        charts = {
            "intensity_by_topic": to_vega_spec(bar_chart(intensity_by_topic, label_title="Topic", value_title="Total intensity")),
            "likelihood_by_country": to_vega_spec(
                bar_chart(likelihood_by_country, label_title="Country", value_title="Total likelihood", horizontal=True)
            ),
            "count_by_region": to_vega_spec(pie_chart(count_by_region, label_title="Region")),
        }

    return {
        "filters": asdict(filters),
        "kpis": summarize(records),
        "series": {
            "intensity_by_topic": asdict(intensity_by_topic),
            "likelihood_by_country": asdict(likelihood_by_country),
            "count_by_region": asdict(count_by_region),
        },
        "charts": charts,
    }

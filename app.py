import logging
from contextlib import contextmanager
from typing import Dict, List

import pandas as pd
import streamlit as st

from core.aggregations import count_by_category, sum_by_category, summarize
from core.charts import bar_chart, pie_chart
from core.client import DashboardClient, DashboardClientError
from core.config import get_settings
from core.refetch import RefetchPipeline

logger = logging.getLogger(__name__)

# Filter control -> key in the /filters response.
FILTER_CONTROLS: Dict[str, str] = {
    "end_year": "years",
    "topics": "topics",
    "sector": "sectors",
    "region": "regions",
    "pestle": "pestles",
    "source": "sources",
    "country": "countries",
    "city": "cities",
}


# ---------- UI / layout helpers ----------
def inject_base_styles():
    if st.session_state.get("_base_css_injected"):
        return
    st.markdown(
        """
        <style>
        .card {border: 1px solid #e5e7eb;border-radius: 12px;padding: 16px;background: #ffffff;
               box-shadow: 0 1px 2px rgba(0,0,0,0.04); margin-bottom: 12px;}
        .card-title {font-weight: 600;font-size: 1.0rem;color: #111827;margin-bottom: 8px;}
        .chip-row {display: flex;flex-wrap: wrap;gap: 6px;margin-top: 6px;}
        .chip {background: #f3f4f6;border: 1px solid #e5e7eb;border-radius: 14px;padding: 4px 10px;font-size: 0.85rem;color: #374151;}
        </style>
        """,
        unsafe_allow_html=True,
    )
    st.session_state["_base_css_injected"] = True


@contextmanager
def card(title: str):
    container = st.container()
    container.markdown(f"<div class='card'><div class='card-title'>{title}</div>", unsafe_allow_html=True)
    body = container.container()
    with body:
        yield body
    container.markdown("</div>", unsafe_allow_html=True)


def format_filter_summary(state: Dict[str, str]) -> str:
    active = [f"{key.replace('_', ' ').title()}: {value}" for key, value in state.items() if value]
    if not active:
        active = ["All records"]
    return "".join([f"<span class='chip'>{txt}</span>" for txt in active])


def get_client() -> DashboardClient:
    if "client" not in st.session_state:
        settings = get_settings()
        st.session_state["client"] = DashboardClient(settings.api_url, timeout=settings.request_timeout)
    return st.session_state["client"]


def get_pipeline() -> RefetchPipeline:
    if "pipeline" not in st.session_state:
        st.session_state["pipeline"] = RefetchPipeline.from_settings(get_client().fetch_records, get_settings())
    return st.session_state["pipeline"]


def load_filter_options() -> Dict[str, List]:
    if "filter_options" not in st.session_state:
        try:
            st.session_state["filter_options"] = get_client().fetch_filter_options()
        except DashboardClientError:
            logger.exception("filter options fetch failed")
            return {}
    return st.session_state["filter_options"]


def render_kpis(records: List[Dict]):
    kpis = summarize(records)
    cols = st.columns(4)
    cols[0].metric("Total Records", f"{kpis['total_records']:,}")
    cols[1].metric("Avg. Intensity", f"{kpis['avg_intensity']:.1f}")
    cols[2].metric("Avg. Likelihood", f"{kpis['avg_likelihood']:.1f}")
    cols[3].metric("Avg. Relevance", f"{kpis['avg_relevance']:.1f}")


def render_charts(records: List[Dict]):
    if not records:
        st.info("No records match the current filters.")
        return
    left, right = st.columns(2)
    with left:
        with card("Top 10 Intensity by Topic"):
            series = sum_by_category(records, "intensity", "topics")
            st.altair_chart(bar_chart(series, label_title="Topic", value_title="Total intensity"), use_container_width=True)
    with right:
        with card("Top 10 Likelihood by Country"):
            series = sum_by_category(records, "likelihood", "country")
            chart = bar_chart(series, label_title="Country", value_title="Total likelihood", horizontal=True)
            st.altair_chart(chart, use_container_width=True)
    with card("Record Count Distribution by Region"):
        series = count_by_category(records, "region")
        st.altair_chart(pie_chart(series, label_title="Region"), use_container_width=False)


# ---------- UI setup ----------
st.set_page_config(page_title="Data Visualization Dashboard", layout="wide")
inject_base_styles()
st.title("Data Visualization Dashboard")

filter_options = load_filter_options()

with st.sidebar:
    st.markdown("### Control Panel & Filters")
    search = st.text_input("Global Search", "", placeholder="Search by Source, Country, Topic, Sector, or Title...")
    state: Dict[str, str] = {}
    for key, options_key in FILTER_CONTROLS.items():
        label = key.replace("_", " ").title()
        options = [""] + [str(o) for o in filter_options.get(options_key, [])]
        state[key] = st.selectbox(label, options, format_func=lambda o, lbl=label: o or f"All {lbl}")
    state["search"] = search
    refresh_clicked = st.button("Refresh")

settings = get_settings()
pipeline = get_pipeline()
if refresh_clicked:
    pipeline.state = dict(state)
    with st.spinner("Loading Dashboard Data..."):
        pipeline.refresh()
elif state != pipeline.state:
    # Rapid edits rerun the script; the debouncer collapses them into one fetch.
    pipeline.on_filters_changed(state)
    with st.spinner("Loading Dashboard Data..."):
        if not pipeline.wait(settings.debounce_seconds + settings.request_timeout):
            st.info("Still loading; showing previous results.")
if pipeline.last_error is not None:
    st.warning(f"Could not refresh data; showing previous results. ({pipeline.last_error})")

records = pipeline.records
st.caption(f"Displaying {len(records):,} records based on current filters.")
st.markdown(f"<div class='chip-row'>{format_filter_summary(state)}</div>", unsafe_allow_html=True)

render_kpis(records)
render_charts(records)

with st.expander("Records", expanded=False):
    st.dataframe(pd.DataFrame(records), hide_index=True, use_container_width=True)

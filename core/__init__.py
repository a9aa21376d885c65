"""Core (UI-agnostic) dashboard logic.

This package contains:
- the record model and filter normalization
- query construction over the record store (MongoDB or a local JSON dataset)
- filter-option and chart aggregations (JSON-serializable payloads)
- chart helpers (Altair -> Vega-Lite spec dict)
- the API client and debounced refetch used by the Streamlit shell
"""

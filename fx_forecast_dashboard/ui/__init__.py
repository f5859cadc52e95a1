"""User interface: Streamlit dashboard, charts and exporters."""

"""Streamlit dashboard for the water quality analysis engine."""

import pandas as pd
import plotly.express as px
import plotly.graph_objects as go
import streamlit as st

from src.analysis.orchestrator import BatchAnalysis, BatchAnalysisError, analyze_batch
from src.ingestion.loader import RecordLoadError, load_samples
from src.ingestion.normalizer import CleanedSample
from src.ingestion.sample_data import generate_sample_data
from src.reporting.report import (
    format_batch_summary,
    location_summary,
    parameter_statistics,
    samples_to_dataframe,
    summary_table,
)
from src.standards.registry import load_default_registry
from src.utils.config import HEAVY_METALS, KEY_TREND_PARAMETERS
from src.utils.logging_config import configure_logging

# Page configuration
st.set_page_config(
    page_title="Water Quality Monitor",
    page_icon="💧",
    layout="wide",
    initial_sidebar_state="expanded",
)

# Initialize logging
configure_logging(level="WARNING")

STATUS_COLORS = {
    "safe": "green",
    "unsafe": "orange",
    "critical": "red",
}


def render_sidebar():
    """Render sidebar controls."""
    st.sidebar.title("💧 Water Quality")
    st.sidebar.markdown("---")

    uploaded = st.sidebar.file_uploader(
        "Upload samples",
        type=["csv", "xlsx", "xls"],
        help="One row per sample; columns such as pH, TDS, As (µg/L), date, location",
    )
    demo_count = st.sidebar.slider(
        "Demo samples",
        min_value=2,
        max_value=100,
        value=20,
        help="Used when no file is uploaded",
    )

    st.sidebar.markdown("---")
    if st.sidebar.button("🔄 New Demo Data", use_container_width=True):
        st.cache_data.clear()
        st.rerun()

    st.sidebar.markdown("---")
    st.sidebar.markdown("**Standards:** WHO / EPA drinking water guidelines")

    return uploaded, demo_count


@st.cache_data
def demo_samples(count: int) -> list[CleanedSample]:
    """Generate demo samples with caching."""
    return generate_sample_data(count)


def load_input(uploaded, demo_count: int) -> tuple[list[CleanedSample], list[int]]:
    """Load uploaded samples, or demo samples when nothing was uploaded."""
    if uploaded is None:
        return demo_samples(demo_count), []
    try:
        return load_samples(uploaded)
    except RecordLoadError as e:
        st.error(f"Failed to load file: {e}")
        st.stop()


def render_overview_tab(batch: BatchAnalysis):
    """Render the overview tab."""
    s = batch.summary

    col1, col2, col3, col4 = st.columns(4)
    with col1:
        st.metric("Samples", s.total_samples)
    with col2:
        st.metric("Safe", f"{s.safe_percentage:.0f}%", delta=f"{s.safe_samples} samples")
    with col3:
        st.metric("Average HMPI", f"{s.avg_hmpi:.2f}")
    with col4:
        st.metric("Average WQI", f"{s.avg_wqi:.1f}")

    st.markdown("---")

    col1, col2 = st.columns([2, 1])

    with col1:
        status_df = pd.DataFrame({
            "Status": ["safe", "unsafe", "critical"],
            "Samples": [s.safe_samples, s.unsafe_samples, s.critical_samples],
        })
        fig = px.bar(
            status_df,
            x="Status",
            y="Samples",
            color="Status",
            color_discrete_map=STATUS_COLORS,
        )
        fig.update_layout(showlegend=False, height=300)
        st.plotly_chart(fig, use_container_width=True)

    with col2:
        st.markdown("### Recommendations")
        if batch.recommendations:
            for rec in batch.recommendations:
                st.warning(rec)
        else:
            st.success("All samples are within permissible limits")

    st.subheader("Water Quality Index")
    fig = go.Figure(go.Indicator(
        mode="gauge+number",
        value=s.avg_wqi,
        domain={"x": [0, 1], "y": [0, 1]},
        gauge={
            "axis": {"range": [0, 100]},
            "bar": {"color": "darkblue"},
            "steps": [
                {"range": [0, 25], "color": "lightcoral"},
                {"range": [25, 50], "color": "navajowhite"},
                {"range": [50, 70], "color": "lightyellow"},
                {"range": [70, 90], "color": "palegreen"},
                {"range": [90, 100], "color": "lightgreen"},
            ],
        },
        title={"text": "Average WQI"},
    ))
    fig.update_layout(height=300)
    st.plotly_chart(fig, use_container_width=True)

    st.markdown("### Key Findings")
    for finding in batch.key_findings:
        st.markdown(f"- {finding}")


def render_trends_tab(batch: BatchAnalysis):
    """Render parameter time series with their fitted trend."""
    df = samples_to_dataframe(batch).sort_values("sample_date")
    available = [p for p in KEY_TREND_PARAMETERS if p in df.columns]
    if not available:
        st.info("None of the key trend parameters are present in these samples.")
        return

    parameter = st.selectbox("Parameter", options=available)
    series = df[["sample_date", parameter]].dropna().reset_index(drop=True)

    fig = go.Figure()
    fig.add_trace(go.Scatter(
        x=series["sample_date"],
        y=series[parameter],
        mode="lines+markers",
        name=parameter,
        line={"color": "blue"},
        marker={"size": 6},
    ))

    trend = batch.trends.get(parameter)
    if trend is not None and trend.sample_count > 1:
        fitted = [trend.intercept + trend.slope * i for i in range(len(series))]
        fig.add_trace(go.Scatter(
            x=series["sample_date"],
            y=fitted,
            mode="lines",
            name="Linear trend",
            line={"color": "red", "dash": "dash"},
        ))

    standard = load_default_registry().get(parameter)
    if standard is not None:
        for bound in (standard.min, standard.max):
            if bound is not None:
                fig.add_hline(y=bound, line_dash="dot", line_color="gray")

    fig.update_layout(
        title=f"{parameter} over time",
        xaxis_title="Sample date",
        yaxis_title=f"{parameter} ({standard.unit if standard else ''})",
        hovermode="x unified",
        height=450,
    )
    st.plotly_chart(fig, use_container_width=True)

    if trend is not None:
        col1, col2, col3 = st.columns(3)
        with col1:
            st.metric("Direction", trend.direction.value)
        with col2:
            st.metric("Slope per sample", f"{trend.slope:.4g}")
        with col3:
            st.metric("R²", f"{trend.r_squared:.2f}")


def render_metals_tab(batch: BatchAnalysis):
    """Render heavy metal concentrations relative to their limits."""
    registry = load_default_registry()
    df = samples_to_dataframe(batch)
    metals = [m for m in HEAVY_METALS if m in df.columns]
    if not metals:
        st.info("No heavy metal measurements in these samples.")
        return

    ratios = pd.DataFrame({
        "Metal": metals,
        "Mean / limit": [df[m].mean() / registry[m].max for m in metals],
        "Max / limit": [df[m].max() / registry[m].max for m in metals],
    })
    fig = px.bar(
        ratios.melt(id_vars="Metal", var_name="Statistic", value_name="Ratio"),
        x="Metal",
        y="Ratio",
        color="Statistic",
        barmode="group",
    )
    fig.add_hline(y=1.0, line_dash="dash", line_color="red")
    fig.update_layout(height=400)
    st.plotly_chart(fig, use_container_width=True)

    fig = px.histogram(df, x="hmpi", nbins=20, title="HMPI distribution")
    fig.update_layout(height=300)
    st.plotly_chart(fig, use_container_width=True)


def render_report_tab(batch: BatchAnalysis, rejected: list[int]):
    """Render the tabular report."""
    dq = batch.data_quality
    col1, col2, col3 = st.columns(3)
    with col1:
        st.metric("Completeness", f"{dq.completeness:.1f}%")
    with col2:
        st.metric("Data Quality", dq.quality)
    with col3:
        st.metric("Rejected Rows", len(rejected))

    st.markdown("### Summary")
    st.dataframe(summary_table(batch), use_container_width=True, hide_index=True)

    st.markdown("### Locations")
    st.dataframe(location_summary(batch), use_container_width=True)

    st.markdown("### Parameter Statistics")
    st.dataframe(parameter_statistics(batch), use_container_width=True)

    st.markdown("### Samples")
    st.dataframe(samples_to_dataframe(batch), use_container_width=True, hide_index=True)

    st.download_button(
        "Download text report",
        data=format_batch_summary(batch),
        file_name="water_quality_report.txt",
    )


def main():
    """Main dashboard entry point."""
    st.title("Water Quality Monitor")
    st.markdown("Heavy metal pollution and water quality indices for sampled sites")

    uploaded, demo_count = render_sidebar()
    samples, rejected = load_input(uploaded, demo_count)

    with st.spinner("Analyzing samples..."):
        try:
            batch = analyze_batch(samples)
        except BatchAnalysisError as e:
            st.error(f"Analysis failed: {e}")
            st.stop()

    tab1, tab2, tab3, tab4 = st.tabs([
        "📊 Overview",
        "📈 Trends",
        "⚗️ Heavy Metals",
        "📋 Report",
    ])

    with tab1:
        render_overview_tab(batch)

    with tab2:
        render_trends_tab(batch)

    with tab3:
        render_metals_tab(batch)

    with tab4:
        render_report_tab(batch, rejected)


if __name__ == "__main__":
    main()

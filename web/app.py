#!/usr/bin/env python3
from __future__ import annotations

import sys
from pathlib import Path

import streamlit as st

ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from voucher_analyzer.analysis import AnalysisResult
from voucher_analyzer.charts import build_chart_figure
from voucher_analyzer.columns import measure_options
from voucher_analyzer.config import ALL_FORMATS, CHART_TYPES, COUNT_MODE, COUNT_MODE_LABEL, TOP_N_OPTIONS
from voucher_analyzer.normalizer import format_currency
from voucher_analyzer.presentation import describe_transaction, format_entry_value, transaction_badge
from voucher_analyzer.session import DashboardSession, ERROR, SUCCESS, WARNING

UPLOAD_TYPES = [ext.lstrip(".") for ext in sorted(ALL_FORMATS)]


def ensure_state() -> DashboardSession:
    st.session_state.setdefault("dashboard", DashboardSession())
    st.session_state.setdefault("upload_signature", None)
    st.session_state.setdefault("details_artifact", None)
    st.session_state.setdefault("chart_artifact", None)
    return st.session_state["dashboard"]


def render_notice(session: DashboardSession) -> None:
    notice = session.notice
    if notice is None:
        return
    if notice.level == ERROR:
        st.error(notice.message)
    elif notice.level == WARNING:
        st.warning(notice.message)
    elif notice.level == SUCCESS:
        st.success(notice.message)
    else:
        st.info(notice.message)
    if session.load_warnings:
        st.warning(" | ".join(session.load_warnings))


def handle_upload(session: DashboardSession) -> None:
    uploaded = st.session_state.get("upload_input")
    if uploaded is None:
        return
    signature = (uploaded.name, uploaded.size)
    if signature == st.session_state["upload_signature"]:
        return
    st.session_state["upload_signature"] = signature
    st.session_state["details_artifact"] = None
    st.session_state["chart_artifact"] = None
    with st.spinner("Loading Data..."):
        session.load(uploaded.getvalue(), uploaded.name)


def _top_n_label(option: int | None) -> str:
    return "All" if option is None else str(option)


def _measure_label(option: str) -> str:
    return COUNT_MODE_LABEL if option == COUNT_MODE else option


def render_sidebar(session: DashboardSession) -> None:
    disabled = not session.is_data_loaded
    with st.sidebar:
        st.header("Voucher Data Analyzer")
        st.subheader("Upload Spreadsheet")
        st.file_uploader("Choose File", type=UPLOAD_TYPES, key="upload_input")
        if session.file_name:
            st.caption(f"File: {session.file_name}")
        st.caption("Accepted: " + ", ".join(f".{ext}" for ext in UPLOAD_TYPES) + ". Ensure column headers.")

        st.subheader("Data Configuration")
        top_n = st.selectbox(
            "Show Items",
            options=list(TOP_N_OPTIONS),
            index=list(TOP_N_OPTIONS).index(session.selection.top_n),
            format_func=_top_n_label,
            disabled=disabled,
        )
        session.set_top_n(top_n)

        labels = list(session.label_options())
        current_label = session.selection.label_column
        label = st.selectbox(
            "Select Label Column",
            options=labels,
            index=labels.index(current_label) if current_label in labels else None,
            placeholder="Select a column",
            disabled=disabled,
        )
        session.set_label_column(label)

        measures = measure_options(session.columns)
        current_measure = session.selection.measure
        if current_measure and current_measure not in measures:
            measures.append(current_measure)
        measure = st.selectbox(
            "Analyze Data Column",
            options=measures,
            index=measures.index(current_measure) if current_measure in measures else None,
            format_func=_measure_label,
            placeholder="Select a column",
            disabled=disabled,
        )
        session.set_measure(measure)

        chart_type = st.radio(
            "Select Chart Type",
            options=list(CHART_TYPES),
            index=list(CHART_TYPES).index(session.chart_type),
            horizontal=True,
            disabled=disabled,
        )
        session.set_chart_type(chart_type)

        st.subheader("Export Data")
        left, right = st.columns(2)
        if left.button("Chart", disabled=disabled, width="stretch"):
            st.session_state["chart_artifact"] = session.export_chart()
        if right.button("Top", disabled=disabled, width="stretch"):
            st.session_state["details_artifact"] = session.export_details()
        for key, label_text in (("chart_artifact", "Download chart"), ("details_artifact", "Download details")):
            artifact = st.session_state.get(key)
            if artifact is not None:
                st.download_button(
                    label_text,
                    data=artifact.data,
                    file_name=artifact.file_name,
                    mime=artifact.mime,
                    width="stretch",
                    key=f"download_{key}",
                )


def render_stats(result: AnalysisResult) -> None:
    cards = st.columns(3)
    cards[0].metric("Total Payment Voucher", f"{result.stats.total_rows:,}")
    cards[1].metric("Total Customer", f"{result.stats.distinct_entities:,}")
    cards[2].metric("Total Paid", format_currency(result.stats.total_monetary))


def render_chart(session: DashboardSession, result: AnalysisResult) -> None:
    fig = build_chart_figure(
        result.entries,
        session.chart_type,
        session.selection.label_column,
        result.measure_name,
    )
    st.pyplot(fig, clear_figure=True)


def render_top_items(result: AnalysisResult) -> None:
    if not result.detailed_entries:
        return
    st.subheader(result.title)
    for rank, item in enumerate(result.detailed_entries, start=1):
        value_text = format_entry_value(item.value, result.count_mode)
        badge = transaction_badge(len(item.details))
        heading = f"{rank}. {item.name}  —  {value_text}"
        if badge is None:
            st.markdown(f"**{heading}**")
            continue
        with st.expander(f"{heading}  •  {badge}"):
            for index, detail in enumerate(item.details):
                card = describe_transaction(detail, index)
                lines = [f"**{card.title}** — {card.amount}"]
                if card.customer:
                    lines.append(f"Customer: {card.customer}")
                if card.invoice_no:
                    lines.append(f"Invoice No: {card.invoice_no}")
                lines.append(f"Date: {card.date}")
                lines.append(f"Expire Date: {card.expire_date}")
                if card.processing_days is not None:
                    lines.append(f"Total Processing: {card.processing_days} days")
                if card.purpose:
                    lines.append(f"Purpose: {card.purpose}")
                st.markdown("  \n".join(lines))
                st.divider()


def main() -> None:
    st.set_page_config(page_title="Voucher Data Analyzer", page_icon="📊", layout="wide")
    session = ensure_state()
    handle_upload(session)
    render_sidebar(session)

    result = session.analysis()
    render_stats(result)
    render_notice(session)
    render_chart(session, result)
    render_top_items(result)

    if not session.is_data_loaded:
        st.info("Supported here: local uploads for " + " ".join(f".{ext}" for ext in UPLOAD_TYPES))


if __name__ == "__main__":
    main()

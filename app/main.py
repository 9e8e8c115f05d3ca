import sys
import os
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import streamlit as st
import pandas as pd
import plotly.express as px

from fintrack.config import CHART_COLORS, DATA_DIR, RECENT_HISTORY_LIMIT, configure_logging, ensure_data_directories
from fintrack.formatting import as_currency, format_percent
from fintrack.history import HistoryStore
from fintrack.services import DashboardService, default_service
from fintrack.session import (
    add_category,
    confirm_overwrite,
    initial_state,
    is_removable,
    load_snapshot,
    remove_category,
    save_snapshot,
    set_income,
    set_month,
    set_new_category,
    set_target_savings,
    update_category_amount,
)
from fintrack.storage import JsonFileStore
from fintrack.trend import has_trend, project_trend

st.set_page_config(page_title="FinTrack", layout="wide")

if "history" not in st.session_state:
    configure_logging()
    ensure_data_directories()
    st.session_state.history = HistoryStore.open(JsonFileStore(DATA_DIR))

if "dashboard" not in st.session_state:
    st.session_state.dashboard = initial_state()

# bumped whenever the form is replaced wholesale so widgets pick up new values
if "form_rev" not in st.session_state:
    st.session_state.form_rev = 0

if "pending_overwrite" not in st.session_state:
    st.session_state.pending_overwrite = None

history: HistoryStore = st.session_state.history
service: DashboardService = default_service()


def replace_form(state):
    st.session_state.dashboard = state
    st.session_state.form_rev += 1
    st.rerun()


def snapshots_df(snapshots):
    return pd.DataFrame([
        {
            "Month": s.month,
            "Income": as_currency(s.income),
            "Expense": as_currency(s.total_expense),
            "Savings": as_currency(s.savings),
            "Rate": f"{format_percent(s.savings_rate)}%",
        }
        for s in snapshots
    ])


def render_history(snapshots, key_prefix):
    st.dataframe(snapshots_df(snapshots), hide_index=True, use_container_width=True)
    for s in snapshots:
        c1, c2, c3 = st.columns([2, 1, 1])
        c1.caption(f"{s.month} · saved {pd.to_datetime(s.created_at, unit='ms'):%Y-%m-%d %H:%M}")
        if c2.button("Load", key=f"{key_prefix}_load_{s.id}"):
            replace_form(load_snapshot(st.session_state.dashboard, s))
        if c3.button("Delete", key=f"{key_prefix}_del_{s.id}"):
            history.delete(s.id)
            st.rerun()


rev = st.session_state.form_rev
state = st.session_state.dashboard

st.markdown("**FinTrack**")
st.title("Personal Finance Analytics Dashboard")
st.caption("Track your income, understand spending patterns, and improve savings with clean visual insights.")

col_inputs, col_summary = st.columns([1, 1])

with col_inputs:
    st.subheader("Monthly Inputs")
    c1, c2 = st.columns(2)
    with c1:
        state = set_month(state, st.text_input("Month (YYYY-MM)", value=state.month, key=f"month_{rev}"))
    with c2:
        state = set_target_savings(state, st.text_input(
            "Target Savings", value=state.target_savings, placeholder="Set monthly target", key=f"target_{rev}"
        ))
    state = set_income(state, st.text_input(
        "Monthly Income", value=state.income, placeholder="Enter income", key=f"income_{rev}"
    ))

    removed = None
    for idx, category in enumerate(state.categories):
        c_amount, c_remove = st.columns([4, 1])
        with c_amount:
            amount = st.text_input(category.name, value=str(category.amount), placeholder="0", key=f"cat_{rev}_{idx}")
            state = update_category_amount(state, idx, amount)
        with c_remove:
            removable = is_removable(category)
            if st.button(
                "Remove",
                key=f"rm_{rev}_{idx}",
                disabled=not removable,
                help="Remove category" if removable else "Default categories cannot be removed",
            ):
                removed = idx

    c_new, c_add = st.columns([4, 1])
    with c_new:
        state = set_new_category(state, st.text_input(
            "New category", value=state.new_category, placeholder="Add custom category", key=f"new_cat_{rev}"
        ))
    with c_add:
        if st.button("Add", key=f"add_{rev}"):
            replace_form(add_category(state))
    if removed is not None:
        replace_form(remove_category(state, removed))

    st.session_state.dashboard = state
    report = service.report(state)
    result = report["result"]
    errors = DashboardService.messages(report)

    if st.button("Save Snapshot", type="primary"):
        outcome = save_snapshot(state, history)
        if outcome.is_left() and outcome.get_error()["error"] == "duplicate_month":
            st.session_state.pending_overwrite = state.month
        elif outcome.is_left():
            st.error(outcome.get_error()["message"])
        else:
            st.success(f"Saved snapshot for {state.month}.")

    pending = st.session_state.pending_overwrite
    if pending and pending != state.month:
        st.session_state.pending_overwrite = pending = None
    if pending:
        st.warning(f"A snapshot for {pending} already exists. Overwrite it?")
        c_yes, c_no = st.columns(2)
        if c_yes.button("Overwrite"):
            st.session_state.pending_overwrite = None
            outcome = confirm_overwrite(state, history, pending)
            if outcome.is_left():
                st.error(outcome.get_error()["message"])
            st.rerun()
        if c_no.button("Cancel"):
            st.session_state.pending_overwrite = None
            st.rerun()

    for error in errors:
        st.error(error)
    if result["warning"]:
        st.warning(result["warning"])

totals = result["totals"]

with col_summary:
    st.subheader("Summary")
    k1, k2, k3, k4 = st.columns(4)
    k1.metric("Total Expense", as_currency(totals.total_expense))
    k2.metric("Savings", as_currency(totals.savings))
    k3.metric("Savings Rate", f"{format_percent(totals.savings_rate)}%")
    k4.metric("Highest Category", totals.highest_category.name)

    st.markdown("#### Net Balance")
    st.markdown(f"### {as_currency(totals.savings)}")
    st.progress(max(0.0, min(100.0, totals.savings_rate)) / 100)
    st.caption(f"{as_currency(totals.total_expense)} spent · {format_percent(totals.savings_rate)}% saved")

    st.markdown("#### Target Check")
    st.write(result["target_message"])

    st.markdown("#### Insights")
    for insight in result["insights"]:
        st.markdown(f"- {insight}")

st.subheader("Spending Breakdown")
chart_rows = result["chart_data"]
if not chart_rows:
    st.info("Add expense values to view charts.")
else:
    df_chart = pd.DataFrame([{"Category": c.name, "Amount": c.amount} for c in chart_rows])
    c_pie, c_bar = st.columns(2)
    with c_pie:
        fig_pie = px.pie(
            df_chart, values="Amount", names="Category",
            title="Category Share", color_discrete_sequence=list(CHART_COLORS),
        )
        st.plotly_chart(fig_pie, use_container_width=True)
    with c_bar:
        fig_bar = px.bar(
            df_chart, x="Category", y="Amount", color="Category",
            title="Category Amounts", color_discrete_sequence=list(CHART_COLORS),
        )
        fig_bar.update_layout(showlegend=False)
        st.plotly_chart(fig_bar, use_container_width=True)

st.subheader("History")
ordered = history.ordered_most_recent()
if not ordered:
    st.info("No snapshots saved yet. Save your first snapshot to start tracking history.")
else:
    render_history(history.recent(RECENT_HISTORY_LIMIT), "recent")
    if len(ordered) > RECENT_HISTORY_LIMIT:
        with st.expander("View all history"):
            render_history(ordered, "all")
    confirm_clear = st.checkbox("I understand clearing history cannot be undone")
    if st.button("Clear all history", disabled=not confirm_clear):
        history.clear()
        st.rerun()

st.subheader("Savings Trend")
trend = project_trend(history.snapshots())
if not has_trend(trend):
    st.info("Save at least two monthly snapshots to unlock your savings trend.")
else:
    df_trend = pd.DataFrame(trend, columns=["month", "savings"])
    fig_trend = px.line(df_trend, x="month", y="savings", markers=True, title="Savings by Month")
    fig_trend.update_traces(line_color=CHART_COLORS[0])
    st.plotly_chart(fig_trend, use_container_width=True)

from __future__ import annotations

import csv
import io
import logging
from pathlib import Path

import streamlit as st

from campaign_store import CampaignStore
from config import AppConfig, load_config
from data_processor import build_table_rows, build_totals_row, format_url, profile_display_text
from errors import MissingFieldsError
from models import VIDEO_SLOTS, InfluencerInput, InfluencerUpdate, Status, Video
from storage import LocalStorage, PersistenceBridge

logging.basicConfig(level=logging.INFO, format="%(asctime)s [%(levelname)s] %(message)s")

STATUS_OPTIONS = [s.value for s in Status]

config = load_config() if Path("config.yaml").exists() else AppConfig()

st.set_page_config(page_title=config.title, page_icon="📈", layout="wide")
st.title(config.title)
st.caption("Track and manage influencer posts for your marketing campaigns")

# ── Store: one per browser session, loaded once ──

if "store" not in st.session_state:
    bridge = PersistenceBridge(LocalStorage(config.storage_path), key=config.storage_key)
    store = CampaignStore(bridge)
    store.initialize()
    st.session_state["store"] = store
    st.session_state["status_filter"] = list(STATUS_OPTIONS)

store: CampaignStore = st.session_state["store"]

# ── Add influencer form ──

with st.expander("Add New Influencer", expanded=True):
    with st.form("add_influencer", clear_on_submit=True):
        col1, col2, col3 = st.columns(3)
        username = col1.text_input("Username *", placeholder="@username")
        profile_link = col2.text_input("Profile Link *", placeholder="https://...")
        platform = col3.selectbox("Platform *", config.platforms, index=None, placeholder="Select platform")

        col1, col2 = st.columns(2)
        median_views = col1.number_input("Views Median *", min_value=0, value=0, step=1000)
        total_views = col2.number_input("Total Views *", min_value=0, value=0, step=1000)

        st.markdown("**Video Information**")
        video_cols = st.columns(VIDEO_SLOTS)
        video_inputs = []
        for i, col in enumerate(video_cols, 1):
            with col:
                st.markdown(f"Video #{i}")
                link = st.text_input("Video Link", key=f"video_link_{i}", placeholder="https://...")
                posted = st.date_input("Posted On", value=None, key=f"video_date_{i}")
                views = st.number_input("Views", min_value=0, value=0, step=1000, key=f"video_views_{i}")
                video_inputs.append(Video(link=link, posted_date=posted, views=views))

        st.caption(f"Views Now (auto-calculated): {sum(v.views for v in video_inputs):,}")

        status = st.selectbox("Status *", STATUS_OPTIONS, index=None, placeholder="Select status")
        submitted = st.form_submit_button("Add Influencer", type="primary")

    if submitted:
        try:
            added = store.add(
                InfluencerInput(
                    username=username,
                    profile_link=profile_link,
                    platform=platform or "",
                    median_views=median_views,
                    total_views=total_views,
                    videos=video_inputs,
                    status=status,
                )
            )
        except MissingFieldsError as e:
            st.error(str(e))
        else:
            st.toast(f"🎉 {added.username} added to campaign! Platform: {added.platform} | Status: {added.status.value}")

# ── Dashboard ──

st.markdown("---")
st.subheader("Campaign Dashboard")


def _show_all():
    st.session_state["status_filter"] = list(STATUS_OPTIONS)


def _clear_all():
    st.session_state["status_filter"] = []


filter_col, all_col, clear_col = st.columns([6, 1, 1])
with filter_col:
    selected = st.multiselect("Filter by Status", STATUS_OPTIONS, key="status_filter")
all_col.button("Show All", on_click=_show_all)
clear_col.button("Clear All", on_click=_clear_all)
store.set_status_filter(selected)

if not store.records:
    st.info("No influencers added yet. Use the form above to add your first influencer!")
    st.stop()

visible = store.filtered_records()
stats = store.aggregate_stats(visible)

m1, m2, m3, m4, m5 = st.columns(5)
m1.metric("Influencers", stats.count)
m2.metric("Total Views", f"{stats.total_views_sum:,}")
m3.metric("Real Reach", f"{stats.real_reach:,}")
m4.metric("Progress", stats.progress_display)
m5.metric("Paid", stats.paid_count)

rows = build_table_rows(visible)
totals = build_totals_row(stats)

st.dataframe(
    rows,
    use_container_width=True,
    hide_index=True,
    column_config={"Profile": st.column_config.LinkColumn("Profile")},
)
st.dataframe([totals], use_container_width=True, hide_index=True)

# CSV download
csv_buffer = io.StringIO()
if rows:
    writer = csv.DictWriter(csv_buffer, fieldnames=rows[0].keys())
    writer.writeheader()
    writer.writerows(rows)
    writer.writerow(totals)

st.download_button(
    "Download CSV",
    data=csv_buffer.getvalue(),
    file_name="campaign.csv",
    mime="text/csv",
    disabled=not rows,
)

# ── Actions on a single influencer ──

if not visible:
    st.stop()

st.markdown("---")
st.subheader("Manage Influencer")

by_label = {f"{profile_display_text(r.username)} (#{r.id})": r.id for r in visible}
label = st.selectbox("Influencer", list(by_label))
influencer = store.get(by_label[label])

st.markdown(f"[{profile_display_text(influencer.username)}]({format_url(influencer.profile_link)})")

pay_col, delete_col = st.columns(2)

with pay_col:
    action = "Mark as Unpaid" if influencer.paid else "Mark as Paid"
    confirm_paid = st.checkbox(f"Yes, update payment status for {influencer.username}")
    if st.button(action, disabled=not confirm_paid):
        updated = store.toggle_paid(influencer.id)
        if updated is not None and updated.paid:
            st.toast(f"✅ {updated.username} marked as paid!")
        elif updated is not None:
            st.toast(f"💰 {updated.username} marked as unpaid")
        st.rerun()

with delete_col:
    confirm_delete = st.checkbox(f"Yes, permanently remove {influencer.username} from the campaign")
    if st.button("Delete Influencer", disabled=not confirm_delete):
        if store.remove(influencer.id):
            st.toast(f"🗑️ {influencer.username} deleted")
        st.rerun()

with st.expander("Edit status and videos"):
    with st.form(f"edit_{influencer.id}"):
        new_status = st.selectbox(
            "Status", STATUS_OPTIONS, index=STATUS_OPTIONS.index(influencer.status.value)
        )
        edit_cols = st.columns(VIDEO_SLOTS)
        new_videos = []
        for i, (col, video) in enumerate(zip(edit_cols, influencer.videos), 1):
            with col:
                st.markdown(f"Video #{i}")
                link = st.text_input("Video Link", value=video.link, key=f"edit_link_{influencer.id}_{i}")
                posted = st.date_input("Posted On", value=video.posted_date, key=f"edit_date_{influencer.id}_{i}")
                views = st.number_input("Views", min_value=0, value=video.views, step=1000, key=f"edit_views_{influencer.id}_{i}")
                new_videos.append(Video(link=link, posted_date=posted, views=views))
        if st.form_submit_button("Save changes"):
            store.update(influencer.id, InfluencerUpdate(status=new_status, videos=new_videos))
            st.toast(f"{influencer.username} updated")
            st.rerun()

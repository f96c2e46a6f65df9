from datetime import datetime
from typing import Any, Dict, List, Optional

import pandas as pd
import requests
import streamlit as st
from dotenv import load_dotenv

load_dotenv()

st.set_page_config(page_title="Pill Reminder Demo", layout="wide")

# ---------------------------
# Config
# ---------------------------
DEFAULT_API_BASE = "http://127.0.0.1:8000"
API_BASE = st.sidebar.text_input("API Base URL", value=DEFAULT_API_BASE)

STATUS_LABELS = {"taken": "Taken", "skipped": "Not taken", "pending": "Pending"}

# ---------------------------
# Helpers (API)
# ---------------------------
def api_post(path: str, payload: Dict[str, Any]) -> Any:
    url = f"{API_BASE}{path}"
    r = requests.post(url, json=payload, timeout=60)
    if r.status_code >= 400:
        raise RuntimeError(f"{r.status_code} {r.text}")
    return r.json()

def api_get(path: str, params: Optional[Dict[str, Any]] = None) -> Any:
    url = f"{API_BASE}{path}"
    r = requests.get(url, params=params or {}, timeout=20)
    if r.status_code >= 400:
        raise RuntimeError(f"{r.status_code} {r.text}")
    return r.json()

def api_delete(path: str) -> None:
    url = f"{API_BASE}{path}"
    r = requests.delete(url, timeout=20)
    if r.status_code >= 400:
        raise RuntimeError(f"{r.status_code} {r.text}")

def hhmm(iso: str) -> str:
    return datetime.fromisoformat(iso).strftime("%H:%M")

# ---------------------------
# Session state
# ---------------------------
if "doctor_visit" not in st.session_state:
    st.session_state.doctor_visit = None

try:
    medications: List[Dict[str, Any]] = api_get("/medications")
    doses: List[Dict[str, Any]] = api_get("/doses/today")
    stats: Dict[str, Any] = api_get("/adherence")
except Exception as e:
    st.error(f"API not reachable: {e}")
    st.stop()

meds_by_id = {m["id"]: m for m in medications}

st.title("💊 Pill Reminder")

tab_today, tab_meds, tab_report, tab_doctor = st.tabs(["Today", "Medications", "Report", "Doctor visit"])

# ---------------------------
# Today
# ---------------------------
with tab_today:
    upcoming = [d for d in doses if d["status"] == "pending"]
    done = [d for d in doses if d["status"] != "pending"]

    if not doses:
        st.info("No doses scheduled for today. Add a medication to get started.")

    if upcoming:
        st.subheader("Upcoming")
    for d in upcoming:
        med = meds_by_id.get(d["medication_id"])
        if not med:
            continue
        c1, c2, c3 = st.columns([3, 1, 1])
        c1.write(f"**{hhmm(d['scheduled_time'])}** · {med['name']} ({med['dosage']})")
        if c2.button("✅ Taken", key=f"take_{d['id']}"):
            api_post(f"/doses/{d['id']}/status", {"status": "taken"})
            st.toast(f"{med['name']} marked as taken.")
            st.rerun()
        if c3.button("❌ Skipped", key=f"skip_{d['id']}"):
            api_post(f"/doses/{d['id']}/status", {"status": "skipped"})
            st.toast(f"{med['name']} marked as not taken.")
            st.rerun()

    if done:
        st.subheader("History")
    for d in done:
        med = meds_by_id.get(d["medication_id"])
        if not med:
            continue
        st.write(f"{hhmm(d['scheduled_time'])} · {med['name']} — {STATUS_LABELS[d['status']]}")

    st.divider()
    perm = api_get("/notifications/permission")["permission"]
    st.caption(f"Notifications: `{perm}`")
    if perm == "default" and st.button("🔔 Enable notifications"):
        api_post("/notifications/permission", {"granted": True})
        st.rerun()
    for n in api_get("/notifications")[-5:]:
        st.info(f"**{n['title']}** — {n['body']}")

# ---------------------------
# Medications
# ---------------------------
with tab_meds:
    with st.form("add_med", clear_on_submit=True):
        st.subheader("Add medication")
        name = st.text_input("Name")
        dosage = st.text_input("Dosage", placeholder="e.g. 500mg")
        frequency = st.selectbox("Every", [8, 12, 24], index=2, format_func=lambda h: f"{h} hours")
        start_time = st.text_input("First dose (HH:MM)", value="08:00")
        observations = st.text_area("Observations (optional)")
        if st.form_submit_button("Add"):
            try:
                api_post("/medications", {
                    "name": name,
                    "dosage": dosage,
                    "frequency": frequency,
                    "start_time": start_time,
                    "observations": observations or None,
                })
                st.success(f"{name} added to your list.")
                st.rerun()
            except Exception as e:
                st.error(str(e))

    st.subheader("Your medications")
    for m in medications:
        c1, c2 = st.columns([4, 1])
        c1.write(f"**{m['name']}** {m['dosage']} · every {m['frequency']}h from {m['start_time']}")
        if m.get("observations"):
            c1.caption(m["observations"])
        if c2.button("🗑️ Delete", key=f"del_{m['id']}"):
            api_delete(f"/medications/{m['id']}")
            st.rerun()

# ---------------------------
# Report
# ---------------------------
with tab_report:
    st.metric("Adherence rate", f"{stats['adherence_rate']}%")
    chart_df = pd.DataFrame(
        [{"status": "Taken", "doses": stats["taken"]}, {"status": "Skipped", "doses": stats["skipped"]}]
    ).set_index("status")
    st.bar_chart(chart_df)
    st.caption(f"Pending today: {stats['pending']}")

    if medications:
        st.dataframe(
            pd.DataFrame(medications)[["name", "dosage", "frequency", "start_time"]],
            use_container_width=True,
        )

# ---------------------------
# Doctor visit
# ---------------------------
with tab_doctor:
    st.write("Generate a list of questions to discuss with your doctor based on your adherence and observations.")
    health_details = st.text_area(
        "Health details",
        placeholder="e.g., Any new symptoms, side effects, or concerns you want to discuss...",
    )
    if st.button("✨ Generate Questions"):
        with st.spinner("Generating..."):
            try:
                st.session_state.doctor_visit = api_post("/doctor-visit/prompt", {"health_details": health_details})
            except Exception as e:
                st.session_state.doctor_visit = None
                st.error(f"An error occurred while generating the prompt. {e}")

    result = st.session_state.doctor_visit
    if result:
        if result.get("questions"):
            for q in result["questions"]:
                st.markdown(f"- {q}")
        else:
            st.write(result["prompt"])
        st.caption(result.get("safety_note", ""))

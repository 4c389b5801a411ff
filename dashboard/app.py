"""Streamlit dashboard for lecture hall reservations."""

from __future__ import annotations

import datetime
from typing import Any, Dict, List, Optional

import pandas as pd
import requests
import streamlit as st

# ==========================================
# Configuration & Constants
# ==========================================
# Point this to your local FastAPI server
API_BASE_URL = "http://127.0.0.1:8000"

st.set_page_config(
    page_title="Lecture Hall Reservations",
    page_icon="🏛️",
    layout="wide",
)

# ==========================================
# API Helper Functions
# ==========================================
def fetch_lecture_halls() -> List[int]:
    try:
        response = requests.get(f"{API_BASE_URL}/lecture_halls", timeout=5)
        response.raise_for_status()
        return [item["number"] for item in response.json()]
    except requests.exceptions.RequestException as e:
        st.error(f"Backend connection failed: {e}")
        return []


def fetch_lecturers() -> List[Dict[str, Any]]:
    try:
        response = requests.get(f"{API_BASE_URL}/lecturers", timeout=5)
        response.raise_for_status()
        return response.json()
    except requests.exceptions.RequestException as e:
        st.error(f"Backend connection failed: {e}")
        return []


def fetch_free_hours(day: str) -> Optional[List[Dict[str, Any]]]:
    """Calls the free-hours statistics endpoint."""
    try:
        response = requests.get(
            f"{API_BASE_URL}/lecture_halls/free_hours",
            params={"day": day},
            timeout=5,
        )
        if response.status_code == 400:
            st.warning(response.json().get("detail", "Day must be in the future"))
            return None
        response.raise_for_status()
        return response.json()
    except requests.exceptions.RequestException as e:
        st.error(f"Free hours request failed: {e}")
        return None


def fetch_day_schedule(day: str, hall_number: int) -> Optional[List[Dict[str, Any]]]:
    try:
        response = requests.get(
            f"{API_BASE_URL}/reservations/by_day",
            params={"day": day, "hall_number": hall_number},
            timeout=5,
        )
        if response.status_code == 404:
            st.warning(response.json().get("detail", "Unknown lecture hall"))
            return None
        response.raise_for_status()
        return response.json()
    except requests.exceptions.RequestException as e:
        st.error(f"Schedule request failed: {e}")
        return None


def submit_reservation(payload: Dict[str, Any], dry_run: bool) -> Optional[Dict[str, Any]]:
    """Validate (dry run) or add a reservation; rejections come back as data."""
    path = "/reservations/validate" if dry_run else "/reservations"
    try:
        response = requests.post(f"{API_BASE_URL}{path}", json=payload, timeout=5)
        if response.status_code == 422 and isinstance(response.json().get("detail"), dict):
            return response.json()["detail"]
        response.raise_for_status()
        body = response.json()
        return body if dry_run else body["validation"]
    except requests.exceptions.RequestException as e:
        st.error(f"Reservation request failed: {e}")
        return None


# ==========================================
# UI Page Functions
# ==========================================
def render_free_hours_page() -> None:
    st.header("📊 Free Hours by Day")
    st.markdown("Unbooked working hours (08:00–18:00) for every lecture hall.")

    day = st.date_input(
        "Day",
        datetime.date.today() + datetime.timedelta(days=1),
        key="free_hours_day",
    )
    if st.button("Load Statistics", type="primary"):
        result = fetch_free_hours(day.isoformat())
        if result:
            df = pd.DataFrame(result).sort_values("hall_number")
            st.dataframe(df, use_container_width=True)
            st.bar_chart(df.set_index("hall_number")["free_hours"])


def render_schedule_page() -> None:
    st.header("🗓️ Day Schedule")

    halls = fetch_lecture_halls()
    col1, col2 = st.columns(2)
    with col1:
        day = st.date_input("Day", datetime.date.today(), key="schedule_day")
    with col2:
        hall_number = st.selectbox("Lecture Hall", halls) if halls else None

    if hall_number is not None and st.button("Show Schedule", type="primary"):
        result = fetch_day_schedule(day.isoformat(), int(hall_number))
        if result is None:
            return
        if not result:
            st.info("No reservations on this day.")
            return
        df = pd.DataFrame(result)
        df["start_time"] = pd.to_datetime(df["start_time"]).dt.strftime("%H:%M")
        df["end_time"] = pd.to_datetime(df["end_time"]).dt.strftime("%H:%M")
        st.dataframe(df, use_container_width=True)


def render_booking_page() -> None:
    st.header("✍️ New Reservation")

    halls = fetch_lecture_halls()
    lecturers = fetch_lecturers()
    lecturer_labels = {
        f"{item['name']} {item['surname']} (#{item['id']})": item["id"] for item in lecturers
    }

    col1, col2 = st.columns(2)
    with col1:
        day = st.date_input("Day", datetime.date.today() + datetime.timedelta(days=1), key="booking_day")
        start = st.time_input("From", datetime.time(9, 0))
        end = st.time_input("To", datetime.time(10, 0))
    with col2:
        hall_number = st.selectbox("Lecture Hall", halls) if halls else None
        lecturer_label = st.selectbox("Lecturer", list(lecturer_labels)) if lecturer_labels else None

    if hall_number is None or lecturer_label is None:
        st.info("No lecture halls or lecturers registered yet.")
        return

    payload = {
        "start_time": datetime.datetime.combine(day, start).isoformat(),
        "end_time": datetime.datetime.combine(day, end).isoformat(),
        "lecture_hall_number": int(hall_number),
        "lecturer_id": lecturer_labels[lecturer_label],
    }

    check_col, add_col = st.columns(2)
    result = None
    if check_col.button("Check"):
        result = submit_reservation(payload, dry_run=True)
    if add_col.button("Reserve", type="primary"):
        result = submit_reservation(payload, dry_run=False)

    if result is None:
        return
    if result.get("admitted"):
        st.success("Reservation can be admitted.")
    else:
        st.error("Reservation rejected:")
        for reason in result.get("reasons", []):
            st.write(f"- {reason.replace('_', ' ').lower()}")


# ==========================================
# Main App Router
# ==========================================
def main() -> None:
    st.sidebar.title("Lecture Hall Reservations")
    st.sidebar.markdown("---")

    page = st.sidebar.radio(
        "Navigation",
        ["Free Hours", "Day Schedule", "New Reservation"],
    )

    if page == "Free Hours":
        render_free_hours_page()
    elif page == "Day Schedule":
        render_schedule_page()
    elif page == "New Reservation":
        render_booking_page()


if __name__ == "__main__":
    main()

from __future__ import annotations

from datetime import date

import requests
import streamlit as st

from ayursutra.client import ApiNotFound, api_get, api_post, api_put, patient_history_path
from ayursutra.config import settings

st.set_page_config(page_title="AyurSutra", layout="wide")

PROGRESS_OPTIONS = ["scheduled", "in-progress", "completed"]
NOTIFICATION_TYPES = ["pre-procedure", "post-procedure", "reminder", "alert", "milestone"]
PRIORITIES = ["low", "medium", "high", "urgent"]



# Sidebar

with st.sidebar:
    st.header("AyurSutra")
    st.caption("Panchakarma therapy center")
    if st.button("Refresh data", key="refresh_btn"):
        st.cache_data.clear()
        st.rerun()
    st.divider()
    st.caption(f"API: {settings.api_base}")



# Cached reference data

@st.cache_data(ttl=10)
def load_therapies() -> list[dict]:
    return api_get("/api/therapies")


@st.cache_data(ttl=10)
def load_practitioners() -> list[dict]:
    return api_get("/api/practitioners")


def refresh() -> None:
    st.cache_data.clear()
    st.rerun()


def booking_label(b: dict) -> str:
    therapy = (b.get("therapy") or {}).get("name", "-")
    return f"#{b['id']} {b['patientName']} | {therapy} | {b['date']} {b['time']}"


st.title("AyurSutra - Panchakarma Management")

try:
    therapies = load_therapies()
    practitioners = load_practitioners()
except requests.RequestException as e:
    st.error(f"API unreachable: {e}")
    st.stop()

tabs = st.tabs(["Dashboard", "Schedule", "Patients", "Notifications", "Feedback", "Analytics"])



# TAB 1 - Dashboard

with tabs[0]:
    try:
        stats = api_get("/api/dashboard-stats")
        bookings = api_get("/api/bookings")
    except requests.RequestException as e:
        st.error(f"Dashboard error: {e}")
    else:
        c1, c2, c3, c4 = st.columns(4)
        c1.metric("Total bookings", stats["totalBookings"])
        c2.metric("Completed", stats["completedSessions"])
        c3.metric("Upcoming", stats["upcomingSessions"])
        c4.metric("Unread notifications", stats["unreadNotifications"])

        left, right = st.columns(2)
        with left:
            st.subheader("Weekly sessions")
            st.bar_chart(stats["weeklyProgress"], x="day", y="sessions")
        with right:
            st.subheader("Therapy distribution")
            st.bar_chart(stats["therapyDistribution"], x="name", y="value")

        st.subheader("Active therapies")
        active = [b for b in bookings if b["progress"] == "in-progress"]
        if not active:
            st.info("No therapy in progress.")
        for b in active:
            st.write(booking_label(b))
            st.progress(min(b["day"] / b["totalDays"], 1.0), text=f"Day {b['day']} of {b['totalDays']}")

        st.subheader("Upcoming sessions")
        upcoming = [b for b in bookings if b["progress"] in ("scheduled", "in-progress")]
        if not upcoming:
            st.info("No upcoming sessions.")
        for b in upcoming:
            practitioner = (b.get("practitioner") or {}).get("name", "-")
            st.write(f"- {booking_label(b)} | {practitioner}")



# TAB 2 - Schedule

with tabs[1]:
    st.subheader("Therapy schedule")

    f1, f2 = st.columns(2)
    status_filter = f1.selectbox("Progress", ["all"] + PROGRESS_OPTIONS, key="sched_filter")
    search = f2.text_input("Search patient, therapy or practitioner", key="sched_search")

    params = {}
    if status_filter != "all":
        params["progress"] = status_filter
    if search.strip():
        params["search"] = search.strip()

    try:
        bookings = api_get("/api/bookings", params=params)
    except requests.RequestException as e:
        st.error(f"Bookings error: {e}")
        bookings = []

    if not bookings:
        st.info("No bookings match the filters.")
    for b in bookings:
        with st.expander(f"{booking_label(b)} | {b['progress']} ({b['day']}/{b['totalDays']})"):
            practitioner = (b.get("practitioner") or {}).get("name", "-")
            st.write(f"Practitioner: **{practitioner}** | Cost: {b['cost']} | Payment: {b['paymentStatus']}")
            st.write(f"Notes: {b.get('notes') or '-'}")

            c1, c2, c3 = st.columns(3)
            new_progress = c1.selectbox(
                "Progress",
                PROGRESS_OPTIONS,
                index=PROGRESS_OPTIONS.index(b["progress"]),
                key=f"prog_{b['id']}",
            )
            new_day = c2.number_input(
                "Day", min_value=0, max_value=b["totalDays"], value=b["day"], key=f"day_{b['id']}"
            )
            if c3.button("Update", key=f"upd_{b['id']}"):
                try:
                    api_put(f"/api/bookings/{b['id']}/progress", {"progress": new_progress, "day": int(new_day)})
                    refresh()
                except (ApiNotFound, requests.RequestException) as e:
                    st.error(str(e))

    st.divider()
    book_col, auto_col = st.columns(2)

    with book_col:
        st.subheader("Book a session")
        with st.form("booking_form", clear_on_submit=True):
            patient = st.text_input("Patient name")
            therapy = st.selectbox("Therapy", therapies, format_func=lambda t: f"{t['name']} ({t['duration']})")
            practitioner = st.selectbox("Practitioner", practitioners, format_func=lambda p: p["name"])
            day = st.date_input("Date", value=date.today())
            time = st.time_input("Time")
            total_days = st.number_input("Total days", min_value=1, value=1)
            if st.form_submit_button("Create booking"):
                if not patient.strip():
                    st.error("Patient name is required.")
                else:
                    try:
                        res = api_post(
                            "/api/bookings",
                            {
                                "patientName": patient.strip(),
                                "therapyId": therapy["id"],
                                "practitionerId": practitioner["id"],
                                "date": day.isoformat(),
                                "time": time.strftime("%H:%M"),
                                "totalDays": int(total_days),
                            },
                        )
                        st.success(f"Booking #{res['id']} created.")
                    except (ApiNotFound, requests.RequestException) as e:
                        st.error(str(e))

    with auto_col:
        st.subheader("Auto-schedule a course")
        with st.form("auto_form", clear_on_submit=True):
            patient = st.text_input("Patient name", key="auto_patient")
            therapy = st.selectbox(
                "Therapy", therapies, format_func=lambda t: t["name"], key="auto_therapy"
            )
            practitioner = st.selectbox(
                "Practitioner", practitioners, format_func=lambda p: p["name"], key="auto_practitioner"
            )
            start = st.date_input("Start date", value=date.today(), key="auto_start")
            time = st.time_input("Preferred time", key="auto_time")
            total_days = st.number_input("Sessions", min_value=1, max_value=60, value=5, key="auto_days")
            frequency = st.radio("Frequency", ["daily", "weekly"], horizontal=True, key="auto_freq")
            if st.form_submit_button("Create schedule"):
                if not patient.strip():
                    st.error("Patient name is required.")
                else:
                    try:
                        created = api_post(
                            "/api/bookings/auto-schedule",
                            {
                                "patientName": patient.strip(),
                                "therapyId": therapy["id"],
                                "practitionerId": practitioner["id"],
                                "startDate": start.isoformat(),
                                "preferredTime": time.strftime("%H:%M"),
                                "totalDays": int(total_days),
                                "frequency": frequency,
                            },
                        )
                        st.success(f"{len(created)} sessions created from {created[0]['date']}.")
                    except (ApiNotFound, requests.RequestException) as e:
                        st.error(str(e))



# TAB 3 - Patients

with tabs[2]:
    st.subheader("Patients")

    try:
        patients = api_get("/api/patients")
    except requests.RequestException as e:
        st.error(f"Patients error: {e}")
        patients = []

    if not patients:
        st.info("No patients yet.")
    else:
        st.dataframe(patients, use_container_width=True, hide_index=True)

        selected = st.selectbox("Patient history", patients, format_func=lambda p: p["name"], key="pat_sel")
        try:
            history = api_get(patient_history_path(selected["name"]))
            st.write("Bookings:")
            for b in history["bookings"]:
                st.write(f"- {booking_label(b)} | {b['progress']} ({b['day']}/{b['totalDays']})")
            st.write("Feedback:")
            if not history["feedback"]:
                st.caption("No feedback.")
            for f in history["feedback"]:
                st.write(f"- {f['date']} | {f['rating']}/5 | {f['improvements'] or '-'}")
        except (ApiNotFound, requests.RequestException) as e:
            st.error(f"History error: {e}")



# TAB 4 - Notifications

with tabs[3]:
    st.subheader("Notifications")

    c1, c2, c3, c4 = st.columns(4)
    n_type = c1.selectbox("Type", ["all"] + NOTIFICATION_TYPES, key="not_type")
    n_priority = c2.selectbox("Priority", ["all"] + PRIORITIES, key="not_priority")
    only_unread = c3.checkbox("Unread only", key="not_unread")
    n_search = c4.text_input("Search", key="not_search")

    params = {}
    if n_type != "all":
        params["type"] = n_type
    if n_priority != "all":
        params["priority"] = n_priority
    if only_unread:
        params["unread"] = "true"
    if n_search.strip():
        params["search"] = n_search.strip()

    try:
        notifications = api_get("/api/notifications", params=params)
    except requests.RequestException as e:
        st.error(f"Notifications error: {e}")
        notifications = []

    if not notifications:
        st.info("No notifications.")
    for n in notifications:
        col_text, col_btn = st.columns([5, 1])
        marker = "" if n["read"] else "🔵 "
        col_text.write(
            f"{marker}**{n['title']}** | {n['type']} | {n['priority']} | {n.get('patientName') or '-'}\n\n"
            f"{n['message']}  \n_{', '.join(n.get('channels') or [])}_"
        )
        if not n["read"] and col_btn.button("Mark read", key=f"read_{n['id']}"):
            try:
                api_put(f"/api/notifications/{n['id']}/read")
                refresh()
            except (ApiNotFound, requests.RequestException) as e:
                st.error(str(e))



# TAB 5 - Feedback

with tabs[4]:
    st.subheader("Patient feedback")

    try:
        analytics = api_get("/api/feedback/analytics")
    except requests.RequestException as e:
        st.error(f"Feedback analytics error: {e}")
        analytics = None

    if analytics:
        c1, c2, c3, c4 = st.columns(4)
        c1.metric("Feedback", analytics["totalFeedback"])
        c2.metric("Average rating", f"{analytics['averageRating']:.1f}")
        c3.metric("Would recommend", f"{analytics['recommendationRate']:.0f}%")
        c4.metric("Follow-up needed", analytics["followUpNeeded"])
        st.bar_chart(analytics["ratingDistribution"], x="rating", y="count")

    f1, f2 = st.columns(2)
    rating_filter = f1.selectbox("Rating", ["all", 5, 4, 3, 2, 1], key="fb_rating")
    fb_search = f2.text_input("Search", key="fb_search")

    params = {}
    if rating_filter != "all":
        params["rating"] = rating_filter
    if fb_search.strip():
        params["search"] = fb_search.strip()

    try:
        feedback = api_get("/api/feedback", params=params)
    except requests.RequestException as e:
        st.error(f"Feedback error: {e}")
        feedback = []

    for f in feedback:
        st.write(
            f"- **{f['patientName']}** ({f['date']}) {'★' * f['rating']}{'☆' * (5 - f['rating'])} | "
            f"Symptoms: {f['symptoms'] or '-'} | Side effects: {f['sideEffects'] or '-'} | "
            f"Improvements: {f['improvements'] or '-'}"
        )

    st.divider()
    st.subheader("Submit feedback")
    try:
        completed = api_get("/api/bookings", params={"progress": "completed"})
    except requests.RequestException:
        completed = []

    if not completed:
        st.info("Feedback can be submitted once a therapy is completed.")
    else:
        with st.form("feedback_form", clear_on_submit=True):
            booking = st.selectbox("Booking", completed, format_func=booking_label)
            rating = st.slider("Rating", 1, 5, 5)
            symptoms = st.text_area("Symptoms")
            side_effects = st.text_area("Side effects")
            improvements = st.text_area("Improvements")
            effectiveness = st.selectbox("Effectiveness", ["Excellent", "Good", "Fair", "Poor"])
            recommend = st.checkbox("Would recommend", value=True)
            follow_up = st.checkbox("Follow-up needed")
            if st.form_submit_button("Submit"):
                try:
                    api_post(
                        "/api/feedback",
                        {
                            "bookingId": booking["id"],
                            "patientName": booking["patientName"],
                            "rating": rating,
                            "symptoms": symptoms,
                            "sideEffects": side_effects,
                            "improvements": improvements,
                            "therapyEffectiveness": effectiveness,
                            "wouldRecommend": recommend,
                            "followUpNeeded": follow_up,
                        },
                    )
                    st.success("Feedback submitted.")
                except (ApiNotFound, requests.RequestException) as e:
                    st.error(str(e))



# TAB 6 - Analytics

with tabs[5]:
    st.subheader("Analytics")

    time_range = st.selectbox("Range", ["7d", "30d", "90d", "1y"], index=1, key="an_range")
    try:
        data = api_get("/api/analytics", params={"range": time_range})
    except requests.RequestException as e:
        st.error(f"Analytics error: {e}")
        data = None

    if data:
        c1, c2, c3, c4 = st.columns(4)
        c1.metric("Revenue", f"₹{data['totalRevenue']:,}")
        c2.metric("Bookings", data["totalBookings"])
        c3.metric("Satisfaction", f"{data['averageSatisfaction']:.1f}")
        c4.metric("Top therapy", data["topTherapy"] or "-")

        left, right = st.columns(2)
        with left:
            st.write("Monthly bookings")
            st.line_chart(data["monthlyTrends"], x="month", y="bookings")
            st.write("Therapy effectiveness (%)")
            st.bar_chart(data["therapyEffectiveness"], x="name", y="effectiveness")
        with right:
            st.write("Recovery (improvement vs symptoms)")
            st.line_chart(data["recoveryMetrics"], x="week", y=["improvement", "symptoms"])
            st.write("Therapy popularity")
            st.bar_chart(data["therapyPopularity"], x="name", y="bookings")

    st.divider()
    d1, d2 = st.columns(2)
    with d1:
        practitioner = st.selectbox("Practitioner", practitioners, format_func=lambda p: p["name"], key="an_prac")
        try:
            perf = api_get(f"/api/practitioners/{practitioner['id']}/performance")
            st.write(
                f"Patients: {perf['totalPatients']} | Completed: {perf['completedSessions']} | "
                f"Rating: {perf['averageRating']:.1f} | Satisfaction: {perf['patientSatisfaction']:.0f}% | "
                f"Revenue: {perf['revenue']}"
            )
        except (ApiNotFound, requests.RequestException) as e:
            st.error(str(e))
    with d2:
        therapy = st.selectbox("Therapy", therapies, format_func=lambda t: t["name"], key="an_therapy")
        try:
            eff = api_get(f"/api/therapies/{therapy['id']}/effectiveness")
            st.write(
                f"Sessions: {eff['totalSessions']} | Completion: {eff['completionRate']:.0f}% | "
                f"Rating: {eff['averageRating']:.1f} | Recommend: {eff['recommendationRate']:.0f}%"
            )
            if eff["sideEffects"]:
                st.caption("Side effects: " + "; ".join(eff["sideEffects"]))
        except (ApiNotFound, requests.RequestException) as e:
            st.error(str(e))

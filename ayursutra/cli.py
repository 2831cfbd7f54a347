from __future__ import annotations

import argparse

import uvicorn

from ayursutra.config import settings
from ayursutra.logging_config import setup_logging
from ayursutra.seed import seed_base
from ayursutra.services import (
    dashboard_stats,
    feedback_analytics,
    list_bookings,
    list_feedback,
    list_notifications,
    list_practitioners,
    list_therapies,
    mark_notification_read,
)


def cmd_serve(args: argparse.Namespace) -> None:
    uvicorn.run(
        "ayursutra.api_main:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_level=settings.log_level.lower(),
    )


def cmd_list(args: argparse.Namespace) -> None:
    if args.entity == "therapies":
        for t in list_therapies():
            print(f"{t['id']} | {t['name']} | {t['category']} | {t['duration']} | {t['price']}")
    elif args.entity == "practitioners":
        for p in list_practitioners():
            print(f"{p['id']} | {p['name']} | {p['specialization']} | {p['rating']}")
    elif args.entity == "bookings":
        for b in list_bookings():
            therapy = (b["therapy"] or {}).get("name", "-")
            print(
                f"{b['id']} | {b['patientName']} | {therapy} | {b['date']} {b['time']} | "
                f"{b['progress']} ({b['day']}/{b['totalDays']})"
            )
    elif args.entity == "feedback":
        for f in list_feedback():
            print(f"{f['id']} | {f['patientName']} | {f['rating']}/5 | {f['improvements'] or '-'}")


def cmd_stats(args: argparse.Namespace) -> None:
    stats = dashboard_stats()
    print(f"Bookings   : {stats['totalBookings']}")
    print(f"Completed  : {stats['completedSessions']}")
    print(f"Upcoming   : {stats['upcomingSessions']}")
    print(f"Unread     : {stats['unreadNotifications']}")

    fb = feedback_analytics()
    print(f"Feedback   : {fb['totalFeedback']} (avg {fb['averageRating']:.2f}, recommend {fb['recommendationRate']:.0f}%)")


def cmd_notifications(args: argparse.Namespace) -> None:
    """
    Prints notifications, optionally only unread ones,
    and optionally marks them as read afterwards.
    """
    items = list_notifications(unread=True if args.unread else None)
    if not items:
        print("No notifications.")
        return

    for n in items:
        flag = " " if n["read"] else "*"
        print(f"{flag}[{n['id']}] {n['type']} | {n['priority']} | {n['patientName']} | {n['title']}")
        if args.mark_read and not n["read"]:
            mark_notification_read(n["id"])

    if args.mark_read:
        print("Notifications marked as read.")


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="ayursutra", description="AyurSutra therapy center CLI")
    sub = p.add_subparsers(required=True)

    p_serve = sub.add_parser("serve", help="Run the REST API")
    p_serve.add_argument("--host", default=settings.host)
    p_serve.add_argument("--port", type=int, default=settings.port)
    p_serve.add_argument("--reload", action="store_true")
    p_serve.set_defaults(func=cmd_serve)

    p_list = sub.add_parser("list", help="List records")
    p_list.add_argument("entity", choices=["therapies", "practitioners", "bookings", "feedback"])
    p_list.set_defaults(func=cmd_list)

    p_stats = sub.add_parser("stats", help="Dashboard counters")
    p_stats.set_defaults(func=cmd_stats)

    p_not = sub.add_parser("notifications", help="List notifications")
    p_not.add_argument("--unread", action="store_true", help="Only unread notifications")
    p_not.add_argument("--mark-read", action="store_true", help="Mark them as read after printing")
    p_not.set_defaults(func=cmd_notifications)

    return p


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(settings.log_level, settings.log_file)
    seed_base()
    args.func(args)


if __name__ == "__main__":
    main()

#!/usr/bin/env python3
"""Command-line client for the office agenda API."""

from __future__ import annotations

import argparse
import os
import sys
from datetime import date
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
SRC_DIR = PROJECT_ROOT / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Office agenda client")
    p.add_argument("--base-url", default=os.getenv("AGENDA_API_BASE_URL", "http://localhost:5000"))
    sub = p.add_subparsers(dest="command", required=True)

    rooms = sub.add_parser("rooms", help="Show rooms and meetings for a day")
    rooms.add_argument("--date", default=None, help="YYYY-MM-DD (default: today)")

    add_meeting = sub.add_parser("add-meeting", help="Book a meeting (checked locally first)")
    add_meeting.add_argument("--room", required=True)
    add_meeting.add_argument("--title", default="")
    add_meeting.add_argument("--start", required=True, help="e.g. 2025-09-03T09:00")
    add_meeting.add_argument("--end", required=True)

    delete_meeting = sub.add_parser("delete-meeting")
    delete_meeting.add_argument("meeting_id")

    sub.add_parser("visitors", help="Show visitors of the next two days")

    add_visitor = sub.add_parser("add-visitor")
    add_visitor.add_argument("--name", required=True)
    add_visitor.add_argument("--company", required=True)
    add_visitor.add_argument("--time", required=True)
    add_visitor.add_argument("--purpose", default="")

    delete_visitor = sub.add_parser("delete-visitor")
    delete_visitor.add_argument("visitor_id")

    participants = sub.add_parser("participants", help="Show or extend participants of a meeting")
    participants.add_argument("meeting_id")
    participants.add_argument("--add", action="append", default=[], help="Participant name (repeatable)")

    return p.parse_args(argv)


def _print_rooms(ctrl) -> None:
    from office_agenda.domain.scheduling import timeline_position

    for room in ctrl.rooms:
        meetings = ctrl.meetings_for_selected_date(room)
        print(f"[{room.id}] {room.name}: {len(meetings)} meeting(s) on {ctrl.selected_date.isoformat()}")
        for m in meetings:
            pos = timeline_position(m)
            bar = f"  [{pos.left_pct:.0f}%+{pos.width_pct:.0f}%]" if pos else ""
            print(f"    {m.id}  {m.start_time} - {m.end_time}  {m.title}{bar}")


def main(argv: list[str] | None = None) -> int:
    from office_agenda.client.api import AgendaApiClient, AgendaApiError
    from office_agenda.client.rooms import MeetingDraft, MeetingRejected, RoomScheduleController
    from office_agenda.client.visitors import VisitorAgendaController, format_visitor_time

    args = _parse_args(argv)
    api = AgendaApiClient(args.base_url)

    try:
        if args.command == "rooms":
            selected = date.fromisoformat(args.date) if args.date else None
            ctrl = RoomScheduleController(api, selected_date=selected)
            ctrl.refresh()
            if ctrl.error:
                print(ctrl.error, file=sys.stderr)
                return 1
            _print_rooms(ctrl)
        elif args.command == "add-meeting":
            ctrl = RoomScheduleController(api)
            ctrl.refresh()
            draft = MeetingDraft(title=args.title, start_time=args.start, end_time=args.end)
            try:
                room = ctrl.add_meeting(args.room, draft)
            except MeetingRejected as e:
                print(f"Meeting rejected: {e}", file=sys.stderr)
                return 2
            print(f"Booked in {room.name if room else args.room}")
        elif args.command == "delete-meeting":
            RoomScheduleController(api).delete_meeting(args.meeting_id)
            print("Meeting removed")
        elif args.command == "visitors":
            ctrl = VisitorAgendaController(api)
            ctrl.refresh()
            upcoming = ctrl.upcoming()
            if not upcoming:
                print("No visitors scheduled in 2 days")
            for v in upcoming:
                print(f"{v.id}  {v.name} ({v.company})  {format_visitor_time(v.time)}  {v.purpose}")
        elif args.command == "add-visitor":
            v = VisitorAgendaController(api).add_visitor(
                name=args.name, company=args.company, time=args.time, purpose=args.purpose
            )
            print(f"Visitor added: {v.id} [{v.status.value}]")
        elif args.command == "delete-visitor":
            VisitorAgendaController(api).remove_visitor(args.visitor_id)
            print("Visitor deleted")
        elif args.command == "participants":
            ctrl = RoomScheduleController(api)
            ctrl.load_participants(args.meeting_id)
            for name in args.add:
                ctrl.add_participant(name)
            if args.add and not ctrl.save_participants():
                print("Failed to save participants", file=sys.stderr)
                return 1
            for p in ctrl.participants.saved:
                print(f"{p.id}  {p.name}")
    except AgendaApiError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

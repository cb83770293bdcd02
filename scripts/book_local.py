#!/usr/bin/env python3
"""
Interactive local booking harness (no HTTP).

Usage:
  ENV=dev python3 scripts/book_local.py

What it does:
- Opens one wizard session through the same WizardSessionUseCase the API uses
- Lets you pick services, fill in details and walk the steps from the prompt
- Prints the step, the running price summary and any rejection after every command
"""

from __future__ import annotations

import sys
from datetime import date
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from salon_booking.application.exceptions import ServiceNotFoundError  # noqa: E402
from salon_booking.application.utils.pricing import format_duration, format_price, summarize  # noqa: E402
from salon_booking.domain.entities.booking import ServiceLocation  # noqa: E402
from salon_booking.domain.entities.wizard_state import WizardState  # noqa: E402
from salon_booking.wiring.dependencies import get_catalog, get_wizard_session_use_case  # noqa: E402

HELP = """Commands:
  /services            list the catalog
  /pick <service_id>   toggle a service
  /drop <service_id>   remove a selected service
  /me <name>|<email>|<phone>
  /home, /salon        service location
  /date YYYY-MM-DD     booking date
  /time HH:MM          booking time (see /slots)
  /notes <text>
  /slots               list bookable times
  /next, /back
  /submit [token]
  /new                 close this wizard and start over
  /quit"""


def _print_state(state: WizardState | None, reason: str | None = None) -> None:
    if state is None:
        print("(wizard closed)")
        return
    draft = state.draft
    summary = summarize(draft.selected_services, draft.service_location)
    print(f"\nstep: {state.step.value}")
    print("services: " + (", ".join(s.name for s in draft.selected_services) or "-"))
    print(f"customer: {draft.customer.name or '-'} / {draft.customer.email or '-'} / {draft.customer.phone or '-'}")
    print(f"location: {draft.service_location.value}  date: {draft.date or '-'}  time: {draft.time or '-'}")
    print(
        f"total: {format_price(summary.total)} "
        f"(travel {format_price(summary.travel_fee)}, {format_duration(summary.total_duration)})"
    )
    if state.confirmation:
        print(f"CONFIRMED: order {state.confirmation.order_number}")
    if state.error:
        print(f"error: {state.error}")
    if reason:
        print(f"rejected: {reason}")


def main() -> None:
    catalog = get_catalog()
    use_case = get_wizard_session_use_case()
    session_id, state = use_case.open()

    print("\nLocal Booking Harness")
    print("-" * 60)
    print(f"session_id: {session_id}")
    print("Type /help for commands.")
    print("-" * 60)

    while True:
        try:
            line = input("\n> ").strip()
        except (EOFError, KeyboardInterrupt):
            print("\nBye!")
            return
        if not line:
            continue

        cmd, _, arg = line.partition(" ")
        cmd = cmd.lower()
        arg = arg.strip()
        reason = None

        if cmd in ("/quit", "/exit"):
            print("Bye!")
            return
        if cmd == "/help":
            print(HELP)
            continue
        if cmd == "/services":
            for category in catalog.list_categories():
                print(f"\n{category.name}")
                for service in catalog.list_services(category.id):
                    print(
                        f"  {service.id:<16} {service.name:<20} "
                        f"{format_price(service.price):>9}  {format_duration(service.duration)}"
                    )
            continue
        if cmd == "/slots":
            print(" ".join(use_case.time_slots))
            continue
        if cmd == "/new":
            use_case.close(session_id)
            session_id, state = use_case.open()
            print(f"New session_id: {session_id}")
            _print_state(state)
            continue

        try:
            if cmd == "/pick":
                outcome = use_case.toggle_service(session_id, arg)
            elif cmd == "/drop":
                outcome = use_case.remove_service(session_id, arg)
            elif cmd == "/me":
                name, email, phone = (part.strip() for part in (arg.split("|") + ["", ""])[:3])
                outcome = use_case.update_customer(session_id, name=name, email=email, phone=phone)
            elif cmd in ("/home", "/salon"):
                location = ServiceLocation.at_home if cmd == "/home" else ServiceLocation.in_salon
                outcome = use_case.update_customer(session_id, service_location=location)
            elif cmd == "/date":
                outcome = use_case.update_schedule(session_id, booking_date=date.fromisoformat(arg) if arg else None)
            elif cmd == "/time":
                outcome = use_case.update_schedule(session_id, time=arg)
            elif cmd == "/notes":
                outcome = use_case.update_schedule(session_id, notes=arg)
            elif cmd == "/next":
                outcome = use_case.next(session_id)
            elif cmd == "/back":
                outcome = use_case.back(session_id)
            elif cmd == "/submit":
                submitted = use_case.submit(session_id, access_token=arg or None)
                _print_state(submitted.state, submitted.reason)
                continue
            else:
                print("Unknown command. Type /help.")
                continue
        except ServiceNotFoundError as e:
            print(f"Unknown service: {e}")
            continue
        except ValueError as e:
            print(f"Bad input: {e}")
            continue

        if not outcome.result.accepted:
            reason = outcome.result.reason
        _print_state(outcome.result.updated_state, reason)


if __name__ == "__main__":
    main()

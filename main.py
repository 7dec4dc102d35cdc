"""
Console entry point for the detailer scheduling tools.

Usage:
    List slots:    python main.py slots <detailer_id> <YYYY-MM-DD> [service name]
    Check a time:  python main.py check <detailer_id> <YYYY-MM-DD> <HH:MM> [service name]
"""

import sys

from detailing.config import settings
from detailing.tools.availability import check_availability
from detailing.utils import parse_date

USAGE = __doc__.strip()


def _run_slots(args: list[str]) -> int:
    detailer_id, day = args[0], parse_date(args[1])
    service_name = " ".join(args[2:]) or None
    result = check_availability(detailer_id, day, service_name)
    print(f"{settings.business.name} - {result['message']}")
    for slot in result["slots"]:
        print(f"  {slot}")
    if result["next_available"]:
        print(f"Next available: {result['next_available']}")
    return 0


def _run_check(args: list[str]) -> int:
    detailer_id, day, time = args[0], parse_date(args[1]), args[2]
    service_name = " ".join(args[3:]) or None
    result = check_availability(detailer_id, day, service_name, preferred_time=time)
    print(result["message"])
    if result["next_available"]:
        print(f"Next available: {result['next_available']}")
    return 0 if result["available"] else 1


def main(argv: list[str]) -> int:
    if len(argv) >= 3 and argv[0] == "slots":
        return _run_slots(argv[1:])
    if len(argv) >= 4 and argv[0] == "check":
        return _run_check(argv[1:])
    print(USAGE)
    return 2


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))

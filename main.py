# main.py
import argparse
import json

from config import ANCHOR_HOUR, DEFAULT_ZONE
from errors import ConfigurationError, TimeWindowError
from observability import log_event
from window import (
    anchored_window,
    day_range_utc,
    days_range,
    format_range,
    format_utc,
    unshift,
    window_utc,
)
from zones import check_tz_database, zone_name


def _cmd_day(args: argparse.Namespace) -> dict:
    rng = day_range_utc(args.zone, args.date)
    payload = rng.to_dict()
    payload.update({"date": args.date, "span": rng.span})
    return payload


def _cmd_window(args: argparse.Namespace) -> dict:
    rng = window_utc(args.zone, args.start, args.end)
    payload = rng.to_dict()
    payload["span"] = rng.span
    return payload


def _cmd_days(args: argparse.Namespace) -> dict:
    rng = format_range(days_range(args.zone, args.days, args.date))
    payload = rng.to_dict()
    payload.update({"days": args.days, "date": args.date, "span": rng.span})
    return payload


def _cmd_anchored(args: argparse.Namespace) -> dict:
    rng = format_range(anchored_window(args.zone, args.hour))
    payload = rng.to_dict()
    payload.update({"hour": args.hour, "span": rng.span})
    return payload


def _cmd_unshift(args: argparse.Namespace) -> dict:
    true = unshift(args.value, args.zone)
    return {"shifted": args.value, "true": true.seconds, "utc": format_utc(true)}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Timezone-safe UTC boundaries for local days and time windows."
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    day = subparsers.add_parser("day", help="UTC bounds of one local calendar day.")
    day.add_argument("--zone", default=DEFAULT_ZONE, help="IANA zone or fixed offset (UTC-5)")
    day.add_argument("--date", default=None, help="YYYY-MM-DD (default: today in zone)")
    day.set_defaults(func=_cmd_day)

    window = subparsers.add_parser("window", help="UTC bounds of a local wall-time window.")
    window.add_argument("--zone", default=DEFAULT_ZONE)
    window.add_argument("--start", required=True, help="YYYY-MM-DD HH:MM:SS local")
    window.add_argument("--end", required=True, help="YYYY-MM-DD HH:MM:SS local")
    window.set_defaults(func=_cmd_window)

    days = subparsers.add_parser("days", help="UTC bounds of the last N local days.")
    days.add_argument("--zone", default=DEFAULT_ZONE)
    days.add_argument("--days", type=int, default=7, help="Number of local days")
    days.add_argument("--date", default=None, help="Last day, YYYY-MM-DD (default: today)")
    days.set_defaults(func=_cmd_days)

    anchored = subparsers.add_parser("anchored", help="Last complete hour-anchored daily window.")
    anchored.add_argument("--zone", default=DEFAULT_ZONE)
    anchored.add_argument("--hour", type=int, default=ANCHOR_HOUR, help="Local anchor hour")
    anchored.set_defaults(func=_cmd_anchored)

    unshift_cmd = subparsers.add_parser("unshift", help="Recover true UTC from a shifted timestamp.")
    unshift_cmd.add_argument("--zone", default=DEFAULT_ZONE)
    unshift_cmd.add_argument("--value", type=int, required=True, help="Shifted epoch seconds")
    unshift_cmd.set_defaults(func=_cmd_unshift)

    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        check_tz_database()
    except ConfigurationError as err:
        log_event("tzdb.unavailable", error=str(err))
        return 2

    log_event("window.started", command=args.command, zone=args.zone)
    try:
        payload = args.func(args)
    except TimeWindowError as err:
        log_event("window.failed", command=args.command, zone=args.zone, error=str(err))
        return 2

    payload["zone"] = zone_name(args.zone)
    log_event(
        "window.resolved",
        zone=payload["zone"],
        start_iso=payload.get("start_iso", payload.get("utc")),
        end_iso=payload.get("end_iso", payload.get("utc")),
    )
    print(json.dumps(payload, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

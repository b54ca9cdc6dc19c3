"""Amortization schedule CLI.

Usage:
    python -m amortization.cli --price 250000 --down 50000 --rate 6 --term 360
    python -m amortization.cli --price 250000 --down 50000 --rate 6 --payment 1500 --start-date 2026-01-01
    python -m amortization.cli --price 250000 --rate 6 --term 30 --term-type Year --xlsx schedule.xlsx
    python -m amortization.cli ... --api-url http://localhost:8000
"""

import argparse
import sys
from datetime import date
from decimal import Decimal
from pathlib import Path

import httpx

from amortization.config import settings
from amortization.engine.errors import ScheduleError
from amortization.engine.export import schedule_to_xlsx
from amortization.engine.limits import enforce_request_limits
from amortization.engine.schedule import compute_schedule
from amortization.engine.table import COLUMNS, column_header, decorate, sort_rows
from amortization.models.schedule import ScheduleRequest, TermType

EXIT_ERROR = 2


# ── Helpers ──────────────────────────────────────────────────────────────────

def _dollar(v) -> str:
    return f"${float(v):,.2f}"


def _header(title: str) -> None:
    print(f"\n{'=' * 96}")
    print(f"  {title}")
    print(f"{'=' * 96}")


def print_summary(term_type: str, payment, periods: int, total_interest, total_paid) -> None:
    _header("Amortization Summary")
    print(f"  Payment ({term_type.lower()}):   {_dollar(payment)}")
    print(f"  Periods:             {periods}")
    print(f"  Total Interest:      {_dollar(total_interest)}")
    print(f"  Total Paid:          {_dollar(total_paid)}")


def print_table(header: str, rows: list[dict], limit: int | None = None) -> None:
    _header("Schedule")
    print(f"  {header:<20} {'Begin Bal':>14} {'Payment':>12} {'Interest':>12} "
          f"{'Total Int':>14} {'Principal':>12} {'End Bal':>14}")
    shown = rows if limit is None else rows[:limit]
    for r in shown:
        print(
            f"  {r['label']:<20} {_dollar(r['beginning_balance']):>14} {_dollar(r['payment']):>12} "
            f"{_dollar(r['interest']):>12} {_dollar(r['total_interest_paid']):>14} "
            f"{_dollar(r['principal']):>12} {_dollar(r['ending_balance']):>14}"
        )
    if len(shown) < len(rows):
        print(f"  ... {len(rows) - len(shown)} more rows")


# ── Modes ────────────────────────────────────────────────────────────────────

def run_local(args: argparse.Namespace) -> int:
    request = ScheduleRequest(
        purchase_price=args.price,
        down_payment=args.down,
        annual_interest_percent=args.rate,
        term_type=args.term_type,
        term_periods=args.term,
        periodic_payment=args.payment,
        loan_start_date=args.start_date,
    )
    try:
        if not args.no_limits:
            enforce_request_limits(
                request,
                max_years=settings.max_years,
                max_interest_percent=settings.max_interest_percent,
            )
        schedule = compute_schedule(request, max_periods=settings.max_schedule_periods)
        rows = sort_rows(decorate(schedule, args.start_date), args.sort, "desc" if args.desc else "asc")
    except ScheduleError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_ERROR

    print_summary(schedule.term_type.value, schedule.periodic_payment, len(schedule),
                  schedule.total_interest, schedule.total_paid)
    print_table(column_header(schedule.term_type, args.start_date), [vars(r) for r in rows], args.limit)

    if args.xlsx:
        args.xlsx.write_bytes(schedule_to_xlsx(rows, schedule.term_type, args.start_date))
        print(f"\n  Wrote {args.xlsx}")
    print()
    return 0


def run_remote(args: argparse.Namespace) -> int:
    payload: dict = {
        "purchasePrice": float(args.price),
        "downPayment": float(args.down),
        "interest": float(args.rate),
        "termType": args.term_type,
    }
    if args.term is not None:
        payload["term"] = args.term
    if args.payment is not None:
        payload["paymentFrequency"] = float(args.payment)
    if args.start_date is not None:
        payload["loanStartDate"] = args.start_date.isoformat()

    params: dict = {"direction": "desc" if args.desc else "asc"}
    if args.sort:
        params["sort"] = args.sort

    url = f"{args.api_url}/api/v1/schedule"
    try:
        resp = httpx.post(url, json=payload, params=params, timeout=60)
    except httpx.ConnectError:
        print(f"Error: Could not connect to API at {args.api_url}", file=sys.stderr)
        print("Is the server running? Start with: uvicorn amortization.api.app:app --reload", file=sys.stderr)
        return EXIT_ERROR
    except httpx.HTTPError as e:
        print(f"Error: request failed: {e}", file=sys.stderr)
        return EXIT_ERROR

    if resp.status_code != 200:
        print(f"Error: API returned {resp.status_code}", file=sys.stderr)
        try:
            detail = resp.json().get("detail", resp.text)
        except ValueError:
            detail = resp.text
        print(f"  {detail}", file=sys.stderr)
        return EXIT_ERROR

    data = resp.json()
    term_type = TermType(data["term_type"])
    print_summary(data["term_type"], data["periodic_payment"], data["number_of_periods"],
                  data["total_interest"], data["total_paid"])
    print_table(column_header(term_type, args.start_date), data["rows"], args.limit)
    print()
    return 0


# ── Main ─────────────────────────────────────────────────────────────────────

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Loan amortization schedule")
    parser.add_argument("--price", type=Decimal, required=True, help="Purchase price")
    parser.add_argument("--down", type=Decimal, default=Decimal("0"), help="Down payment (default: 0)")
    parser.add_argument("--rate", type=Decimal, required=True, help="Annual interest rate in percent")
    group = parser.add_mutually_exclusive_group(required=True)
    group.add_argument("--term", type=int, help="Number of periods")
    group.add_argument("--payment", type=Decimal, help="Payment per period")
    parser.add_argument(
        "--term-type",
        choices=[t.value for t in TermType],
        default=TermType.MONTH.value,
        help="Period length (default: Month)",
    )
    parser.add_argument("--start-date", type=date.fromisoformat, help="Loan start date (YYYY-MM-DD)")
    parser.add_argument("--sort", choices=COLUMNS, help="Sort column")
    parser.add_argument("--desc", action="store_true", help="Sort descending")
    parser.add_argument("--limit", type=int, help="Print at most N rows")
    parser.add_argument("--xlsx", type=Path, help="Also write the table to an Excel file")
    parser.add_argument("--no-limits", action="store_true", help="Skip the max-years / max-rate checks")
    parser.add_argument("--api-url", help="Compute via a running API instead of locally")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    if args.api_url:
        return run_remote(args)
    return run_local(args)


if __name__ == "__main__":
    sys.exit(main())

#!/usr/bin/env python3
"""
Manage canvass data and print campaign reports.

Usage:
    python manage.py seed                    # Load demo data
    python manage.py clear                   # Remove demo data
    python manage.py report                  # Dashboard report (freshness as of today)
    python manage.py report 2026-01-15       # Dashboard report as of a date
    python manage.py validate                # Check data integrity
"""

import sys
from pathlib import Path

# Add project to path
sys.path.insert(0, str(Path(__file__).parent))

from app.container import container
from app.models.canvass import Collection
from settings.logging import setup_logging
from web.api.errors import ValidationError, parse_as_of

logger = setup_logging(level="INFO", to_file=True)


def run_seed() -> bool:
    result = container.seeding.seed_all()
    print(("✅ " if result.success else "❌ ") + result.message)
    return result.success


def run_clear() -> bool:
    result = container.seeding.clear()
    print(("✅ " if result.success else "❌ ") + result.message)
    return result.success


def run_report(as_of: str | None = None) -> bool:
    """Print the dashboard."""
    m = container.dashboard.get_metrics(parse_as_of(as_of))

    if not m.total_households:
        print("\n⚠️  No canvass data found. Run 'python manage.py seed' first.\n")
        return True

    print("\n" + "=" * 60)
    print("CAMPAIGN DASHBOARD")
    print("=" * 60)
    print(f"\nWin meter: {m.win_probability_band.value} ({m.win_probability_percent}%)")
    print(f"  Vote share: {m.vote_share_percent}% of {m.total_present_voters:,} present voters")
    print(f"  Expected votes if polling today: {m.expected_votes_if_today_polling:,}")
    print(f"  Expected turnout: {m.expected_turnout:,}")
    print(
        f"  Confirmed {m.confirmed_votes} | Likely {m.likely_votes} | Swing {m.swing_votes} | "
        f"Opposition {m.opposition_votes} | Unknown {m.unknown_votes}"
    )
    print(f"  Actionable swing voters: {m.actionable_swing_votes}")
    print("\nCoverage")
    print(f"  Surveyed: {m.surveyed_households}/{m.total_households} ({m.coverage_percent}%)")
    print(f"  Fresh surveys: {m.freshness_percent}%")
    print(f"  Tagged voters: {m.tagging_percent}%")
    print(f"  Transport needed: {m.transport_required_count} | Away: {m.away_voters_count}")
    print(f"  Influencers: {m.unconverted_influencers} unconverted, {m.opposed_influencers} opposed")

    print("\nMohallas")
    for mm in m.mohalla_metrics:
        print(
            f"  {mm.mohalla_name:<20} share {mm.vote_share_percent:>3}%  "
            f"swing {mm.swing_voters:>3}  coverage {mm.coverage_percent:>3}%"
        )

    if m.top_swing_mohallas:
        print("\nTop swing mohallas: " + ", ".join(mm.mohalla_name for mm in m.top_swing_mohallas))

    if m.risk_alerts:
        print("\nAlerts")
        for a in m.risk_alerts:
            print(f"  [{a.severity.value.upper()}] {a.message}")

    if m.resource_recommendations:
        print("\nResources")
        for r in m.resource_recommendations:
            qty = f" x{r.quantity}" if r.quantity else ""
            print(f"  [{r.priority.value.upper()}] {r.kind.value}{qty} -> {r.mohalla_name}: {r.reason}")

    print("=" * 60 + "\n")
    return True


def run_validation() -> bool:
    """Check stored data for dangling references and empty collections."""
    m = container.dashboard.get_metrics()
    counts = {c: container.seeding.count(c) for c in Collection}

    print("\n" + "=" * 60)
    print("DATA VALIDATION REPORT")
    print("=" * 60)
    for c, n in counts.items():
        print(f"  {c.value}: {n:,}")

    issues = []
    if m.orphaned_households:
        issues.append(f"{m.orphaned_households} households reference a missing mohalla")
    if m.orphaned_voters:
        issues.append(f"{m.orphaned_voters} voters reference a missing household")
    empty = [mm.mohalla_name for mm in m.mohalla_metrics if not mm.total_households]
    if empty:
        issues.append(f"Mohallas without households: {', '.join(empty)}")

    for issue in issues:
        print(f"  ⚠️  {issue}")

    print("\n" + "=" * 60)
    if issues:
        print("❌ Some issues found.")
    else:
        print("✅ All data valid!")
    print("=" * 60 + "\n")
    return not issues


def main():
    args = sys.argv[1:]
    if not args:
        print(__doc__)
        sys.exit(1)

    command, rest = args[0], args[1:]
    container.init()

    if command == "seed":
        ok = run_seed()
    elif command == "clear":
        ok = run_clear()
    elif command == "report":
        try:
            ok = run_report(rest[0] if rest else None)
        except ValidationError as e:
            logger.error(e.message)
            sys.exit(2)
    elif command in ("validate", "--validate"):
        ok = run_validation()
    else:
        print(__doc__)
        sys.exit(1)

    sys.exit(0 if ok else 1)


if __name__ == "__main__":
    main()

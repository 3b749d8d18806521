"""
Print a user's alignment with a representative.

Usage:
    python scripts/alignment_report.py USER_ID MEMBER_ID
    python scripts/alignment_report.py USER_ID MEMBER_ID --json
"""
import argparse
import asyncio
import json
import logging
import sys

from votematch.config import settings
from votematch.database import close_clients, create_stores
from votematch.errors import VoteMatchError
from votematch.models import AlignmentResult, Bucket
from votematch.scoring import compute_alignment


def _line(label: str, bucket: Bucket) -> str:
    return f"   • {label:<14} {bucket.percentage:>3}%  ({bucket.agree}/{bucket.total} agreed)"


def print_report(result: AlignmentResult) -> None:
    print(f"📊 Alignment: user {result.user_id} vs {result.representative_id}")
    print("=" * 60)
    print(_line("Overall", result.overall))

    print("\nBy importance:")
    for tier in ("high", "medium", "low"):
        print(_line(tier.capitalize(), getattr(result.by_importance, tier)))

    if result.by_issue:
        print("\nBy issue:")
        for issue, bucket in result.by_issue.items():
            print(_line(issue, bucket))

    if result.over_time:
        print("\nOver time:")
        for bucket in result.over_time:
            print(_line(bucket.period, bucket))


async def run_report(user_id: str, member_id: str) -> AlignmentResult:
    vote_store, preference_store = create_stores()
    try:
        return await compute_alignment(vote_store, preference_store, user_id, member_id)
    finally:
        close_clients()


def main():
    parser = argparse.ArgumentParser(description="Show how a representative's votes match a user's opinions")
    parser.add_argument("user_id")
    parser.add_argument("member_id", help="Representative bioguide ID")
    parser.add_argument("--json", action="store_true", help="Print the raw result as JSON")
    args = parser.parse_args()

    logging.basicConfig(level=settings.LOG_LEVEL, format=settings.LOG_FORMAT)

    try:
        result = asyncio.run(run_report(args.user_id, args.member_id))
    except VoteMatchError as e:
        print(f"❌ {e}")
        sys.exit(1)

    if args.json:
        print(json.dumps(result.model_dump(mode="json"), indent=2))
    else:
        print_report(result)


if __name__ == "__main__":
    main()

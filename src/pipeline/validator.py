"""Sanity checks for fetched rosters.

None of these issues stop an event from being processed. They are logged
so a truncated or odd-looking roster is visible before it becomes the saved
snapshot for the next run.
"""

from collections import Counter
from typing import List

from src.api.schemas import RosterSnapshot


def roster_issues(snapshot: RosterSnapshot) -> List[str]:
    """Describe problems found in a roster. Empty list means it looks fine."""
    issues = []
    teams = snapshot.data

    if snapshot.meta.total > len(teams):
        issues.append(
            f"Roster reports {snapshot.meta.total} teams but only {len(teams)} were returned"
        )

    dupes = sorted(team_id for team_id, n in Counter(t.id for t in teams).items() if n > 1)
    if dupes:
        issues.append(f"Duplicate team ids in roster: {dupes}")

    no_number = sum(1 for t in teams if not t.number)
    if no_number:
        issues.append(f"{no_number}/{len(teams)} teams have no team number")

    return issues

"""Change detection between roster snapshots.

Compares the teams seen on the previous run of an event against the teams
returned now, reporting the ones that dropped off the roster. Only removals
are detected; new or edited registrations are not of interest here.
"""

from typing import Dict, List, Sequence

from src.api.schemas import Team


def find_missing_teams(previous: Sequence[Team], current: Sequence[Team]) -> List[Team]:
    """Return teams from ``previous`` whose id does not appear in ``current``.

    Args:
        previous: Teams from the last saved snapshot, in stored order.
        current: Teams to compare against (normally the freshly fetched roster).

    Returns:
        Missing teams in the order they appear in ``previous``. Empty when
        nothing is missing. An empty ``current`` reports every previous team.
    """
    by_id: Dict[int, Team] = {}
    for team in current:
        by_id[team.id] = team

    missing = []
    for team in previous:
        if team.id not in by_id:
            missing.append(team)
    return missing


def build_change_summary(
    previous: Sequence[Team],
    current: Sequence[Team],
    missing: Sequence[Team],
) -> Dict[str, int]:
    """Summarize a comparison into counts for the run history."""
    return {
        "previous_count": len(previous),
        "current_count": len(current),
        "missing_count": len(missing),
    }

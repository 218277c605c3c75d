"""
Bipartite project x contributor index restricted to a recency window.
"""
from typing import Dict, List
from normalize.models import ContributionSnapshot
from scoring.window import TimeWindow


def build_project_contributors(snapshot: ContributionSnapshot, window: TimeWindow, days_ago: int) -> Dict[str, List[str]]:
    """
    Map project name -> canonical contributor identities (display form) whose latest
    commit to that project is within days_ago.

    Order is insertion order of the snapshot links so repeated runs build identical
    edge keys. The window uses the latest commit date of the (contributor, project)
    pair, not individual commits.
    """
    projects_map: Dict[str, List[str]] = {}
    seen: Dict[str, set] = {}
    for link in snapshot.links:
        if not window.is_recent(link.latest_commit_date, days_ago):
            continue
        identity = snapshot.identities.canonical(link.contributor)
        if identity is None:
            continue
        keys = seen.setdefault(link.project, set())
        members = projects_map.setdefault(link.project, [])
        if identity.key not in keys:
            keys.add(identity.key)
            members.append(identity.display)
    return projects_map


def count_projects(snapshot: ContributionSnapshot, window: TimeWindow, days_ago: int) -> Dict[str, int]:
    """Return identity key -> number of distinct projects committed to within days_ago."""
    per_identity: Dict[str, set] = {}
    for link in snapshot.links:
        if not window.is_recent(link.latest_commit_date, days_ago):
            continue
        identity = snapshot.identities.canonical(link.contributor)
        if identity is None:
            continue
        per_identity.setdefault(identity.key, set()).add(link.project)
    return {k: len(v) for k, v in per_identity.items()}

"""
Landscape-wide contributor aggregation.
Merges every contributor's project links into one row per canonical identity.
"""
from typing import Dict, Any, List
from normalize.models import ContributionSnapshot
from .window import TimeWindow, RECENT_THRESHOLD_DAYS, date_text
from .utils import safe_percentage
from .projects import merge_links

ROOKIE_DAYS = 365
MAX_YEARS = 20


class ContributorSummary:
    """
    One contributor across all projects of the landscape.
    """
    def __init__(self, identity: str):
        self.identity = identity
        self.total_commits = 0
        self.commits_30_days = 0
        self.commits_90_days = 0
        self.first_commit_date = ''
        self.latest_commit_date = ''
        self.project_commits: Dict[str, int] = {}
        self.commits_per_year: Dict[str, int] = {}
        self.share = 0.0

    @property
    def active_years(self) -> List[str]:
        return sorted(y for y, c in self.commits_per_year.items() if c > 0)

    def is_active(self, window: TimeWindow, days: int = RECENT_THRESHOLD_DAYS) -> bool:
        return window.is_recent(self.latest_commit_date, days)

    def is_rookie(self, window: TimeWindow) -> bool:
        """Started within the past year and still active."""
        return window.is_recent(self.first_commit_date, ROOKIE_DAYS) and self.is_active(window)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'identity': self.identity,
            'commits': self.total_commits,
            'share': self.share,
            'commits30': self.commits_30_days,
            'commits90': self.commits_90_days,
            'firstCommitDate': self.first_commit_date,
            'latestCommitDate': self.latest_commit_date,
            'projects': [{'project': p, 'commits': c} for p, c in self.project_commits.items()],
        }


def summarize_contributors(snapshot: ContributionSnapshot, window: TimeWindow, threshold_commits: int = 1) -> List[ContributorSummary]:
    """
    Return contributors with at least threshold_commits commits, most commits first.
    Links are merged per (contributor, project) first, so a repeated link counts once.
    """
    rows: Dict[str, ContributorSummary] = {}
    for link in merge_links(snapshot, snapshot.links):
        identity = snapshot.identities.canonical(link.contributor)
        if identity is None:
            continue
        row = rows.get(identity.key)
        if row is None:
            row = ContributorSummary(identity.display)
            rows[identity.key] = row
        row.total_commits += link.total_commits
        row.commits_30_days += link.commits_30_days
        row.commits_90_days += link.commits_90_days
        row.project_commits[link.project] = row.project_commits.get(link.project, 0) + link.total_commits
        for year, count in link.commits_per_year.items():
            row.commits_per_year[year] = row.commits_per_year.get(year, 0) + count
        first, latest = date_text(link.first_commit_date), date_text(link.latest_commit_date)
        if first and (not row.first_commit_date or first < row.first_commit_date):
            row.first_commit_date = first
        if latest > row.latest_commit_date:
            row.latest_commit_date = latest

    qualifying = [r for r in rows.values() if r.total_commits >= threshold_commits]
    total = sum(r.total_commits for r in qualifying)
    for row in qualifying:
        row.share = safe_percentage(row.total_commits, total)
    return sorted(qualifying, key=lambda r: r.total_commits, reverse=True)


def contributor_counts(contributors: List[ContributorSummary], window: TimeWindow) -> Dict[str, int]:
    """Recent contributor counts for 30/90/180 days, all time, and active rookies."""
    return {
        'recent30': sum(1 for c in contributors if c.is_active(window, 30)),
        'recent90': sum(1 for c in contributors if c.is_active(window, 90)),
        'recent180': sum(1 for c in contributors if c.is_active(window, 180)),
        'allTime': len(contributors),
        'rookies': sum(1 for c in contributors if c.is_rookie(window)),
    }


def activity_per_year(contributors: List[ContributorSummary], limit: int = MAX_YEARS) -> List[Dict[str, Any]]:
    """Commits and active contributors per year, oldest first, last `limit` years only."""
    commits: Dict[str, int] = {}
    people: Dict[str, int] = {}
    for c in contributors:
        for year, count in c.commits_per_year.items():
            commits[year] = commits.get(year, 0) + count
        for year in c.active_years:
            people[year] = people.get(year, 0) + 1
    years = sorted(commits.keys())
    if limit and len(years) > limit:
        years = years[-limit:]
    return [{'year': y, 'commits': commits[y], 'contributors': people.get(y, 0)} for y in years]

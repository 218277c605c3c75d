"""
Per-project contributor summary: qualifying contributors, recent contributors,
rookies and commits in the current calendar year.
"""
from typing import Dict, Any, Iterable, List, Tuple
from normalize.models import ContributionSnapshot, ContributorProjectLink
from .window import TimeWindow, RECENT_THRESHOLD_DAYS, date_text


class ProjectSummary:
    """
    Summary row of the projects table.
    """
    def __init__(self, project: str, contributors: int = 0, recent_contributors: int = 0, rookies: int = 0, commits_this_year: int = 0):
        self.project = project
        self.contributors = contributors
        self.recent_contributors = recent_contributors
        self.rookies = rookies
        self.commits_this_year = commits_this_year

    def to_dict(self) -> Dict[str, Any]:
        return {
            'project': self.project,
            'contributors': self.contributors,
            'recentContributors': self.recent_contributors,
            'rookies': self.rookies,
            'commitsThisYear': self.commits_this_year,
        }


def _earliest(a: str, b: str) -> str:
    dates = [d for d in (a, b) if d]
    return min(dates) if dates else ''


def merge_links(snapshot: ContributionSnapshot, links: Iterable[ContributorProjectLink]) -> List[ContributorProjectLink]:
    """
    Collapse duplicate and case-variant links into one link per (contributor, project),
    in first-seen order. Contributors carry their canonical display form.
    """
    merged: Dict[Tuple[str, str], ContributorProjectLink] = {}
    for link in links:
        identity = snapshot.identities.canonical(link.contributor)
        if identity is None:
            continue
        key = (identity.key, link.project)
        existing = merged.get(key)
        if existing is None:
            merged[key] = ContributorProjectLink(
                identity.display, link.project, link.total_commits, link.commits_30_days, link.commits_90_days,
                link.latest_commit_date, link.first_commit_date, dict(link.commits_per_year),
            )
            continue
        # the same pair reported twice keeps the larger counts and the widest date range
        existing.total_commits = max(existing.total_commits, link.total_commits)
        existing.commits_30_days = max(existing.commits_30_days, link.commits_30_days)
        existing.commits_90_days = max(existing.commits_90_days, link.commits_90_days)
        existing.latest_commit_date = max(date_text(existing.latest_commit_date), date_text(link.latest_commit_date))
        existing.first_commit_date = _earliest(date_text(existing.first_commit_date), date_text(link.first_commit_date))
        for year, count in link.commits_per_year.items():
            existing.commits_per_year[year] = max(existing.commits_per_year.get(year, 0), count)
    return list(merged.values())


def summarize_project(project: str, contributors: List[ContributorProjectLink], window: TimeWindow, threshold_commits: int = 1) -> ProjectSummary:
    """
    Summarize one project from its contributor links.
    Contributors below threshold_commits are ignored by every count.
    """
    qualifying = [c for c in contributors if c.total_commits >= threshold_commits]
    recent = sum(1 for c in qualifying if window.is_recent(c.latest_commit_date, RECENT_THRESHOLD_DAYS))
    rookies = sum(1 for c in qualifying if window.is_recent(c.first_commit_date, RECENT_THRESHOLD_DAYS))
    this_year = window.current_year
    commits_this_year = sum(c.commits_per_year.get(this_year, 0) for c in qualifying)
    return ProjectSummary(project, len(qualifying), recent, rookies, commits_this_year)


def summarize_projects(snapshot: ContributionSnapshot, window: TimeWindow, threshold_commits: int = 1, threshold_contributors: int = 1) -> List[ProjectSummary]:
    """
    Summaries for every project with at least threshold_contributors qualifying
    contributors, sorted by commits this year descending.
    """
    summaries = []
    for project in snapshot.projects():
        links = merge_links(snapshot, snapshot.links_for_project(project))
        summary = summarize_project(project, links, window, threshold_commits)
        if summary.contributors >= threshold_contributors:
            summaries.append(summary)
    return sorted(summaries, key=lambda s: s.commits_this_year, reverse=True)

"""
Unified data models for normalized contribution records.
"""

from typing import List, Optional, Dict


class ContributorIdentity:
    """
    Canonical contributor identity.
    The key is the lower-cased email, display keeps the casing seen first.
    """
    def __init__(self, key: str, display: str):
        self.key = key
        self.display = display

    def __eq__(self, other):
        return isinstance(other, ContributorIdentity) and other.key == self.key

    def __hash__(self):
        return hash(self.key)

    def __repr__(self):
        return f"ContributorIdentity({self.display!r})"


class ContributorProjectLink:
    """
    Activity of one contributor in one project.
    """
    def __init__(self, contributor: str, project: str, total_commits: int = 0, commits_30_days: int = 0, commits_90_days: int = 0, latest_commit_date: str = '', first_commit_date: str = '', commits_per_year: Optional[Dict[str, int]] = None):
        self.contributor = contributor
        self.project = project
        self.total_commits = total_commits
        self.commits_30_days = commits_30_days
        self.commits_90_days = commits_90_days
        self.latest_commit_date = latest_commit_date  # YYYY-MM-DD
        self.first_commit_date = first_commit_date  # YYYY-MM-DD
        self.commits_per_year = commits_per_year or {}  # e.g. {'2025': 12, '2026': 3}


class ExtensionCommit:
    """
    One file touched by a commit, classified by file extension.
    """
    def __init__(self, extension: str, committer: str, file_path: str, commit_date: str, commit_id: Optional[str] = None):
        self.extension = extension
        self.committer = committer
        self.file_path = file_path
        self.commit_date = commit_date
        self.commit_id = commit_id


class ContributionSnapshot:
    """
    Immutable view over all links and extension commits of a landscape.
    Identities are registered in input order so the first casing seen wins.
    """
    def __init__(self, links: Optional[List[ContributorProjectLink]] = None, extension_commits: Optional[List[ExtensionCommit]] = None):
        from .identity import IdentityRegistry

        self.links = tuple(links or [])
        self.extension_commits = tuple(extension_commits or [])
        self.identities = IdentityRegistry()
        for link in self.links:
            self.identities.register(link.contributor)
        for record in self.extension_commits:
            self.identities.register(record.committer)

    def projects(self) -> List[str]:
        """Project names in first-seen order."""
        names: List[str] = []
        seen = set()
        for link in self.links:
            if link.project not in seen:
                seen.add(link.project)
                names.append(link.project)
        return names

    def links_for_project(self, project: str) -> List[ContributorProjectLink]:
        return [link for link in self.links if link.project == project]

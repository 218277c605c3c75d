"""
Commits per file extension, tallied for 30 days, 90 days and all time in a single pass.
"""
import logging
from typing import Dict, Any, List, Optional, Set, Tuple
from normalize.models import ContributionSnapshot, ExtensionCommit
from .window import TimeWindow

logger = logging.getLogger(__name__)


class ExtensionTally:
    """Distinct committers, files and commits for one extension in one window."""

    def __init__(self):
        self.committers: Set[str] = set()
        self.files: Set[str] = set()
        self.commits: Set[Tuple[str, ...]] = set()

    def add(self, committer_key: str, file_path: str, commit_key: Tuple[str, ...]):
        self.committers.add(committer_key)
        if file_path:
            self.files.add(file_path)
        self.commits.add(commit_key)

    @property
    def committers_count(self) -> int:
        return len(self.committers)

    @property
    def files_count(self) -> int:
        return len(self.files)

    @property
    def commits_count(self) -> int:
        return len(self.commits)


class ExtensionActivity:
    """
    Activity for a single file extension. Only cardinalities leave this object.
    """

    def __init__(self, extension: str):
        self.extension = extension
        self.last_30_days = ExtensionTally()
        self.last_90_days = ExtensionTally()
        self.all_time = ExtensionTally()

    def to_dict(self) -> Dict[str, Any]:
        return {
            'extension': self.extension,
            'committers30': self.last_30_days.committers_count,
            'commits30': self.last_30_days.commits_count,
            'files30': self.last_30_days.files_count,
            'committers90': self.last_90_days.committers_count,
            'commits90': self.last_90_days.commits_count,
            'files90': self.last_90_days.files_count,
            'committersAll': self.all_time.committers_count,
            'commitsAll': self.all_time.commits_count,
            'filesAll': self.all_time.files_count,
        }


def _commit_key(record: ExtensionCommit, committer_key: str) -> Tuple[str, ...]:
    # without a commit id, one committer's files sharing a commit date belong to one commit
    if record.commit_id:
        return (record.commit_id,)
    return (committer_key, record.commit_date)


def aggregate_extension_activity(snapshot: ContributionSnapshot, window: TimeWindow, extensions: Optional[List[str]] = None) -> List[ExtensionActivity]:
    """
    Single pass over all extension commits. A record inside 30 days also counts
    toward 90 days and all time; malformed dates only count toward all time.

    Returns activities sorted by all-time commits descending, ties in first-seen order.
    """
    per_extension: Dict[str, ExtensionActivity] = {}
    wanted = set(extensions) if extensions else None
    for record in snapshot.extension_commits:
        if wanted is not None and record.extension not in wanted:
            continue
        identity = snapshot.identities.canonical(record.committer)
        if identity is None:
            continue
        activity = per_extension.get(record.extension)
        if activity is None:
            activity = ExtensionActivity(record.extension)
            per_extension[record.extension] = activity
        commit_key = _commit_key(record, identity.key)
        activity.all_time.add(identity.key, record.file_path, commit_key)
        if window.is_recent(record.commit_date, 90):
            activity.last_90_days.add(identity.key, record.file_path, commit_key)
            if window.is_recent(record.commit_date, 30):
                activity.last_30_days.add(identity.key, record.file_path, commit_key)
    logger.debug("Aggregated activity for %d extensions", len(per_extension))
    return sorted(per_extension.values(), key=lambda a: a.all_time.commits_count, reverse=True)

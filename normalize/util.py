"""
Normalization utility helpers.
Small helpers to turn raw snapshot payloads into normalize.models entities.
"""
import logging
from typing import Dict, Any, List, Optional
from normalize.models import ContributorProjectLink, ExtensionCommit, ContributionSnapshot

logger = logging.getLogger(__name__)


def _int_field(raw: Dict[str, Any], *keys: str) -> int:
    """Return the first present key as an int, 0 when missing or not numeric."""
    for k in keys:
        val = raw.get(k)
        if val is None or val == '':
            continue
        try:
            return int(val)
        except (TypeError, ValueError):
            return 0
    return 0


def _str_field(raw: Dict[str, Any], *keys: str) -> str:
    for k in keys:
        val = raw.get(k)
        if val:
            return str(val).strip()
    return ''


def _commits_per_year(raw: Dict[str, Any]) -> Dict[str, int]:
    per_year = raw.get('commitsPerYear') or raw.get('commits_per_year') or {}
    if not isinstance(per_year, dict):
        return {}
    result: Dict[str, int] = {}
    for year, count in per_year.items():
        try:
            result[str(year)] = int(count)
        except (TypeError, ValueError):
            continue
    return result


def normalize_link(raw: Dict[str, Any]) -> ContributorProjectLink:
    """Create a ContributorProjectLink from a raw ingestion dict.
    Raises ValueError when the contributor or project is missing.
    """
    if not isinstance(raw, dict):
        raise ValueError(f"contributor link must be an object, got {type(raw).__name__}")
    email = _str_field(raw, 'contributorEmail', 'contributor_email', 'email')
    project = _str_field(raw, 'projectName', 'project_name', 'project')
    if not email or not project:
        raise ValueError(f"contributor link without email or project: {raw!r}")
    return ContributorProjectLink(
        contributor=email,
        project=project,
        total_commits=_int_field(raw, 'totalCommits', 'total_commits'),
        commits_30_days=_int_field(raw, 'commits30Days', 'commits_30_days'),
        commits_90_days=_int_field(raw, 'commits90Days', 'commits_90_days'),
        latest_commit_date=_str_field(raw, 'latestCommitDate', 'latest_commit_date'),
        first_commit_date=_str_field(raw, 'firstCommitDate', 'first_commit_date'),
        commits_per_year=_commits_per_year(raw),
    )


def normalize_extension_commit(raw: Dict[str, Any]) -> ExtensionCommit:
    """Create an ExtensionCommit from a raw ingestion dict.
    Raises ValueError when the extension or committer is missing.
    """
    if not isinstance(raw, dict):
        raise ValueError(f"extension commit must be an object, got {type(raw).__name__}")
    extension = _str_field(raw, 'extension', 'ext')
    committer = _str_field(raw, 'committerEmail', 'committer_email', 'email')
    if not extension or not committer:
        raise ValueError(f"extension commit without extension or committer: {raw!r}")
    return ExtensionCommit(
        extension=extension,
        committer=committer,
        file_path=_str_field(raw, 'filePath', 'file_path', 'path'),
        commit_date=_str_field(raw, 'commitDate', 'commit_date', 'date'),
        commit_id=_str_field(raw, 'commitId', 'commit_id', 'sha') or None,
    )


def _normalize_all(items: Optional[List[Any]], convert, label: str) -> list:
    converted = []
    for item in items or []:
        try:
            converted.append(convert(item))
        except ValueError as exc:
            logger.warning("Skipping malformed %s: %s", label, exc)
    return converted


def load_snapshot(raw: Dict[str, Any]) -> ContributionSnapshot:
    """Build a ContributionSnapshot from a raw payload.

    Expected shape: {'contributors': [...links...], 'extensions': [...extension commits...]}.
    Malformed records are skipped, never fatal.
    """
    raw = raw or {}
    links = _normalize_all(raw.get('contributors') or raw.get('links'), normalize_link, 'contributor link')
    extension_commits = _normalize_all(raw.get('extensions') or raw.get('extension_commits'), normalize_extension_commit, 'extension commit')
    logger.debug("Loaded snapshot with %d links and %d extension commits", len(links), len(extension_commits))
    return ContributionSnapshot(links, extension_commits)

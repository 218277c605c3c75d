"""
Landscape metrics.
Runs the people dependency graph for every window plus the extension, project and
contributor aggregations, and returns plain dicts ready for rendering.
"""
import logging
from datetime import date
from typing import Dict, Any, Optional
from normalize.models import ContributionSnapshot
from correlate.projects import build_project_contributors, count_projects
from correlate.graph import build_collaboration_edges, identity_metrics, top_connections, sort_edges
from .window import TimeWindow
from .indices import compute_c_index, compute_p_index
from .extensions import aggregate_extension_activity
from .projects import summarize_projects
from .contributors import summarize_contributors, contributor_counts, activity_per_year
from .utils import load_settings, DEFAULT_SETTINGS

logger = logging.getLogger(__name__)


def compute_people_dependencies(snapshot: ContributionSnapshot, window: TimeWindow, days_ago: int, top_limit: int = DEFAULT_SETTINGS['top_connections_limit']) -> Dict[str, Any]:
    """
    Build the collaboration graph for one window and compute its indices.
    Each call allocates its own edges; windows never share state.
    """
    projects_map = build_project_contributors(snapshot, window, days_ago)
    edges = build_collaboration_edges(projects_map)
    project_counts = count_projects(snapshot, window, days_ago)
    metrics = identity_metrics(edges, project_counts)
    c_index = compute_c_index(metrics)
    p_index = compute_p_index(metrics)
    logger.info("Window %d days: %d projects, %d edges, C-index %d, P-index %d", days_ago, len(projects_map), len(edges), c_index, p_index)
    return {
        'days': days_ago,
        'edges': [e.to_dict() for e in sort_edges(edges)],
        'cIndex': c_index,
        'pIndex': p_index,
        'identities': [m.to_dict() for m in metrics],
        'topConnections': [t.to_dict() for t in top_connections(edges, project_counts, top_limit)],
    }


def compute_landscape(snapshot: ContributionSnapshot, settings: Optional[Dict[str, Any]] = None, today: Optional[date] = None) -> Dict[str, Any]:
    """
    Compute every landscape table from a snapshot.

    "Now" is fixed once here (today, or the current UTC date) and shared by all
    aggregations so the report is internally consistent.
    """
    if settings is None:
        settings = load_settings()
    window = TimeWindow(today)
    threshold_commits = int(settings.get('contributor_threshold_commits', 1))
    threshold_contributors = int(settings.get('project_threshold_contributors', 1))
    top_limit = int(settings.get('top_connections_limit', DEFAULT_SETTINGS['top_connections_limit']))

    windows = [compute_people_dependencies(snapshot, window, days, top_limit) for days in settings.get('windows') or []]
    contributors = summarize_contributors(snapshot, window, threshold_commits)

    return {
        'today': window.today.isoformat(),
        'windows': windows,
        'extensions': [a.to_dict() for a in aggregate_extension_activity(snapshot, window)],
        'projects': [p.to_dict() for p in summarize_projects(snapshot, window, threshold_commits, threshold_contributors)],
        'contributors': [c.to_dict() for c in contributors],
        'contributorCounts': contributor_counts(contributors, window),
        'years': activity_per_year(contributors),
        'settings': settings,
    }

"""
Correlate package: contributor collaboration graph built from shared projects.
"""

from .graph import build_collaboration_edges, identity_metrics, top_connections
from .projects import build_project_contributors, count_projects

__all__ = [
    "build_collaboration_edges",
    "identity_metrics",
    "top_connections",
    "build_project_contributors",
    "count_projects",
]

"""
Collaboration graph construction.
Projects the project x contributor relation into weighted contributor pairs:
the weight of an edge is the number of distinct projects both contributors
committed to within the window.
"""
import logging
from typing import Dict, List, Iterator, Tuple
from normalize.identity import identity_key
from .models import CollaborationEdge, IdentityMetric, TopConnection

logger = logging.getLogger(__name__)

DEFAULT_TOP_CONNECTIONS = 50


def iter_project_pairs(projects_map: Dict[str, List[str]]) -> Iterator[Tuple[str, str, str]]:
    """Yield (project, a, b) for every ordered pair of distinct contributors of a project."""
    for project, contributors in projects_map.items():
        for a in contributors:
            for b in contributors:
                if identity_key(a) != identity_key(b):
                    yield project, a, b


def build_collaboration_edges(projects_map: Dict[str, List[str]]) -> List[CollaborationEdge]:
    """
    Build one edge per unordered contributor pair.

    The pair is looked up under both orderings; a new edge is keyed by the
    first-seen ordering. A project adds at most one unit of weight per edge.
    """
    edges_by_key: Dict[Tuple[str, str], CollaborationEdge] = {}
    edges: List[CollaborationEdge] = []
    for project, a, b in iter_project_pairs(projects_map):
        ka, kb = identity_key(a), identity_key(b)
        edge = edges_by_key.get((ka, kb)) or edges_by_key.get((kb, ka))
        if edge is None:
            edge = CollaborationEdge(a, b, project)
            edges_by_key[(ka, kb)] = edge
            edges.append(edge)
        else:
            edge.add_project(project)
    logger.debug("Built %d collaboration edges from %d projects", len(edges), len(projects_map))
    return edges


def sort_edges(edges: List[CollaborationEdge]) -> List[CollaborationEdge]:
    """Heaviest edges first; equal weights keep creation order."""
    return sorted(edges, key=lambda e: e.weight, reverse=True)


def identity_metrics(edges: List[CollaborationEdge], project_counts: Dict[str, int]) -> List[IdentityMetric]:
    """
    One row per contributor appearing in at least one edge, sorted by connections
    (degree) descending. project_counts maps identity key -> distinct projects.
    """
    rows: Dict[str, IdentityMetric] = {}
    for edge in sort_edges(edges):
        for endpoint in (edge.from_identity, edge.to_identity):
            key = identity_key(endpoint)
            row = rows.get(key)
            if row is None:
                rows[key] = IdentityMetric(endpoint, project_counts.get(key, 0), 1)
            else:
                row.connections_count += 1
    return sorted(rows.values(), key=lambda r: r.connections_count, reverse=True)


def top_connections(edges: List[CollaborationEdge], project_counts: Dict[str, int], limit: int = DEFAULT_TOP_CONNECTIONS) -> List[TopConnection]:
    """Return the heaviest edges annotated with each side's project count."""
    result = []
    for edge in sort_edges(edges)[:max(0, limit)]:
        result.append(TopConnection(
            edge,
            project_counts.get(identity_key(edge.from_identity), 0),
            project_counts.get(identity_key(edge.to_identity), 0),
        ))
    return result

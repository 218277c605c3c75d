"""
Data models for the contributor collaboration graph.
"""
from typing import Dict, Any, Optional, Set


class CollaborationEdge:
    """
    Undirected edge between two contributors sharing projects.
    The projects set only guards against counting a project twice.
    """

    def __init__(self, from_identity: str, to_identity: str, project: Optional[str] = None):
        self.from_identity = from_identity
        self.to_identity = to_identity
        self.weight = 0
        self.projects: Set[str] = set()
        if project is not None:
            self.add_project(project)

    def add_project(self, project: str) -> bool:
        """Count project toward the weight once. Returns True if it was new."""
        if project in self.projects:
            return False
        self.projects.add(project)
        self.weight += 1
        return True

    def to_dict(self) -> Dict[str, Any]:
        return {'from': self.from_identity, 'to': self.to_identity, 'weight': self.weight}

    def __repr__(self):
        return f"CollaborationEdge({self.from_identity!r}, {self.to_identity!r}, weight={self.weight})"


class IdentityMetric:
    """
    Per-contributor row of the most connected people table.
    """

    def __init__(self, identity: str, projects_count: int = 0, connections_count: int = 0):
        self.identity = identity
        self.projects_count = projects_count
        self.connections_count = connections_count

    def to_dict(self) -> Dict[str, Any]:
        return {'identity': self.identity, 'projectsCount': self.projects_count, 'connectionsCount': self.connections_count}


class TopConnection:
    """Edge annotated with how many projects each side committed to."""

    def __init__(self, edge: CollaborationEdge, from_projects: int, to_projects: int):
        self.edge = edge
        self.from_projects = from_projects
        self.to_projects = to_projects

    def to_dict(self) -> Dict[str, Any]:
        d = self.edge.to_dict()
        d['fromProjects'] = self.from_projects
        d['toProjects'] = self.to_projects
        return d

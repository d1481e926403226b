"""Pipeline phases for the entity path search."""

from .collapse import BipartiteCollapsePhase
from .export import ResultExportPhase
from .ingestion import EntityDocumentIngestionPhase
from .report import RunReportPhase
from .search import PathSearchPhase

__all__ = [
    "EntityDocumentIngestionPhase",
    "BipartiteCollapsePhase",
    "PathSearchPhase",
    "ResultExportPhase",
    "RunReportPhase",
]

"""Run report phase."""

from typing import Any, Dict

from ..pipeline import PipelinePhase


class RunReportPhase(PipelinePhase):
    phase_name = "report"

    def run(self, context: Dict[str, Any]) -> Dict[str, Any]:
        graph = context["graph"]
        report = {
            "connection_count": len(context.get("connections", [])),
            "vertex_count": graph.vertex_count(),
            "edge_count": graph.edge_count() // 2,
            "fan_out": context.get("fan_out", {}),
            "search": context.get("search_summary", {}),
            "written_files": context.get("written_files", {}),
        }
        return {"run_report": report}

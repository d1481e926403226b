"""Bipartite to unipartite conversion phase."""

import logging
from typing import Any, Dict

from ..bipartite import collapse
from ..config import PathConfig
from ..pipeline import PipelinePhase

logger = logging.getLogger(__name__)


class BipartiteCollapsePhase(PipelinePhase):
    phase_name = "collapse"

    def run(self, context: Dict[str, Any]) -> Dict[str, Any]:
        config: PathConfig = context["config"]
        result = collapse(
            context.get("connections", []),
            skip_entities=context.get("skip_entities", frozenset()),
            strict=config.output.strict_fan_out,
        )

        fan_out = result.stats.as_dict()
        logger.info("Graph has %d vertices", result.graph.vertex_count())
        logger.info("Documents by linked entities: %s", fan_out)
        if result.stats.four_or_more:
            logger.warning(
                "Expected at most 3 entities per document, ignored %d documents linking 4 or more",
                result.stats.four_or_more,
            )
        if result.stats.three:
            logger.warning("Materialised %d documents linking 3 entities as triangles", result.stats.three)

        return {"graph": result.graph, "fan_out": fan_out}

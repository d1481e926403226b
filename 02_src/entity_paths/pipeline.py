"""Pipeline abstractions and sequential runner."""

import logging
import time
from abc import ABC, abstractmethod
from typing import Any, Dict, Iterable, List

from .logging_config import phase_scope

logger = logging.getLogger(__name__)


class PipelinePhase(ABC):
    phase_name: str

    @abstractmethod
    def run(self, context: Dict[str, Any]) -> Dict[str, Any]:
        raise NotImplementedError


class PipelineRunner:
    def __init__(self, phases: Iterable[PipelinePhase]) -> None:
        self.phases: List[PipelinePhase] = list(phases)

    def run(self, context: Dict[str, Any]) -> Dict[str, Any]:
        current = dict(context)
        timings: Dict[str, float] = {}
        for phase in self.phases:
            started = time.perf_counter()
            with phase_scope(phase.phase_name):
                phase_result = phase.run(current)
            if not isinstance(phase_result, dict):
                raise TypeError(f"Phase '{phase.phase_name}' must return dict context.")
            timings[phase.phase_name] = time.perf_counter() - started
            logger.info("Phase %s completed in %.3fs", phase.phase_name, timings[phase.phase_name])
            current.update(phase_result)
        current["phase_timings"] = timings
        return current

"""Entity-document ingestion phase reading delimited files."""

import csv
import logging
from pathlib import Path
from typing import AbstractSet, Any, Dict, List

from ..bipartite import EntityDocument
from ..config import PathConfig
from ..errors import InputError, MalformedRow
from ..pipeline import PipelinePhase

logger = logging.getLogger(__name__)


def read_entity_documents(file_path: Path, skip_entities: AbstractSet[str] = frozenset()) -> List[EntityDocument]:
    """Rows of ``entity_id,document_id`` after a header line."""
    connections: List[EntityDocument] = []
    try:
        with file_path.open(newline="", encoding="utf-8") as handle:
            reader = csv.reader(handle)
            next(reader, None)
            for row in reader:
                if not row:
                    continue
                if len(row) != 2:
                    raise MalformedRow(f"Invalid row {reader.line_num} in {file_path}: {row}")
                entity_id, document_id = row
                if entity_id in skip_entities:
                    continue
                connections.append(EntityDocument(entity_id=entity_id, document_id=document_id))
    except (OSError, UnicodeDecodeError, csv.Error) as error:
        raise InputError(f"Unable to read entity-document file {file_path}: {error}") from error
    return connections


class EntityDocumentIngestionPhase(PipelinePhase):
    phase_name = "ingestion"

    def run(self, context: Dict[str, Any]) -> Dict[str, Any]:
        config: PathConfig = context["config"]
        skip_entities = frozenset(config.entities.skip)

        connections: List[EntityDocument] = []
        for input_file in config.input_files:
            path = Path(input_file)
            logger.info("Reading entity-document data from: %s", path)
            rows = read_entity_documents(path, skip_entities)
            logger.info("Read %d connections from %s", len(rows), path)
            connections.extend(rows)

        return {"connections": connections, "skip_entities": skip_entities}

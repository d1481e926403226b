"""Run configuration (JSON file) and process settings (environment)."""

import os
from functools import lru_cache
from pathlib import Path
from typing import List

from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError

from .errors import ConfigError
from .queries import DataSourceEntities


class DataSource(BaseModel):
    name: str = Field(..., min_length=1)
    entity_ids: List[str] = Field(default_factory=list)

    def to_entities(self) -> DataSourceEntities:
        return DataSourceEntities(name=self.name, entity_ids=tuple(self.entity_ids))


class EntityConfig(BaseModel):
    data_sources: List[DataSource] = Field(default_factory=list)
    pairs: List[str] = Field(default_factory=list)
    pair_delimiter: str = Field("|", min_length=1)
    from_entities: List[str] = Field(default_factory=list)
    to_entities: List[str] = Field(default_factory=list)
    skip: List[str] = Field(default_factory=list)

    def has_queries(self) -> bool:
        return len(self.data_sources) >= 2 or bool(self.pairs) or bool(self.from_entities and self.to_entities)


class OutputConfig(BaseModel):
    max_depth: int = Field(3, ge=0)
    find_all_paths: bool = False
    output_file: str = "results.csv"
    delimiter: str = Field(",", min_length=1, max_length=1)
    path_delimiter: str = Field("|", min_length=1, max_length=1)
    webapp_link: str = ""
    unipartite: str = ""
    unipartite_directed: bool = False
    strict_fan_out: bool = False


class PathConfig(BaseModel):
    input_files: List[str] = Field(default_factory=list)
    entities: EntityConfig = Field(default_factory=EntityConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)

    def display_lines(self) -> List[str]:
        return [
            f"Parameter - Number of input files:      {len(self.input_files)}",
            f"Parameter - Number of data sources:     {len(self.entities.data_sources)}",
            f"Parameter - Number of explicit pairs:   {len(self.entities.pairs)}",
            f"Parameter - Number of entities to skip: {len(self.entities.skip)}",
            f"Parameter - Maximum depth:              {self.output.max_depth}",
            f"Parameter - Find all paths:             {self.output.find_all_paths}",
            f"Parameter - Output file:                {self.output.output_file}",
            f"Parameter - Delimiter:                  {self.output.delimiter}",
            f"Parameter - Path delimiter:             {self.output.path_delimiter}",
            f"Parameter - Web-app link template:      {self.output.webapp_link}",
            f"Parameter - Unipartite graph file:      {self.output.unipartite}",
        ]


def load_config(config_path: str | Path) -> PathConfig:
    path = Path(config_path)
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as error:
        raise ConfigError(f"Unable to read config file: {path}") from error
    try:
        return PathConfig.model_validate_json(raw)
    except ValidationError as error:
        raise ConfigError(f"Invalid config file {path}: {error}") from error


class Settings(BaseModel):
    """Process settings loaded from environment variables."""

    config_path: str = "config.json"
    log_level: str = "INFO"
    log_format: str = "text"  # "json" or "text"
    log_module_levels: dict[str, str] = {}
    progress_every: int = 10000


@lru_cache
def get_settings() -> Settings:
    load_dotenv()

    # format: "module1:DEBUG,module2:INFO"
    module_levels = {}
    module_levels_str = os.getenv("LOG_MODULE_LEVELS", "")
    if module_levels_str:
        for item in module_levels_str.split(","):
            if ":" in item:
                module, level = item.split(":", 1)
                module_levels[module.strip()] = level.strip()

    return Settings(
        config_path=os.getenv("ENTITY_PATHS_CONFIG", "config.json"),
        log_level=os.getenv("LOG_LEVEL", "INFO"),
        log_format=os.getenv("LOG_FORMAT", "text"),
        log_module_levels=module_levels,
        progress_every=int(os.getenv("PROGRESS_EVERY", "10000")),
    )

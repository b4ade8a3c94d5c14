from pathlib import Path
from pydantic import BaseModel, Field, field_validator
import yaml

from .scoring.models import CriteriaFormat


class ScoringConfig(BaseModel):
    default_format: CriteriaFormat = Field(default=CriteriaFormat.GHERKIN)
    history_path: Path = Field(default=Path("data/history.jsonl"))

    @field_validator("default_format", mode="before")
    @classmethod
    def _parse_format(cls, value):
        return CriteriaFormat.parse(value)


class Config(BaseModel):
    scoring: ScoringConfig = Field(default_factory=ScoringConfig)
    log_level: str = Field(default="INFO")

    @field_validator("log_level")
    @classmethod
    def _check_level(cls, value: str) -> str:
        level = value.upper()
        if level not in {"TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {value}")
        return level

    @classmethod
    def from_yaml(cls, path: Path) -> "Config":
        with open(path, "r") as f:
            try:
                data = yaml.safe_load(f) or {}
            except yaml.YAMLError as e:
                raise ValueError(f"Cannot parse YAML: {e}") from e
        if not isinstance(data, dict):
            raise ValueError(f"Expected a mapping at the top level, got {type(data).__name__}")
        return cls(**data)

    def to_yaml(self, path: Path):
        with open(path, "w") as f:
            yaml.dump(self.model_dump(mode="json"), f, default_flow_style=False)

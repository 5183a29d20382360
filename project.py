"""Saving and loading of canvas projects as JSON files."""
from __future__ import annotations

from pathlib import Path
from typing import List, Sequence, Union

from loguru import logger
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from objects import FieldSpec
from schema import FieldSpecModel


class ProjectFileError(Exception):
    """Raised when a project file cannot be read or does not validate."""

    def __init__(self, path: Path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"{path}: {reason}")


class Project(BaseModel):
    """A canvas and the tracing jobs placed on it"""
    model_config = ConfigDict(allow_inf_nan=False)

    name: str = Field(default="untitled")
    width: float = Field(default=500.0, gt=0)
    height: float = Field(default=500.0, gt=0)
    fields: List[FieldSpecModel] = Field(default_factory=list)

    def field_specs(self) -> List[FieldSpec]:
        return [model.to_domain() for model in self.fields]

    @classmethod
    def from_field_specs(
        cls, name: str, width: float, height: float, specs: Sequence[FieldSpec]
    ) -> "Project":
        return cls(
            name=name,
            width=width,
            height=height,
            fields=[FieldSpecModel.from_domain(spec) for spec in specs],
        )


def load_project(path: Union[str, Path]) -> Project:
    path = Path(path)
    if not path.exists():
        raise ProjectFileError(path, "file not found")
    try:
        project = Project.model_validate_json(path.read_bytes())
    except OSError as e:
        raise ProjectFileError(path, f"cannot read file: {e}") from e
    except ValidationError as e:
        raise ProjectFileError(path, f"invalid project: {e}") from e
    logger.info(f"Loaded project '{project.name}' with {len(project.fields)} fields from {path}")
    return project


def save_project(project: Project, path: Union[str, Path]) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(project.model_dump_json(indent=2), encoding="utf-8")
    logger.info(f"Saved project '{project.name}' to {path}")
    return path

"""Instruction tree handed to the code generators.

The tree is a flat, ordered list of edits a generator should apply to its
project. Only model additions exist today.
"""

from __future__ import annotations

import enum
from typing import Literal

from pydantic import BaseModel, ConfigDict

from cdd.models import Model, Project


class InstructionKind(str, enum.Enum):
    ADD_MODEL = "add_model"


class AddModel(BaseModel):
    """Add *model* to the generated project."""

    model_config = ConfigDict(frozen=True)

    kind: Literal[InstructionKind.ADD_MODEL] = InstructionKind.ADD_MODEL
    model: Model


Instruction = AddModel


def build_instruction_tree(project: Project) -> list[Instruction]:
    """Wrap every model of *project* in an :class:`AddModel`, keeping model order."""
    return [AddModel(model=model) for model in project.models]

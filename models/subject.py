"""Datenmodell für ein Unterrichtsfach (Pydantic v2)."""

from pydantic import BaseModel, ConfigDict, Field


class Subject(BaseModel):
    """Repräsentiert ein Unterrichtsfach."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str
    tag: str = Field("", alias="shortcut")   # "Ma", "De"

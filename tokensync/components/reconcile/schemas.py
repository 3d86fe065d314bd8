"""
Wire schemas for the design tool's variable snapshot export.

The export uses camelCase keys; these models validate it and convert it
into the engine's frozen dataclasses.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from ._impl import (
    Effect,
    EffectStyle,
    TextStyle,
    Variable,
    VariableKind,
    VariableSnapshot,
)

ResolvedType = Literal["COLOR", "FLOAT", "STRING", "BOOLEAN"]
ModeValue = str | int | float | bool | None


class _ExportModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class VariableModel(_ExportModel):
    id: str
    name: str
    resolved_type: ResolvedType = Field(alias="resolvedType")
    description: str = ""
    collection_name: str = Field(default="", alias="collectionName")
    collection_id: str = Field(default="", alias="collectionId")
    scopes: list[str] = []
    values_by_mode: dict[str, ModeValue] = Field(default_factory=dict, alias="valuesByMode")
    default_value: ModeValue = Field(default=None, alias="defaultValue")
    alias_name: str | None = Field(default=None, alias="aliasName")

    def to_domain(self) -> Variable:
        return Variable(
            id=self.id,
            name=self.name,
            kind=VariableKind(self.resolved_type),
            collection_name=self.collection_name,
            collection_id=self.collection_id,
            description=self.description,
            scopes=tuple(self.scopes),
            values_by_mode=dict(self.values_by_mode),
            default_value=self.default_value,
            alias_name=self.alias_name,
        )


class TextStyleModel(_ExportModel):
    id: str
    name: str
    description: str = ""
    font_family: str = Field(default="", alias="fontFamily")
    font_style: str = Field(default="", alias="fontStyle")
    font_size: float = Field(default=0, alias="fontSize")
    font_weight: int = Field(default=400, alias="fontWeight")
    letter_spacing: dict[str, Any] = Field(default_factory=dict, alias="letterSpacing")
    line_height: dict[str, Any] = Field(default_factory=dict, alias="lineHeight")
    paragraph_spacing: float = Field(default=0, alias="paragraphSpacing")
    text_decoration: str = Field(default="", alias="textDecoration")
    text_case: str = Field(default="", alias="textCase")

    def to_domain(self) -> TextStyle:
        return TextStyle(**self.model_dump())


class EffectModel(_ExportModel):
    type: str
    color: str = ""
    offset_x: float = Field(default=0, alias="offsetX")
    offset_y: float = Field(default=0, alias="offsetY")
    radius: float = 0
    spread: float = 0


class EffectStyleModel(_ExportModel):
    id: str
    name: str
    description: str = ""
    effects: list[EffectModel] = []

    def to_domain(self) -> EffectStyle:
        return EffectStyle(
            id=self.id,
            name=self.name,
            description=self.description,
            effects=tuple(Effect(**e.model_dump()) for e in self.effects),
        )


class SnapshotModel(_ExportModel):
    variables: list[VariableModel] = []
    text_styles: list[TextStyleModel] = Field(default_factory=list, alias="textStyles")
    effect_styles: list[EffectStyleModel] = Field(default_factory=list, alias="effectStyles")

    def to_domain(self) -> VariableSnapshot:
        return VariableSnapshot(
            variables=tuple(v.to_domain() for v in self.variables),
            text_styles=tuple(s.to_domain() for s in self.text_styles),
            effect_styles=tuple(s.to_domain() for s in self.effect_styles),
        )


def snapshot_from_dict(data: dict[str, Any] | None) -> VariableSnapshot | None:
    """
    Validate a snapshot export and convert it to a VariableSnapshot.

    Returns None for an absent export.

    Raises:
        pydantic.ValidationError: If the export does not match the schema.
    """
    if data is None:
        return None
    return SnapshotModel.model_validate(data).to_domain()

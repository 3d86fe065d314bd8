from typing import Literal

from pydantic import BaseModel, Field, field_validator

HarmonyName = Literal["complementary", "analogous", "triadic", "split-complementary"]

HEX_PATTERN = r"^#[0-9A-Fa-f]{6}$"


class ProjectRules(BaseModel):
    slug: str
    rules_version: str


class TokensRules(BaseModel):
    reserved_prefix: str = "$"
    skip_keys: list[str] = ["metadata"]
    root_group: str = "(root)"

    @field_validator("reserved_prefix")
    @classmethod
    def prefix_not_empty(cls, v: str) -> str:
        if not v:
            raise ValueError("reserved_prefix must not be empty")
        return v


class SemanticColorRules(BaseModel):
    success: str = Field(default="#16a34a", pattern=HEX_PATTERN)
    warning: str = Field(default="#d97706", pattern=HEX_PATTERN)
    error: str = Field(default="#dc2626", pattern=HEX_PATTERN)
    info: str = Field(default="#2563eb", pattern=HEX_PATTERN)


class PaletteRules(BaseModel):
    default_harmony: HarmonyName = "complementary"
    semantic: SemanticColorRules = SemanticColorRules()


class ReconcileRules(BaseModel):
    duplicate_keys: Literal["error", "last_wins"] = "error"


class Rules(BaseModel):
    project: ProjectRules
    tokens: TokensRules = TokensRules()
    palette: PaletteRules = PaletteRules()
    reconcile: ReconcileRules = ReconcileRules()

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class SetEntry(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    yy_mm_dd: str = Field(..., alias="yyMMdd")
    date: str | None = None
    label: str
    path: str


class IndexDocument(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    schema_version: int = Field(..., alias="schemaVersion")
    student_id: str = Field(..., alias="studentId")
    generated_at: str = Field(..., alias="generatedAt")
    sets: list[SetEntry] = Field(default_factory=list)

    def to_payload(self) -> dict:
        return self.model_dump(by_alias=True)

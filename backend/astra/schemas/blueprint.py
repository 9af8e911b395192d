import uuid
from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, Field, field_validator, model_validator


class Component(BaseModel):
    """Opaque building block of a page; never interpreted by the command pipeline."""

    id: str
    type: str
    props: dict[str, Any] = Field(default_factory=dict)


class Page(BaseModel):
    id: str
    name: str
    title: str
    path: str
    content: str | None = None
    components: list[Component] = Field(default_factory=list)


class LayoutMetadata(BaseModel):
    preview_mode: Literal["desktop", "mobile"] = "desktop"
    viewport_width: int | None = 1920
    viewport_height: int | None = 1080


class BlueprintCreate(BaseModel):
    name: str | None = None


class BlueprintUpdate(BaseModel):
    name: str | None = None
    domain: str | None = None
    pages: list[Page] | None = None
    layout: LayoutMetadata | None = None

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, value: str | None) -> str | None:
        if value is None:
            return value
        value = value.strip()
        if not value:
            raise ValueError("name must not be blank")
        return value

    @model_validator(mode="after")
    def required_fields_not_null(self) -> "BlueprintUpdate":
        # only domain is nullable in storage
        for field in ("name", "pages", "layout"):
            if field in self.model_fields_set and getattr(self, field) is None:
                raise ValueError(f"{field} cannot be null")
        return self


class BlueprintResponse(BaseModel):
    id: uuid.UUID
    name: str
    domain: str | None = None
    created_at: datetime
    updated_at: datetime
    pages: list[Page]
    layout: LayoutMetadata

    model_config = {"from_attributes": True}

    @property
    def page_names(self) -> list[str]:
        return [page.name for page in self.pages]

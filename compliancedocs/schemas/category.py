"""Category catalog API schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class SubcategoryIn(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    description: str = ""


class SubcategoryResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    name: str
    description: str


class CategoryCreate(BaseModel):
    """Request body for POST /categories."""

    name: str = Field(..., min_length=1, max_length=255)
    description: str = ""
    subcategories: list[SubcategoryIn] = Field(default_factory=list)


class CategoryUpdate(BaseModel):
    """Partial update; omitted fields stay unchanged."""

    name: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = None


class SubcategoryUpdate(BaseModel):
    new_name: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = None


class CategoryResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    description: str
    subcategories: list[SubcategoryResponse]
    created_at: datetime | None = None
    updated_at: datetime | None = None

"""Pydantic DTOs (Data Transfer Objects) for the Article feature."""

from pydantic import BaseModel, Field


class AuthorSchema(BaseModel):
    """An author as supplied by or returned to the caller."""

    name: str = Field(..., examples=["John Doe"])

    model_config = {"from_attributes": True}


class ArticleCreate(BaseModel):
    """Schema for creating a new article."""

    title: str = Field(..., examples=["Spring Data Elasticsearch"])
    authors: list[AuthorSchema] = Field(default_factory=list)


class ArticleUpdate(BaseModel):
    """Schema for updating an existing article; all fields optional."""

    title: str | None = None
    authors: list[AuthorSchema] | None = None


class ArticleResponse(BaseModel):
    """Schema returned to the caller."""

    id: str
    title: str
    authors: list[AuthorSchema] = Field(default_factory=list)

    model_config = {"from_attributes": True}

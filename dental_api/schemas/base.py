# dental_api/schemas/base.py
from typing import Generic, List, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from dental_api.crud.base import PageResult

T = TypeVar("T")


class CamelModel(BaseModel):
    """snake_case in Python, camelCase on the wire (both accepted on input)."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class Page(CamelModel, Generic[T]):
    items: List[T]
    total_pages: int
    current_page: int
    total_items: int

    @classmethod
    def from_result(cls, result: PageResult) -> "Page[T]":
        return cls.model_validate(
            {
                "items": list(result.items),
                "total_pages": result.total_pages,
                "current_page": result.current_page,
                "total_items": result.total_items,
            },
            from_attributes=True,
        )


class VerifyResult(CamelModel):
    success: bool


class PasswordBody(CamelModel):
    password: str | None = None


class EntryEdit(CamelModel):
    """Title/content edit of a post or consultation."""

    title: str = Field(..., min_length=1, max_length=255)
    content: str = Field(..., min_length=1)

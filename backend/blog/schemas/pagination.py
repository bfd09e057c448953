# blog/schemas/pagination.py
"""
Page envelope shared by the list endpoints.
"""
import math
from typing import Generic, List, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


class Page(BaseModel, Generic[T]):
    items: List[T]
    page: int  # 1-based page number
    per_page: int
    total: int  # Total number of matching items
    last_page: int

    @classmethod
    def build(cls, items: List[T], page: int, per_page: int, total: int) -> "Page[T]":
        return cls(
            items=items,
            page=page,
            per_page=per_page,
            total=total,
            last_page=max(1, math.ceil(total / per_page)),
        )

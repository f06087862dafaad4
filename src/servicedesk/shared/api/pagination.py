"""
Offset Pagination
=================

Shared page/limit handling for list endpoints.
"""

import math
from dataclasses import dataclass

from pydantic import BaseModel


class Pagination(BaseModel):
    """Pagination block returned next to every list payload."""
    page: int
    limit: int
    total: int
    pages: int

    @classmethod
    def build(cls, page: int, limit: int, total: int) -> "Pagination":
        return cls(page=page, limit=limit, total=total, pages=math.ceil(total / limit))


@dataclass(frozen=True)
class PageRequest:
    """Page number and size, both coerced to positive integers."""
    page: int
    limit: int

    @classmethod
    def coerce(cls, page: int, limit: int) -> "PageRequest":
        return cls(page=max(1, page), limit=max(1, limit))

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit

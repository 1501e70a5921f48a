from typing import Generic, List, TypeVar

import attrs


_T = TypeVar('_T')


@attrs.frozen
class Page(Generic[_T]):
    items: List[_T]
    total: int
    page: int
    limit: int

    @property
    def total_pages(self) -> int:
        return (self.total + self.limit - 1) // self.limit if self.limit else 0

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


def page_offset(*, page: int, limit: int) -> int:
    return (max(page, 1) - 1) * limit

"""Response payload models and the ordered batch result container."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, Iterator, Sequence, TypeVar, overload

from figiclient.errors import ApiItemError
from figiclient.models.figi_record import FigiRecord

T = TypeVar("T")


def _records(payload: dict[str, Any]) -> tuple[FigiRecord, ...]:
    data = payload.get("data")
    if data is None:
        return ()
    if not isinstance(data, list):
        raise ValueError("'data' must be an array")
    return tuple(FigiRecord.from_dict(item) for item in data)


def _cursor(payload: dict[str, Any]) -> str | None:
    nxt = payload.get("next")
    if nxt is None or nxt == "":
        return None
    return str(nxt)


@dataclass(frozen=True)
class MappingData:
    """Successful result of one mapping job."""

    data: tuple[FigiRecord, ...] = ()

    @property
    def figis(self) -> list[str]:
        return [r.figi for r in self.data]

    @classmethod
    def from_dict(cls, payload: dict[str, Any]) -> MappingData:
        return cls(data=_records(payload))


@dataclass(frozen=True)
class SearchData:
    """One page of search results.

    Attributes:
        data: Records on this page, ordered by relevance.
        next: Cursor for the following page, or ``None`` on the last page.
    """

    data: tuple[FigiRecord, ...] = ()
    next: str | None = None

    @property
    def next_page(self) -> str | None:
        return self.next

    @classmethod
    def from_dict(cls, payload: dict[str, Any]) -> SearchData:
        return cls(data=_records(payload), next=_cursor(payload))


@dataclass(frozen=True)
class FilterData:
    """One page of filter results, with the total match count when sent."""

    data: tuple[FigiRecord, ...] = ()
    next: str | None = None
    total: int | None = None

    @property
    def next_page(self) -> str | None:
        return self.next

    @classmethod
    def from_dict(cls, payload: dict[str, Any]) -> FilterData:
        total = payload.get("total")
        if total is not None and (isinstance(total, bool) or not isinstance(total, int)):
            raise ValueError("'total' must be an integer")
        return cls(data=_records(payload), next=_cursor(payload), total=total)


@dataclass(frozen=True)
class BatchItem(Generic[T]):
    """Result for one job in a batch: either ``value`` or ``error`` is set."""

    index: int
    value: T | None = None
    error: ApiItemError | None = None

    @property
    def is_success(self) -> bool:
        return self.error is None

    @property
    def is_error(self) -> bool:
        return self.error is not None

    def unwrap(self) -> T:
        """Return the value or raise the item's ``ApiItemError``."""
        if self.error is not None:
            raise self.error
        return self.value  # type: ignore[return-value]


class BatchResult(Sequence[BatchItem[T]]):
    """Per-job results in the exact order and count of the submitted batch."""

    def __init__(self, items: Sequence[BatchItem[T]] = ()) -> None:
        self._items: tuple[BatchItem[T], ...] = tuple(items)

    @overload
    def __getitem__(self, index: int) -> BatchItem[T]: ...

    @overload
    def __getitem__(self, index: slice) -> tuple[BatchItem[T], ...]: ...

    def __getitem__(self, index):
        return self._items[index]

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[BatchItem[T]]:
        return iter(self._items)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BatchResult):
            return NotImplemented
        return self._items == other._items

    def __hash__(self) -> int:
        return hash(self._items)

    def __repr__(self) -> str:
        ok = sum(1 for i in self._items if i.is_success)
        return f"BatchResult(size={len(self._items)}, ok={ok}, errors={len(self._items) - ok})"

    def successes(self) -> list[BatchItem[T]]:
        return [i for i in self._items if i.is_success]

    def errors(self) -> list[BatchItem[T]]:
        return [i for i in self._items if i.is_error]

    def values(self) -> list[T | None]:
        """Values in batch order, ``None`` where the job failed."""
        return [i.value for i in self._items]

    @property
    def all_succeeded(self) -> bool:
        return all(i.is_success for i in self._items)

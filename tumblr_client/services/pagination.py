"""Cursor modes and offset arithmetic shared by the paged containers."""

from enum import Enum
from typing import Callable, Iterator, Optional, TypeVar

from tumblr_client.core.exceptions import (
    MixedPaginationParamsError,
    NoNextPageError,
    NoPrevPageError,
    PaginationModeMismatchError,
)
from tumblr_client.core.params import Params

T = TypeVar("T")


class PaginationMode(Enum):
    """Cursor strategy a page was fetched under; value is the param key."""

    OFFSET = "offset"
    SINCE_ID = "since_id"
    BEFORE_ID = "before_id"
    BEFORE = "before"


def detect_mode(params: Params, allowed: tuple[PaginationMode, ...]) -> Optional[PaginationMode]:
    """Return the single cursor mode present in params, or None.

    Raises:
        MixedPaginationParamsError: more than one of ``allowed`` is set
    """
    present = [mode for mode in allowed if params.get(mode.value) != ""]
    if len(present) > 1:
        names = ", ".join(mode.value for mode in allowed)
        raise MixedPaginationParamsError(f"Only can specify one of {names}")
    return present[0] if present else None


def check_mode(current: Optional[PaginationMode], requested: PaginationMode) -> None:
    """A page can only be advanced by the cursor it was fetched with.

    Raises:
        PaginationModeMismatchError: the page has no cursor, or a different one
    """
    if current is None:
        raise PaginationModeMismatchError(
            f"Page was fetched without a cursor, cannot paginate by {requested.value}"
        )
    if current is not requested:
        raise PaginationModeMismatchError(
            f"Page was fetched by {current.value}, cannot paginate by {requested.value}"
        )


def effective_limit(limit: int, page_size: int) -> int:
    """An unset limit falls back to the number of items actually received."""
    return limit if limit > 0 else page_size


def next_offset(offset: int, limit: int, page_size: int, total: int) -> int:
    """Offset of the page after this one.

    Raises:
        NoNextPageError: the page is empty or the next offset passes total
    """
    step = effective_limit(limit, page_size)
    if page_size < 1:
        raise NoNextPageError()
    offset += step
    if offset >= total:
        raise NoNextPageError()
    return offset


def prev_offset(offset: int, limit: int, page_size: int) -> int:
    """Offset of the page before this one, never below zero.

    Raises:
        NoPrevPageError: already at the first page, or no step size is
            known (empty page without a limit)
    """
    if offset <= 0:
        raise NoPrevPageError()
    step = effective_limit(limit, page_size)
    if step < 1:
        raise NoPrevPageError()
    if step >= offset:
        return 0
    return offset - step


def iter_pages(page: T, advance: Callable[[T], T]) -> Iterator[T]:
    """Yield page, then every page reached through advance(), until the end.

    Example:
        >>> for page in iter_pages(get_following(t), lambda p: p.next()):
        ...     handle(page.blogs)
    """
    while True:
        yield page
        try:
            page = advance(page)
        except NoNextPageError:
            return

"""
search.py - Paginated, lazily evaluated search cursor.

A Search object issues no request when it is created. A page is fetched the
first time it is asked for and cached for the lifetime of the cursor, so
asking for the same page again never costs another API call (or another unit
of the rate limit).

    search = Search("shaders", 20, facets=Facet.versions("1.19.2"), transport=t)
    first = search.page(0)     # API call
    second = search.page(1)    # API call
    again = search.page(0)     # cached, no API call

Each page resolves to either a tuple of SearchResult or the EXHAUSTED
sentinel, which marks the end of the result set. Network failures are never
raised from the paging methods; they resolve the page to EXHAUSTED.

Iteration is explicit: each_page() and each() may perform one request per
page they reach. Use a larger page_size when walking large result sets.
"""

from __future__ import annotations

import logging
import threading
from enum import Enum
from typing import *

from .exceptions import InvalidArgumentError, ModrinthError
from .facet import FacetGroups, encode_facets, normalize_facets
from .models import ProjectLookup, SearchResult
from .routes import MODRINTHAPIURLS
from .utils import clamp

if TYPE_CHECKING:
    from .net import Transport

logger = logging.getLogger(__name__)

MIN_PAGE_SIZE = 1
MAX_PAGE_SIZE = 100


class SearchIndex(str, Enum):
    """Sorting method for search results."""
    relevance = "relevance"
    downloads = "downloads"
    follows = "follows"
    newest = "newest"
    updated = "updated"

    @classmethod
    def coerce(cls, value: Union["SearchIndex", str]) -> "SearchIndex":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value))
        except ValueError:
            raise InvalidArgumentError(f'invalid index "{value}" specified') from None


class _Exhausted:
    """Sentinel for a page past the end of the result set. Falsy and empty."""

    _instance: Optional["_Exhausted"] = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __len__(self) -> int:
        return 0

    def __iter__(self) -> Iterator[SearchResult]:
        return iter(())

    def __repr__(self) -> str:
        return "EXHAUSTED"


EXHAUSTED = _Exhausted()

Page = Union[Tuple[SearchResult, ...], _Exhausted]


class Search:
    """
    A search query with cached, lazily fetched pages.

    Parameters
    ----------
    query : Optional[str]
        Text to search for.
    page_size : int
        Results per page, clamped to [1, 100]. The server may override it.
    facets : Facet | str | list | list[list], optional
        Facet groups; see modrinthpy.facet.normalize_facets for accepted shapes.
    filters : Optional[str]
        Raw filter expression, e.g. 'categories="fabric" AND downloads > 1000'.
        Slower but more flexible than facets.
    index : SearchIndex | str
        Sort order, one of relevance/downloads/follows/newest/updated.
        `sort` is accepted as an alias.
    transport : Optional[Transport]
        Transport used for the API calls; a default Transport is created on first use.
    lookup : Optional[Callable[[str], Optional[Project]]]
        Resolver handed to every SearchResult so `result.project` can load the full project.

    Raises
    ------
    InvalidArgumentError
        When the sort index is not recognized or a facet cannot be parsed.
    """

    def __init__(
        self,
        query: Optional[str] = None,
        page_size: int = 10,
        *,
        facets: Any = None,
        filters: Optional[str] = None,
        index: Union[SearchIndex, str] = SearchIndex.relevance,
        sort: Optional[Union[SearchIndex, str]] = None,
        transport: Optional["Transport"] = None,
        lookup: Optional[ProjectLookup] = None,
    ):
        self._query = query
        self._page_size = clamp(page_size, MIN_PAGE_SIZE, MAX_PAGE_SIZE)
        self._index = SearchIndex.coerce(sort if sort is not None else index)
        self._facets: FacetGroups = normalize_facets(facets)
        self._filters = filters or None
        self._transport = transport
        self._lookup = lookup

        self._offset = 0
        self._total = -1
        self._pages: Dict[int, Page] = {}
        # lowest page index known to be past the end
        self._end: Optional[int] = None
        self._lock = threading.Lock()

    @property
    def query(self) -> Optional[str]:
        return self._query

    @property
    def facets(self) -> FacetGroups:
        return [list(group) for group in self._facets]

    @property
    def filters(self) -> Optional[str]:
        return self._filters

    @property
    def index(self) -> SearchIndex:
        return self._index

    @property
    def page_size(self) -> int:
        """Number of results per page; updated from the server's reported limit."""
        return self._page_size

    limit = page_size

    @property
    def offset(self) -> int:
        """Offset reported by the last successful response."""
        return self._offset

    @property
    def size(self) -> int:
        """Total number of results, or -1 if no API call has been made yet."""
        return self._total

    @property
    def pages_fetched(self) -> int:
        return len(self._pages)

    @property
    def transport(self) -> "Transport":
        if self._transport is None:
            from .net import Transport
            self._transport = Transport()
        return self._transport

    def page(self, index: int) -> Page:
        """
        Return the results of the zero-based page `index`.

        The first call for an index performs at most one API call; later calls
        return the identical cached object. Returns EXHAUSTED when the page is
        past the end of the results or could not be fetched.
        """
        i = max(int(index), 0)
        with self._lock:
            cached = self._pages.get(i)
            if cached is not None:
                logger.debug("Search page %d served from cache", i)
                return cached
            if self._end is not None and i > self._end:
                return self._mark_exhausted(i)
            offset = i * self._page_size
            if self._total >= 0 and offset > self._total:
                return self._mark_exhausted(i)
            results = self._call(offset)
            if results is None:
                return self._mark_exhausted(i)
            self._pages[i] = results
            return results

    def each_page(self) -> Iterator[Tuple[SearchResult, ...]]:
        """
        Yield each page of results starting at page 0, stopping at the first
        exhausted page. May perform one API call per uncached page.
        """
        n = 0
        while True:
            results = self.page(n)
            if results is EXHAUSTED:
                return
            yield results
            n += 1

    def each(self) -> Iterator[SearchResult]:
        """Yield every result in order across pages. May perform one API call per uncached page."""
        for results in self.each_page():
            yield from results

    def clear_cache(self) -> None:
        """Forget all cached pages and the known total."""
        with self._lock:
            self._pages.clear()
            self._end = None
            self._total = -1
            self._offset = 0

    def params(self, offset: int) -> Dict[str, Any]:
        """Query parameters for a page starting at `offset`."""
        params: Dict[str, Any] = {}
        if self._query:
            params["query"] = self._query
        if self._facets:
            params["facets"] = encode_facets(self._facets)
        params["index"] = self._index.value
        params["offset"] = offset
        params["limit"] = self._page_size
        if self._filters:
            params["filters"] = self._filters
        return params

    def _mark_exhausted(self, i: int) -> _Exhausted:
        self._pages[i] = EXHAUSTED
        if self._end is None or i < self._end:
            self._end = i
        return EXHAUSTED

    def _call(self, offset: int) -> Optional[Tuple[SearchResult, ...]]:
        try:
            payload = self.transport.get(MODRINTHAPIURLS.SEARCH, params=self.params(offset))
        except ModrinthError as exc:
            logger.warning("Search request at offset %d failed: %s", offset, exc)
            return None
        if not isinstance(payload, dict) or not isinstance(payload.get("hits"), list):
            if payload is not None:
                logger.warning("Unexpected search response at offset %d: %r", offset, type(payload).__name__)
            return None

        try:
            results = tuple(SearchResult.from_json(hit, lookup=self._lookup) for hit in payload["hits"])
            new_offset = int(payload.get("offset") or offset)
            page_size = self._page_size
            if payload.get("limit") is not None:
                page_size = clamp(payload["limit"], MIN_PAGE_SIZE, MAX_PAGE_SIZE)
            total = self._total
            if payload.get("total_hits") is not None:
                total = int(payload["total_hits"])
            elif len(results) < page_size:
                # no total reported: a short page is the last one
                total = offset + len(results)
        except (ModrinthError, TypeError, ValueError) as exc:
            logger.warning("Could not decode search results at offset %d: %s", offset, exc)
            return None

        self._offset = new_offset
        self._page_size = page_size
        self._total = total
        return results

    def __repr__(self) -> str:
        return (f"<Search query={self._query!r} index={self._index.value} "
                f"page_size={self._page_size} size={self._total}>")

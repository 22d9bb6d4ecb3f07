"""play_scout.crawler: request gate and pagination loops."""

from .fetcher import Fetcher
from .models import RequestDescriptor
from .paginator import ListPaginator, SearchPaginator

__all__ = ["Fetcher", "RequestDescriptor", "ListPaginator", "SearchPaginator"]

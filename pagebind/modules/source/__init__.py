from .descriptor import (
    ApiSource,
    CollectionSource,
    Pagination,
    QueryMode,
    ResolvedData,
    SourceDescriptor,
)
from .fetcher import SourceFetcher
from .binding import SourceBinding

__all__ = [
    'ApiSource', 'CollectionSource', 'Pagination', 'QueryMode', 'ResolvedData',
    'SourceDescriptor', 'SourceFetcher', 'SourceBinding'
]

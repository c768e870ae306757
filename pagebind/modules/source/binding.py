import asyncio
from typing import Optional, Union

from .descriptor import ApiSource, CollectionSource, ResolvedData
from .fetcher import SourceFetcher

Descriptor = Union[CollectionSource, ApiSource]


class SourceBinding:
    """The data of one bound component, kept in sync with its configuration.

    At most one fetch is in flight. A new descriptor cancels the pending
    fetch, and a result is applied only if the descriptor that started it is
    still the current one (last write wins).
    """

    def __init__(self, fetcher: SourceFetcher):
        self.fetcher = fetcher
        self.descriptor: Optional[Descriptor] = None
        self.current: Optional[ResolvedData] = None
        self._generation = 0
        self._task: Optional[asyncio.Task] = None

    @property
    def pending(self) -> bool:
        return self._task is not None and not self._task.done()

    async def update(self, descriptor: Descriptor) -> Optional[ResolvedData]:
        """
        Switch to a new descriptor and resolve it.

        Returns:
            Optional[ResolvedData]: The applied result, or None when a newer
            update or an unmount superseded this one
        """
        self._cancel_pending()
        self._generation += 1
        tag = (self._generation, descriptor)
        self.descriptor = descriptor

        task = asyncio.ensure_future(self.fetcher.resolve(descriptor))
        self._task = task
        try:
            result = await task
        except asyncio.CancelledError:
            if task.cancelled() and not self._is_current(tag):
                return None
            raise
        finally:
            if self._task is task:
                self._task = None

        if not self._is_current(tag):
            return None
        self.current = result
        return result

    def unmount(self) -> None:
        """Drop the binding; any in-flight result is discarded."""
        self._cancel_pending()
        self._generation += 1
        self.descriptor = None
        self.current = None

    def _is_current(self, tag) -> bool:
        generation, descriptor = tag
        return generation == self._generation and descriptor == self.descriptor

    def _cancel_pending(self) -> None:
        if self._task is not None and not self._task.done():
            self._task.cancel()
        self._task = None

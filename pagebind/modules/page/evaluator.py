import asyncio
from typing import Any, List, Union

from ..logging import BaseLogger
from ..scope.stack import MISSING, DataScopeStack, NoItemAtIndex, ScopeFrame, iterate_frames, select_index
from ..source.descriptor import ApiSource, CollectionSource
from ..source.fetcher import SourceFetcher
from ..template.renderer import TemplateRenderer
from .node import BindingMode, DataBinding, NodeType, PageNode


class PageEvaluator:
    """Evaluates a page node tree to its rendered outputs.

    evaluate(node, scope) is one recursive walk. A data node pushes its
    frames onto the scope it was given and pops them before returning, and
    every child of a group runs on its own fork of the scope so siblings
    can resolve concurrently.
    """

    def __init__(self, fetcher: SourceFetcher, renderer: TemplateRenderer, logger: BaseLogger):
        """
        Initialize the evaluator.

        Args:
            fetcher: Resolves the data sources of data nodes
            renderer: Renders the templates of text nodes
            logger: Logger instance
        """
        self.fetcher = fetcher
        self.renderer = renderer
        self.logger = logger

    async def evaluate(self, node: PageNode, scope: DataScopeStack) -> List[str]:
        if node.type == NodeType.TEXT:
            return [self.renderer.render(node.text, scope)]
        if node.type == NodeType.DATA:
            return await self._evaluate_data(node, scope)
        return await self._evaluate_children(node.children, scope)

    async def _evaluate_children(self, children: List[PageNode], scope: DataScopeStack) -> List[str]:
        results = await asyncio.gather(*(self.evaluate(child, scope.fork()) for child in children))
        return [output for result in results for output in result]

    async def _load(self, binding: DataBinding, scope: DataScopeStack) -> Any:
        if binding.source is not None:
            resolved = await self.fetcher.resolve(self._bind_source(binding.source, scope))
            return resolved.value
        value = scope.lookup(binding.path)
        if value is MISSING:
            self.logger.log_warning(f"Data not found at path: {binding.path}")
            return None
        return value

    def _bind_source(
        self,
        source: Union[CollectionSource, ApiSource],
        scope: DataScopeStack
    ) -> Union[CollectionSource, ApiSource]:
        """Fill placeholders in the request fields of a descriptor from the enclosing scope."""
        render = self.renderer.render_dict
        if isinstance(source, ApiSource):
            return source.model_copy(update={
                "parameters": render(source.parameters, scope),
                "headers": render(source.headers, scope) if source.headers else source.headers,
                "body": self.renderer.render_value(source.body, scope),
            })
        update = {}
        if source.where_conditions:
            update["where_conditions"] = render(source.where_conditions, scope)
        if source.document_id:
            update["document_id"] = self.renderer.render(source.document_id, scope)
        return source.model_copy(update=update) if update else source

    async def _evaluate_data(self, node: PageNode, scope: DataScopeStack) -> List[str]:
        binding = node.binding
        value = await self._load(binding, scope)
        if value is None:
            return []

        mode = binding.mode
        if mode == BindingMode.AUTO:
            mode = BindingMode.REPEAT if isinstance(value, list) else BindingMode.SINGLE

        if mode == BindingMode.SINGLE or not isinstance(value, list):
            if mode != BindingMode.SINGLE:
                self.logger.log_warning(
                    f"Binding '{binding.as_}' is in {mode.value} mode but its data is not an array"
                )
            return await self._evaluate_in_frame(node, scope, ScopeFrame(name=binding.as_, value=value))

        if mode == BindingMode.INDEX:
            selected = select_index(binding.as_, value, binding.selected_index)
            if isinstance(selected, NoItemAtIndex):
                self.logger.log_warning(
                    f"No item at index {selected.index} for '{binding.as_}' ({selected.length} items)"
                )
                return []
            return await self._evaluate_in_frame(node, scope, selected)

        items = value[:binding.max_items] if binding.max_items > 0 else value
        outputs: List[str] = []
        for frame in iterate_frames(binding.as_, items):
            outputs.extend(await self._evaluate_in_frame(node, scope, frame))
        return outputs

    async def _evaluate_in_frame(self, node: PageNode, scope: DataScopeStack, frame: ScopeFrame) -> List[str]:
        with scope.frame(frame):
            return await self._evaluate_children(node.children, scope)

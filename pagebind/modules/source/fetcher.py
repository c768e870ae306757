from typing import Optional, Union

from ..cms.base import CmsClient, DocumentNotFoundError
from ..logging import BaseLogger
from ..request.errors import FetchError
from ..request.http_client import HttpClient
from ..request.request_builder import RequestBuilder
from ..swagger.examples import synthesize_response
from ..swagger.loader import SpecificationRegistry
from .descriptor import ApiSource, CollectionSource, Pagination, QueryMode, ResolvedData


class SourceFetcher:
    """Fetches data for a source descriptor.

    resolve() never raises to the caller. A failed collection query is
    answered from the fallback CMS when one is configured and is empty data
    otherwise; API fetch failures fall back once to data synthesized from
    the endpoint's first 2xx response schema. There is no retry.
    """

    def __init__(
        self,
        cms: CmsClient,
        http: HttpClient,
        registry: SpecificationRegistry,
        logger: BaseLogger,
        request_builder: Optional[RequestBuilder] = None,
        fallback_cms: Optional[CmsClient] = None
    ):
        """
        Initialize the fetcher.

        Args:
            cms: CMS collaborator for collection sources
            http: HTTP collaborator for API sources
            registry: Parsed specifications that API sources refer to
            logger: Logger instance
            request_builder: Builds outbound requests from endpoint parameters
            fallback_cms: Mock documents served when the CMS cannot be reached
        """
        self.cms = cms
        self.http = http
        self.registry = registry
        self.logger = logger
        self.request_builder = request_builder or RequestBuilder()
        self.fallback_cms = fallback_cms

    async def resolve(self, descriptor: Union[CollectionSource, ApiSource]) -> ResolvedData:
        """
        Resolve a descriptor to data.

        Args:
            descriptor: The configured source

        Returns:
            ResolvedData: The fetched, synthesized or empty data
        """
        self.logger.log_source(descriptor.kind, descriptor.describe())
        if isinstance(descriptor, CollectionSource):
            return await self._resolve_collection(descriptor)
        return await self._resolve_api(descriptor)

    async def _resolve_collection(self, descriptor: CollectionSource) -> ResolvedData:
        try:
            return await self._query_collection(self.cms, descriptor)
        except DocumentNotFoundError as e:
            self.logger.log_warning(str(e))
            return ResolvedData.empty()
        except Exception as e:
            if self.fallback_cms is None:
                self.logger.log_error(f"Error fetching collection '{descriptor.slug}': {str(e)}")
                return ResolvedData.empty()
            self.logger.log_fallback(descriptor.describe(), str(e))

        try:
            result = await self._query_collection(self.fallback_cms, descriptor)
        except Exception as e:
            self.logger.log_warning(f"No mock data for collection '{descriptor.slug}': {str(e)}")
            return ResolvedData.empty()
        return result.model_copy(update={"synthesized": True})

    async def _query_collection(self, cms: CmsClient, descriptor: CollectionSource) -> ResolvedData:
        if descriptor.query_mode == QueryMode.SINGLE:
            if not descriptor.document_id:
                self.logger.log_warning(
                    f"Collection '{descriptor.slug}' is in single mode but has no document id"
                )
                return ResolvedData.empty()
            document = await cms.find_by_id(descriptor.slug, descriptor.document_id)
            return ResolvedData.of(document)

        result = await cms.find(
            descriptor.slug,
            where=descriptor.where_conditions or {},
            limit=descriptor.limit,
            page=descriptor.page,
            sort=descriptor.sort,
        )
        return ResolvedData(
            value=result.docs,
            is_array=True,
            pagination=Pagination(
                total_docs=result.total_docs,
                has_next_page=result.has_next_page,
                has_prev_page=result.has_prev_page,
                page=result.page,
                limit=result.limit,
            ),
        )

    async def _resolve_api(self, descriptor: ApiSource) -> ResolvedData:
        specification = self.registry.get(descriptor.specification)
        if specification is None:
            self.logger.log_error(f"Specification '{descriptor.specification}' is not registered")
            return ResolvedData.empty()

        endpoint = specification.find_endpoint(descriptor.endpoint_id)
        if endpoint is None:
            self.logger.log_error(
                f"Endpoint not found: {descriptor.endpoint_id} in '{descriptor.specification}'"
            )
            return ResolvedData.empty()

        request_spec = self.request_builder.build(
            specification.base_url,
            endpoint,
            descriptor.parameters,
            descriptor.headers,
            descriptor.body,
        )

        try:
            response = await self.http.request(request_spec)
            return ResolvedData.of(response.body)
        except FetchError as e:
            self.logger.log_fallback(descriptor.describe(), str(e))
        except Exception as e:
            self.logger.log_fallback(descriptor.describe(), f"unexpected error: {str(e)}")

        return ResolvedData.of(synthesize_response(endpoint), synthesized=True)

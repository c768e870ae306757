from typing import List

import yaml
from pydantic import ValidationError
from pydantic_core import ErrorDetails

from ..cms.base import CmsClient
from ..cms.factory import create_cms_client, create_fallback_cms_client
from ..logging import BaseLogger
from ..request.http_client import AiohttpClient, HttpClient
from ..scope.stack import DataScopeStack, ScopeFrame
from ..source.fetcher import SourceFetcher
from ..swagger.loader import SpecificationRegistry
from ..template.renderer import TemplateRenderer
from .evaluator import PageEvaluator
from .node import PageDefinition


def _format_validation_errors(errors: List[ErrorDetails]) -> str:
    """One line per pydantic error, located by its path in the page document."""
    lines = []
    for error in errors:
        location = " -> ".join(str(part) for part in error["loc"]) or "<document>"
        lines.append(f"Error in field '{location}': {error['msg']}")
    return "\n".join(lines)


class PageDefinitionLoader:
    """Validates YAML content and creates PageDefinition instances."""

    @classmethod
    def validate_and_load(cls, yaml_content: str) -> PageDefinition:
        """
        Validate YAML content and create a PageDefinition instance.

        Args:
            yaml_content: The YAML content to validate

        Returns:
            PageDefinition: The validated page definition

        Raises:
            ValueError: If the YAML content is invalid
        """
        try:
            data = yaml.safe_load(yaml_content)
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML: {str(e)}")

        if not isinstance(data, dict):
            raise ValueError("Page definition must be a YAML mapping")

        try:
            return PageDefinition.model_validate(data)
        except ValidationError as e:
            raise ValueError(_format_validation_errors(e.errors()))


class Page:
    """A loaded page definition together with the collaborators it renders with."""

    def __init__(
        self,
        definition: PageDefinition,
        logger: BaseLogger,
        evaluator: PageEvaluator,
        registry: SpecificationRegistry,
        http: HttpClient,
        cms: CmsClient
    ):
        self.definition = definition
        self.logger = logger
        self.evaluator = evaluator
        self.registry = registry
        self.http = http
        self.cms = cms

    @classmethod
    def create(cls, definition: PageDefinition, logger: BaseLogger) -> 'Page':
        """
        Factory method to create a Page with default collaborators.

        Raises:
            SwaggerParserError: If a configured specification cannot be loaded
            UnsupportedFormatError: If a configured specification is not Swagger 2 / OpenAPI 3
        """
        config = definition.config
        http = AiohttpClient(config.http, logger)
        cms = create_cms_client(config.cms, http, logger)

        registry = SpecificationRegistry(logger)
        for spec_config in config.specifications:
            if spec_config.document is not None:
                registry.register(spec_config.name, spec_config.document)
            else:
                registry.load(spec_config.name, spec_config.source)

        fetcher = SourceFetcher(
            cms, http, registry, logger, fallback_cms=create_fallback_cms_client(config.cms)
        )
        evaluator = PageEvaluator(fetcher, TemplateRenderer(), logger)
        return cls(definition, logger, evaluator, registry, http, cms)

    @classmethod
    def from_yaml(cls, yaml_content: str, logger: BaseLogger) -> 'Page':
        return cls.create(PageDefinitionLoader.validate_and_load(yaml_content), logger)

    def root_scope(self) -> DataScopeStack:
        return DataScopeStack(
            ScopeFrame(name=name, value=value) for name, value in self.definition.data.items()
        )

    async def render(self) -> List[str]:
        """Evaluate the page and release its HTTP resources."""
        try:
            return await self.evaluator.evaluate(self.definition.root, self.root_scope())
        finally:
            await self.cms.close()
            await self.http.close()

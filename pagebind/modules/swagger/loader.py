"""Loading and registration of specification documents."""

import os
import json
from typing import Dict, List, Any, Optional
from urllib.parse import urlparse

import requests
import yaml

from ..logging import BaseLogger
from .parser import SpecificationParser, SwaggerParserError
from .schema import ParsedSpecification


class SpecificationLoader:
    """Loads raw Swagger/OpenAPI documents from files or URLs."""

    def __init__(self, timeout: int = 30):
        self.timeout = timeout

    def load(self, source: str) -> Dict[str, Any]:
        """
        Load a specification document.

        Args:
            source: Path to a local file or URL to a remote specification

        Returns:
            Dict[str, Any]: The loaded document

        Raises:
            SwaggerParserError: If the document cannot be read or decoded
        """
        try:
            content, is_json = self._read(source)
        except (OSError, requests.RequestException) as e:
            raise SwaggerParserError(f"Failed to load Swagger spec from {source}: {str(e)}")

        if is_json:
            try:
                return json.loads(content)
            except json.JSONDecodeError as e:
                raise SwaggerParserError(f"Invalid JSON in Swagger spec {source}: {str(e)}")

        # Try to parse as JSON, fall back to YAML
        try:
            return json.loads(content)
        except json.JSONDecodeError:
            try:
                return yaml.safe_load(content)
            except yaml.YAMLError as e:
                raise SwaggerParserError(f"Invalid Swagger spec format in {source}: {str(e)}")

    def _read(self, source: str):
        parsed_url = urlparse(source)
        if parsed_url.scheme in ('http', 'https'):
            response = requests.get(source, timeout=self.timeout)
            response.raise_for_status()
            is_json = response.headers.get('Content-Type', '').startswith('application/json')
            return response.text, is_json

        path = os.path.expanduser(source)
        if not os.path.exists(path):
            raise FileNotFoundError(f"Swagger spec file not found: {source}")
        with open(path, 'r', encoding='utf-8') as f:
            return f.read(), False


class SpecificationRegistry:
    """Named, parsed specifications that API sources refer to.

    Registration is where an unsupported document is rejected; once
    registered, a specification is never mutated, only replaced.
    """

    def __init__(
        self,
        logger: BaseLogger,
        parser: Optional[SpecificationParser] = None,
        loader: Optional[SpecificationLoader] = None
    ):
        self.logger = logger
        self.parser = parser or SpecificationParser(logger)
        self.loader = loader or SpecificationLoader()
        self._specifications: Dict[str, ParsedSpecification] = {}

    def register(self, name: str, document: Dict[str, Any]) -> ParsedSpecification:
        """Parse a document and store it under name, replacing any previous one.

        Raises:
            UnsupportedFormatError: If the document is not Swagger 2 / OpenAPI 3
        """
        specification = self.parser.parse(document)
        self._specifications[name] = specification
        self.logger.log_info(
            f"Registered specification '{name}' ({specification.title} {specification.version}, "
            f"{len(specification.endpoints)} endpoints)"
        )
        return specification

    def load(self, name: str, source: str) -> ParsedSpecification:
        """Load a document from a file or URL and register it."""
        return self.register(name, self.loader.load(source))

    def get(self, name: str) -> Optional[ParsedSpecification]:
        return self._specifications.get(name)

    def names(self) -> List[str]:
        return list(self._specifications)

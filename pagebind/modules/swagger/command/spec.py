import json
import sys
from typing import Optional

import click

from ...logging import BaseLogger
from ..examples import synthesize_request, synthesize_response
from ..loader import SpecificationLoader
from ..parser import SpecificationParser, SwaggerParserError
from ..schema import ParsedSpecification


class SpecCommand:
    """Command class for inspecting Swagger/OpenAPI specifications."""

    def __init__(self, logger: BaseLogger, loader: Optional[SpecificationLoader] = None):
        self.logger = logger
        self.loader = loader or SpecificationLoader()
        self.parser = SpecificationParser(logger)

    def _parse(self, source: str) -> ParsedSpecification:
        return self.parser.parse(self.loader.load(source))

    def show(self, source: str, method: Optional[str] = None) -> None:
        """Print the endpoints of a specification, one per line."""
        try:
            specification = self._parse(source)
        except SwaggerParserError as e:
            self.logger.log_error(str(e))
            sys.exit(1)

        click.echo(f"{specification.title} {specification.version}")
        if specification.base_url:
            click.echo(f"Base URL: {specification.base_url}")
        for endpoint in specification.endpoints_by_method(method):
            line = endpoint.id
            if endpoint.summary:
                line = f"{line} - {endpoint.summary}"
            click.echo(line)

    def example(self, source: str, endpoint_id: str, request: bool = False) -> None:
        """Print a synthesized response (or request) body for an endpoint."""
        try:
            specification = self._parse(source)
        except SwaggerParserError as e:
            self.logger.log_error(str(e))
            sys.exit(1)

        endpoint = specification.find_endpoint(endpoint_id)
        if endpoint is None:
            self.logger.log_error(f"Endpoint not found: {endpoint_id}")
            sys.exit(1)

        sample = synthesize_request(endpoint) if request else synthesize_response(endpoint)
        click.echo(json.dumps(sample, indent=2))

import asyncio
import sys
from typing import Optional, TextIO

import click

from ...logging import BaseLogger
from ...swagger.parser import SwaggerParserError
from ..definition import Page


class RenderCommand:
    """Command class for rendering a page definition."""

    def __init__(self, logger: BaseLogger):
        self.logger = logger

    def _read_page_content(self, page_file: Optional[TextIO]) -> str:
        """Read page content from file or stdin."""
        if page_file is None:
            if sys.stdin.isatty():
                raise ValueError("Please provide a page file or pipe YAML content")
            return sys.stdin.read()
        return page_file.read()

    def run(self, page_file: Optional[TextIO]) -> None:
        try:
            page = Page.from_yaml(self._read_page_content(page_file), self.logger)
        except (ValueError, SwaggerParserError) as e:
            self.logger.log_error(str(e))
            sys.exit(1)

        for output in asyncio.run(page.render()):
            click.echo(output)

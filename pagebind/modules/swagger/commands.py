from typing import Optional

import click

from .command.spec import SpecCommand
from .schema import HttpMethod


def create_spec_commands() -> click.Command:
    """Create the specification inspection commands."""

    @click.group(name='spec')
    def spec():
        """Inspect Swagger/OpenAPI specifications."""
        pass

    @spec.command(name='show')
    @click.argument('source')
    @click.option('--method', type=click.Choice([m.value for m in HttpMethod], case_sensitive=False),
                  help='Only list endpoints with this HTTP method')
    @click.pass_context
    def show(ctx, source: str, method: Optional[str]):
        """List the endpoints of a specification file or URL."""
        SpecCommand(logger=ctx.obj.logger).show(source, method)

    @spec.command(name='example')
    @click.argument('source')
    @click.argument('endpoint_id')
    @click.option('--request', is_flag=True, help='Print a sample request body instead of a response')
    @click.pass_context
    def example(ctx, source: str, endpoint_id: str, request: bool):
        """Print synthesized data for ENDPOINT_ID (e.g. "GET /products")."""
        SpecCommand(logger=ctx.obj.logger).example(source, endpoint_id, request)

    return spec

from typing import Optional, TextIO

import click

from .command.render import RenderCommand


def create_render_command() -> click.Command:
    """Create the render command."""

    @click.command(name='render')
    @click.argument('page_file', type=click.File('r'), required=False)
    @click.pass_context
    def render(ctx, page_file: Optional[TextIO]):
        """Render a YAML page definition from a file or stdin.

        Each output of the page is printed on its own line.
        """
        RenderCommand(logger=ctx.obj.logger).run(page_file)

    return render

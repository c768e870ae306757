from typing import Optional

import click

from pagebind.modules.logging import BaseLogger, create_logger
from pagebind.modules.page.commands import create_render_command
from pagebind.modules.swagger.commands import create_spec_commands

LOG_FORMATS = ['colorful', 'plain', 'json']
LOG_LEVELS = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']


class PageBindContext:
    """Shared state for subcommands: how diagnostics are written to stderr.

    stdout carries only command results (endpoint listings, synthesized
    JSON, rendered page outputs), so every subcommand logs through this
    logger instead of echoing.
    """

    def __init__(self):
        self.output = LOG_FORMATS[0]
        self.log_level = 'INFO'
        self.logger: Optional[BaseLogger] = None

    def configure(self, output: str, log_level: str) -> None:
        self.output = output
        self.log_level = log_level
        self.logger = create_logger(output, log_level)


pass_context = click.make_pass_decorator(PageBindContext, ensure=True)


@click.group(context_settings={'help_option_names': ['-h', '--help']})
@click.option('--output', '-o',
              type=click.Choice(LOG_FORMATS),
              default=LOG_FORMATS[0],
              help='Diagnostics format on stderr (colorful for terminals, plain for CI, json for log shippers)',
              envvar='PAGEBIND_OUTPUT')
@click.option('--log-level', '-l',
              type=click.Choice(LOG_LEVELS),
              default='INFO',
              help='Lowest diagnostics level written to stderr',
              envvar='PAGEBIND_LOG_LEVEL')
@pass_context
def cli(ctx: PageBindContext, output: str, log_level: str):
    """Bind page templates to CMS collections and Swagger/OpenAPI endpoints.

    \b
    spec show     list the endpoints of a specification
    spec example  print data synthesized from an endpoint's schema
    render        evaluate a YAML page definition and print its outputs
    """
    ctx.configure(output, log_level)


cli.add_command(create_spec_commands())
cli.add_command(create_render_command())


def main():
    cli(prog_name='pagebind')


if __name__ == '__main__':
    main()

"""
Command Line Interface for startorder.
"""
import click
import logging
import os
from ..PARSERS.compose_parser import ComposeParser, ComposeFileError
from ..RESOLVERS.dependency_resolver import DependencyResolver
from ..RESOLVERS.errors import ResolutionError
from ..MODELS.resolver_settings import ResolverSettings, TieBreak

LOG_LEVELS = ['DEBUG', 'INFO', 'WARNING', 'ERROR']

@click.group()
@click.option('--file', '-f', default='docker-compose.yml', help='Compose file path')
@click.option('--log-level', type=click.Choice(LOG_LEVELS, case_sensitive=False), default='WARNING',
              help='Logging verbosity')
@click.option('--tie-break', type=click.Choice([t.value for t in TieBreak]), default=TieBreak.INSERTION.value,
              envvar='STARTORDER_TIE_BREAK', help='Order of services that can start at the same time')
@click.option('--prefer', multiple=True, envvar='STARTORDER_PREFER',
              help='Service to start first among services of equal weight (repeatable)')
@click.pass_context
def cli(ctx, file, log_level, tie_break, prefer):
    """
    startorder - resolve the start order of Compose services.

    Services start only after everything they depend on or link to.
    """
    logging.basicConfig(level=log_level.upper(), format='%(levelname)s %(name)s: %(message)s')
    ctx.ensure_object(dict)
    ctx.obj['file'] = file
    settings = ResolverSettings(tie_break=tie_break, prefer=list(prefer))
    ctx.obj['resolver'] = DependencyResolver(settings)

def _load(ctx):
    """
    Parses the compose file of the group options, exiting on failure.
    """
    file = ctx.obj['file']
    if not os.path.exists(file):
        click.echo(f"Error: {file} not found.", err=True)
        ctx.exit(1)
    try:
        return ComposeParser().parse(file)
    except ComposeFileError as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)

def _resolve(ctx, operation):
    """
    Runs a resolver operation on the compose file, exiting on failure.
    """
    services = _load(ctx)
    try:
        return operation(services)
    except ResolutionError as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)

@cli.command()
@click.option('--reverse', '-r', is_flag=True, help='Print the shutdown order instead')
@click.pass_context
def order(ctx, reverse):
    """Print the start order, one service per line."""
    resolver = ctx.obj['resolver']
    operation = resolver.resolve_shutdown_order if reverse else resolver.resolve_order
    for name in _resolve(ctx, operation):
        click.echo(name)

@cli.command()
@click.pass_context
def layers(ctx):
    """Print services that can start together, layer by layer."""
    for weight, layer in enumerate(_resolve(ctx, ctx.obj['resolver'].resolve_layers)):
        click.echo(f"{weight}: {', '.join(layer)}")

@cli.command()
@click.pass_context
def weights(ctx):
    """Print the weight of every service."""
    table = _resolve(ctx, ctx.obj['resolver'].resolve_weights)
    click.echo(f"{'SERVICE':20} {'WEIGHT':6}")
    click.echo("-" * 27)
    for name, weight in table.items():
        click.echo(f"{name:20} {weight:<6}")

@cli.command()
@click.pass_context
def graph(ctx):
    """Print the services each service waits for."""
    for name, dependencies in _resolve(ctx, ctx.obj['resolver'].resolve_graph).items():
        click.echo(f"{name}: {', '.join(sorted(dependencies)) or '-'}")

def main():
    """
    Main entry point for the CLI.
    """
    cli(obj={})

if __name__ == '__main__':
    main()

"""
Command Line Interface for CTPL.
"""
import json
import os
import sys

import click
import yaml
from dotenv import load_dotenv

from ..CONVERTERS.to_summary import TemplateSummaryConverter
from ..MANAGERS.template_manager import TemplateManager
from ..PARSERS.argument_parser import ArgumentParser
from ..RENDERERS.circuit_renderer import CircuitRenderer
from ..UTILS.config import Settings
from ..UTILS.errors import TemplateError
from ..UTILS.log import configure_logging


def _fail(message: str):
    click.echo(f"Error: {message}")
    sys.exit(1)


@click.group()
@click.option('--path', '-p', 'paths', multiple=True, type=click.Path(file_okay=False),
              help='Template directory, searched before the configured ones. Repeatable.')
@click.option('--verbose', '-v', is_flag=True, help='Log debug output to stderr')
@click.pass_context
def cli(ctx, paths, verbose):
    """
    CTPL - Circuit template tool.

    Lists, validates and renders circuit templates into circuit-creation payloads.
    """
    ctx.ensure_object(dict)
    settings = Settings.from_environ()
    configure_logging("DEBUG" if verbose else settings.log_level)
    search_path = list(paths) + [p for p in settings.template_paths if p not in paths]
    ctx.obj['settings'] = settings
    ctx.obj['manager'] = TemplateManager(search_path)


@cli.command(name='list')
@click.pass_context
def list_templates(ctx):
    """List templates found on the search path."""
    names = ctx.obj['manager'].list_templates()
    if not names:
        click.echo("No templates found.")
        return
    for name in names:
        click.echo(name)


@cli.command()
@click.argument('template')
@click.pass_context
def show(ctx, template):
    """Describe a template's arguments and rules."""
    try:
        parsed = ctx.obj['manager'].load(template)
    except TemplateError as e:
        _fail(str(e))
    click.echo(TemplateSummaryConverter(parsed).convert())


@cli.command()
@click.argument('template')
@click.pass_context
def validate(ctx, template):
    """Check that a template is well formed."""
    try:
        ctx.obj['manager'].load(template)
    except TemplateError as e:
        _fail(str(e))
    click.echo(f"{template} is valid.")


@cli.command()
@click.argument('template')
@click.option('--arg', '-a', 'pairs', multiple=True, help='Argument value as KEY=VALUE. Repeatable.')
@click.option('--args-file', type=click.Path(exists=True, dir_okay=False),
              help='File of KEY=VALUE argument lines; --arg values override it.')
@click.option('--circuit-id', help='Identifier of the circuit being created')
@click.option('--node', 'nodes', multiple=True, help='Member endpoint as NODE_ID=ENDPOINT. Repeatable.')
@click.option('--format', '-o', 'output_format', type=click.Choice(['json', 'yaml']), default='json')
@click.pass_context
def render(ctx, template, pairs, args_file, circuit_id, nodes, output_format):
    """Render a template into a circuit-creation payload."""
    try:
        arguments = ArgumentParser.parse_file(args_file) if args_file else {}
        arguments.update(ArgumentParser.parse_pairs(pairs))
        endpoints = ArgumentParser.parse_pairs(nodes) if nodes else None
    except ValueError as e:
        _fail(str(e))

    try:
        parsed = ctx.obj['manager'].load(template)
        circuit = CircuitRenderer(parsed).render(arguments, circuit_id=circuit_id, node_endpoints=endpoints)
    except TemplateError as e:
        _fail(str(e))

    payload = {
        'circuit': circuit.to_dict(decode_metadata=True),
        'circuit_hash': circuit.circuit_hash(),
    }
    if output_format == 'yaml':
        click.echo(yaml.safe_dump(payload, sort_keys=False), nl=False)
    else:
        click.echo(json.dumps(payload, indent=2))


def main():
    """
    Main entry point for the CLI.
    """
    if os.path.exists('.env'):
        load_dotenv('.env')
    cli(obj={})


if __name__ == '__main__':
    main()

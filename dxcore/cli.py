#!/usr/bin/env python3
"""
dxcore command line.

A thin layer over the model types: read a serialized value, validate
it, convert it between JSON and YAML, or show how it renders in logs.
All checking is done by the models themselves.
"""

import logging
import sys
from functools import wraps
from pathlib import Path
from typing import Optional

import click

from .config import configure_logging, load_config
from .domain import MODEL_TYPES, Model, RefKind, get_model_type
from .errors import ModelError
from .exit_codes import (
    CONFIG_ERROR,
    DATA_ERROR,
    INTERRUPTED,
    USAGE_ERROR,
    CommandError,
    get_exit_code_for_exception,
)
from .render import render_error, render_model, render_type_list

logger = logging.getLogger(__name__)

FORMATS = ('json', 'yaml')


def standard_command(func):
    """
    Consistent error handling for commands.

    Model errors exit with DATA_ERROR and CommandErrors with their own
    code. Messages go to stderr so stdout only ever carries data.
    """
    @wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except KeyboardInterrupt:
            render_error("Interrupted by user")
            sys.exit(INTERRUPTED)
        except click.ClickException:
            raise
        except CommandError as e:
            render_error(str(e))
            sys.exit(e.exit_code)
        except ModelError as e:
            logger.debug(f"{func.__name__} rejected input: {e}")
            render_error(str(e))
            sys.exit(get_exit_code_for_exception(e))
    return wrapper


def detect_format(filename: Optional[str], explicit: Optional[str]) -> str:
    """Pick an input format from --format or the file extension (default json)."""
    if explicit:
        return explicit
    if filename and Path(filename).suffix.lower() in ('.yaml', '.yml'):
        return 'yaml'
    return 'json'


def resolve_type(type_name: str):
    try:
        return get_model_type(type_name)
    except KeyError:
        raise CommandError(f"unknown type {type_name!r} (see 'dxcore types')", USAGE_ERROR)


def load_model(type_name: str, source, input_format: Optional[str]) -> Model:
    """Read and decode one model of the named type."""
    cls = resolve_type(type_name)
    fmt = detect_format(getattr(source, 'name', None), input_format)
    try:
        text = source.read()
    except UnicodeDecodeError as e:
        raise CommandError(f"cannot decode {getattr(source, 'name', 'input')}: {e}", DATA_ERROR) from e
    if fmt == 'yaml':
        return cls.from_yaml(text)
    return cls.from_json(text)


@click.group()
@click.version_option()
@click.option('--log-level', default=None, help='Override logging.level from config')
@click.pass_context
def cli(ctx, log_level):
    """dxcore - Validated Git metadata value types.

    Validate, convert and inspect serialized hashes, refs, ranges,
    signatures, file changes, commits, tags and worktree status.
    """
    config = load_config()
    try:
        configure_logging(level=log_level, config=config)
    except ValueError as e:
        render_error(f"invalid log level: {e}")
        sys.exit(CONFIG_ERROR)
    ctx.obj = config


@cli.command(name='types')
def types_cmd():
    """List the model types this tool understands."""
    render_type_list(sorted(MODEL_TYPES))


@cli.command(name='validate')
@click.argument('type_name', metavar='TYPE')
@click.argument('source', type=click.File('r', encoding='utf-8'), default='-')
@click.option('--format', 'input_format', type=click.Choice(FORMATS), default=None,
              help='Input format (default: by file extension, else json)')
@standard_command
def validate_cmd(type_name, source, input_format):
    """Check that FILE holds a valid TYPE.

    \b
    Examples:
        dxcore validate Commit commit.json
        dxcore validate WorktreeStatus status.yaml
        echo '"abc"' | dxcore validate Hash
    """
    model = load_model(type_name, source, input_format)
    click.echo(f"ok: {model.type_name()}")


@cli.command(name='convert')
@click.argument('type_name', metavar='TYPE')
@click.argument('source', type=click.File('r', encoding='utf-8'), default='-')
@click.option('--format', 'input_format', type=click.Choice(FORMATS), default=None,
              help='Input format (default: by file extension, else json)')
@click.option('--to', 'output_format', type=click.Choice(FORMATS), default=None,
              help='Output format (default: output.format from config)')
@click.pass_obj
@standard_command
def convert_cmd(config, type_name, source, input_format, output_format):
    """Re-serialize a TYPE read from FILE as JSON or YAML."""
    model = load_model(type_name, source, input_format)
    output = config.get('output', {})
    output_format = output_format or output.get('format', 'json')
    if output_format == 'yaml':
        click.echo(model.to_yaml(), nl=False)
    else:
        click.echo(model.to_json(indent=output.get('indent', 2)))


@cli.command(name='show')
@click.argument('type_name', metavar='TYPE')
@click.argument('source', type=click.File('r', encoding='utf-8'), default='-')
@click.option('--format', 'input_format', type=click.Choice(FORMATS), default=None,
              help='Input format (default: by file extension, else json)')
@click.option('--unsafe/--safe', default=None,
              help='Show full values instead of redacted ones')
@click.pass_obj
@standard_command
def show_cmd(config, type_name, source, input_format, unsafe):
    """Show how a TYPE read from FILE renders in logs."""
    model = load_model(type_name, source, input_format)
    if unsafe is None:
        unsafe = bool(config.get('logging', {}).get('unsafe', False))
    render_model(model, unsafe=unsafe)


@cli.command(name='infer-kind')
@click.argument('name')
def infer_kind_cmd(name):
    """Print the RefKind a reference NAME implies.

    Names such as "v1.0.0" or "main" do not imply a kind and print
    "unknown".
    """
    click.echo(RefKind.infer(name.strip()).value)


def main():
    cli()


if __name__ == "__main__":
    main()

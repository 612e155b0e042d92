#!/usr/bin/env python3

import click
from . import genkeys
from . import getpub
from . import keygens
from .defines import DEFAULT_KEY_FILE

@click.group()
@click.option('--key', '-k', default=DEFAULT_KEY_FILE, envvar='IMGTOOL_KEY',
              show_default=True, help='Keyfile to use')
@click.pass_context
def cli(ctx, key):
    """imgtool - Manage bootloader image signing keys"""
    ctx.ensure_object(dict)
    ctx.obj['key_file'] = key

@click.command()
def keytypes():
    """List the supported key types"""
    for kg in keygens.key_generators():
        click.echo(f"{kg.name:<12} {kg.description}")

# Register all the commands
cli.add_command(genkeys.main, name="keygen")
cli.add_command(getpub.main, name="getpub")
cli.add_command(keytypes, name="keytypes")

if __name__ == '__main__':
    cli()

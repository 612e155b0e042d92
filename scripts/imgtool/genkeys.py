#!/usr/bin/env python3

from imgtool.defines import *
from imgtool.errors import ImgtoolError
from imgtool.envelope import write_key_file
from imgtool import keygens
import click


def generate_keyfile(key_file, key_type):
    """
    Generate a private key of the given type and store it in key_file.
    Returns the KeyGenerator that was used.
    """
    kg = keygens.lookup(key_type)
    der = keygens.generate(kg)
    write_key_file(key_file, kg.pem_type, der)
    return kg


@click.command()
@click.option('--key-type', '-t',
              type=click.Choice([kg.name for kg in keygens.key_generators()]),
              envvar='IMGTOOL_KEY_TYPE',
              help='Type of key to generate')
@click.pass_context
def main(ctx, key_type):
    """
    Generate a private key and write it to the key file (--key).
    An existing key file is never overwritten.
    """
    if key_type is None:
        raise click.UsageError("Must specify key type with --key-type", ctx)

    key_file = ctx.ensure_object(dict).get('key_file', DEFAULT_KEY_FILE)

    try:
        click.echo(f"Generating {key_type} key: {key_file}", err=True)
        generate_keyfile(key_file, key_type)
        click.echo(f"✓ Private key saved to: {key_file}", err=True)
    except ImgtoolError as e:
        click.echo(f"❌ Error: {e}", err=True)
        raise click.Abort()

if __name__ == '__main__':
    main()

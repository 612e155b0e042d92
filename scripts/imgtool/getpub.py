#!/usr/bin/env python3

from imgtool.defines import *
from imgtool.errors import ImgtoolError
from imgtool.envelope import read_key_file
from imgtool.pubkey import extract_public
from imgtool.asn1 import encode_public_key
from imgtool.cdata import render_public_key
import click


def pubkey_source(key_file):
    """Read a private key file and return the public key as C source"""
    label, payload = read_key_file(key_file)
    public_key = extract_public(label, payload)
    der = encode_public_key(public_key)
    return render_public_key(public_key, der)


@click.command()
@click.option('--output', '-o', default=None,
              help='Write the C source to this file instead of stdout')
@click.pass_context
def main(ctx, output):
    """
    Extract the public key from the key file (--key) as C code.
    """
    key_file = ctx.ensure_object(dict).get('key_file', DEFAULT_KEY_FILE)

    try:
        source = pubkey_source(key_file)
    except ImgtoolError as e:
        click.echo(f"❌ Error: {e}", err=True)
        raise click.Abort()

    if output is None:
        click.echo(source, nl=False)
        return

    try:
        with open(output, 'w') as f:
            f.write(source)
    except OSError as e:
        click.echo(f"❌ Error: Cannot write {output}: {e}", err=True)
        raise click.Abort()

    click.echo(f"✓ Public key source generated: {output}", err=True)

if __name__ == '__main__':
    main()

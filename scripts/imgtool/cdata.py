#!/usr/bin/env python3

from imgtool.pubkey import EcPublicKey

PUB_KEY_TEMPLATE = """\
/* Autogenerated, do not edit */

const unsigned char {prefix}_pub_key[] = {{
\t{data} }};
const unsigned int {prefix}_pub_key_len = {length};
"""


def format_cdata(data, indent):
    """
    Format bytes as C initializer entries, eight per line. Lines after the
    first start with `indent` tabs.
    """
    out = []
    ind_text = '\t' * indent

    for i, b in enumerate(data):
        if i % 8 == 0:
            if i > 0:
                out.append('\n' + ind_text)
        else:
            out.append(' ')
        out.append(f"0x{b:02x},")

    return ''.join(out)


def render_public_key(key, der):
    prefix = "ec" if isinstance(key, EcPublicKey) else "rsa"
    return PUB_KEY_TEMPLATE.format(
        prefix=prefix,
        data=format_cdata(der, 1),
        length=len(der)
    )

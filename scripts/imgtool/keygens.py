#!/usr/bin/env python3

from cryptography.hazmat.primitives.asymmetric import ec
from cryptography.hazmat.primitives.asymmetric import rsa
from cryptography.hazmat.primitives import serialization
from dataclasses import dataclass
from typing import Callable
from enum import Enum
from imgtool.defines import *
from imgtool.errors import ConfigError, EntropyError, KeyGenError
import os

CURVES = {
    "P-224": ec.SECP224R1,
    "P-256": ec.SECP256R1,
}


class KeyType(Enum):
    ECDSA_P224 = "ecdsa-p224"
    ECDSA_P256 = "ecdsa-p256"
    RSA_2048 = "rsa-2048"


@dataclass(frozen=True)
class KeyGenerator:
    name: str
    description: str
    pem_type: str
    generate: Callable[..., bytes]


_key_gens = {}


def register(name, description, pem_type, generate):
    if name in _key_gens:
        raise ConfigError(f"Key type {name!r} registered twice")
    kg = KeyGenerator(name, description, pem_type, generate)
    _key_gens[name] = kg
    return kg


def lookup(name):
    try:
        return _key_gens[name]
    except KeyError:
        raise ConfigError(f"Unsupported key type: {name!r}") from None


def key_generators():
    return list(_key_gens.values())


def _private_der(private_key):
    # SEC1 ECPrivateKey for EC keys, PKCS#1 RSAPrivateKey for RSA keys
    return private_key.private_bytes(
        encoding=serialization.Encoding.DER,
        format=serialization.PrivateFormat.TraditionalOpenSSL,
        encryption_algorithm=serialization.NoEncryption()
    )


def draw_scalar(curve, randfunc=os.urandom):
    """
    Draw a private scalar uniformly from [1, n-1] by rejection sampling.

    Every draw takes a full field width of fresh bytes; a rejected or short
    draw is thrown away, never topped up.
    """
    width = CURVE_FIELD_WIDTHS[curve]
    order = CURVE_ORDERS[curve]

    for _ in range(EC_SCALAR_RETRIES):
        try:
            buf = randfunc(width)
        except (OSError, NotImplementedError) as e:
            raise EntropyError(f"Random source unavailable: {e}") from e
        if buf is None or len(buf) != width:
            raise EntropyError(
                f"Random source returned {0 if buf is None else len(buf)} "
                f"bytes, expected {width}")
        scalar = int.from_bytes(buf, 'big')
        if 0 < scalar < order:
            return scalar

    raise KeyGenError(
        f"No valid {curve} scalar after {EC_SCALAR_RETRIES} draws")


def gen_ecdsa(curve, randfunc=os.urandom):
    scalar = draw_scalar(curve, randfunc)
    private_key = ec.derive_private_key(scalar, CURVES[curve]())
    return _private_der(private_key)


def gen_ecdsa_p224(randfunc=os.urandom):
    return gen_ecdsa("P-224", randfunc)


def gen_ecdsa_p256(randfunc=os.urandom):
    return gen_ecdsa("P-256", randfunc)


def gen_rsa2048(randfunc=None):
    # Prime search runs on the OpenSSL CSPRNG; randfunc is not consulted
    try:
        private_key = rsa.generate_private_key(
            public_exponent=RSA_PUBLIC_EXPONENT,
            key_size=RSA_KEY_SIZE
        )
    except (ValueError, MemoryError) as e:
        raise KeyGenError(f"RSA key generation failed: {e}") from e
    return _private_der(private_key)


def generate(key_type, randfunc=os.urandom):
    """
    Generate a new private key and return its DER encoding.

    key_type may be a registered name, a KeyType or a KeyGenerator.
    """
    if isinstance(key_type, KeyType):
        key_type = key_type.value
    if isinstance(key_type, str):
        key_type = lookup(key_type)
    return key_type.generate(randfunc)


register(KeyType.ECDSA_P256.value,
         "ECDSA with SHA256 and the NIST P-256 curve",
         EC_PEM_TYPE, gen_ecdsa_p256)
register(KeyType.ECDSA_P224.value,
         "ECDSA with SHA256 and the NIST P-224 curve",
         EC_PEM_TYPE, gen_ecdsa_p224)
register(KeyType.RSA_2048.value,
         "RSA 2048",
         RSA_PEM_TYPE, gen_rsa2048)

#!/usr/bin/env python3

from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives.asymmetric import ec
from cryptography.hazmat.primitives.asymmetric import rsa
from cryptography.hazmat.primitives import serialization
from dataclasses import dataclass
from pyasn1.codec.der import decoder
from pyasn1.error import PyAsn1Error
from pyasn1_modules import rfc5915
from imgtool.defines import *
from imgtool.errors import ParseError, UnsupportedCurve, UnsupportedKeyType
from imgtool.keygens import CURVES

# namedCurve OID -> NIST name
_CURVE_NAMES = {oid: name for name, oid in CURVE_OIDS.items()}


@dataclass(frozen=True)
class EcPublicKey:
    """
    Uncompressed EC point. x and y are big-endian and, when produced by
    extract_public, exactly the curve's field width long.
    """
    curve: str
    x: bytes
    y: bytes


@dataclass(frozen=True)
class RsaPublicKey:
    modulus: int
    exponent: int


def derive_point(curve, scalar):
    """Compute scalar x G on the named curve, returning (x, y) bytes."""
    if curve not in CURVES:
        raise UnsupportedCurve(curve)
    width = CURVE_FIELD_WIDTHS[curve]
    try:
        key = ec.derive_private_key(scalar, CURVES[curve]())
    except ValueError as e:
        raise ParseError(f"Invalid {curve} private scalar: {e}") from e
    numbers = key.public_key().public_numbers()
    return numbers.x.to_bytes(width, 'big'), numbers.y.to_bytes(width, 'big')


def decode_ec_private(payload):
    """
    Decode a SEC1 ECPrivateKey, returning (curve, scalar).

    The optional publicKey field is never looked at.
    """
    try:
        key, rest = decoder.decode(payload, asn1Spec=rfc5915.ECPrivateKey())
        if rest:
            raise ParseError("Malformed EC private key: trailing data")
        version = int(key['version'])
        private_key = key['privateKey'].asOctets()
        params = key['parameters']
        choice = params.getName() if params.isValue else None
        oid = str(params['namedCurve']) if choice == 'namedCurve' else None
    except PyAsn1Error as e:
        raise ParseError(f"Malformed EC private key: {e}") from e

    if version != 1:
        raise ParseError(f"Malformed EC private key: version {version}")
    if choice is None:
        raise ParseError("EC private key has no curve parameters")
    if oid is None:
        raise UnsupportedCurve(choice)

    curve = _CURVE_NAMES.get(oid)
    if curve is None:
        raise UnsupportedCurve(oid)

    return curve, int.from_bytes(private_key, 'big')


def extract_ec_public(payload):
    # Recompute the point rather than trusting the one stored in the key
    curve, scalar = decode_ec_private(payload)
    x, y = derive_point(curve, scalar)
    return EcPublicKey(curve, x, y)


def extract_rsa_public(payload):
    try:
        key = serialization.load_der_private_key(payload, password=None)
    except (ValueError, TypeError, UnsupportedAlgorithm) as e:
        raise ParseError(f"Malformed RSA private key: {e}") from e
    if not isinstance(key, rsa.RSAPrivateKey):
        raise ParseError(
            f"Malformed RSA private key: found {type(key).__name__}")
    numbers = key.private_numbers().public_numbers
    return RsaPublicKey(numbers.n, numbers.e)


def extract_public(label, payload):
    if label == EC_PEM_TYPE:
        return extract_ec_public(payload)
    elif label == RSA_PEM_TYPE:
        return extract_rsa_public(payload)
    else:
        raise UnsupportedKeyType(label)

#!/usr/bin/env python3
"""
DER encodings of the public keys embedded in the bootloader.

EC keys use the SubjectPublicKeyInfo layout with the curve as the algorithm
parameter; RSA keys use the bare PKCS#1 RSAPublicKey sequence.
"""

from pyasn1.codec.der import encoder
from pyasn1.type.namedtype import NamedType, NamedTypes
from pyasn1.type.univ import BitString, Integer, ObjectIdentifier, Sequence
from imgtool.defines import *
from imgtool.errors import ParseError, UnsupportedCurve
from imgtool.pubkey import EcPublicKey, RsaPublicKey


class AlgorithmIdentifier(Sequence):
    componentType = NamedTypes(
        NamedType('algorithm', ObjectIdentifier()),
        NamedType('curve', ObjectIdentifier())
    )


class EcPublicKeyInfo(Sequence):
    componentType = NamedTypes(
        NamedType('algorithm', AlgorithmIdentifier()),
        NamedType('subjectPublicKey', BitString())
    )


class RsaPublicKeyInfo(Sequence):
    componentType = NamedTypes(
        NamedType('modulus', Integer()),
        NamedType('publicExponent', Integer())
    )


def _pad(coord, width):
    if len(coord) > width:
        raise ParseError(
            f"Coordinate is {len(coord)} bytes, field width is {width}")
    return coord.rjust(width, b'\x00')


def ec_point_bytes(key):
    """0x04 || X || Y with both coordinates left-padded to the field width"""
    if key.curve not in CURVE_FIELD_WIDTHS:
        raise UnsupportedCurve(key.curve)
    width = CURVE_FIELD_WIDTHS[key.curve]
    return (bytes([EC_POINT_UNCOMPRESSED]) +
            _pad(key.x, width) + _pad(key.y, width))


def encode_ec_public(key):
    if key.curve not in CURVE_OIDS:
        raise UnsupportedCurve(key.curve)

    alg_id = AlgorithmIdentifier()
    alg_id['algorithm'] = ObjectIdentifier(EC_PUBLIC_KEY_OID)
    alg_id['curve'] = ObjectIdentifier(CURVE_OIDS[key.curve])

    pkey = EcPublicKeyInfo()
    pkey['algorithm'] = alg_id
    pkey['subjectPublicKey'] = BitString(hexValue=ec_point_bytes(key).hex())

    return encoder.encode(pkey)


def encode_rsa_public(key):
    # DER prepends 0x00 to a modulus with its top bit set
    pkey = RsaPublicKeyInfo()
    pkey['modulus'] = Integer(key.modulus)
    pkey['publicExponent'] = Integer(key.exponent)

    return encoder.encode(pkey)


def encode_public_key(key):
    if isinstance(key, EcPublicKey):
        return encode_ec_public(key)
    elif isinstance(key, RsaPublicKey):
        return encode_rsa_public(key)
    raise TypeError(f"Cannot encode {type(key).__name__}")

#!/usr/bin/env python3

from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives.asymmetric import ec
from cryptography.hazmat.primitives.asymmetric import rsa
from cryptography.hazmat.primitives import serialization
from pyasn1_modules import pem
from imgtool.defines import *
from imgtool.errors import FormatError, KeyFileError, ParseError, UnsupportedLabel
import io
import os

_KEY_CLASSES = {
    EC_PEM_TYPE: ec.EllipticCurvePrivateKey,
    RSA_PEM_TYPE: rsa.RSAPrivateKey,
}


def _markers(label):
    return f"-----BEGIN {label}-----", f"-----END {label}-----"


KEY_MARKERS = (_markers(EC_PEM_TYPE), _markers(RSA_PEM_TYPE))
PARAMS_MARKERS = _markers(EC_PARAMS_PEM_TYPE)


def encode(label, payload):
    """
    Wrap a DER private key (SEC1 or PKCS#1) in its PEM envelope.
    """
    if label not in _KEY_CLASSES:
        raise UnsupportedLabel(label)

    try:
        private_key = serialization.load_der_private_key(payload, password=None)
    except (ValueError, TypeError, UnsupportedAlgorithm) as e:
        raise ParseError(f"Malformed {label}: {e}") from e
    if not isinstance(private_key, _KEY_CLASSES[label]):
        raise ParseError(f"Malformed {label}: found {type(private_key).__name__}")

    private_pem = private_key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.TraditionalOpenSSL,
        encryption_algorithm=serialization.NoEncryption()
    )
    return private_pem.decode('ascii')


def _first_label(text):
    for line in text.splitlines():
        line = line.strip()
        if line.startswith("-----BEGIN ") and line.endswith("-----"):
            return line[len("-----BEGIN "):-len("-----")]
    return None


def _read_block(f, markers):
    try:
        idx, substrate = pem.readPemBlocksFromFile(f, *markers)
    except ValueError as e:
        raise FormatError(f"Invalid base64 in PEM data: {e}") from e
    if idx != -1 and not substrate:
        raise FormatError(f"Missing or empty PEM block {markers[idx][0]}")
    return idx, substrate


def decode(text):
    """
    Decode the first key envelope in text.

    openssl sometimes puts an EC PARAMETERS block ahead of the key (the
    parameters are repeated inside the key), in which case the following
    block is used.

    Returns (label, payload, remainder).
    """
    if isinstance(text, bytes):
        try:
            text = text.decode('utf-8')
        except UnicodeDecodeError as e:
            raise FormatError(f"PEM data is not valid UTF-8: {e}") from e

    f = io.StringIO(text)
    idx, payload = _read_block(f, (PARAMS_MARKERS,) + KEY_MARKERS)
    if idx == 0:
        idx, payload = _read_block(f, KEY_MARKERS)
    elif idx > 0:
        idx -= 1

    if idx == -1:
        label = _first_label(text)
        if label is None or label == EC_PARAMS_PEM_TYPE:
            raise FormatError("No PEM private key found")
        raise UnsupportedLabel(label)

    label = (EC_PEM_TYPE, RSA_PEM_TYPE)[idx]
    return label, payload, f.read()


def write_key_file(path, label, payload):
    """
    Write a private key envelope, refusing to overwrite an existing file.
    The file is only readable and writable by its owner.
    """
    data = encode(label, payload).encode('utf-8')

    try:
        fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_EXCL, 0o600)
    except OSError as e:
        raise KeyFileError(f"Cannot create key file {path}: {e}", e) from e

    try:
        with os.fdopen(fd, 'wb') as f:
            f.write(data)
    except OSError as e:
        # Don't leave a truncated key behind
        os.unlink(path)
        raise KeyFileError(f"Cannot write key file {path}: {e}", e) from e


def read_key_file(path):
    try:
        with open(path, 'rb') as f:
            data = f.read()
    except OSError as e:
        raise KeyFileError(f"Cannot read key file {path}: {e}", e) from e

    label, payload, _ = decode(data)
    return label, payload

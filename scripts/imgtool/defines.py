#!/usr/bin/env python3

EC_PEM_TYPE = "EC PRIVATE KEY"
RSA_PEM_TYPE = "RSA PRIVATE KEY"
EC_PARAMS_PEM_TYPE = "EC PARAMETERS"

# id-ecPublicKey
EC_PUBLIC_KEY_OID = "1.2.840.10045.2.1"

CURVE_OIDS = {
    "P-224": "1.3.132.0.33",
    "P-256": "1.2.840.10045.3.1.7",
}

# Coordinate width in bytes
CURVE_FIELD_WIDTHS = {
    "P-224": 28,
    "P-256": 32,
}

EC_POINT_UNCOMPRESSED = 0x04

RSA_KEY_SIZE = 2048
RSA_PUBLIC_EXPONENT = 65537

# Scalar draws attempted before giving up on EC key generation
EC_SCALAR_RETRIES = 64

DEFAULT_KEY_FILE = "root_ec.pem"

# Group order of the base point
CURVE_ORDERS = {
    "P-224": 0xFFFFFFFFFFFFFFFFFFFFFFFFFFFF16A2E0B8F03E13DD29455C5C2A3D,
    "P-256": 0xFFFFFFFF00000000FFFFFFFFFFFFFFFFBCE6FAADA7179E84F3B9CAC2FC632551,
}

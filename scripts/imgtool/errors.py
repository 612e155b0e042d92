#!/usr/bin/env python3


class ImgtoolError(Exception):
    pass


class ConfigError(ImgtoolError):
    pass


class EntropyError(ImgtoolError):
    pass


class KeyGenError(ImgtoolError):
    pass


class KeyFileError(ImgtoolError):
    """
    Key file could not be created, read or written. The OSError that caused
    it is kept in `cause`.
    """
    def __init__(self, message, cause=None):
        super().__init__(message)
        self.cause = cause


class FormatError(ImgtoolError):
    pass


class ParseError(ImgtoolError):
    pass


class UnsupportedCurve(ImgtoolError):
    def __init__(self, curve):
        super().__init__(f"Key uses unsupported curve: {curve!r}")
        self.curve = curve


class UnsupportedKeyType(ImgtoolError):
    def __init__(self, key_type):
        super().__init__(f"Unsupported key type: {key_type!r}")
        self.key_type = key_type


class UnsupportedLabel(ImgtoolError):
    def __init__(self, label):
        super().__init__(
            f"Only supports ECDSA and RSA keys, got PEM type {label!r}")
        self.label = label

"""Tests for the imgtool command line."""

import pytest
from click.testing import CliRunner
from imgtool.cli import cli
from imgtool.defines import RSA_PEM_TYPE
from imgtool.envelope import read_key_file, write_key_file


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def workdir(tmp_path, monkeypatch):
    """Run each command from an empty temporary directory."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv('IMGTOOL_KEY', raising=False)
    monkeypatch.delenv('IMGTOOL_KEY_TYPE', raising=False)
    return tmp_path


def test_keytypes(runner):
    result = runner.invoke(cli, ['keytypes'])

    assert result.exit_code == 0
    assert "ecdsa-p256" in result.output
    assert "NIST P-224" in result.output
    assert "rsa-2048" in result.output


def test_keygen_and_getpub(runner, workdir):
    result = runner.invoke(cli, ['-k', 'root.pem', 'keygen', '-t', 'ecdsa-p256'])
    assert result.exit_code == 0
    assert (workdir / 'root.pem').exists()
    assert read_key_file('root.pem')[0] == "EC PRIVATE KEY"

    result = runner.invoke(cli, ['-k', 'root.pem', 'getpub'])
    assert result.exit_code == 0
    assert "/* Autogenerated, do not edit */" in result.output
    assert "const unsigned char ec_pub_key[] = {" in result.output
    assert "const unsigned int ec_pub_key_len = 91;" in result.output


def test_keygen_default_key_file(runner, workdir):
    result = runner.invoke(cli, ['keygen', '-t', 'ecdsa-p224'])
    assert result.exit_code == 0
    assert (workdir / 'root_ec.pem').exists()


def test_keygen_key_file_from_env(runner, workdir):
    result = runner.invoke(cli, ['keygen'], env={
        'IMGTOOL_KEY': 'env.pem',
        'IMGTOOL_KEY_TYPE': 'ecdsa-p256',
    })
    assert result.exit_code == 0
    assert (workdir / 'env.pem').exists()


def test_keygen_refuses_overwrite(runner, workdir):
    key_file = workdir / 'root.pem'
    key_file.write_text("existing")

    result = runner.invoke(cli, ['-k', 'root.pem', 'keygen', '-t', 'ecdsa-p256'])
    assert result.exit_code == 1
    assert "❌ Error" in result.output
    assert key_file.read_text() == "existing"


def test_keygen_requires_key_type(runner, workdir):
    result = runner.invoke(cli, ['keygen'])
    assert result.exit_code == 2
    assert "--key-type" in result.output
    assert not (workdir / 'root_ec.pem').exists()


def test_keygen_unknown_key_type(runner, workdir):
    result = runner.invoke(cli, ['keygen', '-t', 'ecdsa-p384'])
    assert result.exit_code == 2
    assert result.exception is None or isinstance(result.exception, SystemExit)
    assert not (workdir / 'root_ec.pem').exists()


def test_getpub_rsa(runner, workdir, rsa_der):
    write_key_file('rsa.pem', RSA_PEM_TYPE, rsa_der)

    result = runner.invoke(cli, ['-k', 'rsa.pem', 'getpub'])
    assert result.exit_code == 0
    assert "const unsigned char rsa_pub_key[] = {" in result.output
    assert "const unsigned int rsa_pub_key_len = 270;" in result.output
    assert "ec_pub_key" not in result.output


def test_getpub_to_file(runner, workdir):
    runner.invoke(cli, ['-k', 'root.pem', 'keygen', '-t', 'ecdsa-p224'])

    result = runner.invoke(cli, ['-k', 'root.pem', 'getpub', '-o', 'pub.c'])
    assert result.exit_code == 0
    assert "const unsigned int ec_pub_key_len = 80;" in \
        (workdir / 'pub.c').read_text()


def test_getpub_missing_key(runner, workdir):
    result = runner.invoke(cli, ['-k', 'missing.pem', 'getpub', '-o', 'pub.c'])
    assert result.exit_code == 1
    assert "❌ Error" in result.output
    assert not (workdir / 'pub.c').exists()


def test_getpub_unsupported_label(runner, workdir):
    (workdir / 'pub.pem').write_text(
        "-----BEGIN PUBLIC KEY-----\nMAA=\n-----END PUBLIC KEY-----\n")

    result = runner.invoke(cli, ['-k', 'pub.pem', 'getpub'])
    assert result.exit_code == 1
    assert "PUBLIC KEY" in result.output

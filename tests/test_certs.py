"""Tests for self-signed certificate generation, with openssl mocked out.

Run:  uv run pytest tests/test_certs.py
"""

import subprocess
from unittest import mock

import pytest

from mathrelay import certs
from mathrelay.errors import CertificateError


def test_generates_with_openssl(tmp_path):
    done = subprocess.CompletedProcess([], 0, "", "")
    with mock.patch.object(certs.subprocess, "run", return_value=done) as run:
        certfile, keyfile = certs.ensure_certificates(tmp_path / "certs")

    cmd = run.call_args.args[0]
    assert cmd[:3] == ["openssl", "req", "-x509"]
    assert certfile in cmd and keyfile in cmd
    # temporary openssl config is cleaned up
    assert list((tmp_path / "certs").glob("*.conf")) == []


def test_reuses_existing_pair(tmp_path):
    (tmp_path / "server.crt").write_text("cert")
    (tmp_path / "server.key").write_text("key")
    with mock.patch.object(certs.subprocess, "run") as run:
        certfile, keyfile = certs.ensure_certificates(tmp_path)
    run.assert_not_called()
    assert certfile.endswith("server.crt") and keyfile.endswith("server.key")


def test_openssl_failure(tmp_path):
    failed = subprocess.CompletedProcess([], 1, "", "bad config")
    with mock.patch.object(certs.subprocess, "run", return_value=failed):
        with pytest.raises(CertificateError, match="bad config"):
            certs.ensure_certificates(tmp_path)


def test_openssl_missing(tmp_path):
    with mock.patch.object(certs.subprocess, "run", side_effect=FileNotFoundError):
        with pytest.raises(CertificateError, match="not found"):
            certs.ensure_certificates(tmp_path)

"""Self-signed localhost certificate for serving the HTTP transport over TLS.

Shells out to openssl; the generated pair is reused on later runs.
"""

import logging
import subprocess
import tempfile
from pathlib import Path

from .errors import CertificateError

logger = logging.getLogger(__name__)

_OPENSSL_CONFIG = """\
[req]
default_bits = 2048
prompt = no
default_md = sha256
distinguished_name = dn
req_extensions = v3_req

[dn]
CN=localhost
C=US
ST=State
L=City
O=MathRelay
OU=Development

[v3_req]
basicConstraints = CA:FALSE
keyUsage = nonRepudiation, digitalSignature, keyEncipherment
subjectAltName = @alt_names

[alt_names]
DNS.1 = localhost
DNS.2 = *.localhost
IP.1 = 127.0.0.1
IP.2 = ::1
"""


def ensure_certificates(certs_dir, days: int = 365, timeout: int = 60) -> tuple:
    """Return (certfile, keyfile), generating them with openssl if missing."""
    certs = Path(certs_dir)
    certfile = certs / "server.crt"
    keyfile = certs / "server.key"
    if certfile.exists() and keyfile.exists():
        return str(certfile), str(keyfile)

    certs.mkdir(parents=True, exist_ok=True)
    with tempfile.NamedTemporaryFile("w", suffix=".conf", dir=certs, delete=False) as f:
        f.write(_OPENSSL_CONFIG)
        conf = Path(f.name)

    cmd = [
        "openssl", "req", "-x509", "-nodes", "-days", str(days),
        "-newkey", "rsa:2048",
        "-keyout", str(keyfile), "-out", str(certfile),
        "-config", str(conf), "-extensions", "v3_req",
    ]
    try:
        logger.info("Generating self-signed certificate in %s", certs)
        proc = subprocess.run(cmd, capture_output=True, text=True, timeout=timeout)
    except FileNotFoundError:
        raise CertificateError("openssl not found on PATH")
    except subprocess.TimeoutExpired:
        raise CertificateError(f"openssl timed out ({timeout}s)")
    finally:
        conf.unlink(missing_ok=True)

    if proc.returncode != 0:
        raise CertificateError(f"openssl failed: {proc.stderr.strip()[:500]}")
    return str(certfile), str(keyfile)

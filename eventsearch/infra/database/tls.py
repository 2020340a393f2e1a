"""Custom TLS profile for MySQL connections.

The profile is described by a query-string blob, for example::

    root_cert=/etc/ssl/ca.pem&client_cert=/etc/ssl/client.pem&client_key=/etc/ssl/client.key

Keys:
    root_cert: PEM bundle added to the system trust store.
    client_cert, client_key: client key pair, loaded only when both are set.
    tls_mode: ``1`` disables certificate and hostname verification.

A MySQL DSN selects the profile with ``?tls=custom``. The other values
the MySQL tooling understands for ``tls`` are honoured too: ``true``
(system trust store), ``skip-verify`` (no verification), ``false`` and
``preferred`` (no client-side TLS).
"""

from __future__ import annotations

import logging
import ssl
from urllib.parse import parse_qs

from eventsearch.core.exceptions import TLSConfigError

logger = logging.getLogger(__name__)


def _insecure(context: ssl.SSLContext) -> ssl.SSLContext:
    context.check_hostname = False
    context.verify_mode = ssl.CERT_NONE
    return context


def parse_tls_config(config: str) -> ssl.SSLContext | None:
    """Build an SSL context from a TLS configuration blob.

    Args:
        config: Query-string encoded options. Empty means no custom profile.

    Returns:
        The configured context, or None for an empty blob.

    Raises:
        TLSConfigError: If the blob is malformed or a certificate cannot be loaded.
    """
    if not config:
        return None

    try:
        values = parse_qs(config, keep_blank_values=True, strict_parsing=True)
    except ValueError as exc:
        logger.error("Unable to parse custom tls config", extra={"error": str(exc)})
        raise TLSConfigError(f"unable to parse tls config: {exc}") from exc

    def first(key: str) -> str:
        return values.get(key, [""])[0]

    root_cert = first("root_cert")
    client_cert = first("client_cert")
    client_key = first("client_key")

    context = ssl.create_default_context(ssl.Purpose.SERVER_AUTH)
    if root_cert:
        try:
            context.load_verify_locations(cafile=root_cert)
        except ssl.SSLError as exc:
            raise TLSConfigError(
                f"unable to parse root certificate {root_cert!r}",
                extra={"root_cert": root_cert},
            ) from exc
        except OSError as exc:
            raise TLSConfigError(
                f"unable to load root certificate {root_cert!r}: {exc}",
                extra={"root_cert": root_cert},
            ) from exc

    if client_cert and client_key:
        try:
            context.load_cert_chain(certfile=client_cert, keyfile=client_key)
        except (OSError, ssl.SSLError) as exc:
            raise TLSConfigError(
                f"unable to load key pair {client_cert!r}, {client_key!r}: {exc}",
                extra={"client_cert": client_cert, "client_key": client_key},
            ) from exc

    if first("tls_mode") == "1":
        _insecure(context)

    return context


def context_for_dsn_mode(mode: str, custom: ssl.SSLContext | None) -> ssl.SSLContext | None:
    """Resolve the ``tls`` DSN parameter to an SSL context.

    Raises:
        TLSConfigError: For ``tls=custom`` without a custom profile, or an
            unknown mode.
    """
    match mode.lower():
        case "" | "false" | "preferred":
            return None
        case "true":
            return ssl.create_default_context(ssl.Purpose.SERVER_AUTH)
        case "skip-verify":
            return _insecure(ssl.create_default_context(ssl.Purpose.SERVER_AUTH))
        case "custom":
            if custom is None:
                raise TLSConfigError("the dsn selects tls=custom but no tls config is set")
            return custom
        case _:
            raise TLSConfigError(f"unknown tls mode {mode!r}", extra={"tls": mode})


__all__ = ["context_for_dsn_mode", "parse_tls_config"]

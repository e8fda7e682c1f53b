"""
BCE (Baidu Cloud Engine) request signing, auth version 1.

    authString       = bce-auth-v1/{ak}/{timestamp}/{expiration}
    signingKey       = hex(HMAC-SHA256(sk, authString))
    canonicalRequest = {METHOD}\\n{canonicalURI}\\n{canonicalQuery}\\n{canonicalHeaders}
    signature        = hex(HMAC-SHA256(signingKey, canonicalRequest))
    token            = {authString}/{signedHeaders}/{signature}

Everything here is a pure function of its inputs.
"""

from __future__ import annotations

import hashlib
import hmac
from dataclasses import dataclass
from typing import Any, Dict, Iterable, Mapping, Optional
from urllib.parse import quote

BCE_AUTH_VERSION = "bce-auth-v1"
DEFAULT_EXPIRATION_IN_SECONDS = 1800


@dataclass(frozen=True)
class Credentials:
    access_key: str
    secret_key: str


def percent_encode(value: Any) -> str:
    # quote() leaves only A-Z a-z 0-9 _ . - ~ alone when safe is empty
    return quote(str(value), safe="")


def canonical_uri(path: str) -> str:
    return percent_encode(path).replace("%2F", "/")


def canonical_query_string(params: Optional[Mapping[str, Any]] = None) -> str:
    if not params:
        return ""
    parts = []
    for k, v in params.items():
        if str(k).lower() == "authorization":
            continue
        if v is None:
            parts.append(f"{percent_encode(k)}=")
        else:
            parts.append(f"{percent_encode(k)}={percent_encode(v)}")
    return "&".join(sorted(parts))


def headers_to_sign(headers: Mapping[str, str], keys: Iterable[str]) -> Dict[str, str]:
    """
    Pick the allow-listed headers, in allow-list order.

    Names match case-insensitively; when two input names differ only by case
    (e.g. "Host" and "host"), the one appearing later in `headers` wins.
    """
    by_name = {str(k).strip().lower(): (k, v) for k, v in headers.items()}
    out: Dict[str, str] = {}
    for key in keys:
        hit = by_name.get(key.strip().lower())
        if hit is not None:
            out[hit[0]] = hit[1]
    return out


def signed_header_names(headers: Mapping[str, str]) -> str:
    return ";".join(str(name).strip().lower() for name in headers)


def canonical_headers(headers: Mapping[str, str]) -> str:
    lines = [
        f"{percent_encode(str(name).strip().lower())}:{percent_encode(str(value).strip())}"
        for name, value in headers.items()
    ]
    return "\n".join(sorted(lines))


def _hmac_sha256_hex(key: str, message: str) -> str:
    return hmac.new(key.encode("utf-8"), message.encode("utf-8"), hashlib.sha256).hexdigest()


class RequestSigner:
    def __init__(self, version: str = BCE_AUTH_VERSION, expiration_seconds: int = DEFAULT_EXPIRATION_IN_SECONDS):
        self.version = version
        self.expiration_seconds = expiration_seconds

    def auth_string(self, credentials: Credentials, timestamp: str) -> str:
        return f"{self.version}/{credentials.access_key}/{timestamp}/{self.expiration_seconds}"

    def signing_key(self, credentials: Credentials, timestamp: str) -> str:
        return _hmac_sha256_hex(credentials.secret_key, self.auth_string(credentials, timestamp))

    def canonical_request(
        self,
        headers: Mapping[str, str],
        resource_path: str,
        method: str = "POST",
        params: Optional[Mapping[str, Any]] = None,
    ) -> str:
        return "\n".join(
            [
                method.upper(),
                canonical_uri(resource_path),
                canonical_query_string(params),
                canonical_headers(headers),
            ]
        )

    def sign(
        self,
        headers: Mapping[str, str],
        timestamp: str,
        credentials: Credentials,
        resource_path: str,
        method: str = "POST",
        params: Optional[Mapping[str, Any]] = None,
    ) -> str:
        """
        Build the Authorization header value for one request.

        Args:
            headers: Headers already filtered down to the ones being signed
            timestamp: The request's x-bce-date value (UTC, second precision, Z suffix)
            credentials: Access/secret key pair; empty values are signed as-is
            resource_path: Request path, e.g. "/api/v3/sendSms"
            method: HTTP method
            params: Query parameters, if the endpoint takes any

        Returns:
            bce-auth-v1/{ak}/{timestamp}/{expiration}/{signedHeaders}/{signature}
        """
        key = self.signing_key(credentials, timestamp)
        signature = _hmac_sha256_hex(key, self.canonical_request(headers, resource_path, method, params))
        return f"{self.auth_string(credentials, timestamp)}/{signed_header_names(headers)}/{signature}"

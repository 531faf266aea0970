r"""Request signing for the API key surface.

The signer is a collaborator with a narrow contract: given the signing
inputs, it returns a signature string or raises. ``ApiKeySigner`` is the
HMAC-SHA256 implementation used by default; any object implementing
``RequestSigner`` can replace it.
"""

from __future__ import annotations

__all__ = [
    "API_KEY_HEADER",
    "PASSPHRASE_HEADER",
    "SIGNATURE_HEADER",
    "TIMESTAMP_HEADER",
    "ApiKeyAuthenticator",
    "ApiKeySigner",
    "RequestSigner",
    "iso_timestamp",
]

import base64
import binascii
import hashlib
import hmac
import logging
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Protocol

from aresdex.exceptions import SigningError

if TYPE_CHECKING:
    from collections.abc import Callable

    from aresdex.credentials import ApiKeyCredentials

logger: logging.Logger = logging.getLogger(__name__)

SIGNATURE_HEADER = "DYDX-SIGNATURE"
API_KEY_HEADER = "DYDX-API-KEY"
TIMESTAMP_HEADER = "DYDX-TIMESTAMP"
PASSPHRASE_HEADER = "DYDX-PASSPHRASE"


class RequestSigner(Protocol):
    r"""Compute the signature of an authenticated request."""

    def sign(
        self,
        credentials: ApiKeyCredentials,
        *,
        request_path: str,
        method: str,
        iso_timestamp: str,
        body: str,
    ) -> str: ...


def iso_timestamp() -> str:
    r"""Return the current UTC time as an ISO 8601 string with
    millisecond precision, e.g. ``2024-01-01T00:00:00.000Z``."""
    return (
        datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")
    )


class ApiKeySigner:
    """HMAC-SHA256 request signer.

    The signed message is ``iso_timestamp + METHOD + request_path +
    body``; the key is the urlsafe-base64 decoded API secret and the
    digest is urlsafe-base64 encoded.

    Example:
        ```pycon
        >>> from aresdex.credentials import ApiKeyCredentials
        >>> from aresdex.signing import ApiKeySigner
        >>> credentials = ApiKeyCredentials(key="key", secret="c2VjcmV0", passphrase="pass")
        >>> signature = ApiKeySigner().sign(
        ...     credentials,
        ...     request_path="/v3/orders",
        ...     method="GET",
        ...     iso_timestamp="2024-01-01T00:00:00.000Z",
        ...     body="",
        ... )
        >>> len(signature)
        44

        ```
    """

    def sign(
        self,
        credentials: ApiKeyCredentials,
        *,
        request_path: str,
        method: str,
        iso_timestamp: str,
        body: str,
    ) -> str:
        message = f"{iso_timestamp}{method.upper()}{request_path}{body}"
        try:
            secret = base64.urlsafe_b64decode(_pad_base64(credentials.secret))
        except (binascii.Error, ValueError) as exc:
            msg = f"API secret is not valid urlsafe base64: {exc}"
            raise SigningError(msg) from exc
        digest = hmac.new(secret, message.encode("utf-8"), digestmod=hashlib.sha256).digest()
        return base64.urlsafe_b64encode(digest).decode("ascii")


def _pad_base64(value: str) -> str:
    return value + "=" * (-len(value) % 4)


class ApiKeyAuthenticator:
    """Compute the signature and identity headers of each attempt.

    Args:
        credentials: The API key credentials.
        signer: The signer. Defaults to ``ApiKeySigner()``.
        clock: Callable returning the ISO timestamp to sign. Defaults to
            the current UTC time.
    """

    def __init__(
        self,
        credentials: ApiKeyCredentials,
        signer: RequestSigner | None = None,
        clock: Callable[[], str] = iso_timestamp,
    ) -> None:
        self._credentials = credentials
        self._signer = signer if signer is not None else ApiKeySigner()
        self._clock = clock

    def __call__(self, method: str, request_path: str, body: str | None) -> dict[str, str]:
        """Return the headers authenticating one attempt.

        Raises:
            SigningError: If the signer fails.
        """
        timestamp = self._clock()
        try:
            signature = self._signer.sign(
                self._credentials,
                request_path=request_path,
                method=method,
                iso_timestamp=timestamp,
                body=body or "",
            )
        except SigningError:
            raise
        except Exception as exc:
            logger.debug(f"Signer failed for {method} {request_path}: {exc}")
            msg = f"cannot sign {method} {request_path}: {exc}"
            raise SigningError(msg) from exc
        return {
            SIGNATURE_HEADER: signature,
            API_KEY_HEADER: self._credentials.key,
            TIMESTAMP_HEADER: timestamp,
            PASSPHRASE_HEADER: self._credentials.passphrase,
        }

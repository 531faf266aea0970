r"""Credential variants deciding which authenticated sub-clients exist.

Credentials are a closed set: no credentials (``None``), an API key
(signed ``v3`` surface), or an address with a subaccount number
(``v4`` indexer surface). Each variant validates its fields when it is
created, so a partially filled credential cannot exist.
"""

from __future__ import annotations

__all__ = ["AddressCredentials", "ApiKeyCredentials", "Credentials"]

from dataclasses import dataclass, field
from typing import Union

from aresdex.utils.validation import validate_non_empty


@dataclass(frozen=True)
class ApiKeyCredentials:
    """API key credentials of the signed surface.

    Args:
        key: The API key.
        secret: The urlsafe-base64 encoded API secret.
        passphrase: The API passphrase.
    """

    key: str
    secret: str = field(repr=False)
    passphrase: str = field(repr=False)

    def __post_init__(self) -> None:
        validate_non_empty(key=self.key, secret=self.secret, passphrase=self.passphrase)


@dataclass(frozen=True)
class AddressCredentials:
    """Address and subaccount of the indexer surface.

    Args:
        address: The account address.
        subaccount_number: The subaccount number. Must be >= 0.

    Example:
        ```pycon
        >>> from aresdex.credentials import AddressCredentials
        >>> AddressCredentials("dydx1abc", subaccount_number=0)
        AddressCredentials(address='dydx1abc', subaccount_number=0)

        ```
    """

    address: str
    subaccount_number: int = 0

    def __post_init__(self) -> None:
        validate_non_empty(address=self.address)
        if self.subaccount_number < 0:
            msg = f"subaccount_number must be >= 0, got {self.subaccount_number}"
            raise ValueError(msg)


Credentials = Union[ApiKeyCredentials, AddressCredentials, None]

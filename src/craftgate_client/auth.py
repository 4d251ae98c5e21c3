"""
Authentication and signing utilities for Craftgate API
"""

import base64
import hashlib
import hmac
import secrets
import string
from dataclasses import dataclass
from typing import Any, Dict, Optional, Union

from .constants import (
    AUTH_VERSION,
    HEADER_API_KEY,
    HEADER_AUTH_VERSION,
    HEADER_RND_KEY,
    HEADER_SIGNATURE,
    MIN_NONCE_LENGTH,
    NONCE_LENGTH,
)
from .exceptions import IncompatibleBodyError, InvalidHeaderValueError

NONCE_ALPHABET = string.ascii_letters + string.digits

BytesLike = Union[bytes, bytearray, memoryview]


class SecretString:
    """
    String wrapper that keeps its value out of logs and reprs.

    The raw value is only available through reveal(). Pickling is refused so
    the secret cannot leak through serialization either.
    """

    __slots__ = ("_value",)

    def __init__(self, value: str):
        if not isinstance(value, str):
            raise TypeError(f"SecretString expects str, got {type(value).__name__}")
        self._value = value

    def reveal(self) -> str:
        """Return the raw secret value."""
        return self._value

    def __repr__(self) -> str:
        return "SecretString('**********')"

    def __str__(self) -> str:
        return "**********"

    def __format__(self, format_spec: str) -> str:
        return str(self)

    def __len__(self) -> int:
        return len(self._value)

    def __bool__(self) -> bool:
        return bool(self._value)

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, SecretString):
            return NotImplemented
        return hmac.compare_digest(self._value.encode("utf-8"), other._value.encode("utf-8"))

    def __hash__(self) -> int:
        return hash(self._value)

    def __reduce__(self):
        raise TypeError("SecretString cannot be serialized")


@dataclass(frozen=True)
class ApiCredentials:
    """Container for API credentials. Plain strings are wrapped on creation."""
    access_key: SecretString
    secret_key: SecretString

    def __post_init__(self):
        for name in ("access_key", "secret_key"):
            value = getattr(self, name)
            if isinstance(value, str):
                object.__setattr__(self, name, SecretString(value))
            elif not isinstance(value, SecretString):
                raise TypeError(f"{name} must be a str or SecretString")

    def validate(self) -> bool:
        """Return True if both keys are present."""
        return bool(self.access_key and self.secret_key)


@dataclass(frozen=True)
class SignatureHeaders:
    """The four authentication header values attached to every request."""
    api_key: str
    rnd_key: str
    signature: str
    auth_version: str = AUTH_VERSION

    def as_dict(self) -> Dict[str, str]:
        return {
            HEADER_API_KEY: self.api_key,
            HEADER_RND_KEY: self.rnd_key,
            HEADER_AUTH_VERSION: self.auth_version,
            HEADER_SIGNATURE: self.signature,
        }

    def __repr__(self) -> str:
        return (
            f"SignatureHeaders(rnd_key={self.rnd_key!r}, "
            f"signature={self.signature!r}, auth_version={self.auth_version!r})"
        )


def generate_nonce(length: int = NONCE_LENGTH) -> str:
    """
    Generate a random alphanumeric nonce from the OS CSPRNG.

    Args:
        length: Number of characters (default: 64)

    Returns:
        Nonce drawn from [A-Za-z0-9]
    """
    if length < MIN_NONCE_LENGTH:
        raise ValueError(
            f"Nonce length must be at least {MIN_NONCE_LENGTH} characters, got {length}"
        )
    return "".join(secrets.choice(NONCE_ALPHABET) for _ in range(length))


def _validate_header_value(header: str, value: str) -> str:
    # Visible ASCII plus space and horizontal tab
    for char in value:
        code = ord(char)
        if code != 9 and (code < 32 or code > 126):
            raise InvalidHeaderValueError(header)
    return value


def _body_bytes(body: Any) -> Optional[bytes]:
    if body is None:
        return None
    if isinstance(body, (bytes, bytearray, memoryview)):
        return bytes(body)
    raise IncompatibleBodyError(type(body).__name__)


def sign_request(
    url: str,
    access_key: str,
    secret_key: str,
    nonce: str,
    body: Optional[BytesLike] = None,
) -> SignatureHeaders:
    """
    Compute the authentication headers for a request.

    The signature is the base64-encoded SHA-256 digest of the URL, access key,
    secret key, nonce and body concatenated in that order with no separator.

    Args:
        url: Absolute URL exactly as it will be sent, query string included
        access_key: API access key
        secret_key: API secret key
        nonce: Per-request random string
        body: Raw request body, if any

    Returns:
        SignatureHeaders with the four header values

    Raises:
        IncompatibleBodyError: If body is not bytes-like
        InvalidHeaderValueError: If a header value cannot be encoded
    """
    body_bytes = _body_bytes(body)

    digest = hashlib.sha256()
    digest.update(url.encode("utf-8"))
    digest.update(access_key.encode("utf-8"))
    digest.update(secret_key.encode("utf-8"))
    digest.update(nonce.encode("utf-8"))
    if body_bytes is not None:
        digest.update(body_bytes)

    signature = base64.b64encode(digest.digest()).decode("ascii")

    return SignatureHeaders(
        api_key=_validate_header_value(HEADER_API_KEY, access_key),
        rnd_key=_validate_header_value(HEADER_RND_KEY, nonce),
        signature=signature,
    )


class CraftgateSigner:
    """
    Signs requests with the client's credentials.

    Holds the credentials for the client's lifetime and draws a fresh nonce
    for every call to sign().
    """

    def __init__(self, credentials: ApiCredentials, nonce_factory=generate_nonce):
        """
        Initialize the signer with API credentials.

        Args:
            credentials: API credentials containing access and secret key
            nonce_factory: Zero-argument callable returning a nonce
        """
        self._credentials = credentials
        self._nonce_factory = nonce_factory

    def sign(self, url: str, body: Optional[BytesLike] = None) -> SignatureHeaders:
        """Sign a request with a freshly drawn nonce."""
        return sign_request(
            url,
            self._credentials.access_key.reveal(),
            self._credentials.secret_key.reveal(),
            self._nonce_factory(),
            body,
        )

"""
URL safety validation for outbound captures.

Key requirements:
- Only http and https targets may be fetched
- Reject localhost and loopback literals
- Reject literal private, loopback and link-local IPv4 addresses
- Reject loopback, link-local and unique-local IPv6 literals
- Parse hosts the way the browser will (WHATWG rules), so that a URL cannot
  look public here and private to Chromium

No DNS resolution happens here. A public hostname that resolves to a private
address at fetch time is not detected.
"""

from dataclasses import dataclass
from urllib.parse import quote, urlsplit, urlunsplit, SplitResult
import ipaddress
import re


ALLOWED_SCHEMES = ("http", "https")
DEFAULT_PORTS = {"http": 80, "https": 443}

BLOCKED_HOSTNAMES = frozenset({"localhost", "127.0.0.1", "::1", "[::1]"})

PRIVATE_IPV4_NETWORKS = (
    ipaddress.IPv4Network("10.0.0.0/8"),
    ipaddress.IPv4Network("172.16.0.0/12"),
    ipaddress.IPv4Network("192.168.0.0/16"),
    ipaddress.IPv4Network("169.254.0.0/16"),  # link-local
    ipaddress.IPv4Network("127.0.0.0/8"),  # loopback
)

# Matched against the compressed, lower-case IPv6 text
PRIVATE_IPV6_PREFIXES = ("fe80:", "fc", "fd")

# Code points the WHATWG host parser refuses in a domain
FORBIDDEN_HOST_CHARS = re.compile(r"[\x00-\x20#%/:<>?@\[\\\]^|\x7f]")

IPV4_NUMBER_PATTERNS = {
    10: re.compile(r"[0-9]+"),
    8: re.compile(r"[0-7]+"),
    16: re.compile(r"[0-9a-fA-F]+"),
}

_C0_CONTROL_OR_SPACE = "".join(chr(i) for i in range(0x21))

_PATH_SAFE = "/%:@!$&'()*+,;=~-._"
_QUERY_SAFE = _PATH_SAFE + "?"


# ============================================================================
# Errors
# ============================================================================


class UrlValidationError(Exception):
    """Raised when a URL is refused for capture."""

    code = "INVALID_URL"
    default_message = "Invalid URL"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class MissingInput(UrlValidationError):
    code = "MISSING_INPUT"
    default_message = "URL parameter is required"


class MalformedUrl(UrlValidationError):
    code = "MALFORMED_URL"
    default_message = "Invalid URL format"


class DisallowedScheme(UrlValidationError):
    code = "DISALLOWED_SCHEME"
    default_message = "Only http and https protocols are allowed"


class BlockedHost(UrlValidationError):
    code = "BLOCKED_HOST"
    default_message = "localhost and loopback addresses are not allowed"


class PrivateAddress(UrlValidationError):
    code = "PRIVATE_ADDRESS"
    default_message = "Private IP addresses are not allowed"


# ============================================================================
# Validation
# ============================================================================


@dataclass(frozen=True)
class ValidatedUrl:
    """A URL that passed safety validation."""
    href: str
    scheme: str  # "http" or "https"
    hostname: str  # lower-case; IPv6 literals keep their brackets

    def __str__(self) -> str:
        return self.href


def validate_url(raw) -> ValidatedUrl:
    """
    Validate an untrusted URL for capture.

    Args:
        raw: URL supplied by the caller

    Returns:
        ValidatedUrl with the normalized href, scheme and hostname

    Raises:
        UrlValidationError: One of MissingInput, MalformedUrl, DisallowedScheme,
            BlockedHost or PrivateAddress
    """
    if not raw or not isinstance(raw, str):
        raise MissingInput()

    parts = _split(raw)
    scheme = parts.scheme

    if scheme not in ALLOWED_SCHEMES:
        raise DisallowedScheme()

    try:
        port = parts.port
    except ValueError as e:
        raise MalformedUrl() from e

    hostname = _normalize_host(parts)

    if hostname in BLOCKED_HOSTNAMES:
        raise BlockedHost()

    if is_private_ipv4(hostname):
        raise PrivateAddress()

    if hostname.startswith("[") and hostname.endswith("]"):
        ipv6 = hostname[1:-1]
        if ipv6 == "::1" or ipv6.startswith(PRIVATE_IPV6_PREFIXES):
            raise PrivateAddress("Private IPv6 addresses are not allowed")

    netloc = hostname
    if port is not None and port != DEFAULT_PORTS[scheme]:
        netloc = f"{netloc}:{port}"
    userinfo = parts.netloc.rpartition("@")[0]
    if userinfo:
        netloc = f"{userinfo}@{netloc}"

    try:
        href = urlunsplit((
            scheme,
            netloc,
            quote(parts.path or "/", safe=_PATH_SAFE),
            quote(parts.query, safe=_QUERY_SAFE),
            quote(parts.fragment, safe=_QUERY_SAFE),
        ))
    except UnicodeError as e:
        # Lone surrogates have no UTF-8 encoding
        raise MalformedUrl() from e

    return ValidatedUrl(href=href, scheme=scheme, hostname=hostname)


def is_private_ipv4(hostname: str) -> bool:
    """Check whether a dotted-decimal literal falls in a blocked IPv4 range."""
    try:
        address = ipaddress.IPv4Address(hostname)
    except ValueError:
        return False
    return any(address in network for network in PRIVATE_IPV4_NETWORKS)


def _split(raw: str) -> SplitResult:
    """Split a URL, treating http(s) authorities the way a browser does."""
    # Browsers trim C0 controls and spaces and drop embedded tabs and newlines
    text = raw.strip(_C0_CONTROL_OR_SPACE)
    for char in "\t\r\n":
        text = text.replace(char, "")

    try:
        parts = urlsplit(text)
    except ValueError as e:
        raise MalformedUrl() from e

    if not parts.scheme:
        raise MalformedUrl()

    if parts.scheme in ALLOWED_SCHEMES:
        # Browsers read "\" as "/" and tolerate any number of slashes after the
        # scheme, so "http://public\@127.0.0.1" targets 127.0.0.1.
        rest = text[len(parts.scheme) + 1:].replace("\\", "/").lstrip("/")
        try:
            parts = urlsplit(f"{parts.scheme}://{rest}")
        except ValueError as e:
            raise MalformedUrl() from e

    return parts


def _normalize_host(parts: SplitResult) -> str:
    """Return the canonical host text or raise MalformedUrl."""
    host = parts.hostname
    if not host:
        raise MalformedUrl()

    # urlsplit strips the brackets from IPv6 literals
    if "[" in parts.netloc.rpartition("@")[2]:
        if "%" in host:
            raise MalformedUrl()
        try:
            address = ipaddress.IPv6Address(host)
        except ValueError as e:
            raise MalformedUrl() from e
        return f"[{address.compressed}]"

    if not host.isascii():
        try:
            host = host.encode("idna").decode("ascii")
        except UnicodeError as e:
            raise MalformedUrl() from e

    host = host.lower()
    if FORBIDDEN_HOST_CHARS.search(host):
        raise MalformedUrl()

    return _canonical_ipv4(host) or host


def _canonical_ipv4(host: str) -> str | None:
    """
    Canonicalize a numeric host to dotted decimal.

    Follows the WHATWG IPv4 parser, so "0x7f.1", "2130706433" and
    "0177.0.0.1" all become "127.0.0.1". Returns None when the host is a
    domain name. Raises MalformedUrl for numeric hosts that do not parse.
    """
    parts = host.split(".")
    if parts[-1] == "" and len(parts) > 1:
        parts.pop()

    if _parse_ipv4_number(parts[-1]) is None and not parts[-1].isdigit():
        return None

    if len(parts) > 4:
        raise MalformedUrl()

    numbers = []
    for part in parts:
        number = _parse_ipv4_number(part)
        if number is None:
            raise MalformedUrl()
        numbers.append(number)

    if any(n > 255 for n in numbers[:-1]):
        raise MalformedUrl()
    if numbers[-1] >= 256 ** (5 - len(numbers)):
        raise MalformedUrl()

    value = numbers[-1]
    for i, n in enumerate(numbers[:-1]):
        value += n * 256 ** (3 - i)

    return str(ipaddress.IPv4Address(value))


def _parse_ipv4_number(part: str) -> int | None:
    if not part:
        return None

    radix = 10
    if part[:2] in ("0x", "0X"):
        part = part[2:]
        radix = 16
    elif len(part) > 1 and part[0] == "0":
        part = part[1:]
        radix = 8

    if not part:
        return 0
    if not IPV4_NUMBER_PATTERNS[radix].fullmatch(part):
        return None
    return int(part, radix)

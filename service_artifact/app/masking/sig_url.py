"""
Masking of ``sig`` query parameters in signed storage URLs.

A signed URL grants access to its blob for as long as the signature is
valid, so the signature is registered with the secret masker and replaced
with ``***`` before the URL is logged. Three passes look for it: a scan of
the raw string, a structured parse of the query, and a regex rewrite used
when the URL cannot be parsed or the parse did not see the parameter.
"""

import re
from typing import Callable, List, Optional, Tuple
from urllib.parse import SplitResult, parse_qsl, quote, quote_plus, unquote, urljoin, urlsplit, urlunsplit

from shared.logging import get_logger
from shared.secrets_manager import MASK, SecretSink, secret_masker

PLACEHOLDER_BASE_URL = "https://example.com"

# Schemes whose serialised form always has a path, i.e. "https://host/?q"
SPECIAL_SCHEMES = frozenset(["ftp", "file", "http", "https", "ws", "wss"])

RAW_SIG_PATTERN = re.compile(r"[?&](sig)=([^&=#]+)", re.IGNORECASE)
SIG_PARAM_PATTERN = re.compile(r"([:?&]|^)(sig)=([^&=#]+)", re.IGNORECASE)
LOOSE_SIG_PATTERN = re.compile(r"([:?&]|^)(sig)=", re.IGNORECASE)

logger = get_logger("artifact.masking")

# A strategy returns the masked URL, or None when it could not handle it
Strategy = Callable[[str, SecretSink], Optional[str]]


def encode_uri_component(value: str) -> str:
    """Percent-encode everything except the unreserved URI component characters."""
    return quote(value, safe="-_.!~*'()")


def _form_encode(value: str) -> str:
    # application/x-www-form-urlencoded: "*" stays literal, "~" does not
    return quote_plus(value, safe="*").replace("~", "%7E")


def _register_raw_signatures(url: str, sink: SecretSink) -> None:
    # The parser decodes the value, so catch the on-the-wire form first
    for match in RAW_SIG_PATTERN.finditer(url):
        sink.register(match.group(2))


def _parse_url(url: str) -> Optional[SplitResult]:
    try:
        parts = urlsplit(url)
        if parts.scheme:
            return parts
    except ValueError:
        pass

    try:
        return urlsplit(urljoin(PLACEHOLDER_BASE_URL, url))
    except ValueError:
        logger.debug("Failed to parse URL", url=url)
        return None


def _serialize(parts: SplitResult, params: List[Tuple[str, str]]) -> str:
    path = parts.path
    if not path and parts.netloc and parts.scheme.lower() in SPECIAL_SCHEMES:
        path = "/"
    query = "&".join(f"{_form_encode(name)}={_form_encode(value)}" for name, value in params)
    return urlunsplit((parts.scheme, parts.netloc, path, query, parts.fragment))


def mask_with_url_parser(url: str, sink: SecretSink) -> Optional[str]:
    """Mask ``sig`` parameters found by parsing the URL's query string."""
    parts = _parse_url(url)
    if parts is None:
        return None

    masked = False
    params = []
    for name, value in parse_qsl(parts.query, keep_blank_values=True):
        if name.lower() == "sig" and value:
            sink.register(value)
            sink.register(encode_uri_component(value))
            value = MASK
            masked = True
        params.append((name, value))

    if masked:
        return _serialize(parts, params)

    if SIG_PARAM_PATTERN.search(url):
        # Parsed, but the signature is somewhere the query parser doesn't look
        return None

    return url


def mask_with_regex(url: str, sink: SecretSink) -> Optional[str]:
    """Mask ``sig=<value>`` occurrences textually, for URLs that won't parse."""

    def _replace(match: "re.Match[str]") -> str:
        prefix, param_name, value = match.groups()
        sink.register(value)
        try:
            sink.register(unquote(value, errors="strict"))
        except UnicodeDecodeError:
            logger.debug("Signature is not valid percent-encoded UTF-8")
        return f"{prefix}{param_name}={MASK}"

    return SIG_PARAM_PATTERN.sub(_replace, url)


STRATEGIES: Tuple[Tuple[str, Strategy], ...] = (
    ("url_parser", mask_with_url_parser),
    ("regex", mask_with_regex),
)


def mask_sig_url(url: str, sink: Optional[SecretSink] = None) -> str:
    """
    Mask the ``sig`` parameter in a URL and register it as a secret.

    Args:
        url: URL that may carry a ``sig`` parameter, in any letter casing
        sink: Where signature values are registered (defaults to the
            process-wide secret masker)

    Returns:
        The URL with every signature value replaced by ``***``, or the
        original URL if no signature was found. Never raises.
    """
    if not url:
        return url

    if sink is None:
        sink = secret_masker

    try:
        _register_raw_signatures(url, sink)
    except Exception as e:
        logger.debug("Error scanning URL for signatures", error=str(e))

    for name, strategy in STRATEGIES:
        try:
            masked = strategy(url, sink)
        except Exception as e:
            logger.debug("Error masking URL", strategy=name, error=str(e))
            continue
        if masked is not None:
            return masked

    return url

"""
Signature masking for deserialized backend responses.
"""

from collections.abc import Mapping, Sequence
from typing import Any, Iterator, List, Optional

from shared.logging import get_logger
from shared.secrets_manager import SecretSink

from .sig_url import LOOSE_SIG_PATTERN, mask_sig_url

SIGNED_URL_KEYS = ("signed_upload_url", "signed_url")

logger = get_logger("artifact.masking")


def _is_sequence(value: Any) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray))


def _is_container(value: Any) -> bool:
    return isinstance(value, Mapping) or _is_sequence(value)


def _mask_sequence(items: Sequence, sink: Optional[SecretSink]) -> Iterator[Any]:
    for item in items:
        if isinstance(item, str):
            mask_sig_url(item, sink)
        elif _is_container(item):
            yield item


def _mask_mapping(obj: Mapping, sink: Optional[SecretSink]) -> Iterator[Any]:
    for key in SIGNED_URL_KEYS:
        value = obj.get(key)
        if isinstance(value, str):
            mask_sig_url(value, sink)

    for value in obj.values():
        if isinstance(value, str):
            if LOOSE_SIG_PATTERN.search(value):
                mask_sig_url(value, sink)
        elif _is_container(value):
            yield value


def _mask_node(node: Any, sink: Optional[SecretSink]) -> Iterator[Any]:
    """Mask the strings directly under node, yielding nested containers in order."""
    if isinstance(node, Mapping):
        return _mask_mapping(node, sink)
    return _mask_sequence(node, sink)


def _walk(body: Any, sink: Optional[SecretSink]) -> None:
    # One lazy iterator per open container, so nesting depth is bounded by memory only
    stack: List[Iterator[Any]] = [_mask_node(body, sink)]
    while stack:
        child = next(stack[-1], None)
        if child is None:
            stack.pop()
        else:
            stack.append(_mask_node(child, sink))


def mask_secret_urls(body: Any, sink: Optional[SecretSink] = None) -> None:
    """
    Register the signatures of any signed URLs in a response body.

    Walks mappings and sequences depth first. Values of ``signed_upload_url``
    and ``signed_url``, every string in a sequence, and any other string that
    looks like it carries a ``sig=`` parameter are passed to
    :func:`mask_sig_url`. The body itself is left untouched; only the secret
    masker learns the signatures. Never raises.
    """
    if not _is_container(body):
        logger.debug("body is not an object or is null")
        return

    try:
        _walk(body, sink)
    except Exception as e:
        logger.debug("Error masking response body", error=str(e))

"""
Signed URL masking package.

Signed storage URLs returned by the results backend carry their
authorization in a ``sig`` query parameter. Everything here registers those
signatures with the shared secret masker so they are redacted from logs,
and never raises: failing to mask must not fail the upload or download.
"""

from .payload import mask_secret_urls
from .sig_url import mask_sig_url

__all__ = ["mask_secret_urls", "mask_sig_url"]

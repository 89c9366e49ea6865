"""
Secret masking registry for the artifact client.

Values registered here are redacted from every later log line, and can
optionally be announced to the workflow runner so it masks them in the
job output as well.
"""

import sys
import threading
from typing import FrozenSet, Optional, Protocol, TextIO

MASK = "***"


class SecretSink(Protocol):
    """Anything that accepts values to be masked from subsequent output."""

    def register(self, value: str) -> None:
        ...


def _escape_command_data(value: str) -> str:
    return value.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


class SecretMasker:
    """
    Append-only registry of secret values.
    """

    def __init__(self, emit_workflow_commands: bool = False, stream: Optional[TextIO] = None):
        """
        Initialize the masker.

        Args:
            emit_workflow_commands: Write ``::add-mask::`` commands for new secrets
            stream: Destination for workflow commands (defaults to stdout)
        """
        self.emit_workflow_commands = emit_workflow_commands
        self._stream = stream
        self._secrets: set = set()
        self._lock = threading.Lock()

    @property
    def secrets(self) -> FrozenSet[str]:
        """Snapshot of the registered values."""
        with self._lock:
            return frozenset(self._secrets)

    def register(self, value: str) -> None:
        """
        Register a value to be masked.

        Empty values are ignored and registering the same value twice is
        harmless.

        Args:
            value: Secret value
        """
        if not value:
            return

        with self._lock:
            if value in self._secrets:
                return
            self._secrets.add(value)

        if self.emit_workflow_commands:
            stream = self._stream or sys.stdout
            stream.write(f"::add-mask::{_escape_command_data(value)}\n")

    def mask(self, text: str) -> str:
        """
        Replace every registered value in text with the mask.

        Args:
            text: Text to redact

        Returns:
            Redacted text
        """
        if not text:
            return text

        # Longest first so a secret containing another is not left half-masked
        for secret in sorted(self.secrets, key=len, reverse=True):
            if secret in text:
                text = text.replace(secret, MASK)
        return text

    def clear(self) -> None:
        """Forget all registered values."""
        with self._lock:
            self._secrets.clear()


# Process-wide masker
secret_masker = SecretMasker()

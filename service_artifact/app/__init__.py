"""
Artifact service package.

Helpers used by the artifact upload/download client when talking to the
results backend:

- app.claims: Backend ID extraction from the workflow runtime token.
- app.masking: Redaction of signed-URL signatures before they reach logs.

Design notes:
- Nothing here performs IO at import time.
- Use the shared/ utilities for configuration, logging and errors.
- Masking is best-effort and never raises to the caller.
"""

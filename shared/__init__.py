"""
Shared utilities for the artifact client.

This package aggregates common building blocks consumed by the service
packages:

- config: Runner configuration via pydantic-settings
- logging: Structured logging with secret redaction
- errors: Canonical error types and responses
- secrets_manager: Secret-masking registry fed by the URL redactor

Do not import from service_* packages into shared/.
"""

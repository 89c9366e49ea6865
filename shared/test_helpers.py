"""
Test helper functions and factory methods for the artifact client.
"""

import base64
import json
from typing import Dict, Any, Optional, List
from datetime import datetime, timedelta
import jwt

WORKFLOW_RUN_BACKEND_ID = "ce7f54c7-61c7-4aae-887f-30da475f5f1a"
WORKFLOW_JOB_RUN_BACKEND_ID = "ca395085-040a-526b-2ce8-bdc85f692774"


class MockTokenGenerator:
    """Generate mock runtime tokens for testing."""

    def __init__(self, issuer: str = "https://token.actions.example.com", secret: str = "mock-secret"):
        self.issuer = issuer
        self.secret = secret

    def generate_token(self, claims: Dict[str, Any], expires_in: int = 3600) -> str:
        """Sign an HS256 token carrying the given claims."""
        now = datetime.utcnow()
        payload = {
            "iss": self.issuer,
            "sub": "1234567890",
            "iat": int(now.timestamp()),
            "exp": int((now + timedelta(seconds=expires_in)).timestamp()),
        }
        payload.update(claims)

        return jwt.encode(payload, self.secret, algorithm="HS256")

    def generate_runtime_token(self, scopes: Optional[List[str]] = None) -> str:
        """Generate a runtime token whose ``scp`` claim lists the given scopes."""
        if scopes is None:
            scopes = [
                "Actions.Example",
                "Actions.AnotherExample:test",
                f"Actions.Results:{WORKFLOW_RUN_BACKEND_ID}:{WORKFLOW_JOB_RUN_BACKEND_ID}",
            ]
        return self.generate_token({"scp": " ".join(scopes)})


def encode_segment(data: Any) -> str:
    """Base64url encode a JSON value (or raw bytes) without padding."""
    raw = data if isinstance(data, bytes) else json.dumps(data).encode()
    return base64.urlsafe_b64encode(raw).rstrip(b"=").decode()


def create_unsigned_token(payload: Any) -> str:
    """Assemble a token with an arbitrary payload segment and a dummy signature."""
    header = encode_segment({"alg": "HS256", "typ": "JWT"})
    return f"{header}.{encode_segment(payload)}.c2lnbmF0dXJl"


def create_signed_url(
    signature: str = "12345",
    param_name: str = "sig",
    base_url: str = "https://account.blob.core.windows.net/container/artifact.zip",
) -> str:
    """Create a storage URL signed with the given signature."""
    return f"{base_url}?sv=2021-08-06&se=2030-01-01T00%3A00%3A00Z&sp=r&{param_name}={signature}"


def create_artifact_response(signed_url: str) -> Dict[str, Any]:
    """Create a backend response body nesting a signed URL a few levels deep."""
    return {
        "ok": True,
        "artifact": {
            "name": "build-output",
            "size": 1024,
            "download": {"signed_url": signed_url},
        },
        "mirrors": [signed_url],
    }

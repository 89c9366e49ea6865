"""
Backend ID extraction from the workflow runtime token.
"""

import json
from typing import Any, Dict, Optional

from jose.utils import base64url_decode
from pydantic import BaseModel, ConfigDict, Field

from shared.config import get_runtime_token
from shared.errors import InvalidClaimError, InvalidFormatError
from shared.logging import get_logger

RESULTS_SCOPE = "Actions.Results"

logger = get_logger("artifact.claims")


class BackendIds(BaseModel):
    """Workflow run and job run identifiers known to the results backend."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    workflow_run_backend_id: str = Field(alias="workflowRunBackendId")
    workflow_job_run_backend_id: str = Field(alias="workflowJobRunBackendId")


def _decode_claims(token: str) -> Dict[str, Any]:
    # Only the payload is read; header and signature stay opaque
    segments = token.split(".")
    if len(segments) != 3:
        raise InvalidFormatError(
            f"Invalid token specified: expected 3 segments, got {len(segments)}",
            details={"token_error": "segment_count"}
        )

    try:
        claims = json.loads(base64url_decode(segments[1].encode("utf-8")).decode("utf-8"))
    except ValueError as e:
        raise InvalidFormatError(
            f"Invalid token specified: invalid payload ({e})",
            details={"token_error": str(e)}
        )

    if not isinstance(claims, dict):
        raise InvalidFormatError(
            "Invalid token specified: payload is not a JSON object",
            details={"token_error": "payload_type"}
        )
    return claims


def get_backend_ids_from_token(token: Optional[str] = None) -> BackendIds:
    """
    Get the workflow run and job run backend IDs from the runtime token.

    The ``scp`` claim is a space separated list of scopes, e.g.
    ``"Actions.ExampleScope Actions.Results:<run id>:<job run id>"``.
    The first ``Actions.Results`` scope wins.

    Args:
        token: Runtime token; read from ``ACTIONS_RUNTIME_TOKEN`` when omitted

    Returns:
        The backend ID pair

    Raises:
        InvalidFormatError: The token is not a decodable JWT
        InvalidClaimError: The ``Actions.Results`` scope is missing or malformed
    """
    if token is None:
        token = get_runtime_token()

    claims = _decode_claims(token)
    scp = claims.get("scp")
    if not scp or not isinstance(scp, str):
        raise InvalidClaimError()

    for scope in scp.split(" "):
        scope_parts = scope.split(":")
        if scope_parts[0] != RESULTS_SCOPE:
            continue

        if len(scope_parts) != 3:
            # missing expected number of claims
            raise InvalidClaimError(details={"scope": RESULTS_SCOPE})

        ids = BackendIds(
            workflow_run_backend_id=scope_parts[1],
            workflow_job_run_backend_id=scope_parts[2]
        )

        logger.debug("Workflow Run Backend ID", workflow_run_backend_id=ids.workflow_run_backend_id)
        logger.debug("Workflow Job Run Backend ID", workflow_job_run_backend_id=ids.workflow_job_run_backend_id)

        return ids

    raise InvalidClaimError()

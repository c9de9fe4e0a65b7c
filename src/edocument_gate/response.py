"""
Gate response formatting

The rejection body is fixed: {"message":"TLS/SSL Requested"} and nothing else.
"""

from typing import Dict

from fastapi.responses import JSONResponse

from .models import Rejected


def format_message(message: str) -> Dict[str, str]:
    """Build the single-field JSON body the gate emits"""
    return {"message": message}


def rejection_response(decision: Rejected) -> JSONResponse:
    """
    Build the terminal response for a rejected request

    Args:
        decision: The rejection produced by the gate

    Returns:
        JSON response with the rejection status and message body
    """
    return JSONResponse(
        content=format_message(decision.reason),
        status_code=decision.status_code,
        media_type="application/json"
    )

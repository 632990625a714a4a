"""
Admin authentication endpoint.

Routes: POST /admin/auth

Dependencies: portfolio_rag.core.auth_gate
System role: Admin page password check
"""

from fastapi import APIRouter, Depends

from portfolio_rag.api.deps import get_auth_gate
from portfolio_rag.core.auth_gate import AdminAuthGate
from portfolio_rag.models.auth import AuthRequest, AuthResult

router = APIRouter(prefix="/admin", tags=["admin"])


@router.post("/auth", response_model=AuthResult, response_model_exclude_none=True)
async def authenticate(
    body: AuthRequest,
    auth_gate: AdminAuthGate = Depends(get_auth_gate),
) -> AuthResult:
    """
    Check the admin password.

    Returns {"success": true} for the right password and
    {"success": false, "configured": true} for the configuration probe.
    AuthError (401) and AuthDisabledError (503) are rendered by the
    exception handlers.
    """
    return auth_gate.authenticate(body.password)

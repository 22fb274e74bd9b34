"""Pydantic models for API request/response."""

from typing import Optional
from pydantic import BaseModel, Field

from domain.model.viewer import Viewer


class LogInRequest(BaseModel):
    """Request model for login. Without a code the session cookie is renewed."""
    code: Optional[str] = Field(None, description="Google authorization code")


class ConnectStripeRequest(BaseModel):
    """Request model for linking a Stripe account."""
    code: str = Field(..., min_length=1, description="Stripe Connect authorization code")


class AuthUrlResponse(BaseModel):
    """Response model for the Google consent URL."""
    auth_url: str


class ViewerResponse(BaseModel):
    """Response model for the current viewer."""
    id: Optional[str] = None
    token: Optional[str] = Field(None, description="Session token; send back as X-CSRF-TOKEN")
    avatar: Optional[str] = None
    wallet_id: Optional[str] = None
    has_wallet: Optional[bool] = Field(None, description="true when a Stripe account is linked, otherwise null")
    did_request: bool = True

    @classmethod
    def from_viewer(cls, viewer: Viewer) -> "ViewerResponse":
        return cls(
            id=viewer.id,
            token=viewer.token,
            avatar=viewer.avatar,
            wallet_id=viewer.wallet_id,
            has_wallet=viewer.has_wallet,
            did_request=viewer.did_request,
        )

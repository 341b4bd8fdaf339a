from fastapi import APIRouter, Depends
from research_navigator.core.dependencies import (
    get_auth_service, get_current_token, get_current_user
)
from research_navigator.modules.auth.schemas import (
    LoginRequest, SignUpRequest, TokenResponse, SignUpResponse, OAuthResponse
)
from research_navigator.modules.auth.service import AuthService
from typing import Dict, Optional

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/signup", response_model=SignUpResponse, status_code=201)
async def sign_up(
    signup_data: SignUpRequest,
    service: AuthService = Depends(get_auth_service)
):
    """Register a new user and create their profile"""
    return service.sign_up(signup_data)


@router.post("/login", response_model=TokenResponse)
async def login(
    login_data: LoginRequest,
    service: AuthService = Depends(get_auth_service)
):
    """Login and get access token"""
    return service.sign_in(login_data)


@router.post("/oauth/{provider}", response_model=OAuthResponse)
async def oauth_sign_in(
    provider: str,
    redirect_to: Optional[str] = None,
    service: AuthService = Depends(get_auth_service)
):
    """Start federated sign-in; returns the provider URL"""
    return service.sign_in_with_provider(provider, redirect_to)


@router.post("/logout", status_code=200)
async def logout(
    token: str = Depends(get_current_token),
    service: AuthService = Depends(get_auth_service)
):
    """Logout and drop the cached identity for this token"""
    service.sign_out(token)
    return {"message": "Logged out successfully"}


@router.get("/me")
async def get_me(current_user: Dict = Depends(get_current_user)):
    """Get current authenticated user"""
    return current_user

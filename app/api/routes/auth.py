# app/api/routes/auth.py
from fastapi import APIRouter, Depends, HTTPException

from app.schemas.auth import AuthSessionResponse, LoginRequest, ProviderSignInRequest, TokenResponse
from app.schemas.user import UserCreate, UserResponse
from app.services.auth import AuthContext, get_auth_context

router = APIRouter(prefix="/auth", tags=["auth"])


def _require_signed_in(ctx: AuthContext):
    if not ctx.is_authenticated:
        raise HTTPException(status_code=401, detail="Not authenticated")


@router.post("/register", response_model=TokenResponse, status_code=201)
def register(user: UserCreate, ctx: AuthContext = Depends(get_auth_context)):
    new_user, token = ctx.register(user)
    return TokenResponse(access_token=token, user=UserResponse.model_validate(new_user), is_new_user=True)


@router.post("/login", response_model=TokenResponse)
def login(credentials: LoginRequest, ctx: AuthContext = Depends(get_auth_context)):
    user, token = ctx.sign_in_with_credentials(credentials.student_id, credentials.password)
    return TokenResponse(access_token=token, user=UserResponse.model_validate(user))


@router.post("/provider", response_model=TokenResponse)
def provider_sign_in(payload: ProviderSignInRequest, ctx: AuthContext = Depends(get_auth_context)):
    user, token, is_new = ctx.sign_in_with_provider(payload.id_token)
    return TokenResponse(access_token=token, user=UserResponse.model_validate(user), is_new_user=is_new)


@router.post("/logout", status_code=204)
def logout(ctx: AuthContext = Depends(get_auth_context)):
    _require_signed_in(ctx)
    ctx.sign_out()
    return


# Front end polls this on boot; it never answers 401
@router.get("/session", response_model=AuthSessionResponse)
def auth_session(ctx: AuthContext = Depends(get_auth_context)):
    user = UserResponse.model_validate(ctx.current_user) if ctx.current_user else None
    return AuthSessionResponse(state=ctx.state.value, user=user)


@router.get("/me", response_model=UserResponse)
def me(ctx: AuthContext = Depends(get_auth_context)):
    _require_signed_in(ctx)
    return ctx.current_user


@router.post("/refresh", response_model=UserResponse)
def refresh(ctx: AuthContext = Depends(get_auth_context)):
    _require_signed_in(ctx)
    return ctx.refresh()

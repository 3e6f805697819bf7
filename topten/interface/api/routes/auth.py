"""Authentication routes.

Password signup/login, Google sign-in redirects, logout, the current user
and password reset. The session lives in an encrypted cookie written on the
response.
"""

import logging
from urllib.parse import urlencode

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Query, Request, Response, status
from fastapi.responses import JSONResponse, RedirectResponse
from pydantic import BaseModel
from sqlalchemy.exc import SQLAlchemyError

from topten.adapter.error import ProviderError
from topten.adapter.session import DEFAULT_RETURN_URL, SessionManager
from topten.application.usecase.auth import (
    CompleteFederatedLoginRequest,
    CompleteFederatedLoginUseCase,
    ConfirmPasswordResetRequest,
    ConfirmPasswordResetResponse,
    ConfirmPasswordResetUseCase,
    GetCurrentUserRequest,
    GetCurrentUserResponse,
    GetCurrentUserUseCase,
    InitiateFederatedLoginRequest,
    InitiateFederatedLoginUseCase,
    LoginRequest,
    LoginResponse,
    LoginUseCase,
    RequestPasswordResetRequest,
    RequestPasswordResetResponse,
    RequestPasswordResetUseCase,
    SignupRequest,
    SignupResponse,
    SignupUseCase,
)
from topten.config import Settings
from topten.domain.error import (
    FederatedLoginError,
    NotFoundError,
    StorageFailureError,
    ValidationError,
)
from topten.interface.api.dependencies import load_session, require_user_id
from topten.interface.error import error_response

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"], route_class=DishkaRoute)


class MessageResponse(BaseModel):
    """Plain acknowledgement."""

    message: str


def login_error_redirect(settings: Settings, code: str) -> RedirectResponse:
    """Send the browser back to the login page with an error code."""
    return RedirectResponse(
        url=f"{settings.api.frontend_url}/auth/login?{urlencode({'error': code})}",
        status_code=status.HTTP_302_FOUND,
    )


@router.post("/signup", response_model=SignupResponse)
async def signup(
    body: SignupRequest,
    request: Request,
    response: Response,
    signup_use_case: FromDishka[SignupUseCase],
    session_manager: FromDishka[SessionManager],
) -> SignupResponse:
    """Create a password account and sign it in.

    Sets cookie: topten_session
    """
    result = await signup_use_case.execute(body)

    session = load_session(request, session_manager)
    session.log_in(result.session)
    session.save(response)

    logger.info(f"Signup successful for user: {result.user.username}")
    return result


@router.post("/login", response_model=LoginResponse)
async def login(
    body: LoginRequest,
    request: Request,
    response: Response,
    login_use_case: FromDishka[LoginUseCase],
    session_manager: FromDishka[SessionManager],
) -> LoginResponse:
    """Sign in with email and password.

    Sets cookie: topten_session
    """
    result = await login_use_case.execute(body)

    session = load_session(request, session_manager)
    session.log_in(result.session)
    session.save(response)

    logger.info(f"Login successful for user: {result.user.username}")
    return result


@router.get("/google/initiate")
async def google_initiate(
    initiate_use_case: FromDishka[InitiateFederatedLoginUseCase],
    session_manager: FromDishka[SessionManager],
    return_url: str | None = Query(default=None, alias="returnUrl"),
) -> RedirectResponse:
    """Redirect to Google's consent screen.

    The CSRF state and the post-login return URL are sealed into a
    short-lived cookie and checked on the callback.

    Args:
        return_url: Site-relative path to land on after sign-in

    Sets cookie: topten_oauth_state
    """
    oauth_state = session_manager.issue_oauth_state(return_url)
    result = await initiate_use_case.execute(
        InitiateFederatedLoginRequest(state=oauth_state.state)
    )

    redirect_response = RedirectResponse(
        url=result.authorization_url,
        status_code=status.HTTP_302_FOUND,
    )
    session_manager.write_oauth_state(redirect_response, oauth_state)

    logger.info(f"Google sign-in initiated, return_url={oauth_state.return_url}")
    return redirect_response


@router.get("/google/callback")
async def google_callback(
    request: Request,
    complete_use_case: FromDishka[CompleteFederatedLoginUseCase],
    session_manager: FromDishka[SessionManager],
    settings: FromDishka[Settings],
    code: str | None = None,
    state: str | None = None,
    error: str | None = None,
) -> RedirectResponse:
    """Google redirects here after consent.

    On success the session cookie is set and the browser is sent to the
    return URL from the state cookie. Every failure lands on the login page
    with an ``error`` code.

    Sets cookie: topten_session
    """
    oauth_state = session_manager.read_oauth_state(request.cookies)

    try:
        result = await complete_use_case.execute(
            CompleteFederatedLoginRequest(
                code=code,
                state=state,
                error=error,
                expected_state=oauth_state.state if oauth_state else None,
            )
        )
    except FederatedLoginError as e:
        logger.warning(f"Google callback refused: {e.code}")
        redirect_response = login_error_redirect(settings, e.code)
        session_manager.clear_oauth_state(redirect_response)
        return redirect_response
    except ValidationError as e:
        logger.warning(f"Google identity incomplete: {e.message}")
        redirect_response = login_error_redirect(settings, "oauth_missing_info")
        session_manager.clear_oauth_state(redirect_response)
        return redirect_response
    except ProviderError as e:
        logger.error(f"Google OAuth error during callback: {str(e)}")
        redirect_response = login_error_redirect(settings, "oauth_failed")
        session_manager.clear_oauth_state(redirect_response)
        return redirect_response
    except StorageFailureError as e:
        logger.error(f"Google callback could not resolve user: {e.detail}")
        redirect_response = login_error_redirect(settings, "oauth_error")
        session_manager.clear_oauth_state(redirect_response)
        return redirect_response
    except SQLAlchemyError as e:
        logger.exception(f"Database error during Google callback: {type(e).__name__}")
        redirect_response = login_error_redirect(settings, "oauth_error")
        session_manager.clear_oauth_state(redirect_response)
        return redirect_response

    return_url = oauth_state.return_url if oauth_state else DEFAULT_RETURN_URL
    redirect_url = f"{settings.api.frontend_url}{return_url}"
    redirect_response = RedirectResponse(
        url=redirect_url,
        status_code=status.HTTP_302_FOUND,
    )

    session = load_session(request, session_manager)
    session.log_in(result.session)
    session.save(redirect_response)
    session_manager.clear_oauth_state(redirect_response)

    logger.info(
        f"Google sign-in successful for user: {result.user.username}, "
        f"redirecting to: {redirect_url}"
    )
    return redirect_response


@router.post("/logout", response_model=MessageResponse)
async def logout(
    request: Request,
    response: Response,
    session_manager: FromDishka[SessionManager],
) -> MessageResponse:
    """Destroy the session."""
    session = load_session(request, session_manager)
    session.destroy(response)
    return MessageResponse(message="Logged out successfully")


@router.get("/me", response_model=GetCurrentUserResponse)
async def me(
    request: Request,
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    session_manager: FromDishka[SessionManager],
) -> GetCurrentUserResponse | JSONResponse:
    """The signed-in user.

    A session whose user has since been deleted is destroyed.
    """
    session = load_session(request, session_manager)
    user_id = require_user_id(session)

    try:
        return await get_current_user_use_case.execute(
            GetCurrentUserRequest(user_id=user_id)
        )
    except NotFoundError as e:
        logger.info(f"Session user {user_id} no longer exists, clearing session")
        not_found = error_response(status.HTTP_404_NOT_FOUND, e.message)
        session.destroy(not_found)
        return not_found


@router.post("/reset-password", response_model=RequestPasswordResetResponse)
async def request_password_reset(
    body: RequestPasswordResetRequest,
    request_password_reset_use_case: FromDishka[RequestPasswordResetUseCase],
) -> RequestPasswordResetResponse:
    """Issue a reset token; the answer is the same for unknown emails."""
    return await request_password_reset_use_case.execute(body)


@router.post("/reset-password/confirm", response_model=ConfirmPasswordResetResponse)
async def confirm_password_reset(
    body: ConfirmPasswordResetRequest,
    confirm_password_reset_use_case: FromDishka[ConfirmPasswordResetUseCase],
) -> ConfirmPasswordResetResponse:
    """Set a new password using a reset token."""
    return await confirm_password_reset_use_case.execute(body)

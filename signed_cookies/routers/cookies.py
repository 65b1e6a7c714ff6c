from fastapi import APIRouter, Depends, Path
import logging

from signed_cookies.dependencies import get_cookie_registry
from signed_cookies.models.common import SuccessResponse
from signed_cookies.models.cookie import CookieValueResponse, SetCookieRequest
from signed_cookies.services.signed_cookie import CookieRegistry
from signed_cookies.utils.errors import BaseAPIException, ErrorCode, ErrorMessages, ErrorResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/cookies", tags=["cookies"])

COOKIE_NAME_PATTERN = r"^[A-Za-z0-9_\-]+$"


@router.get(
    "/{name}",
    response_model=CookieValueResponse,
    summary="Read a signed cookie",
    description="Return the verified value of a signed cookie sent with this request",
    responses={400: {"model": ErrorResponse, "description": "The cookie is signed but cannot be decoded"}}
)
async def read_cookie(name: str = Path(..., pattern=COOKIE_NAME_PATTERN, description="Cookie name"), registry: CookieRegistry = Depends(get_cookie_registry)):
    """
    Read a signed cookie.

    Unsigned or tampered cookies are reported as not loaded; tampered ones are
    also deleted on the response.

    Raises:
        CookieReadError: If the cookie is signed but cannot be decoded
    """
    cookie = registry.instance(name)
    return CookieValueResponse(name=name, value=cookie.value(), loaded=cookie.loaded(), state=cookie.state)


@router.put(
    "/{name}",
    response_model=SuccessResponse,
    summary="Write a signed cookie"
)
async def write_cookie(
    body: SetCookieRequest,
    name: str = Path(..., pattern=COOKIE_NAME_PATTERN, description="Cookie name"),
    registry: CookieRegistry = Depends(get_cookie_registry)
):
    cookie = registry.instance(name)
    if not cookie.set(body.value, body.lifetime):
        raise BaseAPIException(ErrorMessages.COOKIE_WRITE_FAILED, ErrorCode.INTERNAL_ERROR)
    logger.info(f"Cookie '{name}' set")
    return SuccessResponse(message=f"Cookie '{name}' set")


@router.delete(
    "/{name}",
    response_model=SuccessResponse,
    summary="Delete a signed cookie"
)
async def delete_cookie(name: str = Path(..., pattern=COOKIE_NAME_PATTERN, description="Cookie name"), registry: CookieRegistry = Depends(get_cookie_registry)):
    cookie = registry.instance(name)
    if not cookie.delete():
        raise BaseAPIException(ErrorMessages.COOKIE_WRITE_FAILED, ErrorCode.INTERNAL_ERROR)
    logger.info(f"Cookie '{name}' deleted")
    return SuccessResponse(message=f"Cookie '{name}' deleted")

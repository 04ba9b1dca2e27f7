"""Registration endpoint.

POST /api/register
- 201: account created, returns a public summary of the user
- 400: validation failed, returns every field error
- 409: email already registered
- 500: anything else (details are logged, never returned)
"""

import json
import logging

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse

from api.dependencies import get_user_repo
from api.models import ErrorResponse, FieldErrorResponse, RegisterResponse, UserSummary
from domain.model.errors import DuplicateEmailError, ValidationError
from domain.model.registration import FieldError
from port.user_repository import UserRepository
from services.auth_service import create_account

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["auth"])


def _error(status_code: int, body: ErrorResponse) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=body.model_dump(exclude_none=True))


@router.post(
    "/register",
    status_code=status.HTTP_201_CREATED,
    response_model=RegisterResponse,
    responses={400: {"model": ErrorResponse}, 409: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def register(request: Request, repo: UserRepository = Depends(get_user_repo)):
    """Register a new customer account from a JSON body."""
    try:
        try:
            body = await request.json()
        except (json.JSONDecodeError, UnicodeDecodeError):
            raise ValidationError(errors=[FieldError(field="body", message="Body must be valid JSON")])

        user = create_account(repo, body)
    except ValidationError as e:
        logger.info("Registration rejected", extra={"fields": [err.field for err in e.errors]})
        return _error(status.HTTP_400_BAD_REQUEST, ErrorResponse(
            error="Validation failed",
            details=[FieldErrorResponse(field=err.field, message=err.message) for err in e.errors],
        ))
    except DuplicateEmailError:
        return _error(status.HTTP_409_CONFLICT, ErrorResponse(error="User with this email already exists"))
    except Exception:
        logger.exception("Registration failed")
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, ErrorResponse(error="Registration failed"))

    response = RegisterResponse(message="Registration successful", user=UserSummary.from_user(user))
    return JSONResponse(
        status_code=status.HTTP_201_CREATED,
        content=response.model_dump(by_alias=True, mode="json"),
    )

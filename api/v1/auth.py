"""
Authentication endpoints.

Handles phone certification, parent sign-up and login. Usecase errors raised
by the service are turned into responses by the handlers in api.main.
"""

from typing import Annotated

from fastapi import APIRouter, Path, status
from pydantic import BaseModel, Field, field_validator

from parent_auth.auth.password import BCRYPT_MAX_PASSWORD_BYTES
from parent_auth.models import ParentAccount, CERTIFY_CODE_MIN, CERTIFY_CODE_MAX

from ..deps import ServicesDep

router = APIRouter()

PHONE_NUMBER_PATTERN = r"^01[0-9]{8,9}$"

PhoneNumber = Annotated[str, Path(pattern=PHONE_NUMBER_PATTERN, description="Phone number (e.g., 01012345678)")]


# Request/Response models

class CertifyPhoneRequest(BaseModel):
    """Phone certification request."""
    certify_code: int = Field(..., ge=CERTIFY_CODE_MIN, le=CERTIFY_CODE_MAX, description="6-digit code received by SMS")


class SignUpRequest(BaseModel):
    """Parent sign-up request."""
    id: str = Field(..., min_length=4, max_length=20, description="Login ID")
    pw: str = Field(..., min_length=6, max_length=72, description="Password (6-72 chars)")
    name: str = Field(..., min_length=1, max_length=20, description="Display name")
    phone_number: str = Field(..., pattern=PHONE_NUMBER_PATTERN, description="Certified phone number")

    @field_validator("pw")
    @classmethod
    def pw_fits_bcrypt(cls, v: str) -> str:
        if len(v.encode("utf-8")) > BCRYPT_MAX_PASSWORD_BYTES:
            raise ValueError(f"pw must be at most {BCRYPT_MAX_PASSWORD_BYTES} bytes")
        return v


class LoginRequest(BaseModel):
    """Parent login request."""
    id: str = Field(..., description="Login ID")
    pw: str = Field(..., description="Password")


class DefaultResponse(BaseModel):
    """Status, code and message returned by every endpoint."""
    status: int
    code: int = 0
    message: str


class SignUpResponse(DefaultResponse):
    """Sign-up response with the new parent's uuid."""
    uuid: str


class LoginResponse(DefaultResponse):
    """Login response with uuid and access token."""
    uuid: str
    access_token: str


# Endpoints

@router.post("/phones/phone-number/{phone_number}/certify-code", response_model=DefaultResponse)
def send_certify_code_to_phone(phone_number: PhoneNumber, services: ServicesDep):
    """
    Send a certify code to a phone number by SMS.
    """
    services.auth.send_certify_code_to_phone(phone_number)
    return DefaultResponse(status=status.HTTP_200_OK, message="succeed to send certify code to phone")


@router.post("/phones/phone-number/{phone_number}/certification", response_model=DefaultResponse)
def certify_phone_with_code(phone_number: PhoneNumber, request: CertifyPhoneRequest, services: ServicesDep):
    """
    Certify a phone number with the code it received.
    """
    services.auth.certify_phone_with_code(phone_number, request.certify_code)
    return DefaultResponse(status=status.HTTP_200_OK, message="succeed to certify phone with code")


@router.post("/parents", response_model=SignUpResponse, status_code=status.HTTP_201_CREATED)
def sign_up_parent(request: SignUpRequest, services: ServicesDep):
    """
    Create a parent account on a certified phone number.
    """
    account = ParentAccount(login_id=request.id, password=request.pw, name=request.name)
    stored = services.auth.sign_up_parent(account, request.phone_number)

    return SignUpResponse(
        status=status.HTTP_201_CREATED,
        message="succeed to sign up new parent",
        uuid=stored.uuid
    )


@router.post("/login/parent", response_model=LoginResponse)
def login_parent_auth(request: LoginRequest, services: ServicesDep):
    """
    Log in with parent ID and password.

    Returns the parent uuid and an access token valid for 24 hours.
    """
    uuid, token = services.auth.login_parent_auth(request.id, request.pw)

    return LoginResponse(
        status=status.HTTP_200_OK,
        message="succeed to login parent auth",
        uuid=uuid,
        access_token=token
    )

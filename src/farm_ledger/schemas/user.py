"""User and authentication Pydantic schemas."""

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from .validators import NonEmptyString, SanitizedText, StrongPassword, Username


class SignupRequest(BaseModel):
    """Schema for self-service account creation."""

    username: Username = Field(..., description="Unique login name (at least 3 characters)")
    password: StrongPassword = Field(..., description="Password satisfying the complexity policy")
    email: EmailStr | None = Field(None, description="Optional contact email")
    display_name: SanitizedText | None = Field(
        None,
        alias="displayName",
        description="Optional display name; defaults to the username",
    )

    model_config = ConfigDict(populate_by_name=True)


class LoginRequest(BaseModel):
    """Schema for password login submissions."""

    username: SanitizedText = Field(..., description="Login name")
    password: NonEmptyString = Field(..., description="Plain-text password")


class AuthResponse(BaseModel):
    """Identity and bearer token returned after signup."""

    id: int
    username: str
    role: str
    token: str = Field(..., description="JWT access token valid for 24 hours")


class LoginResponse(AuthResponse):
    """Identity and bearer token returned after login."""

    model_config = ConfigDict(populate_by_name=True)

    two_fa: bool = Field(
        ...,
        alias="twoFA",
        description="True when the account has TOTP configured",
    )


class TwoFactorSetupRequest(BaseModel):
    username: str = Field(..., description="Account to provision a TOTP secret for")


class TwoFactorSetupResponse(BaseModel):
    """Provisioning material for an authenticator app."""

    otpauth_url: str = Field(..., description="otpauth:// provisioning URI")
    qr: str = Field(..., description="QR code of the provisioning URI as a data URL")
    secret: str = Field(..., description="Base32 TOTP secret")


class TwoFactorVerifyRequest(BaseModel):
    username: str
    token: str = Field(..., description="Six-digit TOTP code")


class TwoFactorVerifyResponse(BaseModel):
    verified: bool


class LoginActivityEntry(BaseModel):
    """A single login attempt as recorded in memory."""

    username: str
    status: str = Field(..., description="'success' or 'fail'")
    time: str = Field(..., description="ISO-8601 UTC timestamp")

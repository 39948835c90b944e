"""TOTP provisioning and verification."""

from __future__ import annotations

import base64
import io
from dataclasses import dataclass
from datetime import datetime

import pyotp
import qrcode
import qrcode.image.svg

from farm_ledger.core.settings import settings


@dataclass(frozen=True)
class TwoFactorProvisioning:
    """Material an authenticator app needs to enrol an account."""

    secret: str
    otpauth_url: str
    qr_data_url: str


def render_qr_data_url(payload: str) -> str:
    """Render ``payload`` as an SVG QR code and return it as a data URL."""
    image = qrcode.make(payload, image_factory=qrcode.image.svg.SvgPathImage)
    buffer = io.BytesIO()
    image.save(buffer)
    encoded = base64.b64encode(buffer.getvalue()).decode("ascii")
    return f"data:image/svg+xml;base64,{encoded}"


class TwoFactorService:
    """Issue TOTP secrets and check submitted codes."""

    def __init__(self, issuer: str | None = None, valid_window: int | None = None) -> None:
        self.issuer = issuer or settings.totp_issuer
        self.valid_window = settings.totp_valid_window if valid_window is None else valid_window

    def provision(self, username: str) -> TwoFactorProvisioning:
        """Generate a fresh base32 secret and its provisioning URI for ``username``."""
        secret = pyotp.random_base32()
        otpauth_url = pyotp.TOTP(secret).provisioning_uri(name=username, issuer_name=self.issuer)
        return TwoFactorProvisioning(
            secret=secret,
            otpauth_url=otpauth_url,
            qr_data_url=render_qr_data_url(otpauth_url),
        )

    def verify(self, secret: str, code: str, for_time: datetime | None = None) -> bool:
        """Return True when ``code`` is the current TOTP for ``secret``."""
        code = code.strip()
        if not code.isdigit():
            return False
        return pyotp.TOTP(secret).verify(code, for_time=for_time, valid_window=self.valid_window)


def get_two_factor_service() -> TwoFactorService:
    """Return a two-factor service instance."""
    return TwoFactorService()

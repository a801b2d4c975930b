"""
Disposition

Decision of the access gate for a single request.
"""

from typing import Optional

from pydantic import BaseModel

from .enums import DispositionKind


class Disposition(BaseModel):
    """
    Gate outcome.

    ``location`` is set for every redirect. ``sign_out`` is only true for a
    forced sign-out, where the session has already been revoked.
    """

    kind: DispositionKind
    location: Optional[str] = None
    sign_out: bool = False

    @property
    def allowed(self) -> bool:
        return self.kind == DispositionKind.allow

    @classmethod
    def allow(cls) -> "Disposition":
        return cls(kind=DispositionKind.allow)

    @classmethod
    def to_login(cls, login_path: str) -> "Disposition":
        return cls(kind=DispositionKind.redirect_login, location=login_path)

    @classmethod
    def to_dashboard(cls, members_path: str) -> "Disposition":
        return cls(kind=DispositionKind.redirect_dashboard, location=members_path)

    @classmethod
    def forced_sign_out(cls, login_path: str) -> "Disposition":
        return cls(
            kind=DispositionKind.forced_sign_out,
            location=f"{login_path}?blocked=true",
            sign_out=True,
        )

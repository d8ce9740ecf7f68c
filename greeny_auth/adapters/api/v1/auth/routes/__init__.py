from __future__ import annotations

"""Subpackage aggregating individual auth route modules."""

__all__ = [
    "sign_up",
    "sign_in",
    "agreement",
    "reissue",
    "token_status",
    "auto_login",
    "sign_out",
]

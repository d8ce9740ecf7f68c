from .member import create_fake_email, create_fake_sign_up
from .token import create_expired_pair, create_fake_principal, create_foreign_pair

__all__ = [
    "create_expired_pair",
    "create_fake_email",
    "create_fake_principal",
    "create_fake_sign_up",
    "create_foreign_pair",
]

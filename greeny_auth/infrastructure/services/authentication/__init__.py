from .password_hasher import BcryptPasswordHasher
from .token_signer import JwtTokenSigner

__all__ = ["BcryptPasswordHasher", "JwtTokenSigner"]

from .shared_password import Authenticator, SharedPasswordAuthenticator

__all__ = [
    "Authenticator",
    "SharedPasswordAuthenticator",
]

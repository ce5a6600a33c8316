# app/adapters/outbound/security/auth_user_manager.py (async version)

from passlib.context import CryptContext


class UserAuthManager:
    """
    Password hashing for accounts.
    """

    crypt_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

    @classmethod
    async def hash_password(cls, password: str) -> str:
        """Return the hash of a plain text password."""
        return cls.crypt_context.hash(password)

    @classmethod
    async def verify_password(cls, plain_password: str, hashed_password: str) -> bool:
        """Verify if the plain text password matches the stored hash."""
        return cls.crypt_context.verify(plain_password, hashed_password)

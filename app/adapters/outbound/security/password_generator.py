# app/adapters/outbound/security/password_generator.py

import secrets
import string

from app.application.ports.outbound import IPasswordGenerator


class AlphanumericPasswordGenerator(IPasswordGenerator):
    """
    Generates the initial password of a provisioned account.

    The result is a convenience default handed to the owner, not a
    security control: no strength rule is applied.
    """

    alphabet = string.ascii_letters + string.digits

    def generate(self, length: int) -> str:
        if length <= 0:
            raise ValueError("length must be positive")
        return "".join(secrets.choice(self.alphabet) for _ in range(length))


password_generator = AlphanumericPasswordGenerator()

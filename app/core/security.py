import hmac
from dataclasses import dataclass

from pydantic import SecretStr

from app.core.config import UNSET_SECRET


@dataclass(frozen=True)
class AdminAuthorizer:
    """
    Decides whether a presented credential is the administrator secret.

    An unconfigured secret (empty or the ``IN_ENV`` placeholder) matches
    nothing, so admin endpoints stay closed until ADMIN_PASSWORD is set.
    """

    secret: SecretStr

    @property
    def configured(self) -> bool:
        value = self.secret.get_secret_value()
        return bool(value) and value != UNSET_SECRET

    def __call__(self, credential: str | None) -> bool:
        if not credential or not self.configured:
            return False
        # constant-time to avoid leaking the secret through timing
        return hmac.compare_digest(
            credential.strip().encode("utf-8"),
            self.secret.get_secret_value().encode("utf-8"),
        )

from dataclasses import dataclass

from domain.model.user import Role


@dataclass(frozen=True)
class Session:
    """Identity carried by a signed session token.

    Never persisted; rebuilt from the token on every request.
    """
    id: str
    email: str
    name: str
    role: Role

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN

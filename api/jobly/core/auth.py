from dataclasses import dataclass

ROLE_SCOPES: dict[str, set[str]] = {
    "user": {"catalog:read"},
    "admin": {"catalog:read", "catalog:write"},
}


@dataclass(slots=True)
class Principal:
    subject: str
    scopes: set[str]
    role: str = "user"

    def require_scopes(self, required: set[str]) -> None:
        missing = required - self.scopes
        if missing:
            raise PermissionError(f"missing required scopes: {sorted(missing)}")


def scopes_for_role(role: str) -> set[str]:
    return set(ROLE_SCOPES.get(role, ROLE_SCOPES["user"]))

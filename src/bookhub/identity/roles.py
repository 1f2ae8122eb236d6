"""Role policies applied at registration time.

``email_role_policy`` reproduces the storefront's demo behaviour of granting
the admin role to any email containing "admin". It is a convenience, not a
security boundary; deployments that need one select ``user_role_policy`` and
grant admin explicitly through ``IdentityStore.set_role``.
"""

from collections.abc import Callable

from bookhub.identity.user import Role

RolePolicy = Callable[[str], Role]


def email_role_policy(email: str) -> Role:
    return Role.ADMIN if "admin" in email else Role.USER


def user_role_policy(email: str) -> Role:  # noqa: ARG001
    return Role.USER


_POLICIES = {
    "email": email_role_policy,
    "user": user_role_policy,
}


def role_policy_for(name: str) -> RolePolicy:
    try:
        return _POLICIES[name]
    except KeyError as exc:
        raise ValueError(f"Unknown role policy {name!r}") from exc

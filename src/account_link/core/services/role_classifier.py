from collections.abc import Collection

from src.account_link.core.identity import AccountRole, SsoIdentity

DEFAULT_ADMIN_ROLES = ("Admin", "Super Admin", "SuperAdmin")


def classify(
    identity: SsoIdentity, admin_roles: Collection[str] = DEFAULT_ADMIN_ROLES
) -> AccountRole:
    """Decide whether the identity administers the site.

    Owners of the connecting application are always admins. Otherwise the
    organizations are walked in order and each one overwrites the result, so
    only the last organization counts: ``[Admin, Member]`` is a plain user.
    Callers rely on this ordering; do not turn it into "any admin wins".
    """
    if identity.is_owning_app_admin:
        return AccountRole.ADMIN

    role = AccountRole.USER
    for membership in identity.organizations:
        if membership.role in admin_roles:
            role = AccountRole.ADMIN
        else:
            role = AccountRole.USER
    return role


def is_admin(
    identity: SsoIdentity, admin_roles: Collection[str] = DEFAULT_ADMIN_ROLES
) -> bool:
    return classify(identity, admin_roles) is AccountRole.ADMIN

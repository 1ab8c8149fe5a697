"""Roles, permissions and capability checks.

Permissions are named ``<resource>.<action>`` (``stat_category_item.update``)
and reach users only through roles. ``seed_rbac`` is idempotent: it creates
missing permissions, then sets each seeded role's permissions to exactly
the mapping below.
"""

import logging

from sqlalchemy.orm import Session

from backoffice.exceptions import NotFound, PermissionDenied
from backoffice.models.enums import Action, Resource, permission_name
from backoffice.models.role import Permission, Role
from backoffice.models.user import User

logger = logging.getLogger(__name__)

RESOURCE_LABELS = {
    Resource.STAT_CATEGORY: "Stat Categories",
    Resource.STAT_CATEGORY_ITEM: "Stat Category Items",
}

ACTION_LABELS = {
    Action.VIEW_ANY: "List",
    Action.VIEW: "View",
    Action.CREATE: "Create",
    Action.UPDATE: "Edit",
    Action.DELETE: "Delete",
}

ADMIN_ROLE = "admin"
VIEWER_ROLE = "viewer"


def all_permission_names() -> list[str]:
    """Every permission the application checks."""
    return [permission_name(resource, action) for resource in Resource for action in Action]


# role name -> (description, permission names)
ROLE_PERMISSIONS: dict[str, tuple[str, list[str]]] = {
    ADMIN_ROLE: ("Full access to stat categories and items.", all_permission_names()),
    VIEWER_ROLE: (
        "Read-only access to stat categories and items.",
        [
            permission_name(resource, action)
            for resource in Resource
            for action in Action
            if action.is_read_only()
        ],
    ),
}


def sync_permissions(db: Session) -> dict[str, Permission]:
    """Create any missing permission rows and return all of them by name."""
    existing = {p.name: p for p in db.query(Permission).all()}
    for resource in Resource:
        for action in Action:
            name = permission_name(resource, action)
            if name not in existing:
                permission = Permission(
                    name=name,
                    label=f"{ACTION_LABELS[action]} {RESOURCE_LABELS[resource]}",
                )
                db.add(permission)
                existing[name] = permission
                logger.info(f"Created permission {name}")
    db.flush()
    return existing


def seed_rbac(db: Session) -> dict[str, Role]:
    """Create the default roles and link them to their permissions."""
    permissions = sync_permissions(db)
    roles = {}
    for role_name, (description, names) in ROLE_PERMISSIONS.items():
        role = db.query(Role).filter(Role.name == role_name).first()
        if role is None:
            role = Role(name=role_name)
            db.add(role)
            logger.info(f"Created role {role_name}")
        role.description = description
        role.permissions = [permissions[name] for name in names]
        roles[role_name] = role
    db.commit()
    return roles


def assign_role(db: Session, user: User, role_name: str) -> Role:
    """Grant a role to a user."""
    role = db.query(Role).filter(Role.name == role_name).first()
    if role is None:
        raise NotFound(f"Role '{role_name}' not found")
    if role not in user.roles:
        user.roles.append(role)
        db.commit()
        logger.info(f"Assigned role {role_name} to user {user.id}")
    return role


def can(user: User, resource: Resource, action: Action) -> bool:
    """Check whether a user may perform an action on a resource."""
    return user.has_permission(permission_name(resource, action))


def authorize(user: User, resource: Resource, action: Action) -> None:
    """Raise ``PermissionDenied`` unless the user holds the capability."""
    if not can(user, resource, action):
        logger.warning(f"User {user.id} denied {permission_name(resource, action)}")
        raise PermissionDenied()

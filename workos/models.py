"""Typed domain objects for webhook events and action contexts.

Every ``deserialize_*`` function is a permissive field mapping from the
snake_case API payload: missing fields become ``None``, unknown fields are
dropped, and free-form mappings (``raw_attributes``, ``metadata``,
``previous_attributes``...) are kept as-is. ``to_dict()`` renders the
camelCase shape used across WorkOS SDKs.
"""
from __future__ import annotations
from dataclasses import dataclass, fields, is_dataclass
from typing import Any, Dict, List, Optional

from workos.core.serializers import camelize


def _to_camel_dict(value: Any) -> Any:
    if is_dataclass(value):
        return {camelize(f.name): _to_camel_dict(getattr(value, f.name)) for f in fields(value)}
    if isinstance(value, list):
        return [_to_camel_dict(item) for item in value]
    return value


class _Model:
    def to_dict(self) -> Dict[str, Any]:
        return _to_camel_dict(self)


# ─────────────────────────────────────────────────────────────────────────────
# Directory Sync
# ─────────────────────────────────────────────────────────────────────────────
@dataclass
class DirectoryUser(_Model):
    object: Optional[str]
    id: Optional[str]
    directory_id: Optional[str]
    organization_id: Optional[str]
    raw_attributes: Optional[Dict[str, Any]]
    custom_attributes: Optional[Dict[str, Any]]
    idp_id: Optional[str]
    first_name: Optional[str]
    email: Optional[str]
    emails: Optional[List[Dict[str, Any]]]
    username: Optional[str]
    last_name: Optional[str]
    job_title: Optional[str]
    state: Optional[str]
    role: Optional[Dict[str, Any]]
    created_at: Optional[str]
    updated_at: Optional[str]


@dataclass
class UpdatedDirectoryUser(DirectoryUser):
    previous_attributes: Optional[Dict[str, Any]] = None


@dataclass
class DirectoryGroup(_Model):
    object: Optional[str]
    id: Optional[str]
    idp_id: Optional[str]
    directory_id: Optional[str]
    organization_id: Optional[str]
    name: Optional[str]
    raw_attributes: Optional[Dict[str, Any]]
    created_at: Optional[str]
    updated_at: Optional[str]


@dataclass
class UpdatedDirectoryGroup(DirectoryGroup):
    previous_attributes: Optional[Dict[str, Any]] = None


@dataclass
class DirectoryUserGroupMembership(_Model):
    directory_id: Optional[str]
    user: DirectoryUser
    group: DirectoryGroup


@dataclass
class Directory(_Model):
    object: Optional[str]
    id: Optional[str]
    domain: Optional[str]
    name: Optional[str]
    organization_id: Optional[str]
    state: Optional[str]
    type: Optional[str]
    created_at: Optional[str]
    updated_at: Optional[str]


def deserialize_directory_user(data: Dict[str, Any]) -> DirectoryUser:
    return DirectoryUser(**_directory_user_fields(data))


def deserialize_updated_directory_user(data: Dict[str, Any]) -> UpdatedDirectoryUser:
    return UpdatedDirectoryUser(
        **_directory_user_fields(data, default_object="directory_user"),
        previous_attributes=data.get("previous_attributes"),
    )


def _directory_user_fields(data: Dict[str, Any], default_object: Optional[str] = None) -> Dict[str, Any]:
    return dict(
        object=data.get("object", default_object),
        id=data.get("id"),
        directory_id=data.get("directory_id"),
        organization_id=data.get("organization_id"),
        raw_attributes=data.get("raw_attributes"),
        custom_attributes=data.get("custom_attributes"),
        idp_id=data.get("idp_id"),
        first_name=data.get("first_name"),
        email=data.get("email"),
        emails=data.get("emails"),
        username=data.get("username"),
        last_name=data.get("last_name"),
        job_title=data.get("job_title"),
        state=data.get("state"),
        role=data.get("role"),
        created_at=data.get("created_at"),
        updated_at=data.get("updated_at"),
    )


def deserialize_directory_group(data: Dict[str, Any]) -> DirectoryGroup:
    return DirectoryGroup(**_directory_group_fields(data))


def deserialize_updated_directory_group(data: Dict[str, Any]) -> UpdatedDirectoryGroup:
    return UpdatedDirectoryGroup(
        **_directory_group_fields(data),
        previous_attributes=data.get("previous_attributes"),
    )


def _directory_group_fields(data: Dict[str, Any]) -> Dict[str, Any]:
    return dict(
        object=data.get("object"),
        id=data.get("id"),
        idp_id=data.get("idp_id"),
        directory_id=data.get("directory_id"),
        organization_id=data.get("organization_id"),
        name=data.get("name"),
        raw_attributes=data.get("raw_attributes"),
        created_at=data.get("created_at"),
        updated_at=data.get("updated_at"),
    )


def deserialize_directory_user_group_membership(data: Dict[str, Any]) -> DirectoryUserGroupMembership:
    return DirectoryUserGroupMembership(
        directory_id=data.get("directory_id"),
        user=deserialize_directory_user(data.get("user") or {}),
        group=deserialize_directory_group(data.get("group") or {}),
    )


def deserialize_directory(data: Dict[str, Any]) -> Directory:
    return Directory(
        object=data.get("object"),
        id=data.get("id"),
        domain=data.get("domain"),
        name=data.get("name"),
        organization_id=data.get("organization_id"),
        state=data.get("state"),
        type=data.get("type"),
        created_at=data.get("created_at"),
        updated_at=data.get("updated_at"),
    )


# ─────────────────────────────────────────────────────────────────────────────
# SSO connections, organizations, users
# ─────────────────────────────────────────────────────────────────────────────
@dataclass
class Connection(_Model):
    object: Optional[str]
    id: Optional[str]
    organization_id: Optional[str]
    connection_type: Optional[str]
    name: Optional[str]
    state: Optional[str]
    domains: Optional[List[Dict[str, Any]]]
    created_at: Optional[str]
    updated_at: Optional[str]


@dataclass
class Organization(_Model):
    object: Optional[str]
    id: Optional[str]
    name: Optional[str]
    allow_profiles_outside_organization: Optional[bool]
    domains: Optional[List[Dict[str, Any]]]
    created_at: Optional[str]
    updated_at: Optional[str]
    external_id: Optional[str]
    metadata: Optional[Dict[str, str]]


@dataclass
class OrganizationMembership(_Model):
    object: Optional[str]
    id: Optional[str]
    user_id: Optional[str]
    organization_id: Optional[str]
    role: Optional[Dict[str, Any]]
    status: Optional[str]
    created_at: Optional[str]
    updated_at: Optional[str]


@dataclass
class User(_Model):
    object: Optional[str]
    id: Optional[str]
    email: Optional[str]
    first_name: Optional[str]
    last_name: Optional[str]
    email_verified: Optional[bool]
    profile_picture_url: Optional[str]
    created_at: Optional[str]
    updated_at: Optional[str]
    external_id: Optional[str]
    metadata: Optional[Dict[str, str]]


def deserialize_connection(data: Dict[str, Any]) -> Connection:
    return Connection(
        object=data.get("object"),
        id=data.get("id"),
        organization_id=data.get("organization_id"),
        connection_type=data.get("connection_type"),
        name=data.get("name"),
        state=data.get("state"),
        domains=data.get("domains"),
        created_at=data.get("created_at"),
        updated_at=data.get("updated_at"),
    )


def deserialize_organization(data: Dict[str, Any]) -> Organization:
    return Organization(
        object=data.get("object"),
        id=data.get("id"),
        name=data.get("name"),
        allow_profiles_outside_organization=data.get("allow_profiles_outside_organization"),
        domains=data.get("domains"),
        created_at=data.get("created_at"),
        updated_at=data.get("updated_at"),
        external_id=data.get("external_id"),
        metadata=data.get("metadata"),
    )


def deserialize_organization_membership(data: Dict[str, Any]) -> OrganizationMembership:
    return OrganizationMembership(
        object=data.get("object"),
        id=data.get("id"),
        user_id=data.get("user_id"),
        organization_id=data.get("organization_id"),
        role=data.get("role"),
        status=data.get("status"),
        created_at=data.get("created_at"),
        updated_at=data.get("updated_at"),
    )


def deserialize_user(data: Dict[str, Any]) -> User:
    return User(
        object=data.get("object"),
        id=data.get("id"),
        email=data.get("email"),
        first_name=data.get("first_name"),
        last_name=data.get("last_name"),
        email_verified=data.get("email_verified"),
        profile_picture_url=data.get("profile_picture_url"),
        created_at=data.get("created_at"),
        updated_at=data.get("updated_at"),
        external_id=data.get("external_id"),
        metadata=data.get("metadata"),
    )


# ─────────────────────────────────────────────────────────────────────────────
# Webhook events
# ─────────────────────────────────────────────────────────────────────────────
@dataclass
class Event(_Model):
    id: Optional[str]
    event: Optional[str]
    data: Any
    created_at: Optional[str]


def _deserialize_event_data(event: str, data: Any) -> Any:
    """Pick the data mapper for an event name; unknown events keep raw data."""
    if not isinstance(data, dict):
        return data
    if event == "dsync.user.updated":
        return deserialize_updated_directory_user(data)
    if event.startswith("dsync.user."):
        return deserialize_directory_user(data)
    if event in ("dsync.group.user_added", "dsync.group.user_removed"):
        return deserialize_directory_user_group_membership(data)
    if event == "dsync.group.updated":
        return deserialize_updated_directory_group(data)
    if event.startswith("dsync.group."):
        return deserialize_directory_group(data)
    if event in ("dsync.activated", "dsync.deleted"):
        return deserialize_directory(data)
    if event.startswith("connection."):
        return deserialize_connection(data)
    if event.startswith("organization_membership."):
        return deserialize_organization_membership(data)
    if event.startswith("organization."):
        return deserialize_organization(data)
    if event.startswith("user."):
        return deserialize_user(data)
    return data


def deserialize_event(payload: Dict[str, Any]) -> Event:
    event = payload.get("event") or ""
    return Event(
        id=payload.get("id"),
        event=payload.get("event"),
        data=_deserialize_event_data(event, payload.get("data")),
        created_at=payload.get("created_at"),
    )


# ─────────────────────────────────────────────────────────────────────────────
# Actions
# ─────────────────────────────────────────────────────────────────────────────
@dataclass
class UserData(_Model):
    object: Optional[str]
    email: Optional[str]
    first_name: Optional[str]
    last_name: Optional[str]


@dataclass
class Invitation(_Model):
    object: Optional[str]
    id: Optional[str]
    email: Optional[str]
    state: Optional[str]
    accepted_at: Optional[str]
    revoked_at: Optional[str]
    expires_at: Optional[str]
    organization_id: Optional[str]
    inviter_user_id: Optional[str]
    created_at: Optional[str]
    updated_at: Optional[str]


@dataclass
class AuthenticationActionContext(_Model):
    id: Optional[str]
    object: str
    user: Optional[User]
    organization: Optional[Organization]
    organization_membership: Optional[OrganizationMembership]
    ip_address: Optional[str]
    user_agent: Optional[str]
    device_fingerprint: Optional[str]
    issuer: Optional[str]


@dataclass
class UserRegistrationActionContext(_Model):
    id: Optional[str]
    object: str
    user_data: Optional[UserData]
    invitation: Optional[Invitation]
    ip_address: Optional[str]
    user_agent: Optional[str]
    device_fingerprint: Optional[str]


@dataclass
class ActionResponse(_Model):
    """Signed verdict returned to the platform.

    ``payload`` stays a plain dict in wire form: it is exactly what was signed.
    """
    object: str
    payload: Dict[str, Any]
    signature: str


def _optional(mapper, value):
    return mapper(value) if value else None


def deserialize_invitation(data: Dict[str, Any]) -> Invitation:
    return Invitation(
        object=data.get("object"),
        id=data.get("id"),
        email=data.get("email"),
        state=data.get("state"),
        accepted_at=data.get("accepted_at"),
        revoked_at=data.get("revoked_at"),
        expires_at=data.get("expires_at"),
        organization_id=data.get("organization_id"),
        inviter_user_id=data.get("inviter_user_id"),
        created_at=data.get("created_at"),
        updated_at=data.get("updated_at"),
    )


def deserialize_user_data(data: Dict[str, Any]) -> UserData:
    return UserData(
        object=data.get("object"),
        email=data.get("email"),
        first_name=data.get("first_name"),
        last_name=data.get("last_name"),
    )


def deserialize_authentication_action_context(data: Dict[str, Any]) -> AuthenticationActionContext:
    return AuthenticationActionContext(
        id=data.get("id"),
        object="authentication_action_context",
        user=_optional(deserialize_user, data.get("user")),
        organization=_optional(deserialize_organization, data.get("organization")),
        organization_membership=_optional(deserialize_organization_membership, data.get("organization_membership")),
        ip_address=data.get("ip_address"),
        user_agent=data.get("user_agent"),
        device_fingerprint=data.get("device_fingerprint"),
        issuer=data.get("issuer"),
    )


def deserialize_user_registration_action_context(data: Dict[str, Any]) -> UserRegistrationActionContext:
    return UserRegistrationActionContext(
        id=data.get("id"),
        object="user_registration_action_context",
        user_data=_optional(deserialize_user_data, data.get("user_data")),
        invitation=_optional(deserialize_invitation, data.get("invitation")),
        ip_address=data.get("ip_address"),
        user_agent=data.get("user_agent"),
        device_fingerprint=data.get("device_fingerprint"),
    )

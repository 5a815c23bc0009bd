"""Wire models for the directory graph API (api-version 1.6)."""

from __future__ import annotations

from typing import Self
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from ....domain.entities import Application, PasswordCredential, ServicePrincipal
from ....domain.value_objects import RequiredResourceAccess, ResourceAccess, ResourceAccessType


class WireModel(BaseModel):
    """Base for directory payloads: camelCase aliases, unknown fields ignored."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class ResourceAccessModel(WireModel):
    """ResourceAccess complex type."""

    id: UUID
    type: ResourceAccessType

    @classmethod
    def from_entity(cls, entity: ResourceAccess) -> Self:
        return cls(id=entity.id, type=entity.type)

    def to_entity(self) -> ResourceAccess:
        return ResourceAccess(id=self.id, type=self.type)


class RequiredResourceAccessModel(WireModel):
    """RequiredResourceAccess complex type."""

    resource_app_id: str = Field(alias="resourceAppId")
    resource_access: list[ResourceAccessModel] | None = Field(default=None, alias="resourceAccess")

    @classmethod
    def from_entity(cls, entity: RequiredResourceAccess) -> Self:
        return cls(
            resource_app_id=entity.resource_app_id,
            resource_access=[ResourceAccessModel.from_entity(a) for a in entity.resource_access],
        )

    def to_entity(self) -> RequiredResourceAccess:
        return RequiredResourceAccess(
            resource_app_id=self.resource_app_id,
            resource_access=tuple(a.to_entity() for a in self.resource_access or []),
        )


class PasswordCredentialModel(WireModel):
    """PasswordCredential complex type."""

    key_id: UUID = Field(alias="keyId")
    value: str | None = None
    start_date: str | None = Field(default=None, alias="startDate")
    end_date: str | None = Field(default=None, alias="endDate")

    @classmethod
    def from_entity(cls, entity: PasswordCredential) -> Self:
        return cls(
            key_id=entity.key_id,
            value=entity.value,
            start_date=entity.start,
            end_date=entity.end,
        )

    def to_entity(self) -> PasswordCredential:
        return PasswordCredential(
            value=self.value,
            key_id=self.key_id,
            start=self.start_date,
            end=self.end_date,
        )


class ApplicationModel(WireModel):
    """Application entity."""

    object_id: str | None = Field(default=None, alias="objectId")
    app_id: str | None = Field(default=None, alias="appId")
    available_to_other_tenants: bool | None = Field(default=None, alias="availableToOtherTenants")
    display_name: str = Field(alias="displayName")
    group_membership_claims: str | None = Field(default=None, alias="groupMembershipClaims")
    homepage: str | None = None
    identifier_uris: list[str] | None = Field(default=None, alias="identifierUris")
    password_credentials: list[PasswordCredentialModel] | None = Field(
        default=None, alias="passwordCredentials"
    )
    public_client: bool | None = Field(default=None, alias="publicClient")
    reply_urls: list[str] | None = Field(default=None, alias="replyUrls")
    required_resource_access: list[RequiredResourceAccessModel] | None = Field(
        default=None, alias="requiredResourceAccess"
    )

    @classmethod
    def from_entity(cls, entity: Application) -> Self:
        return cls(
            object_id=entity.object_id,
            app_id=entity.app_id,
            available_to_other_tenants=entity.available_to_other_tenants,
            display_name=entity.display_name,
            group_membership_claims=entity.group_membership_claims,
            homepage=entity.homepage,
            identifier_uris=list(entity.identifier_uris),
            password_credentials=[PasswordCredentialModel.from_entity(c) for c in entity.password_credentials],
            public_client=entity.public_client,
            reply_urls=list(entity.reply_urls),
            required_resource_access=[
                RequiredResourceAccessModel.from_entity(r) for r in entity.required_resource_access
            ],
        )

    def to_entity(self) -> Application:
        return Application(
            display_name=self.display_name,
            homepage=self.homepage,
            identifier_uris=list(self.identifier_uris or []),
            reply_urls=list(self.reply_urls or []),
            group_membership_claims=self.group_membership_claims,
            password_credentials=[c.to_entity() for c in self.password_credentials or []],
            required_resource_access=[r.to_entity() for r in self.required_resource_access or []],
            object_id=self.object_id,
            app_id=self.app_id,
            available_to_other_tenants=self.available_to_other_tenants,
            public_client=self.public_client,
        )


class ServicePrincipalModel(WireModel):
    """ServicePrincipal entity."""

    account_enabled: bool = Field(alias="accountEnabled")
    app_id: str = Field(alias="appId")
    display_name: str = Field(alias="displayName")
    tags: list[str] | None = None

    @classmethod
    def from_entity(cls, entity: ServicePrincipal) -> Self:
        return cls(
            account_enabled=entity.account_enabled,
            app_id=entity.app_id,
            display_name=entity.display_name,
            tags=list(entity.tags),
        )

    def to_entity(self) -> ServicePrincipal:
        return ServicePrincipal(
            app_id=self.app_id,
            display_name=self.display_name,
            account_enabled=self.account_enabled,
            tags=list(self.tags or []),
        )


class ODataErrorMessage(WireModel):
    """Localized error message."""

    lang: str | None = None
    value: str | None = None


class ODataError(WireModel):
    """Error code and message."""

    code: str | None = None
    message: ODataErrorMessage | None = None


class ErrorPayload(WireModel):
    """Body of a failed directory request."""

    error: ODataError | None = Field(default=None, alias="odata.error")

    @property
    def code(self) -> str | None:
        return self.error.code if self.error else None

    @property
    def message(self) -> str | None:
        if self.error is None or self.error.message is None:
            return None
        return self.error.message.value

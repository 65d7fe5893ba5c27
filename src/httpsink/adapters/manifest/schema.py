"""Pydantic models for HttpRequest manifests."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class ManifestBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True, frozen=True)


class ValueSelectorPayload(ManifestBaseModel):
    name: str = Field(min_length=1)
    namespace: str = Field(min_length=1)
    key: str = Field(min_length=1)


class NamedValuePayload(ManifestBaseModel):
    name: str = Field(min_length=1)
    secret_ref: ValueSelectorPayload | None = Field(default=None, alias="secretRef")
    config_map_ref: ValueSelectorPayload | None = Field(default=None, alias="configMapRef")
    value: str | None = None
    fmt: str | None = None


class HttpRequestParamsPayload(ManifestBaseModel):
    url: str = Field(min_length=1)
    method: str | None = None
    params: list[NamedValuePayload] = Field(default_factory=list["NamedValuePayload"])
    headers: list[NamedValuePayload] = Field(default_factory=list["NamedValuePayload"])
    write_response_to_config_map: ValueSelectorPayload = Field(alias="writeResponseToConfigMap")


class ProviderConfigRefPayload(ManifestBaseModel):
    name: str = Field(min_length=1)


class HttpRequestSpecPayload(ManifestBaseModel):
    for_provider: HttpRequestParamsPayload = Field(alias="forProvider")
    provider_config_ref: ProviderConfigRefPayload | None = Field(
        default=None, alias="providerConfigRef"
    )


class MetadataPayload(ManifestBaseModel):
    name: str = Field(min_length=1)


class HttpRequestManifest(ManifestBaseModel):
    api_version: str | None = Field(default=None, alias="apiVersion")
    kind: Literal["HttpRequest"] = "HttpRequest"
    metadata: MetadataPayload
    spec: HttpRequestSpecPayload

"""Pydantic models describing provider catalog documents.

A catalog document is a JSON object keyed by category::

    {
        "version": 3,
        "email": [
            {
                "name": "Fastmail",
                "domain": "fastmail.com",
                "rule": {"any": [{"kind": "mxSuffix", "suffix": "messagingengine.com"}]}
            }
        ]
    }

Missing categories are empty. Regex patterns are compiled while validating so
a broken pattern is reported when the catalog is loaded, not when it is used.
"""

from __future__ import annotations

from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from domainwatch.domain.detection import RuleEvaluationError, compile_pattern


class CatalogBaseModel(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)


class HeaderEqualsModel(CatalogBaseModel):
    kind: Literal["headerEquals"]
    name: str
    value: str


class HeaderIncludesModel(CatalogBaseModel):
    kind: Literal["headerIncludes"]
    name: str
    substr: str


class HeaderPresentModel(CatalogBaseModel):
    kind: Literal["headerPresent"]
    name: str


class _RegexModel(CatalogBaseModel):
    pattern: str
    flags: str | None = None

    @model_validator(mode="after")
    def _check_pattern(self) -> _RegexModel:
        try:
            compile_pattern(self.pattern, self.flags)
        except RuleEvaluationError as exc:
            raise ValueError(f"Invalid regex pattern {self.pattern!r}: {exc}") from exc
        return self


class MxSuffixModel(CatalogBaseModel):
    kind: Literal["mxSuffix"]
    suffix: str


class MxRegexModel(_RegexModel):
    kind: Literal["mxRegex"]


class NsSuffixModel(CatalogBaseModel):
    kind: Literal["nsSuffix"]
    suffix: str


class NsRegexModel(_RegexModel):
    kind: Literal["nsRegex"]


class IssuerEqualsModel(CatalogBaseModel):
    kind: Literal["issuerEquals"]
    value: str


class IssuerIncludesModel(CatalogBaseModel):
    kind: Literal["issuerIncludes"]
    substr: str


class RegistrarEqualsModel(CatalogBaseModel):
    kind: Literal["registrarEquals"]
    value: str


class RegistrarIncludesModel(CatalogBaseModel):
    kind: Literal["registrarIncludes"]
    substr: str


LeafModel = Annotated[
    HeaderEqualsModel
    | HeaderIncludesModel
    | HeaderPresentModel
    | MxSuffixModel
    | MxRegexModel
    | NsSuffixModel
    | NsRegexModel
    | IssuerEqualsModel
    | IssuerIncludesModel
    | RegistrarEqualsModel
    | RegistrarIncludesModel,
    Field(discriminator="kind"),
]


class AllOfModel(CatalogBaseModel):
    children: list[RuleModel] = Field(alias="all")


class AnyOfModel(CatalogBaseModel):
    children: list[RuleModel] = Field(alias="any")


class NotModel(CatalogBaseModel):
    child: RuleModel = Field(alias="not")


RuleModel = AllOfModel | AnyOfModel | NotModel | LeafModel


class ProviderEntryModel(CatalogBaseModel):
    name: str = Field(min_length=1)
    domain: Annotated[str, Field(min_length=1)] | None = None
    rule: RuleModel | None = None

    @field_validator("name")
    @classmethod
    def _reject_blank_name(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Provider name must not be blank")
        return value


class CatalogDocument(CatalogBaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)

    version: int = Field(default=0, ge=0)
    dns: list[ProviderEntryModel] = Field(default_factory=list["ProviderEntryModel"])
    email: list[ProviderEntryModel] = Field(default_factory=list["ProviderEntryModel"])
    hosting: list[ProviderEntryModel] = Field(default_factory=list["ProviderEntryModel"])
    registrar: list[ProviderEntryModel] = Field(default_factory=list["ProviderEntryModel"])
    ca: list[ProviderEntryModel] = Field(default_factory=list["ProviderEntryModel"])


AllOfModel.model_rebuild()
AnyOfModel.model_rebuild()
NotModel.model_rebuild()
ProviderEntryModel.model_rebuild()
CatalogDocument.model_rebuild()

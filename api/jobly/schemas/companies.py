from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from jobly.schemas.common import parse_filters

HANDLE_PATTERN = r"^[a-z0-9][a-z0-9-]*$"
LOGO_URL_PATTERN = r"^https?://\S+$"


class CompanyOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    handle: str
    name: str
    description: str | None = None
    num_employees: int | None = Field(default=None, alias="numEmployees")
    logo_url: str | None = Field(default=None, alias="logoUrl")


class CompanyJobOut(BaseModel):
    id: int
    title: str
    salary: int | None = None
    equity: str | None = None


class CompanyDetailOut(CompanyOut):
    jobs: list[CompanyJobOut] = Field(default_factory=list)


class CompanyResponse(BaseModel):
    company: CompanyOut


class CompanyDetailResponse(BaseModel):
    company: CompanyDetailOut


class CompanyListResponse(BaseModel):
    companies: list[CompanyOut] = Field(default_factory=list)


class CompanyDeletedResponse(BaseModel):
    deleted: str


class CompanyNewRequest(BaseModel):
    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    handle: str = Field(min_length=1, max_length=25, pattern=HANDLE_PATTERN)
    name: str = Field(min_length=1)
    description: str | None = None
    num_employees: int | None = Field(default=None, ge=0, alias="numEmployees")
    logo_url: str | None = Field(default=None, max_length=2048, pattern=LOGO_URL_PATTERN, alias="logoUrl")


class CompanyUpdateRequest(BaseModel):
    """Partial update; handle is immutable and therefore not accepted."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    name: str | None = Field(default=None, min_length=1)
    description: str | None = None
    num_employees: int | None = Field(default=None, ge=0, alias="numEmployees")
    logo_url: str | None = Field(default=None, max_length=2048, pattern=LOGO_URL_PATTERN, alias="logoUrl")

    @field_validator("name")
    @classmethod
    def reject_null_name(cls, value: str | None) -> str:
        if value is None:
            raise ValueError("name cannot be null")
        return value


class CompanySearchFilters(BaseModel):
    """Company search query.

    Unknown keys are rejected. ``name`` is a case-insensitive substring match;
    employee bounds are inclusive and may be zero.
    """

    model_config = ConfigDict(extra="forbid", frozen=True, populate_by_name=True)

    name: str | None = None
    min_employees: int | None = Field(default=None, ge=0, alias="minEmployees")
    max_employees: int | None = Field(default=None, ge=0, alias="maxEmployees")

    @model_validator(mode="after")
    def check_employee_range(self) -> CompanySearchFilters:
        if (
            self.min_employees is not None
            and self.max_employees is not None
            and self.min_employees > self.max_employees
        ):
            raise ValueError("Min employees cannot be greater than the Max employees")
        return self

    @classmethod
    def from_query(cls, query: Mapping[str, Any] | None) -> CompanySearchFilters:
        return parse_filters(cls, query)

from __future__ import annotations

from collections.abc import Mapping
from decimal import Decimal
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from jobly.schemas.common import parse_filters
from jobly.schemas.companies import CompanyOut


class JobOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: int
    title: str
    salary: int | None = None
    equity: str | None = None
    company_handle: str = Field(alias="companyHandle")


class JobListItemOut(JobOut):
    company_name: str | None = Field(default=None, alias="companyName")


class JobDetailOut(BaseModel):
    id: int
    title: str
    salary: int | None = None
    equity: str | None = None
    company: CompanyOut | None = None


class JobResponse(BaseModel):
    job: JobOut


class JobDetailResponse(BaseModel):
    job: JobDetailOut


class JobListResponse(BaseModel):
    jobs: list[JobListItemOut] = Field(default_factory=list)


class JobDeletedResponse(BaseModel):
    deleted: int


class JobNewRequest(BaseModel):
    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    title: str = Field(min_length=1)
    salary: int | None = Field(default=None, ge=0)
    equity: Decimal | None = Field(default=None, ge=0, le=1)
    company_handle: str = Field(min_length=1, max_length=25, alias="companyHandle")


class JobUpdateRequest(BaseModel):
    """Partial update; the owning company cannot be changed."""

    model_config = ConfigDict(extra="forbid")

    title: str | None = Field(default=None, min_length=1)
    salary: int | None = Field(default=None, ge=0)
    equity: Decimal | None = Field(default=None, ge=0, le=1)

    @field_validator("title")
    @classmethod
    def reject_null_title(cls, value: str | None) -> str:
        if value is None:
            raise ValueError("title cannot be null")
        return value


class JobSearchFilters(BaseModel):
    """Job search query.

    ``hasEquity`` narrows to jobs with non-zero equity only when it is true;
    false or absent leaves the result unfiltered.
    """

    model_config = ConfigDict(extra="forbid", frozen=True, populate_by_name=True)

    title: str | None = None
    min_salary: int | None = Field(default=None, ge=0, alias="minSalary")
    has_equity: bool | None = Field(default=None, alias="hasEquity")

    @classmethod
    def from_query(cls, query: Mapping[str, Any] | None) -> JobSearchFilters:
        return parse_filters(cls, query)

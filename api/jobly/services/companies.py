from __future__ import annotations

from collections.abc import Mapping
from functools import lru_cache
import logging
from types import MappingProxyType
from typing import Any

from asyncpg import exceptions as pg_exc

from jobly.schemas.companies import CompanySearchFilters
from jobly.services.database import Database, get_database
from jobly.services.errors import (
    RepositoryConflictError,
    RepositoryNotFoundError,
    RepositoryValidationError,
)
from jobly.services.records import company_job_row_to_dict, company_row_to_dict
from jobly.services.sql import Predicate, SqlParams, build_filter_clause, build_set_clause

logger = logging.getLogger(__name__)

COMPANY_COLUMN_MAP: Mapping[str, str] = MappingProxyType(
    {
        "numEmployees": "num_employees",
        "logoUrl": "logo_url",
    }
)
COMPANY_UPDATE_FIELDS = frozenset({"name", "description", "numEmployees", "logoUrl"})
# Postgres default name for the unique constraint on companies.name.
COMPANY_NAME_CONSTRAINT = "companies_name_key"
COMPANY_FILTERS = (
    Predicate("name", "name ilike {}", kind="substring"),
    Predicate("min_employees", "num_employees >= {}"),
    Predicate("max_employees", "num_employees <= {}"),
)


class CompanyRepository:
    def __init__(self, database: Database) -> None:
        self.database = database

    async def create(self, data: Mapping[str, Any]) -> dict[str, Any]:
        """Insert a company and return it.

        ``data`` holds ``handle``, ``name`` and optionally ``description``,
        ``numEmployees`` and ``logoUrl``. Raises RepositoryConflictError when
        the handle is already taken.
        """
        handle = data["handle"]
        duplicate = await self.database.fetchrow(
            """
            select handle
            from companies
            where handle = $1
            """,
            handle,
        )
        if duplicate:
            logger.warning("company create rejected duplicate handle=%s", handle)
            raise RepositoryConflictError(f"Duplicate company: {handle}")

        try:
            row = await self.database.fetchrow(
                """
                insert into companies (handle, name, description, num_employees, logo_url)
                values ($1, $2, $3, $4, $5)
                returning handle, name, description, num_employees, logo_url
                """,
                handle,
                data["name"],
                data.get("description"),
                data.get("numEmployees"),
                data.get("logoUrl"),
            )
        except pg_exc.UniqueViolationError as exc:
            if getattr(exc, "constraint_name", None) == COMPANY_NAME_CONSTRAINT:
                raise RepositoryConflictError(f"Duplicate company name: {data['name']}") from exc
            raise RepositoryConflictError(f"Duplicate company: {handle}") from exc

        if not row:
            raise RepositoryConflictError("failed to create company")

        logger.info("company created handle=%s", handle)
        return company_row_to_dict(row)

    async def find_all(
        self,
        filters: CompanySearchFilters | Mapping[str, Any] | None = None,
    ) -> list[dict[str, Any]]:
        """List companies ordered by name, narrowed by optional search filters."""
        if not isinstance(filters, CompanySearchFilters):
            filters = CompanySearchFilters.from_query(filters)

        where_sql, values = build_filter_clause(filters.model_dump(), COMPANY_FILTERS)
        rows = await self.database.fetch(
            f"""
            select handle, name, description, num_employees, logo_url
            from companies
            {where_sql}
            order by name
            """,
            *values,
        )
        return [company_row_to_dict(row) for row in rows]

    async def get(self, handle: str) -> dict[str, Any]:
        """Return a company with its jobs (ordered by id) under ``jobs``."""
        row = await self.database.fetchrow(
            """
            select handle, name, description, num_employees, logo_url
            from companies
            where handle = $1
            """,
            handle,
        )
        if not row:
            raise RepositoryNotFoundError(f"No company: {handle}")

        company = company_row_to_dict(row)
        job_rows = await self.database.fetch(
            """
            select id, title, salary, equity
            from jobs
            where company_handle = $1
            order by id
            """,
            handle,
        )
        company["jobs"] = [company_job_row_to_dict(job_row) for job_row in job_rows]
        return company

    async def update(self, handle: str, data: Mapping[str, Any]) -> dict[str, Any]:
        """Partially update a company; only the keys present in ``data`` change."""
        unsupported = sorted(set(data) - COMPANY_UPDATE_FIELDS)
        if unsupported:
            raise RepositoryValidationError(f"unsupported company fields: {', '.join(unsupported)}")

        set_sql, values = build_set_clause(data, COMPANY_COLUMN_MAP)
        params = SqlParams(list(values))
        handle_token = params.bind(handle)

        try:
            row = await self.database.fetchrow(
                f"""
                update companies
                set {set_sql}
                where handle = {handle_token}
                returning handle, name, description, num_employees, logo_url
                """,
                *params.values,
            )
        except pg_exc.UniqueViolationError as exc:
            logger.warning("company update rejected duplicate name handle=%s", handle)
            raise RepositoryConflictError(f"Duplicate company name: {data.get('name')}") from exc

        if not row:
            raise RepositoryNotFoundError(f"No company: {handle}")

        logger.info("company updated handle=%s fields=%s", handle, ",".join(data))
        return company_row_to_dict(row)

    async def remove(self, handle: str) -> None:
        row = await self.database.fetchrow(
            """
            delete from companies
            where handle = $1
            returning handle
            """,
            handle,
        )
        if not row:
            raise RepositoryNotFoundError(f"No company: {handle}")
        logger.info("company removed handle=%s", handle)


@lru_cache
def get_company_repository() -> CompanyRepository:
    return CompanyRepository(get_database())

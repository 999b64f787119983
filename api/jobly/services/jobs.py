from __future__ import annotations

from collections.abc import Mapping
from functools import lru_cache
import logging
from typing import Any

from asyncpg import exceptions as pg_exc

from jobly.schemas.jobs import JobSearchFilters
from jobly.services.database import Database, get_database
from jobly.services.errors import RepositoryNotFoundError, RepositoryValidationError
from jobly.services.records import company_row_to_dict, job_list_row_to_dict, job_row_to_dict
from jobly.services.sql import NO_COLUMN_MAP, Predicate, SqlParams, build_filter_clause, build_set_clause

logger = logging.getLogger(__name__)

# Job fields already match their column names; company_handle is immutable.
JOB_UPDATE_FIELDS = frozenset({"title", "salary", "equity"})
JOB_FILTERS = (
    Predicate("title", "j.title ilike {}", kind="substring"),
    Predicate("min_salary", "j.salary >= {}"),
    Predicate("has_equity", "j.equity > 0", kind="flag"),
)


class JobRepository:
    def __init__(self, database: Database) -> None:
        self.database = database

    async def create(self, data: Mapping[str, Any]) -> dict[str, Any]:
        """Insert a job and return it with its generated id.

        There is no duplicate check: ids are generated by the store.
        """
        company_handle = data["companyHandle"]
        try:
            row = await self.database.fetchrow(
                """
                insert into jobs (title, salary, equity, company_handle)
                values ($1, $2, $3, $4)
                returning id, title, salary, equity, company_handle
                """,
                data["title"],
                data.get("salary"),
                data.get("equity"),
                company_handle,
            )
        except pg_exc.ForeignKeyViolationError as exc:
            raise RepositoryValidationError(f"No company: {company_handle}") from exc

        if not row:
            raise RepositoryValidationError("failed to create job")

        job = job_row_to_dict(row)
        logger.info("job created id=%s company_handle=%s", job["id"], company_handle)
        return job

    async def find_all(
        self,
        filters: JobSearchFilters | Mapping[str, Any] | None = None,
    ) -> list[dict[str, Any]]:
        """List jobs ordered by title, each carrying its company's name."""
        if not isinstance(filters, JobSearchFilters):
            filters = JobSearchFilters.from_query(filters)

        where_sql, values = build_filter_clause(filters.model_dump(), JOB_FILTERS)
        rows = await self.database.fetch(
            f"""
            select
              j.id,
              j.title,
              j.salary,
              j.equity,
              j.company_handle,
              c.name as company_name
            from jobs as j
            left join companies as c on c.handle = j.company_handle
            {where_sql}
            order by j.title
            """,
            *values,
        )
        return [job_list_row_to_dict(row) for row in rows]

    async def get(self, job_id: int) -> dict[str, Any]:
        """Return a job with its owning company nested under ``company``."""
        row = await self.database.fetchrow(
            """
            select id, title, salary, equity, company_handle
            from jobs
            where id = $1
            """,
            job_id,
        )
        if not row:
            raise RepositoryNotFoundError(f"No job: {job_id}")

        job = job_row_to_dict(row)
        company_handle = job.pop("companyHandle")
        company_row = await self.database.fetchrow(
            """
            select handle, name, description, num_employees, logo_url
            from companies
            where handle = $1
            """,
            company_handle,
        )
        job["company"] = company_row_to_dict(company_row) if company_row else None
        return job

    async def update(self, job_id: int, data: Mapping[str, Any]) -> dict[str, Any]:
        """Partially update a job's title, salary or equity."""
        unsupported = sorted(set(data) - JOB_UPDATE_FIELDS)
        if unsupported:
            raise RepositoryValidationError(f"unsupported job fields: {', '.join(unsupported)}")

        set_sql, values = build_set_clause(data, NO_COLUMN_MAP)
        params = SqlParams(list(values))
        id_token = params.bind(job_id)

        row = await self.database.fetchrow(
            f"""
            update jobs
            set {set_sql}
            where id = {id_token}
            returning id, title, salary, equity, company_handle
            """,
            *params.values,
        )
        if not row:
            raise RepositoryNotFoundError(f"No job: {job_id}")

        logger.info("job updated id=%s fields=%s", job_id, ",".join(data))
        return job_row_to_dict(row)

    async def remove(self, job_id: int) -> None:
        row = await self.database.fetchrow(
            """
            delete from jobs
            where id = $1
            returning id
            """,
            job_id,
        )
        if not row:
            raise RepositoryNotFoundError(f"No job: {job_id}")
        logger.info("job removed id=%s", job_id)


@lru_cache
def get_job_repository() -> JobRepository:
    return JobRepository(get_database())

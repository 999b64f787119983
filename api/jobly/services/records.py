"""Row shaping from snake_case store columns to camelCase service records."""

from __future__ import annotations

from collections.abc import Mapping
from decimal import Decimal
from typing import Any


def equity_to_text(value: Any) -> str | None:
    if value is None:
        return None
    if isinstance(value, Decimal):
        return str(value)
    return str(Decimal(str(value)))


def salary_to_int(value: Any) -> int | None:
    if value is None:
        return None
    return int(value)


def company_row_to_dict(row: Mapping[str, Any]) -> dict[str, Any]:
    return {
        "handle": row["handle"],
        "name": row["name"],
        "description": row["description"],
        "numEmployees": row["num_employees"],
        "logoUrl": row["logo_url"],
    }


def job_row_to_dict(row: Mapping[str, Any]) -> dict[str, Any]:
    return {
        "id": int(row["id"]),
        "title": row["title"],
        "salary": salary_to_int(row["salary"]),
        "equity": equity_to_text(row["equity"]),
        "companyHandle": row["company_handle"],
    }


def job_list_row_to_dict(row: Mapping[str, Any]) -> dict[str, Any]:
    job = job_row_to_dict(row)
    job["companyName"] = row["company_name"]
    return job


def company_job_row_to_dict(row: Mapping[str, Any]) -> dict[str, Any]:
    return {
        "id": int(row["id"]),
        "title": row["title"],
        "salary": salary_to_int(row["salary"]),
        "equity": equity_to_text(row["equity"]),
    }

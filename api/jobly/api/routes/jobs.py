"""Job catalog routes.

Same status conventions as the company routes: 403 for a signed-in
non-admin write, FastAPI's 422 for malformed bodies, 400 for an unknown
company handle or bad search filters.
"""

from fastapi import APIRouter, Depends, HTTPException, Request, status

from jobly.core.security import get_admin_principal
from jobly.schemas.jobs import (
    JobDeletedResponse,
    JobDetailOut,
    JobDetailResponse,
    JobListItemOut,
    JobListResponse,
    JobNewRequest,
    JobOut,
    JobResponse,
    JobSearchFilters,
    JobUpdateRequest,
)
from jobly.services.errors import (
    RepositoryNotFoundError,
    RepositoryUnavailableError,
    RepositoryValidationError,
)
from jobly.services.jobs import get_job_repository

router = APIRouter()


@router.post("", response_model=JobResponse, status_code=status.HTTP_201_CREATED)
async def create_job(
    payload: JobNewRequest,
    _principal=Depends(get_admin_principal),
    repository=Depends(get_job_repository),
) -> JobResponse:
    try:
        row = await repository.create(payload.model_dump(by_alias=True))
    except RepositoryValidationError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except RepositoryUnavailableError as exc:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(exc)) from exc
    return JobResponse(job=JobOut(**row))


@router.get("", response_model=JobListResponse)
async def list_jobs(request: Request, repository=Depends(get_job_repository)) -> JobListResponse:
    try:
        filters = JobSearchFilters.from_query(request.query_params)
        rows = await repository.find_all(filters)
    except RepositoryValidationError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except RepositoryUnavailableError as exc:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(exc)) from exc
    return JobListResponse(jobs=[JobListItemOut(**row) for row in rows])


@router.get("/{job_id}", response_model=JobDetailResponse)
async def get_job(job_id: int, repository=Depends(get_job_repository)) -> JobDetailResponse:
    try:
        row = await repository.get(job_id)
    except RepositoryUnavailableError as exc:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(exc)) from exc
    except RepositoryNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    return JobDetailResponse(job=JobDetailOut(**row))


@router.patch("/{job_id}", response_model=JobResponse)
async def patch_job(
    job_id: int,
    payload: JobUpdateRequest,
    _principal=Depends(get_admin_principal),
    repository=Depends(get_job_repository),
) -> JobResponse:
    try:
        row = await repository.update(job_id, payload.model_dump(exclude_unset=True))
    except RepositoryValidationError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except RepositoryUnavailableError as exc:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(exc)) from exc
    except RepositoryNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    return JobResponse(job=JobOut(**row))


@router.delete("/{job_id}", response_model=JobDeletedResponse)
async def delete_job(
    job_id: int,
    _principal=Depends(get_admin_principal),
    repository=Depends(get_job_repository),
) -> JobDeletedResponse:
    try:
        await repository.remove(job_id)
    except RepositoryUnavailableError as exc:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(exc)) from exc
    except RepositoryNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    return JobDeletedResponse(deleted=job_id)

# propguard/entrypoints/api/routers/properties.py
from __future__ import annotations

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from ..deps import current_user_id, require_api_key
from ....db import get_session
from ....domain.errors import EngineError
from ....schemas import (
    CheckPropertyRequest,
    CheckPropertyResponse,
    CommunityAlertOut,
    DemoSeedResponse,
    ErrorResponse,
    ListingHistoryOut,
    ListingOut,
    PropertyOut,
    PropertyStatsResponse,
    PropertyWatchOut,
    ReportScamRequest,
    ReportScamResponse,
    UnwatchResponse,
    WatchlistResponse,
    WatchPropertyRequest,
    WatchPropertyResponse,
)
from ....service_layer.results import UseCaseResult
from ....service_layer.use_cases.check import check_property
from ....service_layer.use_cases.report import report_scam
from ....service_layer.use_cases.watch import list_watches, unwatch_property, watch_property
from ....services.demo_seed import seed_demo
from ....services.stats import property_stats

router = APIRouter(prefix="/property", tags=["property"], dependencies=[Depends(require_api_key)])

_ERRORS = {400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}, 500: {"model": ErrorResponse}}


def _failure(result: UseCaseResult) -> JSONResponse:
    err: EngineError = result.error  # type: ignore[assignment]
    body = ErrorResponse(error=err.message, code=err.code)
    return JSONResponse(status_code=err.http_status, content=body.model_dump())


@router.post("/check", response_model=CheckPropertyResponse, responses=_ERRORS)
async def post_check(
    body: CheckPropertyRequest,
    user_id: str = Depends(current_user_id),
    session: AsyncSession = Depends(get_session),
):
    result = await check_property(
        session,
        user_id=user_id,
        address=body.address,
        city=body.city,
        state=body.state,
        country=body.country,
        listing_url=body.listing_url,
    )
    if not result.ok:
        return _failure(result)

    c = result.value
    return CheckPropertyResponse(
        property=PropertyOut.model_validate(c.property),
        listings=[ListingOut.model_validate(l) for l in c.listings],
        alerts=[CommunityAlertOut.model_validate(a) for a in c.alerts],
        history=ListingHistoryOut.from_summary(c.history),
        nearby_scams=c.nearby_scams,
    )


@router.post("/report", response_model=ReportScamResponse, responses=_ERRORS)
async def post_report(
    body: ReportScamRequest,
    user_id: str = Depends(current_user_id),
    session: AsyncSession = Depends(get_session),
):
    result = await report_scam(
        session,
        user_id=user_id,
        property_id=body.property_id,
        address=body.address,
        scam_type=body.scam_type,
        description=body.description,
        evidence=body.evidence,
        listing_url=body.listing_url,
    )
    if not result.ok:
        return _failure(result)
    return ReportScamResponse(report_id=result.value.report_id, message=result.value.message)


@router.post("/watch", response_model=WatchPropertyResponse, responses=_ERRORS)
async def post_watch(
    body: WatchPropertyRequest,
    user_id: str = Depends(current_user_id),
    session: AsyncSession = Depends(get_session),
):
    result = await watch_property(
        session,
        user_id=user_id,
        property_id=body.property_id,
        notifications_enabled=body.notifications_enabled,
    )
    if not result.ok:
        return _failure(result)
    return WatchPropertyResponse(watch=PropertyWatchOut.model_validate(result.value))


@router.get("/watch", response_model=WatchlistResponse, responses=_ERRORS)
async def get_watchlist(
    user_id: str = Depends(current_user_id),
    session: AsyncSession = Depends(get_session),
):
    result = await list_watches(session, user_id=user_id)
    if not result.ok:
        return _failure(result)
    return WatchlistResponse(
        watches=[PropertyWatchOut.model_validate(w) for w in result.value.watches],
        properties=[PropertyOut.model_validate(p) for p in result.value.properties],
    )


@router.delete("/watch/{property_id}", response_model=UnwatchResponse, responses=_ERRORS)
async def delete_watch(
    property_id: str,
    user_id: str = Depends(current_user_id),
    session: AsyncSession = Depends(get_session),
):
    result = await unwatch_property(session, user_id=user_id, property_id=property_id)
    if not result.ok:
        return _failure(result)
    return UnwatchResponse(removed=bool(result.value))


@router.get("/stats", response_model=PropertyStatsResponse, dependencies=[Depends(current_user_id)])
async def get_stats(session: AsyncSession = Depends(get_session)) -> PropertyStatsResponse:
    return PropertyStatsResponse(**(await property_stats(session)))


@router.post("/demo", response_model=DemoSeedResponse, dependencies=[Depends(current_user_id)])
async def post_demo(session: AsyncSession = Depends(get_session)) -> DemoSeedResponse:
    res = await seed_demo(session)
    await session.commit()
    return DemoSeedResponse(**res)

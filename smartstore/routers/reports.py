# =========================================================
# REPORTS ROUTER
#
# Thin wrapper over the report repository. Dates are local calendar
# dates (YYYY-MM-DD); omitted dates mean today.
# =========================================================

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query

from smartstore.dependencies import get_store
from smartstore.schemas.report import (
    BestSellerResponse,
    BreakEvenResponse,
    DailyReportResponse,
    HourlySalesResponse,
)
from smartstore.store import Store

router = APIRouter(prefix="/reports", tags=["Reports"])


@router.get("/daily", response_model=DailyReportResponse)
def daily_report(
    day: Optional[date] = Query(None, alias="date"),
    store: Store = Depends(get_store),
):
    return store.reports.get_daily_report(day)


@router.get("/weekly", response_model=list[DailyReportResponse])
def weekly_trend(
    today: Optional[date] = None,
    store: Store = Depends(get_store),
):
    return store.reports.get_weekly_trend(today)


@router.get("/break-even", response_model=BreakEvenResponse)
def break_even(store: Store = Depends(get_store)):
    return store.reports.get_break_even_analysis()


@router.get("/best-sellers", response_model=list[BestSellerResponse])
def best_sellers(
    limit: Optional[int] = Query(None, ge=1, le=100),
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    store: Store = Depends(get_store),
):
    return store.reports.get_best_sellers(limit, start_date, end_date)


@router.get("/peak-hours", response_model=list[HourlySalesResponse])
def peak_hours(
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    store: Store = Depends(get_store),
):
    return store.reports.get_peak_hours(start_date, end_date)

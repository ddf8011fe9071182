"""Admin dashboard and calendar endpoints."""

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, status

from calendar_service.month_view import MonthView, build_month_view
from dentalcare.routers.deps import get_clinic_store, require_admin
from dentalcare.schemas.dashboard import DashboardOverview, DashboardStats
from dentalcare.services import views
from dentalcare.services.clinic import ClinicStore
from dentalcare.utils.timeutil import clinic_now

router = APIRouter(dependencies=[Depends(require_admin)])


@router.get("/dashboard/stats", response_model=DashboardStats)
def dashboard_stats(store: ClinicStore = Depends(get_clinic_store)) -> DashboardStats:
    """Return clinic-wide counts and revenue."""

    return store.dashboard_stats()


@router.get("/dashboard/overview", response_model=DashboardOverview)
def dashboard_overview(store: ClinicStore = Depends(get_clinic_store)) -> DashboardOverview:
    """Return stats, the next appointments and the newest patients."""

    now = clinic_now(store.clinic_timezone)
    return DashboardOverview(
        stats=store.dashboard_stats(now),
        upcoming=views.upcoming(
            store.incidents(),
            now,
            store.clinic_timezone,
            limit=views.ADMIN_UPCOMING_LIMIT,
        ),
        recent_patients=views.recent_patients(store.patients()),
    )


@router.get("/calendar/{year}/{month}", response_model=MonthView)
def month_calendar(
    year: int,
    month: int,
    day: Optional[int] = None,
    store: ClinicStore = Depends(get_clinic_store),
) -> MonthView:
    """Return the month grid; ``day`` selects a date to list in full."""

    try:
        selected = date(year, month, day) if day is not None else None
        return build_month_view(
            store.incidents(),
            year,
            month,
            selected=selected,
            today=clinic_now(store.clinic_timezone).date(),
            tz_name=store.clinic_timezone,
        )
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc)) from exc

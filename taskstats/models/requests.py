"""
Request models for the stats handlers
"""

import datetime as dt
from typing import Any, Optional, Union

from pydantic import Field

from .base import BaseModel


class UserStatsRequest(BaseModel):
    """Request parameters shared by the snapshot statistics endpoints.

    @property userId - Authenticated caller's user ID.
    @property period - Optional period ('day' | 'week' | 'month'); accepted for symmetry, defaults to 'month'.
    """

    user_id: int
    period: str = "month"


class TimeSeriesRequest(BaseModel):
    """Request parameters for daily time series.

    @property userId - Authenticated caller's user ID.
    @property period - 'day' | 'week' | 'month'; unknown values fall back to 'day'.
    @property targetDate - Optional anchor date or moment inside the period, defaults to now.
    """

    user_id: int
    period: str = "day"
    target_date: Optional[Union[dt.datetime, dt.date]] = None


class YearStatsRequest(BaseModel):
    """Request parameters for yearly statistics.

    @property userId - Authenticated caller's user ID.
    @property year - Optional calendar year; missing or malformed values mean the current year.
    """

    user_id: int
    # Left loose so malformed years reach StatsManager and fall back there
    year: Optional[Any] = None


class DurationRankingRequest(YearStatsRequest):
    """Request parameters for the task duration ranking.

    @property limit - Optional number of longest tasks to return; all tasks when omitted.
    """

    limit: Optional[int] = Field(default=None, ge=1, le=1000)

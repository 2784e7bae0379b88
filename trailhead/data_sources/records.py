"""Normalized records returned by the provider clients.

The services treat these as read-only values: they filter, sort and slice
lists of them but never change a field.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass
class Activity:
    """NPS activity category (e.g. "Hiking")."""
    activity_id: str
    name: str


@dataclass
class Fee:
    """Entrance or campground fee line."""
    title: str
    cost: Optional[str] = None
    description: Optional[str] = None


@dataclass
class Image:
    """Park photo reference."""
    url: str
    title: Optional[str] = None
    caption: Optional[str] = None


@dataclass
class Park:
    """Park or site summary from the NPS directory."""
    park_code: str
    name: str
    park_id: Optional[str] = None
    full_name: Optional[str] = None
    states: Optional[str] = None
    designation: Optional[str] = None
    description: Optional[str] = None
    url: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    activities: List[Activity] = field(default_factory=list)
    entrance_fees: List[Fee] = field(default_factory=list)
    images: List[Image] = field(default_factory=list)


@dataclass
class Alert:
    """Park alert (closure, caution, information, danger)."""
    title: str
    category: str
    description: str = ""
    url: Optional[str] = None
    park_code: Optional[str] = None
    last_indexed_date: Optional[str] = None


@dataclass
class Event:
    """Scheduled park event such as a ranger talk."""
    title: str
    date_start: Optional[str] = None
    date_end: Optional[str] = None
    time_start: Optional[str] = None
    location: Optional[str] = None
    description: Optional[str] = None
    fee_info: Optional[str] = None
    contact_name: Optional[str] = None
    contact_email: Optional[str] = None


@dataclass
class Campsites:
    """Site counts by type for a campground."""
    total_sites: int = 0
    tent_only: int = 0
    electrical_hookups: int = 0
    rv_only: int = 0
    walk_boat_to: int = 0
    group: int = 0
    horse: int = 0


@dataclass
class Campground:
    """Campground inside a park."""
    name: str
    campground_id: Optional[str] = None
    description: Optional[str] = None
    campsites: Optional[Campsites] = None
    fees: List[Fee] = field(default_factory=list)
    reservation_info: Optional[str] = None
    reservation_url: Optional[str] = None


@dataclass
class Trail:
    """Trail or hike; ``trail_use`` is None when the provider gives no permitted-use list."""
    trail_id: str
    name: str
    park_code: Optional[str] = None
    description: Optional[str] = None
    length_miles: Optional[float] = None
    difficulty: Optional[str] = None
    elevation_gain_ft: Optional[float] = None
    duration: Optional[str] = None
    trail_use: Optional[List[str]] = None
    trailhead_latitude: Optional[float] = None
    trailhead_longitude: Optional[float] = None


@dataclass
class Facility:
    """Recreation facility (campground, day-use area, trailhead) from RIDB."""
    facility_id: str
    name: str
    description: Optional[str] = None
    facility_type: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    phone: Optional[str] = None
    reservation_url: Optional[str] = None
    activities: List[str] = field(default_factory=list)


@dataclass
class RecArea:
    """Recreation area from RIDB."""
    rec_area_id: str
    name: str
    description: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    reservation_url: Optional[str] = None


@dataclass
class ForecastDay:
    """One day of forecast, Fahrenheit; ``chance_of_rain`` only on detailed forecasts."""
    date: str
    min_temp_f: float
    max_temp_f: float
    condition: str
    chance_of_rain: Optional[float] = None


@dataclass
class WeatherAlert:
    """Government weather alert relayed by the forecast provider."""
    headline: str
    event: Optional[str] = None
    severity: Optional[str] = None
    areas: Optional[str] = None
    effective: Optional[str] = None
    expires: Optional[str] = None
    description: Optional[str] = None


@dataclass
class AirQuality:
    """Current air-quality readings (µg/m³ plus the US EPA index)."""
    location: str
    us_epa_index: Optional[int] = None
    pm2_5: Optional[float] = None
    pm10: Optional[float] = None
    ozone: Optional[float] = None
    nitrogen_dioxide: Optional[float] = None
    carbon_monoxide: Optional[float] = None

"""NOAA solar ephemeris and sunrise/sunset queries."""

from .ephemeris import SolarStatus, SunCalculation, calc_sun
from .events import SolarDay, solar_events_for

__all__ = ["SolarStatus", "SunCalculation", "calc_sun", "SolarDay", "solar_events_for"]

"""Typed reading models for rtl_433 records."""

from pyrtl433.models._base import LenientFloat, LenientInt, LenientStr, Rtl433BaseModel
from pyrtl433.models.readings import (
    CommonReading,
    SwitchReading,
    ThermometerReading,
    TpmsReading,
    WeatherStationReading,
)

__all__ = [
    "CommonReading",
    "LenientFloat",
    "LenientInt",
    "LenientStr",
    "Rtl433BaseModel",
    "SwitchReading",
    "ThermometerReading",
    "TpmsReading",
    "WeatherStationReading",
]

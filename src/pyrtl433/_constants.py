"""Internal constants shared across the library."""

# "No reading this slot"; no sensor in the supported families reports -9999.
ABSENT = -9999

# Switch position that has never been read cleanly.
UNKNOWN_POSITION = -1

# ------------------------------------------------------------------
# Unit conversion factors (source unit -> canonical unit)
# ------------------------------------------------------------------

MS_TO_KPH = 3.6
MPH_TO_KPH = 1.609344
KPA_TO_BAR = 0.01
PSI_TO_BAR = 0.0689476

# ------------------------------------------------------------------
# Default history rings: (bucket_count, bucket_seconds), finest first
# ------------------------------------------------------------------

DEFAULT_RINGS: tuple[tuple[str, int, int], ...] = (
    ("second", 60, 1),
    ("minute", 60, 60),
    ("hour", 24, 3600),
    ("day", 7, 86400),
)

MQTT_DEFAULT_TOPIC = "rtl_433/+/events"


def f_to_c(temp_f: float) -> float:
    """Convert a Fahrenheit temperature to Celsius."""
    return (temp_f - 32.0) * 5.0 / 9.0

"""pyrtl433 - Classification and rolling history for rtl_433 sensor telemetry."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pyrtl433")
except PackageNotFoundError:
    __version__ = "0+local"
from pyrtl433._constants import ABSENT
from pyrtl433.config import Rtl433Config
from pyrtl433.exceptions import (
    Rtl433ConfigError,
    Rtl433Error,
    Rtl433FeedError,
    Rtl433IdentityError,
)
from pyrtl433.export import export_device
from pyrtl433.ingestion.classify import classify
from pyrtl433.ingestion.identity import derive_identity
from pyrtl433.ingestion.mqtt import MqttFeed
from pyrtl433.ingestion.pipeline import IngestResult, RejectReason, Rtl433Ingestor
from pyrtl433.state.combiner import average, combine
from pyrtl433.state.device import (
    DeviceState,
    Identity,
    SchemaTag,
    SwitchState,
    ThermometerState,
    TpmsState,
    WeatherStationState,
)
from pyrtl433.state.inventory import DeviceInventory, InMemoryInventory
from pyrtl433.state.rrd import AggregatedSeries, Resolution, RingSpec

__all__ = [
    "__version__",
    "ABSENT",
    "AggregatedSeries",
    "DeviceInventory",
    "DeviceState",
    "Identity",
    "InMemoryInventory",
    "IngestResult",
    "MqttFeed",
    "RejectReason",
    "Resolution",
    "RingSpec",
    "Rtl433Config",
    "Rtl433ConfigError",
    "Rtl433Error",
    "Rtl433FeedError",
    "Rtl433IdentityError",
    "Rtl433Ingestor",
    "SchemaTag",
    "SwitchState",
    "ThermometerState",
    "TpmsState",
    "WeatherStationState",
    "average",
    "classify",
    "combine",
    "derive_identity",
    "export_device",
]

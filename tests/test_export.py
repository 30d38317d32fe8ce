from __future__ import annotations

from pyrtl433._constants import ABSENT
from pyrtl433.config import Rtl433Config
from pyrtl433.export import export_device
from pyrtl433.ingestion.pipeline import Rtl433Ingestor
from pyrtl433.state.inventory import InMemoryInventory
from pyrtl433.state.rrd import Resolution, RingSpec


def _ingestor() -> tuple[Rtl433Ingestor, InMemoryInventory]:
    config = Rtl433Config(rings=(RingSpec(Resolution.SECOND, 3, 1), RingSpec(Resolution.MINUTE, 2, 60)))
    inventory = InMemoryInventory(config.rings)
    return Rtl433Ingestor(inventory=inventory, config=config, clock=lambda: 120.0), inventory


def test_export_thermometer_uses_dotted_names() -> None:
    ingestor, inventory = _ingestor()
    ingestor.ingest({"model": "Nexus-TH", "id": 21, "channel": 1, "temperature_C": 21.0, "humidity": 40})

    state = inventory.get("Nexus-TH|21|1")
    assert state is not None
    exported = export_device(state)

    assert exported["rtl433.device.model"] == "Nexus-TH"
    assert exported["rtl433.device.id"] == "21"
    assert exported["rtl433.device.rtlchannel"] == "1"
    assert exported["rtl433.device.schema"] == "thermometer"
    assert exported["rtl433.device.temperature"] == 21.0
    assert exported["rtl433.device.humidity"] == 40
    assert exported["rtl433.device.packets"] == 1
    assert exported["rtl433.device.temperature_rrd"] == {
        "second": [ABSENT, ABSENT, 21],
        "minute": [ABSENT, 21],
    }
    assert "rtl433.device.battery" not in exported


def test_export_weather_station_and_switch() -> None:
    ingestor, inventory = _ingestor()
    ingestor.ingest({"model": "WH1080", "id": 2, "speed": 12, "temperature_C": 3.0})
    ingestor.ingest({"model": "Interlogix", "id": "ab12cz", "switch1": "OPEN", "switch2": "OFF"})

    weather = inventory.get("WH1080|2|")
    switch = inventory.get("Interlogix|ab12cz|")
    assert weather is not None and switch is not None

    exported_weather = export_device(weather, include_history=False)
    assert exported_weather["rtl433.device.weatherstation.wind_speed"] == 12
    assert exported_weather["rtl433.device.temperature"] == 3.0
    assert not any(key.endswith("_rrd") for key in exported_weather)

    assert export_device(switch)["rtl433.device.switch_vec"] == [1, 0]

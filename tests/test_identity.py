from __future__ import annotations

import pytest

from pyrtl433.exceptions import Rtl433IdentityError
from pyrtl433.ingestion.identity import derive_identity


def test_identity_from_model_id_channel() -> None:
    identity = derive_identity({"model": "Nexus-TH", "id": 21, "channel": 2})

    assert identity.model == "Nexus-TH"
    assert identity.sensor_id == "21"
    assert identity.channel == "2"
    assert identity.key == "Nexus-TH|21|2"


def test_numeric_id_spellings_map_to_the_same_sensor() -> None:
    keys = {
        derive_identity({"model": "Nexus-TH", "id": value}).key
        for value in (42, "42", 42.0)
    }

    assert keys == {"Nexus-TH|42|"}


def test_tpms_hex_ids_are_normalized() -> None:
    a = derive_identity({"model": "Toyota", "type": "TPMS", "id": "0x1A2B3C4D"})
    b = derive_identity({"model": "Toyota", "type": "TPMS", "id": "1a2b3c4d"})

    assert a.key == b.key
    assert a.sensor_id == "1a2b3c4d"


def test_channel_separates_sensors() -> None:
    a = derive_identity({"model": "Nexus-TH", "id": 21, "channel": 1})
    b = derive_identity({"model": "Nexus-TH", "id": 21, "channel": 2})

    assert a.key != b.key


def test_model_separates_sensors_with_the_same_id() -> None:
    a = derive_identity({"model": "Nexus-TH", "id": 21})
    b = derive_identity({"model": "Prologue-TH", "id": 21})

    assert a.key != b.key


def test_device_and_sensor_id_fallbacks() -> None:
    assert derive_identity({"model": "Acurite-Tower", "sensor_id": 1234}).sensor_id == "1234"
    assert derive_identity({"model": "Old", "device": 7}).sensor_id == "7"
    assert derive_identity({"model": "Both", "id": 1, "device": 7}).sensor_id == "1"


def test_alphanumeric_id_is_kept_verbatim() -> None:
    assert derive_identity({"model": "Interlogix", "id": "ab12cz"}).sensor_id == "ab12cz"


def test_model_only_record_is_accepted() -> None:
    identity = derive_identity({"model": "Generic-Doorbell"})

    assert identity.key == "Generic-Doorbell||"


def test_record_without_model_or_id_is_rejected() -> None:
    with pytest.raises(Rtl433IdentityError):
        derive_identity({"temperature_C": 20.0, "channel": 1})


def test_zero_id_without_model_is_rejected() -> None:
    with pytest.raises(Rtl433IdentityError):
        derive_identity({"id": 0})


def test_identity_does_not_depend_on_measurement_keys() -> None:
    plain = derive_identity({"model": "Bresser-6in1", "id": 42, "wind_avg_m_s": 1.0})
    with_pressure = derive_identity({"model": "Bresser-6in1", "id": 42, "pressure_hPa": 1013.0})
    with_tire_key = derive_identity({"model": "Bresser-6in1", "id": 42, "pressure_kPa": 101.3})

    assert plain.key == with_pressure.key == with_tire_key.key == "Bresser-6in1|42|"


def test_hex_rendering_follows_the_tpms_type() -> None:
    assert derive_identity({"model": "Schrader", "type": "TPMS", "id": "10"}).sensor_id == "10"
    assert derive_identity({"model": "Schrader", "type": "TPMS", "id": 16}).sensor_id == "10"
    assert derive_identity({"model": "Schrader", "id": "10"}).sensor_id == "10"

"""Ingestion layer.

Identity resolution, classification and field extraction for rtl_433
records, plus the MQTT feed that delivers them.
"""

__all__: list[str] = []

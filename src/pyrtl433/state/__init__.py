"""State layer.

Per-device canonical state, the combiner policy and the round-robin
history rings.  Only the ingestion pipeline mutates these objects.
"""

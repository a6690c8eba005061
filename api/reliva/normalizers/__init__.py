"""Mappers from raw provider JSON to canonical records. None of them raise."""

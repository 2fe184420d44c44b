"""HTTP surface: editing sessions and the cached video catalogue."""

from gdpglobe.model.records import BoundaryFeature, CountryRecord, validate_records
from gdpglobe.model.fallback import FALLBACK_RECORDS

__all__ = ["BoundaryFeature", "CountryRecord", "FALLBACK_RECORDS", "validate_records"]

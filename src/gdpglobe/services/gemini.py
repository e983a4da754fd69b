"""
GDP Data Service (Gemini)
=========================
Requests the GDP ranking from a Gemini model with a strict JSON response schema.

Any failure (missing API key, network or API error, unparsable or empty response,
invalid records) is logged and answered with the static fallback dataset, so callers
always receive a usable list.
"""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any, Optional

from google import genai
from google.genai import types

from gdpglobe.config import GDP_PROMPT, GEMINI_MODEL
from gdpglobe.errors import GdpFetchError, GdpGlobeError
from gdpglobe.model.fallback import FALLBACK_RECORDS
from gdpglobe.model.records import CountryRecord, validate_records

logger = logging.getLogger(__name__)

GDP_RESPONSE_SCHEMA = types.Schema(
    type=types.Type.ARRAY,
    items=types.Schema(
        type=types.Type.OBJECT,
        properties={
            "rank": types.Schema(type=types.Type.INTEGER),
            "countryName": types.Schema(type=types.Type.STRING),
            "isoCode": types.Schema(
                type=types.Type.STRING, description="ISO 3166-1 alpha-3 code (e.g., USA, CHN, JPN)"
            ),
            "gdpTrillions": types.Schema(type=types.Type.NUMBER, description="Nominal GDP in Trillions USD"),
            "growthRate": types.Schema(type=types.Type.NUMBER, description="Annual growth rate percentage"),
            "description": types.Schema(type=types.Type.STRING, description="Short economic summary"),
        },
        required=["rank", "countryName", "isoCode", "gdpTrillions", "growthRate", "description"],
    ),
)


@dataclass(frozen=True)
class GdpFetchResult:
    records: list[CountryRecord]
    used_fallback: bool = False
    error: Optional[str] = None


def parse_gdp_response(text: Optional[str]) -> list[CountryRecord]:
    """
    Parse the model's JSON text into validated records sorted by rank.

    Raises:
        GdpFetchError: If the text is empty, not JSON, or not a non-empty array.
        RecordValidationError: If a record is invalid or duplicated.
    """
    if not text:
        raise GdpFetchError("No data received from Gemini.")
    try:
        payload: Any = json.loads(text)
    except json.JSONDecodeError as e:
        raise GdpFetchError(f"Gemini returned invalid JSON: {e}") from e

    if not isinstance(payload, list) or not payload:
        raise GdpFetchError("Gemini returned no records.")

    return validate_records(CountryRecord.from_dict(item) for item in payload)


def fetch_gdp_data(
    api_key: Optional[str],
    model: str = GEMINI_MODEL,
    client: Optional[genai.Client] = None,
) -> GdpFetchResult:
    """
    Fetch the GDP ranking, falling back to the static dataset on any failure.

    Args:
        api_key: Gemini API key; without it the fallback is used directly.
        model: Model name.
        client: Pre-built client (used by tests).
    """
    try:
        if client is None:
            if not api_key:
                raise GdpFetchError("No Gemini API key configured (set GEMINI_API_KEY).")
            client = genai.Client(api_key=api_key)

        logger.info(f"Requesting GDP data from {model}...")
        response = client.models.generate_content(
            model=model,
            contents=GDP_PROMPT,
            config=types.GenerateContentConfig(
                response_mime_type="application/json",
                response_schema=GDP_RESPONSE_SCHEMA,
            ),
        )
        records = parse_gdp_response(response.text)
        logger.info(f"Received {len(records)} GDP records.")
        logger.debug(f"GDP records: {[record.to_dict() for record in records]}")
        return GdpFetchResult(records=records)

    except GdpGlobeError as e:
        logger.error(f"Error fetching GDP data: {e}")
        return GdpFetchResult(records=list(FALLBACK_RECORDS), used_fallback=True, error=str(e))
    except Exception as e:
        # network and API errors from the client library
        logger.exception("Error fetching GDP data")
        return GdpFetchResult(records=list(FALLBACK_RECORDS), used_fallback=True, error=str(e))

"""Field types shared by the backend and API schemas."""

from datetime import date, datetime
from decimal import Decimal
from typing import Annotated, Any

from pydantic import BeforeValidator, ConfigDict, Field, PlainSerializer
from pydantic.alias_generators import to_camel


def _to_date(value: Any) -> Any:
    """Accept plain dates and full ISO timestamps (the backend stores datetimes)."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, str) and "T" in value:
        return datetime.fromisoformat(value).date()
    return value


def _ref_id(value: Any) -> Any:
    """A reference may arrive populated ({"_id": ..., ...}) or as a bare id."""
    if isinstance(value, dict):
        return value.get("_id") or value.get("id")
    return value


# Decimal in Python, plain JSON number on the wire (the dashboard formats with toFixed)
Money = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]
# NaN and infinities pass through; the rate lookup treats them as unset
NightlyRate = Annotated[Decimal, Field(allow_inf_nan=True)]
WireDate = Annotated[date, BeforeValidator(_to_date)]
RefId = Annotated[str, BeforeValidator(_ref_id)]

# Shared by every model that talks camelCase JSON
CAMEL_CONFIG = ConfigDict(
    alias_generator=to_camel,
    populate_by_name=True,
    coerce_numbers_to_str=True,
)

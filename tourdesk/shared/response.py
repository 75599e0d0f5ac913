from __future__ import annotations

from typing import Generic, Optional, TypeVar

from tourdesk.shared.base import BaseSchema
from tourdesk.shared.time import civil_today


T = TypeVar("T")

CALCULATION_VERSION = "v1"


class Meta(BaseSchema):
    as_of_date: str
    source: str
    calculation_version: str = CALCULATION_VERSION
    currency: Optional[str] = None
    total_items: Optional[int] = None
    filters: Optional[dict] = None


class ResponseEnvelope(BaseSchema, Generic[T]):
    data: T
    meta: Optional[Meta] = None


def build_meta(
    source: str,
    *,
    currency: Optional[str] = None,
    total_items: Optional[int] = None,
    filters: Optional[dict] = None,
) -> Meta:
    return Meta(
        as_of_date=civil_today().isoformat(),
        source=source,
        currency=currency,
        total_items=total_items,
        filters=filters,
    )

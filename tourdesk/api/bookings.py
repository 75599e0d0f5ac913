from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends

from tourdesk.api.dependencies import get_bookings_service
from tourdesk.schemas.bookings import Booking, BookingCreateRequest, BookingUpdateRequest
from tourdesk.schemas.tours import DeletedResult
from tourdesk.services.bookings_service import BookingsService
from tourdesk.shared.response import ResponseEnvelope, build_meta


router = APIRouter(prefix="/bookings", tags=["bookings"])


@router.get("")
def list_bookings(
    service: BookingsService = Depends(get_bookings_service),
) -> ResponseEnvelope[List[Booking]]:
    data = service.list_bookings()
    return ResponseEnvelope(data=data, meta=build_meta("bookings", total_items=len(data)))


@router.post("")
def create_booking(
    request: BookingCreateRequest,
    service: BookingsService = Depends(get_bookings_service),
) -> ResponseEnvelope[Booking]:
    return ResponseEnvelope(data=service.create_booking(request), meta=build_meta("bookings"))


@router.put("/{booking_id}")
def update_booking(
    booking_id: str,
    request: BookingUpdateRequest,
    service: BookingsService = Depends(get_bookings_service),
) -> ResponseEnvelope[Booking]:
    return ResponseEnvelope(
        data=service.update_booking(booking_id, request), meta=build_meta("bookings")
    )


@router.delete("/{booking_id}")
def delete_booking(
    booking_id: str,
    service: BookingsService = Depends(get_bookings_service),
) -> ResponseEnvelope[DeletedResult]:
    return ResponseEnvelope(data=service.delete_booking(booking_id), meta=build_meta("bookings"))

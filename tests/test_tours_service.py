from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal

import pytest

from tourdesk.core.errors import BadRequestError, NotFoundError
from tourdesk.schemas.tours import TourCreateRequest, TourStatusUpdateRequest, TourUpdateRequest


NOW = datetime(2024, 6, 2, 3, 0, tzinfo=timezone.utc)


def test_refresh_writes_only_changed_statuses(repos):
    repos.add_tour("Past", "2024-05-01T00:00:00+00:00", "2024-05-03T00:00:00+00:00", status="ONGOING")
    repos.add_tour("Now", "2024-06-01T00:00:00+00:00", "2024-06-05T00:00:00+00:00", status="ONGOING")
    repos.add_tour("Later", "2024-07-01T00:00:00+00:00", "2024-07-05T00:00:00+00:00")
    service = repos.tours_service()

    assert service.refresh_statuses(NOW) == 1
    assert [status for _, status in repos.tours.status_writes] == ["COMPLETED"]

    assert service.refresh_statuses(NOW) == 0
    assert len(repos.tours.status_writes) == 1


def test_refresh_swallows_store_errors(repos):
    repos.add_tour("Past", "2024-05-01T00:00:00+00:00", "2024-05-03T00:00:00+00:00")
    repos.tours.fail_updates = True

    assert repos.tours_service().refresh_statuses(NOW) == 0


def test_list_tours_includes_financials(repos):
    tour_id = repos.add_tour("Ha Long", "2099-06-01T00:00:00+00:00", "2099-06-05T00:00:00+00:00")
    customer_id = repos.add_customer("Nguyen Van A")
    repos.add_booking(customer_id, tour_id, "2000000", deposit="2000000")
    repos.add_expense(tour_id, "500000")

    [summary] = repos.tours_service().list_tours()

    assert summary.booked_guests == 1
    assert summary.total_revenue == Decimal("2000000")
    assert summary.total_expenses == Decimal("500000")
    assert summary.profit == Decimal("1500000")
    assert summary.payment_remainder == Decimal("0")
    assert summary.is_fully_paid is True


def test_create_tour_defaults_to_upcoming(repos):
    request = TourCreateRequest(
        name="Sapa",
        type="PRIVATE",
        start_date=datetime(2099, 1, 1),
        end_date=datetime(2099, 1, 3),
        max_guests=8,
        price=Decimal("1200000"),
    )

    tour = repos.tours_service().create_tour(request)

    assert tour.status == "UPCOMING"
    assert tour.start_date == datetime(2099, 1, 1, tzinfo=timezone.utc)


def test_create_tour_rejects_end_before_start():
    with pytest.raises(ValueError):
        TourCreateRequest(
            name="Backwards",
            start_date=datetime(2099, 1, 3),
            end_date=datetime(2099, 1, 1),
        )


def test_update_tour_checks_merged_dates(repos):
    tour_id = repos.add_tour("Hue", "2099-06-01T00:00:00+00:00", "2099-06-05T00:00:00+00:00")
    service = repos.tours_service()

    with pytest.raises(BadRequestError):
        service.update_tour(tour_id, TourUpdateRequest(end_date=datetime(2099, 5, 1)))

    detail = service.update_tour(tour_id, TourUpdateRequest(name="Hue Imperial"))
    assert detail.name == "Hue Imperial"


def test_update_missing_tour_is_not_found(repos):
    with pytest.raises(NotFoundError):
        repos.tours_service().update_tour("nope", TourUpdateRequest(name="x"))
    with pytest.raises(NotFoundError):
        repos.tours_service().update_status("nope", TourStatusUpdateRequest(status="ONGOING"))


def test_manual_status_is_overwritten_by_next_refresh(repos):
    tour_id = repos.add_tour("Da Lat", "2099-06-01T00:00:00+00:00", "2099-06-05T00:00:00+00:00")
    service = repos.tours_service()

    assert service.update_status(tour_id, TourStatusUpdateRequest(status="COMPLETED")).status == "COMPLETED"
    service.refresh_statuses(NOW)

    assert repos.tours.get_tour(tour_id).status == "UPCOMING"


def test_delete_tour_cascades(repos):
    tour_id = repos.add_tour("Mekong", "2099-06-01T00:00:00+00:00", "2099-06-05T00:00:00+00:00")
    keep_id = repos.add_tour("Other", "2099-06-01T00:00:00+00:00", "2099-06-05T00:00:00+00:00")
    customer_id = repos.add_customer("Le Thi B")
    booking_id = repos.add_booking(customer_id, tour_id, "100")
    kept_booking = repos.add_booking(customer_id, keep_id, "100")
    repos.add_guest(booking_id, "Guest", "0900")
    repos.store.insert("booking_services", {"booking_id": booking_id, "service_name": "Boat"})
    repos.add_expense(tour_id, "50")

    result = repos.tours_service().delete_tour(tour_id)

    assert result.id == tour_id
    assert repos.tours.get_tour(tour_id) is None
    assert [booking.id for booking in repos.bookings.list_bookings()] == [kept_booking]
    assert repos.store.rows("guests") == []
    assert repos.store.rows("booking_services") == []
    assert repos.store.rows("expenses") == []
    assert repos.customers.get_customer(customer_id) is not None


def test_calendar_returns_overlapping_tours(repos):
    repos.add_tour("Spans", "2024-05-20T00:00:00+00:00", "2024-07-10T00:00:00+00:00")
    inside = repos.add_tour("Inside", "2024-06-10T00:00:00+00:00", "2024-06-12T00:00:00+00:00")
    repos.add_tour("Elsewhere", "2024-08-01T00:00:00+00:00", "2024-08-03T00:00:00+00:00")
    customer_id = repos.add_customer("Pham C")
    repos.add_booking(customer_id, inside, "10")
    repos.add_booking(customer_id, inside, "10")

    tours = repos.tours_service().list_calendar(month=6, year=2024)

    assert [tour.name for tour in tours] == ["Spans", "Inside"]
    assert tours[1].booked_guests == 2


def test_calendar_rejects_bad_month(repos):
    with pytest.raises(BadRequestError):
        repos.tours_service().list_calendar(month=13, year=2024)


def test_refresh_keeps_going_after_a_failed_write(repos):
    broken = repos.add_tour("Broken", "2024-05-01T00:00:00+00:00", "2024-05-03T00:00:00+00:00")
    healthy = repos.add_tour("Healthy", "2024-05-10T00:00:00+00:00", "2024-05-12T00:00:00+00:00")
    repos.tours.failing_ids.add(broken)

    assert repos.tours_service().refresh_statuses(NOW) == 1

    assert repos.tours.get_tour(broken).status == "UPCOMING"
    assert repos.tours.get_tour(healthy).status == "COMPLETED"


def test_update_tour_that_vanished_is_not_found(repos, monkeypatch):
    tour_id = repos.add_tour("Gone", "2099-06-01T00:00:00+00:00", "2099-06-05T00:00:00+00:00")
    monkeypatch.setattr(repos.tours, "update_tour", lambda tour_id, payload: None)

    with pytest.raises(NotFoundError):
        repos.tours_service().update_tour(tour_id, TourUpdateRequest(name="Renamed"))


def test_update_request_rejects_null_for_required_columns():
    with pytest.raises(ValueError):
        TourUpdateRequest.model_validate({"endDate": None})
    with pytest.raises(ValueError):
        TourUpdateRequest.model_validate({"name": None})

    request = TourUpdateRequest.model_validate({"description": None})
    assert request.model_dump(exclude_unset=True) == {"description": None}

from __future__ import annotations

from typing import Literal


TourType = Literal["GROUP", "PRIVATE", "ONE_ON_ONE"]
TourStatus = Literal["UPCOMING", "ONGOING", "COMPLETED"]
BookingStatus = Literal["PENDING", "CONFIRMED", "CANCELLED"]
ExpenseType = Literal["TOUR_COST", "PARTNER", "GUIDE", "STAFF"]
Gender = Literal["MALE", "FEMALE"]

TOUR_STATUSES: tuple[str, ...] = ("UPCOMING", "ONGOING", "COMPLETED")

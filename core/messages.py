"""User-facing booking messages."""

PROMO_APPLIED = "Promo code applied! Get {percent}% off"
PROMO_INVALID = "Invalid or expired promo code"
PROMO_UNAVAILABLE = "Could not validate promo code right now. Please try again."
PROMO_NOT_APPLICABLE = "Promo code applies to purchases of {minimum} or more"

BOOKING_CREATED = "Booking successful!"
BOOKING_CREATED_PAID = "Your booking is confirmed. Please proceed with payment to secure your tickets."
BOOKING_CREATED_FREE = "Your free tickets have been reserved!"
BOOKING_FAILED = "Booking failed. Please try again."
BOOKING_SERVICE_UNAVAILABLE = "Network error. Please check your connection."
BOOKING_SESSION_EXPIRED = "Please log in again to complete your booking"
INSUFFICIENT_SEATS = "Only {available} seats left for this event"

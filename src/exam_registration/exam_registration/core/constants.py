"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from .enums import RegistrationStatus

DEFAULT_SESSION_DAYS = 7
MIN_PASSWORD_LENGTH = 6

DEFAULT_EXAM_CENTER = "Main Examination Hall, Building A"
DEFAULT_REPORTING_TIME = "08:30 AM"

# Seat labels skip I and O so they are not confused with 1 and 0.
SEAT_LETTERS = "ABCDEFGHJKLMNPQRSTUVWXYZ"
SEAT_NUMBERS = 100

# Allowed registration status changes. Re-applying the current status is always a no-op.
STATUS_TRANSITIONS = {
    RegistrationStatus.PENDING: {RegistrationStatus.PAID, RegistrationStatus.CANCELLED},
    RegistrationStatus.PAID: {RegistrationStatus.SHOWN, RegistrationStatus.CONFIRMED, RegistrationStatus.CANCELLED},
    RegistrationStatus.SHOWN: {RegistrationStatus.CONFIRMED, RegistrationStatus.CANCELLED},
    RegistrationStatus.CONFIRMED: set(),
    RegistrationStatus.CANCELLED: set(),
}

# Statuses that grant access to the admit card.
ADMIT_CARD_STATUSES = {RegistrationStatus.PAID, RegistrationStatus.SHOWN, RegistrationStatus.CONFIRMED}

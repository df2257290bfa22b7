"""Application-wide constants for the consultation portal."""

from __future__ import annotations

BRAND_NAME = "Consultation Portal"

API_TITLE = f"{BRAND_NAME} API"
API_DESCRIPTION = "Students book consultations with faculty; faculty approve, reject or reschedule them."
API_VERSION = "1.0.0"

# Versioned API prefix applied when mounting routers
API_V1_PREFIX = "/api/v1"

# Booking constraints
DEFAULT_DURATION_MINUTES = 30
MAX_TOPIC_LENGTH = 150
MAX_STUDENT_MESSAGE_LENGTH = 300
MAX_ROOM_NUMBER_LENGTH = 50

# Account constraints
MIN_PASSWORD_LENGTH = 6
MAX_NAME_LENGTH = 100

# Faculty profile constraints and defaults
MAX_BIO_LENGTH = 500
REGISTRATION_DEFAULT_DEPARTMENT = "General"
REGISTRATION_DEFAULT_TITLE = "Lecturer"
REGISTRATION_DEFAULT_BIO = "No biography provided."
PROFILE_DEFAULT_TITLE = "Professor"
PROFILE_DEFAULT_BIO = "Dedicated academic professional."
DEFAULT_AVAILABLE_SLOTS = "Not specified"

# Login failures never reveal which check failed
INVALID_CREDENTIALS_MESSAGE = "Invalid email or password"

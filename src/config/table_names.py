from enum import Enum


class TableNames(str, Enum):
    GUESTS = "Guests"
    RSVPS = "RSVPs"


class GuestFields(str, Enum):
    FIRST_NAME = "First Name"
    LAST_NAME = "Last Name"
    EMAIL = "Email"
    PARTY_NAME = "Party Name"
    PLUS_ONE_ALLOWED = "Plus One Allowed"
    HAS_RESPONDED = "Has Responded"
    ADULT_KID = "Adult/Kid"


class RSVPFields(str, Enum):
    GUEST = "Guest"
    GUEST_NAME = "Guest Name"
    ATTENDING = "Attending"
    WELCOME_PARTY = "Welcome Party"
    BEACH_PARTY = "Beach Party"
    WEDDING = "Wedding"
    DIETARY = "Dietary"
    IS_ADULT = "Is Adult"
    IS_PLUS_ONE = "Is Plus One"
    PLUS_ONE_OF = "Plus One Of"
    SUBMITTED_BY = "Submitted By"
    MESSAGE = "Message"

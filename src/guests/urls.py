LOOKUP_GUEST_URL = "/api/v1/guests/lookup"
SUBMIT_RSVP_URL = "/api/v1/rsvp/submit"

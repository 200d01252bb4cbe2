from src.guests.dtos import Event, GuestDraftDTO, PlusOneDraftDTO
from src.guests.features.submit_rsvp.dtos import GuestSubmit, PlusOneSubmit


def test_plus_one_submit_from_dto_uses_camel_case_keys():
    plus_one = PlusOneDraftDTO(name="Jane Roe", events=[Event.BEACH], dietary="Vegan")

    payload = PlusOneSubmit.from_dto(plus_one).model_dump(by_alias=True, mode="json")

    assert payload == {"name": "Jane Roe", "events": ["beach"], "dietary": "Vegan"}
    assert PlusOneSubmit.model_validate(payload).to_dto() == plus_one


def test_guest_submit_from_dto_keeps_opt_out():
    guest = GuestDraftDTO(
        id="demo_leona", first_name="Leona", last_name="Njeim", is_adult=False, not_attending=True
    )

    payload = GuestSubmit.from_dto(guest).model_dump(by_alias=True, mode="json")

    assert payload["notAttending"] is True
    assert payload["isAdult"] is False
    assert GuestSubmit.model_validate(payload).to_dto() == guest


def test_null_dietary_reads_as_empty():
    plus_one = PlusOneSubmit.model_validate({"name": "Jane Roe", "events": [], "dietary": None})

    assert plus_one.to_dto().dietary == ""

"""Unit tests for AirtableClient, mocking the HTTP client."""

import httpx
import pytest

from src.airtable.client import (
    AirtableClient,
    AirtableError,
    equals_formula,
    linked_to_any_formula,
    name_match_formula,
)
from src.guests.dtos import StoreError

GUESTS_URL = "https://api.airtable.test/v0/appTEST/Guests"
RSVPS_URL = "https://api.airtable.test/v0/appTEST/RSVPs"

# =============================================================================
# Mock HTTP infrastructure
# =============================================================================


class MockResponse:
    def __init__(self, *, json_data=None, text="", status_code=200):
        self._json_data = json_data
        self.text = text
        self.status_code = status_code

    def json(self):
        if self._json_data is None:
            raise ValueError("No JSON object could be decoded")
        return self._json_data


class MockHttpClient:
    """
    Replaces httpx.AsyncClient as the http_client_class.

    GET responses are served in order; POST and PATCH always return the
    configured response.
    """

    def __init__(self):
        self.get_calls: list[dict] = []
        self.post_calls: list[dict] = []
        self.patch_calls: list[dict] = []
        self._get_responses: list[MockResponse] = []
        self._post_response = MockResponse(json_data={"records": []})
        self._patch_response = MockResponse(json_data={"id": "rec1", "fields": {}})
        self.raise_on_request: Exception | None = None

    def add_get(self, response: MockResponse) -> "MockHttpClient":
        self._get_responses.append(response)
        return self

    def set_post(self, response: MockResponse) -> "MockHttpClient":
        self._post_response = response
        return self

    def set_patch(self, response: MockResponse) -> "MockHttpClient":
        self._patch_response = response
        return self

    async def get(self, url: str, **kwargs) -> MockResponse:
        self.get_calls.append({"url": url, **kwargs})
        if self.raise_on_request:
            raise self.raise_on_request
        return self._get_responses.pop(0)

    async def post(self, url: str, **kwargs) -> MockResponse:
        self.post_calls.append({"url": url, **kwargs})
        if self.raise_on_request:
            raise self.raise_on_request
        return self._post_response

    async def patch(self, url: str, **kwargs) -> MockResponse:
        self.patch_calls.append({"url": url, **kwargs})
        if self.raise_on_request:
            raise self.raise_on_request
        return self._patch_response

    async def __aenter__(self):
        return self

    async def __aexit__(self, *args):
        pass

    def __call__(self):
        """Called by AirtableClient as self._http_client_class()."""
        return self


class MockConfig:
    airtable_api_url = "https://api.airtable.test/v0"
    airtable_api_key = "key-test"
    airtable_base_id = "appTEST"


@pytest.fixture
def http_client() -> MockHttpClient:
    return MockHttpClient()


@pytest.fixture
def airtable(http_client) -> AirtableClient:
    return AirtableClient(http_client_class=http_client, config=MockConfig())


# =============================================================================
# Formulas
# =============================================================================


def test_name_match_formula_lowercases_both_sides():
    formula = name_match_formula("First Name", "Last Name", "John", "Smith")

    assert formula == (
        'AND(LOWER({First Name}) = LOWER("John"), LOWER({Last Name}) = LOWER("Smith"))'
    )


def test_formula_strings_escape_quotes_and_backslashes():
    formula = equals_formula("Party Name", 'The "Best" \\ Family')

    assert formula == '{Party Name} = "The \\"Best\\" \\\\ Family"'


def test_linked_to_any_formula_checks_every_field_for_every_id():
    formula = linked_to_any_formula(["Guest", "Plus One Of"], ["rec1", "rec2"])

    assert formula == (
        'OR(FIND("rec1", ARRAYJOIN({Guest})), FIND("rec1", ARRAYJOIN({Plus One Of})), '
        'FIND("rec2", ARRAYJOIN({Guest})), FIND("rec2", ARRAYJOIN({Plus One Of})))'
    )


# =============================================================================
# list_records
# =============================================================================


@pytest.mark.asyncio
async def test_list_records_sends_formula_and_auth(airtable, http_client):
    http_client.add_get(MockResponse(json_data={"records": [{"id": "rec1", "fields": {}}]}))

    records = await airtable.list_records("Guests", '{Party Name} = "X"')

    assert records == [{"id": "rec1", "fields": {}}]
    call = http_client.get_calls[0]
    assert call["url"] == GUESTS_URL
    assert call["params"] == {"filterByFormula": '{Party Name} = "X"'}
    assert call["headers"]["Authorization"] == "Bearer key-test"


@pytest.mark.asyncio
async def test_list_records_follows_offset_pages(airtable, http_client):
    http_client.add_get(
        MockResponse(json_data={"records": [{"id": "rec1"}], "offset": "itr2"})
    ).add_get(MockResponse(json_data={"records": [{"id": "rec2"}]}))

    records = await airtable.list_records("Guests", "TRUE()")

    assert [record["id"] for record in records] == ["rec1", "rec2"]
    assert http_client.get_calls[1]["params"] == {"filterByFormula": "TRUE()", "offset": "itr2"}


@pytest.mark.asyncio
async def test_list_records_raises_on_error_status(airtable, http_client):
    http_client.add_get(MockResponse(json_data={"error": "NOT_FOUND"}, text="nope", status_code=404))

    with pytest.raises(AirtableError) as exc_info:
        await airtable.list_records("Guests", "TRUE()")

    assert exc_info.value.status_code == 404
    assert isinstance(exc_info.value, StoreError)


@pytest.mark.asyncio
async def test_list_records_raises_on_malformed_json(airtable, http_client):
    http_client.add_get(MockResponse(json_data=None, text="<html>"))

    with pytest.raises(AirtableError):
        await airtable.list_records("Guests", "TRUE()")


@pytest.mark.asyncio
async def test_list_records_raises_when_records_missing(airtable, http_client):
    http_client.add_get(MockResponse(json_data={"unexpected": True}))

    with pytest.raises(AirtableError):
        await airtable.list_records("Guests", "TRUE()")


@pytest.mark.asyncio
async def test_transport_errors_become_airtable_errors(airtable, http_client):
    http_client.raise_on_request = httpx.ConnectError("connection refused")

    with pytest.raises(AirtableError):
        await airtable.list_records("Guests", "TRUE()")


@pytest.mark.asyncio
async def test_missing_api_key_fails_before_any_request(http_client):
    class NoKeyConfig(MockConfig):
        airtable_api_key = ""

    airtable = AirtableClient(http_client_class=http_client, config=NoKeyConfig())

    with pytest.raises(AirtableError):
        await airtable.list_records("Guests", "TRUE()")

    assert http_client.get_calls == []


# =============================================================================
# create_records / update_record
# =============================================================================


@pytest.mark.asyncio
async def test_create_records_wraps_fields(airtable, http_client):
    http_client.set_post(
        MockResponse(json_data={"records": [{"id": "recA", "fields": {"Guest Name": "A"}}]})
    )

    created = await airtable.create_records("RSVPs", [{"Guest Name": "A"}])

    assert created == [{"id": "recA", "fields": {"Guest Name": "A"}}]
    call = http_client.post_calls[0]
    assert call["url"] == RSVPS_URL
    assert call["json"] == {"records": [{"fields": {"Guest Name": "A"}}]}


@pytest.mark.asyncio
async def test_create_records_batches_by_ten(airtable, http_client):
    rows = [{"Guest Name": f"Guest {i}"} for i in range(12)]

    await airtable.create_records("RSVPs", rows)

    assert len(http_client.post_calls) == 2
    assert len(http_client.post_calls[0]["json"]["records"]) == 10
    assert len(http_client.post_calls[1]["json"]["records"]) == 2


@pytest.mark.asyncio
async def test_create_records_raises_on_api_error_payload(airtable, http_client):
    http_client.set_post(
        MockResponse(json_data={"error": {"type": "INVALID_VALUE_FOR_COLUMN"}}, status_code=422)
    )

    with pytest.raises(AirtableError):
        await airtable.create_records("RSVPs", [{"Guest Name": "A"}])


@pytest.mark.asyncio
async def test_update_record_patches_single_record(airtable, http_client):
    await airtable.update_record("Guests", "rec42", {"Has Responded": True})

    call = http_client.patch_calls[0]
    assert call["url"] == f"{GUESTS_URL}/rec42"
    assert call["json"] == {"fields": {"Has Responded": True}}


@pytest.mark.asyncio
async def test_update_record_raises_on_error_status(airtable, http_client):
    http_client.set_patch(MockResponse(json_data={"error": "x"}, status_code=500))

    with pytest.raises(AirtableError):
        await airtable.update_record("Guests", "rec42", {"Has Responded": True})

"""Thin async client for the Airtable REST API.

Only the three calls the RSVP workflow needs: filtered list, batch create and
single-record patch.
"""

import logging
from typing import Any, Protocol
from urllib.parse import quote

import httpx

from src.config.settings import settings
from src.guests.dtos import StoreError

logger = logging.getLogger(__name__)

# Airtable rejects create requests with more than 10 records
MAX_RECORDS_PER_REQUEST = 10


class AirtableError(StoreError):
    """Raised for transport errors, non-2xx answers and malformed payloads."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.status_code = status_code
        super().__init__(message)


class AirtableConfig(Protocol):
    airtable_api_url: str
    airtable_api_key: str
    airtable_base_id: str


def escape_formula_string(value: str) -> str:
    """Escape a value for use inside a double-quoted formula string literal."""
    return value.replace("\\", "\\\\").replace('"', '\\"')


def name_match_formula(first_field: str, last_field: str, first_name: str, last_name: str) -> str:
    return (
        f'AND(LOWER({{{first_field}}}) = LOWER("{escape_formula_string(first_name)}"), '
        f'LOWER({{{last_field}}}) = LOWER("{escape_formula_string(last_name)}"))'
    )


def equals_formula(field: str, value: str) -> str:
    return f'{{{field}}} = "{escape_formula_string(value)}"'


def linked_to_any_formula(fields: list[str], record_ids: list[str]) -> str:
    """Match rows whose link fields contain any of the given record ids."""
    parts = [
        f'FIND("{escape_formula_string(record_id)}", ARRAYJOIN({{{field}}}))'
        for record_id in record_ids
        for field in fields
    ]
    return f"OR({', '.join(parts)})"


class AirtableClient:
    def __init__(
        self,
        http_client_class: type[httpx.AsyncClient] = httpx.AsyncClient,
        config: AirtableConfig = settings,
    ):
        self._http_client_class = http_client_class
        self._config = config

    def _table_url(self, table: str) -> str:
        return f"{self._config.airtable_api_url}/{self._config.airtable_base_id}/{quote(table)}"

    def _headers(self) -> dict[str, str]:
        if not self._config.airtable_api_key:
            raise AirtableError("AIRTABLE_API_KEY is not set")
        return {
            "Authorization": f"Bearer {self._config.airtable_api_key}",
            "Content-Type": "application/json",
        }

    @staticmethod
    def _parse(response: httpx.Response, action: str) -> dict[str, Any]:
        if response.status_code >= 400:
            raise AirtableError(
                f"Airtable {action} failed: {response.status_code} - {response.text}",
                status_code=response.status_code,
            )
        try:
            data = response.json()
        except ValueError as e:
            raise AirtableError(f"Airtable {action} returned invalid JSON: {e}") from e
        if not isinstance(data, dict):
            raise AirtableError(f"Airtable {action} returned an unexpected payload")
        if data.get("error"):
            raise AirtableError(f"Airtable {action} error: {data['error']}")
        return data

    async def list_records(self, table: str, formula: str) -> list[dict[str, Any]]:
        """Fetch every row matching `formula`, following pagination offsets."""
        headers = self._headers()
        records: list[dict[str, Any]] = []
        params: dict[str, str] = {"filterByFormula": formula}
        try:
            async with self._http_client_class() as client:
                while True:
                    response = await client.get(
                        self._table_url(table), headers=headers, params=params
                    )
                    data = self._parse(response, f"list {table}")
                    page = data.get("records")
                    if not isinstance(page, list):
                        raise AirtableError(f"Airtable list {table} response has no records")
                    records.extend(page)
                    offset = data.get("offset")
                    if not offset:
                        break
                    params = {"filterByFormula": formula, "offset": offset}
        except httpx.HTTPError as e:
            raise AirtableError(f"Airtable list {table} request failed: {e}") from e
        return records

    async def create_records(
        self, table: str, fields_list: list[dict[str, Any]]
    ) -> list[dict[str, Any]]:
        headers = self._headers()
        created: list[dict[str, Any]] = []
        try:
            async with self._http_client_class() as client:
                for start in range(0, len(fields_list), MAX_RECORDS_PER_REQUEST):
                    batch = fields_list[start : start + MAX_RECORDS_PER_REQUEST]
                    response = await client.post(
                        self._table_url(table),
                        headers=headers,
                        json={"records": [{"fields": fields} for fields in batch]},
                    )
                    data = self._parse(response, f"create {table}")
                    created.extend(data.get("records", []))
        except httpx.HTTPError as e:
            raise AirtableError(f"Airtable create {table} request failed: {e}") from e
        logger.debug(f"Created {len(created)} records in {table}")
        return created

    async def update_record(
        self, table: str, record_id: str, fields: dict[str, Any]
    ) -> dict[str, Any]:
        headers = self._headers()
        try:
            async with self._http_client_class() as client:
                response = await client.patch(
                    f"{self._table_url(table)}/{quote(record_id)}",
                    headers=headers,
                    json={"fields": fields},
                )
        except httpx.HTTPError as e:
            raise AirtableError(f"Airtable update {table} request failed: {e}") from e
        return self._parse(response, f"update {table}")

"""HTTP client data layer used by presentation code.

Collections are cached in memory after a successful fetch. Every call
returns a :class:`Result` rather than raising on transport failures, so the
caller decides between showing stale data, an error state or retrying.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Any, Generic, Literal, Optional, TypeVar

import httpx

from ..config import settings
from .sample_data import sample_collection

logger = logging.getLogger(__name__)

T = TypeVar("T")
Source = Literal["server", "cache", "sample", "none"]
Record = dict[str, Any]


@dataclass(slots=True)
class Result(Generic[T]):
    data: Optional[T] = None
    error: Optional[str] = None
    source: Source = "server"

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def stale(self) -> bool:
        return self.source in ("cache", "sample")


def _error_message(exc: httpx.HTTPError) -> str:
    if isinstance(exc, httpx.HTTPStatusError):
        try:
            body = exc.response.json()
        except ValueError:
            body = None
        if isinstance(body, dict) and body.get("message"):
            return f"{body['message']} (HTTP {exc.response.status_code})"
        return f"HTTP {exc.response.status_code}"
    return str(exc) or exc.__class__.__name__


class PlannerClient:
    COLLECTIONS = ("customers", "jobs", "rounds")

    def __init__(
        self,
        base_url: str | None = None,
        *,
        http_client: httpx.Client | None = None,
        timeout: float | None = None,
        sample_fallback: bool = False,
    ) -> None:
        self._http = http_client or httpx.Client(
            base_url=base_url or settings.client_base_url,
            timeout=timeout or settings.client_timeout_seconds,
            headers={"Content-Type": "application/json"},
        )
        self.sample_fallback = sample_fallback
        self._cache: dict[str, list[Record]] = {name: [] for name in self.COLLECTIONS}
        self._loaded: set[str] = set()

    def close(self) -> None:
        self._http.close()

    def __enter__(self) -> "PlannerClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    # Cached collections; empty until the first successful fetch.
    @property
    def customers(self) -> list[Record]:
        return self._cache["customers"]

    @property
    def jobs(self) -> list[Record]:
        return self._cache["jobs"]

    @property
    def rounds(self) -> list[Record]:
        return self._cache["rounds"]

    def _request(self, method: str, path: str, **kwargs: Any) -> Result[Any]:
        try:
            response = self._http.request(method, path, **kwargs)
            response.raise_for_status()
            data = response.json() if response.content else None
        except httpx.HTTPError as exc:
            message = _error_message(exc)
            logger.warning(f"{method} {path} failed: {message}")
            return Result(error=message, source="none")
        except ValueError:
            message = f"Response from {method} {path} was not valid JSON"
            logger.warning(message)
            return Result(error=message, source="none")
        return Result(data=data)

    def _fetch_collection(self, name: str) -> Result[list[Record]]:
        result = self._request("GET", f"/{name}")
        if result.ok:
            self._cache[name] = list(result.data or [])
            self._loaded.add(name)
            return Result(data=list(self._cache[name]))
        if name in self._loaded:
            return Result(data=list(self._cache[name]), error=result.error, source="cache")
        if self.sample_fallback:
            logger.warning(f"Showing sample {name}; the server could not be reached")
            return Result(data=sample_collection(name), error=result.error, source="sample")
        return result

    def _replace(self, name: str, record: Record) -> None:
        cache = self._cache[name]
        for index, existing in enumerate(cache):
            if existing.get("id") == record.get("id"):
                cache[index] = record
                return
        cache.append(record)

    def _remove(self, name: str, record_id: str) -> None:
        self._cache[name] = [record for record in self._cache[name] if record.get("id") != record_id]

    def _create(self, name: str, payload: Record) -> Result[Record]:
        result = self._request("POST", f"/{name}", json=payload)
        if result.ok:
            self._cache[name].append(result.data)
        return result

    def _update(self, name: str, record_id: str, changes: Record) -> Result[Record]:
        result = self._request("PUT", f"/{name}/{record_id}", json=changes)
        if result.ok:
            self._replace(name, result.data)
        return result

    def _delete(self, name: str, record_id: str) -> Result[None]:
        result = self._request("DELETE", f"/{name}/{record_id}")
        if not result.ok:
            return result
        self._remove(name, record_id)
        return Result()

    def refresh(self) -> dict[str, Result[list[Record]]]:
        return {name: self._fetch_collection(name) for name in self.COLLECTIONS}

    # Customers
    def fetch_customers(self) -> Result[list[Record]]:
        return self._fetch_collection("customers")

    def create_customer(self, payload: Record) -> Result[Record]:
        return self._create("customers", payload)

    def update_customer(self, customer_id: str, changes: Record) -> Result[Record]:
        return self._update("customers", customer_id, changes)

    def delete_customer(self, customer_id: str) -> Result[None]:
        """Delete on the server, then drop the customer's jobs from the local cache."""
        result = self._delete("customers", customer_id)
        if result.ok:
            self._cache["jobs"] = [job for job in self._cache["jobs"] if job.get("customerId") != customer_id]
        return result

    def verify_customer_address(self, customer_id: str) -> Result[Record]:
        result = self._request("POST", f"/customers/{customer_id}/verify-address")
        if result.ok:
            self._replace("customers", result.data["customer"])
        return result

    # Jobs
    def fetch_jobs(self, **filters: Any) -> Result[list[Record]]:
        """Fetch jobs; filtered fetches are returned as-is and never cached."""
        if not filters:
            return self._fetch_collection("jobs")
        params = {key: value.isoformat() if isinstance(value, date) else value for key, value in filters.items() if value is not None}
        return self._request("GET", "/jobs", params=params)

    def create_job(self, payload: Record) -> Result[Record]:
        return self._create("jobs", payload)

    def update_job(self, job_id: str, changes: Record) -> Result[Record]:
        return self._update("jobs", job_id, changes)

    def update_job_status(self, job_id: str, status: str, completion_notes: str | None = None) -> Result[Record]:
        body: Record = {"status": status}
        if completion_notes is not None:
            body["completionNotes"] = completion_notes
        result = self._request("PUT", f"/jobs/{job_id}/status", json=body)
        if result.ok:
            self._replace("jobs", result.data)
        return result

    def complete_job(self, job_id: str, notes: str | None = None) -> Result[Record]:
        return self.update_job_status(job_id, "completed", notes)

    def delete_job(self, job_id: str) -> Result[None]:
        return self._delete("jobs", job_id)

    def generate_recurring_jobs(self, start_date: date, end_date: date) -> Result[list[Record]]:
        body = {"startDate": start_date.isoformat(), "endDate": end_date.isoformat()}
        result = self._request("POST", "/jobs/generate-recurring", json=body)
        if not result.ok:
            return result
        new_jobs = list(result.data.get("jobs") or [])
        self._cache["jobs"].extend(new_jobs)
        return Result(data=new_jobs)

    # Rounds
    def fetch_rounds(self) -> Result[list[Record]]:
        return self._fetch_collection("rounds")

    def create_round(self, payload: Record) -> Result[Record]:
        return self._create("rounds", payload)

    def update_round(self, round_id: str, changes: Record) -> Result[Record]:
        return self._update("rounds", round_id, changes)

    def delete_round(self, round_id: str) -> Result[None]:
        return self._delete("rounds", round_id)

    # Addresses
    def suggest_addresses(self, query: str) -> Result[list[Record]]:
        return self._request("GET", "/geocoding/suggest", params={"q": query})

    def verify_address(self, address: str) -> Result[Record]:
        return self._request("POST", "/geocoding/verify", json={"address": address})

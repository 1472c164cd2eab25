"""HTTP client for the patient collection endpoint.

Pages are fetched one at a time. ``get_page`` hides transient failures
(rate limiting, 5xx, network errors) behind a retry loop; ``fetch_all_patients``
skips any page that still fails so a single bad page never aborts the sync.
"""

from __future__ import annotations

import logging
import time

import requests

from ksense_risk.exceptions import MalformedPageError, PageFetchError

log = logging.getLogger(__name__)

MAX_RETRIES = 3
RETRY_BASE_DELAY = 1.0
RATE_LIMIT_WAIT = 2.0
PAGE_DELAY = 0.5
MAX_PAGES = 50

RETRYABLE_STATUSES = (500, 503)


class PatientClient:
    def __init__(self, config, session=None, sleep=time.sleep):
        self.config = config
        self.session = session or requests.Session()
        self.session.headers.update({
            "x-api-key": config.api_key,
            "Content-Type": "application/json",
        })
        self.sleep = sleep

    def _url(self, path):
        return f"{self.config.base_url}{path}"

    def _backoff(self, page, attempt, reason):
        delay = RETRY_BASE_DELAY * (attempt + 1)
        log.warning("[page %d] %s, retrying in %.1fs (attempt %d of %d)",
                    page, reason, delay, attempt + 1, MAX_RETRIES)
        self.sleep(delay)

    def get_page(self, page: int, limit: int) -> dict:
        """Fetch one page envelope, retrying transient failures.

        429 responses are waited out without consuming an attempt. 500/503
        and network errors get up to ``MAX_RETRIES`` retries with linear
        backoff. Anything else that is not 2xx fails at once.

        Raises:
            PageFetchError: retries exhausted or a non-retryable status.
            MalformedPageError: the body is not a JSON object with a ``data`` list.
        """
        attempt = 0
        rate_limit_waits = 0
        params = {"page": page, "limit": limit}
        while True:
            try:
                r = self.session.get(self._url("/patients"), params=params,
                                     timeout=self.config.timeout)
            except requests.RequestException as exc:
                if attempt < MAX_RETRIES:
                    self._backoff(page, attempt, f"network error ({exc.__class__.__name__})")
                    attempt += 1
                    continue
                raise PageFetchError(
                    page, f"network failure on page {page} after {MAX_RETRIES} retries"
                ) from exc

            if r.status_code == 429:
                limit_waits = self.config.max_rate_limit_waits
                if limit_waits is not None and rate_limit_waits >= limit_waits:
                    raise PageFetchError(
                        page, f"still rate limited on page {page} after {rate_limit_waits} waits", 429
                    )
                rate_limit_waits += 1
                log.warning("[page %d] rate limit hit, waiting %.1fs", page, RATE_LIMIT_WAIT)
                self.sleep(RATE_LIMIT_WAIT)
                continue

            if r.status_code in RETRYABLE_STATUSES:
                if attempt < MAX_RETRIES:
                    self._backoff(page, attempt, f"server error ({r.status_code})")
                    attempt += 1
                    continue
                raise PageFetchError(
                    page, f"server failed on page {page} after {MAX_RETRIES} retries", r.status_code
                )

            if not r.ok:
                raise PageFetchError(page, f"fetch failed with status {r.status_code}", r.status_code)

            try:
                body = r.json()
            except ValueError as exc:
                raise MalformedPageError(page, f"page {page} body is not valid JSON") from exc
            if not isinstance(body, dict) or not isinstance(body.get("data"), list):
                raise MalformedPageError(page, f"page {page} returned bad data format")
            return body

    def fetch_all_patients(self, page_size: int = 20) -> list:
        """Collect every reachable patient record, in fetch order.

        Never raises for per-page problems; the result may be partial or empty.
        """
        patients = []
        page = 1
        total_pages = None

        log.info("Starting patient data sync")
        while page <= MAX_PAGES:
            if page > 1:
                self.sleep(PAGE_DELAY)
            try:
                data = self.get_page(page, page_size)
            except PageFetchError as exc:
                log.error("Failed to load page %d, skipping: %s", page, exc)
                page += 1
                continue

            records = data["data"]
            valid = [r for r in records if isinstance(r, dict)]
            if len(valid) != len(records):
                log.warning("[page %d] dropped %d records that are not objects",
                            page, len(records) - len(valid))
            patients.extend(valid)

            pagination = data.get("pagination")
            if isinstance(pagination, dict):
                has_next = bool(pagination.get("hasNext", False))
                total_pages = pagination.get("totalPages")
            else:
                has_next = len(records) == page_size

            log.info("Progress: page %d/%s collected", page, total_pages or "?")
            if not has_next:
                break
            page += 1
        else:
            log.warning("Safety limit of %d pages reached, stopping", MAX_PAGES)

        log.info("Sync complete, found %d patients", len(patients))
        return patients

    def submit_assessment(self, alerts) -> dict:
        r = self.session.post(self._url("/submit-assessment"), json=alerts.to_payload(),
                              timeout=self.config.timeout)
        r.raise_for_status()
        return r.json()

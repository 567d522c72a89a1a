"""Generic FHIR R4 HTTP client."""

from __future__ import annotations

from typing import Any

import requests


FHIR_JSON = "application/fhir+json"


class FHIRClient:
    """Minimal FHIR R4 REST client issuing one request per call."""

    def __init__(
        self,
        base_url: str,
        access_token: str | None = None,
        session: requests.Session | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self._access_token = access_token
        self._session = session or requests.Session()

    def url_for(self, path: str) -> str:
        """Join a request path such as '/DocumentReference' onto the base URL.

        A query-only path ('?_count=1') is appended without a slash.
        """
        if path.startswith("?"):
            return f"{self.base_url}{path}"
        return f"{self.base_url}/{path.lstrip('/')}"

    def build_headers(
        self,
        headers: dict[str, str] | None = None,
        has_body: bool = False,
    ) -> dict[str, str]:
        """Accept first, caller headers on top, then auth and content type."""
        merged = {"Accept": FHIR_JSON}
        if headers:
            merged.update(headers)
        if self._access_token:
            merged["Authorization"] = f"Bearer {self._access_token}"
        if has_body:
            merged["Content-Type"] = FHIR_JSON
        return merged

    def request(
        self,
        method: str,
        path: str,
        body: Any = None,
        headers: dict[str, str] | None = None,
    ) -> requests.Response:
        """Send a request; ``body`` is serialized as JSON when not None."""
        return self._session.request(
            method.upper(),
            self.url_for(path),
            json=body,
            headers=self.build_headers(headers, has_body=body is not None),
        )

    def post_resource(
        self,
        resource_type: str,
        resource: dict,
        headers: dict[str, str] | None = None,
    ) -> requests.Response:
        """POST a FHIR resource and return the response."""
        return self.request("POST", resource_type, body=resource, headers=headers)

    def get_resource(
        self,
        resource_type: str,
        resource_id: str,
        headers: dict[str, str] | None = None,
    ) -> requests.Response:
        """GET a FHIR resource by type and logical ID."""
        return self.request("GET", f"{resource_type}/{resource_id}", headers=headers)

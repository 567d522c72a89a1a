"""Unit tests for the generic FHIR HTTP client."""

from __future__ import annotations

import json

import pytest
import requests_mock as req_mock

from fhir_notes.fhir.fhir_client import FHIR_JSON, FHIRClient


BASE_URL = "https://fhir.example.com/r4"
SAMPLE_DOC_REF = {"resourceType": "DocumentReference", "status": "current"}


class TestFHIRClientPost:
    def test_post_resource_sends_to_correct_url(self) -> None:
        with req_mock.Mocker() as m:
            m.post(f"{BASE_URL}/DocumentReference", json={"id": "dr-001"}, status_code=201)
            client = FHIRClient(BASE_URL)
            response = client.post_resource("DocumentReference", SAMPLE_DOC_REF)
        assert response.status_code == 201

    def test_post_resource_sets_fhir_content_type(self) -> None:
        with req_mock.Mocker() as m:
            m.post(f"{BASE_URL}/DocumentReference", json={}, status_code=201)
            client = FHIRClient(BASE_URL)
            client.post_resource("DocumentReference", SAMPLE_DOC_REF)
            assert m.last_request.headers["Content-Type"] == FHIR_JSON

    def test_post_resource_serializes_body(self) -> None:
        with req_mock.Mocker() as m:
            m.post(f"{BASE_URL}/DocumentReference", json={}, status_code=201)
            FHIRClient(BASE_URL).post_resource("DocumentReference", SAMPLE_DOC_REF)
            assert json.loads(m.last_request.body) == SAMPLE_DOC_REF

    def test_post_resource_custom_headers_merged(self) -> None:
        with req_mock.Mocker() as m:
            m.post(f"{BASE_URL}/DocumentReference", json={}, status_code=201)
            client = FHIRClient(BASE_URL)
            client.post_resource(
                "DocumentReference",
                SAMPLE_DOC_REF,
                headers={"X-Test-Purpose": "create"},
            )
            assert m.last_request.headers["X-Test-Purpose"] == "create"

    def test_post_resource_strips_trailing_slash(self) -> None:
        with req_mock.Mocker() as m:
            m.post(f"{BASE_URL}/Patient", json={}, status_code=201)
            client = FHIRClient(BASE_URL + "/")  # trailing slash
            response = client.post_resource("Patient", {"resourceType": "Patient"})
        assert response.status_code == 201


class TestFHIRClientGet:
    def test_get_resource_correct_url(self) -> None:
        with req_mock.Mocker() as m:
            m.get(f"{BASE_URL}/Patient/p-001", json={"resourceType": "Patient", "id": "p-001"})
            client = FHIRClient(BASE_URL)
            response = client.get_resource("Patient", "p-001")
        assert response.status_code == 200
        assert response.json()["id"] == "p-001"

    def test_get_resource_accept_header(self) -> None:
        with req_mock.Mocker() as m:
            m.get(f"{BASE_URL}/Encounter/e-001", json={})
            client = FHIRClient(BASE_URL)
            client.get_resource("Encounter", "e-001")
            assert m.last_request.headers["Accept"] == FHIR_JSON

    def test_get_has_no_content_type(self) -> None:
        with req_mock.Mocker() as m:
            m.get(f"{BASE_URL}/metadata", json={})
            FHIRClient(BASE_URL).request("get", "/metadata")
            assert "Content-Type" not in m.last_request.headers
            assert m.last_request.method == "GET"


class TestFHIRClientAuth:
    def test_bearer_token_added(self) -> None:
        with req_mock.Mocker() as m:
            m.get(f"{BASE_URL}/metadata", json={})
            FHIRClient(BASE_URL, access_token="abc").request("GET", "/metadata")
            assert m.last_request.headers["Authorization"] == "Bearer abc"

    def test_no_token_no_authorization(self) -> None:
        with req_mock.Mocker() as m:
            m.get(f"{BASE_URL}/metadata", json={})
            FHIRClient(BASE_URL).request("GET", "/metadata")
            assert "Authorization" not in m.last_request.headers


class TestBuildHeaders:
    def test_caller_can_override_accept(self) -> None:
        headers = FHIRClient(BASE_URL).build_headers({"Accept": "application/json"})
        assert headers["Accept"] == "application/json"

    def test_content_type_only_with_body(self) -> None:
        client = FHIRClient(BASE_URL)
        assert "Content-Type" not in client.build_headers()
        assert client.build_headers(has_body=True)["Content-Type"] == FHIR_JSON

    def test_url_for_query_only_path_has_no_slash(self) -> None:
        assert FHIRClient(BASE_URL).url_for("?_count=1") == f"{BASE_URL}?_count=1"

    def test_query_only_request_url(self) -> None:
        with req_mock.Mocker() as m:
            m.get(f"{BASE_URL}?_count=1", json={})
            FHIRClient(BASE_URL).request("GET", "?_count=1")
            assert m.last_request.url == f"{BASE_URL}?_count=1"

    @pytest.mark.parametrize("path", ["DocumentReference", "/DocumentReference"])
    def test_url_for_joins_single_slash(self, path: str) -> None:
        assert FHIRClient(BASE_URL).url_for(path) == f"{BASE_URL}/DocumentReference"

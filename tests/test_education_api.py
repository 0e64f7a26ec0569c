import httpx
import pytest

from datadesk.ingest import EducationDataClient
from datadesk.ingest.education_api import DEFAULT_BASE_URL, default_base_url
from datadesk.models import InstitutionControl


def _transport(payloads: dict[str, dict], seen: list[httpx.Request] | None = None) -> httpx.MockTransport:
    def handler(request: httpx.Request) -> httpx.Response:
        if seen is not None:
            seen.append(request)
        payload = payloads.get(request.url.path)
        if payload is None:
            return httpx.Response(404, json={"detail": "not found"})
        return httpx.Response(200, json=payload)

    return httpx.MockTransport(handler)


def test_fetch_admissions_filters_total_rows():
    seen: list[httpx.Request] = []
    transport = _transport(
        {
            "/api/v1/college-university/ipeds/admissions-enrollment/2015/": {
                "count": 2,
                "next": None,
                "results": [
                    {"unitid": 1, "year": 2015, "sex": 99, "ftpt": 99, "number_applied": 900, "number_enrolled_total": 300},
                    {"unitid": 1, "year": 2015, "sex": 2, "ftpt": 99, "number_applied": 500, "number_enrolled_total": 160},
                ],
            }
        },
        seen,
    )

    with EducationDataClient("https://example.test/api/v1", transport=transport) as client:
        records = client.fetch_admissions(2015, fips=6)

    assert len(records) == 1
    assert records[0].number_enrolled == 300
    assert seen[0].url.params["fips"] == "6"


def test_fetch_directory_decodes_rows():
    transport = _transport(
        {
            "/api/v1/college-university/ipeds/directory/2015/": {
                "count": 1,
                "next": None,
                "results": [{"unitid": 1, "year": 2015, "inst_name": "State U", "inst_control": 1}],
            }
        }
    )

    with EducationDataClient("https://example.test/api/v1", transport=transport) as client:
        records = client.fetch_directory(2015)

    assert records[0].institution_control is InstitutionControl.PUBLIC


def test_fetch_results_logs_truncated_pages(caplog):
    transport = _transport(
        {
            "/api/v1/college-university/ipeds/directory/2016/": {
                "count": 5000,
                "next": "https://example.test/api/v1/college-university/ipeds/directory/2016/?page=2",
                "results": [{"unitid": 1, "year": 2016, "inst_name": "State U", "inst_control": 1}],
            }
        }
    )

    with EducationDataClient("https://example.test/api/v1", transport=transport) as client:
        with caplog.at_level("WARNING"):
            records = client.fetch_directory(2016)

    assert len(records) == 1
    assert "further pages are not fetched" in caplog.text


def test_fetch_results_raises_for_http_errors():
    with EducationDataClient("https://example.test/api/v1", transport=_transport({})) as client:
        with pytest.raises(httpx.HTTPStatusError):
            client.fetch_results("/college-university/ipeds/directory/1900/")


def test_fetch_results_rejects_unexpected_payload():
    transport = _transport({"/api/v1/odd/": {"rows": []}})

    with EducationDataClient("https://example.test/api/v1", transport=transport) as client:
        with pytest.raises(ValueError):
            client.fetch_results("/odd/")


def test_default_base_url_reads_environment(monkeypatch):
    monkeypatch.delenv("DATADESK_EDUCATION_API_URL", raising=False)
    assert default_base_url() == DEFAULT_BASE_URL

    monkeypatch.setenv("DATADESK_EDUCATION_API_URL", "http://localhost:9000/api/v1")
    assert default_base_url() == "http://localhost:9000/api/v1"

import logging
import ssl

import httpx
import pytest

from csaf_checker.adapters.http_client import FetchResult, RedirectTracker, build_client
from csaf_checker.core.config import CheckerSettings


def _chain(site, hops: int) -> None:
    for i in range(hops):
        site.redirect(f"https://x/{i}", f"https://x/{i + 1}")
    site.add(f"https://x/{hops}", "done")


def test_tracker_records_every_hop_of_a_chain(site):
    site.redirect("https://x/a", "https://x/b")
    site.redirect("https://x/b", "https://x/c")
    site.add("https://x/c", "ok")
    processor = site.processor()

    response = processor.client.get("https://x/a")

    assert response.status_code == 200
    assert str(response.url) == "https://x/c"
    assert processor.redirects["https://x/c"] == "https://x/a, https://x/b"
    assert processor.redirects["https://x/b"] == "https://x/a"


def test_ten_hops_are_followed(site):
    _chain(site, 10)
    processor = site.processor()

    response = processor.client.get("https://x/0")

    assert response.text == "done"
    assert len(processor.redirects) == 10


def test_eleven_hops_abort_with_too_many_redirections(site):
    _chain(site, 11)
    processor = site.processor()

    with pytest.raises(httpx.TooManyRedirects, match="Too many redirections"):
        processor.client.get("https://x/0")
    assert "https://x/11" not in site.requests


def test_processor_fetch_turns_redirect_overflow_into_error(site):
    _chain(site, 11)
    processor = site.processor()

    fetched = processor.fetch("https://x/0")

    assert not fetched.ok
    assert "Too many redirections" in fetched.failure()


def test_tracker_check_redirect_direct():
    tracker = RedirectTracker(max_redirects=1)
    first = httpx.Request("GET", "https://x/a")
    second = httpx.Request("GET", "https://x/b")

    tracker.check_redirect(second, [first])
    assert tracker.redirects == {"https://x/b": "https://x/a"}

    with pytest.raises(httpx.TooManyRedirects):
        tracker.check_redirect(httpx.Request("GET", "https://x/c"), [first, second])

    tracker.clear()
    assert tracker.redirects == {}


def test_transport_errors_propagate_unchanged(site):
    site.fail("https://down.example/")
    processor = site.processor()

    with pytest.raises(httpx.ConnectError):
        processor.client.get("https://down.example/")


def test_insecure_mode_is_opt_in_and_logged(caplog):
    assert CheckerSettings(_env_file=None).insecure is False

    with caplog.at_level(logging.WARNING, logger="csaf_checker.adapters.http_client"):
        client = build_client(CheckerSettings(_env_file=None, insecure=True), tracker=RedirectTracker())
    client.close()

    assert "insecure" in caplog.text


def _ssl_context(client) -> ssl.SSLContext:
    return client._client._transport._pool._ssl_context


def test_certificates_are_verified_by_default():
    client = build_client(CheckerSettings(_env_file=None), tracker=RedirectTracker())
    try:
        context = _ssl_context(client)
        assert context.verify_mode == ssl.CERT_REQUIRED
        assert context.check_hostname is True
    finally:
        client.close()


def test_insecure_mode_disables_certificate_verification():
    client = build_client(CheckerSettings(_env_file=None, insecure=True), tracker=RedirectTracker())
    try:
        context = _ssl_context(client)
        assert context.verify_mode == ssl.CERT_NONE
        assert context.check_hostname is False
    finally:
        client.close()


def test_fetch_result_failure_text():
    assert FetchResult(url="https://x/", status_code=404).failure() == "Fetching https://x/ returned HTTP 404"
    assert FetchResult(url="https://x/", error="ConnectError: boom").failure() == (
        "Fetching https://x/ failed: ConnectError: boom"
    )
    assert FetchResult(url="https://x/", status_code=200, final_url="https://x/other").redirected

import pytest

from csaf_checker.adapters.checks import BaseCheck, RedirectsCheck, build_checks
from csaf_checker.adapters.checks.redirects import plain_http_entry_point
from csaf_checker.core.domain.models import Domain, Requirement
from csaf_checker.core.errors import CheckError, InvalidInputError, KeyringError
from csaf_checker.core.services.processor import base_url, host_of


class RecordingCheck:
    """Minimal Check implementation that logs every phase."""

    def __init__(self, num: int, log: list, *, fail_on: str | None = None) -> None:
        self.num = num
        self.description = f"check {num}"
        self._log = log
        self._fail_on = fail_on

    def run(self, processor, domain: str) -> None:
        self._log.append(("run", self.num, domain))
        if domain == self._fail_on:
            raise CheckError(f"check {self.num} cannot continue")

    def report(self, processor, domain: Domain) -> None:
        self._log.append(("report", self.num, domain.name))
        domain.requirements.append(Requirement(num=self.num, description=self.description))


class ProbeCheck(BaseCheck):
    num = 99
    description = "probe"

    def __init__(self, urls) -> None:
        super().__init__()
        self.urls = urls

    def run(self, processor, domain: str) -> None:
        for url in self.urls.get(domain, []):
            processor.fetch(url)


def test_report_shape_follows_input_order(site):
    log: list = []
    checks = [RecordingCheck(n, log) for n in (5, 1, 3)]
    domains = ["b.example", "a.example"]

    report = site.processor().run(checks, domains)

    assert [d.name for d in report.domains] == domains
    for domain in report.domains:
        assert [r.num for r in domain.requirements] == [5, 1, 3]


def test_all_runs_complete_before_any_report(site):
    log: list = []
    checks = [RecordingCheck(n, log) for n in (1, 2)]

    site.processor().run(checks, ["one.example", "two.example"])

    assert log == [
        ("run", 1, "one.example"),
        ("run", 2, "one.example"),
        ("report", 1, "one.example"),
        ("report", 2, "one.example"),
        ("run", 1, "two.example"),
        ("run", 2, "two.example"),
        ("report", 1, "two.example"),
        ("report", 2, "two.example"),
    ]


def test_fatal_failure_aborts_whole_run(site):
    log: list = []
    checks = [RecordingCheck(n, log, fail_on="d2.example" if n == 3 else None) for n in range(1, 6)]

    with pytest.raises(CheckError, match="check 3"):
        site.processor().run(checks, ["d1.example", "d2.example", "d3.example"])

    reported = {entry[2] for entry in log if entry[0] == "report"}
    assert reported == {"d1.example"}
    assert ("run", 4, "d2.example") not in log
    assert not any(entry[2] == "d3.example" for entry in log)


def test_redirects_do_not_leak_between_domains(site):
    site.redirect("http://a.example/.well-known/csaf", "https://a.example/.well-known/csaf")
    site.add("https://a.example/.well-known/csaf", "ok")

    report = site.processor().run([RedirectsCheck()], ["a.example", "b.example"])

    a, b = report.domains
    assert a.requirements[0].messages == [
        "Redirect https://a.example/.well-known/csaf: http://a.example/.well-known/csaf"
    ]
    assert b.requirements[0].messages == []


def test_redirect_messages_are_sorted_by_target(site):
    site.redirect("https://x/from-z", "https://x/z")
    site.redirect("https://x/from-a", "https://x/a")
    site.add("https://x/z", "z")
    site.add("https://x/a", "a")
    probe = ProbeCheck({"x": ["https://x/from-z", "https://x/from-a"]})

    report = site.processor().run([probe, RedirectsCheck()], ["x"])

    assert report.domains[0].requirements[1].messages == [
        "Redirect https://x/a: https://x/from-a",
        "Redirect https://x/z: https://x/from-z",
    ]


def test_report_is_idempotent(site):
    site.redirect("http://example.org/.well-known/csaf", "https://example.org/.well-known/csaf")
    processor = site.processor()
    check = RedirectsCheck()
    check.run(processor, "example.org")

    first, second = Domain(name="example.org"), Domain(name="example.org")
    check.report(processor, first)
    check.report(processor, second)

    assert first.model_dump_json() == second.model_dump_json()
    assert len(first.requirements) == 1


def test_end_to_end_single_redirect(site):
    site.redirect("http://example.org/.well-known/csaf", "https://example.org/.well-known/csaf")
    site.add("https://example.org/.well-known/csaf", status=403)

    report = site.processor().run([RedirectsCheck()], ["example.org"])

    assert len(report.domains) == 1
    domain = report.domains[0]
    assert domain.name == "example.org"
    assert len(domain.requirements) == 1
    assert domain.requirements[0].num == 6
    assert domain.requirements[0].messages == [
        "Redirect https://example.org/.well-known/csaf: http://example.org/.well-known/csaf"
    ]


def test_clean_resets_checks_caches_and_keyring(site):
    site.publish_compliant()
    processor = site.processor()
    checks = build_checks([20])
    checks[0].messages.append("stale")

    processor.run(checks, ["example.org"])

    assert checks[0].messages == []
    assert processor.redirects == {}
    assert site.keyrings and all(k.closed for k in site.keyrings)


def test_every_url_is_fetched_once_per_domain(site):
    site.publish_compliant()

    site.processor().run(build_checks(), ["example.org", "example.org"])

    metadata_url = "https://example.org/.well-known/csaf/provider-metadata.json"
    assert site.requests.count(metadata_url) == 2


@pytest.mark.parametrize(
    "checks, domains",
    [
        ([], ["example.org"]),
        ([RedirectsCheck(), RedirectsCheck()], ["example.org"]),
        ([object()], ["example.org"]),
        ([RedirectsCheck()], [""]),
        ([RedirectsCheck()], [None]),
    ],
)
def test_invalid_input_is_fatal(site, checks, domains):
    with pytest.raises(InvalidInputError):
        site.processor().run(checks, domains)


def test_unknown_requirement_number_is_rejected():
    with pytest.raises(InvalidInputError, match="99"):
        build_checks([7, 99])


def test_unreachable_domain_still_reports_every_check(site):
    for path in (
        "/.well-known/csaf/provider-metadata.json",
        "/.well-known/security.txt",
        "/security.txt",
    ):
        site.fail(f"https://down.example{path}")
    site.fail("http://down.example/.well-known/csaf")

    report = site.processor().run(build_checks(), ["down.example"])

    requirements = report.domains[0].requirements
    assert len(requirements) == 13
    for requirement in requirements:
        if requirement.num == 6:
            assert requirement.messages == []
        else:
            assert requirement.messages, requirement.description


def test_missing_gpg_aborts_run(site):
    site.publish_compliant()
    processor = site.processor()

    def broken_keyring():
        raise KeyringError("GnuPG is not usable (gpg): not found")

    processor._keyring_factory = broken_keyring

    with pytest.raises(CheckError, match="GnuPG"):
        processor.run(build_checks(), ["example.org"])


@pytest.mark.parametrize(
    "domain, origin, host",
    [
        ("example.org", "https://example.org", "example.org"),
        ("https://example.org/some/path/", "https://example.org", "example.org"),
        ("http://example.org:8080", "http://example.org:8080", "example.org"),
    ],
)
def test_base_url_and_host(domain, origin, host):
    assert base_url(domain) == origin
    assert host_of(domain) == host


def test_redirect_probe_keeps_explicit_http_port(site):
    site.redirect("http://example.org:8080/.well-known/csaf", "https://example.org/.well-known/csaf")

    report = site.processor().run([RedirectsCheck()], ["http://example.org:8080"])

    assert report.domains[0].requirements[0].messages == [
        "Redirect https://example.org/.well-known/csaf: http://example.org:8080/.well-known/csaf"
    ]


@pytest.mark.parametrize(
    "domain, url",
    [
        ("example.org", "http://example.org/.well-known/csaf"),
        ("https://example.org:8443", "http://example.org/.well-known/csaf"),
        ("http://example.org:8080/some/path", "http://example.org:8080/.well-known/csaf"),
    ],
)
def test_plain_http_entry_point(domain, url):
    assert plain_http_entry_point(domain) == url

"""Tests for metric names and sanitization."""
import re

from registry_exporter.names import MetricName, sanitize_metric_name

VALID_NAME = re.compile(r"^[a-zA-Z0-9:_]*$")

RAW_KEYS = [
    "",
    "simple",
    "2xx.count",
    "http.requests-per/second",
    "jvm:memory used",
    "9",
    "__already_ok__",
    "ünïcödé.metric",
    "a.b.c.d",
    "-leading-dash",
]


def test_sanitize_replaces_unsupported_chars():
    assert sanitize_metric_name("http.requests-per/second") == "http_requests_per_second"
    assert sanitize_metric_name("jvm:memory used") == "jvm:memory_used"
    assert sanitize_metric_name("ünïcödé") == "_n_c_d_"


def test_sanitize_prefixes_leading_digit():
    assert sanitize_metric_name("2xx.count") == "_2xx_count"
    assert sanitize_metric_name("9") == "_9"


def test_sanitize_keeps_empty_name():
    assert sanitize_metric_name("") == ""


def test_sanitize_is_idempotent_and_valid():
    for key in RAW_KEYS:
        once = sanitize_metric_name(key)
        assert sanitize_metric_name(once) == once
        assert VALID_NAME.match(once), once
        assert not once[:1].isdigit(), once


def test_build_and_resolve():
    name = MetricName.build("http", "", "requests")
    assert name.key == "http.requests"
    assert name.resolve("errors").key == "http.requests.errors"
    assert MetricName("").resolve("x").key == "x"
    assert name.resolve("") is name


def test_tagged_preserves_insertion_order():
    name = MetricName("requests").tagged(method="GET", code="200")
    assert list(name.tag_map()) == ["method", "code"]

    retagged = name.tagged(method="POST", zone="eu")
    assert retagged.tags == (("method", "POST"), ("code", "200"), ("zone", "eu"))
    # original unchanged
    assert name.tags == (("method", "GET"), ("code", "200"))


def test_names_sort_by_key_then_tags():
    names = [
        MetricName("b"),
        MetricName("a").tagged(x="2"),
        MetricName("a").tagged(x="1"),
        MetricName("a"),
    ]
    assert [str(n) for n in sorted(names)] == ["a", "a{x=1}", "a{x=2}", "b"]


def test_names_are_hashable_values():
    assert MetricName("a").tagged(x="1") == MetricName("a", (("x", "1"),))
    assert len({MetricName("a"), MetricName("a")}) == 1

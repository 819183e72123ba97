"""Tests for versioned URL generation."""

from __future__ import annotations

import pytest

from sfrest.sdk import urls


def test_gen_query_url():
    url = urls.gen_query_url("20.0", "SELECT name from Account")
    assert url == "/services/data/v20.0/query?q=SELECT+name+from+Account"


def test_gen_query_url_collapses_whitespace():
    url = urls.gen_query_url("20.0", "  SELECT name\n\tfrom   Account ")
    assert url == "/services/data/v20.0/query?q=SELECT+name+from+Account"


def test_gen_query_url_encodes_literals():
    url = urls.gen_query_url("58.0", "SELECT Id FROM Account WHERE Name = 'A&B'")
    assert url == (
        "/services/data/v58.0/query?q="
        "SELECT+Id+FROM+Account+WHERE+Name+%3D+%27A%26B%27"
    )


def test_gen_query_all_url():
    assert urls.gen_query_all_url("58.0", "SELECT Id FROM Task") == (
        "/services/data/v58.0/queryAll?q=SELECT+Id+FROM+Task"
    )


def test_gen_search_url():
    assert urls.gen_search_url("58.0", "FIND {Acme}") == (
        "/services/data/v58.0/search?q=FIND+%7BAcme%7D"
    )


@pytest.mark.parametrize("version", ["58.0", "v58.0"])
def test_data_path_tolerates_v_prefix(version):
    assert urls.data_path(version) == "/services/data/v58.0"


def test_resource_paths():
    assert urls.resources_url("58.0") == "/services/data/v58.0/"
    assert urls.sobjects_url("58.0") == "/services/data/v58.0/sobjects"
    assert urls.sobject_url("58.0", "Account") == "/services/data/v58.0/sobjects/Account"
    assert urls.describe_url("58.0", "Account") == (
        "/services/data/v58.0/sobjects/Account/describe"
    )
    assert urls.limits_url("58.0") == "/services/data/v58.0/limits"
    assert urls.flow_url("58.0", "Close_Case") == (
        "/services/data/v58.0/actions/custom/flow/Close_Case"
    )


def test_record_url_with_fields():
    assert urls.record_url("26.0", "Account", "001i0000007nAs3", ["Name", "Website"]) == (
        "/services/data/v26.0/sobjects/Account/001i0000007nAs3?fields=Name,Website"
    )


def test_record_url_rejects_bare_string_fields():
    with pytest.raises(TypeError):
        urls.record_url("26.0", "Account", "001", "Name")


def test_record_url_empty_fields_omits_param():
    assert urls.record_url("26.0", "Account", "001", []) == (
        "/services/data/v26.0/sobjects/Account/001"
    )


@pytest.mark.parametrize(
    "call",
    [
        lambda: urls.gen_query_url("58.0", "   "),
        lambda: urls.sobject_url("58.0", ""),
        lambda: urls.record_url("58.0", "Account", ""),
        lambda: urls.data_path(""),
    ],
)
def test_blank_components_rejected(call):
    with pytest.raises(ValueError):
        call()

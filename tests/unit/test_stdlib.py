from datetime import datetime, timezone

import pytest

from exhibit.stdlib.date_time import XSD_DATETIME, DateTime
from exhibit.stdlib.error_store import ErrorStore
from exhibit.stdlib.paginator import Paginator


def test_error_store_add_and_merge():
    store = ErrorStore()
    assert not store.has_errors()
    store.add_error("o:title", "The title cannot be empty.")
    store.add_errors({"o:email": "Invalid.", "o:name": ["Empty.", "Too short."]})
    assert store.get_errors() == {
        "o:title": ["The title cannot be empty."],
        "o:email": ["Invalid."],
        "o:name": ["Empty.", "Too short."],
    }

    nested = ErrorStore()
    nested.merge_errors(store, key="o:owner")
    assert nested.get_errors() == {
        "o:owner": ["The title cannot be empty.", "Invalid.", "Empty.", "Too short."]
    }

    store.clear_errors()
    assert store.get_errors() == {}


def test_error_store_returns_copies():
    store = ErrorStore()
    store.add_error("k", "v")
    store.get_errors()["k"].append("mutated")
    assert store.get_errors() == {"k": ["v"]}


def test_paginator_offsets_and_minimums():
    paginator = Paginator(per_page=10)
    paginator.set_current_page(3)
    assert paginator.get_offset() == 20
    paginator.set_current_page(0)
    assert paginator.get_current_page() == 1
    paginator.set_per_page(-5)
    assert paginator.get_per_page() == 1


def test_date_time_serializes_as_xsd():
    value = datetime(2015, 2, 1, 19, 43, 16, tzinfo=timezone.utc)
    assert DateTime(value).json_serialize() == {
        "@value": "2015-02-01T19:43:16+00:00",
        "@type": XSD_DATETIME,
    }


def test_date_time_rejects_non_datetimes():
    with pytest.raises(TypeError):
        DateTime("2015-02-01")

"""Tests for the upstream payload normaliser."""

import pytest

from pushshift_bridge.core.normalizer import extract_items, normalise_comment, normalise_payload

FIELDS = {"id", "author", "body", "score", "created_utc", "permalink", "subreddit"}


def test_full_item_mapped():
    item = {
        "id": "k1x2",
        "author": "cinephile",
        "body": "Best picture was robbed",
        "score": 42,
        "created_utc": 1700000000,
        "permalink": "/r/movies/comments/abc/_/k1x2/",
        "subreddit": "movies",
    }
    record = normalise_comment(item)
    assert record.model_dump() == item


def test_empty_item_gets_every_field():
    record = normalise_comment({}).model_dump()
    assert set(record) == FIELDS
    assert record == {
        "id": "",
        "author": None,
        "body": "",
        "score": None,
        "created_utc": None,
        "permalink": None,
        "subreddit": None,
    }


def test_body_falls_back_to_selftext():
    assert normalise_comment({"selftext": "hello"}).body == "hello"


def test_body_prefers_body_over_selftext():
    assert normalise_comment({"body": "comment", "selftext": "post"}).body == "comment"


def test_null_body_falls_back_to_selftext():
    assert normalise_comment({"body": None, "selftext": "post"}).body == "post"


def test_empty_body_is_kept():
    """An empty string is a value, not an absence."""
    assert normalise_comment({"body": "", "selftext": "post"}).body == ""


def test_numeric_id_coerced_to_text():
    assert normalise_comment({"id": 1}).id == "1"
    assert normalise_comment({"id": 2.0}).id == "2"


def test_null_id_becomes_empty_text():
    assert normalise_comment({"id": None}).id == ""


def test_text_coercion_of_odd_types():
    record = normalise_comment({"author": 7, "permalink": True, "subreddit": ["a", "b"], "body": {"t": 1}})
    assert record.author == "7"
    assert record.permalink == "true"
    assert record.subreddit == '["a","b"]'
    assert record.body == '{"t":1}'


@pytest.mark.parametrize("score", ["5", None, True, [], {"v": 1}, float("nan")])
def test_non_numeric_score_is_absent(score):
    assert normalise_comment({"score": score}).score is None


@pytest.mark.parametrize("score", [0, -3, 12, 1.5])
def test_numeric_score_preserved(score):
    assert normalise_comment({"score": score}).score == score


def test_integer_score_stays_integer():
    assert isinstance(normalise_comment({"score": 5}).score, int)


def test_created_utc_falls_back_to_created():
    assert normalise_comment({"created": 1600000000}).created_utc == 1600000000
    assert normalise_comment({"created_utc": "1700000000", "created": 1600000000}).created_utc == 1600000000
    assert normalise_comment({"created_utc": 1700000000.5, "created": 1}).created_utc == 1700000000.5


def test_created_utc_absent_when_neither_numeric():
    assert normalise_comment({"created_utc": "x", "created": None}).created_utc is None


@pytest.mark.parametrize("item", [None, "text", 5, ["a"]])
def test_non_object_item_maps_to_empty_record(item):
    assert normalise_comment(item) == normalise_comment({})


def test_comments_key_has_priority():
    payload = {"comments": [{"id": "c"}], "data": [{"id": "d"}], "results": [{"id": "r"}]}
    assert [c.id for c in normalise_payload(payload)] == ["c"]


def test_data_used_when_no_comments():
    payload = {"data": [{"id": "d"}], "results": [{"id": "r"}]}
    assert [c.id for c in normalise_payload(payload)] == ["d"]


def test_results_used_last():
    assert [c.id for c in normalise_payload({"results": [{"id": "r"}]})] == ["r"]


def test_null_container_falls_through():
    payload = {"comments": None, "data": [{"id": "d"}]}
    assert [c.id for c in normalise_payload(payload)] == ["d"]


def test_non_list_container_yields_empty():
    assert extract_items({"comments": {"id": "c"}, "data": [{"id": "d"}]}) == []


@pytest.mark.parametrize("payload", [{}, {"items": [{"id": 1}]}, [], None, "ok", 3])
def test_no_container_yields_empty(payload):
    assert normalise_payload(payload) == []


def test_order_preserved_without_dedup():
    payload = {"data": [{"id": "b"}, {"id": "a"}, {"id": "b"}]}
    assert [c.id for c in normalise_payload(payload)] == ["b", "a", "b"]


def test_normalisation_is_idempotent():
    payload = {"comments": [{"id": 1, "selftext": "x", "score": "5", "created": 10}, {}]}
    assert normalise_payload(payload) == normalise_payload(payload)


def test_payload_not_mutated():
    payload = {"comments": [{"id": 1, "body": None}]}
    normalise_payload(payload)
    assert payload == {"comments": [{"id": 1, "body": None}]}

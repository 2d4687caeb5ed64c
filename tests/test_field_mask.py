import pytest
from sqlalchemy import Column, Integer, MetaData, String, Table

from lms_backend.db.repositories.chapter import CHAPTER_FIELD_MASK
from lms_backend.db.repositories.course import COURSE_FIELD_MASK
from lms_backend.db.repositories.lesson import LESSON_FIELD_MASK
from lms_backend.db.repositories.store import STORE_FIELD_MASK
from lms_backend.libs.field_mask import check_allow_list, resolve_columns

ALLOWED = ("id", "name", "address", "image_file_name")


def test_known_names_keep_request_order_after_id():
    assert resolve_columns(["address", "name"], ALLOWED) == ["id", "address", "name"]


def test_id_is_always_first_even_when_requested_later():
    assert resolve_columns(["name", "id"], ALLOWED) == ["id", "name"]


def test_duplicates_and_unknown_names_are_dropped():
    once = resolve_columns(["name"], ALLOWED)
    assert resolve_columns(["name", "name"], ALLOWED) == once
    assert resolve_columns(["name", "password", "1;drop table"], ALLOWED) == once


@pytest.mark.parametrize("requested", [None, [], ["password"], ["nope", "also_nope"]])
def test_nothing_valid_falls_back_to_every_column(requested):
    assert resolve_columns(requested, ALLOWED) == list(ALLOWED)


def test_resolution_is_idempotent():
    first = resolve_columns(["image_file_name", "name", "bogus"], ALLOWED)
    assert resolve_columns(first, ALLOWED) == first


def test_check_allow_list_rejects_unknown_columns():
    table = Table("t", MetaData(), Column("id", Integer), Column("name", String))
    assert check_allow_list(table, ("id", "name")) == ("id", "name")
    with pytest.raises(ValueError):
        check_allow_list(table, ("id", "password"))


@pytest.mark.parametrize(
    "allow_list", [COURSE_FIELD_MASK, STORE_FIELD_MASK, CHAPTER_FIELD_MASK, LESSON_FIELD_MASK]
)
def test_entity_allow_lists_start_with_id_and_never_expose_password(allow_list):
    assert allow_list[0] == "id"
    assert "password" not in allow_list
    assert len(set(allow_list)) == len(allow_list)

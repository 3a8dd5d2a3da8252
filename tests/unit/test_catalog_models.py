"""domain.catalog 单元测试：LanguageSet、ObjectSchema、ImageCandidate。"""

from __future__ import annotations

import pytest

from domain.catalog import FieldRole, ImageCandidate, LanguageSet, ObjectSchema, SchemaField


class TestLanguageSet:
    def test_roles_follow_order(self) -> None:
        ls = LanguageSet.from_mapping({"uk": "Ukrainian", "en": "English", "de": "German"})
        assert ls.codes == ["uk", "en", "de"]
        assert ls.primary.code == "uk"
        assert ls.primary.role is FieldRole.PRIMARY
        assert [lang.role for lang in ls.languages[1:]] == [FieldRole.TRANSLATION, FieldRole.TRANSLATION]

    def test_reordering_moves_primary(self) -> None:
        ls = LanguageSet.from_mapping({"en": "English", "uk": "Ukrainian"})
        assert ls.primary.code == "en"
        assert ls.languages[1].role is FieldRole.TRANSLATION

    def test_empty_rejected(self) -> None:
        with pytest.raises(ValueError):
            LanguageSet.from_mapping({})

    def test_blank_code_rejected(self) -> None:
        with pytest.raises(ValueError):
            LanguageSet.from_mapping({" ": "Nothing"})

    def test_field_names(self) -> None:
        ls = LanguageSet.from_mapping({"uk": "Ukrainian", "en": "English"})
        assert ls.field_names("title_") == ["title_uk", "title_en"]
        assert len(ls) == 2

    def test_parse(self) -> None:
        ls = LanguageSet.parse("uk:Ukrainian, en:English ,pl")
        assert ls.as_mapping() == {"uk": "Ukrainian", "en": "English", "pl": "pl"}

    def test_parse_duplicate_rejected(self) -> None:
        with pytest.raises(ValueError, match="重复"):
            LanguageSet.parse("uk:Ukrainian,uk:Українська")

    def test_parse_empty_rejected(self) -> None:
        with pytest.raises(ValueError):
            LanguageSet.parse(" , ")

    def test_coerce(self) -> None:
        ls = LanguageSet.from_mapping({"uk": "Ukrainian"})
        assert LanguageSet.coerce(ls) is ls
        assert LanguageSet.coerce({"en": "English"}).codes == ["en"]


def test_object_schema_to_json_schema() -> None:
    schema = ObjectSchema(
        name="product_review",
        description="A structured product review",
        required_fields=["text", "rating"],
        properties=[SchemaField(name="text", description="Review text"), SchemaField(name="rating", description="Rating (1-5)")],
    )
    js = schema.to_json_schema()
    assert js["type"] == "object"
    assert js["required"] == ["text", "rating"]
    assert js["additionalProperties"] is False
    assert js["properties"]["rating"] == {"type": "string", "description": "Rating (1-5)"}


class TestImageCandidate:
    def test_from_photo(self) -> None:
        c = ImageCandidate.from_photo({"id": 7, "src": {"original": " https://images.test/a.jpeg ", "small": "x"}})
        assert c.id == 7
        assert c.original_url == "https://images.test/a.jpeg"

    def test_from_photo_missing_src(self) -> None:
        assert ImageCandidate.from_photo({"id": 1}).original_url == ""

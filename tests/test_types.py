"""Tests for value types and typed values."""

import uuid
from datetime import datetime, timezone

import pytest

from query_algebrizer.types import (
    MAX_ENTID,
    MAX_LONG,
    MIN_LONG,
    Keyword,
    TypedValue,
    ValueType,
    ValueTypeSet,
)


class TestValueType:
    """Tests for the ValueType enum."""

    def test_keyword_round_trip(self):
        """Every type maps to a schema keyword and back."""
        for vt in ValueType:
            assert ValueType.from_keyword(vt.keyword) is vt

    def test_keyword_format(self):
        assert ValueType.REF.keyword == ":db.type/ref"
        assert ValueType.INSTANT.keyword == ":db.type/instant"

    def test_unknown_keyword(self):
        with pytest.raises(ValueError, match="Unknown value type"):
            ValueType.from_keyword(":db.type/bigdec")
        with pytest.raises(ValueError):
            ValueType.from_keyword(":db/ident")

    def test_ref_accommodates_integer(self):
        """Refs can only be non-negative entids."""
        assert ValueType.REF.accommodates_integer(0)
        assert ValueType.REF.accommodates_integer(42)
        assert ValueType.REF.accommodates_integer(MAX_ENTID)
        assert not ValueType.REF.accommodates_integer(-5)
        assert not ValueType.REF.accommodates_integer(MAX_ENTID + 1)

    def test_long_accommodates_integer(self):
        assert ValueType.LONG.accommodates_integer(-5)
        assert ValueType.LONG.accommodates_integer(MIN_LONG)
        assert ValueType.LONG.accommodates_integer(MAX_LONG)
        assert not ValueType.LONG.accommodates_integer(MAX_LONG + 1)

    def test_other_types_accommodate_integer(self):
        assert ValueType.DOUBLE.accommodates_integer(3)
        assert not ValueType.INSTANT.accommodates_integer(3)
        assert not ValueType.STRING.accommodates_integer(3)
        assert not ValueType.BOOLEAN.accommodates_integer(1)
        assert not ValueType.KEYWORD.accommodates_integer(1)
        assert not ValueType.UUID.accommodates_integer(1)


class TestValueTypeSet:
    """Tests for ValueTypeSet."""

    def test_any_contains_everything(self):
        any_set = ValueTypeSet.any()
        for vt in ValueType:
            assert any_set.contains(vt)
        assert len(any_set) == len(ValueType)

    def test_none_is_empty(self):
        assert ValueTypeSet.none().is_empty()
        assert not ValueTypeSet.any().is_empty()

    def test_of_longs(self):
        assert ValueTypeSet.of_longs() == ValueTypeSet.of_types([ValueType.REF, ValueType.LONG])

    def test_of_keywords(self):
        assert ValueTypeSet.of_keywords() == ValueTypeSet.of_types([ValueType.KEYWORD, ValueType.REF])

    def test_of_numeric_types(self):
        numeric = ValueTypeSet.of_numeric_types()
        assert ValueType.DOUBLE in numeric
        assert ValueType.LONG in numeric
        assert ValueType.REF not in numeric

    def test_union_and_intersection(self):
        longs = ValueTypeSet.of_longs()
        keywords = ValueTypeSet.of_keywords()
        assert longs.union(keywords) == ValueTypeSet.of_types(
            [ValueType.REF, ValueType.LONG, ValueType.KEYWORD]
        )
        assert longs.intersection(keywords) == ValueTypeSet.of_one(ValueType.REF)
        assert longs.intersection(ValueTypeSet.of_one(ValueType.STRING)).is_empty()

    def test_is_subset(self):
        assert ValueTypeSet.of_one(ValueType.REF).is_subset(ValueTypeSet.of_longs())
        assert not ValueTypeSet.of_longs().is_subset(ValueTypeSet.of_one(ValueType.REF))
        assert ValueTypeSet.none().is_subset(ValueTypeSet.none())

    def test_unit_and_exemplar(self):
        unit = ValueTypeSet.of_one(ValueType.UUID)
        assert unit.is_unit()
        assert unit.exemplar() is ValueType.UUID
        assert not ValueTypeSet.of_longs().is_unit()
        assert ValueTypeSet.of_longs().exemplar() is None
        assert ValueTypeSet.none().exemplar() is None

    def test_iteration_is_in_declaration_order(self):
        types = ValueTypeSet.of_types([ValueType.KEYWORD, ValueType.LONG, ValueType.REF])
        assert list(types) == [ValueType.REF, ValueType.LONG, ValueType.KEYWORD]

    def test_str(self):
        assert str(ValueTypeSet.of_longs()) == "{ref, long}"
        assert str(ValueTypeSet.none()) == "{}"

    def test_hashable(self):
        assert len({ValueTypeSet.of_longs(), ValueTypeSet.of_types([ValueType.LONG, ValueType.REF])}) == 1


class TestKeyword:
    """Tests for Keyword values."""

    def test_parse_namespaced(self):
        kw = Keyword.parse(":db.type/ref")
        assert kw.namespace == "db.type"
        assert kw.name == "ref"
        assert str(kw) == ":db.type/ref"

    def test_parse_plain(self):
        kw = Keyword.parse(":foo")
        assert kw.namespace is None
        assert kw.name == "foo"
        assert str(kw) == ":foo"

    def test_equality_is_by_value(self):
        assert Keyword.parse(":a/b") == Keyword("a", "b")
        assert Keyword.parse(":a/b") != Keyword.parse(":b")

    @pytest.mark.parametrize("text", ["foo", ":", ":foo/", ":/bar"])
    def test_parse_invalid(self, text):
        with pytest.raises(ValueError):
            Keyword.parse(text)


class TestTypedValue:
    """Tests for TypedValue construction and equality."""

    def test_constructors(self):
        now = datetime(2017, 1, 1, tzinfo=timezone.utc)
        u = uuid.uuid4()
        kw = Keyword.parse(":foo")
        assert TypedValue.ref(5).value_type is ValueType.REF
        assert TypedValue.long(-5).value == -5
        assert TypedValue.double(1.5).value_type is ValueType.DOUBLE
        assert TypedValue.string("x").value == "x"
        assert TypedValue.boolean(True).value is True
        assert TypedValue.instant(now).value == now
        assert TypedValue.uuid(u).value == u
        assert TypedValue.keyword(kw).value is kw

    def test_tag_is_part_of_equality(self):
        """Ref(5) and Long(5) are different values."""
        assert TypedValue.ref(5) != TypedValue.long(5)
        assert TypedValue.long(5) == TypedValue.long(5)

    def test_no_coercion(self):
        with pytest.raises(TypeError):
            TypedValue.long(True)
        with pytest.raises(TypeError):
            TypedValue.double(1)
        with pytest.raises(TypeError):
            TypedValue.string(Keyword.parse(":foo"))
        with pytest.raises(TypeError):
            TypedValue.boolean(1)

    def test_ref_range(self):
        with pytest.raises(TypeError, match="entid range"):
            TypedValue.ref(-1)

    def test_long_range(self):
        with pytest.raises(TypeError, match="64-bit"):
            TypedValue.long(MAX_LONG + 1)

    def test_instant_must_be_aware(self):
        with pytest.raises(TypeError, match="timezone"):
            TypedValue.instant(datetime(2017, 1, 1))

    def test_matches_type(self):
        assert TypedValue.long(1).matches_type(ValueType.LONG)
        assert not TypedValue.long(1).matches_type(ValueType.REF)

    def test_str(self):
        assert str(TypedValue.long(42)) == "Long(42)"
        assert str(TypedValue.ref(42)) == "Ref(42)"
        assert str(TypedValue.keyword(Keyword.parse(":foo/bar"))) == "Keyword(:foo/bar)"
        assert str(TypedValue.string("hi")) == '"hi"'
        assert str(TypedValue.boolean(False)) == "false"

"""Tests for the family aggregator."""

from fontfinder.fonts.aggregator import aggregate, family_sort_key, merge_record, sort_families
from fontfinder.fonts.models import FamilyEntry


class TestAggregate:
    """Test folding records into family entries."""

    def test_empty_input(self):
        assert aggregate([]) == {}

    def test_single_record(self, record_factory):
        record = record_factory("Arial", "Regular", file="/f/arial.ttf", postscript_name="ArialMT")
        families = aggregate([record])

        entry = families["Arial"]
        assert entry.sub_families == ("Regular",)
        assert entry.files == {"Regular": "/f/arial.ttf"}
        assert entry.postscript_names == {"Regular": "ArialMT"}
        assert entry.alternative_families == {"Regular": ()}
        assert entry.is_system_font is True

    def test_idempotent(self, record_factory):
        """Test that aggregating the same sequence twice gives equal mappings."""
        records = [
            record_factory("A", "Regular"),
            record_factory("B", "Bold"),
            record_factory("A", "Italic"),
        ]
        assert aggregate(records) == aggregate(records)

    def test_style_order_follows_input(self, record_factory):
        """Test that the family set is order-insensitive but style order is not."""
        regular = record_factory("A", "Regular", file="f1")
        bold = record_factory("A", "Bold", file="f2")

        forward = aggregate([regular, bold])["A"]
        backward = aggregate([bold, regular])["A"]

        assert forward.files == backward.files == {"Regular": "f1", "Bold": "f2"}
        assert forward.sub_families == ("Regular", "Bold")
        assert backward.sub_families == ("Bold", "Regular")

    def test_duplicate_style_is_kept_and_last_write_wins(self, record_factory):
        first = record_factory("A", "Regular", file="f1", postscript_name="A-1")
        second = record_factory("A", "Regular", file="f2", postscript_name="A-2")

        entry = aggregate([first, second])["A"]

        assert entry.sub_families == ("Regular", "Regular")
        assert entry.files == {"Regular": "f2"}
        assert entry.postscript_names == {"Regular": "A-2"}

    def test_system_flag_dominance(self, record_factory):
        """Test that a non-system record makes the family non-system in any order."""
        system = record_factory("A", "Regular", is_system_font=True)
        custom = record_factory("A", "Bold", is_system_font=False)

        assert aggregate([system, custom])["A"].is_system_font is False
        assert aggregate([custom, system])["A"].is_system_font is False

    def test_merge_does_not_mutate_previous_entry(self, record_factory):
        families: dict[str, FamilyEntry] = {}
        merge_record(families, record_factory("A", "Regular", file="f1"))
        before = families["A"]

        merge_record(families, record_factory("A", "Bold", file="f2"))

        assert before.files == {"Regular": "f1"}
        assert before.sub_families == ("Regular",)
        assert families["A"] is not before

    def test_alternative_names_per_style(self, record_factory):
        record = record_factory(
            "Foo Bold",
            "Regular",
            alternative_families=("Foo",),
            alternative_sub_families=("Bold",),
        )
        entry = aggregate([record])["Foo Bold"]

        assert entry.alternative_families == {"Regular": ("Foo",)}
        assert entry.alternative_sub_families == {"Regular": ("Bold",)}


class TestSortFamilies:
    """Test family name ordering."""

    def test_sorted_by_family(self):
        entries = [FamilyEntry(family=name) for name in ("Courier", "Arial", "Helvetica")]
        assert [e.family for e in sort_families(entries)] == ["Arial", "Courier", "Helvetica"]

    def test_case_and_accents_do_not_split_the_alphabet(self):
        entries = [FamilyEntry(family=name) for name in ("Bravo", "arial", "Zed", "Émile")]
        assert [e.family for e in sort_families(entries)] == ["arial", "Bravo", "Émile", "Zed"]

    def test_unaccented_name_sorts_before_accented(self):
        assert sorted(["Émile", "Emile"], key=family_sort_key) == ["Emile", "Émile"]

    def test_stable_for_equal_keys(self):
        first = FamilyEntry(family="Same", sub_families=("Regular",))
        second = FamilyEntry(family="Same", sub_families=("Bold",))
        assert sort_families([first, second]) == [first, second]

"""Tests for type complexity estimation."""

from busgen.generator.complexity import (
    COMPLEXITY_THRESHOLD,
    CONTAINER_WEIGHT,
    ELEMENT_WEIGHT,
    complexity,
    is_complex,
)


def describe_complexity():
    def scores_primitive_as_one(expect):
        expect(complexity("u")) == 1
        expect(complexity("s")) == 1

    def scores_handle(expect):
        expect(complexity("h")) == 10

    def multiplies_for_path_signature_and_variant(expect):
        # the multiplier applies to the leaf's own score, which starts at 0
        expect(complexity("o")) == 0
        expect(complexity("g")) == 0
        expect(complexity("v")) == 0

    def scores_struct(expect):
        expect(complexity("(ii)")) == 50 + 5 * 1 + 5 * 1

    def scores_array_of_struct(expect):
        expect(complexity("a(ii)")) == 5 * 60

    def scores_array_of_primitives(expect):
        expect(complexity("as")) == 5
        expect(complexity("aas")) == 25

    def scores_map_as_dict_entry_block(expect):
        expect(complexity("a{sv}")) == 55
        expect(complexity("a{su}")) == 60

    def scores_variant_inside_struct(expect):
        expect(complexity("(iv)")) == 55

    def scores_nested_structs(expect):
        expect(complexity("(a(ss)a(ss))")) == 50 + 5 * 300 + 5 * 300

    def tolerates_unknown_codes(expect):
        expect(complexity("z")) == 0
        expect(complexity("(iz)")) == 55

    def tolerates_truncated_input(expect):
        expect(complexity("")) == 0
        expect(complexity("(ii")) == 60
        expect(complexity("a")) == 0

    def only_scores_first_complete_type(expect):
        expect(complexity("ua(ii)")) == 1

    def scores_deeply_nested_arrays(expect):
        expect(complexity("a" * 2000 + "y")) == ELEMENT_WEIGHT**2000

    def scores_deeply_nested_structs(expect):
        expected = 1
        for _ in range(1500):
            expected = CONTAINER_WEIGHT + ELEMENT_WEIGHT * expected
        expect(complexity("(" * 1500 + "y" + ")" * 1500)) == expected

    def tolerates_deep_truncated_input(expect):
        expect(complexity("a" * 2000)) == 0
        expect(complexity("(" * 1500)) == 50 * sum(5**n for n in range(1500))


def describe_is_complex():
    def uses_threshold(expect):
        expect(COMPLEXITY_THRESHOLD) == 1700

    def flags_map_of_large_struct_arrays(expect):
        expect(complexity("a{sa(ssss)}")) == 1805
        expect(is_complex("a{sa(ssss)}")) == True

    def passes_just_below_threshold(expect):
        expect(complexity("a{sa(sss)}")) == 1680
        expect(is_complex("a{sa(sss)}")) == False

    def flags_struct_of_arrays(expect):
        expect(is_complex("(a(ss)a(ss))")) == True

    def passes_simple_types(expect):
        expect(is_complex("a{sv}")) == False
        expect(is_complex("a(ii)")) == False

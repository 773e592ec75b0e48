"""Tests for identifier conversion."""

from busgen.generator.naming import (
    RUST_KEYWORDS,
    member_identifier,
    needs_rename,
    pascal_case,
    to_identifier,
    to_snake_case,
)


def describe_to_snake_case():
    def converts_pascal_case(expect):
        expect(to_snake_case("SomeMethod")) == "some_method"

    def converts_camel_case(expect):
        expect(to_snake_case("someMethod")) == "some_method"

    def splits_acronyms(expect):
        expect(to_snake_case("GetHTTPServer")) == "get_http_server"
        expect(to_snake_case("ID")) == "id"

    def treats_hyphens_as_separators(expect):
        expect(to_snake_case("Get-Value")) == "get_value"

    def keeps_snake_case(expect):
        expect(to_snake_case("already_snake")) == "already_snake"


def describe_pascal_case():
    def capitalizes_words(expect):
        expect(pascal_case("some_method")) == "SomeMethod"

    def keeps_inner_capitals(expect):
        expect(pascal_case("get_hTTP")) == "GetHTTP"


def describe_to_identifier():
    def suffixes_keywords(expect):
        expect(to_identifier("type")) == "type_"
        expect(to_identifier("self")) == "self_"
        expect(to_identifier("Self")) == "Self_"

    def replaces_hyphens(expect):
        expect(to_identifier("my-arg")) == "my_arg"

    def keeps_plain_names(expect):
        expect(to_identifier("value")) == "value"

    def has_static_keyword_set(expect):
        expect(isinstance(RUST_KEYWORDS, frozenset)) == True
        expect("async" in RUST_KEYWORDS) == True


def describe_needs_rename():
    def round_trips_pascal_case_names(expect):
        name = member_identifier("SomeMethod")
        expect(name) == "some_method"
        expect(needs_rename("SomeMethod", name)) == False

    def detects_hyphenated_names(expect):
        name = member_identifier("Get-Value")
        expect(name) == "get_value"
        expect(needs_rename("Get-Value", name)) == True

    def detects_lower_case_names(expect):
        expect(needs_rename("beta", member_identifier("beta"))) == True

    def detects_acronyms(expect):
        expect(needs_rename("GetID", member_identifier("GetID"))) == True

    def detects_keyword_suffix(expect):
        expect(member_identifier("Type")) == "type_"
        expect(needs_rename("Type", "type_")) == False

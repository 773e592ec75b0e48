"""Tests for introspection XML loading."""

import os

from pytest import raises

from busgen.generator import parse, parse_file
from busgen.generator.introspect import ValidationError
from busgen.generator.types import ArgDirection, PropertyAccess, is_standard

FILE_DIR = os.path.dirname(os.path.realpath(__file__))


def describe_parse():
    def parses_interfaces_in_order(expect):
        interfaces = parse_file(f"{FILE_DIR}/sample.xml")
        expect([i.name for i in interfaces]) == ["org.freedesktop.DBus.Peer", "org.example.Sample"]

    def parses_methods_and_args(expect):
        sample = parse_file(f"{FILE_DIR}/sample.xml")[1]
        expect([m.name for m in sample.methods]) == ["Zeta", "Alpha", "beta"]

        alpha = sample.methods[1]
        expect(len(alpha.args)) == 3
        expect(alpha.args[0].name) == "name"
        expect(alpha.args[0].direction) == ArgDirection.IN
        expect(alpha.args[1].direction) == None
        expect(alpha.args[1].is_input) == True
        expect(alpha.args[2].name) == None
        expect(alpha.args[2].type) == "o"
        expect(alpha.args[2].is_input) == False

    def parses_signals(expect):
        sample = parse_file(f"{FILE_DIR}/sample.xml")[1]
        expect(len(sample.signals)) == 1
        expect([a.type for a in sample.signals[0].args]) == ["s", "v"]

    def parses_properties(expect):
        sample = parse_file(f"{FILE_DIR}/sample.xml")[1]
        props = {p.name: p for p in sample.properties}
        expect(props["Version"].access) == PropertyAccess.READ
        expect(props["Version"].readable) == True
        expect(props["Version"].writable) == False
        expect(props["Tags"].readable and props["Tags"].writable) == True
        expect(props["Get-Value"].readable) == False

    def ignores_child_nodes(expect):
        interfaces = parse(
            """
            <node>
              <interface name="org.example.A"/>
              <node name="child">
                <interface name="org.example.B"/>
              </node>
            </node>
        """.strip()
        )
        expect([i.name for i in interfaces]) == ["org.example.A"]

    def accepts_signal_arg_direction(expect):
        interfaces = parse(
            '<node><interface name="org.example.A">'
            '<signal name="S"><arg type="u" direction="out"/></signal>'
            "</interface></node>"
        )
        expect(interfaces[0].signals[0].args[0].type) == "u"

    def converts_to_dict(expect):
        sample = parse_file(f"{FILE_DIR}/sample.xml")[1]
        data = sample.to_dict()
        expect(data["name"]) == "org.example.Sample"
        expect(data["methods"][1]["args"][0]["type"]) == "s"
        expect(data["properties"][0]["access"]) == "read"

    def detects_standard_interfaces(expect):
        peer, sample = parse_file(f"{FILE_DIR}/sample.xml")
        expect(is_standard(peer)) == True
        expect(is_standard(sample)) == False


def describe_parse_errors():
    def rejects_invalid_xml(expect):
        with raises(ValidationError):
            parse("<node><interface></node>")

    def rejects_wrong_root(expect):
        with raises(ValidationError) as exc:
            parse("<interface name='org.example.A'/>")
        expect("<node>" in str(exc.value)) == True

    def rejects_missing_type(expect):
        with raises(ValidationError) as exc:
            parse('<node><interface name="org.example.A"><method name="M"><arg name="x"/></method></interface></node>')
        expect("org.example.A.M" in str(exc.value)) == True

    def rejects_unknown_direction(expect):
        with raises(ValidationError):
            parse(
                '<node><interface name="org.example.A"><method name="M">'
                '<arg type="s" direction="sideways"/></method></interface></node>'
            )

    def rejects_unknown_access(expect):
        with raises(ValidationError):
            parse(
                '<node><interface name="org.example.A">'
                '<property name="P" type="s" access="none"/></interface></node>'
            )

    def rejects_missing_interface_name(expect):
        with raises(ValidationError):
            parse("<node><interface/></node>")

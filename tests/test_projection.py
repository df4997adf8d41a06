from __future__ import annotations

import pytest

from onix_ingestor.codelists import CodelistResolver
from onix_ingestor.identifiers import IdentifierDemultiplexer
from onix_ingestor.projection import (Attr, Coded, CompositeSpec,
                                      IdentifierSlots, Inline, Nested,
                                      Projector, Repeated, Scalar, TextList,
                                      convert_scalar)
from onix_ingestor.record import OnixNode, Presence


@pytest.fixture
def projector() -> Projector:
    resolver = CodelistResolver.from_mapping(
        {
            "schemes": {
                "colour": {
                    "codes": {
                        "01": {"description": "Red", "symbol": "RED"},
                        "02": "Blue",
                    }
                },
                "language": {"codes": {"eng": "English"}},
            }
        }
    )
    return Projector(resolver, IdentifierDemultiplexer())


def _node(xml: str) -> OnixNode:
    return OnixNode.from_xml(xml)


def test_absent_singular_composite_contributes_no_key(projector: Projector) -> None:
    spec = CompositeSpec("Item", (Nested("Part", CompositeSpec("Part", (Scalar("Name"),))),))

    assert projector.project(_node("<Item/>"), spec) == {}
    assert projector.project(_node("<Item><Part><Name>x</Name></Part></Item>"), spec) == {
        "Part": {"Name": "x"}
    }


def test_repeated_composite_is_always_a_list(projector: Projector) -> None:
    spec = CompositeSpec("Item", (Repeated("Part", CompositeSpec("Part", (Scalar("Name"),)), key="Parts"),))

    assert projector.project(_node("<Item/>"), spec) == {"Parts": []}
    doc = projector.project(
        _node("<Item><Part><Name>a</Name></Part><Other/><Part><Name>b</Name></Part></Item>"), spec
    )
    assert doc == {"Parts": [{"Name": "a"}, {"Name": "b"}]}


def test_scalar_presence_rules(projector: Projector) -> None:
    spec = CompositeSpec("Item", (Scalar("Name"), Scalar("Empty"), Scalar("Missing")))

    doc = projector.project(_node("<Item><Name> Value </Name><Empty/></Item>"), spec)

    assert doc == {"Name": "Value", "Empty": None}


def test_coded_field_emits_description_only_when_resolvable(projector: Projector) -> None:
    spec = CompositeSpec(
        "Item",
        (
            Coded("Colour", "colour"),
            Coded("Shade", "colour"),
            Coded("Tint", "colour"),
            Coded("Missing", "colour"),
        ),
    )

    doc = projector.project(
        _node("<Item><Colour>02</Colour><Shade>77</Shade><Tint/></Item>"), spec
    )

    assert doc == {"Colour": "Blue"}


def test_coded_field_can_emit_raw_code_or_symbol(projector: Projector) -> None:
    spec = CompositeSpec(
        "Item",
        (
            Coded("CountryCode", emit="code"),
            Coded("Colour", "colour", key="ColourSymbol", emit="symbol"),
            Coded("Colour", "colour"),
        ),
    )

    doc = projector.project(_node("<Item><CountryCode>NZ</CountryCode><Colour>01</Colour></Item>"), spec)

    assert doc == {"CountryCode": "NZ", "ColourSymbol": "RED", "Colour": "Red"}


def test_attributes_follow_coded_rules(projector: Projector) -> None:
    spec = CompositeSpec(
        "Title",
        (
            Attr("language", "Language", scheme="language"),
            Attr("textcase", "Case", scheme="colour"),
            Attr("sourcename", "Source"),
        ),
        value_key="Value",
    )

    doc = projector.project(_node('<Title language="eng" textcase="99" sourcename="src">T</Title>'), spec)

    assert doc == {"Value": "T", "Language": "English", "Source": "src"}


def test_text_lists_collapse_to_strings_and_keep_empty_positions(projector: Projector) -> None:
    spec = CompositeSpec(
        "Item",
        (
            TextList("Link", key="Links"),
            TextList("Colour", key="Colours", scheme="colour"),
            TextList("Absent"),
        ),
    )

    doc = projector.project(
        _node(
            "<Item><Link>a</Link><Link/><Link>b</Link>"
            "<Colour>01</Colour><Colour>99</Colour><Colour> </Colour><Colour>02</Colour></Item>"
        ),
        spec,
    )

    assert doc == {"Links": ["a", None, "b"], "Colours": ["Red", None, "Blue"], "Absent": []}


def test_flag_scalars_are_always_boolean(projector: Projector) -> None:
    spec = CompositeSpec("Subject", (Scalar("MainSubject", kind="flag"),))

    assert projector.project(_node("<Subject><MainSubject/></Subject>"), spec) == {"MainSubject": True}
    assert projector.project(_node("<Subject/>"), spec) == {"MainSubject": False}


def test_inline_merges_members_and_required_blocks_keep_their_arrays(projector: Projector) -> None:
    inner = CompositeSpec("Block", (Repeated("Part", CompositeSpec("Part"), key="Parts"), Scalar("Note")))
    optional = CompositeSpec("Item", (Inline("Block", inner),))
    required = CompositeSpec("Item", (Inline("Block", inner, required=True),))

    assert projector.project(_node("<Item/>"), optional) == {}
    assert projector.project(_node("<Item/>"), required) == {"Parts": []}
    assert projector.project(_node("<Item><Block><Part/><Note>n</Note></Block></Item>"), optional) == {
        "Parts": [{}],
        "Note": "n",
    }


def test_repeated_composite_suppressed_by_marker(projector: Projector) -> None:
    spec = CompositeSpec(
        "Detail",
        (Repeated("Contributor", CompositeSpec("Contributor"), key="Contributors", suppressed_by="NoContributor"),),
    )

    assert projector.project(_node("<Detail><NoContributor/></Detail>"), spec) == {}
    assert projector.project(_node("<Detail/>"), spec) == {"Contributors": []}


def test_identifier_slots_merge_into_parent(projector: Projector) -> None:
    spec = CompositeSpec("Contributor", (Scalar("KeyNames"), IdentifierSlots("NameIdentifier", "name")))

    doc = projector.project(
        _node(
            "<Contributor><KeyNames>K</KeyNames>"
            "<NameIdentifier><NameIDType>21</NameIDType><IDValue>0000-0001</IDValue></NameIdentifier>"
            "<NameIdentifier><NameIDType>21</NameIDType><IDValue>0000-0002</IDValue></NameIdentifier>"
            "<NameIdentifier><NameIDType>98</NameIDType><IDValue>x</IDValue></NameIdentifier>"
            "</Contributor>"
        ),
        spec,
    )

    assert doc == {"KeyNames": "K", "ORCID": "0000-0001"}


def test_namespaced_elements_are_matched_by_local_name(projector: Projector) -> None:
    spec = CompositeSpec("Item", (Scalar("Name"),))
    node = _node('<Item xmlns="http://ns.editeur.org/onix/3.0/reference"><Name>n</Name></Item>')

    assert node.field("Name").presence is Presence.VALUE
    assert projector.project(node, spec) == {"Name": "n"}


def test_projection_does_not_alter_the_input(projector: Projector) -> None:
    spec = CompositeSpec("Item", (Repeated("Part", CompositeSpec("Part", (Scalar("Name"),)), key="Parts"),))
    node = _node("<Item><Part><Name>a</Name></Part></Item>")

    assert projector.project(node, spec) == projector.project(node, spec)


@pytest.mark.parametrize(
    ("kind", "raw", "expected"),
    [
        ("text", "abc", "abc"),
        ("integer", "12", 12),
        ("integer", "twelve", None),
        ("number", "100", 100),
        ("number", "1.5", 1.5),
        ("number", "n/a", None),
        ("integer", None, None),
    ],
)
def test_convert_scalar(kind: str, raw, expected) -> None:
    assert convert_scalar(kind, raw) == expected


def test_integral_numbers_become_ints() -> None:
    assert isinstance(convert_scalar("number", "100"), int)

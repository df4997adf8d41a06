"""Composite specs shared by several product blocks."""

from __future__ import annotations

from typing import Optional, Tuple

from ..projection import (Attr, Coded, CompositeSpec, IdentifierSlots, Inline,
                          Nested, Repeated, Scalar, TextList)

# Output key spelling (including CorprorateName and CollectionIdentifers) is
# part of the published document schema.


def text_attributes(
    prefix: str = "", language_key: str = "Language", case: bool = True
) -> Tuple[Attr, ...]:
    """Language/script/case attributes carried by ONIX text elements."""
    attrs = [
        Attr("language", f"{prefix}{language_key}", scheme="language"),
        Attr("textscript", f"{prefix}TextScript", scheme="script"),
    ]
    if case:
        attrs.append(Attr("textcase", f"{prefix}TextCaseFlags", scheme="text_case"))
    return tuple(attrs)


def flattened_text(tag: str, language_key: str = "Language") -> Inline:
    """Emit ``tag`` and its attributes as ``<tag>``, ``<tag>_Language``, ..."""
    return Inline(
        tag,
        CompositeSpec(tag, text_attributes(f"{tag}_", language_key), value_key=tag),
    )


def dated(date_format_key: str) -> Tuple[Inline, Coded]:
    """A ``<Date>`` whose format comes from its attribute or a ``<DateFormat>`` element."""
    return (
        Inline(
            "Date",
            CompositeSpec(
                "Date",
                (Attr("dateformat", date_format_key, scheme="date_format"),),
                value_key="Date",
            ),
        ),
        Coded("DateFormat", "date_format", key=date_format_key),
    )


def typed_identifier(
    name: str,
    type_tag: str,
    scheme: str,
    emit: str = "description",
    type_key: Optional[str] = None,
) -> CompositeSpec:
    """Identifier composite kept as an object: type, type name and value."""
    return CompositeSpec(
        name,
        (
            Coded(type_tag, scheme, key=type_key, emit=emit),
            Scalar("IDTypeName"),
            Scalar("IDValue"),
        ),
    )


TITLE_ELEMENT = CompositeSpec(
    "TitleElement",
    (
        Scalar("SequenceNumber", kind="integer"),
        Coded("TitleElementLevel", "title_element_level"),
        Scalar("YearOfAnnual"),
        Nested(
            "PartNumber",
            CompositeSpec("PartNumber", text_attributes(case=False), value_key="Value"),
        ),
        flattened_text("Subtitle"),
        Nested("TitlePrefix", CompositeSpec("TitlePrefix", text_attributes(), value_key="Value")),
        flattened_text("TitleWithoutPrefix", language_key="LanguageCode"),
        flattened_text("TitleText"),
    ),
)

TITLE_DETAIL = CompositeSpec(
    "TitleDetail",
    (
        Coded("TitleType", "title_type"),
        Scalar("TitleStatement"),
        Repeated("TitleElement", TITLE_ELEMENT, key="TitleElements"),
    ),
)

TITLE_DETAILS = Repeated("TitleDetail", TITLE_DETAIL, key="TitleDetails")

WEBSITE = CompositeSpec(
    "Website",
    (
        Coded("WebsiteRole", "website_role"),
        TextList("WebsiteDescription", key="WebsiteDescriptions"),
        TextList("WebsiteLink", key="WebsiteLinks"),
    ),
)

WEBSITES = Repeated("Website", WEBSITE, key="Websites")

NAME_IDENTIFIERS = IdentifierSlots("NameIdentifier", table="name")

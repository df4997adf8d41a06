"""DescriptiveDetail: contributors, subjects, titles, languages, extents, collections."""

from __future__ import annotations

from ..projection import (Attr, Coded, CompositeSpec, Inline, Repeated, Scalar,
                          TextList)
from .common import (NAME_IDENTIFIERS, TITLE_DETAILS, WEBSITES, dated,
                     typed_identifier)

NAME_FIELDS = (
    Scalar("PersonName"),
    Scalar("PersonNameInverted"),
    Scalar("NamesAfterKey"),
    Scalar("NamesBeforeKey"),
    Coded("NameType", "name_type"),
    Scalar("LettersAfterNames"),
    Scalar("KeyNames"),
    Scalar("CorporateName", key="CorprorateName"),
    Scalar("CorporateNameInverted", key="CorprorateNameInverted"),
)

TITLE_AND_AFFIX_FIELDS = (
    Scalar("TitlesBeforeNames"),
    Scalar("TitlesAfterNames"),
    Scalar("PrefixToKey"),
    Scalar("SuffixToKey"),
)

CONTRIBUTOR_DATE = CompositeSpec(
    "ContributorDate",
    (Coded("ContributorDateRole", "person_date_role", key="Role"), *dated("Format")),
)

CONTRIBUTOR_PLACE = CompositeSpec(
    "ContributorPlace",
    (
        Coded("ContributorPlaceRelator", "contributor_place_relator", key="Relation"),
        Coded("CountryCode", "country"),
        Coded("RegionCode", "region"),
        TextList("LocationName", key="Locations"),
    ),
)

PROFESSIONAL_AFFILIATION = CompositeSpec(
    "ProfessionalAffiliation",
    (
        Scalar("Affiliation", key="Affiliations"),
        TextList("ProfessionalPosition", key="Positions"),
    ),
)

ALTERNATIVE_NAME = CompositeSpec(
    "AlternativeName",
    (
        *NAME_FIELDS,
        Coded("Gender", "gender"),
        NAME_IDENTIFIERS,
        *TITLE_AND_AFFIX_FIELDS,
    ),
)

BIOGRAPHICAL_NOTE = CompositeSpec(
    "BiographicalNote",
    (
        Attr("language", "Language", scheme="language"),
        Attr("textformat", "TextFormat", scheme="text_format"),
    ),
    value_key="Note",
)

CONTRIBUTOR = CompositeSpec(
    "Contributor",
    (
        *NAME_FIELDS,
        Coded("UnnamedPersons", "unnamed_persons"),
        Coded("Gender", "gender"),
        Scalar("SequenceNumber", kind="integer"),
        *TITLE_AND_AFFIX_FIELDS,
        Repeated("ContributorDate", CONTRIBUTOR_DATE, key="Dates"),
        TextList("ContributorRole", key="Roles", scheme="contributor_role"),
        Repeated("ContributorPlace", CONTRIBUTOR_PLACE, key="Places"),
        NAME_IDENTIFIERS,
        Repeated("ProfessionalAffiliation", PROFESSIONAL_AFFILIATION, key="ProfessionalAffiliations"),
        Repeated("AlternativeName", ALTERNATIVE_NAME, key="AlternativeNames"),
        WEBSITES,
        Repeated("BiographicalNote", BIOGRAPHICAL_NOTE, key="BiographicalNotes"),
    ),
)

SUBJECT = CompositeSpec(
    "Subject",
    (
        Scalar("MainSubject", kind="flag"),
        Scalar("SubjectCode"),
        TextList("SubjectHeadingText"),
        Coded("SubjectSchemeIdentifier", "subject_scheme", emit="symbol"),
        Scalar("SubjectSchemeVersion"),
        Inline(
            "SubjectSchemeName",
            CompositeSpec(
                "SubjectSchemeName",
                (Attr("language", "SubjectSchemeNameLanguage", scheme="language"),),
                value_key="SubjectSchemeName",
            ),
        ),
    ),
)

LANGUAGE = CompositeSpec(
    "Language",
    (
        Coded("CountryCode", emit="code"),
        Coded("LanguageCode", emit="code"),
        Coded("LanguageRole", "language_role"),
        Coded("ScriptCode", "script"),
    ),
)

EXTENT = CompositeSpec(
    "Extent",
    (
        Coded("ExtentType", "extent_type"),
        Coded("ExtentUnit", "extent_unit"),
        Scalar("ExtentValue", kind="number"),
        Scalar("ExtentValueRoman"),
    ),
)

COLLECTION = CompositeSpec(
    "Collection",
    (
        Coded("CollectionType", "collection_type"),
        Repeated(
            "CollectionIdentifier",
            typed_identifier(
                "CollectionIdentifier",
                "CollectionIDType",
                "series_identifier_type",
                emit="symbol",
                type_key="CollectionIdType",
            ),
            key="CollectionIdentifers",
        ),
        TITLE_DETAILS,
    ),
)

DESCRIPTIVE_DETAIL = CompositeSpec(
    "DescriptiveDetail",
    (
        Inline(
            "DescriptiveDetail",
            CompositeSpec(
                "DescriptiveDetail",
                (
                    Scalar("EditionNumber", kind="integer"),
                    Scalar("EditionVersionNumber"),
                    Repeated("Contributor", CONTRIBUTOR, key="Contributors", suppressed_by="NoContributor"),
                    Repeated("Subject", SUBJECT, key="Subjects"),
                    Coded("CountryOfManufacture", emit="code"),
                    TITLE_DETAILS,
                    Repeated("Language", LANGUAGE, key="Languages"),
                    TextList("EditionType", scheme="edition_type"),
                    Repeated("Extent", EXTENT, key="Extent"),
                    Repeated("Collection", COLLECTION, key="Collections", suppressed_by="NoCollection"),
                ),
            ),
            required=True,
        ),
    ),
)

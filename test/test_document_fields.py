"""
Tests unitaires de la validation des champs d'entête (document_fields.py).
"""

import time
from datetime import date, datetime

import pytest

from facturation.models.constants import DiscountType, DocumentKind, ErrorKind
from facturation.models.messages import MessageCode
from facturation.models.schemas import CustomField, Discount, DocumentHeader
from facturation.services.document_fields import (
    validate_custom_fields,
    validate_dates,
    validate_discount,
    validate_document_header,
    validate_footer_notes,
    validate_header_notes,
    validate_number,
    validate_prefix,
    validate_purchase_order_number,
    validate_quote_dates,
    validate_terms_and_conditions,
)


def test_due_date_before_issue_date():
    result = validate_dates("2024-01-10", "2024-01-05")
    assert not result.is_valid
    assert result.due_error.kind == ErrorKind.ORDERING_VIOLATION
    assert result.due_error.code == MessageCode.DUE_DATE_AFTER_ISSUE_DATE
    assert result.issue_error is None


@pytest.mark.parametrize("due", ["2024-01-10", "2024-01-11", "2025-01-01"])
def test_due_date_on_or_after_issue_date(due):
    result = validate_dates("2024-01-10", due)
    assert result.is_valid
    assert result.due_error is None


def test_missing_dates():
    result = validate_dates("", None)
    assert result.issue_error.kind == ErrorKind.REQUIRED_FIELD
    assert result.issue_error.code == MessageCode.ISSUE_DATE_REQUIRED
    assert result.due_error.kind == ErrorKind.REQUIRED_FIELD


def test_unparseable_date_is_treated_as_missing():
    result = validate_dates("pas une date", "2024-01-10")
    assert result.issue_error.kind == ErrorKind.REQUIRED_FIELD
    assert result.due_error is None


def test_execution_date_ordering():
    result = validate_dates("2024-01-10", "2024-02-10", "2024-01-09")
    assert result.execution_error.kind == ErrorKind.ORDERING_VIOLATION
    assert validate_dates("2024-01-10", "2024-02-10", "2024-01-10").is_valid
    assert validate_dates("2024-01-10", "2024-02-10", "").is_valid


def test_dates_accept_date_objects():
    result = validate_dates(date(2024, 3, 1), datetime(2024, 2, 28, 12, 0))
    assert result.due_error.kind == ErrorKind.ORDERING_VIOLATION


def test_quote_dates_use_validity_messages():
    result = validate_quote_dates("2024-01-10", "2024-01-01")
    assert result.due_error.code == MessageCode.VALID_UNTIL_AFTER_ISSUE_DATE
    assert validate_quote_dates("2024-01-10", None).due_error.code == MessageCode.VALID_UNTIL_REQUIRED


def test_prefix_and_number():
    assert validate_prefix("F-202401-").is_valid
    assert validate_prefix("").error_for("prefix").kind == ErrorKind.REQUIRED_FIELD
    assert validate_prefix("F/2024").error_for("prefix").kind == ErrorKind.PATTERN_MISMATCH
    assert not validate_prefix("ABCDEFGHIJK").is_valid
    assert validate_number("000001").is_valid
    assert not validate_number("1" * 21).is_valid
    assert validate_number("", required=False).is_valid


def test_purchase_order_number_is_optional():
    assert validate_purchase_order_number(None).is_valid
    assert validate_purchase_order_number("BC_2024-17").is_valid
    assert not validate_purchase_order_number("BC 17").is_valid
    assert not validate_purchase_order_number("A" * 51).is_valid


def test_header_notes():
    assert validate_header_notes("Merci pour votre confiance !\nRèglement à 30 jours.").is_valid
    assert not validate_header_notes("<b>gras</b>").is_valid
    assert not validate_header_notes("a" * 1001).is_valid


def test_footer_notes_accept_any_printable_text():
    assert validate_footer_notes("IBAN : FR76 3000 6000 0112 3456 7890 189 — BIC AGRIFRPP\tPénalités 10 %").is_valid
    assert validate_footer_notes("Ligne 1\nLigne 2").is_valid
    assert not validate_footer_notes("bip\x07").is_valid
    assert not validate_footer_notes("a" * 2001).is_valid


def test_terms_and_conditions():
    assert validate_terms_and_conditions("CGV", "Nos conditions", "https://exemple.fr/cgv").is_valid
    assert validate_terms_and_conditions("CGV", None, "exemple.fr").is_valid
    result = validate_terms_and_conditions("x" * 2001, "<lien>", "pas une url")
    assert set(result.errors) == {
        "terms_and_conditions",
        "terms_and_conditions_link_title",
        "terms_and_conditions_link",
    }


@pytest.mark.parametrize(
    "link",
    [
        "a" * 50 + "!",
        "a" * 2000 + "!",
        "ab." * 600 + "ab!",
        "https://" + "a-" * 3000 + ".fr/x!",
        "www." + "ab" * 30 + ".fr?q=<",
    ],
)
def test_terms_link_rejected_without_slowdown(link):
    start = time.perf_counter()
    result = validate_terms_and_conditions(link=link)
    assert time.perf_counter() - start < 0.5
    assert result.error_for("terms_and_conditions_link").code == MessageCode.TERMS_AND_CONDITIONS_LINK


def test_terms_link_length_cap():
    base = "https://exemple.fr/"
    assert validate_terms_and_conditions(link=base + "a" * (2048 - len(base))).is_valid
    assert not validate_terms_and_conditions(link=base + "a" * (2049 - len(base))).is_valid
    assert validate_terms_and_conditions(link="http://192.168.0.1:8080/cgv#article-3").is_valid
    assert validate_terms_and_conditions(link="sous-domaine.exemple-site.fr/cgv?v=2").is_valid


def test_custom_fields():
    fields = [
        CustomField(key="Référence chantier", value="Lot B / 12 €"),
        CustomField(key="Note", value=""),
        CustomField(key="<x>", value="y" * 501),
    ]
    result = validate_custom_fields(fields)
    assert list(result.errors) == ["custom_fields[2].key", "custom_fields[2].value"]
    assert result.error_for("custom_fields[2].value").code == MessageCode.CUSTOM_FIELD_VALUE
    assert result.error_for("custom_fields[2].key").code == MessageCode.CUSTOM_FIELD_NAME


@pytest.mark.parametrize("key", ["a", "Lot 12", "Ref_chantier", "x" * 51])
def test_custom_field_name_rejected(key):
    result = validate_custom_fields([CustomField(key=key, value="valeur")])
    assert list(result.errors) == ["custom_fields[0].key"]
    assert result.error_for("custom_fields[0].key").code == MessageCode.CUSTOM_FIELD_NAME


@pytest.mark.parametrize("key", ["Chantier", "Maître d'ouvrage", "Sous-traitant"])
def test_custom_field_name_accepted(key):
    assert validate_custom_fields([CustomField(key=key, value="valeur")]).is_valid


def test_document_discount():
    assert validate_discount(None).is_valid
    assert validate_discount(100, DiscountType.PERCENTAGE).is_valid
    assert validate_discount(-1, DiscountType.FIXED).error_for("discount").code == MessageCode.DISCOUNT_FIXED
    assert validate_discount(-1, DiscountType.PERCENTAGE).error_for("discount").code == MessageCode.DISCOUNT_PERCENTAGE
    assert validate_discount(101, DiscountType.PERCENTAGE).error_for("discount").kind == ErrorKind.RANGE_ERROR
    assert validate_discount(5000, DiscountType.FIXED).is_valid


def _header(**overrides):
    data = dict(
        prefix="F-202401-",
        number="000042",
        issue_date="2024-01-10",
        due_date="2024-02-10",
    )
    data.update(overrides)
    return DocumentHeader(**data)


def test_valid_header():
    assert validate_document_header(_header()).is_valid


def test_header_merges_all_errors():
    header = _header(
        prefix="",
        due_date="2024-01-01",
        discount=Discount(value=120, type=DiscountType.PERCENTAGE),
        custom_fields=[CustomField(key="ok", value="<>")],
    )
    result = validate_document_header(header)
    assert set(result.errors) == {"prefix", "due_date", "discount", "custom_fields[0].value"}


def test_quote_header_ignores_execution_date():
    header = _header(kind=DocumentKind.QUOTE, execution_date="2023-12-01")
    assert validate_document_header(header).is_valid


def test_header_accepts_camel_case_payload():
    header = DocumentHeader.model_validate(
        {"prefix": "D-202401-", "number": "7", "issueDate": "2024-01-10", "dueDate": "2024-01-20", "kind": "QUOTE"}
    )
    assert header.kind == DocumentKind.QUOTE
    assert validate_document_header(header).is_valid

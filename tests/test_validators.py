"""Tests for PII validators."""

import pytest
from datetime import date

from pii_scanner.detectors.validators import (
    PiiValidator,
    validate_birth_date,
    validate_cnss,
    validate_credit_card,
    validate_email,
    validate_iban_benin,
    validate_npi,
    validate_phone,
)


class TestEmailValidator:
    """Test email validation and false-positive filtering."""

    @pytest.mark.parametrize(
        "email",
        ["jean.dupont@gouv.bj", "contact@entreprise.com", "a.adjovi@univ-ac.bj"],
    )
    def test_valid_emails(self, email: str):
        assert validate_email(email)

    @pytest.mark.parametrize(
        "email",
        [
            "logo@2x.png",
            "icon@3x.jpg",
            "config@app.json",
            "jean@site.jsx",
            "marie@doc.pdf",
            "bundle@main.ts",
            "rapport@annuel.docx",
            "Icon-App@something.com",
            "t@test.com",
            "contact@site.bjPARIS",
            "user@httpserver.com",
        ],
    )
    def test_rejects_false_positives(self, email: str):
        assert not validate_email(email)

    def test_one_letter_short_domain_treated_as_placeholder(self):
        assert not validate_email("j@gmail.com")
        assert validate_email("jo@gmail.com")

    def test_rejects_multiple_at(self):
        assert not validate_email("a@b@example.com")


class TestBirthDateValidator:
    """Test birth date validation."""

    TODAY = date(2026, 10, 17)

    def test_valid_adult_date(self):
        assert validate_birth_date("15/03/1985", today=self.TODAY)

    def test_leap_day(self):
        assert validate_birth_date("29/02/2000", today=self.TODAY)
        assert not validate_birth_date("29/02/2001", today=self.TODAY)

    def test_rejects_invalid_calendar_date(self):
        assert not validate_birth_date("31/04/1990", today=self.TODAY)

    def test_rejects_future_date(self):
        assert not validate_birth_date("01/01/2030", today=self.TODAY)

    def test_rejects_too_recent(self):
        """Dates less than five years ago are not birth dates."""
        assert not validate_birth_date("01/01/2025", today=self.TODAY)

    def test_rejects_too_old(self):
        assert not validate_birth_date("01/01/1900", today=self.TODAY)


class TestCreditCardValidator:
    """Test bank card validation."""

    @pytest.mark.parametrize(
        "number", ["4532015112830366", "4532 0151 1283 0366", "4532-0151-1283-0366"]
    )
    def test_valid_luhn(self, number: str):
        assert validate_credit_card(number)

    def test_invalid_luhn(self):
        assert not validate_credit_card("4532015112830367")

    def test_wrong_length(self):
        assert not validate_credit_card("453201511283036")


class TestNpiValidator:
    """Test NPI validation."""

    @pytest.mark.parametrize("npi", ["1234567893", "7992739875"])
    def test_valid_check_digit(self, npi: str):
        assert validate_npi(npi)

    def test_wrong_check_digit(self):
        assert not validate_npi("1234567894")

    @pytest.mark.parametrize("npi", ["1111111111", "1234567890", "9876543210", "0123456789"])
    def test_rejects_degenerate_values(self, npi: str):
        assert not validate_npi(npi)

    def test_check_digit_computation(self):
        assert PiiValidator.npi_check_digit("123456789") == 3
        assert PiiValidator.npi_check_digit("799273987") == 5


class TestIdentityDocumentValidators:
    """Test IFU, CNI and passport validation."""

    def test_ifu(self):
        assert PiiValidator.validate_ifu("3201910123456")
        assert not PiiValidator.validate_ifu("4201910123456")
        assert not PiiValidator.validate_ifu("320191012345")

    def test_cni(self):
        assert PiiValidator.validate_cni("AB12345678")
        assert not PiiValidator.validate_cni("AB12345")
        assert not PiiValidator.validate_cni("ab12345678")

    def test_passport(self):
        assert PiiValidator.validate_passport("BJ1234567")
        assert not PiiValidator.validate_passport("BJ123456")
        assert not PiiValidator.validate_passport("FR1234567")


class TestPhoneValidator:
    """Test Beninese phone validation."""

    @pytest.mark.parametrize(
        "phone",
        ["+229 97 12 34 56", "0022997123456", "97123456", "66 12 34 56", "51234567"],
    )
    def test_valid_numbers(self, phone: str):
        assert validate_phone(phone)

    @pytest.mark.parametrize("phone", ["68123456", "99123456", "96123456"])
    def test_mobile_money_prefixes(self, phone: str):
        assert validate_phone(phone)

    @pytest.mark.parametrize("phone", ["38123456", "9712345", "+33 6 12 34 56 78"])
    def test_invalid_numbers(self, phone: str):
        assert not validate_phone(phone)


class TestIbanValidator:
    """Test Beninese IBAN validation."""

    def test_valid_compact(self):
        assert validate_iban_benin("BJ66BJ0610100100144390000769")

    def test_valid_grouped(self):
        assert validate_iban_benin("BJ66 BJ06 1010 0100 1443 9000 0769")

    def test_rejects_other_country(self):
        assert not validate_iban_benin("FR7630006000011234567890189")

    def test_rejects_wrong_length(self):
        assert not validate_iban_benin("BJ66BJ061010010014439000076")
        assert not validate_iban_benin("BJ66BJ06101001001443900007691")

    def test_check_digits_not_verified(self):
        """Only the structure is checked; the mod-97 checksum is not."""
        assert validate_iban_benin("BJ00BJ0610100100144390000769")


class TestCnssValidator:
    """Test CNSS validation."""

    def test_valid(self):
        assert validate_cnss("31234567890")

    @pytest.mark.parametrize(
        "cnss",
        ["11111111111", "12345678901", "95999999996", "21474836470", "00000123456", "99999123456"],
    )
    def test_rejects_placeholders(self, cnss: str):
        assert not validate_cnss(cnss)

    def test_rejects_date_stamp(self):
        assert not validate_cnss("20230512345")

    def test_wrong_length(self):
        assert not validate_cnss("3123456789")

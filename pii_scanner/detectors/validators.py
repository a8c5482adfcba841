"""Validators that filter false positives out of regex candidates.

Each validator receives the exact matched text and returns True when the
candidate is a plausible identifier of its type. Validators are strict about
checksums and known placeholder values; the regex layer is kept permissive.
"""

import re
from datetime import date, datetime
from typing import Optional


# File references that look like emails (logo@2x.png, config@app.json, ...)
FILE_EXTENSIONS = (
    ".png", ".jpg", ".jpeg", ".gif", ".svg", ".ico", ".art", ".bmp", ".webp",
    ".json", ".js", ".ts", ".tsx", ".jsx", ".css", ".scss", ".map",
    ".pdf", ".docx", ".doc", ".xlsx", ".xls", ".txt", ".csv",
)

# Degenerate 10-digit values used as placeholders in forms and documentation
NPI_PLACEHOLDERS = frozenset({
    "1234567890",
    "0987654321",
    "1111111111",
    "1231231231",
})

CNSS_DENY_LIST = frozenset({
    "95999999996",
    "12345678901",
    "01234567890",
    # Examples copied from CNSS documentation
    "07123456789",
    "00001760268",
    "35492213230",
    # INT32_MAX lookalikes found in logs and dumps
    "21474836470",
    "21474836471",
    "21474836480",
})

PHONE_PREFIXES = frozenset(
    [f"4{d}" for d in range(10)]
    + [f"5{d}" for d in range(10)]
    + [f"6{d}" for d in "012345679"]
    + [f"9{d}" for d in "012345679"]
    # Mobile money ranges (MTN MoMo, Moov Money)
    + ["66", "67", "68", "69", "96", "97", "98", "99"]
)

MAX_AGE_YEARS = 120
MIN_AGE_YEARS = 5


def _digits_only(value: str) -> str:
    return re.sub(r"[\s-]", "", value)


def _is_monotonic_run(digits: str) -> bool:
    """True for strictly ascending or descending consecutive digit runs (0123..., 9876...)."""
    steps = {int(b) - int(a) for a, b in zip(digits, digits[1:])}
    return steps == {1} or steps == {-1}


def _years_ago(today: date, years: int) -> date:
    try:
        return today.replace(year=today.year - years)
    except ValueError:
        # 29 February on a non-leap target year
        return today.replace(year=today.year - years, day=28)


class PiiValidator:
    """Type-specific validators for Beninese and generic PII."""

    @staticmethod
    def validate_email(email: str) -> bool:
        """
        Validate an email candidate and reject file references.

        One-letter addresses on short .com/.org/.net domains (t@test.com) are
        treated as documentation placeholders. Real addresses of that shape,
        such as j@gmail.com, are dropped as well.

        Args:
            email: Matched email text

        Returns:
            True if this looks like a real address
        """
        if email.count("@") != 1:
            return False

        local, domain = email.split("@")
        if not local or "." not in domain:
            return False

        lowered = email.lower()
        if lowered.endswith(FILE_EXTENSIONS):
            return False

        # iOS/Android asset names: icon@2x, logo@3x, Icon-App-*, iTunesArtwork@*
        if re.match(r"^\d+x\.", domain, re.IGNORECASE):
            return False
        if re.match(r"^(Icon-|iTunes|framework)", local, re.IGNORECASE):
            return False

        # Domain glued to surrounding text (contact@site.bjPARIS, foo@NomPrenom.fr)
        if re.search(r"[a-z][A-Z]{2,}$", email) or re.search(r"[A-Z][a-z]+[A-Z]", domain):
            return False
        if "http" in domain.lower():
            return False
        if re.search(r"\d+\.(png|jpg|json|art)", domain, re.IGNORECASE):
            return False

        # Placeholder addresses in examples (t@test.com, a@mail.org)
        if re.match(r"^[a-z]@[a-z]{3,5}\.(com|org|net)$", email, re.IGNORECASE):
            return False

        return True

    @staticmethod
    def validate_birth_date(value: str, today: Optional[date] = None) -> bool:
        """
        Validate a dd/mm/yyyy birth date.

        The date must exist in the calendar, lie between 5 and 120 years
        before today.

        Args:
            value: Matched date text
            today: Reference date (defaults to the current date)

        Returns:
            True if the date is a plausible birth date
        """
        try:
            parsed = datetime.strptime(value, "%d/%m/%Y").date()
        except ValueError:
            return False

        today = today or date.today()
        if parsed > today:
            return False

        oldest = _years_ago(today, MAX_AGE_YEARS)
        youngest = _years_ago(today, MIN_AGE_YEARS)
        return oldest <= parsed <= youngest

    @staticmethod
    def validate_credit_card(number: str) -> bool:
        """
        Validate a 16-digit card number with the Luhn algorithm.

        Args:
            number: Card number, spaces and dashes allowed

        Returns:
            True if 16 digits and Luhn checksum is valid
        """
        cleaned = _digits_only(number)
        if len(cleaned) != 16 or not cleaned.isdigit():
            return False
        return PiiValidator._luhn_checksum(cleaned)

    @staticmethod
    def validate_npi(npi: str) -> bool:
        """
        Validate a 10-digit NPI (Numéro Personnel d'Identification).

        Args:
            npi: Matched digits

        Returns:
            True if not degenerate and the last digit is the check digit
        """
        if len(npi) != 10 or not npi.isdigit():
            return False

        if len(set(npi)) == 1 or _is_monotonic_run(npi) or npi in NPI_PLACEHOLDERS:
            return False

        return PiiValidator.npi_check_digit(npi[:9]) == int(npi[9])

    @staticmethod
    def npi_check_digit(payload: str) -> int:
        """
        Compute the NPI check digit for a 9-digit payload.

        Every second digit counting from the rightmost payload digit is
        doubled (two-digit products are folded), all digits are summed and the
        check digit is the distance to the next multiple of ten.
        """
        total = 0
        for i, char in enumerate(reversed(payload)):
            digit = int(char)
            if i % 2 == 1:
                digit *= 2
                if digit > 9:
                    digit -= 9
            total += digit
        return (10 - total % 10) % 10

    @staticmethod
    def validate_ifu(ifu: str) -> bool:
        """IFU (Identifiant Fiscal Unique): 13 digits starting with 0, 1, 2 or 3."""
        return len(ifu) == 13 and ifu.isdigit() and ifu[0] in "0123"

    @staticmethod
    def validate_cni(cni: str) -> bool:
        """CNI: two uppercase letters followed by digits, 8 to 12 characters in total."""
        if not 8 <= len(cni) <= 12:
            return False
        return bool(re.fullmatch(r"[A-Z]{2}\d+", cni))

    @staticmethod
    def validate_passport(passport: str) -> bool:
        """Beninese passport: BJ followed by exactly 7 digits."""
        return bool(re.fullmatch(r"BJ\d{7}", passport))

    @staticmethod
    def validate_phone(phone: str) -> bool:
        """
        Validate a Beninese phone number.

        Args:
            phone: Matched number, with or without +229/00229

        Returns:
            True if 8 national digits with an allowed prefix
        """
        cleaned = re.sub(r"\s", "", phone)
        if cleaned.startswith("+229"):
            cleaned = cleaned[4:]
        elif cleaned.startswith("00229"):
            cleaned = cleaned[5:]

        if len(cleaned) != 8 or not cleaned.isdigit():
            return False

        return cleaned[:2] in PHONE_PREFIXES

    @staticmethod
    def validate_iban_benin(iban: str) -> bool:
        """
        Validate a Beninese IBAN.

        Args:
            iban: Matched IBAN, grouping spaces allowed

        Returns:
            True for BJ + 2 check digits + 24 alphanumerics
        """
        cleaned = re.sub(r"\s", "", iban)
        return bool(re.fullmatch(r"BJ\d{2}[A-Z0-9]{24}", cleaned))

    @staticmethod
    def validate_cnss(cnss: str) -> bool:
        """
        Validate an 11-digit CNSS (Caisse Nationale de Sécurité Sociale) number.

        Args:
            cnss: Matched digits

        Returns:
            True unless the value is degenerate or a known placeholder
        """
        if len(cnss) != 11 or not cnss.isdigit():
            return False

        if len(set(cnss)) == 1 or cnss in CNSS_DENY_LIST:
            return False

        if cnss.startswith(("00000", "99999")):
            return False

        # YYYYMM... date stamps
        if cnss.startswith("20"):
            year = int(cnss[0:4])
            month = int(cnss[4:6])
            if 1900 <= year <= 2100 and 1 <= month <= 12:
                return False

        return True

    @staticmethod
    def _luhn_checksum(number: str) -> bool:
        """
        Validate using Luhn algorithm (modulo 10).

        Args:
            number: Number string to validate

        Returns:
            True if checksum is valid
        """
        digits = [int(d) for d in number]
        checksum = 0

        # Process digits from right to left
        for i, digit in enumerate(reversed(digits)):
            if i % 2 == 1:  # Every second digit from the right
                digit *= 2
                if digit > 9:
                    digit -= 9
            checksum += digit

        return checksum % 10 == 0


# Convenience functions for individual validations
def validate_email(email: str) -> bool:
    """Validate email."""
    return PiiValidator.validate_email(email)


def validate_birth_date(value: str, today: Optional[date] = None) -> bool:
    """Validate birth date."""
    return PiiValidator.validate_birth_date(value, today)


def validate_credit_card(number: str) -> bool:
    """Validate bank card number."""
    return PiiValidator.validate_credit_card(number)


def validate_npi(npi: str) -> bool:
    """Validate NPI."""
    return PiiValidator.validate_npi(npi)


def validate_cnss(cnss: str) -> bool:
    """Validate CNSS number."""
    return PiiValidator.validate_cnss(cnss)


def validate_iban_benin(iban: str) -> bool:
    """Validate Beninese IBAN."""
    return PiiValidator.validate_iban_benin(iban)


def validate_phone(phone: str) -> bool:
    """Validate Beninese phone number."""
    return PiiValidator.validate_phone(phone)

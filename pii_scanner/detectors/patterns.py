"""Beninese PII pattern registry with validation.

Detection follows the Beninese personal data law (Loi N°2017-20) categories:
a permissive regex finds candidates, then a type-specific validator rejects
false positives. Patterns are compiled once at import time.
"""

import re
from datetime import datetime
from typing import Callable, Dict, Iterable, List, Optional

from pii_scanner.detectors.validators import PiiValidator
from pii_scanner.models import Detection, PermissionInfo, PIIType
from pii_scanner.utils import get_logger

logger = get_logger(__name__)


def _always_valid(value: str) -> bool:
    return True


class BeninPIIPatterns:
    """Pattern/validator registry for Beninese and generic PII."""

    # Pattern definitions with metadata; dict order is detection order
    PATTERNS: Dict[PIIType, dict] = {
        # ========== Universal data ==========
        PIIType.EMAIL: {
            "pattern": r"\b[a-zA-Z][a-zA-Z0-9._%+-]*@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}\b",
            "description": "Adresse email",
            "validator": PiiValidator.validate_email,
        },
        PIIType.DATE_OF_BIRTH: {
            "pattern": r"\b(?:0[1-9]|[12][0-9]|3[01])/(?:0[1-9]|1[0-2])/(?:19|20)\d{2}\b",
            "description": "Date de naissance (JJ/MM/AAAA)",
            "validator": PiiValidator.validate_birth_date,
        },
        PIIType.CREDIT_CARD: {
            "pattern": r"\b(?:\d{4}[ -]?){3}\d{4}\b",
            "description": "Carte bancaire (16 chiffres, Luhn)",
            "validator": PiiValidator.validate_credit_card,
        },
        PIIType.NPI: {
            "pattern": r"\b\d{10}\b",
            "description": "Numéro Personnel d'Identification",
            "validator": PiiValidator.validate_npi,
        },
        # ========== Identity documents ==========
        PIIType.IFU: {
            "pattern": r"\b[0-3]\d{12}\b",
            "description": "Identifiant Fiscal Unique",
            "validator": PiiValidator.validate_ifu,
        },
        PIIType.CNI: {
            "pattern": r"\b[A-Z]{2}\d{6,10}\b",
            "description": "Carte Nationale d'Identité",
            "validator": PiiValidator.validate_cni,
        },
        PIIType.PASSPORT: {
            "pattern": r"\bBJ\d{7}\b",
            "description": "Passeport béninois",
            "validator": PiiValidator.validate_passport,
        },
        PIIType.RCCM: {
            "pattern": r"\bRB/[A-Z]{3}/\d{4}/[A-Z]/\d{1,5}\b",
            "description": "Registre du Commerce et du Crédit Mobilier",
            "validator": _always_valid,
        },
        PIIType.BIRTH_CERTIFICATE: {
            "pattern": r"(?:\bN°\s?)?\b\d{1,5}/\d{4}/[A-Z]{2,}\b",
            "description": "Acte de naissance",
            "validator": _always_valid,
        },
        # ========== Contact ==========
        PIIType.PHONE_NUMBER: {
            "pattern": r"(?<![\w+])(?<!\d[ -])(?:(?:\+229|00229) ?)?[4569]\d ?\d{2} ?\d{2} ?\d{2}\b(?![ -]?\d)",
            "description": "Téléphone Bénin (fixe, mobile, mobile money)",
            "validator": PiiValidator.validate_phone,
        },
        # ========== Banking ==========
        PIIType.IBAN: {
            "pattern": r"\bBJ\d{2}(?: ?[A-Z0-9]{4}){6}\b",
            "description": "IBAN Bénin",
            "validator": PiiValidator.validate_iban_benin,
        },
        # ========== Health and social security ==========
        PIIType.CNSS: {
            "pattern": r"\b\d{11}\b",
            "description": "Caisse Nationale de Sécurité Sociale",
            "validator": PiiValidator.validate_cnss,
        },
        PIIType.RAMU: {
            "pattern": r"\bRAMU[ -]?\d{8,10}\b",
            "description": "Régime d'Assurance Maladie Universelle",
            "validator": _always_valid,
        },
        # ========== Education and administration ==========
        PIIType.INE: {
            "pattern": r"\bINE[ -]?\d{8,12}\b",
            "description": "Identifiant National de l'Élève",
            "validator": _always_valid,
        },
        PIIType.CIVIL_SERVANT_ID: {
            "pattern": r"\b[FM]\d{6,10}\b",
            "description": "Matricule fonctionnaire",
            "validator": _always_valid,
        },
        # ========== Transport ==========
        PIIType.LICENSE_PLATE: {
            "pattern": r"\b(?:[A-Z]{2} ?\d{4} ?[A-Z]{2}|\d{4} ?[A-Z]{2})\b",
            "description": "Plaque d'immatriculation",
            "validator": _always_valid,
        },
    }

    COMPILED: Dict[PIIType, "re.Pattern[str]"] = {
        pii_type: re.compile(config["pattern"]) for pii_type, config in PATTERNS.items()
    }

    @classmethod
    def detect(
        cls,
        text: str,
        file_path: str,
        last_accessed_at: Optional[datetime] = None,
        permission_info: Optional[PermissionInfo] = None,
        pii_types: Optional[Iterable[PIIType]] = None,
    ) -> List[Detection]:
        """
        Detect all Beninese PII patterns in text.

        Args:
            text: Text to scan
            file_path: File the text was extracted from, copied onto each detection
            last_accessed_at: Last access time of the file
            permission_info: Permission metadata of the file
            pii_types: Restrict detection to these types (None for all)

        Returns:
            List of detections, one per validated match
        """
        if not text or not text.strip():
            return []

        wanted = set(pii_types) if pii_types is not None else None
        metadata = cls._file_metadata(last_accessed_at, permission_info)
        detections = []

        for pii_type, regex in cls.COMPILED.items():
            if wanted is not None and pii_type not in wanted:
                continue

            validator: Callable[[str], bool] = cls.PATTERNS[pii_type]["validator"]

            for match in regex.finditer(text):
                value = match.group()
                try:
                    if not validator(value):
                        continue
                except Exception as e:
                    logger.warning(f"Validation failed for {pii_type.value} candidate: {e}")
                    continue

                detections.append(
                    Detection(pii_type=pii_type, matched_text=value, file_path=file_path, **metadata)
                )

        if detections:
            logger.debug(f"Detected {len(detections)} PII candidates in {file_path}")

        return detections

    @staticmethod
    def _file_metadata(
        last_accessed_at: Optional[datetime], permission_info: Optional[PermissionInfo]
    ) -> dict:
        metadata = {"last_accessed_at": last_accessed_at}

        if permission_info is not None:
            # Imported here: the exposure analyzer lives in a package that imports this one
            from pii_scanner.analyzers.exposure_analyzer import ExposureAnalyzer

            metadata.update(
                exposure_level=ExposureAnalyzer.calculate_exposure_level(permission_info),
                accessible_to_everyone=permission_info.accessible_to_everyone,
                accessible_to_authenticated_users=permission_info.accessible_to_authenticated_users,
                is_network_share=permission_info.is_network_share,
                user_group_count=permission_info.principal_count,
            )

        return metadata

    @classmethod
    def get_supported_types(cls) -> List[PIIType]:
        """Get list of supported PII types."""
        return list(cls.PATTERNS.keys())

    @classmethod
    def get_description(cls, pii_type: PIIType) -> Optional[str]:
        """Get description for a PII type."""
        if pii_type in cls.PATTERNS:
            return cls.PATTERNS[pii_type]["description"]
        return None


def detect(text: str, file_path: str, **kwargs) -> List[Detection]:
    """Run the registry over ``text``."""
    return BeninPIIPatterns.detect(text, file_path, **kwargs)

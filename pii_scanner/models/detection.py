"""Data models for PII detections and derived risk information."""

from datetime import datetime
from enum import Enum
from typing import Dict, List, Optional
from pydantic import BaseModel, Field, ConfigDict


class PIIType(str, Enum):
    """Types of personally identifiable information recognised by the registry."""

    # Universal data
    EMAIL = "Email"
    DATE_OF_BIRTH = "DateNaissance"
    CREDIT_CARD = "CarteBancaire"
    NPI = "NPI"

    # Beninese identity documents
    IFU = "IFU"
    CNI = "CNI_Benin"
    PASSPORT = "Passeport_Benin"
    RCCM = "RCCM"
    BIRTH_CERTIFICATE = "ActeNaissance"

    # Contact
    PHONE_NUMBER = "Telephone"

    # Banking
    IBAN = "IBAN"

    # Health and social security
    CNSS = "CNSS"
    RAMU = "RAMU"

    # Education and administration
    INE = "INE"
    CIVIL_SERVANT_ID = "Matricule_Fonctionnaire"

    # Transport
    LICENSE_PLATE = "Plaque_Immatriculation"


BANKING_PII_TYPES = frozenset({PIIType.IBAN, PIIType.CREDIT_CARD})


class ExposureLevel(str, Enum):
    """How broadly a file's permissions allow access."""

    FAIBLE = "Faible"
    MOYEN = "Moyen"
    ELEVE = "Élevé"
    CRITIQUE = "Critique"

    @property
    def rank(self) -> int:
        return list(ExposureLevel).index(self)


class StalenessLevel(str, Enum):
    """How long ago a file was last accessed."""

    RECENT = "Récent"
    SIX_MONTHS = "6 mois"
    ONE_YEAR = "1 an"
    THREE_YEARS = "3 ans"
    FIVE_YEARS_PLUS = "+5 ans"

    @property
    def rank(self) -> int:
        return list(StalenessLevel).index(self)


class RiskLevel(str, Enum):
    """Per-file risk level."""

    FAIBLE = "FAIBLE"
    MOYEN = "MOYEN"
    ELEVE = "ÉLEVÉ"


class PermissionInfo(BaseModel):
    """Permission metadata supplied by the permission inspector."""

    principal_count: int = Field(0, ge=0, description="Distinct users/groups with access")
    accessible_to_everyone: bool = Field(False, description="'Everyone' has access")
    accessible_to_authenticated_users: bool = Field(
        False, description="'Authenticated Users' has access"
    )
    is_network_share: bool = Field(False, description="Path resolves to a network share")


class Detection(BaseModel):
    """A single validated PII match inside a file."""

    model_config = ConfigDict(frozen=True)

    pii_type: PIIType = Field(..., description="Type of PII detected")
    matched_text: str = Field(..., min_length=1, description="Exact substring that matched")
    file_path: str = Field(..., description="File the match was found in")

    # File metadata carried in by the scanner
    last_accessed_at: Optional[datetime] = None
    exposure_level: Optional[ExposureLevel] = None
    accessible_to_everyone: Optional[bool] = None
    accessible_to_authenticated_users: Optional[bool] = None
    is_network_share: Optional[bool] = None
    user_group_count: Optional[int] = None


class FileRiskInfo(BaseModel):
    """Risk summary for one file that contains PII."""

    file_path: str
    pii_count: int
    distinct_type_count: int
    risk_level: RiskLevel
    last_accessed_at: Optional[datetime] = None
    staleness_level: StalenessLevel = StalenessLevel.RECENT
    stale_data_warning: Optional[str] = None

    # Exposure
    exposure_level: ExposureLevel = ExposureLevel.FAIBLE
    accessible_to_everyone: bool = False
    is_network_share: bool = False
    user_group_count: int = 0
    exposure_warning: Optional[str] = None


class ScanStatistics(BaseModel):
    """Snapshot of statistics computed from a list of detections."""

    total_files_scanned: int = 0
    files_with_pii: int = 0
    total_pii_found: int = 0
    pii_by_type: Dict[str, int] = Field(default_factory=dict)
    top_risky_files: List[FileRiskInfo] = Field(default_factory=list)

    def summary(self) -> str:
        """Render a plain-text recap of the statistics."""
        lines = [
            "=== STATISTIQUES DU SCAN ===",
            f"Fichiers scannés : {self.total_files_scanned}",
            f"Fichiers contenant des PII : {self.files_with_pii}",
            f"Total de PII détectées : {self.total_pii_found}",
            "",
        ]

        if self.pii_by_type:
            lines.append("Répartition par type :")
            for pii_type, count in self.pii_by_type.items():
                percentage = count * 100.0 / self.total_pii_found
                lines.append(f"  - {pii_type}: {count} ({percentage:.1f}%)")

        return "\n".join(lines)

"""File exposure analysis based on permission metadata."""

import os
import stat
from typing import Optional

from pydantic import BaseModel

from pii_scanner.models import ExposureLevel, PermissionInfo
from pii_scanner.utils import get_logger

logger = get_logger(__name__)

# Principal count from which a file is considered broadly shared
BROAD_ACCESS_THRESHOLD = 10
MULTI_GROUP_THRESHOLD = 5


class ExposureAssessment(BaseModel):
    """Exposure classification of one file."""

    level: ExposureLevel
    warning: Optional[str] = None


class ExposureAnalyzer:
    """Turns permission metadata into an exposure level and a warning."""

    @staticmethod
    def calculate_exposure_level(info: PermissionInfo) -> ExposureLevel:
        """
        Classify how broadly a file can be read.

        Args:
            info: Permission metadata

        Returns:
            Exposure level
        """
        if info.accessible_to_everyone:
            return ExposureLevel.CRITIQUE

        # Network share reachable by many principals is effectively public
        if info.is_network_share and info.principal_count >= BROAD_ACCESS_THRESHOLD:
            return ExposureLevel.CRITIQUE

        if info.accessible_to_authenticated_users or info.principal_count >= BROAD_ACCESS_THRESHOLD:
            return ExposureLevel.ELEVE

        if info.principal_count >= MULTI_GROUP_THRESHOLD:
            return ExposureLevel.MOYEN

        return ExposureLevel.FAIBLE

    @classmethod
    def classify(cls, info: PermissionInfo, pii_count: int = 1) -> ExposureAssessment:
        """Return the exposure level of ``info`` together with its warning."""
        level = cls.calculate_exposure_level(info)
        return ExposureAssessment(level=level, warning=cls.get_exposure_warning(pii_count, info, level))

    @classmethod
    def get_exposure_warning(
        cls,
        pii_count: int,
        info: PermissionInfo,
        level: Optional[ExposureLevel] = None,
    ) -> Optional[str]:
        """
        Build a warning for a file holding PII with broad access.

        Args:
            pii_count: Number of PII found in the file
            info: Permission metadata
            level: Precomputed exposure level (computed from ``info`` when omitted)

        Returns:
            Warning text, or None when exposure is Faible or no PII was found
        """
        level = level or cls.calculate_exposure_level(info)
        if level == ExposureLevel.FAIBLE or pii_count <= 0:
            return None

        if info.accessible_to_everyone:
            return (
                f"CRITIQUE: Ce fichier contient {pii_count} PII et est accessible "
                f"à TOUS les utilisateurs (Everyone)"
            )

        if level == ExposureLevel.CRITIQUE and info.is_network_share:
            return (
                f"CRITIQUE: Ce fichier contient {pii_count} PII et est accessible "
                f"sur un partage réseau à {info.principal_count} groupes"
            )

        if info.accessible_to_authenticated_users:
            return (
                f"ÉLEVÉ: Ce fichier contient {pii_count} PII et est accessible "
                f"à tous les utilisateurs authentifiés"
            )

        label = cls.get_exposure_level_label(level).upper()
        return (
            f"{label}: Ce fichier contient {pii_count} PII et est accessible "
            f"à {info.principal_count} groupes d'utilisateurs"
        )

    @staticmethod
    def get_exposure_level_label(level: ExposureLevel) -> str:
        """Display label of an exposure level."""
        return level.value


class PermissionInspector:
    """Collects permission metadata for a file from the local filesystem."""

    def inspect(self, file_path: str) -> PermissionInfo:
        """
        Inspect a file's permissions.

        The owner, the owning group and the group's members count as
        principals. A world-readable file is treated as readable by Everyone.

        Args:
            file_path: File to inspect

        Returns:
            PermissionInfo; a restricted default when the file cannot be inspected
        """
        is_network_share = self.is_network_path(file_path)

        try:
            st = os.stat(file_path)
        except OSError as e:
            logger.debug(f"Cannot read permissions of {file_path}: {e}")
            return PermissionInfo(is_network_share=is_network_share)

        principals = {f"uid:{st.st_uid}", f"gid:{st.st_gid}"}
        principals.update(f"user:{member}" for member in self._group_members(st.st_gid))

        # Windows stat() reports every file as readable by others
        accessible_to_everyone = os.name != "nt" and bool(st.st_mode & stat.S_IROTH)

        return PermissionInfo(
            principal_count=len(principals),
            accessible_to_everyone=accessible_to_everyone,
            is_network_share=is_network_share,
        )

    @staticmethod
    def _group_members(gid: int) -> list:
        try:
            import grp
        except ImportError:
            return []

        try:
            return list(grp.getgrgid(gid).gr_mem)
        except KeyError:
            return []

    @staticmethod
    def is_network_path(path: str) -> bool:
        """True for UNC paths (\\\\server\\share or //server/share)."""
        return path.startswith("\\\\") or path.startswith("//")

"""
Polygon soup reference validation.

Audits a built soup without modifying it:
- Dangling vertex references (face index >= number of vertices)
- Dangling patch references (face patch index >= number of patches)
- Weakly degenerate faces (two consecutive equal indices)
- Non-triangular faces
- Patches without faces

Only the two dangling-reference checks are errors; the rest are reported
for information and don't block processing. Connectivity (manifoldness,
boundary edges) is not inspected.
"""

import logging
from collections import Counter
from dataclasses import dataclass, field
from enum import Enum
from typing import List

from polysoup.mesh.soup import PolygonSoup

logger = logging.getLogger(__name__)


class ValidationSeverity(Enum):
    """Severity level of validation issues."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


@dataclass
class ValidationIssue:
    """A single validation issue found in the soup."""
    code: str
    severity: ValidationSeverity
    message: str
    count: int = 1
    details: List[int] = field(default_factory=list)  # face/patch indices

    def __str__(self) -> str:
        if self.count > 1:
            return f"[{self.severity.value.upper()}] {self.code}: {self.message} ({self.count} occurrences)"
        return f"[{self.severity.value.upper()}] {self.code}: {self.message}"


@dataclass
class ValidationReport:
    """Complete validation report for a polygon soup."""
    is_valid: bool

    n_vertices: int
    n_faces: int
    n_patches: int
    n_triangles: int
    n_dangling_vertex_refs: int
    n_dangling_patch_refs: int
    n_degenerate_faces: int

    issues: List[ValidationIssue] = field(default_factory=list)

    @property
    def warnings(self) -> List[ValidationIssue]:
        """Get all warning-level issues."""
        return [i for i in self.issues if i.severity == ValidationSeverity.WARNING]

    @property
    def errors(self) -> List[ValidationIssue]:
        """Get all error-level issues."""
        return [i for i in self.issues if i.severity == ValidationSeverity.ERROR]

    def summary(self) -> str:
        """Generate human-readable summary."""
        lines = [
            "Polygon Soup Validation Report",
            "=" * 40,
            f"Vertices: {self.n_vertices}",
            f"Faces: {self.n_faces} ({self.n_triangles} triangles)",
            f"Patches: {self.n_patches}",
            "",
            f"Dangling vertex refs: {self.n_dangling_vertex_refs}",
            f"Dangling patch refs: {self.n_dangling_patch_refs}",
            f"Degenerate faces: {self.n_degenerate_faces}",
        ]

        if self.issues:
            lines.append("")
            lines.append("Issues:")
            for issue in self.issues:
                lines.append(f"  - {issue}")

        lines.append("")
        lines.append(f"Overall: {'VALID' if self.is_valid else 'INVALID'}")

        return "\n".join(lines)


def _has_repeated_neighbours(indices: List[int]) -> bool:
    return any(a == b for a, b in zip(indices, indices[1:]))


def validate_soup(soup: PolygonSoup, max_details: int = 10) -> ValidationReport:
    """Validate face references of a polygon soup.

    Args:
        soup: Soup to audit
        max_details: Number of offending face indices kept per issue

    Returns:
        ValidationReport with all findings
    """
    n_vertices = soup.n_vertices
    n_patches = soup.n_patches
    faces = soup.faces
    issues: List[ValidationIssue] = []

    logger.debug("Validating soup: %d vertices, %d faces, %d patches",
                 n_vertices, len(faces), n_patches)

    dangling_vertex: List[int] = []
    dangling_patch: List[int] = []
    degenerate: List[int] = []
    non_triangular: List[int] = []
    patch_usage: Counter = Counter()

    for fi, face in enumerate(faces):
        indices = list(face)
        if any(i < 0 or i >= n_vertices for i in indices):
            dangling_vertex.append(fi)
        if face.patch is not None:
            if not 0 <= face.patch < n_patches:
                dangling_patch.append(fi)
            else:
                patch_usage[face.patch] += 1
        if _has_repeated_neighbours(indices):
            degenerate.append(fi)
        if len(indices) != 3:
            non_triangular.append(fi)

    if dangling_vertex:
        issues.append(ValidationIssue(
            code="DANGLING_VERTEX_REFS",
            severity=ValidationSeverity.ERROR,
            message=f"{len(dangling_vertex)} faces reference vertices beyond {n_vertices}",
            count=len(dangling_vertex),
            details=dangling_vertex[:max_details],
        ))
        logger.error("Soup has %d faces with dangling vertex references", len(dangling_vertex))

    if dangling_patch:
        issues.append(ValidationIssue(
            code="DANGLING_PATCH_REFS",
            severity=ValidationSeverity.ERROR,
            message=f"{len(dangling_patch)} faces reference patches beyond {n_patches}",
            count=len(dangling_patch),
            details=dangling_patch[:max_details],
        ))
        logger.error("Soup has %d faces with dangling patch references", len(dangling_patch))

    if degenerate:
        issues.append(ValidationIssue(
            code="DEGENERATE_FACES",
            severity=ValidationSeverity.WARNING,
            message=f"{len(degenerate)} faces repeat a vertex index consecutively",
            count=len(degenerate),
            details=degenerate[:max_details],
        ))
        logger.warning("Soup has %d degenerate faces", len(degenerate))

    if non_triangular:
        issues.append(ValidationIssue(
            code="NON_TRIANGULAR_FACES",
            severity=ValidationSeverity.INFO,
            message=f"{len(non_triangular)} faces don't have exactly 3 vertices",
            count=len(non_triangular),
            details=non_triangular[:max_details],
        ))

    empty_patches = [pi for pi in range(n_patches) if patch_usage[pi] == 0]
    if empty_patches:
        issues.append(ValidationIssue(
            code="EMPTY_PATCHES",
            severity=ValidationSeverity.INFO,
            message=f"{len(empty_patches)} patches have no faces",
            count=len(empty_patches),
            details=empty_patches[:max_details],
        ))

    is_valid = not any(i.severity == ValidationSeverity.ERROR for i in issues)
    n_triangles = sum(1 for face in faces if face.is_triangle())

    report = ValidationReport(
        is_valid=is_valid,
        n_vertices=n_vertices,
        n_faces=len(faces),
        n_patches=n_patches,
        n_triangles=n_triangles,
        n_dangling_vertex_refs=len(dangling_vertex),
        n_dangling_patch_refs=len(dangling_patch),
        n_degenerate_faces=len(degenerate),
        issues=issues,
    )

    logger.debug("Validation complete: %s", "VALID" if is_valid else "INVALID")
    return report

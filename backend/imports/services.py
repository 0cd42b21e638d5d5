#imports/services.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional
import logging
import os

import pandas as pd
from django.core.exceptions import ValidationError

from curriculum.models import Program, ProgramSubject, Subject, SubjectType
from terms.models import Semester

logger = logging.getLogger(__name__)

# =========================
# Header validation helpers
# =========================

REQUIRED_COLUMNS: Dict[str, set[str]] = {
    "curriculum": {
        "program_code",
        "subject_code",
        "subject_name",
        "units",
    },
}

# Flexible synonyms so slightly different headers still map correctly
HEADER_SYNONYMS: Dict[str, set[str]] = {
    "program_code": {"Program", "ProgramCode", "Program Code", "Course Code"},
    "program_name": {"ProgramName", "Program Name", "Program Title"},
    "subject_code": {"Subject", "SubjectCode", "Subject Code", "Code"},
    "subject_name": {"SubjectName", "Subject Name", "Title", "Description", "Descriptive Title"},
    "units": {"Units", "Unit", "Credits", "Credit Units"},
    "subject_type": {"Type", "SubjectType", "Subject Type", "Major/Minor"},
    "prerequisite_code": {"Prerequisite", "Prereq", "Pre-requisite", "Prerequisite Code"},
    "recommended_year": {"Year", "Year Level", "YearLevel", "Recommended Year"},
    "recommended_semester": {"Semester", "Sem", "Term", "Recommended Semester"},
}

SEMESTER_ALIASES = {
    "1": Semester.FIRST, "1st": Semester.FIRST, "first": Semester.FIRST, "first semester": Semester.FIRST,
    "2": Semester.SECOND, "2nd": Semester.SECOND, "second": Semester.SECOND, "second semester": Semester.SECOND,
    "summer": Semester.SUMMER, "midyear": Semester.SUMMER, "s": Semester.SUMMER,
}


def _strip(s) -> str:
    return str(s).strip() if s is not None else ""


def _normalise_headers(df: pd.DataFrame) -> Dict[str, str]:
    """
    Returns a mapping {wanted_key -> actual_column_name_in_df}
    """
    mapping: Dict[str, str] = {}
    dfcols = [str(c).strip() for c in df.columns]
    lower_to_actual = {c.lower(): c for c in dfcols}

    for want in set().union(*REQUIRED_COLUMNS.values()) | set(HEADER_SYNONYMS.keys()):
        # exact lowercase match
        if want.lower() in lower_to_actual:
            mapping[want] = lower_to_actual[want.lower()]
            continue
        # synonyms, case-insensitive
        for syn in HEADER_SYNONYMS.get(want, set()):
            if syn.lower() in lower_to_actual:
                mapping[want] = lower_to_actual[syn.lower()]
                break
    return mapping


def _validate_headers(kind: str, df: pd.DataFrame) -> Dict[str, str]:
    mapping = _normalise_headers(df)
    missing = sorted(c for c in REQUIRED_COLUMNS[kind] if c not in mapping)
    if missing:
        raise ValidationError(
            f"Spreadsheet is missing required columns for '{kind}': {', '.join(missing)}"
        )
    return mapping


def read_sheet(file_like, filename: str = "") -> pd.DataFrame:
    """CSV by extension, otherwise the first sheet of an Excel workbook."""
    ext = os.path.splitext(filename or getattr(file_like, "name", "") or "")[1].lower()
    if ext == ".csv":
        df = pd.read_csv(file_like, dtype=str, keep_default_na=False)
    else:
        df = pd.read_excel(file_like, dtype=str, keep_default_na=False, engine="openpyxl")
    df.columns = [str(c).strip() for c in df.columns]
    return df


# ============
# Conversions
# ============

def _to_int(value: Any) -> Optional[int]:
    s = _strip(value)
    if not s:
        return None
    try:
        return int(float(s))
    except ValueError:
        return None


def _as_subject_type(value: Any) -> str:
    s = _strip(value).upper()
    if not s:
        return SubjectType.MINOR
    if s not in SubjectType.values:
        raise ValueError(f"unknown subject type '{value}'")
    return s


def _as_semester(value: Any) -> Optional[str]:
    s = _strip(value).lower()
    if not s:
        return None
    if s.upper() in Semester.values:
        return s.upper()
    if s in SEMESTER_ALIASES:
        return SEMESTER_ALIASES[s]
    raise ValueError(f"unknown semester '{value}'")


# ==================
# Logging to control
# ==================

@dataclass
class ImportStats:
    ok: int = 0
    err: int = 0
    errors: list[str] = field(default_factory=list)

    def log(self, msg: str):
        self.errors.append(msg)
        self.err += 1

    def inc(self):
        self.ok += 1


# ===========================
# Curriculum import
# ===========================

def import_curriculum(file_like, job, filename: str = "") -> Dict[str, int]:
    """
    Import a curriculum sheet, one row per (program, subject):
      - programs are created when missing (name updated when given)
      - subjects are created or updated (name, units, type)
      - prerequisites are linked after every subject in the sheet exists
      - program/subject mappings are created or updated
    Bad rows are counted and logged on the job; good rows still load.
    Callers wrap this in a transaction.
    """
    df = read_sheet(file_like, filename or job.original_name or job.file.name)
    col = _validate_headers("curriculum", df)
    stats = ImportStats()
    counts = {"programs": 0, "subjects": 0, "mappings": 0, "prerequisites": 0}

    def cell(row, key):
        return _strip(row.get(col[key], "")) if key in col else ""

    # subject code -> (line, prerequisite code); the last row for a subject wins
    pending_prereqs: Dict[str, tuple[int, str]] = {}

    for idx, row in df.iterrows():
        line = idx + 2  # header is line 1
        program_code = cell(row, "program_code").upper()
        subject_code = cell(row, "subject_code").upper()
        if not program_code and not subject_code:
            continue
        try:
            if not program_code or not subject_code:
                raise ValueError("program_code and subject_code are required")
            units = _to_int(cell(row, "units"))
            if not units or units < 1:
                raise ValueError(f"invalid units '{cell(row, 'units')}'")
            subject_type = _as_subject_type(cell(row, "subject_type"))
            semester = _as_semester(cell(row, "recommended_semester"))
            year = _to_int(cell(row, "recommended_year"))
            if year is not None and year < 1:
                raise ValueError(f"invalid year '{cell(row, 'recommended_year')}'")

            program, created = Program.objects.get_or_create(
                code=program_code,
                defaults={"name": cell(row, "program_name") or program_code},
            )
            if created:
                counts["programs"] += 1
            elif cell(row, "program_name") and program.name != cell(row, "program_name"):
                program.name = cell(row, "program_name")
                program.save(update_fields=["name", "updated_at"])

            subject, created = Subject.objects.update_or_create(
                code=subject_code,
                defaults={
                    "name": cell(row, "subject_name") or subject_code,
                    "units": units,
                    "subject_type": subject_type,
                },
            )
            if created:
                counts["subjects"] += 1

            _, created = ProgramSubject.objects.update_or_create(
                program=program,
                subject=subject,
                defaults={"recommended_year": year, "recommended_semester": semester},
            )
            if created:
                counts["mappings"] += 1

            prereq = cell(row, "prerequisite_code").upper()
            if prereq:
                pending_prereqs[subject.code] = (line, prereq)
            stats.inc()
        except ValueError as e:
            stats.log(f"Line {line}: {e}")

    for code, (line, prereq_code) in pending_prereqs.items():
        if prereq_code == code:
            stats.log(f"Line {line}: {code} cannot be its own prerequisite")
            continue
        prereq = Subject.objects.filter(code=prereq_code).first()
        if prereq is None:
            stats.log(f"Line {line}: unknown prerequisite '{prereq_code}' for {code}")
            continue
        subject = Subject.objects.get(code=code)
        if subject.prerequisite_id != prereq.pk:
            subject.prerequisite = prereq
            subject.save(update_fields=["prerequisite", "updated_at"])
            counts["prerequisites"] += 1

    job.finish(rows_total=len(df.index), rows_ok=stats.ok, errors=stats.errors, summary=counts)
    logger.info(
        "Curriculum import job %s: %s ok, %s errors, %s", job.pk, stats.ok, stats.err, counts,
    )
    return {**counts, "rows_ok": stats.ok, "rows_error": stats.err}


# =================
# Import dispatcher
# =================

IMPORT_DISPATCH = {
    "curriculum": import_curriculum,
}

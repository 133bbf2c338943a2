"""
Department / college lookup by course prefix.
"""

from __future__ import annotations

from typing import NamedTuple


UNSCOPED_COLLEGE = "(unscoped)"

KHOURY = "Khoury College of Computer Sciences"
ENGINEERING = "College of Engineering"
SCIENCE = "College of Science"
BOUVE = "Bouvé College of Health Sciences"
DAMORE_MCKIM = "D'Amore-McKim School of Business"
CAMD = "College of Arts, Media and Design"


class Classification(NamedTuple):
    department: str
    college: str


# prefix -> (department, college)
_PREFIXES: dict[str, tuple[str, str]] = {
    "CS": ("Computer Science", KHOURY),
    "CSCI": ("Computer Science", KHOURY),
    "CY": ("Cybersecurity", KHOURY),
    "INFO": ("Information Systems", KHOURY),
    "IS": ("Information Systems", KHOURY),
    "DS": ("Data Science", KHOURY),
    "DA": ("Data Science", KHOURY),
    "ME": ("Mechanical Engineering", ENGINEERING),
    "MECH": ("Mechanical Engineering", ENGINEERING),
    "EECE": ("Electrical and Computer Engineering", ENGINEERING),
    "ECE": ("Electrical and Computer Engineering", ENGINEERING),
    "CIVE": ("Civil and Environmental Engineering", ENGINEERING),
    "CIV": ("Civil and Environmental Engineering", ENGINEERING),
    "IE": ("Industrial Engineering", ENGINEERING),
    "ENGR": ("Engineering", ENGINEERING),
    "BINF": ("Bioinformatics", SCIENCE),
    "BIOL": ("Biology", SCIENCE),
    "CHEM": ("Chemistry", SCIENCE),
    "PHYS": ("Physics", SCIENCE),
    "MATH": ("Mathematics", SCIENCE),
    "PT": ("Physical Therapy", BOUVE),
    "MISM": ("Information Systems Management", DAMORE_MCKIM),
    "BUSN": ("BUSN", DAMORE_MCKIM),
    "ACCT": ("ACCT", DAMORE_MCKIM),
    "FINA": ("FINA", DAMORE_MCKIM),
    "MKTG": ("MKTG", DAMORE_MCKIM),
    "ARTG": ("Art + Design", CAMD),
    "GSND": ("Game Science and Design", CAMD),
}


def prefix_of(identifier: str) -> str:
    """
    Alphabetic prefix of an identifier: 'cs 5100' -> 'CS'.
    """
    parts = (identifier or "").strip().split()
    return parts[0].upper() if parts else ""


def classify(identifier: str) -> Classification:
    """
    Map an identifier to (department, college). Defined for every string.
    """
    prefix = prefix_of(identifier)
    hit = _PREFIXES.get(prefix)
    if hit is None:
        return Classification(department=prefix, college=UNSCOPED_COLLEGE)
    return Classification(department=hit[0], college=hit[1])

"""Input adapters that normalize raw salary and enrichment data."""

from .enrichment import load_enrichment, save_enrichment
from .salaries import (
    DEFAULT_SALARY_MAPPING,
    SalaryRow,
    load_salary_csv,
    load_salary_text,
    rows_to_records,
)

__all__ = [
    "DEFAULT_SALARY_MAPPING",
    "SalaryRow",
    "load_enrichment",
    "load_salary_csv",
    "load_salary_text",
    "rows_to_records",
    "save_enrichment",
]

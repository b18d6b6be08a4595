"""Tax rules loading from tax-rules/<year>.yaml."""

import logging
import os
import re
from pathlib import Path
from typing import List, Optional

import yaml

from ..config import get_setting
from .schemas import TaxYearRules

logger = logging.getLogger(__name__)

TAX_YEAR_PATTERN = re.compile(r"^\d{4}-\d{2}$")


class TaxYearNotFoundError(FileNotFoundError):
    """Raised when no tax-rules file exists for a tax year."""
    pass


def _get_packaged_rules_dir() -> Path:
    """Get the tax-rules directory shipped with the package."""
    package_root = Path(__file__).parent.parent.parent  # taxes -> sdk -> aupay
    return package_root / "tax-rules"


def _get_tax_rules_dirs() -> List[Path]:
    """Get tax-rules directories in lookup order.

    A user directory (AU_PAY_CALC_TAX_RULES_PATH env var, else the
    tax_rules_dir setting) shadows the packaged rules.
    """
    dirs = []
    custom = os.environ.get("AU_PAY_CALC_TAX_RULES_PATH") or get_setting("tax_rules_dir")
    if custom:
        dirs.append(Path(custom).expanduser())
    dirs.append(_get_packaged_rules_dir())
    return dirs


def _find_rules_file(year: str) -> Optional[Path]:
    for rules_dir in _get_tax_rules_dirs():
        candidate = rules_dir / f"{year}.yaml"
        if candidate.exists():
            return candidate
    return None


def available_tax_years() -> List[str]:
    """Get sorted list of tax years with rules available (ascending)."""
    years = set()
    for rules_dir in _get_tax_rules_dirs():
        if not rules_dir.is_dir():
            continue
        years.update(p.stem for p in rules_dir.glob("*.yaml") if TAX_YEAR_PATTERN.match(p.stem))
    return sorted(years)


def load_tax_rules(year: str) -> TaxYearRules:
    """Load and validate tax rules for a tax year (e.g. "2025-26").

    Raises:
        TaxYearNotFoundError: If no rules file exists for the year
        pydantic.ValidationError: If the rules file is malformed
    """
    config_file = _find_rules_file(year) if TAX_YEAR_PATTERN.match(year or "") else None
    if config_file is None:
        raise TaxYearNotFoundError(f"Tax rules file not found for tax year {year}")

    with open(config_file, "r") as f:
        raw = yaml.safe_load(f)

    rules = TaxYearRules.model_validate(raw)
    if rules.tax_year != year:
        raise ValueError(f"{config_file} declares tax_year {rules.tax_year}, expected {year}")

    logger.debug(f"Loaded tax rules for {year} from {config_file}")
    return rules

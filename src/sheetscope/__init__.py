"""SheetScope - Excel formula complexity analyzer."""

from .engine import Category, FormulaRecord, classify

__version__ = "0.1.0"

__all__ = ["Category", "FormulaRecord", "classify", "__version__"]

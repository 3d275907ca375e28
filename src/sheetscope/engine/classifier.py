"""Formula complexity classifier: pattern fast path, then heuristic score."""

import logging
from typing import Optional

from .models import Category, ClassificationResult, FormulaRecord
from .patterns import PatternLibrary
from .scorer import category_for_score, extract_features, score_features

logger = logging.getLogger(__name__)


class FormulaClassifier:
    """Classifies formulas as SIMPLE, MEDIUM or COMPLEX.

    Stateless apart from its pattern library, which is immutable, so a single
    instance can be shared freely.
    """

    def __init__(self, patterns: Optional[PatternLibrary] = None):
        self.patterns = patterns or PatternLibrary()

    def classify(self, formula: str) -> Category:
        """Classify raw formula text (without the leading "=")."""
        matched = self.patterns.match(formula)
        if matched:
            return matched[1]
        return category_for_score(score_features(extract_features(formula)))

    def classify_record(self, record: FormulaRecord) -> ClassificationResult:
        """Classify a record, keeping the features and the deciding rule."""
        features = extract_features(record.formula)
        matched = self.patterns.match(record.formula)

        if matched:
            pattern, category = matched
            logger.debug(f"{record.address}: {category.value} by pattern '{pattern.name}'")
            return ClassificationResult(
                record=record,
                category=category,
                features=features,
                rule=pattern.name,
            )

        score = score_features(features)
        category = category_for_score(score)
        logger.debug(f"{record.address}: {category.value} by score {score}")
        return ClassificationResult(
            record=record,
            category=category,
            features=features,
            score=score,
        )


_default_classifier = FormulaClassifier()


def classify(formula: str) -> Category:
    """Classify formula text with the default rules."""
    return _default_classifier.classify(formula)

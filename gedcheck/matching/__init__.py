"""
Duplicate detection matching engine.

Groups individuals by normalized surname and scores candidate pairs with
fuzzy given-name matching, birth year proximity and sex.
"""

from .matcher import DuplicateDetector
from .scorer import DuplicatePair, DuplicateScorer, normalize_name, string_similarity

__all__ = ['DuplicateDetector', 'DuplicatePair', 'DuplicateScorer', 'normalize_name', 'string_similarity']

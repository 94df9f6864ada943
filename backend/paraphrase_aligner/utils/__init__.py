"""
Utility modules for the paraphrase aligner.
"""

from paraphrase_aligner.utils.text_utils import normalize_text, remove_punctuation, split_glosses, strip_diacritics

__all__ = [
    'normalize_text',
    'remove_punctuation',
    'split_glosses',
    'strip_diacritics',
]

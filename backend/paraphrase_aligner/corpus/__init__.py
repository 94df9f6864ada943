"""
Corpus package
==============

Data providers for the aligner: the words database, the vocabularies, the
scholie and the TMX gold standard.
"""

from paraphrase_aligner.corpus.loaders import load_scholie, load_scholie_table, load_vocabulary, load_words
from paraphrase_aligner.corpus.gold_standard import build_problems, load_gold_standard

__all__ = [
    "load_words",
    "load_vocabulary",
    "load_scholie",
    "load_scholie_table",
    "build_problems",
    "load_gold_standard",
]

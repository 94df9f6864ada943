"""
Paraphrase Aligner
==================

Word-level alignment of a source text with its paraphrase, with weights
learned by a structured perceptron.
"""

__version__ = "0.1.0"

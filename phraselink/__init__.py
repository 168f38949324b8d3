"""
PhraseLink
Phrase normalization, relation discovery and reference search
"""

__version__ = "1.0.0"

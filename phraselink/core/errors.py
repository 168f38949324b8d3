"""
PhraseLink Errors
Exception hierarchy shared by the stores, builder and searcher
"""


class PhraseLinkError(Exception):
    """Base class for all PhraseLink errors"""


class DataIntegrityError(PhraseLinkError):
    """Phrase and lookup documents are malformed or out of alignment"""


class IndexOutOfRange(PhraseLinkError, IndexError):
    """Positional fetch outside of the loaded table"""

    def __init__(self, index: int, length: int):
        self.index = index
        self.length = length
        super().__init__(f"Index {index} out of range for table of {length} entries")


class InvalidInputError(PhraseLinkError, TypeError):
    """Input of the wrong type was passed to a text operation"""

"""
PhraseLink Lemmatizer
spaCy-backed base-form lookup for single words
"""

import logging
import warnings
from functools import lru_cache
from typing import Dict, Tuple

import spacy

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "en_core_web_sm"


class SpacyLemmatizer:
    """
    Maps a word to its candidate base forms using a spaCy pipeline

    Instances are callables usable as the ``lemma_of`` capability of
    :func:`phraselink.core.normalizer.normalize`.
    """

    # Class variable for model caching
    _loaded_models: Dict[str, "spacy.language.Language"] = {}

    def __init__(self, model_name: str = DEFAULT_MODEL):
        self.model_name = model_name
        self.nlp = None

    def _load_model(self):
        """Load the spaCy pipeline, falling back to a blank English one"""
        if self.nlp is not None:
            return

        if self.model_name in self._loaded_models:
            self.nlp = self._loaded_models[self.model_name]
            logger.debug(f"Using cached spaCy model {self.model_name}")
            return

        # Suppress spacy warnings about model compatibility
        warnings.filterwarnings("ignore", message=".*W095.*")

        try:
            self.nlp = spacy.load(self.model_name, disable=["parser", "ner"])
            logger.info(f"Loaded spaCy model {self.model_name}")
        except OSError:
            logger.warning(f"Could not load spaCy model {self.model_name}, "
                           f"using blank English pipeline (words are kept as written)")
            self.nlp = spacy.blank("en")

        self._loaded_models[self.model_name] = self.nlp

    @lru_cache(maxsize=4096)
    def only_lemmas(self, word: str) -> Tuple[str, ...]:
        """
        Candidate base forms of a single word, best first

        Args:
            word: One word, already stripped of punctuation

        Returns:
            Tuple with the lemma of the word; empty when the pipeline has none
        """
        self._load_model()

        # spaCy may split one word ("e&o") into several tokens
        lemma = "".join(token.lemma_ or token.text for token in self.nlp(word)).strip()
        if not lemma:
            return ()
        return (lemma,)

    def __call__(self, word: str) -> Tuple[str, ...]:
        return self.only_lemmas(word)

from collections import defaultdict
import logging
from typing import Iterable

from hmm_tagger.models.models import (
    DEFAULT_SEPARATOR,
    START_TAG,
    FrequencyTables,
    RawSentence,
    Sentence,
)
from hmm_tagger.utils.corpus_repo import split_token

logger = logging.getLogger(__name__)


def to_tokens(sentence: RawSentence, separator: str = DEFAULT_SEPARATOR) -> Sentence:
    """Normalise a sentence of "word/tag" strings or (word, tag) pairs"""
    return [
        split_token(item, separator) if isinstance(item, str) else (item[0], item[1])
        for item in sentence
    ]


def index_corpus(corpus: Iterable[RawSentence], separator: str = DEFAULT_SEPARATOR) -> FrequencyTables:
    """Count words, tags, word/tag pairs and tag bigrams over a tagged corpus.

    Every sentence starts with an implicit START_TAG, which is counted in the
    tag table once per non-empty sentence.
    """
    word_freq = defaultdict(int)
    tag_freq = defaultdict(int)
    word_tag_freq = defaultdict(int)
    tag_bigram_freq = defaultdict(int)
    sentences = 0

    for sentence in corpus:
        prev_tag = START_TAG
        for index, (word, tag) in enumerate(to_tokens(sentence, separator)):
            word_freq[word] += 1
            tag_freq[tag] += 1
            word_tag_freq[(word, tag)] += 1
            if index == 0:
                tag_freq[START_TAG] += 1
                sentences += 1
            tag_bigram_freq[(prev_tag, tag)] += 1
            prev_tag = tag

    tables = FrequencyTables.from_counts(word_freq, tag_freq, word_tag_freq, tag_bigram_freq)
    logger.info(
        f"Indexed {sentences} sentences: {len(tables.vocabulary)} words, "
        f"{len(tables.candidate_tags)} tags"
    )
    return tables

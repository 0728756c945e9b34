from types import MappingProxyType
from typing import Dict
import logging

from hmm_tagger.models.models import FrequencyTables, ProbabilityTables, TagPair, WordTag

logger = logging.getLogger(__name__)


def build_transition_table(freq: FrequencyTables) -> Dict[TagPair, float]:
    """P(cur | prev) = count(prev, cur) / count(prev) for every observed bigram"""
    table = {}
    for cur_tag in freq.tag_set:
        for prev_tag in freq.tag_set:
            count = freq.count_tag_bigram(prev_tag, cur_tag)
            if count > 0:
                table[(prev_tag, cur_tag)] = count / freq.count_tag(prev_tag)
    return table


def build_emission_table(freq: FrequencyTables) -> Dict[WordTag, float]:
    """P(word | tag) = count(word, tag) / count(tag) for every observed pair"""
    table = {}
    for word in freq.vocabulary:
        for tag in freq.tag_set:
            count = freq.count_word_tag(word, tag)
            if count > 0:
                table[(word, tag)] = count / freq.count_tag(tag)
    return table


def build_probability_tables(freq: FrequencyTables) -> ProbabilityTables:
    transition = build_transition_table(freq)
    emission = build_emission_table(freq)
    logger.debug(f"Built {len(transition)} transition and {len(emission)} emission entries")
    return ProbabilityTables(
        transition=MappingProxyType(transition),
        emission=MappingProxyType(emission),
    )

"""Smoothing estimators for unseen transitions and emissions.

Each technique is a pair of plain functions taking the read-only frequency
tables and a SmoothingParams record. The decoder only ever sees a Smoother,
so a new technique is added by registering its estimators here.
"""
from dataclasses import dataclass
from functools import partial
import logging
import math
from typing import Callable, Dict, Iterable, Sequence, Tuple

from hmm_tagger.models.models import FrequencyTables, SmoothingParams, Technique

logger = logging.getLogger(__name__)

Estimator = Callable[[FrequencyTables, SmoothingParams, str, str], float]


@dataclass(frozen=True)
class Smoother:
    technique: Technique
    transition: Callable[[str, str], float]
    emission: Callable[[str, str], float]


def laplace_transition(freq: FrequencyTables, params: SmoothingParams, prev_tag: str, cur_tag: str) -> float:
    return (freq.count_tag_bigram(prev_tag, cur_tag) + 1) / (
        freq.count_tag(prev_tag) + params.laplace_k * len(freq.tag_freq)
    )


def laplace_emission(freq: FrequencyTables, params: SmoothingParams, word: str, tag: str) -> float:
    return (freq.count_word_tag(word, tag) + 1) / (
        freq.count_tag(tag) + params.laplace_k * len(freq.tag_freq)
    )


def _witten_bell(freq: FrequencyTables, params: SmoothingParams, context_tag: str) -> float:
    if params.unseen == 0:
        return 0.0
    return params.seen / (params.unseen * (freq.count_tag(context_tag) + params.seen))


def witten_bell_transition(freq: FrequencyTables, params: SmoothingParams, prev_tag: str, cur_tag: str) -> float:
    value = _witten_bell(freq, params, prev_tag)
    if value > 0 and math.isfinite(value):
        return value
    return laplace_transition(freq, params, prev_tag, cur_tag)


def witten_bell_emission(freq: FrequencyTables, params: SmoothingParams, word: str, tag: str) -> float:
    value = _witten_bell(freq, params, tag)
    if value > 0 and math.isfinite(value):
        return value
    return laplace_emission(freq, params, word, tag)


# Kneser-Ney is a known technique without estimators yet
ESTIMATORS: Dict[Technique, Tuple[Estimator, Estimator]] = {
    Technique.LAPLACE: (laplace_transition, laplace_emission),
    Technique.WITTEN_BELL: (witten_bell_transition, witten_bell_emission),
}

# Techniques compared by tune(), in tie-break order
TUNABLE_TECHNIQUES: Sequence[Technique] = (Technique.LAPLACE, Technique.WITTEN_BELL)


def witten_bell_counts(freq: FrequencyTables, sentences: Iterable[Sequence[str]]) -> Tuple[int, int]:
    """Return (seen, unseen) distinct word types of the sentences against the training vocabulary"""
    test_words = {word for sentence in sentences for word in sentence}
    seen = sum(1 for word in test_words if word in freq.word_freq)
    return seen, len(test_words) - seen


def get_smoother(technique: Technique, freq: FrequencyTables, params: SmoothingParams = SmoothingParams()) -> Smoother:
    technique = Technique(technique)
    if technique not in ESTIMATORS:
        raise NotImplementedError(f"{technique.value} smoothing is not implemented")
    transition, emission = ESTIMATORS[technique]
    logger.debug(f"Using {technique.value} smoothing with {params}")
    return Smoother(
        technique=technique,
        transition=partial(transition, freq, params),
        emission=partial(emission, freq, params),
    )

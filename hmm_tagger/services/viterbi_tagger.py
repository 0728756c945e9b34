import math
from typing import List, Dict, Optional, Sequence, Tuple
import logging

from hmm_tagger.errors import InvalidArgumentError
from hmm_tagger.models.models import START_TAG, FrequencyTables, ProbabilityTables, Token
from hmm_tagger.services.smoothing import Smoother

logger = logging.getLogger(__name__)

NEG_INF = float('-inf')


def _log(prob: float) -> float:
    return math.log(prob) if prob > 0 else NEG_INF


class ViterbiTagger:
    """Bigram HMM decoder.

    Scores are summed log-probabilities, so argmax and tie-breaking match the
    linear-space product without underflowing on long sentences. Ties go to
    the later tag in sorted tag-set order.
    """

    def __init__(self, tables: ProbabilityTables, freq: FrequencyTables):
        self.tables = tables
        self.freq = freq
        self.tags = freq.candidate_tags
        self._transition_cache: Dict[Tuple[str, str], float] = {}
        self._emission_cache: Dict[Tuple[str, str], float] = {}

    def get_transition_prob(self, prev_tag: str, curr_tag: str, smoother: Smoother) -> float:
        """Log P(curr_tag | prev_tag), smoothed when the pair was never observed"""
        cache_key = (prev_tag, curr_tag)
        value = self._transition_cache.get(cache_key)
        if value is None:
            prob = self.tables.transition.get(cache_key)
            if prob is None:
                prob = smoother.transition(prev_tag, curr_tag)
            value = self._transition_cache[cache_key] = _log(prob)
        return value

    def get_emission_prob(self, word: str, tag: str, smoother: Smoother) -> float:
        """Log P(word | tag), smoothed when the pair was never observed"""
        cache_key = (word, tag)
        value = self._emission_cache.get(cache_key)
        if value is None:
            prob = self.tables.emission.get(cache_key)
            if prob is None:
                prob = smoother.emission(word, tag)
            value = self._emission_cache[cache_key] = _log(prob)
        return value

    def viterbi(self, words: Sequence[str], smoother: Smoother) -> List[str]:
        """Return the most likely tag for each word"""
        if not words:
            return []
        if not self.tags:
            logger.error("Model has no tags; cannot decode")
            raise InvalidArgumentError("Model has no tags; train it on a non-empty corpus first")

        # Caches are only valid for one smoother
        self._transition_cache.clear()
        self._emission_cache.clear()

        n_tags = len(self.tags)
        # score[i][t]: best log-probability of a path ending in tag t at position i
        score: List[List[float]] = []
        backpointer: List[List[Optional[int]]] = []

        # Initialization
        score.append([
            self.get_transition_prob(START_TAG, tag, smoother) + self.get_emission_prob(words[0], tag, smoother)
            for tag in self.tags
        ])
        backpointer.append([None] * n_tags)

        # Iteration
        for i in range(1, len(words)):
            prev_scores = score[i - 1]
            row: List[float] = []
            pointers: List[Optional[int]] = []
            for curr_tag in self.tags:
                best_prev = 0
                max_prob = prev_scores[0] + self.get_transition_prob(self.tags[0], curr_tag, smoother)
                for prev_index in range(1, n_tags):
                    prob = prev_scores[prev_index] + self.get_transition_prob(self.tags[prev_index], curr_tag, smoother)
                    if prob >= max_prob:
                        max_prob = prob
                        best_prev = prev_index
                row.append(max_prob + self.get_emission_prob(words[i], curr_tag, smoother))
                pointers.append(best_prev)
            score.append(row)
            backpointer.append(pointers)

        # Termination
        last = score[-1]
        best_last = 0
        for tag_index in range(1, n_tags):
            if last[tag_index] >= last[best_last]:
                best_last = tag_index

        # Backtracking
        best_path: List[str] = []
        state: Optional[int] = best_last
        position = len(words) - 1
        while state is not None and position >= 0:
            best_path.append(self.tags[state])
            state = backpointer[position][state]
            position -= 1
        best_path.reverse()
        return best_path

    def decode(self, words: Sequence[str], smoother: Smoother) -> List[Token]:
        return list(zip(words, self.viterbi(words, smoother)))

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Dict, List, Mapping, Sequence, Tuple, Union

START_TAG = "<s>"
DEFAULT_SEPARATOR = "/"

Token = Tuple[str, str]
Sentence = List[Token]
TagPair = Tuple[str, str]
WordTag = Tuple[str, str]
# A corpus line is either raw "word/tag" strings or already split tokens
RawSentence = Sequence[Union[str, Token]]


class Technique(str, Enum):
    LAPLACE = "laplace"
    WITTEN_BELL = "witten_bell"
    KNESER_NEY = "kneser_ney"


@dataclass(frozen=True)
class FrequencyTables:
    word_freq: Mapping[str, int]
    tag_freq: Mapping[str, int]
    word_tag_freq: Mapping[WordTag, int]
    tag_bigram_freq: Mapping[TagPair, int]
    vocabulary: Tuple[str, ...]
    tag_set: Tuple[str, ...]

    @classmethod
    def from_counts(
        cls,
        word_freq: Dict[str, int],
        tag_freq: Dict[str, int],
        word_tag_freq: Dict[WordTag, int],
        tag_bigram_freq: Dict[TagPair, int],
    ) -> "FrequencyTables":
        """Freeze plain count dicts into read-only views"""
        return cls(
            word_freq=MappingProxyType(dict(word_freq)),
            tag_freq=MappingProxyType(dict(tag_freq)),
            word_tag_freq=MappingProxyType(dict(word_tag_freq)),
            tag_bigram_freq=MappingProxyType(dict(tag_bigram_freq)),
            vocabulary=tuple(sorted(word_freq)),
            tag_set=tuple(sorted(tag_freq)),
        )

    @classmethod
    def empty(cls) -> "FrequencyTables":
        return cls.from_counts({}, {}, {}, {})

    @property
    def candidate_tags(self) -> Tuple[str, ...]:
        return tuple(tag for tag in self.tag_set if tag != START_TAG)

    def count_word(self, word: str) -> int:
        return self.word_freq.get(word, 0)

    def count_tag(self, tag: str) -> int:
        return self.tag_freq.get(tag, 0)

    def count_word_tag(self, word: str, tag: str) -> int:
        return self.word_tag_freq.get((word, tag), 0)

    def count_tag_bigram(self, prev_tag: str, tag: str) -> int:
        return self.tag_bigram_freq.get((prev_tag, tag), 0)

    def __hash__(self):
        return hash((
            frozenset(self.word_freq.items()),
            frozenset(self.tag_freq.items()),
            frozenset(self.word_tag_freq.items()),
            frozenset(self.tag_bigram_freq.items()),
        ))


@dataclass(frozen=True)
class ProbabilityTables:
    transition: Mapping[TagPair, float]
    emission: Mapping[WordTag, float]

    @classmethod
    def empty(cls) -> "ProbabilityTables":
        return cls(transition=MappingProxyType({}), emission=MappingProxyType({}))


@dataclass(frozen=True)
class SmoothingParams:
    laplace_k: float = 1.0
    # Witten-Bell type counts, derived from the corpus being tagged
    seen: int = 0
    unseen: int = 0


@dataclass
class CrossValidationReport:
    fold_accuracies: List[float] = field(default_factory=list)
    mean: float = 0.0
    std_error: float = 0.0

    @property
    def folds(self) -> int:
        return len(self.fold_accuracies)

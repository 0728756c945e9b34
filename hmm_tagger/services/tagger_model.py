import math
import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Dict, Iterable, List, Sequence, Tuple

from scipy import stats

from hmm_tagger.errors import InvalidArgumentError
from hmm_tagger.models.models import (
    DEFAULT_SEPARATOR,
    CrossValidationReport,
    FrequencyTables,
    ProbabilityTables,
    RawSentence,
    SmoothingParams,
    Technique,
    Token,
)
from hmm_tagger.services.evaluate import EvaluationResult, evaluate_model
from hmm_tagger.services.indexer import index_corpus, to_tokens
from hmm_tagger.services.probability import build_probability_tables
from hmm_tagger.services.smoothing import (
    TUNABLE_TECHNIQUES,
    Smoother,
    get_smoother,
    witten_bell_counts,
)
from hmm_tagger.services.viterbi_tagger import ViterbiTagger

logger = logging.getLogger(__name__)


class TaggerModel:
    """Bigram HMM POS tagger with smoothing selection.

    ``train`` builds the frequency and probability tables. ``tune`` and
    ``cross_validate`` only ever change ``best_technique``; ``tag`` reads the
    tables without modifying them.
    """

    def __init__(self, separator: str = DEFAULT_SEPARATOR, laplace_k: float = 1.0, workers: int = 1):
        self.separator = separator
        self.laplace_k = laplace_k
        self.workers = workers
        self.best_technique = Technique.LAPLACE
        self.freq = FrequencyTables.empty()
        self.tables = ProbabilityTables.empty()

    @property
    def is_trained(self) -> bool:
        return bool(self.freq.tag_set)

    def train(self, corpus: Iterable[RawSentence]) -> "TaggerModel":
        self.freq = index_corpus(corpus, self.separator)
        self.tables = build_probability_tables(self.freq)
        return self

    def get_smoother(self, technique: Technique, sentences: Sequence[Sequence[str]]) -> Smoother:
        seen, unseen = witten_bell_counts(self.freq, sentences)
        params = SmoothingParams(laplace_k=self.laplace_k, seen=seen, unseen=unseen)
        return get_smoother(technique, self.freq, params)

    def decode_corpus(self, corpus: Sequence[RawSentence], technique: Technique, is_tagged: bool) -> EvaluationResult:
        """Decode every sentence, scoring against the gold tags when the corpus is tagged.

        Reads the tables only; the predictions are returned, never stored on
        the model, so concurrent callers cannot see each other's output.
        """
        if is_tagged:
            gold = [to_tokens(sentence, self.separator) for sentence in corpus]
            sentences = [[word for word, _ in sentence] for sentence in gold]
        else:
            gold = None
            sentences = [list(sentence) for sentence in corpus]

        smoother = self.get_smoother(technique, sentences)
        tagger = ViterbiTagger(self.tables, self.freq)

        def predict(words: Sequence[str]) -> List[Token]:
            return tagger.decode(words, smoother)

        if gold is None:
            return EvaluationResult(predictions=[predict(words) for words in sentences])

        result = evaluate_model(predict, gold, workers=self.workers)
        logger.info(f"Accuracy with {Technique(technique).value}: {result.accuracy:.4f} ({result.correct}/{result.total})")
        return result

    def test(self, corpus: Sequence[RawSentence], technique: Technique, is_tagged: bool) -> float:
        """Return token accuracy when the corpus is tagged, else 0.0"""
        result = self.decode_corpus(corpus, technique, is_tagged)
        return result.accuracy if is_tagged else 0.0

    def tune(self, dev_corpus: Sequence[RawSentence]) -> Dict[Technique, float]:
        """Pick the smoothing technique scoring best on dev_corpus; ties keep the earlier one"""
        scores = {}
        best_accuracy = None
        for technique in TUNABLE_TECHNIQUES:
            accuracy = self.test(dev_corpus, technique, is_tagged=True)
            scores[technique] = accuracy
            if best_accuracy is None or accuracy > best_accuracy:
                best_accuracy = accuracy
                self.best_technique = technique
        logger.info(f"Selected {self.best_technique.value} smoothing")
        return scores

    def tag(self, corpus: Sequence[Sequence[str]]) -> List[List[Token]]:
        return self.decode_corpus(corpus, self.best_technique, is_tagged=False).predictions

    def _fold_bounds(self, size: int, n: int) -> List[Tuple[int, int]]:
        interval = math.ceil(size / n)
        return [(start, min(start + interval, size)) for start in range(0, size, interval)]

    def _run_fold(self, corpus: Sequence[RawSentence], start: int, end: int) -> float:
        validation = list(corpus[start:end])
        training = list(corpus[:start]) + list(corpus[end:])
        if not training:
            # A single fold covers the whole corpus
            training = validation
        fold_model = TaggerModel(separator=self.separator, laplace_k=self.laplace_k)
        fold_model.train(training)
        accuracy = fold_model.test(validation, self.best_technique, is_tagged=True)
        logger.debug(f"Fold [{start}:{end}] accuracy {accuracy:.4f}")
        return accuracy

    def cross_validate_report(self, corpus: Sequence[RawSentence], n: int) -> CrossValidationReport:
        """n-fold cross-validation over contiguous folds using best_technique"""
        if n < 1:
            raise InvalidArgumentError(f"Cross validation fold count must be positive, got {n}")

        corpus = list(corpus)
        bounds = self._fold_bounds(len(corpus), n)
        if not bounds:
            logger.warning("Cross validation on an empty corpus")
            return CrossValidationReport()

        logger.info(f"Cross validating {len(corpus)} sentences over {len(bounds)} folds")
        with ThreadPoolExecutor(max_workers=max(1, self.workers)) as executor:
            accuracies = list(executor.map(lambda b: self._run_fold(corpus, *b), bounds))

        mean = sum(accuracies) / len(accuracies)
        std_error = float(stats.sem(accuracies)) if len(accuracies) > 1 else 0.0
        if math.isnan(std_error):
            std_error = 0.0
        logger.info(f"Cross validation accuracy {mean:.4f} +/- {std_error:.4f}")
        return CrossValidationReport(fold_accuracies=accuracies, mean=mean, std_error=std_error)

    def cross_validate(self, corpus: Sequence[RawSentence], n: int) -> float:
        return self.cross_validate_report(corpus, n).mean

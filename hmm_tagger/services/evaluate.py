from dataclasses import dataclass, field
from typing import List, Sequence, Callable
from concurrent.futures import ThreadPoolExecutor
import logging

from hmm_tagger.models.models import Sentence, Token

logger = logging.getLogger(__name__)


@dataclass
class EvaluationResult:
    correct: int = 0
    total: int = 0
    predictions: List[List[Token]] = field(default_factory=list)

    @property
    def accuracy(self) -> float:
        return self.correct / self.total if self.total else 0.0


def evaluate_model(
    predict_func: Callable[[Sequence[str]], List[Token]],
    test_sentences: Sequence[Sentence],
    workers: int = 1
) -> EvaluationResult:
    """Tag gold sentences and count tokens whose predicted tag matches.

    Accuracy is measured over predicted tokens. Sentences are decoded on a
    thread pool; results are combined in input order.
    """
    def process_sentence(sentence: Sentence):
        words = [word for word, tag in sentence]
        true_tags = [tag for word, tag in sentence]
        predicted = predict_func(words)

        sentence_correct = sum(1 for true, (_, pred) in zip(true_tags, predicted) if true == pred)
        return sentence_correct, len(predicted), predicted

    result = EvaluationResult()
    with ThreadPoolExecutor(max_workers=max(1, workers)) as executor:
        for res_correct, res_total, predicted in executor.map(process_sentence, test_sentences):
            result.correct += res_correct
            result.total += res_total
            result.predictions.append(predicted)

    logger.debug(f"Evaluated {len(result.predictions)} sentences: {result.correct}/{result.total} correct")
    return result

"""Versioned JSON persistence for trained models.

encode_model/decode_model are pure; save_model/load_model wrap them with file
I/O. Floats are written with ``json`` so they read back bit-identical.
"""
import json
import logging
from types import MappingProxyType
from typing import Dict, List, Tuple

from pydantic import BaseModel, ValidationError

from hmm_tagger.errors import ModelFormatError
from hmm_tagger.models.models import FrequencyTables, ProbabilityTables, Technique
from hmm_tagger.services.tagger_model import TaggerModel

logger = logging.getLogger(__name__)

SCHEMA_VERSION = 1


class ModelSnapshot(BaseModel):
    version: int
    separator: str
    best_technique: Technique
    laplace_k: float = 1.0
    word_freq: Dict[str, int]
    tag_freq: Dict[str, int]
    word_tag_freq: List[Tuple[str, str, int]]
    tag_bigram_freq: List[Tuple[str, str, int]]
    transition: List[Tuple[str, str, float]]
    emission: List[Tuple[str, str, float]]
    vocabulary: List[str]
    tag_set: List[str]


def _pairs(table) -> list:
    return [(first, second, value) for (first, second), value in sorted(table.items())]


def _unpairs(rows) -> dict:
    return {(first, second): value for first, second, value in rows}


def to_snapshot(model: TaggerModel) -> ModelSnapshot:
    freq = model.freq
    return ModelSnapshot(
        version=SCHEMA_VERSION,
        separator=model.separator,
        best_technique=model.best_technique,
        laplace_k=model.laplace_k,
        word_freq=dict(freq.word_freq),
        tag_freq=dict(freq.tag_freq),
        word_tag_freq=_pairs(freq.word_tag_freq),
        tag_bigram_freq=_pairs(freq.tag_bigram_freq),
        transition=_pairs(model.tables.transition),
        emission=_pairs(model.tables.emission),
        vocabulary=list(freq.vocabulary),
        tag_set=list(freq.tag_set),
    )


def from_snapshot(snapshot: ModelSnapshot) -> TaggerModel:
    if snapshot.version != SCHEMA_VERSION:
        raise ModelFormatError(f"Unsupported model version {snapshot.version}, expected {SCHEMA_VERSION}")

    freq = FrequencyTables.from_counts(
        snapshot.word_freq,
        snapshot.tag_freq,
        _unpairs(snapshot.word_tag_freq),
        _unpairs(snapshot.tag_bigram_freq),
    )
    if list(freq.vocabulary) != snapshot.vocabulary or list(freq.tag_set) != snapshot.tag_set:
        raise ModelFormatError("Vocabulary or tag set does not match the frequency tables")

    model = TaggerModel(separator=snapshot.separator, laplace_k=snapshot.laplace_k)
    model.best_technique = snapshot.best_technique
    model.freq = freq
    model.tables = ProbabilityTables(
        transition=MappingProxyType(_unpairs(snapshot.transition)),
        emission=MappingProxyType(_unpairs(snapshot.emission)),
    )
    return model


def encode_model(model: TaggerModel) -> str:
    return json.dumps(to_snapshot(model).model_dump(mode="json"), ensure_ascii=False)


def decode_model(data: str) -> TaggerModel:
    try:
        snapshot = ModelSnapshot.model_validate(json.loads(data))
    except json.JSONDecodeError as e:
        raise ModelFormatError(f"Invalid JSON in model: {e}") from e
    except ValidationError as e:
        raise ModelFormatError(f"Invalid model schema: {e}") from e
    return from_snapshot(snapshot)


def save_model(model: TaggerModel, file_path: str) -> None:
    with open(file_path, 'w', encoding='utf-8') as f:
        f.write(encode_model(model))
    logger.info(f"Saved model to {file_path}")


def load_model(file_path: str) -> TaggerModel:
    try:
        with open(file_path, 'r', encoding='utf-8') as f:
            model = decode_model(f.read())
    except FileNotFoundError:
        logger.error(f"Model file not found: {file_path}")
        raise
    except ModelFormatError:
        logger.error(f"Invalid model file: {file_path}")
        raise
    logger.info(f"Loaded model from {file_path}")
    return model

import os
from functools import lru_cache

from pydantic import BaseModel, ConfigDict, Field, field_validator

ENV_PREFIX = "HMM_TAGGER_"


class Settings(BaseModel):
    model_config = ConfigDict(protected_namespaces=())

    separator: str = Field("/", min_length=1)
    model_path: str = "model.json"
    corpus_path: str = "corpus.txt"
    laplace_k: float = Field(1.0, gt=0)
    folds: int = Field(10, ge=1)
    workers: int = Field(1, ge=1)
    log_level: str = "INFO"

    @field_validator("log_level")
    @classmethod
    def normalise_log_level(cls, value: str) -> str:
        return value.upper()

    @classmethod
    def from_env(cls, environ=None) -> "Settings":
        """Read HMM_TAGGER_* variables, e.g. HMM_TAGGER_MODEL_PATH"""
        environ = os.environ if environ is None else environ
        values = {}
        for name in cls.model_fields:
            key = ENV_PREFIX + name.upper()
            if key in environ:
                values[name] = environ[key]
        return cls(**values)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings.from_env()

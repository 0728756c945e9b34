from fastapi import FastAPI, HTTPException
from pydantic import BaseModel
from fastapi.middleware.cors import CORSMiddleware
from typing import List, Optional
import logging
import os

from hmm_tagger.config import get_settings
from hmm_tagger.errors import ParseError, TaggerError
from hmm_tagger.services.tagger_model import TaggerModel
from hmm_tagger.utils.corpus_repo import parse_tagged_corpus, read_tagged_corpus
from hmm_tagger.utils.model_repo import load_model

settings = get_settings()

# Configure logging
logging.basicConfig(level=settings.log_level.upper())
logger = logging.getLogger(__name__)

model: Optional[TaggerModel] = None

app = FastAPI(title="HMM Tagger API", version="1.0.0")

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


class SentenceInput(BaseModel):
    words: List[str]


class AccuracyInput(BaseModel):
    sentences: List[str]


def load_tagger() -> Optional[TaggerModel]:
    """Load the saved model, or train one from the configured corpus"""
    if os.path.exists(settings.model_path):
        return load_model(settings.model_path)
    if os.path.exists(settings.corpus_path):
        tagger = TaggerModel(separator=settings.separator, laplace_k=settings.laplace_k, workers=settings.workers)
        return tagger.train(read_tagged_corpus(settings.corpus_path, settings.separator))
    logger.warning(f"Neither {settings.model_path} nor {settings.corpus_path} exists")
    return None


def require_model() -> TaggerModel:
    if model is None or not model.is_trained:
        raise HTTPException(status_code=503, detail="Service not initialized")
    return model


@app.get("/")
async def home():
    return {"status": "OK"}


@app.get("/health")
def health_check():
    ready = model is not None and model.is_trained
    return {
        "status": "ok" if ready else "degraded",
        "details": {
            "model_loaded": ready,
            "tags_available": len(model.freq.candidate_tags) if ready else 0
        }
    }


@app.get("/model")
def model_info():
    tagger = require_model()
    return {
        "best_technique": tagger.best_technique.value,
        "vocabulary_size": len(tagger.freq.vocabulary),
        "tags": list(tagger.freq.candidate_tags),
    }


@app.post("/tag")
def tag_sentence(input_data: SentenceInput):
    tagger = require_model()
    try:
        tagged = tagger.tag([input_data.words])[0]
    except TaggerError as e:
        logger.error(f"Tagging failed: {e}")
        raise HTTPException(status_code=500, detail=str(e))
    return {"words": input_data.words, "tags": [tag for _, tag in tagged]}


@app.post("/accuracy")
def accuracy(input_data: AccuracyInput):
    tagger = require_model()
    try:
        corpus = parse_tagged_corpus("\n".join(input_data.sentences), tagger.separator)
    except ParseError as e:
        raise HTTPException(status_code=422, detail=str(e))
    acc = tagger.test(corpus, tagger.best_technique, is_tagged=True)
    return {"accuracy": acc, "technique": tagger.best_technique.value}


@app.on_event("startup")
async def startup_event():
    """Load model on startup"""
    global model
    try:
        model = load_tagger()
        if model is not None:
            logger.info("Model loaded successfully")
    except (OSError, TaggerError) as e:
        logger.error(f"Failed to load model on startup: {e}", exc_info=True)

"""Command line entry points.

    hmm-tagger build TRAIN DEV MODEL   train, tune on DEV, cross validate, save
    hmm-tagger run TEST MODEL OUT      tag an untagged corpus with a saved model
"""
import argparse
import logging
import sys
from typing import Optional, Sequence

from hmm_tagger.config import get_settings
from hmm_tagger.errors import TaggerError
from hmm_tagger.services.tagger_model import TaggerModel
from hmm_tagger.utils.corpus_repo import read_corpus, read_tagged_corpus, render_tagged, write_text
from hmm_tagger.utils.model_repo import load_model, save_model

logger = logging.getLogger(__name__)


def build(args: argparse.Namespace) -> int:
    train_corpus = read_tagged_corpus(args.train, args.separator)
    dev_corpus = read_tagged_corpus(args.dev, args.separator)

    model = TaggerModel(separator=args.separator, laplace_k=args.laplace_k, workers=args.workers)
    model.train(train_corpus)
    scores = model.tune(dev_corpus)
    for technique, accuracy in scores.items():
        print(f"{technique.value}: {accuracy:.4f}")
    print(f"best technique: {model.best_technique.value}")

    if args.folds:
        report = model.cross_validate_report(train_corpus, args.folds)
        print(f"{report.folds}-fold accuracy: {report.mean:.4f} +/- {report.std_error:.4f}")

    save_model(model, args.model)
    return 0


def run(args: argparse.Namespace) -> int:
    model = load_model(args.model)
    corpus = read_corpus(args.test)
    tagged = model.tag(corpus)
    write_text(args.output, render_tagged(tagged, model.separator))
    logger.info(f"Wrote {len(tagged)} tagged sentences to {args.output}")
    return 0


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    settings = get_settings()
    parser = argparse.ArgumentParser("hmm-tagger", description="Bigram HMM POS tagger")
    parser.add_argument("--log-level", default=settings.log_level, help="Logging level")
    sub = parser.add_subparsers(dest="command", required=True)

    build_parser = sub.add_parser("build", help="Train, tune and save a model")
    build_parser.add_argument("train", help="Tagged training corpus")
    build_parser.add_argument("dev", help="Tagged development corpus used for tuning")
    build_parser.add_argument("model", help="Where to write the model")
    build_parser.add_argument("--separator", default=settings.separator, help="Word/tag separator")
    build_parser.add_argument("--laplace-k", type=float, default=settings.laplace_k, help="Add-k constant")
    build_parser.add_argument(
        "--folds",
        type=int,
        default=settings.folds,
        help="Cross validation folds on the training corpus (0 to skip)",
    )
    build_parser.add_argument("--workers", type=int, default=settings.workers, help="Evaluation threads")
    build_parser.set_defaults(func=build)

    run_parser = sub.add_parser("run", help="Tag a corpus with a saved model")
    run_parser.add_argument("test", help="Untagged corpus, one sentence per line")
    run_parser.add_argument("model", help="Saved model")
    run_parser.add_argument("output", help="Where to write tagged output")
    run_parser.set_defaults(func=run)

    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(level=args.log_level.upper())
    try:
        return args.func(args)
    except (OSError, TaggerError) as e:
        logger.error(f"{args.command} failed: {e}")
        return 2


if __name__ == "__main__":
    sys.exit(main())

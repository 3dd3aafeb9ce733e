"""Hill-climb a recurrent string encoder over a line-per-string dataset."""

from __future__ import annotations

import argparse
from functools import partial
import logging
from pathlib import Path

from efuzz import (
    Dataset,
    EncoderConfig,
    NetworkConfig,
    RecurrentEncoder,
    StochasticTrainer,
    TrainerConfig,
    save_checkpoint,
)
from efuzz.training.trainer import TrainingResult

logging.basicConfig(
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    datefmt="%m/%d/%Y %H:%M:%S",
    level=logging.INFO,
)
logger = logging.getLogger(__name__)


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Train a string encoder by random search")
    parser.add_argument("--dataset", type=str, required=True, help="UTF-8 file, one string per line")
    parser.add_argument("--max-lines", type=int, default=10)
    parser.add_argument("--steps", type=int, default=100)
    parser.add_argument("--mode", choices=("all", "random"), default="all")
    parser.add_argument("--sample-pairs", type=int, default=5)
    parser.add_argument("--encoding-size", type=int, default=10)
    parser.add_argument("--hidden-layers", type=int, default=2)
    parser.add_argument("--text-encoding", type=str, default="utf-8")
    parser.add_argument("--mutation-rate", type=float, default=0.1)
    parser.add_argument("--mutation-scale", type=float, default=0.5)
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--log-path", type=str, default=None, help="Append a cost log to this file")
    parser.add_argument("--save-path", type=str, default=None)
    parser.add_argument("--progress", action="store_true")
    return parser.parse_args()


def _append_log(path: Path, trainer: StochasticTrainer, result: TrainingResult, was_modified: bool) -> None:
    with path.open("a", encoding="utf-8") as handle:
        handle.write(f"Iteration: {trainer.iteration}\n")
        handle.write(f"res.original_cost: {result.original_cost}\n")
        handle.write(f"res.modified_cost: {result.modified_cost}\n")
        handle.write(f"was_modified: {int(was_modified)}\n")
        handle.write("--------------------------------\n\n")


def main() -> None:
    args = parse_args()
    dataset = Dataset.from_file(args.dataset, max_lines=args.max_lines)
    encoder = RecurrentEncoder.from_config(
        EncoderConfig(
            text_encoding=args.text_encoding,
            encoding_size=args.encoding_size,
            hidden_layers=args.hidden_layers,
        ),
        NetworkConfig(
            mutation_rate=args.mutation_rate,
            mutation_scale=args.mutation_scale,
            seed=args.seed,
        ),
    )
    trainer = StochasticTrainer(
        encoder,
        dataset,
        config=TrainerConfig(sample_pairs=args.sample_pairs, seed=args.seed),
    )
    logger.info(
        "Training encoder %s on %d strings (%s pairs, %d steps)",
        encoder,
        len(dataset),
        args.mode,
        args.steps,
    )

    callback = None
    if args.log_path:
        callback = partial(_append_log, Path(args.log_path))
    history = trainer.fit(
        args.steps,
        mode=args.mode,
        sample_pairs=args.sample_pairs,
        progress=args.progress,
        callback=callback,
    )

    logger.info(
        "Accepted %d of %d perturbations, best cost %.6f",
        history.accepted,
        args.steps,
        history.best_cost,
    )
    print(f"final_cost: {history.best_cost}")

    if args.save_path:
        save_checkpoint(trainer, args.save_path)


if __name__ == "__main__":
    main()

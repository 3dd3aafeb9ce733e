"""Print the embedding of a string."""

from __future__ import annotations

import argparse

from efuzz import EncoderConfig, NetworkConfig, RecurrentEncoder, load_trainer


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Encode a string with a recurrent encoder")
    parser.add_argument("text", type=str)
    parser.add_argument("--checkpoint", type=str, default=None, help="Checkpoint from train_encoder.py")
    parser.add_argument("--encoding-size", type=int, default=10)
    parser.add_argument("--hidden-layers", type=int, default=2)
    parser.add_argument("--text-encoding", type=str, default="utf-8")
    parser.add_argument("--seed", type=int, default=0)
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    if args.checkpoint:
        encoder = load_trainer(args.checkpoint).encoder
    else:
        encoder = RecurrentEncoder.from_config(
            EncoderConfig(
                text_encoding=args.text_encoding,
                encoding_size=args.encoding_size,
                hidden_layers=args.hidden_layers,
            ),
            NetworkConfig(seed=args.seed),
        )
    encoded = encoder.encode(args.text)
    print("Encoded: " + " ".join(f"{value:.6f}" for value in encoded.tolist()))


if __name__ == "__main__":
    main()

"""CLI entry point for the synthetic transaction generator.

Usage:
    python -m generators --count 1000 --seed 42
    python -m generators --config configs/risky_mix.yaml --output file --output-file out.jsonl
    python -m generators --count 200 --output kafka --bootstrap-servers localhost:9092
"""

import argparse
import asyncio
import json
import sys
from pathlib import Path
from typing import Any

import yaml

from src.shared.kafka_utils import create_producer

from .transaction_generator import TransactionGenerator


async def publish(
    payloads: list[dict[str, Any]], bootstrap_servers: str, topic: str, client_id: str
) -> None:
    producer = await create_producer(bootstrap_servers, client_id=client_id)
    try:
        for payload in payloads:
            await producer.send_and_wait(topic, payload)
    finally:
        await producer.stop()


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Synthetic payment transaction generator")
    parser.add_argument("--config", type=str, default=None, help="Path to YAML config file")
    parser.add_argument("--seed", type=int, default=42, help="Random seed for reproducibility")
    parser.add_argument("--count", type=int, default=100, help="Number of transactions")
    parser.add_argument(
        "--output",
        type=str,
        default="stdout",
        choices=["stdout", "file", "kafka"],
        help="Output destination",
    )
    parser.add_argument("--output-file", type=str, default=None, help="Output file path")
    parser.add_argument("--bootstrap-servers", type=str, default="localhost:9092")
    parser.add_argument("--topic", type=str, default="transactions")
    parser.add_argument("--client-id", type=str, default="transaction-generator")

    args = parser.parse_args(argv)

    config: dict[str, Any] = {}
    if args.config:
        with open(args.config) as f:
            config = yaml.safe_load(f) or {}

    payloads = TransactionGenerator(config=config, seed=args.seed).generate(
        num_transactions=args.count
    )

    if args.output == "stdout":
        for payload in payloads:
            print(json.dumps(payload, default=str))
    elif args.output == "file":
        output_path = args.output_file or "output/transactions.jsonl"
        Path(output_path).parent.mkdir(parents=True, exist_ok=True)
        with open(output_path, "w") as f:
            for payload in payloads:
                f.write(json.dumps(payload, default=str) + "\n")
        print(f"Wrote {len(payloads)} transactions to {output_path}", file=sys.stderr)
    elif args.output == "kafka":
        asyncio.run(publish(payloads, args.bootstrap_servers, args.topic, args.client_id))
        print(f"Published {len(payloads)} transactions to {args.topic}", file=sys.stderr)

    print(f"Generated {len(payloads)} transactions", file=sys.stderr)

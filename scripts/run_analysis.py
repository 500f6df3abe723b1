#!/usr/bin/env python3
"""
Interactive command-line runner for the document comparison workflow.

Reads a line, runs every configured analysis against the enabled
collections, prints the step events as they arrive and a result table at
the end. Type "exit" to quit.

Usage:
    uv run python scripts/run_analysis.py
    uv run python scripts/run_analysis.py --provider anthropic/claude-sonnet-4-6
    uv run python scripts/run_analysis.py --vector-store vs_abc --vector-store vs_def
"""

import argparse
import asyncio
import logging

from app.agents.types import StepEvent, WorkflowResult
from app.agents.workflow import run_workflow
from app.services.llm import create_provider_from_id

_STATUS_MARKS = {"running": "…", "completed": "✓", "error": "✗"}


def print_step(event: StepEvent) -> None:
    line = f"  {_STATUS_MARKS[event.status]} {event.name}"
    if event.status != "running" and event.output:
        line += f": {event.output[:100]}"
    print(line, flush=True)


def print_results(results: list[WorkflowResult]) -> None:
    print()
    print(f"{'Údaj':<26} {'Hodnota':<40} {'Istota':>7}  Poznámka")
    print("-" * 100)
    for result in results:
        print(
            f"{result.name:<26} {result.value:<40} "
            f"{round(result.confidence * 100):>6}%  {result.note}"
        )
        print(f"{'':<26} {result.details.final_output}")
    print()


async def main(args: argparse.Namespace) -> None:
    llm = create_provider_from_id(args.provider) if args.provider else None

    print('Agent CLI (napíšte "exit" pre ukončenie)')
    while True:
        text = await asyncio.to_thread(input, "Zadajte vstupný text: ")
        if text.strip().lower() == "exit":
            return

        try:
            results = await run_workflow(
                text,
                print_step,
                source_ids=args.vector_store or None,
                llm=llm,
            )
        except Exception as e:
            print(f"Chyba: {e}")
            continue
        print_results(results)


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[1])
    parser.add_argument(
        "--provider",
        help="LLM provider id, e.g. openai_compatible/gpt-4.1 (default: from .env)",
    )
    parser.add_argument(
        "--vector-store",
        action="append",
        help="Vector store id to search (repeatable, default: registry)",
    )
    parser.add_argument("--verbose", action="store_true")
    arguments = parser.parse_args()

    logging.basicConfig(level=logging.INFO if arguments.verbose else logging.WARNING)
    try:
        asyncio.run(main(arguments))
    except (KeyboardInterrupt, EOFError):
        pass

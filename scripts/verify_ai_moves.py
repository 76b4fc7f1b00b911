#!/usr/bin/env python3
"""
AI Move Verification Script - Parallel Version

Runs the minimax AI at every difficulty on a set of sample positions and
checks that each chosen column is legal and that the search finishes within
the latency budget.

Searches run concurrently in worker threads; each one is an independent,
uninterruptible unit of work.

Exit Codes:
  0: All checks passed
  1: One or more checks failed
"""

import asyncio
import logging
import os
import sys
import time
from typing import Tuple

# Add project root to path so we can import connect_four without installing
sys.path.append(os.path.join(os.path.dirname(__file__), '..'))

from connect_four.core.config import configure_logging, settings
from connect_four.engine.ai import ConnectFourAI, Difficulty
from connect_four.engine.game import play_moves

# --- Configuration ---
CONCURRENCY_LIMIT = 4
LATENCY_BUDGET_SECONDS = float(os.getenv("AI_LATENCY_BUDGET", "5.0"))

SAMPLE_POSITIONS = {
    "opening": [],
    "mid_game": [3, 2, 3],
    "threat": [0, 6, 1, 6, 2],
    "crowded": [3, 3, 3, 3, 2, 4, 2, 4, 4, 2, 1, 5],
}


async def verify(name: str, moves, difficulty: Difficulty, semaphore: asyncio.Semaphore) -> Tuple[str, bool, str]:
    state = play_moves(moves)
    ai = ConnectFourAI(difficulty)

    async with semaphore:
        start = time.time()
        result = await asyncio.to_thread(ai.analyze, state)
        elapsed = time.time() - start

    label = f"{name}/{difficulty.name}"
    column = result["best_move"]
    if column not in state.get_valid_moves():
        return label, False, f"Illegal move: column {column}"
    if elapsed > LATENCY_BUDGET_SECONDS:
        return label, False, f"Too slow: {elapsed:.2f}s"

    # Determinism: the same input must give the same column
    if ai.choose_move(state) != column:
        return label, False, "Non-deterministic choice"

    return label, True, f"column {column}, {result['nodes_explored']} nodes, {elapsed:.2f}s"


async def main() -> int:
    configure_logging(settings)
    semaphore = asyncio.Semaphore(CONCURRENCY_LIMIT)
    tasks = [
        verify(name, moves, difficulty, semaphore)
        for name, moves in SAMPLE_POSITIONS.items()
        for difficulty in Difficulty
    ]

    failures = 0
    for coro in asyncio.as_completed(tasks):
        label, ok, message = await coro
        print(f"{'PASS' if ok else 'FAIL'} {label}: {message}")
        if not ok:
            failures += 1

    print(f"\n{len(tasks) - failures}/{len(tasks)} checks passed")
    return 1 if failures else 0


if __name__ == "__main__":
    logging.getLogger("asyncio").setLevel(logging.WARNING)
    sys.exit(asyncio.run(main()))

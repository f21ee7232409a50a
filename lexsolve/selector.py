'''
Minimax guess selection
=======================

For every candidate guess G, and every answer A still possible, the
feedback of G against A gives a Constraint; the number of answers
matching it is how many words would be left if A were the secret.
The worst case of G is the maximum of that over all A, and the best
guess is the one with the smallest worst case.

This needs O((A+G)*A) feedback/filter evaluations, each O(A*L), so the
candidates are scored in chunks by a pool of worker processes.
'''

import contextlib
import logging
import math
import os
import time
from concurrent.futures import ProcessPoolExecutor

from .algorithms import Constraint, check


logger = logging.getLogger(__name__)

MIN_CHUNK = 50


def worst_case(guess, answer_pool):
    worst = 0
    seen = set()
    for answer in answer_pool:
        feedback = check(answer, guess)
        if feedback in seen:
            continue  # Same feedback, same constraint, same count
        seen.add(feedback)
        constraint = Constraint(guess, feedback)
        worst = max(worst, sum(1 for word in answer_pool if constraint.matches(word)))

    # A guess that leaves nothing in every case is a dead end
    return worst or math.inf


def _score_chunk(args):
    start, guesses, answer_pool = args
    return min((worst_case(g, answer_pool), start + ii) for ii, g in enumerate(guesses))


def _chunks(candidates, answer_pool, workers):
    size = max(MIN_CHUNK, len(candidates) // (workers * 4))
    return [(start, candidates[start:start + size], answer_pool)
            for start in range(0, len(candidates), size)]


def resolve_workers(workers):
    return workers if workers is not None else (os.cpu_count() or 1)


def worker_pool(workers=None):
    '''Executor to share between select() calls, or None to score in-process.'''
    if resolve_workers(workers) <= 1:
        return contextlib.nullcontext()
    return ProcessPoolExecutor(max_workers=resolve_workers(workers))


def select(guess_pool, answer_pool, workers=None, executor=None):
    '''Pick the guess minimizing the worst-case number of remaining answers.

    Candidates are answer_pool followed by guess_pool, and ties go to the
    earliest one, so a word that might be the answer beats one that can't.
    Returns None if answer_pool is empty.

    Pass an executor from worker_pool() to reuse worker processes across
    calls; otherwise a pool is started for this call alone.
    '''
    if not answer_pool:
        return None
    elif len(answer_pool) == 1:
        return answer_pool[0]

    workers = resolve_workers(workers)
    candidates = list(answer_pool) + list(guess_pool)
    answer_pool = list(answer_pool)
    chunks = _chunks(candidates, answer_pool, workers)

    # Chunks finish in any order; comparing (score, index) makes that irrelevant.
    t0 = time.time()
    if len(chunks) == 1 or (executor is None and workers <= 1):
        best = min(map(_score_chunk, chunks))
    elif executor is not None:
        best = min(executor.map(_score_chunk, chunks))
    else:
        with worker_pool(workers) as executor:
            best = min(executor.map(_score_chunk, chunks))

    score, index = best
    logger.debug("Scored %d guesses against %d answers in %d chunk(s) in %.2f s: %s leaves at most %s",
                 len(candidates), len(answer_pool), len(chunks), time.time() - t0, candidates[index], score)
    return candidates[index]

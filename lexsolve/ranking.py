'''
Opening guess ranking
=====================

Assume all N answers are equally likely as a target.

Q: What first guess will ON AVERAGE leave the fewest possible
   remaining answers?
A: For each guess, score it against every answer and count how many
   answers match the resulting constraint. That's O(G*N) calls to
   check and O(G*N^2) calls to Constraint.matches, each O(L), so the
   guesses are split across worker processes.

This is only a report; the solver itself uses the worst case (see
selector.py), not the average.
'''

from concurrent.futures import ProcessPoolExecutor

from tqdm import tqdm

from .algorithms import Constraint, check
from .selector import resolve_workers


def average_remaining(guess, answer_pool):
    acc = 0
    for target in answer_pool:
        constraint = Constraint(guess, check(target, guess))
        acc += sum(constraint.matches(w) for w in answer_pool)
    return acc / len(answer_pool)


def _rank_chunk(args):
    guesses, answer_pool = args
    return [(g, average_remaining(g, answer_pool)) for g in guesses]


def rank_guesses(guess_pool, answer_pool, workers=None, progress=False):
    '''Return (guess, average remaining answers) pairs, best first.'''
    workers = resolve_workers(workers)
    guess_pool = list(guess_pool)
    answer_pool = list(answer_pool)
    size = max(1, min(100, len(guess_pool) // (workers * 4)))
    chunks = [(guess_pool[ii:ii + size], answer_pool) for ii in range(0, len(guess_pool), size)]

    results = []
    with tqdm(total=len(guess_pool), desc="Ranking guesses", unit='guess', disable=not progress) as pbar:
        if workers <= 1:
            for chunk in map(_rank_chunk, chunks):
                results.extend(chunk)
                pbar.update(len(chunk))
        else:
            with ProcessPoolExecutor(max_workers=workers) as executor:
                for chunk in executor.map(_rank_chunk, chunks):
                    results.extend(chunk)
                    pbar.update(len(chunk))

    # Stable sort keeps pool order among equal averages
    results.sort(key=lambda r: r[1])
    return results

'''
Precomputed second guesses
==========================

The first round always starts from the same opening guess against the
full answer list, so its feedback can only be one of a fixed set of
patterns. For each of them we filter the answers and run the selector
offline, keeping the entries that took longest to compute. The solver
looks these up before falling back to a live search.
'''

import itertools
import json
import logging
import time
from collections import namedtuple

from tqdm import tqdm

from .algorithms import WORD_LEN, FEEDBACK_CLUES, Clue, Constraint, filter_pool, format_feedback, normalize_word, parse_feedback
from .selector import resolve_workers, select, worker_pool


logger = logging.getLogger(__name__)

TableEntry = namedtuple('TableEntry', 'opening_guess feedback best_guess')


def feedback_patterns(max_correct=1):
    '''Yield every feedback pattern except all-Correct.

    Patterns with more than max_correct Correct clues are skipped, unless
    max_correct is None.
    '''
    for pattern in itertools.product(FEEDBACK_CLUES, repeat=WORD_LEN):
        n_correct = pattern.count(Clue.Correct)
        if n_correct == WORD_LEN:
            continue
        if max_correct is not None and n_correct > max_correct:
            continue
        yield pattern


def precompute_table(opening_guess, answers, guesses, max_correct=1, keep=0.5, workers=None, progress=False):
    opening_guess = normalize_word(opening_guess)
    answers = [normalize_word(w) for w in answers]
    guesses = [normalize_word(w) for w in guesses]
    workers = resolve_workers(workers)
    patterns = list(feedback_patterns(max_correct))
    timed = []

    with worker_pool(workers) as executor:
        for pattern in tqdm(patterns, desc=f"Second guesses after {opening_guess}", unit='pattern', disable=not progress):
            narrow = list(answers)
            t0 = time.time()
            filter_pool(Constraint(opening_guess, pattern), narrow)
            best = select(guesses, narrow, workers, executor)
            elapsed = time.time() - t0
            if best is None:
                continue  # No answer gives this feedback

            logger.debug("%s %s: %d answers left, best guess %s (%.2f s)",
                         opening_guess, format_feedback(pattern), len(narrow), best, elapsed)
            timed.append((elapsed, TableEntry(opening_guess, pattern, best)))

    # Keep the slowest entries; the rest are cheap enough to compute live.
    timed.sort(key=lambda t: t[0], reverse=True)
    entries = [entry for _, entry in timed[:int(len(timed) * keep)]]
    logger.info("%d of %d patterns have answers, keeping %d", len(timed), len(patterns), len(entries))
    return entries


def save_table(entries, fp):
    data = [{'opening_guess': e.opening_guess,
             'feedback': format_feedback(e.feedback),
             'best_guess': e.best_guess} for e in entries]
    json.dump({'data': data}, fp, indent=1)


def load_table(fp):
    '''Load a table written by save_table as a {(opening_guess, feedback): best_guess} dict.'''
    return {(normalize_word(d['opening_guess']), parse_feedback(d['feedback'])): normalize_word(d['best_guess'])
            for d in json.load(fp)['data']}

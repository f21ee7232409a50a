import logging
from collections import namedtuple

from .algorithms import Constraint, check, filter_pool, format_feedback, normalize_word
from .selector import resolve_workers, select, worker_pool


logger = logging.getLogger(__name__)

# Other good first guesses include ROATE, RAILE, ARISE, IRATE, ORATE, ARIEL, RAINE
OPENING_GUESS = 'TRACE'

Solved = namedtuple('Solved', 'word rounds')
Exhausted = namedtuple('Exhausted', 'rounds')
Cancelled = namedtuple('Cancelled', 'reason')


def self_scorer(secret):
    '''Feedback source that scores each guess against a known secret.'''
    secret = normalize_word(secret)
    def poll(guess):
        return check(secret, guess)
    return poll


def run_solver(opening_guess, answers, guesses, poll, table=None, workers=None):
    '''Guess until the feedback source reports a perfect match.

    poll(guess) must return either the feedback for guess, or a Cancelled
    which ends the session and is returned as is. Returns Solved, Exhausted
    (no answer is consistent with the feedback so far) or Cancelled.

    table is an optional precomputed mapping of (guess, feedback) to the
    next guess, consulted before running the selector. Words are compared
    in upper case, which is also how guesses are passed to poll.
    '''
    answers = [normalize_word(w) for w in answers]
    guesses = [normalize_word(w) for w in guesses]
    guess = normalize_word(opening_guess)
    workers = resolve_workers(workers)
    rounds = 0
    with worker_pool(workers) as executor:
        while True:
            rounds += 1
            result = poll(guess)
            if isinstance(result, Cancelled):
                logger.info("Cancelled in round %d: %s", rounds, result.reason)
                return result

            constraint = Constraint(guess, result)
            if constraint.is_perfect_match:
                return Solved(guess, rounds)

            removed = filter_pool(constraint, answers)
            logger.info("Round %d: %s scored %s, removed %d, %d answers left",
                        rounds, guess, format_feedback(constraint.feedback), removed, len(answers))

            next_guess = table.get((guess, constraint.feedback)) if table else None
            if next_guess is not None:
                next_guess = normalize_word(next_guess)
                logger.debug("Precomputed next guess after %r: %s", constraint, next_guess)
            else:
                next_guess = select(guesses, answers, workers, executor)
                if next_guess is None:
                    return Exhausted(rounds)
            guess = next_guess

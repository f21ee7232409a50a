from enum import Enum
from colorama import Back, Style


LETTERS = 'ABCDEFGHIJKLMNOPQRSTUVWXYZ'
WORD_LEN = 5


Clue = Enum('Clue', {
    'Unknown': Style.RESET_ALL,
    'Absent': Back.RED,
    'Present': Back.YELLOW,
    'Correct': Back.GREEN,
})

FEEDBACK_CLUES = (Clue.Absent, Clue.Present, Clue.Correct)
_clue_of_code = {c.name[0]: c for c in FEEDBACK_CLUES}


class MalformedFeedback(ValueError):
    pass


def normalize_word(word):
    return word.strip().upper()


def check(secret, guess):
    secret, guess = secret.upper(), guess.upper()
    clues = []
    leftovers = []

    # Two-pass so that we don't overcount Present.
    # https://twitter.com/moxfyre/status/1477321560927129604
    for gl, sl in zip(guess, secret):
        if gl == sl:
            clues.append(Clue.Correct)
        else:
            clues.append(Clue.Absent)
            leftovers.append(sl)
    for ii, (gl, sl) in enumerate(zip(guess, secret)):
        if gl == sl:
            pass  # Don't change
        elif gl in leftovers:
            leftovers.remove(gl)
            clues[ii] = Clue.Present

    return tuple(clues)


def parse_feedback(text):
    '''Parse feedback written as one letter per position: C(orrect), P(resent) or A(bsent).'''
    text = text.strip().upper()
    if len(text) != WORD_LEN:
        raise MalformedFeedback(f"Feedback must have exactly {WORD_LEN} symbols, not {len(text)}")
    try:
        return tuple(_clue_of_code[c] for c in text)
    except KeyError as e:
        raise MalformedFeedback(f"Unknown feedback symbol {e.args[0]!r} (use C, P or A)") from None


def format_feedback(feedback):
    return ''.join(c.name[0] for c in feedback)


class Constraint:
    '''Everything learned from one guess and its feedback.

    Constraints from several rounds are combined by filtering the candidate
    pool with each of them in turn.
    '''

    def __init__(self, guess, feedback):
        feedback = tuple(feedback)
        if len(guess) != WORD_LEN or len(feedback) != WORD_LEN:
            raise MalformedFeedback(f"Guess {guess!r} and its feedback must both have {WORD_LEN} positions")

        self.guess = guess = guess.upper()
        self.feedback = feedback
        self.mask = [None] * WORD_LEN
        self.required = set()
        self.forbidden_at = [set() for _ in range(WORD_LEN)]
        absent = set()

        for ii, (gl, clue) in enumerate(zip(guess, feedback)):
            if clue == Clue.Correct:
                self.mask[ii] = gl
            elif clue == Clue.Present:
                # Would have been Correct if the answer had it here
                self.required.add(gl)
                self.forbidden_at[ii].add(gl)
            elif clue == Clue.Absent:
                absent.add(gl)
                self.forbidden_at[ii].add(gl)
            else:
                raise MalformedFeedback(f"Invalid clue {clue!r} at position {ii}")

        # A repeated letter can be Absent in one position while Correct or Present
        # in another; it is then only ruled out where it was marked Absent.
        self.forbidden = absent - set(self.mask) - self.required

    @property
    def is_perfect_match(self):
        return all(ml is not None for ml in self.mask)

    def matches(self, word):
        word = word.upper()
        for ii, wl in enumerate(word):
            ml = self.mask[ii]
            if ml is not None:
                if wl != ml:
                    return False
            elif wl in self.forbidden or wl in self.forbidden_at[ii]:
                return False
        return all(l in word for l in self.required)

    def __repr__(self):
        return f'{self.__class__.__name__}({self.guess!r}, {format_feedback(self.feedback)!r})'


def filter_pool(constraint, pool):
    '''Remove, in place, every word in pool that doesn't match constraint.

    Returns the number of words removed.
    '''
    before = len(pool)
    pool[:] = [word for word in pool if constraint.matches(word)]
    return before - len(pool)


def update_clues_from_guess(clues, guess, target):
    for gl, tl in zip(guess, target):
        if gl == tl:
            clues[gl] = Clue.Correct
        elif gl in target:
            if clues[gl] in (Clue.Unknown, Clue.Absent):
                clues[gl] = Clue.Present
        else:
            clues[gl] = Clue.Absent

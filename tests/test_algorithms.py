from collections import Counter

from lexsolve.algorithms import (LETTERS, WORD_LEN, Clue, Constraint, MalformedFeedback, check, filter_pool,
                                 format_feedback, parse_feedback, update_clues_from_guess)

WORDS = ['SWEAT', 'FLEAS', 'REBUS', 'BEARS', 'PAPAS', 'ARIAS', 'ABEAM', 'TRACE', 'CRANE', 'APPLE',
         'ANGLE', 'GRACE', 'BRACE', 'CRAZE', 'REELS', 'LEVEL', 'SPEED', 'EERIE', 'ALAMO', 'ROARS']


def _check_feedback(guess, secret, expected):
    assert expected == format_feedback(check(secret, guess))


def test_check():
    # Easy one
    _check_feedback('SWEAT', 'FLEAS', 'PACCA')
    # Extra 'E' after the Correct 'E' should be marked Absent (see https://twitter.com/moxfyre/status/1477320939520020484)
    _check_feedback('REELS', 'REBUS', 'CCAAC')
    # Extra 'R' before the Correct 'R' should be marked Absent
    _check_feedback('ROARS', 'BEARS', 'AACCC')
    # Extra 'A' before the Correct 'A' should be marked Present
    _check_feedback('ARIAS', 'PAPAS', 'PAACC')
    # Extra 'A' after the Correct 'A' should be marked Present
    _check_feedback('ALAMO', 'ARIAS', 'CAPAA')
    _check_feedback('AAHED', 'ABEAM', 'CPAPA')
    _check_feedback('TRACE', 'CRANE', 'ACCPC')


def test_check_doubled_letter_against_single():
    # Only one of the two 'P's can be credited
    _check_feedback('APPLE', 'PLANE', 'PPAPC')
    _check_feedback('SPEED', 'ABIDE', 'AAPAP')


def test_check_counts():
    for secret in WORDS:
        for guess in WORDS:
            feedback = check(secret, guess)
            assert len(feedback) == WORD_LEN
            assert feedback.count(Clue.Correct) == sum(gl == sl for gl, sl in zip(guess, secret))
            credited = Counter(gl for gl, c in zip(guess, feedback) if c != Clue.Absent)
            have = Counter(secret)
            assert all(n <= have[l] for l, n in credited.items())


def test_parse_feedback():
    assert parse_feedback('acCpc') == (Clue.Absent, Clue.Correct, Clue.Correct, Clue.Present, Clue.Correct)
    assert format_feedback(parse_feedback(' PPAAC ')) == 'PPAAC'
    for bad in ('', 'CCCC', 'CCCCCC', 'CCXCC', 'GY-YG'):
        try:
            parse_feedback(bad)
        except MalformedFeedback:
            pass
        else:
            assert False, f"{bad!r} should be rejected"


def test_constraint_malformed():
    for guess, feedback in (('TRACE', (Clue.Correct,) * 4),
                            ('TRAC', (Clue.Correct,) * 5),
                            ('TRACE', (Clue.Correct, Clue.Unknown, Clue.Absent, Clue.Absent, Clue.Absent))):
        try:
            Constraint(guess, feedback)
        except MalformedFeedback:
            pass
        else:
            assert False, f"{guess!r} {feedback!r} should be rejected"


def test_constraint_own_feedback_always_matches():
    for secret in WORDS:
        for guess in WORDS:
            c = Constraint(guess, check(secret, guess))
            assert c.matches(secret), c
            assert c.is_perfect_match == (guess == secret)


def test_constraint_duplicate_letters():
    c = Constraint('APPLE', check('ANGLE', 'APPLE'))
    assert c.matches('ANGLE')
    assert not c.matches('APPLE')

    # 'E' is Correct at the end and Absent in the middle
    c = Constraint('SPEED', parse_feedback('AAACA'))
    assert 'E' not in c.forbidden
    assert 'E' in c.forbidden_at[2]
    assert c.matches('OLIEM')
    assert not c.matches('OLEEM')
    assert not c.matches('SLIEM')

    # 'E' is Present at the start and Absent later on
    c = Constraint('EERIE', check('ABIDE', 'EERIE'))
    assert 'E' not in c.forbidden
    assert c.matches('ABIDE')


def test_constraint_parts():
    c = Constraint('TRACE', parse_feedback('ACCPC'))
    assert c.mask == [None, 'R', 'A', None, 'E']
    assert c.required == {'C'}
    assert c.forbidden == {'T'}
    assert c.forbidden_at[3] == {'C'}
    assert c.matches('CRANE')
    assert c.matches('CRAZE')
    assert not c.matches('GRACE')   # 'C' can't be in position 3
    assert not c.matches('BRAKE')   # no 'C'
    assert not c.matches('TRACE')
    assert not c.is_perfect_match
    assert Constraint('CRANE', parse_feedback('CCCCC')).is_perfect_match


def test_filter_pool():
    pool = list(WORDS)
    c = Constraint('TRACE', check('CRANE', 'TRACE'))
    removed = filter_pool(c, pool)
    assert set(pool) == {'CRANE', 'CRAZE'}
    assert removed == len(WORDS) - 2

    # Filtering again removes nothing
    assert filter_pool(c, pool) == 0
    assert set(pool) == {'CRANE', 'CRAZE'}


def test_filter_pool_keeps_secret():
    for secret in WORDS:
        for guess in WORDS:
            pool = list(WORDS)
            filter_pool(Constraint(guess, check(secret, guess)), pool)
            assert secret in pool
            if guess == secret:
                assert pool == [secret]


def test_update_clues_from_guess():
    clues = {l: Clue.Unknown for l in LETTERS}

    update_clues_from_guess(clues, 'SWEAT', 'FLEAS')
    assert [clues[l] for l in 'SWEAT'] == [Clue.Present, Clue.Absent, Clue.Correct, Clue.Correct, Clue.Absent]

    # FLAKS moves 'A' from Correct to Present and drops 'E'; letters keep their best status
    update_clues_from_guess(clues, 'FLAKS', 'FLEAS')
    assert [clues[l] for l in 'FLK'] == [Clue.Correct, Clue.Correct, Clue.Absent]
    assert clues['S'] == clues['A'] == clues['E'] == Clue.Correct


def test_case_insensitive():
    assert check('crane', 'TRACE') == check('CRANE', 'trace') == parse_feedback('ACCPC')
    c = Constraint('apple', check('ANGLE', 'apple'))
    assert c.guess == 'APPLE'
    assert c.matches('angle') and c.matches('ANGLE')
    assert not c.matches('apple')
    pool = ['angle', 'APPLE', 'Angle']
    filter_pool(c, pool)
    assert pool == ['angle', 'Angle']

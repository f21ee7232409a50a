#!/usr/bin/python3

import argparse
import logging
import os
import random
import sys
import time
from colorama import Fore, Style
try:
    from unidecode import unidecode
except ImportError:
    unidecode = None

from .algorithms import LETTERS, WORD_LEN, Clue, Constraint, MalformedFeedback, check, filter_pool, parse_feedback, update_clues_from_guess
from .precompute import load_table, precompute_table, save_table
from .ranking import rank_guesses
from .selector import select
from .solver import OPENING_GUESS, Cancelled, Exhausted, Solved, run_solver, self_scorer


EMPH = Fore.BLUE + Style.BRIGHT
RESET = Style.RESET_ALL

EXIT_CODES = {Solved: 0, Exhausted: 1, Cancelled: 2}


def colored_letters(clues):
    result = ''
    last_stat = None
    for l in LETTERS:
        next_stat = clues[l]
        if next_stat != last_stat:
            result += next_stat.value
            last_stat = next_stat
        result += l

    return result + RESET


def colored_guess(guess, feedback):
    return ''.join(s.value + l for s, l in zip(feedback, guess)) + RESET


def eligible_words(df, length=WORD_LEN, strip_diacritics=False):
    if strip_diacritics and not unidecode:
        raise NotImplementedError("unidecode module required for strip_diacritics")
    seen = set()
    for line in df:
        word = line.strip()

        # Need to do this before checking length, because unidecode can change it,
        # as in unidecode('buß') -> 'buss'.
        if strip_diacritics:
            word = unidecode(word)

        if len(word) == length:
            # No non-letter characters, or mixed case (latter are likely proper nouns)
            if all(c.upper() in LETTERS for c in word) and word in (word.upper(), word.lower()):
                word = word.upper()
                if word not in seen:
                    seen.add(word)
                    yield word


def guess_pool(answers, allowed=()):
    '''All words that may be guessed: the answers first, then the other allowed words.'''
    pool = list(answers)
    known = set(pool)
    for word in allowed:
        if word not in known:
            known.add(word)
            pool.append(word)
    return pool


def prompt_feedback(guess):
    '''Interactive feedback source: ask the user to score each guess.'''
    print(f"Try {EMPH}{guess}{RESET}, and tell me how it scored (C=correct, P=present, A=absent).")
    try:
        while True:
            try:
                feedback = parse_feedback(input("Feedback? "))
            except MalformedFeedback as e:
                print(f"{e}. Try again.")
            else:
                print(f"  {colored_guess(guess, feedback)}")
                return feedback
    except (KeyboardInterrupt, EOFError):
        print()
        return Cancelled("interrupted")


def showing_scorer(secret):
    score = self_scorer(secret)
    def poll(guess):
        feedback = score(guess)
        print(f"  {colored_guess(guess, feedback)}")
        return feedback
    return poll


def word_list(fn):
    return argparse.FileType()(os.path.join('/usr/share/dict', fn))


def parse_args(args=None):
    p = argparse.ArgumentParser(prog='lexsolve', description=f"Play, solve and analyze a {WORD_LEN}-letter word-guessing game like Wordle")
    p.add_argument('-d', '--dict', default='/usr/share/dict/words', type=word_list,
                   help='List of possible answers, either an absolute path or a path relative to /usr/share/dict. Default %(default)s.')
    p.add_argument('-G', '--allowed', type=word_list,
                   help='List of additional words allowed as guesses (but never answers).')
    p.add_argument('-j', '--workers', type=int,
                   help='Number of worker processes for guess selection (default: all CPU cores)')
    p.add_argument('-v', '--verbose', action='count', default=0,
                   help='Log progress; repeat for more detail')
    if unidecode:
        p.add_argument('-D', '--strip-diacritics', action='store_true',
                       help='EXPERIMENTAL: Strip diacritics from words (should allow playing with Spanish/French wordlists)')
    sp = p.add_subparsers(dest='command', required=True)

    pp = sp.add_parser('play', help='Guess a word chosen by the computer')
    pp.add_argument('-g', '--guesses', default=6, type=int,
                    help='Maximum number of guesses to allow')
    pp.add_argument('-n', '--nonsense', action='store_true',
                    help='Allow nonsense guesses. (Default is to only allow known words.)')
    pp.add_argument('-a', '--analyzer', action='count', default=0,
                    help='Analyze remaining possible words, and show their number after each guess. If repeated (cheater mode!), it will show you all the remaining possible words when there are fewer than 100')
    pp.add_argument('-H', '--hint', action='store_true',
                    help='Suggest the best next guess (slow!)')
    pp.add_argument('-t', '--timer', action='store_true',
                    help='Show time taken after every guess.')
    pp.add_argument('--test', help=argparse.SUPPRESS)

    ps = sp.add_parser('solve', help='Let the computer guess your word')
    ps.add_argument('answer', nargs='?',
                    help='Word for the solver to crack in a self-scored game. If omitted, you score its guesses.')
    ps.add_argument('-f', '--first', default=OPENING_GUESS,
                    help='Opening guess. Default %(default)s.')
    ps.add_argument('-t', '--table', type=argparse.FileType(),
                    help='Precomputed second guesses, as written by the precompute command')

    pc = sp.add_parser('precompute', help='Compute the best second guesses after the opening guess')
    pc.add_argument('-f', '--first', default=OPENING_GUESS,
                    help='Opening guess. Default %(default)s.')
    pc.add_argument('-o', '--output', default='-', type=argparse.FileType('w'),
                    help='Output file (JSON). Default stdout.')
    pc.add_argument('-c', '--max-correct', default=1, type=int,
                    help='Skip feedback patterns with more than this many correct letters. Default %(default)s.')
    pc.add_argument('-A', '--all-patterns', action='store_const', dest='max_correct', const=None,
                    help='Try every feedback pattern')
    pc.add_argument('-k', '--keep', default=0.5, type=float,
                    help='Fraction of results to keep, slowest first. Default %(default)s.')

    pr = sp.add_parser('rank', help='Rank opening guesses by average number of answers left (CSV to stdout)')
    pr.add_argument('-n', '--top', type=int,
                    help='Only show the best N guesses')

    args = p.parse_args(args)
    if not unidecode:
        args.strip_diacritics = False
    return p, args


def play(p, args, words, valid):
    narrow_words = list(words)

    if args.test:
        target = args.test.strip().upper()
        if target not in words:
            p.error(f"Need a known {WORD_LEN}-letter word to test, not {target!r}")
        print(f"I've chosen the word {target} which you specified to test with!")
    else:
        target = random.choice(words)
        print(f"I've chosen a {EMPH}{WORD_LEN}{RESET}-letter word from {EMPH}{len(words)}{RESET} possibilities.")
    print(f"You have {EMPH}{args.guesses}{RESET} guesses to guess it correctly.")
    if not args.nonsense:
        print(f"All your guesses must be words that I know!")
    print()

    guesses = []
    gave_up = False
    letter_clues = {l: Clue.Unknown for l in LETTERS}
    start_at = last_at = time.time()
    while len(guesses) < args.guesses:
        # Ask for next guess
        print(f"Letters: {colored_letters(letter_clues)}")
        if args.analyzer == 1 or (args.analyzer == 2 and len(narrow_words) >= 100):
            print(f"There are {EMPH}{len(narrow_words)}{RESET} possible words remaining.")
        elif args.analyzer >= 2:
            print(f"There are {EMPH}{len(narrow_words)}{RESET} possible words remaining: {', '.join(narrow_words)}")
        if args.hint and guesses:
            print(f"I'd guess {EMPH}{select(valid, narrow_words, args.workers)}{RESET}.")

        try:
            while True:
                guess = input("Your guess? ").strip().upper()
                if len(guess) != WORD_LEN or any(c not in LETTERS for c in guess):
                    print(f"Must be a word consisting of exactly {EMPH}{WORD_LEN}{RESET} letters. Try again.")
                elif not args.nonsense and guess not in valid:
                    print(f"Hmmm, I don't know the word {EMPH}{guess}{RESET}. Try again.")
                else:
                    break  # Okay
        except (KeyboardInterrupt, EOFError):
            print()
            print("Interrupted, giving up...")
            gave_up = True
            break

        # Update clues with guess
        update_clues_from_guess(letter_clues, guess, target)
        guesses.append(guess)

        now = time.time()
        total = now - start_at
        last = now - last_at
        last_at = now

        # Show guesses so far
        print()
        for ii, g in enumerate(guesses, 1):
            print(f"Guess {ii}: {colored_guess(g, check(target, g))}")
        if args.timer:
            print(f"Last guess took {EMPH}{last:.2f}{RESET} seconds, {EMPH}{len(guesses)}{RESET} guess{'es' if len(guesses)!=1 else ''}"
                  f" in {EMPH}{total:.2f}{RESET} s ({EMPH}{total/len(guesses):.2f} s/guess{RESET}).")
        print()

        if guess == target:
            break

        # Narrow possible words from guess
        if args.analyzer or args.hint:
            filter_pool(Constraint(guess, check(target, guess)), narrow_words)

    if guesses and guesses[-1] == target:
        print(f"Correct! {colored_guess(target, check(target, target))}")
        return EXIT_CODES[Solved]
    else:
        print(f"Sorry, the correct word was: {colored_guess(target, check(target, target))}")
        return EXIT_CODES[Cancelled if gave_up else Exhausted]


def solve(p, args, words, valid):
    first = args.first.strip().upper()
    if args.answer:
        answer = args.answer.strip().upper()
        if len(answer) != WORD_LEN or any(c not in LETTERS for c in answer):
            p.error(f"Need a {WORD_LEN}-letter word to solve, not {answer!r}")
        print(f"Solving for {EMPH}{answer}{RESET}, starting with {EMPH}{first}{RESET}.")
        poll = showing_scorer(answer)
    else:
        print(f"Think of a {EMPH}{WORD_LEN}{RESET}-letter word, and I'll try to guess it. Ctrl-C gives up.")
        poll = prompt_feedback

    table = None
    if args.table:
        with args.table:
            table = load_table(args.table)

    outcome = run_solver(first, words, valid, poll, table=table, workers=args.workers)
    print()
    if isinstance(outcome, Solved):
        print(f"Solved! The word was {EMPH}{outcome.word}{RESET}, in {EMPH}{outcome.rounds}{RESET} guess{'es' if outcome.rounds!=1 else ''}.")
    elif isinstance(outcome, Exhausted):
        print(f"Something went wrong; no word I know fits that feedback (after {outcome.rounds} guesses).")
    else:
        print(f"Giving up ({outcome.reason}).")
    return EXIT_CODES[type(outcome)]


def main(args=None):
    p, args = parse_args(args)
    logging.basicConfig(level=(logging.WARNING, logging.INFO, logging.DEBUG)[min(args.verbose, 2)],
                        format='%(asctime)s %(name)s %(levelname)s: %(message)s')

    with args.dict:
        words = list(eligible_words(args.dict, WORD_LEN, args.strip_diacritics))
    allowed = []
    if args.allowed:
        with args.allowed:
            allowed = list(eligible_words(args.allowed, WORD_LEN, args.strip_diacritics))
    if not words:
        p.error(f"No {WORD_LEN}-letter words found in {args.dict.name}")
    valid = guess_pool(words, allowed)

    if args.command == 'play':
        return play(p, args, words, valid)
    elif args.command == 'solve':
        return solve(p, args, words, valid)
    elif args.command == 'precompute':
        first = args.first.strip().upper()
        entries = precompute_table(first, words, valid, max_correct=args.max_correct, keep=args.keep,
                                   workers=args.workers, progress=True)
        save_table(entries, args.output)
        args.output.flush()
        print(f"Saved {EMPH}{len(entries)}{RESET} second guesses after {EMPH}{first}{RESET}.", file=sys.stderr)
    elif args.command == 'rank':
        ranked = rank_guesses(valid, words, args.workers, progress=True)
        print('guess,avg_words_left_after_first_guess')
        for guess, avg in ranked[:args.top]:
            print(f'"{guess}",{avg}')


if __name__ == '__main__':
    raise SystemExit(main())

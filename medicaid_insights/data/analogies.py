"""
Plain-language improbability phrases keyed by order of magnitude.

Each entry is (min_log10_odds, phrase): the phrase applies to any tail
probability P(Z > z) whose odds 1/P have log10 at or above the key and below
the next entry's key. Entries must stay in ascending key order.
"""

from typing import List, Tuple


ANALOGY_PHRASES: List[Tuple[float, str]] = [
    (0.0, "Flipping heads 9 times in a row"),
    (3.0, "Rolling double sixes four times consecutively"),
    (3.4, "Being dealt a straight flush in 5-card poker"),
    (3.7, "Drawing the ace of spades from 4 separate shuffled decks consecutively"),
    (4.0, "Rolling a perfect Yahtzee on your first roll"),
    (5.0, "Guessing someone's exact birth minute on first try"),
    (5.3, "Being dealt pocket aces three hands in a row in Texas Hold'em"),
    (6.0, "Winning your state lottery with a single ticket"),
    (8.0, "Winning the Powerball jackpot with a single ticket"),
    (10.0, "Being struck by lightning twice in the same year"),
    (12.0, "Guessing a random 12-digit number on the first try"),
    (15.0, "Winning the Powerball jackpot twice in a row with single tickets"),
    (18.0, "A chimpanzee typing 'to be or not to be' perfectly on first attempt"),
    (21.0, "Picking one marked grain of sand from every beach on Earth"),
    (26.0, "Randomly selecting the same specific atom from two different human bodies"),
    (29.0, "Shuffling a deck and getting the exact same order as someone else shuffling simultaneously on Mars"),
    (37.0, "Every person on Earth guessing the same random 20-digit number simultaneously"),
    (60.0, "Dealing 10 royal flushes consecutively from shuffled decks"),
    (100.0, "Guessing a 100-digit password on the first try"),
    (140.0, "A single photon from a distant star hitting the same spot twice"),
    (150.0, "Randomly dialing phone numbers and reaching the President"),
    (170.0, "Flipping heads 500 times in a row"),
    (200.0, "Hitting a hole-in-one on every hole of a golf course"),
    (210.0, "Dealing 40 royal flushes consecutively from shuffled decks"),
    (320.0, "Winning Powerball every week for an entire year"),
    (380.0, "Typing the complete works of Shakespeare by randomly pressing keys"),
    (500.0, "A tornado assembling a Boeing 747 from scattered parts"),
    (600.0, "Randomly assembling a working iPhone by shaking a box of parts"),
    (800.0, "Quantum tunneling a baseball through a concrete wall"),
    (1000.0, "Every atom in the observable universe spontaneously rearranging into an identical copy of Earth"),
]

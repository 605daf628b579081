import logging

import numpy as np

from enigma import alphabet
from enigma.errors import InvalidConfig, InvalidPairText
from enigma.mapper import Mapper

logger = logging.getLogger(__name__)

PLUG_COUNT = 10
FULL_COUNT = 13
PAIR_COUNT = 12


class Pair:
    """Raw text of one cable, anything from empty to a complete letter pair."""

    def __init__(self, text: str = ''):
        self.text = ''
        self.enabled = True
        self.set(text)

    def set(self, text: str):
        self.text = (text or '').strip().upper()

    def letters(self) -> str:
        return self.text if self.enabled else ''

    def count(self) -> int:
        return len(self.letters())

    def is_empty(self) -> bool:
        return self.count() == 0

    def indices(self) -> list:
        return [alphabet.char_to_index(char) for char in self.letters() if alphabet.is_letter(char)]

    def first(self) -> int:
        return alphabet.char_to_index(self.letters()[0])

    def second(self) -> int:
        return alphabet.char_to_index(self.letters()[1])

    def problem(self):
        """Return why the text is not a usable pair on its own, or None."""
        letters = self.letters()
        if len(letters) != 2:
            return 'a pair needs exactly 2 letters'
        if not all(alphabet.is_letter(char) for char in letters):
            return 'only the letters A to Z can be paired'
        if letters[0] == letters[1]:
            return 'a letter can not be paired with itself'
        return None

    def is_valid(self) -> bool:
        return self.problem() is None

    def __repr__(self):
        return f'<Pair {self.text!r}{"" if self.enabled else " disabled"}>'


class PairSet:
    """
    Collection of letter pairs used to wire a plugboard or the reconfigurable reflector.

    A plugboard (allow_empty=True) takes any number of pairs, unpaired letters are
    plugged to themselves. A reflector (allow_empty=False) needs all of its 12 pairs,
    the two letters left over are connected to each other by build_map().
    """

    def __init__(self, allow_empty: bool, size: int = None):
        self.allow_empty = allow_empty
        if size is None:
            size = FULL_COUNT if allow_empty else PAIR_COUNT
        self.pairs = [Pair() for _ in range(size)]

        self.letter_counts = np.zeros(alphabet.N_LETTERS, dtype=int)
        self.letter_count = 0
        self.multi_use_error = False

    def __len__(self):
        return len(self.pairs)

    def count_letter_usage(self):
        self.letter_counts[:] = 0
        for pair in self.pairs:
            for index in pair.indices():
                self.letter_counts[index] += 1
        self.letter_count = int(np.count_nonzero(self.letter_counts))
        self.multi_use_error = bool(np.any(self.letter_counts > 1))

    def multi_use_letters(self) -> str:
        return alphabet.indices_to_text(np.flatnonzero(self.letter_counts > 1))

    def letter_used(self, index: int) -> bool:
        return self.letter_counts[index] > 0

    def set_pair(self, index: int, text: str):
        self.pairs[index].set(text)
        self.count_letter_usage()

    def set_pairs(self, texts):
        texts = list(texts)
        if len(texts) > len(self.pairs):
            raise InvalidConfig(f'{len(texts)} pairs given, but only {len(self.pairs)} can be connected')
        for pair, text in zip(self.pairs, texts + [''] * (len(self.pairs) - len(texts))):
            pair.set(text)
        self.count_letter_usage()

    def texts(self) -> list:
        return [pair.text for pair in self.pairs]

    def links(self) -> list:
        """Texts of the slots that hold anything, in slot order."""
        return [pair.text for pair in self.pairs if pair.text]

    def pair_error(self, index: int):
        """Return an InvalidPairText for the slot, or None if the slot is fine."""
        pair = self.pairs[index]
        if self.allow_empty and pair.is_empty():
            return None
        problem = pair.problem()
        if problem is None:
            for letter_index in (pair.first(), pair.second()):
                if self.letter_counts[letter_index] != 1:
                    problem = f'letter {alphabet.index_to_letter(letter_index)} is used by another pair'
                    break
        if problem is None:
            return None
        return InvalidPairText(index, pair.text, problem)

    def is_pair_valid(self, index: int) -> bool:
        return self.pair_error(index) is None

    def errors(self) -> list:
        return [err for err in (self.pair_error(i) for i in range(len(self.pairs))) if err is not None]

    def is_valid(self) -> bool:
        if self.multi_use_error:
            return False
        if self.allow_empty:
            return all(pair.is_empty() or pair.is_valid() for pair in self.pairs)
        # exactly one pair of letters must be left for build_map to connect
        if self.letter_count != alphabet.N_LETTERS - 2:
            return False
        return all(pair.is_valid() for pair in self.pairs)

    def validate(self, label: str = 'pairs'):
        if self.is_valid():
            return
        errors = self.errors()
        if errors:
            details = '; '.join(str(err) for err in errors)
        else:
            details = f'{self.letter_count} letters connected, {alphabet.N_LETTERS - 2} needed'
        raise InvalidConfig(f'{label} invalid: {details}')

    def build_map(self) -> list:
        """
        Only meaningful if is_valid() is true.
        Slots that are not valid on their own are skipped.
        """
        forward = np.arange(alphabet.N_LETTERS)
        for index, pair in enumerate(self.pairs):
            if pair.is_empty() or not self.is_pair_valid(index):
                continue
            a, b = pair.first(), pair.second()
            forward[a] = b
            forward[b] = a

        if not self.allow_empty:
            unused = [index for index in range(alphabet.N_LETTERS) if not self.letter_used(index)]
            if len(unused) >= 2:
                a, b = unused[:2]
                forward[a] = b
                forward[b] = a
        return forward.tolist()

    def to_mapper(self, id_: str) -> Mapper:
        return Mapper(id_, self.build_map())

    def __repr__(self):
        kind = 'plugboard' if self.allow_empty else 'reflector'
        return f'<PairSet {kind} {" ".join(self.links())}>'


def plugboard_pairs(extended: bool = True) -> PairSet:
    pairs = PairSet(allow_empty=True, size=FULL_COUNT)
    set_extended(pairs, extended)
    return pairs


def reflector_pairs() -> PairSet:
    return PairSet(allow_empty=False, size=PAIR_COUNT)


def set_extended(pairs: PairSet, extended: bool):
    """Only the first 10 cables were issued, the last 3 sockets need the extension."""
    for index in range(PLUG_COUNT, len(pairs)):
        pairs.pairs[index].enabled = extended
    pairs.count_letter_usage()
    logger.debug('extended plugboard %s', 'on' if extended else 'off')


def random_pairs(n_pairs: int, seed=None) -> list:
    """Text of n_pairs random plug cables, e.g. ['QH', 'AZ', ...]."""
    if not 0 <= n_pairs <= alphabet.N_LETTERS // 2:
        raise ValueError(f'can not connect {n_pairs} pairs with {alphabet.N_LETTERS} letters')
    rng = np.random.default_rng(seed)
    # random jacks, consecutive ones are cabled together
    jacks = rng.choice(alphabet.N_LETTERS, size=2 * n_pairs, replace=False)
    return [alphabet.indices_to_text(jacks[i:i + 2]) for i in range(0, len(jacks), 2)]

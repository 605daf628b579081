import enum

import numpy as np

from enigma import alphabet
from enigma.errors import InvalidConfig, InvalidWiring


class Direction(enum.Enum):
    # right to left: from the keyboard towards the reflector
    FORWARD = 1
    # left to right: from the reflector back towards the lamps
    BACKWARD = 2


def inverse_permutation(forward: np.ndarray) -> np.ndarray:
    return np.argsort(forward)


class Mapper:
    """
    Immutable labelled permutation of the 26 letter indices.
    E.g. for rotor I the letter A maps to E in FORWARD direction, while E maps
    back to A in BACKWARD direction. A mapper that is its own inverse and
    has no fixed points is shaped like a reflector.
    """

    def __init__(self, id_: str, forward):
        forward = np.array(forward, dtype=int)
        if forward.shape != (alphabet.N_LETTERS,) or not np.array_equal(np.sort(forward),
                                                                         np.arange(alphabet.N_LETTERS)):
            raise InvalidWiring(f'{id_}: map {forward.tolist()} is not a permutation of 0..25')

        self.id = id_
        self._forward = forward
        self._inverse = inverse_permutation(forward)
        self._forward.flags.writeable = False
        self._inverse.flags.writeable = False

        indices = np.arange(alphabet.N_LETTERS)
        self._reflector_shaped = bool(np.all(forward != indices) and np.all(forward[forward] == indices))

    @classmethod
    def from_cipher_string(cls, id_: str, cipher: str):
        if len(cipher) != alphabet.N_LETTERS:
            raise InvalidWiring(f'{id_}: cipher {cipher!r} must have {alphabet.N_LETTERS} letters')
        try:
            forward = alphabet.text_to_indices(cipher)
        except ValueError as err:
            raise InvalidWiring(f'{id_}: {err}') from err
        return cls(id_, forward)

    @classmethod
    def from_pairs(cls, id_: str, pairs):
        """
        Build an involution from unordered letter pairs, e.g. ["AB", "CD"] or [(0, 1), (2, 3)].
        Letters that are in no pair map to themselves.
        """
        forward = np.arange(alphabet.N_LETTERS)
        used = set()
        for pair in pairs:
            if len(pair) != 2:
                raise InvalidConfig(f'{id_}: pair {pair!r} needs exactly 2 letters')
            a, b = (alphabet.char_to_index(el) if isinstance(el, str) else int(el) for el in pair)
            if a == b:
                raise InvalidConfig(f'{id_}: pair {alphabet.indices_to_text((a, b))} connects a letter to itself')
            if a in used or b in used:
                dup = a if a in used else b
                raise InvalidConfig(f'{id_}: letter {alphabet.index_to_letter(dup)} is used by more than one pair')
            forward[a] = b
            forward[b] = a
            used.update((a, b))
        return cls(id_, forward)

    @property
    def forward(self) -> list:
        return self._forward.tolist()

    @property
    def inverse(self) -> list:
        return self._inverse.tolist()

    def is_reflector_shaped(self) -> bool:
        return self._reflector_shaped

    def translate(self, direction: Direction, index: int) -> int:
        if direction is Direction.FORWARD:
            return int(self._forward[index])
        return int(self._inverse[index])

    # a plain mapper does not rotate, so it swaps exactly like it translates
    swap = translate

    def cipher(self) -> str:
        return alphabet.indices_to_text(self._forward)

    def __repr__(self):
        return f'<Mapper {self.id} {self.cipher()} reflector={self._reflector_shaped}>'

import string

ALPHABET = string.ascii_uppercase
N_LETTERS = len(ALPHABET)


def is_letter(char: str) -> bool:
    return len(char) == 1 and char.isascii() and char.upper() in ALPHABET


def char_to_index(char: str) -> int:
    if not is_letter(char):
        raise ValueError(f'invalid character {char!r}, expected one of {ALPHABET}')
    return ALPHABET.index(char.upper())


def index_to_letter(index: int) -> str:
    return ALPHABET[index % N_LETTERS]


def index_to_number(index: int) -> str:
    # ring and offset numbers are shown 1-based, like on the physical rings
    return str(index + 1)


def number_to_index(number: str) -> int:
    index = int(number) - 1
    if not 0 <= index < N_LETTERS:
        raise ValueError(f'number {number} is not in 1..{N_LETTERS}')
    return index


def string_to_index(value: str) -> int:
    value = value.strip()
    if value[:1].isdigit():
        return number_to_index(value)
    return char_to_index(value)


def parse_position(value) -> int:
    """
    Read a ring setting or rotor offset.
    Integers are taken as indices 0..25, strings as a letter ("A".."Z")
    or a 1-based number ("1".."26").
    """
    if isinstance(value, str):
        return string_to_index(value)
    index = int(value)
    if not 0 <= index < N_LETTERS:
        raise ValueError(f'position {index} is not in 0..{N_LETTERS - 1}')
    return index


def format_position(index: int, use_numbers: bool = False) -> str:
    return index_to_number(index) if use_numbers else index_to_letter(index)


def text_to_indices(text: str) -> list:
    return [char_to_index(char) for char in text]


def indices_to_text(indices) -> str:
    return ''.join(index_to_letter(int(index)) for index in indices)

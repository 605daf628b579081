import time

import numpy as np
import tqdm

from enigma import alphabet, pairs
from enigma.machine import Machine


def time_encipher(n_messages: int = 3000, chars_per_message: int = 256, n_plugs: int = 10, seed: int = 41,
                  disable_tqdm=False) -> float:
    """Return the average time in seconds to encipher one random message."""
    rng = np.random.default_rng(seed)

    encoder = Machine()
    encoder.configure_plugboard(pairs.random_pairs(n_plugs, seed=seed))
    rotor_positions = encoder.rotor_offsets

    messages = [alphabet.indices_to_text(rng.integers(0, alphabet.N_LETTERS, size=chars_per_message))
                for _ in range(n_messages)]
    tick = time.time()
    for message in tqdm.tqdm(messages, disable=disable_tqdm):
        encoder.set_rotor_offsets(rotor_positions)
        encoder.encipher_string(message)
    tock = time.time()

    return (tock - tick) / max(n_messages, 1)


if __name__ == '__main__':
    n_chars = 256
    avg_time = time_encipher(chars_per_message=n_chars)
    print(f'Average encoding time for message with {n_chars} characters: {avg_time:.2e} seconds')

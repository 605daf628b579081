"""
Wiring of the historical wheels.
The table is built once at import time and is only ever read afterwards.
Entries shaped like a reflector (self-inverse, no letter mapped to itself)
are offered as reflectors, everything else as a rotor.
"""
from enigma.errors import InvalidConfig
from enigma.rotor import RotorSpec

COMMERCIAL = 'Commercial Enigma A, B'
ROCKET = 'German Railway (Rocket)'
SWISS_K = 'Swiss K'

M3 = (
    RotorSpec('I', 'EKMFLGDQVZNTOWYHXUSPAIBRCJ', '1930', 'Enigma I', 'R'),
    RotorSpec('II', 'AJDKSIRUXBLHWTMCQGZNPYFVOE', '1930', 'Enigma I', 'F'),
    RotorSpec('III', 'BDFHJLCPRTXVZNYEIWGAKMUSQO', '1930', 'Enigma I', 'W'),
    RotorSpec('IV', 'ESOVPZJAYQUIRHXLNFTGKDCMWB', 'December 1938', 'M3 Army', 'K'),
    RotorSpec('V', 'VZBRGITYUPSDNHLXAWMJQOFECK', 'December 1938', 'M3 Army', 'A'),
    RotorSpec('VI', 'JPGVOUMFYQBENHZRDKASXLICTW', '1939', 'M3 & M4 Naval (FEB 1942)', 'AN'),
    RotorSpec('VII', 'NZJHGRCXMYSWBOUFAIVLPEKQDT', '1939', 'M3 & M4 Naval (FEB 1942)', 'AN'),
    RotorSpec('VIII', 'FKQHTLXOCBJSPDZRAMEWNIUYGV', '1939', 'M3 & M4 Naval (FEB 1942)', 'AN'),
)

M4 = (
    RotorSpec('Beta', 'LEYJVCNIXWPBQMDRTAKZGFUHOS', 'Spring 1941', 'M4 R2'),
    RotorSpec('Gamma', 'FSOKANUERHMBTIYCWLQPZXVGJD', 'Spring 1942', 'M4 R2'),
    RotorSpec('Reflector A', 'EJMZALYXVBWFCRQUONTSPIKHGD'),
    RotorSpec('Reflector B', 'YRUHQSLDPXNGOKMIEBFZCWVJAT'),
    RotorSpec('Reflector C', 'FVPJIAOYEDRZXWGCTKUQSBNMHL'),
    RotorSpec('Reflector B Thin', 'ENKQAUYWJICOPBLMDXZVFTHRGS', '1940', 'M4 R1 (M3 + Thin)'),
    RotorSpec('Reflector C Thin', 'RDOBJNTKVEHMLFCWZAXGYIPSUQ', '1940', 'M4 R1 (M3 + Thin)'),
    RotorSpec('ETW', 'ABCDEFGHIJKLMNOPQRSTUVWXYZ', '', 'Enigma I'),
)

ROCKET_WHEELS = (
    RotorSpec('I-R', 'JGDQOXUSCAMIFRVTPNEWKBLZYH', '7 February 1941', ROCKET, 'R'),
    RotorSpec('II-R', 'NTZPSFBOKMWRCJDIVLAEYUXHGQ', '7 February 1941', ROCKET, 'F'),
    RotorSpec('III-R', 'JVIUBHTCDYAKEQZPOSGXNRMWFL', '7 February 1941', ROCKET, 'W'),
    RotorSpec('UKW-R', 'QYHOGNECVPUZTFDJAXWMKISRBL', '7 February 1941', ROCKET),
    RotorSpec('ETW-R', 'QWERTZUIOASDFGHJKPYXCVBNML', '7 February 1941', ROCKET),
)

SWISS_K_WHEELS = (
    RotorSpec('I-K', 'PEZUOHXSCVFMTBGLRINQJWAYDK', 'February 1939', SWISS_K, 'R'),
    RotorSpec('II-K', 'ZOUESYDKFWPCIQXHMVBLGNJRAT', 'February 1939', SWISS_K, 'F'),
    RotorSpec('III-K', 'EHRVXGAOBQUSIMZFLYNWKTPDJC', 'February 1939', SWISS_K, 'W'),
    RotorSpec('UKW-K', 'IMETCGFRAYSQBZXWLHKDVUPOJN', 'February 1939', SWISS_K),
    RotorSpec('ETW-K', 'QWERTZUIOASDFGHJKPYXCVBNML', 'February 1939', SWISS_K),
)

COMMERCIAL_WHEELS = (
    RotorSpec('IC', 'DMTWSILRUYQNKFEJCAZBPGXOHV', '1924', COMMERCIAL, 'R'),
    RotorSpec('IIC', 'HQZGPJTMOBLNCIFDYAWVEUSRKX', '1924', COMMERCIAL, 'F'),
    RotorSpec('IIIC', 'UQNTLSZFMREHDPXKIBVYGJCWOA', '1924', COMMERCIAL, 'W'),
)

ALL_SPECS = M3 + M4 + ROCKET_WHEELS + SWISS_K_WHEELS + COMMERCIAL_WHEELS

ROTOR_TYPES = tuple(spec for spec in ALL_SPECS if not spec.is_reflector())
REFLECTOR_TYPES = tuple(spec for spec in ALL_SPECS if spec.is_reflector())
ENTRY_WHEELS = tuple(spec for spec in ROTOR_TYPES if spec.id.startswith('ETW'))

_ROTORS_BY_ID = {spec.id: spec for spec in ROTOR_TYPES}
_REFLECTORS_BY_ID = {spec.id: spec for spec in REFLECTOR_TYPES}


def list_rotor_types() -> list:
    return list(ROTOR_TYPES)


def list_reflector_types() -> list:
    return list(REFLECTOR_TYPES)


def rotor_ids() -> list:
    return [spec.id for spec in ROTOR_TYPES]


def reflector_ids() -> list:
    return [spec.id for spec in REFLECTOR_TYPES]


def get_rotor_spec(wheel_id: str) -> RotorSpec:
    try:
        return _ROTORS_BY_ID[wheel_id]
    except KeyError:
        raise InvalidConfig(f'unknown wheel {wheel_id!r}, expected one of {rotor_ids()}')


def get_reflector_spec(reflector_id: str) -> RotorSpec:
    try:
        return _REFLECTORS_BY_ID[reflector_id]
    except KeyError:
        raise InvalidConfig(f'unknown reflector {reflector_id!r}, expected one of {reflector_ids()}')

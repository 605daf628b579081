"""
Enigma - simulation of the signal path of the enigma rotor cipher machines.
"""

from enigma.catalog import list_reflector_types, list_rotor_types
from enigma.errors import EnigmaError, InvalidConfig, InvalidPairText, InvalidWiring
from enigma.machine import Machine
from enigma.mapper import Direction, Mapper
from enigma.pairs import PairSet
from enigma.pipeline import Pipeline, Stage
from enigma.rotor import Rotor, RotorSpec
from enigma.settings import MachineSettings, load_settings, save_settings
from enigma.stepping import Slot

__version__ = "0.1.0"

__all__ = [
    'Direction',
    'EnigmaError',
    'InvalidConfig',
    'InvalidPairText',
    'InvalidWiring',
    'Machine',
    'MachineSettings',
    'Mapper',
    'PairSet',
    'Pipeline',
    'Rotor',
    'RotorSpec',
    'Slot',
    'Stage',
    'list_reflector_types',
    'list_rotor_types',
    'load_settings',
    'save_settings',
]

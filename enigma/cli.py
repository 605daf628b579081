import argparse
import logging
import sys

from enigma import catalog, settings
from enigma.errors import EnigmaError
from enigma.log import setup_logging
from enigma.machine import Machine

logger = logging.getLogger(__name__)

BLOCK = 5


def group(text: str, block: int = BLOCK) -> str:
    return ' '.join(text[i:i + block] for i in range(0, len(text), block))


def parse_args(argv=None) -> argparse.Namespace:
    p = argparse.ArgumentParser(prog='enigma-sim', description='Encipher text with a simulated enigma machine.')
    p.add_argument('message', nargs='?', help='Text to encipher. If omitted, a prompt loop starts.')
    p.add_argument('--settings', metavar='FILE',
                   help='Load machine settings from a file written with --save. '
                        'Only load trusted files, loading a dill file can run code.')
    p.add_argument('--save', metavar='FILE', help='Write the resulting machine settings to FILE.')
    p.add_argument('--rotors', nargs='+', metavar='WHEEL',
                   help='Wheels left to right, e.g. I II III. Give 4 wheels to use the fourth (slow) wheel.')
    p.add_argument('--rings', nargs='+', metavar='POS', help='Ring settings, letters (A-Z) or numbers (1-26).')
    p.add_argument('--offsets', nargs='+', metavar='POS', help='Start positions, letters (A-Z) or numbers (1-26).')
    p.add_argument('--reflector', metavar='NAME', help=f'One of: {", ".join(catalog.reflector_ids())}.')
    p.add_argument('--reflector-pairs', nargs='+', metavar='PAIR',
                   help='12 pairs wiring the reconfigurable reflector, e.g. AB CD ...')
    p.add_argument('--plugs', nargs='*', metavar='PAIR', help='Plugboard cables, e.g. AB CD EF.')
    p.add_argument('--entry-wheel', metavar='ETW', help='Entry wheel, ETW (default) or a QWERTZ one.')
    p.add_argument('--numbers', action='store_true', help='Show rotor positions as numbers.')
    p.add_argument('--show', action='store_true', help='Log the signal path of every key press.')
    p.add_argument('--list', action='store_true', help='List the available wheels and reflectors and exit.')
    p.add_argument('-v', '--verbose', action='count', default=0)
    return p.parse_args(argv)


def _check_count(name: str, values, n_rotors: int):
    if values is not None and len(values) != n_rotors:
        raise EnigmaError(f'--{name} needs {n_rotors} values, got {len(values)}')


def build_machine(args: argparse.Namespace) -> Machine:
    if args.settings:
        machine = Machine(settings.load_settings(args.settings))
    else:
        machine = Machine()

    if args.rotors:
        n_rotors = len(args.rotors)
        if n_rotors not in (3, 4):
            raise EnigmaError(f'--rotors needs 3 or 4 wheels, got {n_rotors}')
        _check_count('rings', args.rings, n_rotors)
        _check_count('offsets', args.offsets, n_rotors)
        rings = args.rings or [0] * n_rotors
        offsets = args.offsets or [0] * n_rotors
        slots = ('fourth', 'left', 'middle', 'right')[-n_rotors:]
        for slot, wheel, ring, offset in zip(slots, args.rotors, rings, offsets):
            machine.configure_rotor(slot, wheel, ring, offset)
        machine.set_fourth_wheel_enabled(n_rotors == 4)
    else:
        n_rotors = len(machine.active_slots())
        _check_count('rings', args.rings, n_rotors)
        _check_count('offsets', args.offsets, n_rotors)
        if args.rings:
            for slot, ring in zip(machine.active_slots(), args.rings):
                machine.set_ring_setting(slot, ring)
        if args.offsets:
            machine.set_rotor_offsets(args.offsets)

    if args.reflector:
        machine.configure_reflector(named=args.reflector)
    if args.reflector_pairs:
        machine.configure_reflector(custom_pairs=args.reflector_pairs)
    if args.plugs is not None:
        machine.configure_plugboard(args.plugs)
    if args.entry_wheel:
        machine.set_entry_wheel(args.entry_wheel)
    if args.numbers:
        machine.use_numbers = True
    if args.show:
        machine.show = True
    return machine


def list_wheels():
    print('Rotors:')
    for spec in catalog.list_rotor_types():
        print(f'  {spec.id:<8} {spec.cipher}  turnover={spec.turnovers or "-":<3} {spec.name} {spec.date}'.rstrip())
    print('Reflectors:')
    for spec in catalog.list_reflector_types():
        print(f'  {spec.id:<17} {spec.cipher}  {spec.name}'.rstrip())


def run(machine: Machine, message: str = None):
    if message is not None:
        print(group(machine.encipher_string(message)))
        return

    print(f'Window {machine.window()}. Type blank line to quit.')
    while True:
        try:
            text = input('> ')
        except EOFError:
            break
        if not text.strip():
            break
        print(group(machine.encipher_string(text)))
        print(f'Window {machine.window()}')


def main(argv=None) -> int:
    args = parse_args(argv)
    level = logging.WARNING
    if args.verbose == 1 or args.show:
        level = logging.INFO
    if args.verbose > 1:
        level = logging.DEBUG
    setup_logging(level)

    if args.list:
        list_wheels()
        return 0

    try:
        machine = build_machine(args)
        machine.validate()
        if args.save:
            settings.save_settings(machine.get_settings(), args.save)
        run(machine, args.message)
    except ValueError as err:
        # EnigmaError, and bad letters or numbers in the arguments
        logger.error('%s', err)
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())

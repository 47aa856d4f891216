"""
Play a CHIP-8 ROM in a pygame window.

    python main.py path/to/game.ch8 --scale 12 --cpu-hz 600

Controls: 1234/QWER/ASDF/ZXCV = keypad, Space = pause, F5 = reset, Esc = quit
"""

import sys

from chipax.cli import main

if __name__ == "__main__":
    sys.exit(main())

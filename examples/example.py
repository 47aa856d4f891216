import time

import jax

from chipax import Scheduler, create_state, load_rom, snapshot
from chipax.rendering import create_video

# Draws every hex digit across the screen, then spins forever:
#   V0 = digit, V1 = x, V2 = y
#   loop: I = font(V0); draw 5 rows at (V1, V2); V1 += 4; V0 += 1; if V0 != 16 repeat
PROGRAM = [
    0x6000, 0x6100, 0x6204,
    0xF029, 0xD125, 0x7104, 0x7001, 0x3010, 0x1206,
    0x1212,
]


def assemble(words):
    return bytes(b for word in words for b in (word >> 8, word & 0xFF))


if __name__ == "__main__":
    state = load_rom(create_state(jax.random.PRNGKey(0)), assemble(PROGRAM), name="hex digits")
    scheduler = Scheduler(cpu_hz=700)

    frames = []
    start = time.time()
    for _ in range(60):
        state = scheduler.run_frames(state, 1)
        frames.append(snapshot(state))
    print("Execution time (s):", time.time() - start)
    print("Cycles:", scheduler.total_cycles, "Timer ticks:", scheduler.total_ticks)

    create_video(frames, "hex_digits.mp4")

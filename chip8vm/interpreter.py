"""Two-clock CHIP-8 scheduler.

The :class:`Interpreter` owns the emulator state and drives it from two
independent clocks: an instruction clock for fetch/decode/execute and a
60 Hz timer clock for the delay and sound timers. Hosts feed it elapsed
time, key events and callbacks for audio and display output.
"""

import time
from fractions import Fraction
from typing import Callable, Optional

import jax
import numpy as np

from chip8vm.constants import DEFAULT_INSTRUCTION_FREQUENCY, TIMER_FREQUENCY
from chip8vm.display import snapshot
from chip8vm.emulator import fetch, execute, read_rom
from chip8vm.errors import Chip8Error
from chip8vm.keypad import press_key, release_key, is_waiting_for_key
from chip8vm.logging import EmulatorLogger
from chip8vm.memory import load_program
from chip8vm.state import EmulatorState, create_state
from chip8vm.timers import tick_timers, sound_active


MAX_TIME_DENOMINATOR = 10 ** 6


def _is_display_instruction(instruction: int) -> bool:
    return instruction == 0x00E0 or (instruction & 0xF000) == 0xD000


class Interpreter:
    """CHIP-8 interpreter with decoupled instruction and timer clocks."""

    def __init__(
        self,
        instruction_frequency: int = DEFAULT_INSTRUCTION_FREQUENCY,
        timer_frequency: int = TIMER_FREQUENCY,
        rng: jax.random.PRNGKey = None,
        log_level: str = "INFO",
        logger: Optional[EmulatorLogger] = None,
        on_sound: Optional[Callable[[bool], None]] = None,
        on_display: Optional[Callable[[np.ndarray], None]] = None,
    ):
        """Initialize the interpreter.

        Args:
            instruction_frequency: Instruction clock rate in Hz (typically 500-1000)
            timer_frequency: Delay/sound timer clock rate in Hz (60 on real hardware)
            rng: JAX random key used by CXNN
            log_level: Level for the default console logger
            logger: Custom logger, overrides ``log_level``
            on_sound: Audio sink, called with the new state whenever the tone starts or stops
            on_display: Renderer, called with a display snapshot after every 00E0/DXYN
        """
        for name, value in (
            ("instruction_frequency", instruction_frequency),
            ("timer_frequency", timer_frequency),
        ):
            if not isinstance(value, int) or isinstance(value, bool) or value <= 0:
                raise ValueError(f"{name} must be a positive integer, got {value!r}")

        self.instruction_frequency = instruction_frequency
        self.timer_frequency = timer_frequency
        self.logger = logger or EmulatorLogger(log_level=log_level)
        self.on_sound = on_sound
        self.on_display = on_display

        self.state: EmulatorState = create_state(jax.random.PRNGKey(0) if rng is None else rng)
        self.instruction_ticks = 0
        self.timer_ticks = 0
        self.error: Optional[Chip8Error] = None

        self._elapsed = Fraction(0)
        self._sound_on = False
        self._running = False

        self.logger.log_clocks(instruction_frequency, timer_frequency)

    # Program loading

    def load_program(self, program: bytes, source: str = None):
        """Copy a program image to 0x200. Must happen before the first tick."""
        self.state = self.state.replace(memory=load_program(self.state.memory, program))
        self.logger.log_program_loaded(len(program), source)

    def load_rom(self, filename: str):
        self.load_program(read_rom(filename), source=filename)

    # Clocks

    def step(self):
        """One instruction-clock tick.

        While an FX0A wait is pending the tick is consumed without executing.
        State is only replaced once the instruction completes, so a fatal
        error leaves the last consistent state in place.
        """
        self._raise_if_halted()
        self.instruction_ticks += 1
        if is_waiting_for_key(self.state):
            return

        pc = int(self.state.pc)
        instruction = None
        try:
            state, instruction = fetch(self.state)
            self.logger.log_instruction(pc, instruction)
            state = execute(state, instruction)
        except Chip8Error as e:
            self.error = e
            self.logger.log_fatal(e, pc, instruction)
            raise

        self.state = state
        if is_waiting_for_key(state):
            self.logger.log_key_wait(state.waiting_register)
        if self.on_display is not None and _is_display_instruction(instruction):
            self.on_display(self.snapshot())
        self._update_sound()

    def tick_timers(self):
        """One timer-clock tick. Runs even while waiting for a key."""
        self._raise_if_halted()
        self.timer_ticks += 1
        self.state = tick_timers(self.state)
        self._update_sound()

    def advance(self, seconds: float):
        """Advance emulated time, interleaving both clocks in timestamp order.

        After a total of ``t`` seconds, exactly ``floor(t * f)`` ticks have
        been issued on each clock. Timer ticks go first on ties.
        """
        if seconds < 0:
            raise ValueError(f"Cannot advance by a negative duration: {seconds}")
        self._raise_if_halted()
        # Exact time: 0.1 and 1/60 snap to 1/10 and 1/60.
        self._elapsed += Fraction(seconds).limit_denominator(MAX_TIME_DENOMINATOR)

        instruction_target = int(self._elapsed * self.instruction_frequency)
        timer_target = int(self._elapsed * self.timer_frequency)

        while self.instruction_ticks < instruction_target or self.timer_ticks < timer_target:
            timer_due = self.timer_ticks < timer_target
            instruction_due = self.instruction_ticks < instruction_target
            # Compare next tick timestamps (n + 1) / f without floating point.
            timer_first = (
                (self.timer_ticks + 1) * self.instruction_frequency
                <= (self.instruction_ticks + 1) * self.timer_frequency
            )
            if timer_due and (timer_first or not instruction_due):
                self.tick_timers()
            else:
                self.step()

    def run(
        self,
        duration: float = None,
        clock: Callable[[], float] = time.perf_counter,
        sleep: Callable[[float], None] = time.sleep,
    ):
        """Run in real time until ``stop()`` is called or ``duration`` elapses."""
        self._running = True
        start = last = clock()
        end = None if duration is None else start + duration
        self.logger.info("Interpreter started")
        try:
            while self._running:
                now = clock()
                if end is not None and now >= end:
                    now = end
                    self._running = False
                self.advance(now - last)
                last = now
                if self._running:
                    sleep(1.0 / self.timer_frequency)
        finally:
            self._running = False
        self.logger.info(
            f"Interpreter stopped after {self.instruction_ticks} instruction ticks"
        )

    def stop(self):
        """Stop ``run()`` at the next tick boundary."""
        self._running = False

    # External collaborators

    def press_key(self, key: int):
        self.state = press_key(self.state, key)

    def release_key(self, key: int):
        self.state = release_key(self.state, key)

    def snapshot(self) -> np.ndarray:
        """Read-only 64x32 view of the display, indexed ``[x, y]``."""
        return snapshot(self.state.display)

    @property
    def sound_active(self) -> bool:
        return sound_active(self.state)

    @property
    def waiting_for_key(self) -> bool:
        return is_waiting_for_key(self.state)

    @property
    def halted(self) -> bool:
        return self.error is not None

    def _raise_if_halted(self):
        if self.error is not None:
            raise self.error

    def _update_sound(self):
        active = sound_active(self.state)
        if active != self._sound_on:
            self._sound_on = active
            if self.on_sound is not None:
                self.on_sound(active)

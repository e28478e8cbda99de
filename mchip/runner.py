#!/usr/bin/env python3

"""
Runner

Drives a CPU in real time.  The CPU itself has no idea of wall-clock time: it
runs one instruction each time it is stepped.  This is where the instruction
rate is capped, the timers are decayed at 60Hz, inputs are polled, and the
display is refreshed at the host's frame rate.

By default the timers are decoupled from the instruction rate and ticked from
real time, which is what CHIP-8 programs expect.  With coupled timers, every
step ticks them instead, so the clock speed then also sets the timer rate.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from time import perf_counter
from .constants import APP_NAME, DEFAULT_CLOCK_SPEED, TIMER_FREQ

DISPLAY_FREQ = 60.0  # 60Hz emulated display refresh
DISPLAY_INTERVAL = 1.0 / DISPLAY_FREQ
TIMER_INTERVAL = 1.0 / TIMER_FREQ


class Runner:
    def __init__(self, cpu, renderer, inputs, clock_speed=None, coupled_timers=False, clock=perf_counter):
        self.cpu = cpu
        self.renderer = renderer
        self.inputs = inputs
        self.coupled_timers = coupled_timers
        self.clock = clock

        # User can specify 0 for an uncapped clock speed
        auto_clock_speed = DEFAULT_CLOCK_SPEED if clock_speed is None else clock_speed
        self.core_interval = None if auto_clock_speed <= 0 else 1.0 / auto_clock_speed

        # Performance-related vars
        self.perf_counter_fps = 0
        self.perf_counter_ops = 0
        self.report_perf()

    def run(self, max_ops=None):
        # Returns when the inputs ask to quit, or once max_ops instructions have been run
        cpu = self.cpu
        clock = self.clock
        redraw_pending = cpu.take_redraw()  # Show the blank screen from the reset
        next_display_update_time = 0
        next_perf_report_time = 0
        next_timer_tick_time = None
        ops = 0

        while max_ops is None or ops < max_ops:
            this_time = clock()  # Do this first for maximum precision

            # Performance counters
            if this_time >= next_perf_report_time:
                next_perf_report_time = int(this_time) + 1.0
                # Reporting the performance should be done before a refresh, as refreshing will likely show the report
                self.report_perf(self.perf_counter_fps, self.perf_counter_ops)
                self.perf_counter_ops = 0
                self.perf_counter_fps = 0

            # Prevent unnecessary display rendering in excess of host frame rate
            if this_time >= next_display_update_time:
                if self.inputs.process_messages():  # Process inputs at 60Hz too, to avoid slowdown
                    return

                next_display_update_time = this_time + DISPLAY_INTERVAL

                if redraw_pending:
                    self.renderer.draw(cpu.framebuffer)
                    redraw_pending = False

                self.renderer.refresh_display()
                self.perf_counter_fps += 1

            if not self.coupled_timers:
                # Decrement timers in relation to real time.  So, if the host gets lagged, the timers will catch up.
                if next_timer_tick_time is None:
                    next_timer_tick_time = this_time + TIMER_INTERVAL

                while this_time >= next_timer_tick_time:
                    cpu.tick_timers()
                    next_timer_tick_time += TIMER_INTERVAL

            if cpu.step(tick_timers=self.coupled_timers):
                redraw_pending = True

            ops += 1
            self.perf_counter_ops += 1

            if self.core_interval is not None:
                # Wait for next CPU instruction.  Do this last for maximum precision (takes into account time spent on
                # this instruction)
                next_time = this_time + self.core_interval

                while clock() < next_time:  # Unfortunately we have to do this to get the timing right
                    pass

        if redraw_pending:
            self.renderer.draw(cpu.framebuffer)
            self.renderer.refresh_display()

    def report_perf(self, fps=0, ops=0):
        self.renderer.set_title("{} - {} FPS, {} OPS".format(APP_NAME, fps, ops))

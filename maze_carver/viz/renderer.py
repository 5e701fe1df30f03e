import logging

import numpy as np
import pygame

from maze_carver.algo.base import StepResult
from maze_carver.algo.registry import ALGORITHMS, get_algorithm
from maze_carver.core.events import EventSink
from maze_carver.core.grid import CellState
from maze_carver.driver import MazeDriver

logger = logging.getLogger(__name__)


class Renderer(EventSink):
    COLOR_BG = (10, 10, 10)
    COLOR_WALL = (200, 200, 200)
    COLOR_PASSAGE = (60, 160, 90)   # Green
    COLOR_PENDING = (170, 50, 50)   # Red, cell not carved yet
    COLOR_TEXT = (255, 255, 255)

    MIN_DELAY = 0.0
    MAX_DELAY = 1.0

    def __init__(self, driver: MazeDriver, width=1280, height=720, feedback=None, recorder=None):
        self.driver = driver
        self.feedback = feedback
        self.recorder = recorder
        self.screen_width = width
        self.screen_height = height

        # Camera
        self.cell_size = 20.0
        self.offset_x = 0.0
        self.offset_y = 0.0

        self.font = None
        self.running = True
        self.clock = None
        self.surface = None
        self.maze_surface = None
        self.dirty = True
        self.step_timer = 0.0

    # EventSink hooks
    def on_reset(self, width, height):
        self.dirty = True
        if self.surface is not None:
            self.fit_to_screen()

    def on_cell(self, pos, state):
        self.dirty = True

    def on_step(self, index):
        if self.feedback:
            self.feedback.on_step(index)

    def on_complete(self, openings):
        if self.feedback:
            self.feedback.on_complete(openings)

    @property
    def grid(self):
        return self.driver.grid

    def fit_to_screen(self):
        """Zoom and centre so the whole maze, frame included, fits with padding."""
        padding = 40
        available_w = self.screen_width - (padding * 2)
        available_h = self.screen_height - (padding * 2)

        total_w = self.grid.width + 2
        total_h = self.grid.height + 2
        if total_w <= 0 or total_h <= 0:
            return

        self.cell_size = max(1.0, min(available_w / total_w, available_h / total_h))

        self.offset_x = (self.screen_width - total_w * self.cell_size) / 2
        self.offset_y = (self.screen_height - total_h * self.cell_size) / 2

    def init_window(self):
        pygame.init()
        pygame.display.set_caption(f"Maze Carver - {self.grid.width}x{self.grid.height}")
        self.surface = pygame.display.set_mode((self.screen_width, self.screen_height), pygame.RESIZABLE)
        self.clock = pygame.time.Clock()
        self.font = pygame.font.SysFont("Consolas", 16)
        self.fit_to_screen()

    def color_array(self) -> np.ndarray:
        """
        (w + 2, h + 2, 3) colour buffer including the frame, laid out for
        pygame.surfarray (x first). Rows are flipped so +y points up.
        """
        rows = self.grid.to_rows(include_frame=True)
        states = np.array(rows, dtype=np.uint8)  # (h + 2, w + 2)

        colors = np.empty(states.shape + (3,), dtype=np.uint8)
        colors[:] = self.COLOR_WALL
        colors[states == CellState.PASSAGE] = self.COLOR_PASSAGE

        # Uncarved cells on odd/odd coordinates (frame shifts indices by one)
        pending = np.zeros(states.shape, dtype=bool)
        pending[2:-1:2, 2:-1:2] = True
        colors[pending & (states == CellState.WALL)] = self.COLOR_PENDING

        return np.transpose(colors[::-1], (1, 0, 2))

    def draw_grid(self):
        self.surface.fill(self.COLOR_BG)
        if self.grid.width <= 0 or self.grid.height <= 0:
            return

        if self.dirty or self.maze_surface is None:
            self.maze_surface = pygame.surfarray.make_surface(self.color_array())
            self.dirty = False

        size = (int((self.grid.width + 2) * self.cell_size), int((self.grid.height + 2) * self.cell_size))
        scaled = pygame.transform.scale(self.maze_surface, size)
        self.surface.blit(scaled, (int(self.offset_x), int(self.offset_y)))

    def draw_hud(self):
        fps = int(self.clock.get_fps())
        run = self.driver.run
        cfg = self.driver.config
        status = "Idle"
        if run is not None:
            status = "Done" if run.finished else "Running"
        info = [
            f"FPS: {fps}",
            f"Size: {self.grid.width}x{self.grid.height}",
            f"Algo: {cfg.algorithm.upper()}  Mode: {'instant' if cfg.instant else 'stepped'}",
            f"Delay: {cfg.step_delay:.3f}s",
            f"Steps: {run.steps if run else 0}",
            f"Status: {status}",
            "REC" if self.recorder and self.recorder.active else "",
        ]

        for i, text in enumerate(info):
            lbl = self.font.render(text, True, self.COLOR_TEXT)
            self.surface.blit(lbl, (10, 10 + i * 20))

    def cycle_algorithm(self):
        names = sorted(set(cls.name for cls in ALGORITHMS.values()))
        cfg = self.driver.config
        current = get_algorithm(cfg.algorithm).name
        cfg.algorithm = names[(names.index(current) + 1) % len(names)]
        logger.info(f"Algorithm set to {cfg.algorithm}")

    def adjust_delay(self, factor: float):
        cfg = self.driver.config
        delay = cfg.step_delay * factor if cfg.step_delay > 0 else 0.01
        cfg.step_delay = max(self.MIN_DELAY, min(self.MAX_DELAY, delay))

    def regenerate(self):
        self.step_timer = 0.0
        self.driver.generate()

    def handle_input(self):
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False

            elif event.type == pygame.VIDEORESIZE:
                self.screen_width, self.screen_height = event.w, event.h
                self.fit_to_screen()

            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    self.running = False
                elif event.key == pygame.K_r:
                    self.regenerate()
                elif event.key == pygame.K_SPACE:
                    self.driver.config.instant = not self.driver.config.instant
                elif event.key == pygame.K_TAB:
                    self.cycle_algorithm()
                elif event.key == pygame.K_m and self.feedback:
                    self.feedback.toggle_mute()
                elif event.key in (pygame.K_PLUS, pygame.K_EQUALS, pygame.K_KP_PLUS):
                    self.adjust_delay(2.0)
                elif event.key in (pygame.K_MINUS, pygame.K_KP_MINUS):
                    self.adjust_delay(0.5)

    def advance(self, dt: float):
        """Steps the driver according to the configured delay."""
        if not self.driver.running:
            return
        delay = self.driver.config.step_delay
        if delay <= 0:
            # No delay: a batch per frame keeps the window responsive
            for _ in range(100):
                if self.driver.step() is StepResult.DONE:
                    break
            return

        self.step_timer += dt
        while self.step_timer >= delay and self.driver.running:
            self.step_timer -= delay
            self.driver.step()

    def run_loop(self):
        try:
            if self.driver.run is None:
                self.regenerate()

            while self.running:
                dt = self.clock.tick(60) / 1000.0
                self.handle_input()
                self.advance(dt)

                self.draw_grid()
                self.draw_hud()
                pygame.display.flip()

                if self.recorder and self.recorder.active:
                    self.recorder.capture_frame(self.surface)
        finally:
            # Finalize the video even when generation fails
            if self.recorder:
                self.recorder.stop()
            pygame.quit()

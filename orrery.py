"""
orrery.py

Animated top-down rendering of a star and its planets.

OrreryCanvas owns a drawing surface, the current zoom scale and the active
star/planet set. Once draw_solar_system() is called it redraws every frame
from wall-clock time, shrinking the view when orbits outgrow the surface and
relaxing back to unit scale once the unscaled system fits again.

Drawing goes through the small DrawingSurface contract; PygameSurface is the
pygame implementation and FrameClock the pygame-backed frame scheduler.
"""

import functools
import logging
import math
import time
from abc import ABC, abstractmethod
from typing import Callable, Dict, List, Mapping, Optional, Sequence, Tuple

import pygame

from celestial import Planet, Star
from orrery_config import (
    FOCUS_HALO,
    FOCUS_HALO_WIDTH,
    FOCUS_ORBIT,
    FPS,
    LABEL,
    LABEL_FONT,
    LABEL_FONT_SIZE,
    ORBIT,
    SCALE_ORBIT,
    SCALE_ORBIT_LABEL,
    SCALE_ORBIT_LABEL_OFFSET,
    SPACE,
    VIEWPORT_MARGIN,
)
from physical_scale import DEFAULT_SCALE, ScaleConfig, orbit_pixels, round_half_up

logger = logging.getLogger(__name__)

Color = Sequence[int]
Point = Tuple[float, float]


class SurfaceUnavailable(RuntimeError):
    """The drawing surface is missing; the frame is skipped."""


# ---------- Drawing surface ----------


class DrawingSurface(ABC):
    """
    2D immediate-mode drawing surface with a uniform scale transform.
    Coordinates passed in are plot-space; the transform maps them to device
    pixels.
    """

    @abstractmethod
    def get_size(self) -> Tuple[int, int]:
        ...

    @abstractmethod
    def set_size(self, width: int, height: int) -> None:
        ...

    @abstractmethod
    def clear(self, x: float, y: float, width: float, height: float) -> None:
        ...

    @abstractmethod
    def fill_rect(self, x: float, y: float, width: float, height: float, color: Color) -> None:
        ...

    @abstractmethod
    def fill_circle(self, center: Point, radius: float, color: Color) -> None:
        ...

    @abstractmethod
    def stroke_circle(self, center: Point, radius: float, color: Color, width: float = 1) -> None:
        ...

    @abstractmethod
    def fill_text(self, text: str, position: Point, color: Color, size: int) -> None:
        """Draw text horizontally centered on position, baseline at its y."""

    @abstractmethod
    def set_transform(self, scale: float) -> None:
        ...

    @abstractmethod
    def reset_transform(self) -> None:
        ...


class PygameSurface(DrawingSurface):
    """
    DrawingSurface over a pygame.Surface. With no target it draws on the
    live display surface, looked up on every call so window resizes are
    picked up.
    """

    def __init__(self, target: Optional[pygame.Surface] = None, font_name: str = LABEL_FONT):
        self._target = target
        self.font_name = font_name
        self.scale = 1.0
        self._fonts: Dict[int, pygame.font.Font] = {}

    @property
    def target(self) -> pygame.Surface:
        if self._target is not None:
            return self._target
        try:
            screen = pygame.display.get_surface()
        except pygame.error as exc:
            raise SurfaceUnavailable(str(exc)) from exc
        if screen is None:
            raise SurfaceUnavailable("No display surface has been created.")
        return screen

    def get_size(self) -> Tuple[int, int]:
        return self.target.get_size()

    def set_size(self, width: int, height: int) -> None:
        # The display is sized by the window; only off-screen targets resize
        if self._target is None or self._target.get_size() == (width, height):
            return
        self._target = pygame.Surface((max(0, width), max(0, height)))

    # --- transform helpers ---

    def _px(self, value: float) -> int:
        return round_half_up(value * self.scale)

    def _point(self, point: Point) -> Tuple[int, int]:
        return (self._px(point[0]), self._px(point[1]))

    def _rect(self, x: float, y: float, width: float, height: float) -> pygame.Rect:
        return pygame.Rect(self._px(x), self._px(y), self._px(width), self._px(height))

    def _font(self, size: int) -> pygame.font.Font:
        px = max(1, self._px(size))
        font = self._fonts.get(px)
        if font is None:
            if not pygame.font.get_init():
                pygame.font.init()
            font = pygame.font.SysFont(self.font_name, px)
            self._fonts[px] = font
        return font

    # --- drawing ---

    def clear(self, x: float, y: float, width: float, height: float) -> None:
        self.target.fill((0, 0, 0, 0), self._rect(x, y, width, height))

    def fill_rect(self, x: float, y: float, width: float, height: float, color: Color) -> None:
        self.target.fill(color, self._rect(x, y, width, height))

    def fill_circle(self, center: Point, radius: float, color: Color) -> None:
        pygame.draw.circle(self.target, color, self._point(center), self._px(radius))

    def stroke_circle(self, center: Point, radius: float, color: Color, width: float = 1) -> None:
        cx, cy = self._point(center)
        r = self._px(radius)
        # width 0 would fill the circle in pygame
        w = max(1, self._px(width))
        if r <= 0:
            return
        if len(color) == 4 and color[3] < 255:
            size = 2 * (r + w) + 2
            overlay = pygame.Surface((size, size), pygame.SRCALPHA)
            pygame.draw.circle(overlay, color, (size // 2, size // 2), r, w)
            self.target.blit(overlay, (cx - size // 2, cy - size // 2))
        else:
            pygame.draw.circle(self.target, color, (cx, cy), r, w)

    def fill_text(self, text: str, position: Point, color: Color, size: int) -> None:
        font = self._font(size)
        img = font.render(text, True, color)
        rect = img.get_rect()
        x, y = self._point(position)
        # get_descent() is negative; shift so y lands on the baseline
        rect.midbottom = (x, y - font.get_descent())
        self.target.blit(img, rect)

    def set_transform(self, scale: float) -> None:
        self.scale = scale

    def reset_transform(self) -> None:
        self.scale = 1.0


# ---------- Frame scheduling ----------


class FrameClock:
    """
    One batch of frame callbacks per display refresh. Callbacks requested
    while a batch runs wait for the next tick.
    """

    def __init__(self, fps: int = FPS, clock=None):
        self.fps = fps
        self._clock = clock if clock is not None else pygame.time.Clock()
        self._pending: List[Callable[[], None]] = []

    @property
    def pending(self) -> int:
        return len(self._pending)

    def request_frame(self, callback: Callable[[], None]) -> None:
        self._pending.append(callback)

    def tick(self) -> int:
        self._clock.tick(self.fps)
        callbacks, self._pending = self._pending, []
        for callback in callbacks:
            callback()
        return len(callbacks)


def orbit_position(center: Point, orbit_radius: float, orbit_period: float, now_ms: float) -> Point:
    """
    Position on a circular orbit after now_ms of wall-clock time: one full
    revolution every orbit_period display-seconds.
    """
    angle = ((2 * math.pi) / (orbit_period * 1000)) * now_ms
    return (
        center[0] + math.cos(angle) * orbit_radius,
        center[1] + math.sin(angle) * orbit_radius,
    )


# ---------- Canvas ----------


class OrreryCanvas:
    """
    Handles animation and rendering of one star system.

    container is anything with get_size() -> (width, height); it defaults
    to the surface itself.
    """

    def __init__(
        self,
        surface: DrawingSurface,
        container=None,
        frames=None,
        config: ScaleConfig = DEFAULT_SCALE,
        clock: Callable[[], float] = time.time,
    ):
        self.surface = surface
        self.container = container if container is not None else surface
        self.frames = frames if frames is not None else FrameClock()
        self.config = config
        self.clock = clock

        self.width = 0
        self.height = 0
        self.scale = 1.0
        self.determine_size()

        self.star: Optional[Star] = None
        self.planets: Mapping[float, Planet] = {}
        self.focus_planet_id: Optional[float] = None
        self.EARTH_ORBIT_PIXELS = orbit_pixels(1.0, config)
        self.largest_orbit = self.EARTH_ORBIT_PIXELS

        self.animating = False
        self._loop_id = 0

    # --- public contract ---

    def determine_size(self) -> None:
        """Re-read the container size and pass it to the surface."""
        try:
            width, height = self.container.get_size()
        except SurfaceUnavailable as exc:
            logger.debug("Container unavailable, size set to zero: %s", exc)
            width, height = 0, 0
        self.width = int(width)
        self.height = int(height)
        try:
            self.surface.set_size(self.width, self.height)
            if self.scale != 1:
                self.surface.set_transform(self.scale)
        except SurfaceUnavailable as exc:
            logger.debug("Surface unavailable while resizing: %s", exc)

    def set_bodies(self, star: Optional[Star], planets: Optional[Mapping[float, Planet]] = None) -> None:
        """Replace the rendered bodies; planets default to the star's own."""
        if planets is None:
            planets = star.planets if star is not None else {}
        self.star = star
        self.planets = planets

    def set_focus(self, planet_id: Optional[float]) -> None:
        self.focus_planet_id = planet_id

    def draw_solar_system(self) -> None:
        """
        Start animating. Every frame schedules the next one, so this runs
        until stop(). Calling it again while animating does nothing.
        """
        if self.animating:
            return
        self.animating = True
        self._loop_id += 1
        self._frame(self._loop_id)

    def stop(self) -> None:
        """Cancel the loop; the pending frame, if any, returns without drawing."""
        self.animating = False

    # --- loop ---

    def _frame(self, loop_id: int) -> None:
        if not self.animating or loop_id != self._loop_id:
            return
        try:
            self.draw_frame()
        except SurfaceUnavailable as exc:
            logger.debug("Skipping frame: %s", exc)
        except Exception:
            logger.exception("Frame failed, animation continues")
        self.frames.request_frame(functools.partial(self._frame, loop_id))

    def draw_frame(self, now_ms: Optional[float] = None) -> bool:
        """Draw one frame; returns False when the surface is zero-sized."""
        if self.width <= 0 or self.height <= 0:
            logger.debug("Nothing to draw on a %dx%d surface", self.width, self.height)
            return False
        if now_ms is None:
            now_ms = self.clock() * 1000

        self.set_scale()
        self.clear()
        self.draw_space()
        if self.star is not None:
            self.draw_star(self.star.radius, self.star.color)
        self.draw_planets(now_ms)
        self.draw_scale_orbit()
        return True

    # --- autoscale ---

    def fit_radius(self) -> float:
        return self.width * VIEWPORT_MARGIN * 0.5

    def set_scale(self) -> None:
        """
        Scale down if the largest orbit overflows the surface at the current
        scale. Only return to unit scale once the unscaled system fits.
        """
        self.largest_orbit = self.EARTH_ORBIT_PIXELS
        for planet in self.planets.values():
            if planet.orbit > self.largest_orbit:
                self.largest_orbit = planet.orbit

        fit = self.fit_radius()
        if self.largest_orbit > fit / self.scale:
            self.scale = fit / self.largest_orbit
            self.surface.set_transform(self.scale)
            logger.debug("Scaled down to %.4f for a %d px orbit", self.scale, self.largest_orbit)
        elif self.scale < 1 and self.largest_orbit <= fit:
            self.scale = 1.0
            self.surface.reset_transform()
            logger.debug("Scale reset to 1")

    # --- geometry ---

    def get_center_x(self) -> int:
        return round_half_up(self.width / 2 / self.scale)

    def get_center_y(self) -> int:
        return round_half_up(self.height / 2 / self.scale)

    def get_center(self) -> Tuple[int, int]:
        return (self.get_center_x(), self.get_center_y())

    # --- drawing ---

    def clear(self) -> None:
        self.surface.clear(0, 0, self.width / self.scale, self.height / self.scale)

    def draw_space(self) -> None:
        self.surface.fill_rect(0, 0, self.width / self.scale, self.height / self.scale, SPACE)

    def draw_star(self, radius: float, color: Color) -> None:
        self.surface.fill_circle(self.get_center(), radius, color)

    def draw_orbit(self, radius: float, color: Color) -> None:
        self.surface.stroke_circle(self.get_center(), radius, color)

    def draw_scale_orbit(self) -> None:
        """Earth's orbit for scale, in blue, with its label."""
        self.draw_orbit(self.EARTH_ORBIT_PIXELS, SCALE_ORBIT)
        self.surface.fill_text(
            SCALE_ORBIT_LABEL,
            (self.get_center_x() + SCALE_ORBIT_LABEL_OFFSET, self.get_center_y()),
            LABEL,
            LABEL_FONT_SIZE,
        )

    def draw_planets(self, now_ms: float) -> None:
        """All orbits first, focused one highlighted, then the planets."""
        for planet_id, planet in self.planets.items():
            focus = planet_id == self.focus_planet_id
            self.draw_orbit(planet.orbit, FOCUS_ORBIT if focus else ORBIT)
        for planet_id, planet in self.planets.items():
            focus = planet_id == self.focus_planet_id
            self.draw_planet(planet.orbit, planet.radius, planet.color, planet.period, focus, now_ms)

    def draw_planet(
        self,
        orbit_radius: float,
        planet_radius: float,
        color: Color,
        orbit_period: float,
        focus: bool,
        now_ms: float,
    ) -> None:
        position = orbit_position(self.get_center(), orbit_radius, orbit_period, now_ms)
        self.surface.fill_circle(position, planet_radius, color)
        if focus:
            self.surface.stroke_circle(position, planet_radius, FOCUS_HALO, FOCUS_HALO_WIDTH)

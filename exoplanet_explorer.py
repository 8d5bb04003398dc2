#!/usr/bin/env python3
"""
exoplanet_explorer.py

Kepler exoplanet system viewer.

Features
--------
- Load a JSON dump of Kepler KOI records (a list, or {"results": [...]}).
- Filter matches by planet temperature, planet radius, orbit period and
  orbit axis (exclusive ranges), keeping the top results.
- Animated top-down view of the selected planet's star system, autoscaled
  to fit the window, with Earth's orbit drawn for scale.
- Cycle through matches or through the current star's planets; the
  selected planet's orbit is highlighted.
- Info panel with stellar and planetary attributes.

Usage
-----
    python exoplanet_explorer.py data/kepler_sample.json
    python exoplanet_explorer.py data/kepler_sample.json --planet-temperature 225 285
    python exoplanet_explorer.py data/kepler_sample.json --star 70

Dependencies
-----------
    pip install pygame pydantic-settings
"""

import argparse
import logging
import sys
from typing import Any, List, Mapping, Optional, Sequence, Tuple

import pygame

from celestial import InvalidInput, Planet, Star
from kepler_catalog import (
    DEFAULT_RESULT_LIMIT,
    filter_records,
    group_by_star,
    load_records,
    records_for_star,
)
from orrery import FrameClock, OrreryCanvas, PygameSurface
from orrery_config import (
    HELP_TEXT,
    PANEL_FONT,
    PANEL_FONT_SIZE,
    PANEL_SELECTED,
    PANEL_TEXT,
    Settings,
)

logger = logging.getLogger(__name__)


# ---------- Viewer / UI ----------


class ExplorerApp:
    """
    Holds the interaction state (matches, current star, selected planet)
    and drives the canvas. records is every known record, used to look up
    a planet's siblings; matches is the filtered subset shown as results.
    """

    def __init__(
        self,
        records: Sequence[Mapping[str, Any]],
        settings: Optional[Settings] = None,
        matches: Optional[Sequence[Mapping[str, Any]]] = None,
        limit: int = DEFAULT_RESULT_LIMIT,
        screen: Optional[pygame.Surface] = None,
    ):
        pygame.init()
        if settings is None:
            settings = Settings()
        self.settings = settings
        if screen is None:
            pygame.display.set_caption("exoplanet_explorer")
            pygame.display.set_mode((settings.width, settings.height), pygame.RESIZABLE)
        self.surface = PygameSurface(screen)
        self.frames = FrameClock(settings.fps)
        self.canvas = OrreryCanvas(self.surface, frames=self.frames, config=settings.scale)

        self.systems = group_by_star(records)
        self.results: List[Planet] = self.build_results(
            records if matches is None else matches, limit
        )
        self.current_star: Optional[Star] = None
        self.selected_planet: Optional[Planet] = None
        self.result_index = -1

        self.font = pygame.font.SysFont(PANEL_FONT, PANEL_FONT_SIZE)
        self.small_font = pygame.font.SysFont(PANEL_FONT, PANEL_FONT_SIZE - 2)
        self.running = True

        if self.results:
            self.select(self.results[0])

    def build_results(self, matches: Sequence[Mapping[str, Any]], limit: int) -> List[Planet]:
        results: List[Planet] = []
        for record in matches:
            if len(results) >= limit:
                break
            try:
                results.append(Planet.from_record(record, self.settings.scale))
            except InvalidInput as exc:
                logger.warning("Skipping result: %s", exc)
        return results

    # --- selection ---

    def select(self, planet: Planet) -> bool:
        """
        Show the planet's whole star system with the planet focused.
        Returns False, keeping the previous selection, if the star's
        records are malformed.
        """
        records = self.systems.get(planet.star_id) or []
        try:
            star = Star.from_result_set(records, self.settings.scale)
        except InvalidInput as exc:
            logger.error("Cannot show star %s: %s", planet.star_id, exc)
            return False

        self.canvas.set_focus(planet.planet_id)
        self.canvas.set_bodies(star, star.planets)
        self.canvas.draw_solar_system()
        self.current_star = star
        self.selected_planet = star.planets.get(planet.planet_id, planet)
        if planet in self.results:
            self.result_index = self.results.index(planet)
        logger.info("Selected planet %s of star %s", planet.planet_id, star.star_id)
        return True

    def cycle_result(self, direction: int) -> None:
        if not self.results:
            return
        index = (self.result_index + direction) % len(self.results)
        self.select(self.results[index])

    def ordered_siblings(self) -> List[Planet]:
        """The current star's planets, innermost first."""
        if self.current_star is None:
            return []
        return sorted(self.current_star.planets.values(), key=lambda p: (p.axis, p.planet_id))

    def cycle_sibling(self, direction: int) -> None:
        siblings = self.ordered_siblings()
        if not siblings or self.selected_planet is None:
            return
        ids = [p.planet_id for p in siblings]
        if self.selected_planet.planet_id in ids:
            index = (ids.index(self.selected_planet.planet_id) + direction) % len(siblings)
        else:
            index = 0
        self.select(siblings[index])

    # --- main loop ---

    def run(self):
        self.canvas.draw_solar_system()
        while self.running:
            self.handle_events()
            self.frames.tick()
            self.draw_overlay()
            pygame.display.flip()
        self.canvas.stop()
        pygame.quit()

    # --- event handling ---

    def handle_events(self):
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False
            if event.type == pygame.KEYDOWN:
                self.handle_keydown(event.key)
            if event.type == pygame.VIDEORESIZE:
                self.canvas.determine_size()

    def handle_keydown(self, key):
        if key == pygame.K_ESCAPE:
            self.running = False

        # Focus cycling through matches (TAB / SHIFT+TAB)
        if key == pygame.K_TAB:
            if pygame.key.get_mods() & pygame.KMOD_SHIFT:
                self.cycle_result(-1)
            else:
                self.cycle_result(1)

        # Arrow keys: move through the current star's planets
        if key == pygame.K_UP:
            self.cycle_sibling(1)      # outward
        if key == pygame.K_DOWN:
            self.cycle_sibling(-1)     # inward

    # --- text ---

    def info_lines(self) -> List[Tuple[str, bool]]:
        """Star then planet details; the flag marks the selected planet."""
        star = self.current_star
        if star is None:
            return [("No planet selected", False)]
        lines: List[Tuple[str, bool]] = [
            (f"Kepler Star {star.star_id}", False),
            (f"Temperature: {star.kelvin}K", False),
            (f"Radius: {star.sol_radii} Solar Radii", False),
            ("Planets", False),
        ]
        selected_id = self.selected_planet.planet_id if self.selected_planet else None
        for planet_id, planet in star.planets.items():
            selected = planet_id == selected_id
            lines.append((f"Kepler ID: {planet.planet_id}  [{planet.type}]", selected))
            lines.append(
                (
                    f"  {planet.kelvin}K, {planet.earth_radii} Earth Radii, "
                    f"{planet.period_days} Days, {planet.axis} AU",
                    selected,
                )
            )
        return lines

    def result_lines(self) -> List[Tuple[str, bool]]:
        lines: List[Tuple[str, bool]] = [(f"Top {len(self.results)} Matches", False)]
        for i, planet in enumerate(self.results):
            lines.append((f"Kepler Planet {planet.planet_id}", i == self.result_index))
        if self.selected_planet is not None:
            lines.append(("", False))
            lines.append((self.selected_planet.summary(), True))
        return lines

    # --- drawing ---

    def draw_overlay(self):
        screen = self.surface.target
        width, height = screen.get_size()

        x, y = 10, 10
        for text, selected in self.info_lines():
            txt = self.font.render(text, True, PANEL_SELECTED if selected else PANEL_TEXT)
            screen.blit(txt, (x, y))
            y += txt.get_height() + 2

        y = 10
        for text, selected in self.result_lines():
            txt = self.font.render(text, True, PANEL_SELECTED if selected else PANEL_TEXT)
            screen.blit(txt, (width - txt.get_width() - 10, y))
            y += txt.get_height() + 2

        help_line = "TAB / Shift+TAB: next / previous match   UP / DOWN: outer / inner planet   ESC: quit"
        txt = self.small_font.render(help_line, True, HELP_TEXT)
        screen.blit(txt, (10, height - txt.get_height() - 10))


# ---------- main ----------


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Kepler exoplanet system viewer")
    parser.add_argument(
        "json_path",
        help="Path to a JSON list of Kepler KOI records (see docstring).",
    )
    parser.add_argument(
        "--star",
        type=int,
        default=None,
        help="Only show planets of this star (integer part of the KOI).",
    )
    for flag, what in (
        ("--planet-temperature", "equilibrium temperature, K"),
        ("--planet-radius", "planet radius, Earth radii"),
        ("--orbit-period", "orbital period, days"),
        ("--orbit-axis", "semi-major axis, AU"),
    ):
        parser.add_argument(
            flag,
            nargs=2,
            type=float,
            metavar=("MIN", "MAX"),
            default=None,
            help=f"Exclusive range on {what}.",
        )
    parser.add_argument("--limit", type=int, default=DEFAULT_RESULT_LIMIT, help="Number of matches to list.")
    parser.add_argument("--width", type=int, default=None, help="Window width in pixels.")
    parser.add_argument("--height", type=int, default=None, help="Window height in pixels.")
    parser.add_argument("--fps", type=int, default=None, help="Frame rate cap.")
    parser.add_argument("--log-level", default=None, help="Logging level (DEBUG, INFO, ...).")
    return parser


def resolve_settings(args: argparse.Namespace, settings: Settings) -> Settings:
    """Command-line flags win over the environment."""
    overrides = {}
    for name in ("width", "height", "fps", "log_level"):
        value = getattr(args, name)
        if value is not None:
            overrides[name] = value
    return settings.with_overrides(**overrides)


def main(argv: Optional[List[str]] = None):
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        settings = resolve_settings(args, Settings())
    except ValueError as exc:
        parser.error(str(exc))
    level = getattr(logging, settings.log_level, None)
    if not isinstance(level, int):
        parser.error(f"Unknown log level: {settings.log_level}")
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    try:
        records = load_records(args.json_path)
    except (OSError, ValueError) as exc:
        print(f"Could not load records from {args.json_path}: {exc}")
        sys.exit(1)

    matches = records
    if args.star is not None:
        matches = records_for_star(matches, args.star)
    matches = filter_records(
        matches,
        planet_temperature=args.planet_temperature,
        planet_radius=args.planet_radius,
        orbit_period=args.orbit_period,
        orbit_axis=args.orbit_axis,
    )
    if not matches:
        print("No planets match the given filters.")
        sys.exit(1)

    app = ExplorerApp(records, settings, matches=matches, limit=args.limit)
    app.run()


if __name__ == "__main__":
    main()

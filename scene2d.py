"""Interactive 2D scene showing the traced field lines of a project."""
from __future__ import annotations

import math
from dataclasses import replace
from pathlib import Path
from typing import Callable, List, Optional, Tuple

import pygame
from loguru import logger

from base_scene import BaseScene
from calculator import collect_charges, trace_fields
from camera2d import Camera2D
from field import compute_E_at_point, compute_field_magnitude
from objects import Charge, FieldSpec, Position, Sign
from project import Project, save_project
from simulation_config import ViewerConfig


class FieldScene(BaseScene):
    """Handle rendering, events and editing of the charges of one project."""

    BG_COLOR = (18, 24, 54)
    WORKSPACE_BG = (10, 12, 26)
    CANVAS_BG = (16, 20, 38)
    CANVAS_BORDER = (70, 80, 120)
    PANEL_BG = (44, 46, 58)
    PANEL_BORDER = (84, 88, 110)

    POSITIVE_COLOR = (220, 70, 80)
    NEGATIVE_COLOR = (70, 120, 220)
    POSITIVE_LINE_COLOR = (255, 200, 160)
    NEGATIVE_LINE_COLOR = (160, 200, 255)

    MAGNITUDE_STEP = 1.0
    DENSITY_STEP = 2

    def __init__(
        self,
        screen: pygame.Surface,
        config: ViewerConfig,
        project: Project,
        project_path: Optional[Path] = None,
    ) -> None:
        super().__init__(screen, config)
        self.small_font = pygame.font.Font(None, 22)
        self.tiny_font = pygame.font.Font(None, 18)

        width, height = self.screen.get_size()
        self.panel_rect = pygame.Rect(width - config.panel_width, 0, config.panel_width, height)
        self.workspace_rect = pygame.Rect(0, 0, width - config.panel_width, height)

        self.name = project.name
        self.canvas_width = project.width
        self.canvas_height = project.height
        self.project_path = project_path or Path(f"{project.name}.json")
        self.fields: List[FieldSpec] = project.field_specs()

        self.camera = Camera2D()
        self.camera.fit(
            self.canvas_width, self.canvas_height, self.workspace_rect.width, self.workspace_rect.height
        )
        self.is_panning = False

        self.selected_index: Optional[int] = None
        self.show_help = False
        self.field_dirty = True
        self.unsaved_edits = False

    # ------------------------------------------------------------------ events

    def handle_event(self, event: pygame.event.Event) -> bool:
        if not super().handle_event(event):
            return False

        if event.type == pygame.MOUSEBUTTONDOWN:
            if event.button == 1 and self.workspace_rect.collidepoint(event.pos):
                self._handle_workspace_click(event.pos)
            elif event.button == 3 and self.workspace_rect.collidepoint(event.pos):
                self.is_panning = True
            elif event.button in (4, 5) and self.workspace_rect.collidepoint(event.pos):
                self._handle_zoom(event.pos, 1.1 if event.button == 4 else 1 / 1.1)
        elif event.type == pygame.MOUSEBUTTONUP:
            if event.button == 3:
                self.is_panning = False
        elif event.type == pygame.MOUSEMOTION and self.is_panning:
            self.camera.pan(*event.rel)
        elif event.type == pygame.KEYDOWN:
            self._handle_key(event)
        return True

    def _handle_key(self, event: pygame.event.Event) -> None:
        if event.key == pygame.K_s and event.mod & pygame.KMOD_CTRL:
            self.save()
        elif event.key in (pygame.K_DELETE, pygame.K_BACKSPACE):
            self._delete_selected()
        elif event.key == pygame.K_TAB:
            self.config.toggle_sign()
        elif event.key == pygame.K_i:
            self._update_selected_source(sign_flip=True)
        elif event.key in (pygame.K_PLUS, pygame.K_EQUALS, pygame.K_KP_PLUS):
            self._update_selected_source(magnitude_delta=self.MAGNITUDE_STEP)
        elif event.key in (pygame.K_MINUS, pygame.K_KP_MINUS):
            self._update_selected_source(magnitude_delta=-self.MAGNITUDE_STEP)
        elif event.key == pygame.K_RIGHTBRACKET:
            self._update_selected_density(self.DENSITY_STEP)
        elif event.key == pygame.K_LEFTBRACKET:
            self._update_selected_density(-self.DENSITY_STEP)
        elif event.key == pygame.K_h:
            self.show_help = not self.show_help

    def _handle_workspace_click(self, position: Tuple[int, int]) -> None:
        world_pos = self._screen_to_world(
            (position[0] - self.workspace_rect.left, position[1] - self.workspace_rect.top)
        )
        if self._select_charge_at(world_pos):
            return
        if self._inside_canvas(world_pos):
            self.place_charge(Position(*world_pos))
        else:
            self.selected_index = None

    def _handle_zoom(self, position: Tuple[int, int], zoom_factor: float) -> None:
        local_x = position[0] - self.workspace_rect.left
        local_y = position[1] - self.workspace_rect.top
        self.camera.zoom_at(local_x, local_y, zoom_factor)

    # ----------------------------------------------------------------- editing

    def place_charge(self, position: Position) -> FieldSpec:
        """Add a charge with the configured defaults and select it."""

        next_id = max((spec.source.id for spec in self.fields), default=0) + 1
        source = Charge(
            id=next_id,
            sign=self.config.sign,
            magnitude=self.config.magnitude,
            position=position,
            r=self.config.r,
        )
        spec = FieldSpec(
            source=source, density=self.config.density, steps=self.config.steps, delta=self.config.delta
        )
        self.fields.append(spec)
        self.selected_index = len(self.fields) - 1
        self._mark_edited()
        return spec

    def _select_charge_at(self, position: Tuple[float, float]) -> bool:
        for index in reversed(range(len(self.fields))):
            source = self.fields[index].source
            if math.hypot(position[0] - source.x, position[1] - source.y) <= source.r:
                self.selected_index = index
                return True
        return False

    def _selected(self) -> Optional[FieldSpec]:
        if self.selected_index is None or not 0 <= self.selected_index < len(self.fields):
            return None
        return self.fields[self.selected_index]

    def _update_selected_source(self, magnitude_delta: float = 0.0, sign_flip: bool = False) -> None:
        spec = self._selected()
        if spec is None:
            return
        source = spec.source
        sign = source.sign.flipped() if sign_flip else source.sign
        magnitude = max(0.0, source.magnitude + magnitude_delta)
        self.fields[self.selected_index] = spec.with_source(
            replace(source, sign=sign, magnitude=magnitude)
        )
        self._mark_edited()

    def _update_selected_density(self, change: int) -> None:
        spec = self._selected()
        if spec is None:
            return
        self.fields[self.selected_index] = replace(spec, density=max(1, spec.density + change), lines=())
        self._mark_edited()

    def _delete_selected(self) -> None:
        if self._selected() is None:
            return
        del self.fields[self.selected_index]
        self.selected_index = None
        self._mark_edited()

    def _mark_edited(self) -> None:
        self.field_dirty = True
        self.unsaved_edits = True

    def to_project(self) -> Project:
        return Project.from_field_specs(self.name, self.canvas_width, self.canvas_height, self.fields)

    def save(self) -> Path:
        path = save_project(self.to_project(), self.project_path)
        self.unsaved_edits = False
        return path

    def close(self) -> None:
        if self.unsaved_edits:
            self.save()

    # ----------------------------------------------------------------- drawing

    def update(self) -> None:
        self._ensure_field_lines()

    def _ensure_field_lines(self) -> None:
        if not self.field_dirty:
            return
        self.fields = trace_fields(self.canvas_width, self.canvas_height, self.fields)
        logger.debug(f"Retraced {sum(len(spec.lines) for spec in self.fields)} lines")
        self.field_dirty = False

    def draw(self) -> None:
        self._ensure_field_lines()
        self.screen.fill(self.BG_COLOR)
        pygame.draw.rect(self.screen, self.WORKSPACE_BG, self.workspace_rect)
        pygame.draw.rect(self.screen, self.PANEL_BG, self.panel_rect)
        pygame.draw.rect(self.screen, self.PANEL_BORDER, self.panel_rect, 2)

        self._draw_workspace()
        self._draw_panel()

    def _draw_workspace(self) -> None:
        self.screen.set_clip(self.workspace_rect)
        self._draw_model(self.screen, self._world_to_screen, self.camera.zoom)
        self.screen.set_clip(None)
        self._draw_hud()

    def _draw_model(
        self,
        surface: pygame.Surface,
        to_screen: Callable[[Tuple[float, float]], Tuple[float, float]],
        zoom: float,
        export: bool = False,
    ) -> None:
        """Draw the canvas, its field lines and its charges onto ``surface``.

        Exported drawings leave out the selection highlight and the value labels.
        """

        self._draw_canvas(surface, to_screen)
        self._draw_field_lines(surface, to_screen, zoom)
        for index, spec in enumerate(self.fields):
            selected = not export and index == self.selected_index
            self._draw_charge(surface, spec.source, to_screen, zoom, selected, labelled=not export)

    def render_model(self) -> pygame.Surface:
        """Render the canvas on its own, one pixel per canvas unit."""

        self._ensure_field_lines()
        surface = pygame.Surface((math.ceil(self.canvas_width), math.ceil(self.canvas_height)))
        self._draw_model(surface, lambda p: (p[0], p[1]), 1.0, export=True)
        return surface

    def snapshot(self) -> pygame.Surface:
        return self.render_model()

    def _draw_canvas(
        self, surface: pygame.Surface, to_screen: Callable[[Tuple[float, float]], Tuple[float, float]]
    ) -> None:
        left, top = to_screen((0.0, 0.0))
        right, bottom = to_screen((self.canvas_width, self.canvas_height))
        rect = pygame.Rect(int(left), int(top), int(right - left), int(bottom - top))
        pygame.draw.rect(surface, self.CANVAS_BG, rect)
        pygame.draw.rect(surface, self.CANVAS_BORDER, rect, 1)

    def _draw_field_lines(
        self,
        surface: pygame.Surface,
        to_screen: Callable[[Tuple[float, float]], Tuple[float, float]],
        zoom: float,
    ) -> None:
        width = max(1, int(zoom))
        for spec in self.fields:
            color = (
                self.POSITIVE_LINE_COLOR if spec.source.sign is Sign.POSITIVE else self.NEGATIVE_LINE_COLOR
            )
            for line in spec.lines:
                if len(line) < 2:
                    continue
                points = [self._round_point(to_screen(p)) for p in line]
                pygame.draw.lines(surface, color, False, points, width)

    def _draw_charge(
        self,
        surface: pygame.Surface,
        charge: Charge,
        to_screen: Callable[[Tuple[float, float]], Tuple[float, float]],
        zoom: float,
        selected: bool,
        labelled: bool = True,
    ) -> None:
        color = self.POSITIVE_COLOR if charge.sign is Sign.POSITIVE else self.NEGATIVE_COLOR
        screen_pos = self._round_point(to_screen(charge.position))
        radius = max(2, int(charge.r * zoom))
        pygame.draw.circle(surface, color, screen_pos, radius)
        pygame.draw.circle(surface, (250, 250, 255), screen_pos, radius, 3 if selected else 1)
        if not labelled:
            return
        symbol = "+" if charge.sign is Sign.POSITIVE else "-"
        label = self.tiny_font.render(f"{symbol}{charge.magnitude:g}", True, (230, 230, 240))
        surface.blit(label, label.get_rect(center=(screen_pos[0], screen_pos[1] + radius + 12)))

    def _draw_hud(self) -> None:
        mouse_pos = pygame.mouse.get_pos()
        hud_lines: List[str] = []
        if self.workspace_rect.collidepoint(mouse_pos):
            world_pos = self._screen_to_world(
                (mouse_pos[0] - self.workspace_rect.left, mouse_pos[1] - self.workspace_rect.top)
            )
            hud_lines.append(f"Position : x={world_pos[0]:.1f}, y={world_pos[1]:.1f}")
            e_vec = compute_E_at_point(world_pos, collect_charges(self.fields))
            hud_lines.append(
                f"|E|={compute_field_magnitude(e_vec):.3f}  Ex={e_vec[0]:.3f}  Ey={e_vec[1]:.3f}"
            )
        else:
            hud_lines.append("Curseur hors de la scène")

        surfaces = [self.tiny_font.render(line, True, (230, 235, 245)) for line in hud_lines]
        max_width = max(surface.get_width() for surface in surfaces)
        total_height = sum(surface.get_height() for surface in surfaces) + (len(surfaces) - 1) * 4
        padding = 10
        hud_rect = pygame.Rect(
            self.workspace_rect.left + 12,
            self.workspace_rect.top + 12,
            max_width + padding * 2,
            total_height + padding * 2,
        )
        pygame.draw.rect(self.screen, (20, 24, 40), hud_rect, border_radius=8)
        pygame.draw.rect(self.screen, (70, 80, 120), hud_rect, 1, border_radius=8)
        y = hud_rect.top + padding
        for surface in surfaces:
            self.screen.blit(surface, (hud_rect.left + padding, y))
            y += surface.get_height() + 4

        if self.show_help:
            self._draw_help_overlay()

    def _draw_panel(self) -> None:
        left = self.panel_rect.left + 20
        title = self.font.render(self.name, True, (245, 245, 250))
        self.screen.blit(title, (left, 24))
        size_label = self.small_font.render(
            f"Canevas {self.canvas_width:g} × {self.canvas_height:g}", True, (190, 195, 210)
        )
        self.screen.blit(size_label, (left, 60))

        y = 100
        placement = self.small_font.render("Nouvelle charge", True, (220, 225, 235))
        self.screen.blit(placement, (left, y))
        y += 24
        defaults = self.tiny_font.render(self.config.describe(), True, (200, 205, 220))
        self.screen.blit(defaults, (left, y))
        y += 36

        spec = self._selected()
        if spec is not None:
            selected_label = self.small_font.render(
                f"Charge #{spec.source.id}", True, (225, 230, 245)
            )
            self.screen.blit(selected_label, (left, y))
            y += 24
            details = [
                f"Signe : {spec.source.sign.value}",
                f"Magnitude : {spec.source.magnitude:g}",
                f"Position : ({spec.source.x:.1f}, {spec.source.y:.1f})",
                f"Lignes : {spec.density}  Pas : {spec.steps} × {spec.delta:g}",
            ]
            for detail in details:
                surface = self.tiny_font.render(detail, True, (200, 205, 220))
                self.screen.blit(surface, (left, y))
                y += 20
            y += 16

        total_lines = sum(len(spec.lines) for spec in self.fields)
        summary = self.small_font.render(
            f"{len(self.fields)} charges • {total_lines} lignes", True, (210, 215, 230)
        )
        self.screen.blit(summary, (left, y))
        y += 32

        instructions = [
            "Clic gauche : sélectionner / créer",
            "Clic droit + glisser : déplacer la vue",
            "Molette : zoom",
            "Tab : signe de la prochaine charge",
            "I : inverser la charge sélectionnée",
            "+ / - : magnitude   [ / ] : densité",
            "Suppr : supprimer la sélection",
            "Ctrl+S : enregistrer   F12 : capture",
            "Touche H : aide   Échap : quitter",
        ]
        for line in instructions:
            surface = self.tiny_font.render(line, True, (200, 205, 220))
            self.screen.blit(surface, (left, y))
            y += 20

    def _draw_help_overlay(self) -> None:
        help_lines = [
            "Aide rapide :",
            "• Chaque charge émet ses lignes depuis un cercle de rayon r",
            "• Les lignes suivent le champ total de toutes les charges",
            "• Une ligne s'arrête au bord du canevas (marge de 100) ou après son budget de pas",
            "• Les lignes des charges négatives remontent le champ",
        ]
        surfaces = [self.tiny_font.render(line, True, (240, 240, 250)) for line in help_lines]
        max_width = max(surface.get_width() for surface in surfaces)
        total_height = sum(surface.get_height() for surface in surfaces) + (len(surfaces) - 1) * 4
        padding = 14
        overlay_rect = pygame.Rect(
            self.workspace_rect.left + 20,
            self.workspace_rect.top + 100,
            max_width + padding * 2,
            total_height + padding * 2,
        )
        pygame.draw.rect(self.screen, (30, 34, 60), overlay_rect, border_radius=10)
        pygame.draw.rect(self.screen, (90, 100, 150), overlay_rect, 1, border_radius=10)
        y = overlay_rect.top + padding
        for surface in surfaces:
            self.screen.blit(surface, (overlay_rect.left + padding, y))
            y += surface.get_height() + 4

    # ------------------------------------------------------------- coordinates

    def _inside_canvas(self, position: Tuple[float, float]) -> bool:
        return 0 <= position[0] <= self.canvas_width and 0 <= position[1] <= self.canvas_height

    def _world_to_screen(self, position: Tuple[float, float]) -> Tuple[float, float]:
        sx, sy = self.camera.world_to_screen(position[0], position[1])
        return self.workspace_rect.left + sx, self.workspace_rect.top + sy

    def _screen_to_world(self, position: Tuple[float, float]) -> Tuple[float, float]:
        return self.camera.screen_to_world(position[0], position[1])

    @staticmethod
    def _round_point(point: Tuple[float, float]) -> Tuple[int, int]:
        return int(point[0]), int(point[1])

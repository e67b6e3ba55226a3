"""
preview.py
----------
Standalone scene preview window.

Usage:
    python preview.py                     # config/scenes/demo_scene.json
    python preview.py --scene hall        # any indexed scene file
    python preview.py --seed 7            # reproducible scatter clones

Keys:
    SPACE   toggle animations (replays from t=0 when turned back on)
    ESC     quit
"""

import argparse
import random
import sys

import pygame

from sceneanim.core.debug.debug_logger import DebugLogger
from sceneanim.core.runtime.anim_settings import Scene, Timing
from sceneanim.core.services.config_manager import load_engine_config
from sceneanim.core.services.event_manager import AnimationsToggledEvent, get_events
from sceneanim.scenes.scene_animation_layer import SceneAnimationLayer
from sceneanim.scenes.scene_loader import load_scene_items


class ScenePreview:
    def __init__(self, scene_name, seed=None):
        pygame.init()
        self.screen = pygame.display.set_mode((Scene.WIDTH, Scene.HEIGHT))
        pygame.display.set_caption(f"{Scene.CAPTION} - {scene_name}")
        self.clock = pygame.time.Clock()
        self.running = True

        self.events = get_events()
        self.config = load_engine_config()
        self.enabled = self.config.get("enabled", True)

        self.layer = SceneAnimationLayer(
            rng=random.Random(seed) if seed is not None else None,
            events=self.events,
            config=self.config,
        )
        self.layer.load_scene(load_scene_items(scene_name), scene_name)

    def run(self):
        while self.running:
            self._handle_events()
            self.layer.update()
            self._draw()
            self.clock.tick(Timing.HOST_FPS)

        self.layer.unload_scene()
        pygame.quit()

    def _handle_events(self):
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False
            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    self.running = False
                elif event.key == pygame.K_SPACE:
                    self._toggle_animations()

    def _toggle_animations(self):
        self.enabled = not self.enabled
        self.events.dispatch(AnimationsToggledEvent(self.enabled))
        self.layer.set_enabled(self.enabled)
        DebugLogger.action(f"Animations {'on' if self.enabled else 'off'}", category="scene")

    def _draw(self):
        self.screen.fill(Scene.BACKGROUND)
        self.layer.draw(self.screen)
        pygame.display.flip()


def main():
    parser = argparse.ArgumentParser(description="Preview an animated scene")
    parser.add_argument("--scene", default="demo_scene.json",
                        help="Scene file name or path")
    parser.add_argument("--seed", type=int, default=None,
                        help="Seed for scatter clones")
    args = parser.parse_args()

    ScenePreview(args.scene, args.seed).run()
    return 0


if __name__ == "__main__":
    sys.exit(main())

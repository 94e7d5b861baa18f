# snowfall/scene.py
import logging
import math
import random
from dataclasses import dataclass, field
from typing import Optional

import pygame

from snowfall.config import BACKGROUND_COLOR, MARGIN
from snowfall.errors import ImageDecodeFailure, InvalidConfig
from snowfall.geometry import Viewport, get_fall_path
from snowfall.image_loader import ImageLoader
from snowfall.particles import (
    ParticleConfig,
    ParticleFactory,
    make_particle_sprite,
    make_snowflake_surface,
)
from snowfall.scheduler import AnimationScheduler

logger = logging.getLogger(__name__)


# -------------------------------
# 배경 레이어
# -------------------------------
@dataclass(frozen=True)
class SolidColor:
    color: tuple[int, int, int] = BACKGROUND_COLOR

    def draw(self, screen: pygame.Surface):
        screen.fill(self.color)


@dataclass
class ImageBackground:
    image: pygame.Surface
    _scaled: Optional[pygame.Surface] = field(default=None, repr=False)
    _screen_size: Optional[tuple[int, int]] = field(default=None, repr=False)

    def draw(self, screen: pygame.Surface):
        # 화면 크기 바뀌었을 때만 다시 맞춤
        size = screen.get_size()
        if self._scaled is None or self._screen_size != size:
            self._scaled = cover_scale(self.image, size)
            self._screen_size = size

        # 가운데 맞추고 넘치는 부분은 잘림
        sw, sh = size
        iw, ih = self._scaled.get_size()
        screen.blit(self._scaled, ((sw - iw) // 2, (sh - ih) // 2))


def cover_scale(image: pygame.Surface, size) -> pygame.Surface:
    """
    비율 유지하면서 화면을 꽉 채우도록 늘림 (aspect fill).
    """
    sw, sh = size
    iw, ih = image.get_size()
    ratio = max(sw / iw, sh / ih)
    w = max(sw, math.ceil(iw * ratio))
    h = max(sh, math.ceil(ih * ratio))
    return pygame.transform.scale(image, (w, h))


class SceneComposer:
    """
    viewport / 파티클 설정 / 배경을 들고 있으면서
    눈송이 N개를 만들고, 매 프레임 배경 → 눈송이 순서로 합성한다.
    """

    def __init__(
        self,
        viewport: Viewport,
        config: Optional[ParticleConfig] = None,
        factory: Optional[ParticleFactory] = None,
        loader: Optional[ImageLoader] = None,
        margin: float = MARGIN,
        rng=None,
    ):
        self.viewport = viewport
        self.config = config if config is not None else ParticleConfig()
        self.factory = factory if factory is not None else ParticleFactory()
        self.loader = loader if loader is not None else ImageLoader()
        self.margin = margin
        self.rng = rng if rng is not None else random   # jitter용

        self.background = SolidColor()
        self._pending_background = None   # 가장 최근 요청의 Future만 유지

        self.base_sprite = make_snowflake_surface()
        self.schedulers: list[AnimationScheduler] = []
        self.sprites: list[pygame.Surface] = []
        self.elapsed = 0.0

        self.rebuild()

    # -------- 빌드 --------
    def rebuild(self):
        """
        config 기준으로 눈송이를 전부 새로 만든다.
        설정이 잘못됐으면 InvalidConfig 그대로 올라가고 기존 씬은 유지.
        """
        particles = self.factory.create_many(self.viewport, self.config)
        path = get_fall_path(self.viewport, self.margin)

        self.schedulers = [AnimationScheduler(p, path) for p in particles]
        self.sprites = [make_particle_sprite(p, self.base_sprite) for p in particles]
        self.elapsed = 0.0

        logger.debug(
            "scene rebuilt: %d flakes, avg duration %.2fs, viewport %sx%s",
            len(self.schedulers), self.config.average_duration,
            self.viewport.width, self.viewport.height,
        )

    def set_count(self, count: int):
        old = self.config.count
        self.config.count = count
        try:
            self.rebuild()
        except InvalidConfig:
            self.config.count = old
            raise

    def set_average_duration(self, seconds: float):
        old = self.config.average_duration
        self.config.average_duration = seconds
        try:
            self.rebuild()
        except InvalidConfig:
            self.config.average_duration = old
            raise

    def set_config(self, config: ParticleConfig):
        config.validate()
        self.config = config
        self.rebuild()

    def resize(self, viewport: Viewport):
        # 리사이즈하면 애니메이션은 처음부터 다시
        self.viewport = viewport
        self.rebuild()

    # -------- 배경 --------
    def select_background(self, handle):
        """
        새 이미지 선택. 이전 요청이 아직 안 끝났어도 취소는 안 하고
        나중에 도착하면 그냥 버린다.
        """
        self._pending_background = self.loader.load(handle)

    def poll_background(self):
        future = self._pending_background
        if future is None or not future.done():
            return

        self._pending_background = None
        try:
            image = future.result()
        except ImageDecodeFailure as e:
            logger.warning("background image not usable, keeping current background: %s", e)
            return

        # convert()는 디스플레이 있을 때만 가능
        if pygame.display.get_init() and pygame.display.get_surface() is not None:
            image = image.convert()
        self.background = ImageBackground(image)
        logger.info("background image set (%dx%d)", *image.get_size())

    @property
    def is_loading_background(self) -> bool:
        return self._pending_background is not None

    # -------- 업데이트 / 렌더 --------
    def update(self, dt: float):
        self.elapsed += dt
        self.poll_background()

    def positions(self, t: Optional[float] = None) -> list[tuple[float, float]]:
        """jitter 없는 (x, y) 목록."""
        if t is None:
            t = self.elapsed
        return [(s.particle.x_position, s.position(t)) for s in self.schedulers]

    def draw(self, screen: pygame.Surface):
        self.background.draw(screen)

        t = self.elapsed
        for scheduler, sprite in zip(self.schedulers, self.sprites):
            x = scheduler.x_at(self.rng)
            y = scheduler.position(t)
            screen.blit(sprite, sprite.get_rect(center=(x, y)))

    def close(self):
        self.schedulers = []
        self.sprites = []
        self._pending_background = None
        self.loader.shutdown()
